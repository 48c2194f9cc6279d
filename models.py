from sqlalchemy import (
    Column, String, DateTime, Date, Boolean, ForeignKey, Integer, Float, Text, JSON, UniqueConstraint
)
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid
from database import Base


def gerar_id() -> str:
    return str(uuid.uuid4())


def agora() -> datetime:
    """Instante atual em UTC, sem tzinfo (formato gravado no banco)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TenantMixin:
    """Colunas comuns às entidades isoladas por clínica."""
    id = Column(String(36), primary_key=True, default=gerar_id)
    tenant_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=agora, nullable=False)
    updated_at = Column(DateTime, default=agora, onupdate=agora, nullable=False)


# =================================================================================
# CADASTROS
# =================================================================================

class Profissional(TenantMixin, Base):
    __tablename__ = "profissionais"
    nome = Column(String, nullable=False)
    cpf = Column(String, nullable=True)
    telefone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    especialidade = Column(String, nullable=False)
    registro_profissional = Column(String, nullable=True)
    salas_acesso = Column(JSON, default=list)
    # ID do usuário no Sistema 1
    usuario_id = Column(String, nullable=True, index=True)
    ativo = Column(Boolean, default=True, nullable=False)

    pacientes = relationship("Paciente", back_populates="profissional")


class Paciente(TenantMixin, Base):
    __tablename__ = "pacientes"
    nome = Column(String, nullable=False)
    cpf = Column(String, nullable=True)
    nascimento = Column(Date, nullable=False)
    email = Column(String, nullable=True)
    telefone = Column(String, nullable=True)
    endereco = Column(String, nullable=True)
    responsavel_financeiro = Column(String, nullable=True)
    contato_emergencia = Column(String, nullable=True)
    plano_saude = Column(String, nullable=True)  # None = particular
    matricula = Column(String, nullable=True)
    cor_agenda = Column(String, nullable=True)
    foto = Column(String, nullable=True)
    profissional_id = Column(String(36), ForeignKey("profissionais.id"), nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)

    profissional = relationship("Profissional", back_populates="pacientes")


class Sala(TenantMixin, Base):
    __tablename__ = "salas"
    nome = Column(String, nullable=False)
    descricao = Column(String, nullable=True)
    capacidade = Column(Integer, nullable=True)
    recursos = Column(JSON, default=list)
    cor = Column(String, nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)


class Procedimento(TenantMixin, Base):
    __tablename__ = "procedimentos"
    nome = Column(String, nullable=False)
    codigo = Column(String, nullable=True)
    descricao = Column(String, nullable=True)
    valor = Column(Float, nullable=True)
    duracao_padrao = Column(Integer, nullable=True)
    cor = Column(String, nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)


# =================================================================================
# AGENDA
# =================================================================================

class Agendamento(TenantMixin, Base):
    __tablename__ = "agendamentos"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String(36), ForeignKey("profissionais.id"), nullable=False, index=True)
    sala_id = Column(String(36), ForeignKey("salas.id"), nullable=True, index=True)
    procedimento_id = Column(String(36), ForeignKey("procedimentos.id"), nullable=True)
    data_hora = Column(DateTime, nullable=False, index=True)
    horario_fim = Column(DateTime, nullable=False)
    duracao_minutos = Column(Integer, nullable=False)
    status = Column(String, default="AGENDADO", nullable=False)
    observacoes = Column(Text, nullable=True)

    paciente = relationship("Paciente", lazy="joined")
    profissional = relationship("Profissional", lazy="joined")
    sala = relationship("Sala", lazy="joined")
    procedimento = relationship("Procedimento", lazy="joined")


# =================================================================================
# DOCUMENTOS CLÍNICOS
# =================================================================================

class Prontuario(TenantMixin, Base):
    __tablename__ = "prontuarios"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String(36), ForeignKey("profissionais.id"), nullable=False)
    data_sessao = Column(DateTime, nullable=False)
    tipo_atendimento = Column(String, nullable=True)
    evolucao_clinica = Column(Text, nullable=False)
    observacoes = Column(Text, nullable=True)
    anexos = Column(JSON, default=list)

    paciente = relationship("Paciente", lazy="joined")
    profissional = relationship("Profissional", lazy="joined")


class Anamnese(TenantMixin, Base):
    __tablename__ = "anamneses"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String(36), ForeignKey("profissionais.id"), nullable=True)
    historia_desenvolvimento = Column(Text, nullable=True)
    comportamentos_excessivos = Column(Text, nullable=True)
    comportamentos_deficitarios = Column(Text, nullable=True)
    comportamentos_problema = Column(Text, nullable=True)
    rotina_diaria = Column(Text, nullable=True)
    ambiente_familiar = Column(Text, nullable=True)
    ambiente_escolar = Column(Text, nullable=True)
    preferencias = Column(Text, nullable=True)
    documentos_anexos = Column(JSON, default=list)
    habilidades_criticas = Column(Text, nullable=True)
    observacoes_gerais = Column(Text, nullable=True)
    status = Column(String, default="RASCUNHO", nullable=False)
    finalizada_em = Column(DateTime, nullable=True)

    paciente = relationship("Paciente", lazy="joined")


class Diagnostico(TenantMixin, Base):
    __tablename__ = "diagnosticos"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String, nullable=True)  # usuário do Sistema 1 que registrou
    cid10 = Column(String, nullable=True)
    descricao_cid = Column(String, nullable=True)
    diagnostico_desc = Column(Text, nullable=False)
    hipotese = Column(Boolean, default=False)
    observacoes = Column(Text, nullable=True)
    anexos = Column(JSON, default=list)
    data_diagnostico = Column(DateTime, default=agora)


class Prescricao(TenantMixin, Base):
    __tablename__ = "prescricoes"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String, nullable=True)
    medicamento = Column(String, nullable=False)
    dosagem = Column(String, nullable=False)
    frequencia = Column(String, nullable=False)
    via_admin = Column(String, nullable=True)
    duracao = Column(String, nullable=True)
    indicacao = Column(String, nullable=True)
    observacoes = Column(Text, nullable=True)
    data_inicio = Column(DateTime, default=agora)
    data_fim = Column(DateTime, nullable=True)
    ativo = Column(Boolean, default=True)


class Encaminhamento(TenantMixin, Base):
    __tablename__ = "encaminhamentos"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String, nullable=True)
    tipo = Column(String, nullable=False)
    especialidade = Column(String, nullable=False)
    motivo = Column(Text, nullable=False)
    profissional_dest = Column(String, nullable=True)
    instituicao_dest = Column(String, nullable=True)
    observacoes = Column(Text, nullable=True)
    status = Column(String, default="PENDENTE", nullable=False)


class AnexoPaciente(TenantMixin, Base):
    __tablename__ = "anexos_paciente"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String, nullable=True)
    tipo = Column(String, nullable=True)
    categoria = Column(String, nullable=True)
    titulo = Column(String, nullable=False)
    descricao = Column(Text, nullable=True)
    arquivo_url = Column(String, nullable=False)
    arquivo_nome = Column(String, nullable=True)
    arquivo_tipo = Column(String, nullable=True)
    arquivo_size = Column(Integer, nullable=True)
    data_documento = Column(DateTime, nullable=True)


class RelatorioClinico(TenantMixin, Base):
    __tablename__ = "relatorios_clinicos"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String, nullable=True)
    tipo = Column(String, nullable=False)
    titulo = Column(String, nullable=False)
    periodo_inicio = Column(DateTime, nullable=True)
    periodo_fim = Column(DateTime, nullable=True)
    conteudo = Column(Text, nullable=False)
    finalidade = Column(String, nullable=True)
    destinatario = Column(String, nullable=True)
    assinado = Column(Boolean, default=False)


# =================================================================================
# ATIVIDADES, CURRICULUM E AVALIAÇÕES
# =================================================================================

class Atividade(TenantMixin, Base):
    __tablename__ = "atividades"
    nome = Column(String, nullable=False)
    tipo = Column(String, nullable=False)
    descricao = Column(Text, nullable=True)
    metodologia = Column(Text, nullable=True)
    objetivo = Column(Text, nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)

    instrucoes = relationship(
        "AtividadeInstrucao", back_populates="atividade", cascade="all, delete-orphan",
        order_by="AtividadeInstrucao.ordem", lazy="selectin"
    )
    pontuacoes = relationship(
        "AtividadePontuacao", back_populates="atividade", cascade="all, delete-orphan",
        order_by="AtividadePontuacao.ordem", lazy="selectin"
    )


class AtividadeInstrucao(Base):
    __tablename__ = "atividade_instrucoes"
    id = Column(String(36), primary_key=True, default=gerar_id)
    atividade_id = Column(String(36), ForeignKey("atividades.id"), nullable=False, index=True)
    ordem = Column(Integer, nullable=False)
    texto = Column(Text, nullable=False)
    observacao = Column(Text, nullable=True)

    atividade = relationship("Atividade", back_populates="instrucoes")


class AtividadePontuacao(Base):
    __tablename__ = "atividade_pontuacoes"
    id = Column(String(36), primary_key=True, default=gerar_id)
    atividade_id = Column(String(36), ForeignKey("atividades.id"), nullable=False, index=True)
    ordem = Column(Integer, nullable=False)
    sigla = Column(String, nullable=False)
    grau = Column(String, nullable=False)

    atividade = relationship("Atividade", back_populates="pontuacoes")


class Curriculum(TenantMixin, Base):
    __tablename__ = "curriculums"
    nome = Column(String, nullable=False)
    descricao = Column(Text, nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)

    atividades = relationship(
        "CurriculumAtividade", back_populates="curriculum", cascade="all, delete-orphan",
        order_by="CurriculumAtividade.ordem", lazy="selectin"
    )


class CurriculumAtividade(Base):
    __tablename__ = "curriculum_atividades"
    id = Column(String(36), primary_key=True, default=gerar_id)
    curriculum_id = Column(String(36), ForeignKey("curriculums.id"), nullable=False, index=True)
    atividade_id = Column(String(36), ForeignKey("atividades.id"), nullable=False)
    ordem = Column(Integer, nullable=False)

    curriculum = relationship("Curriculum", back_populates="atividades")
    atividade = relationship("Atividade", lazy="selectin")


class Avaliacao(TenantMixin, Base):
    __tablename__ = "avaliacoes"
    tipo = Column(String, nullable=False)
    nome = Column(String, nullable=False)
    observacao = Column(Text, nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)

    niveis = relationship("AvaliacaoNivel", cascade="all, delete-orphan", order_by="AvaliacaoNivel.ordem", lazy="selectin")
    habilidades = relationship("AvaliacaoHabilidade", cascade="all, delete-orphan", order_by="AvaliacaoHabilidade.ordem", lazy="selectin")
    pontuacoes = relationship("AvaliacaoPontuacao", cascade="all, delete-orphan", order_by="AvaliacaoPontuacao.ordem", lazy="selectin")
    tarefas = relationship("AvaliacaoTarefa", cascade="all, delete-orphan", order_by="AvaliacaoTarefa.ordem", lazy="selectin")


class AvaliacaoNivel(Base):
    __tablename__ = "avaliacao_niveis"
    id = Column(String(36), primary_key=True, default=gerar_id)
    avaliacao_id = Column(String(36), ForeignKey("avaliacoes.id"), nullable=False, index=True)
    ordem = Column(Integer, nullable=False)
    descricao = Column(String, nullable=False)
    faixa_etaria = Column(String, nullable=True)


class AvaliacaoHabilidade(Base):
    __tablename__ = "avaliacao_habilidades"
    id = Column(String(36), primary_key=True, default=gerar_id)
    avaliacao_id = Column(String(36), ForeignKey("avaliacoes.id"), nullable=False, index=True)
    ordem = Column(Integer, nullable=False)
    habilidade = Column(String, nullable=False)


class AvaliacaoPontuacao(Base):
    __tablename__ = "avaliacao_pontuacoes"
    id = Column(String(36), primary_key=True, default=gerar_id)
    avaliacao_id = Column(String(36), ForeignKey("avaliacoes.id"), nullable=False, index=True)
    ordem = Column(Integer, nullable=False)
    tipo = Column(String, nullable=False)
    valor = Column(Float, nullable=False)


class AvaliacaoTarefa(Base):
    __tablename__ = "avaliacao_tarefas"
    id = Column(String(36), primary_key=True, default=gerar_id)
    avaliacao_id = Column(String(36), ForeignKey("avaliacoes.id"), nullable=False, index=True)
    nivel_id = Column(String(36), ForeignKey("avaliacao_niveis.id"), nullable=True)
    habilidade_id = Column(String(36), ForeignKey("avaliacao_habilidades.id"), nullable=True)
    ordem = Column(Integer, nullable=False)
    pergunta = Column(Text, nullable=False)
    descricao = Column(Text, nullable=True)
    criterios_pontuacao = Column(JSON, nullable=True)


# --- Atribuições a pacientes ---

class AtividadePaciente(TenantMixin, Base):
    __tablename__ = "atividades_paciente"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    atividade_id = Column(String(36), ForeignKey("atividades.id"), nullable=False)
    atribuida_por = Column(String, nullable=False)
    atribuida_em = Column(DateTime, default=agora, nullable=False)
    ativa = Column(Boolean, default=True, nullable=False)

    atividade = relationship("Atividade", lazy="joined")


class CurriculumPaciente(TenantMixin, Base):
    __tablename__ = "curriculums_paciente"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    curriculum_id = Column(String(36), ForeignKey("curriculums.id"), nullable=False)
    atribuida_por = Column(String, nullable=False)
    atribuida_em = Column(DateTime, default=agora, nullable=False)
    ativa = Column(Boolean, default=True, nullable=False)

    curriculum = relationship("Curriculum", lazy="joined")


class AvaliacaoPaciente(TenantMixin, Base):
    __tablename__ = "avaliacoes_paciente"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    avaliacao_id = Column(String(36), ForeignKey("avaliacoes.id"), nullable=False)
    atribuida_por = Column(String, nullable=False)
    atribuida_em = Column(DateTime, default=agora, nullable=False)
    ativa = Column(Boolean, default=True, nullable=False)

    avaliacao = relationship("Avaliacao", lazy="joined")


# =================================================================================
# SESSÕES
# =================================================================================

class SessaoAtividade(TenantMixin, Base):
    __tablename__ = "sessoes_atividade"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String(36), ForeignKey("profissionais.id"), nullable=False, index=True)
    atividade_id = Column(String(36), ForeignKey("atividades.id"), nullable=False)
    status = Column(String, default="EM_ANDAMENTO", nullable=False)
    iniciada_em = Column(DateTime, default=agora, nullable=False)
    finalizada_em = Column(DateTime, nullable=True)
    observacoes_gerais = Column(Text, nullable=True)

    paciente = relationship("Paciente", lazy="joined")
    profissional = relationship("Profissional", lazy="joined")
    atividade = relationship("Atividade", lazy="joined")
    avaliacoes = relationship("AvaliacaoInstrucao", cascade="all, delete-orphan", lazy="selectin")


class AvaliacaoInstrucao(Base):
    __tablename__ = "avaliacoes_instrucao"
    __table_args__ = (UniqueConstraint("sessao_id", "instrucao_id", name="uq_avaliacao_instrucao"),)
    id = Column(String(36), primary_key=True, default=gerar_id)
    sessao_id = Column(String(36), ForeignKey("sessoes_atividade.id"), nullable=False, index=True)
    instrucao_id = Column(String(36), ForeignKey("atividade_instrucoes.id"), nullable=False)
    nota = Column(Integer, nullable=False)
    tipos_ajuda = Column(JSON, default=list)
    observacao = Column(Text, nullable=True)
    avaliada_em = Column(DateTime, default=agora, onupdate=agora)

    instrucao = relationship("AtividadeInstrucao", lazy="joined")


class SessaoCurriculum(TenantMixin, Base):
    __tablename__ = "sessoes_curriculum"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String(36), ForeignKey("profissionais.id"), nullable=False, index=True)
    curriculum_id = Column(String(36), ForeignKey("curriculums.id"), nullable=False)
    status = Column(String, default="EM_ANDAMENTO", nullable=False)
    iniciada_em = Column(DateTime, default=agora, nullable=False)
    finalizada_em = Column(DateTime, nullable=True)
    observacoes_gerais = Column(Text, nullable=True)

    paciente = relationship("Paciente", lazy="joined")
    profissional = relationship("Profissional", lazy="joined")
    curriculum = relationship("Curriculum", lazy="joined")
    avaliacoes = relationship("AvaliacaoCurriculum", cascade="all, delete-orphan", lazy="selectin")


class AvaliacaoCurriculum(Base):
    __tablename__ = "avaliacoes_curriculum"
    __table_args__ = (
        UniqueConstraint("sessao_id", "atividade_id", "instrucao_id", "tentativa", name="uq_avaliacao_curriculum"),
    )
    id = Column(String(36), primary_key=True, default=gerar_id)
    sessao_id = Column(String(36), ForeignKey("sessoes_curriculum.id"), nullable=False, index=True)
    atividade_id = Column(String(36), ForeignKey("atividades.id"), nullable=False)
    instrucao_id = Column(String(36), ForeignKey("atividade_instrucoes.id"), nullable=False)
    tentativa = Column(Integer, default=1, nullable=False)
    nota = Column(Integer, nullable=False)
    tipos_ajuda = Column(JSON, default=list)
    observacao = Column(Text, nullable=True)
    avaliada_em = Column(DateTime, default=agora, onupdate=agora)


class SessaoAvaliacao(TenantMixin, Base):
    __tablename__ = "sessoes_avaliacao"
    paciente_id = Column(String(36), ForeignKey("pacientes.id"), nullable=False, index=True)
    profissional_id = Column(String(36), ForeignKey("profissionais.id"), nullable=False, index=True)
    avaliacao_id = Column(String(36), ForeignKey("avaliacoes.id"), nullable=False)
    status = Column(String, default="EM_ANDAMENTO", nullable=False)
    iniciada_em = Column(DateTime, default=agora, nullable=False)
    finalizada_em = Column(DateTime, nullable=True)
    observacoes_gerais = Column(Text, nullable=True)

    paciente = relationship("Paciente", lazy="joined")
    profissional = relationship("Profissional", lazy="joined")
    avaliacao = relationship("Avaliacao", lazy="joined")
    respostas = relationship("RespostaTarefa", cascade="all, delete-orphan", lazy="selectin")


class RespostaTarefa(Base):
    __tablename__ = "respostas_tarefa"
    __table_args__ = (UniqueConstraint("sessao_id", "tarefa_id", name="uq_resposta_tarefa"),)
    id = Column(String(36), primary_key=True, default=gerar_id)
    sessao_id = Column(String(36), ForeignKey("sessoes_avaliacao.id"), nullable=False, index=True)
    tarefa_id = Column(String(36), ForeignKey("avaliacao_tarefas.id"), nullable=False)
    pontuacao = Column(Float, nullable=True)
    observacao = Column(Text, nullable=True)
    respondida_em = Column(DateTime, default=agora, onupdate=agora)
