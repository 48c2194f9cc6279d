# schemas.py

from pydantic import BaseModel, EmailStr, Field, ConfigDict, AfterValidator, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, date, time, timezone
from typing import Optional, List, Dict, Any, Generic, TypeVar, Annotated
from enum import Enum


def _utc_naive(valor: datetime) -> datetime:
    """Datas com fuso são convertidas para UTC e gravadas sem tzinfo."""
    if valor.tzinfo is not None:
        return valor.astimezone(timezone.utc).replace(tzinfo=None)
    return valor


DataHora = Annotated[datetime, AfterValidator(_utc_naive)]

T = TypeVar("T")


class SchemaBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, use_enum_values=True, validate_default=True)


class Resposta(BaseModel, Generic[T]):
    """Envelope padrão das respostas de sucesso."""
    success: bool = True
    data: T
    message: Optional[str] = None


class Mensagem(BaseModel):
    success: bool = True
    message: str


# =================================================================================
# ENUMS DO DOMÍNIO
# =================================================================================

class StatusAgendamento(str, Enum):
    AGENDADO = "AGENDADO"
    CONFIRMADO = "CONFIRMADO"
    CANCELADO = "CANCELADO"
    ATENDIDO = "ATENDIDO"
    FALTOU = "FALTOU"


class StatusSessao(str, Enum):
    EM_ANDAMENTO = "EM_ANDAMENTO"
    FINALIZADA = "FINALIZADA"
    CANCELADA = "CANCELADA"


class StatusAnamnese(str, Enum):
    RASCUNHO = "RASCUNHO"
    FINALIZADA = "FINALIZADA"


class StatusEncaminhamento(str, Enum):
    PENDENTE = "PENDENTE"
    ENVIADO = "ENVIADO"
    CONCLUIDO = "CONCLUIDO"
    CANCELADO = "CANCELADO"


class SiglaAjuda(str, Enum):
    ERRO = "-"
    AFT = "AFT"
    AFP = "AFP"
    AI = "AI"
    AG = "AG"
    AVE = "AVE"
    AVG = "AVG"
    INDEPENDENTE = "+"


class GrauAjuda(str, Enum):
    ERRO = "Erro"
    INDEPENDENTE = "Independente"
    ALTA = "Alta"
    MEDIA = "Média"
    BAIXA = "Baixa"


# =================================================================================
# AUTENTICAÇÃO (SISTEMA 1)
# =================================================================================

class TenantInfo(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None


class UsuarioAutenticado(BaseModel):
    """Usuário decodificado do header X-User-Data."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str = "USER"
    tenant: Optional[TenantInfo] = None
    token: Optional[str] = None

    @property
    def tenant_id(self) -> Optional[str]:
        return self.tenant.id if self.tenant else None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UsuarioSistema1Create(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: Optional[str] = None
    role: str = "USER"


class VinculoUsuarioRequest(SchemaBase):
    usuario_id: Optional[str] = Field(None, alias="usuarioId", description="ID do usuário no Sistema 1. Nulo desfaz o vínculo.")
    profissional_id: str = Field(..., alias="profissionalId")


# =================================================================================
# RESUMOS (ENTIDADES ANINHADAS NAS RESPOSTAS)
# =================================================================================

class PacienteResumo(SchemaBase):
    id: str
    nome: str
    cor_agenda: Optional[str] = None


class ProfissionalResumo(SchemaBase):
    id: str
    nome: str
    especialidade: Optional[str] = None


class SalaResumo(SchemaBase):
    id: str
    nome: str
    cor: Optional[str] = None


class ProcedimentoResumo(SchemaBase):
    id: str
    nome: str
    cor: Optional[str] = None


# =================================================================================
# PACIENTES
# =================================================================================

class PacienteBase(SchemaBase):
    nome: str = Field(..., min_length=1)
    cpf: Optional[str] = None
    nascimento: date
    email: Optional[str] = None
    telefone: Optional[str] = None
    endereco: Optional[str] = None
    responsavel_financeiro: Optional[str] = None
    contato_emergencia: Optional[str] = None
    plano_saude: Optional[str] = Field(None, description="Use 'particular' ou deixe vazio para atendimento particular.")
    matricula: Optional[str] = None
    cor_agenda: Optional[str] = None
    foto: Optional[str] = None
    profissional_id: Optional[str] = Field(None, alias="profissionalId")


class PacienteCreate(PacienteBase):
    pass


class PacienteUpdate(SchemaBase):
    nome: Optional[str] = Field(None, min_length=1)
    cpf: Optional[str] = None
    nascimento: Optional[date] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    endereco: Optional[str] = None
    responsavel_financeiro: Optional[str] = None
    contato_emergencia: Optional[str] = None
    plano_saude: Optional[str] = None
    matricula: Optional[str] = None
    cor_agenda: Optional[str] = None
    foto: Optional[str] = None
    profissional_id: Optional[str] = Field(None, alias="profissionalId")


class PacienteResponse(PacienteBase):
    id: str
    ativo: bool
    created_at: datetime
    profissional: Optional[ProfissionalResumo] = None


# =================================================================================
# PROFISSIONAIS (TERAPEUTAS)
# =================================================================================

class ProfissionalBase(SchemaBase):
    nome: str = Field(..., min_length=1)
    especialidade: str = Field(..., min_length=1)
    cpf: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    registro_profissional: Optional[str] = None
    salas_acesso: List[str] = []
    usuario_id: Optional[str] = Field(None, alias="usuarioId")


class ProfissionalCreate(ProfissionalBase):
    pass


class ProfissionalUpdate(SchemaBase):
    nome: Optional[str] = Field(None, min_length=1)
    especialidade: Optional[str] = Field(None, min_length=1)
    cpf: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    registro_profissional: Optional[str] = None
    salas_acesso: Optional[List[str]] = None
    usuario_id: Optional[str] = Field(None, alias="usuarioId")


class ProfissionalResponse(ProfissionalBase):
    id: str
    ativo: bool
    created_at: datetime


# =================================================================================
# SALAS E PROCEDIMENTOS
# =================================================================================

class SalaBase(SchemaBase):
    nome: str = Field(..., min_length=1)
    descricao: Optional[str] = None
    capacidade: Optional[int] = Field(None, ge=1)
    recursos: List[str] = []
    cor: Optional[str] = None


class SalaCreate(SalaBase):
    ativo: bool = True


class SalaUpdate(SchemaBase):
    nome: Optional[str] = Field(None, min_length=1)
    descricao: Optional[str] = None
    capacidade: Optional[int] = Field(None, ge=1)
    recursos: Optional[List[str]] = None
    cor: Optional[str] = None
    ativo: Optional[bool] = None


class SalaResponse(SalaBase):
    id: str
    ativo: bool


class ProcedimentoCreate(SchemaBase):
    nome: str = Field(..., min_length=1)
    codigo: Optional[str] = None
    descricao: Optional[str] = None
    valor: Optional[float] = Field(None, ge=0)
    duracao_padrao: Optional[int] = Field(None, gt=0, description="Duração padrão em minutos.")
    cor: Optional[str] = None


class ProcedimentoResponse(ProcedimentoCreate):
    id: str
    ativo: bool


# =================================================================================
# AGENDAMENTOS
# =================================================================================

class AgendamentoCreate(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: str = Field(..., alias="profissionalId")
    sala_id: Optional[str] = Field(None, alias="salaId")
    procedimento_id: Optional[str] = Field(None, alias="procedimentoId")
    data_hora: DataHora
    horario_fim: Optional[DataHora] = None
    duracao_minutos: Optional[int] = Field(None, gt=0)
    status: StatusAgendamento = StatusAgendamento.AGENDADO
    observacoes: Optional[str] = None

    @model_validator(mode="after")
    def _exige_fim_ou_duracao(self):
        if self.horario_fim is None and self.duracao_minutos is None:
            raise ValueError("Informe horario_fim ou duracao_minutos.")
        return self


class AgendamentoUpdate(SchemaBase):
    paciente_id: Optional[str] = Field(None, alias="pacienteId")
    profissional_id: Optional[str] = Field(None, alias="profissionalId")
    sala_id: Optional[str] = Field(None, alias="salaId")
    procedimento_id: Optional[str] = Field(None, alias="procedimentoId")
    data_hora: Optional[DataHora] = None
    horario_fim: Optional[DataHora] = None
    duracao_minutos: Optional[int] = Field(None, gt=0)
    status: Optional[StatusAgendamento] = None
    observacoes: Optional[str] = None


class AgendamentoResponse(SchemaBase):
    id: str
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: str = Field(..., alias="profissionalId")
    sala_id: Optional[str] = Field(None, alias="salaId")
    procedimento_id: Optional[str] = Field(None, alias="procedimentoId")
    data_hora: datetime
    horario_fim: datetime
    duracao_minutos: int
    status: str
    observacoes: Optional[str] = None
    paciente: Optional[PacienteResumo] = None
    profissional: Optional[ProfissionalResumo] = None
    sala: Optional[SalaResumo] = None
    procedimento: Optional[ProcedimentoResumo] = None


class AgendamentoLoteCreate(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: str = Field(..., alias="profissionalId")
    sala_id: Optional[str] = Field(None, alias="salaId")
    procedimento_id: Optional[str] = Field(None, alias="procedimentoId")
    datas: List[date] = Field(..., min_length=1)
    horario: time = Field(..., description="Horário de início no formato HH:MM.")
    duracao_minutos: int = Field(60, gt=0)
    status: StatusAgendamento = StatusAgendamento.AGENDADO
    observacoes: Optional[str] = None


class ResultadoLote(BaseModel):
    data: date
    success: bool
    agendamento: Optional[AgendamentoResponse] = None
    error: Optional[str] = None


class ResumoLote(BaseModel):
    total: int
    sucessos: int
    falhas: int


class AgendamentoLoteResponse(BaseModel):
    success: bool
    message: str
    resultados: List[ResultadoLote]
    resumo: ResumoLote


# =================================================================================
# PRONTUÁRIOS E ANAMNESES
# =================================================================================

class ProntuarioBase(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: str = Field(..., alias="profissionalId")
    data_sessao: DataHora
    tipo_atendimento: Optional[str] = None
    evolucao_clinica: str = Field(..., min_length=1)
    observacoes: Optional[str] = None
    anexos: List[str] = []


class ProntuarioCreate(ProntuarioBase):
    pass


class ProntuarioUpdate(SchemaBase):
    profissional_id: Optional[str] = Field(None, alias="profissionalId")
    data_sessao: Optional[DataHora] = None
    tipo_atendimento: Optional[str] = None
    evolucao_clinica: Optional[str] = Field(None, min_length=1)
    observacoes: Optional[str] = None
    anexos: Optional[List[str]] = None


class ProntuarioResponse(ProntuarioBase):
    id: str
    data_sessao: datetime
    created_at: datetime
    paciente: Optional[PacienteResumo] = None
    profissional: Optional[ProfissionalResumo] = None


class AnamneseSchema(BaseModel):
    """Anamneses trafegam em camelCase, como o formulário do front-end."""
    model_config = ConfigDict(
        from_attributes=True, populate_by_name=True, use_enum_values=True, validate_default=True,
        alias_generator=to_camel,
    )


class AnamneseCampos(AnamneseSchema):
    historia_desenvolvimento: Optional[str] = None
    comportamentos_excessivos: Optional[str] = None
    comportamentos_deficitarios: Optional[str] = None
    comportamentos_problema: Optional[str] = None
    rotina_diaria: Optional[str] = None
    ambiente_familiar: Optional[str] = None
    ambiente_escolar: Optional[str] = None
    preferencias: Optional[str] = None
    documentos_anexos: List[str] = []
    habilidades_criticas: Optional[str] = None
    observacoes_gerais: Optional[str] = None


class AnamneseCreate(AnamneseCampos):
    paciente_id: str
    profissional_id: Optional[str] = None
    status: StatusAnamnese = StatusAnamnese.RASCUNHO


class AnamneseUpdate(AnamneseSchema):
    profissional_id: Optional[str] = None
    historia_desenvolvimento: Optional[str] = None
    comportamentos_excessivos: Optional[str] = None
    comportamentos_deficitarios: Optional[str] = None
    comportamentos_problema: Optional[str] = None
    rotina_diaria: Optional[str] = None
    ambiente_familiar: Optional[str] = None
    ambiente_escolar: Optional[str] = None
    preferencias: Optional[str] = None
    documentos_anexos: Optional[List[str]] = None
    habilidades_criticas: Optional[str] = None
    observacoes_gerais: Optional[str] = None
    status: Optional[StatusAnamnese] = None


class AnamneseResponse(AnamneseCampos):
    id: str
    paciente_id: str
    profissional_id: Optional[str] = None
    status: str
    finalizada_em: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    paciente: Optional[PacienteResumo] = None


# =================================================================================
# REGISTROS CLÍNICOS DO PACIENTE
# =================================================================================

class DiagnosticoCreate(SchemaBase):
    cid10: Optional[str] = None
    descricao_cid: Optional[str] = None
    diagnostico_desc: str = Field(..., min_length=1)
    hipotese: bool = False
    observacoes: Optional[str] = None
    anexos: List[str] = []
    data_diagnostico: Optional[DataHora] = None


class DiagnosticoUpdate(SchemaBase):
    cid10: Optional[str] = None
    descricao_cid: Optional[str] = None
    diagnostico_desc: Optional[str] = Field(None, min_length=1)
    hipotese: Optional[bool] = None
    observacoes: Optional[str] = None
    anexos: Optional[List[str]] = None
    data_diagnostico: Optional[DataHora] = None


class DiagnosticoResponse(DiagnosticoCreate):
    id: str
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: Optional[str] = Field(None, alias="profissionalId")
    data_diagnostico: Optional[datetime] = None
    created_at: datetime


class PrescricaoCreate(SchemaBase):
    medicamento: str = Field(..., min_length=1)
    dosagem: str = Field(..., min_length=1)
    frequencia: str = Field(..., min_length=1)
    via_admin: Optional[str] = None
    duracao: Optional[str] = None
    indicacao: Optional[str] = None
    observacoes: Optional[str] = None
    data_inicio: Optional[DataHora] = None
    data_fim: Optional[DataHora] = None
    ativo: bool = True


class PrescricaoUpdate(SchemaBase):
    medicamento: Optional[str] = Field(None, min_length=1)
    dosagem: Optional[str] = Field(None, min_length=1)
    frequencia: Optional[str] = Field(None, min_length=1)
    via_admin: Optional[str] = None
    duracao: Optional[str] = None
    indicacao: Optional[str] = None
    observacoes: Optional[str] = None
    data_inicio: Optional[DataHora] = None
    data_fim: Optional[DataHora] = None
    ativo: Optional[bool] = None


class PrescricaoResponse(PrescricaoCreate):
    id: str
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: Optional[str] = Field(None, alias="profissionalId")
    data_inicio: Optional[datetime] = None
    data_fim: Optional[datetime] = None
    created_at: datetime


class EncaminhamentoCreate(SchemaBase):
    tipo: str = Field(..., min_length=1)
    especialidade: str = Field(..., min_length=1)
    motivo: str = Field(..., min_length=1)
    profissional_dest: Optional[str] = None
    instituicao_dest: Optional[str] = None
    observacoes: Optional[str] = None


class EncaminhamentoUpdate(SchemaBase):
    tipo: Optional[str] = Field(None, min_length=1)
    especialidade: Optional[str] = Field(None, min_length=1)
    motivo: Optional[str] = Field(None, min_length=1)
    profissional_dest: Optional[str] = None
    instituicao_dest: Optional[str] = None
    observacoes: Optional[str] = None
    status: Optional[StatusEncaminhamento] = None


class EncaminhamentoResponse(EncaminhamentoCreate):
    id: str
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: Optional[str] = Field(None, alias="profissionalId")
    status: str
    created_at: datetime


class AnexoCreate(SchemaBase):
    tipo: Optional[str] = None
    categoria: Optional[str] = None
    titulo: str = Field(..., min_length=1)
    descricao: Optional[str] = None
    arquivo_url: str = Field(..., min_length=1)
    arquivo_nome: Optional[str] = None
    arquivo_tipo: Optional[str] = None
    arquivo_size: Optional[int] = Field(None, ge=0)
    data_documento: Optional[DataHora] = None


class AnexoUpdate(SchemaBase):
    tipo: Optional[str] = None
    categoria: Optional[str] = None
    titulo: Optional[str] = Field(None, min_length=1)
    descricao: Optional[str] = None
    data_documento: Optional[DataHora] = None


class AnexoResponse(AnexoCreate):
    id: str
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: Optional[str] = Field(None, alias="profissionalId")
    data_documento: Optional[datetime] = None
    created_at: datetime


class RelatorioClinicoCreate(SchemaBase):
    tipo: str = Field(..., min_length=1)
    titulo: str = Field(..., min_length=1)
    periodo_inicio: Optional[DataHora] = None
    periodo_fim: Optional[DataHora] = None
    conteudo: str = Field(..., min_length=1)
    finalidade: Optional[str] = None
    destinatario: Optional[str] = None


class RelatorioClinicoUpdate(SchemaBase):
    tipo: Optional[str] = Field(None, min_length=1)
    titulo: Optional[str] = Field(None, min_length=1)
    periodo_inicio: Optional[DataHora] = None
    periodo_fim: Optional[DataHora] = None
    conteudo: Optional[str] = Field(None, min_length=1)
    finalidade: Optional[str] = None
    destinatario: Optional[str] = None
    assinado: Optional[bool] = None


class RelatorioClinicoResponse(RelatorioClinicoCreate):
    id: str
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: Optional[str] = Field(None, alias="profissionalId")
    periodo_inicio: Optional[datetime] = None
    periodo_fim: Optional[datetime] = None
    assinado: bool
    created_at: datetime


# =================================================================================
# ATIVIDADES
# =================================================================================

class InstrucaoIn(SchemaBase):
    texto: str = Field(..., min_length=1)
    observacao: Optional[str] = None


class InstrucaoResponse(InstrucaoIn):
    id: str
    ordem: int


class PontuacaoAtividadeIn(SchemaBase):
    sigla: SiglaAjuda
    grau: GrauAjuda


class PontuacaoAtividadeResponse(SchemaBase):
    id: str
    ordem: int
    sigla: str
    grau: str


class AtividadeCreate(SchemaBase):
    nome: str = Field(..., min_length=1)
    tipo: str = Field(..., min_length=1)
    descricao: Optional[str] = None
    metodologia: Optional[str] = None
    objetivo: Optional[str] = None
    instrucoes: List[InstrucaoIn] = []
    pontuacoes: List[PontuacaoAtividadeIn] = []


class AtividadeUpdate(SchemaBase):
    nome: Optional[str] = Field(None, min_length=1)
    tipo: Optional[str] = Field(None, min_length=1)
    descricao: Optional[str] = None
    metodologia: Optional[str] = None
    objetivo: Optional[str] = None
    instrucoes: Optional[List[InstrucaoIn]] = None
    pontuacoes: Optional[List[PontuacaoAtividadeIn]] = None


class AtividadeResponse(SchemaBase):
    id: str
    nome: str
    tipo: str
    descricao: Optional[str] = None
    metodologia: Optional[str] = None
    objetivo: Optional[str] = None
    ativo: bool
    instrucoes: List[InstrucaoResponse] = []
    pontuacoes: List[PontuacaoAtividadeResponse] = []
    created_at: datetime


# =================================================================================
# CURRICULUM
# =================================================================================

class CurriculumAtividadeIn(SchemaBase):
    atividade_id: str = Field(..., alias="atividadeId")
    ordem: Optional[int] = Field(None, ge=1)


class CurriculumAtividadeResponse(SchemaBase):
    id: str
    atividade_id: str = Field(..., alias="atividadeId")
    ordem: int
    atividade: Optional[AtividadeResponse] = None


class CurriculumCreate(SchemaBase):
    nome: str = Field(..., min_length=1)
    descricao: Optional[str] = None
    atividades: List[CurriculumAtividadeIn] = []


class CurriculumUpdate(SchemaBase):
    nome: Optional[str] = Field(None, min_length=1)
    descricao: Optional[str] = None
    atividades: Optional[List[CurriculumAtividadeIn]] = None


class CurriculumResponse(SchemaBase):
    id: str
    nome: str
    descricao: Optional[str] = None
    ativo: bool
    atividades: List[CurriculumAtividadeResponse] = []
    created_at: datetime


# =================================================================================
# AVALIAÇÕES
# =================================================================================

class NivelIn(SchemaBase):
    ordem: int = Field(..., ge=1)
    descricao: str = Field(..., min_length=1)
    faixa_etaria: Optional[str] = None


class NivelUpdate(SchemaBase):
    ordem: Optional[int] = Field(None, ge=1)
    descricao: Optional[str] = Field(None, min_length=1)
    faixa_etaria: Optional[str] = None


class NivelResponse(NivelIn):
    id: str


class HabilidadeIn(SchemaBase):
    ordem: int = Field(..., ge=1)
    habilidade: str = Field(..., min_length=1)


class HabilidadeUpdate(SchemaBase):
    ordem: Optional[int] = Field(None, ge=1)
    habilidade: Optional[str] = Field(None, min_length=1)


class HabilidadeResponse(HabilidadeIn):
    id: str


class PontuacaoAvaliacaoIn(SchemaBase):
    ordem: int = Field(..., ge=1)
    tipo: str = Field(..., min_length=1)
    valor: float


class PontuacaoAvaliacaoUpdate(SchemaBase):
    ordem: Optional[int] = Field(None, ge=1)
    tipo: Optional[str] = Field(None, min_length=1)
    valor: Optional[float] = None


class PontuacaoAvaliacaoResponse(PontuacaoAvaliacaoIn):
    id: str


class TarefaIn(SchemaBase):
    pergunta: str = Field(..., min_length=1)
    nivel_id: Optional[str] = Field(None, alias="nivelId")
    habilidade_id: Optional[str] = Field(None, alias="habilidadeId")
    descricao: Optional[str] = None
    criterios_pontuacao: Optional[Any] = None
    ordem: int = Field(..., ge=1)


class TarefaUpdate(SchemaBase):
    pergunta: Optional[str] = Field(None, min_length=1)
    nivel_id: Optional[str] = Field(None, alias="nivelId")
    habilidade_id: Optional[str] = Field(None, alias="habilidadeId")
    descricao: Optional[str] = None
    criterios_pontuacao: Optional[Any] = None
    ordem: Optional[int] = Field(None, ge=1)


class TarefaResponse(TarefaIn):
    id: str


class AvaliacaoCreate(SchemaBase):
    tipo: str = Field(..., min_length=1)
    nome: str = Field(..., min_length=1)
    observacao: Optional[str] = None


class AvaliacaoUpdate(SchemaBase):
    tipo: Optional[str] = Field(None, min_length=1)
    nome: Optional[str] = Field(None, min_length=1)
    observacao: Optional[str] = None


class AvaliacaoResponse(AvaliacaoCreate):
    id: str
    ativo: bool
    created_at: datetime


class AvaliacaoDetalhe(AvaliacaoResponse):
    niveis: List[NivelResponse] = []
    habilidades: List[HabilidadeResponse] = []
    pontuacoes: List[PontuacaoAvaliacaoResponse] = []
    tarefas: List[TarefaResponse] = []


# =================================================================================
# ATRIBUIÇÕES
# =================================================================================

class AtribuicaoAtividadeCreate(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    atividade_id: str = Field(..., alias="atividadeId")


class AtribuicaoCurriculumCreate(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    curriculum_id: str = Field(..., alias="curriculumId")


class AtribuicaoAvaliacaoCreate(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    avaliacao_id: str = Field(..., alias="avaliacaoId")


class AtribuicaoBase(SchemaBase):
    id: str
    paciente_id: str = Field(..., alias="pacienteId")
    atribuida_por: str
    atribuida_em: datetime
    ativa: bool


class AtribuicaoAtividadeResponse(AtribuicaoBase):
    atividade_id: str = Field(..., alias="atividadeId")
    atividade: Optional[AtividadeResponse] = None


class AtribuicaoCurriculumResponse(AtribuicaoBase):
    curriculum_id: str = Field(..., alias="curriculumId")
    curriculum: Optional[CurriculumResponse] = None


class AtribuicaoAvaliacaoResponse(AtribuicaoBase):
    avaliacao_id: str = Field(..., alias="avaliacaoId")
    avaliacao: Optional[AvaliacaoResponse] = None


# =================================================================================
# SESSÕES
# =================================================================================

Nota = Annotated[int, Field(ge=0, le=4)]


class SessaoAtividadeCreate(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    atividade_id: str = Field(..., alias="atividadeId")


class AvaliarInstrucaoRequest(SchemaBase):
    sessao_id: str = Field(..., alias="sessaoId")
    instrucao_id: str = Field(..., alias="instrucaoId")
    nota: Nota
    tipos_ajuda: List[SiglaAjuda] = []
    observacao: Optional[str] = None


class FinalizarSessaoRequest(SchemaBase):
    sessao_id: str = Field(..., alias="sessaoId")
    observacoes_gerais: Optional[str] = None


class AvaliacaoInstrucaoResponse(SchemaBase):
    id: str
    instrucao_id: str = Field(..., alias="instrucaoId")
    nota: int
    tipos_ajuda: List[str] = []
    observacao: Optional[str] = None
    avaliada_em: Optional[datetime] = None
    instrucao: Optional[InstrucaoResponse] = None


class SessaoBaseResponse(SchemaBase):
    id: str
    paciente_id: str = Field(..., alias="pacienteId")
    profissional_id: str = Field(..., alias="profissionalId")
    status: str
    iniciada_em: datetime
    finalizada_em: Optional[datetime] = None
    observacoes_gerais: Optional[str] = None
    paciente: Optional[PacienteResumo] = None
    profissional: Optional[ProfissionalResumo] = None


class SessaoAtividadeResponse(SessaoBaseResponse):
    atividade_id: str = Field(..., alias="atividadeId")
    atividade: Optional[AtividadeResponse] = None
    avaliacoes: List[AvaliacaoInstrucaoResponse] = []


class EstatisticasSessao(BaseModel):
    totalInstrucoes: int
    mediaNotas: float
    totalComAjuda: int
    percentualComAjuda: float
    notaMaxima: Optional[int] = None
    notaMinima: Optional[int] = None


class SessaoFinalizadaResponse(BaseModel):
    sessao: SessaoAtividadeResponse
    estatisticas: EstatisticasSessao


class SessaoCurriculumCreate(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    curriculum_id: str = Field(..., alias="curriculumId")


class AvaliarCurriculumRequest(SchemaBase):
    sessao_id: str = Field(..., alias="sessaoId")
    atividade_id: str = Field(..., alias="atividadeId")
    instrucao_id: str = Field(..., alias="instrucaoId")
    tentativa: int = Field(1, ge=1)
    nota: Nota
    tipos_ajuda: List[SiglaAjuda] = []
    observacao: Optional[str] = None


class AvaliacaoCurriculumResponse(SchemaBase):
    id: str
    atividade_id: str = Field(..., alias="atividadeId")
    instrucao_id: str = Field(..., alias="instrucaoId")
    tentativa: int
    nota: int
    tipos_ajuda: List[str] = []
    observacao: Optional[str] = None
    avaliada_em: Optional[datetime] = None


class SessaoCurriculumResponse(SessaoBaseResponse):
    curriculum_id: str = Field(..., alias="curriculumId")
    curriculum: Optional[CurriculumResponse] = None
    avaliacoes: List[AvaliacaoCurriculumResponse] = []


class SessaoCurriculumFinalizadaResponse(BaseModel):
    sessao: SessaoCurriculumResponse
    estatisticas: EstatisticasSessao


class SessaoCurriculumIniciadaResposta(Resposta[SessaoCurriculumResponse]):
    existente: bool = False


class SessaoAvaliacaoCreate(SchemaBase):
    paciente_id: str = Field(..., alias="pacienteId")
    avaliacao_id: str = Field(..., alias="avaliacaoId")


class ResponderTarefaRequest(SchemaBase):
    sessao_id: str = Field(..., alias="sessaoId")
    tarefa_id: Optional[str] = Field(None, alias="tarefaId")
    pontuacao: Optional[float] = None
    observacao: Optional[str] = None
    finalizar: bool = False
    observacoes_gerais: Optional[str] = None


class RespostaTarefaResponse(SchemaBase):
    id: str
    tarefa_id: str = Field(..., alias="tarefaId")
    pontuacao: Optional[float] = None
    observacao: Optional[str] = None
    respondida_em: Optional[datetime] = None


class SessaoAvaliacaoResponse(SessaoBaseResponse):
    avaliacao_id: str = Field(..., alias="avaliacaoId")
    avaliacao: Optional[AvaliacaoDetalhe] = None
    respostas: List[RespostaTarefaResponse] = []


# =================================================================================
# RELATÓRIOS E DASHBOARD
# =================================================================================

class Atendimento(BaseModel):
    id: str
    tipo: str
    data: datetime
    status: str
    duracaoMinutos: int
    profissionalId: str
    profissionalNome: Optional[str] = None
    pacienteId: str
    pacienteNome: Optional[str] = None
    titulo: Optional[str] = None


class ResumoRelatorio(BaseModel):
    totalSessoes: int
    sessoesFinalizadas: int
    pacientesUnicos: int
    taxaConclusao: float
    horasTotais: float


class GrupoPaciente(BaseModel):
    pacienteId: str
    pacienteNome: Optional[str] = None
    total: int
    atendimentos: List[Atendimento]


class RelatorioProfissionaisResponse(BaseModel):
    resumo: ResumoRelatorio
    distribuicao: Dict[str, int]
    atendimentos: List[Atendimento]
    agrupados: List[GrupoPaciente]


class DashboardStats(BaseModel):
    totalPacientes: int
    sessoesEmAndamento: int
    sessoesRealizadasMes: int
    anamnesesPendentes: int
    atividadesCadastradas: int
    totalTerapeutas: Optional[int] = None


class SessaoRecente(BaseModel):
    id: str
    tipo: str
    titulo: Optional[str] = None
    status: str
    iniciadaEm: datetime
    finalizadaEm: Optional[datetime] = None
    pacienteId: str
    pacienteNome: Optional[str] = None
    profissionalNome: Optional[str] = None


class SessoesRecentesResponse(BaseModel):
    pendentes: List[SessaoRecente]
    recentes: List[SessaoRecente]


class UploadResponse(BaseModel):
    url: str
    fileName: str
    fileType: str
    fileSize: int
    downloadUrl: str
