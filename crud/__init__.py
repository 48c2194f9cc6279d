# crud/__init__.py
"""
Módulo CRUD organizado por domínios da clínica.
"""

# Utilitários e exceções de domínio
from crud.utils import (
    NaoEncontradoError,
    ConflitoError,
    RegraNegocioError,
    AcessoNegadoError,
)

# Escopo de dados por tenant
from crud.escopo import EscopoTenant

# Profissionais
from crud.profissionais import (
    profissional_do_usuario,
    listar_profissionais,
    buscar_profissional_por_id,
    criar_profissional,
    atualizar_profissional,
    desativar_profissional,
    vincular_usuario,
    mapa_vinculos,
)

# Pacientes
from crud.pacientes import (
    listar_pacientes,
    buscar_paciente_por_id,
    criar_paciente,
    atualizar_paciente,
    desativar_paciente,
)

# Salas e procedimentos
from crud.cadastros import (
    listar_salas,
    criar_sala,
    atualizar_sala,
    deletar_sala,
    listar_procedimentos,
    criar_procedimento,
)

# Agendamentos
from crud.agendamentos import (
    listar_agendamentos,
    buscar_agendamento_por_id,
    criar_agendamento,
    criar_agendamentos_em_lote,
    atualizar_agendamento,
    deletar_agendamento,
)

# Prontuários e anamneses
from crud.prontuarios import (
    listar_prontuarios,
    buscar_prontuario_por_id,
    criar_prontuario,
    atualizar_prontuario,
    deletar_prontuario,
)
from crud.anamneses import (
    listar_anamneses,
    buscar_anamnese_por_id,
    criar_anamnese,
    atualizar_anamnese,
    deletar_anamnese,
)

# Registros clínicos do paciente
from crud.clinico import (
    REGISTROS_CLINICOS,
    listar_registros,
    criar_registro,
    atualizar_registro,
    deletar_registro,
)

# Atividades, curriculums e avaliações
from crud.atividades import (
    listar_atividades,
    buscar_atividade_por_id,
    criar_atividade,
    atualizar_atividade,
    desativar_atividade,
)
from crud.curriculum import (
    listar_curriculums,
    buscar_curriculum_por_id,
    criar_curriculum,
    atualizar_curriculum,
    desativar_curriculum,
)
from crud.avaliacoes import (
    ITENS_AVALIACAO,
    listar_avaliacoes,
    buscar_avaliacao_por_id,
    criar_avaliacao,
    atualizar_avaliacao,
    desativar_avaliacao,
    listar_itens,
    criar_item,
    atualizar_item,
    deletar_item,
)
from crud.atribuicoes import (
    atribuir,
    listar_atribuicoes,
    remover_atribuicao,
)

# Sessões
from crud.sessoes import (
    iniciar_sessao_atividade,
    listar_sessoes_atividade,
    buscar_sessao_atividade,
    avaliar_instrucao,
    finalizar_sessao_atividade,
    iniciar_sessao_curriculum,
    listar_sessoes_curriculum,
    buscar_sessao_curriculum,
    avaliar_instrucao_curriculum,
    finalizar_sessao_curriculum,
    iniciar_sessao_avaliacao,
    listar_sessoes_avaliacao,
    buscar_sessao_avaliacao,
    responder_tarefa,
    calcular_estatisticas,
)

# Relatórios e dashboard
from crud.relatorios import relatorio_profissionais
from crud.dashboard import estatisticas, agenda_hoje, sessoes_recentes
