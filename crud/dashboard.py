# crud/dashboard.py
"""
Indicadores do painel inicial
"""

import logging
from datetime import timedelta
from typing import Optional, Dict, List

import models
from crud.escopo import EscopoTenant
from crud.utils import inicio_do_dia, inicio_do_mes

logger = logging.getLogger(__name__)

# modelo da sessão -> tipo (também o nome da relação com o item aplicado)
MODELOS_SESSAO = (
    (models.SessaoAtividade, "atividade"),
    (models.SessaoCurriculum, "curriculum"),
    (models.SessaoAvaliacao, "avaliacao"),
)


def _sessoes(escopo: EscopoTenant, modelo, profissional_id: Optional[str], *criterios):
    q = escopo.query(modelo, *criterios)
    if profissional_id is not None:
        q = q.filter(modelo.profissional_id == profissional_id)
    return q


def estatisticas(escopo: EscopoTenant, profissional_id: Optional[str], is_admin: bool) -> Dict:
    """Contadores do dashboard; `profissional_id` restringe aos dados do terapeuta."""
    inicio_mes = inicio_do_mes(models.agora())

    pacientes = escopo.query(models.Paciente, apenas_ativos=True)
    if profissional_id is not None:
        pacientes = pacientes.filter(models.Paciente.profissional_id == profissional_id)

    em_andamento = sum(
        _sessoes(escopo, modelo, profissional_id, modelo.status == "EM_ANDAMENTO").count()
        for modelo, _ in MODELOS_SESSAO
    )
    realizadas_mes = sum(
        _sessoes(escopo, modelo, profissional_id, modelo.status == "FINALIZADA", modelo.finalizada_em >= inicio_mes).count()
        for modelo, _ in MODELOS_SESSAO
    )

    anamneses = escopo.query(models.Anamnese, models.Anamnese.status == "RASCUNHO")
    if profissional_id is not None:
        anamneses = anamneses.filter(models.Anamnese.profissional_id == profissional_id)

    dados = {
        "totalPacientes": pacientes.count(),
        "sessoesEmAndamento": em_andamento,
        "sessoesRealizadasMes": realizadas_mes,
        "anamnesesPendentes": anamneses.count(),
        "atividadesCadastradas": escopo.query(models.Atividade, apenas_ativos=True).count(),
    }
    if is_admin:
        dados["totalTerapeutas"] = escopo.query(models.Profissional, apenas_ativos=True).count()
    return dados


def agenda_hoje(escopo: EscopoTenant, profissional_id: Optional[str]) -> List[models.Agendamento]:
    inicio = inicio_do_dia(models.agora().date())
    q = escopo.query(
        models.Agendamento,
        models.Agendamento.data_hora >= inicio,
        models.Agendamento.data_hora < inicio + timedelta(days=1),
        models.Agendamento.status != "CANCELADO",
    )
    if profissional_id is not None:
        q = q.filter(models.Agendamento.profissional_id == profissional_id)
    return q.order_by(models.Agendamento.data_hora.asc()).all()


def _resumo_sessao(sessao, tipo: str) -> Dict:
    item = getattr(sessao, tipo)
    return {
        "id": sessao.id,
        "tipo": tipo,
        "titulo": item.nome if item is not None else None,
        "status": sessao.status,
        "iniciadaEm": sessao.iniciada_em,
        "finalizadaEm": sessao.finalizada_em,
        "pacienteId": sessao.paciente_id,
        "pacienteNome": sessao.paciente.nome if sessao.paciente else None,
        "profissionalNome": sessao.profissional.nome if sessao.profissional else None,
    }


def sessoes_recentes(escopo: EscopoTenant, profissional_id: Optional[str], limite: int = 5) -> Dict:
    pendentes, recentes = [], []
    for modelo, tipo in MODELOS_SESSAO:
        pendentes += [
            _resumo_sessao(s, tipo)
            for s in _sessoes(escopo, modelo, profissional_id, modelo.status == "EM_ANDAMENTO")
            .order_by(modelo.iniciada_em.desc()).limit(limite)
        ]
        recentes += [
            _resumo_sessao(s, tipo)
            for s in _sessoes(escopo, modelo, profissional_id, modelo.status == "FINALIZADA")
            .order_by(modelo.finalizada_em.desc()).limit(limite)
        ]

    pendentes.sort(key=lambda s: s["iniciadaEm"], reverse=True)
    recentes.sort(key=lambda s: s["finalizadaEm"], reverse=True)
    return {"pendentes": pendentes[:limite], "recentes": recentes[:limite]}
