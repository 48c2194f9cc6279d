# crud/relatorios.py
"""
Relatório de atendimentos por profissional.

Reúne sessões de curriculum, de atividade, de avaliação e agendamentos em uma
lista única de "atendimentos", com resumo e agrupamento por paciente.
"""

import logging
from collections import Counter, OrderedDict
from datetime import datetime
from typing import Optional, List, Dict

import models
from crud.escopo import EscopoTenant
from crud.utils import minutos_entre

logger = logging.getLogger(__name__)

TIPOS_RELATORIO = ("curriculum", "atividade", "avaliacao", "agendamento")

STATUS_AGENDAMENTO_PARA_SESSAO = {
    "ATENDIDO": "FINALIZADA",
    "CANCELADO": "CANCELADA",
}


def _nome(obj) -> Optional[str]:
    return obj.nome if obj is not None else None


def _atendimento_sessao(sessao, tipo: str, titulo: Optional[str]) -> Dict:
    return {
        "id": sessao.id,
        "tipo": tipo,
        "data": sessao.iniciada_em,
        "status": sessao.status,
        "duracaoMinutos": minutos_entre(sessao.iniciada_em, sessao.finalizada_em),
        "profissionalId": sessao.profissional_id,
        "profissionalNome": _nome(sessao.profissional),
        "pacienteId": sessao.paciente_id,
        "pacienteNome": _nome(sessao.paciente),
        "titulo": titulo,
    }


def _atendimento_agendamento(agendamento: models.Agendamento) -> Dict:
    return {
        "id": agendamento.id,
        "tipo": "agendamento",
        "data": agendamento.data_hora,
        "status": STATUS_AGENDAMENTO_PARA_SESSAO.get(agendamento.status, "EM_ANDAMENTO"),
        "duracaoMinutos": agendamento.duracao_minutos,
        "profissionalId": agendamento.profissional_id,
        "profissionalNome": _nome(agendamento.profissional),
        "pacienteId": agendamento.paciente_id,
        "pacienteNome": _nome(agendamento.paciente),
        "titulo": _nome(agendamento.procedimento) or "Agendamento",
    }


def _filtrar(q, coluna_data, coluna_profissional, profissionais: Optional[List[str]],
             data_inicio: Optional[datetime], data_fim: Optional[datetime]):
    if profissionais is not None:
        q = q.filter(coluna_profissional.in_(profissionais))
    if data_inicio:
        q = q.filter(coluna_data >= data_inicio)
    if data_fim:
        q = q.filter(coluna_data <= data_fim)
    return q


def relatorio_profissionais(
    escopo: EscopoTenant,
    profissionais: Optional[List[str]] = None,
    data_inicio: Optional[datetime] = None,
    data_fim: Optional[datetime] = None,
    tipo: Optional[str] = None,
    status: Optional[str] = None,
) -> Dict:
    """
    Monta o relatório de atendimentos.

    Args:
        escopo: Escopo do tenant
        profissionais: IDs dos profissionais; None considera todos
        data_inicio: Início do período (inclusivo)
        data_fim: Fim do período (inclusivo)
        tipo: Restringe a um dos TIPOS_RELATORIO
        status: Status já normalizado (EM_ANDAMENTO, FINALIZADA, CANCELADA)

    Returns:
        Dicionário com resumo, distribuicao, atendimentos e agrupados
    """
    if tipo and tipo not in TIPOS_RELATORIO:
        raise ValueError(f"Tipo inválido. Use um de: {', '.join(TIPOS_RELATORIO)}")

    atendimentos: List[Dict] = []

    if tipo in (None, "curriculum"):
        M = models.SessaoCurriculum
        q = _filtrar(escopo.query(M), M.iniciada_em, M.profissional_id, profissionais, data_inicio, data_fim)
        atendimentos += [_atendimento_sessao(s, "curriculum", _nome(s.curriculum)) for s in q.all()]

    if tipo in (None, "atividade"):
        M = models.SessaoAtividade
        q = _filtrar(escopo.query(M), M.iniciada_em, M.profissional_id, profissionais, data_inicio, data_fim)
        atendimentos += [_atendimento_sessao(s, "atividade", _nome(s.atividade)) for s in q.all()]

    if tipo in (None, "avaliacao"):
        M = models.SessaoAvaliacao
        q = _filtrar(escopo.query(M), M.iniciada_em, M.profissional_id, profissionais, data_inicio, data_fim)
        atendimentos += [_atendimento_sessao(s, "avaliacao", _nome(s.avaliacao)) for s in q.all()]

    if tipo in (None, "agendamento"):
        M = models.Agendamento
        q = _filtrar(escopo.query(M), M.data_hora, M.profissional_id, profissionais, data_inicio, data_fim)
        atendimentos += [_atendimento_agendamento(a) for a in q.all()]

    if status:
        atendimentos = [a for a in atendimentos if a["status"] == status]

    atendimentos.sort(key=lambda a: a["data"], reverse=True)

    total = len(atendimentos)
    finalizadas = sum(1 for a in atendimentos if a["status"] == "FINALIZADA")
    minutos = sum(a["duracaoMinutos"] for a in atendimentos)

    agrupados: "OrderedDict[str, Dict]" = OrderedDict()
    for a in atendimentos:
        grupo = agrupados.setdefault(a["pacienteId"], {
            "pacienteId": a["pacienteId"], "pacienteNome": a["pacienteNome"], "total": 0, "atendimentos": [],
        })
        grupo["total"] += 1
        grupo["atendimentos"].append(a)

    distribuicao = {t: 0 for t in TIPOS_RELATORIO}
    distribuicao.update(Counter(a["tipo"] for a in atendimentos))

    logger.info(f"Relatório de profissionais gerado no tenant {escopo.tenant_id}: {total} atendimentos")
    return {
        "resumo": {
            "totalSessoes": total,
            "sessoesFinalizadas": finalizadas,
            "pacientesUnicos": len(agrupados),
            "taxaConclusao": round(finalizadas / total * 100, 1) if total else 0.0,
            "horasTotais": round(minutos / 60, 1),
        },
        "distribuicao": distribuicao,
        "atendimentos": atendimentos,
        "agrupados": list(agrupados.values()),
    }
