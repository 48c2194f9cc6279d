# routers/relatorios.py
"""
Router para relatórios gerenciais
"""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

import schemas
import crud
from crud.utils import inicio_do_dia, fim_do_dia
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/relatorios", tags=["Relatórios"])

# status do filtro -> status normalizado dos atendimentos
_STATUS_FILTRO = {
    "EM_ANDAMENTO": "EM_ANDAMENTO",
    "FINALIZADA": "FINALIZADA",
    "FINALIZADO": "FINALIZADA",
    "ATENDIDO": "FINALIZADA",
    "CANCELADA": "CANCELADA",
    "CANCELADO": "CANCELADA",
}


def _normalizar_status(valor: Optional[str]) -> Optional[str]:
    if not valor:
        return None
    normalizado = _STATUS_FILTRO.get(valor.strip().upper())
    if normalizado is None:
        raise ValueError("Status inválido. Use EM_ANDAMENTO, FINALIZADA ou CANCELADA")
    return normalizado


def _para_datetime(valor: Optional[date], fim: bool = False) -> Optional[datetime]:
    """A data final inclui o dia inteiro."""
    if valor is None:
        return None
    return fim_do_dia(valor) if fim else inicio_do_dia(valor)


@router.get("/profissionais", response_model=schemas.Resposta[schemas.RelatorioProfissionaisResponse])
def relatorio_profissionais(
    profissionais: Optional[str] = Query(None, description="IDs de profissionais separados por vírgula"),
    data_inicio: Optional[date] = Query(None, alias="dataInicio"),
    data_fim: Optional[date] = Query(None, alias="dataFim"),
    tipo: Optional[str] = Query(None),
    status_atendimento: Optional[str] = Query(None, alias="status"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_reports")),
):
    """
    Atendimentos por profissional no período. Terapeutas só enxergam os próprios
    atendimentos, independentemente do filtro enviado.
    """
    restricao = ctx.restricao_profissional()
    if restricao is not None:
        ids = [restricao]
    else:
        ids = [p.strip() for p in (profissionais or "").split(",") if p.strip()]
        if not ids:
            # sem filtro: todos os profissionais ativos
            ids = [p.id for p in crud.listar_profissionais(ctx.escopo)]

    relatorio = crud.relatorio_profissionais(
        ctx.escopo,
        profissionais=ids,
        data_inicio=_para_datetime(data_inicio),
        data_fim=_para_datetime(data_fim, fim=True),
        tipo=tipo or None,
        status=_normalizar_status(status_atendimento),
    )
    return {"success": True, "data": relatorio}
