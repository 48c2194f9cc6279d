# routers/dashboard.py
"""
Router do painel inicial
"""

from typing import List

from fastapi import APIRouter, Depends

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=schemas.Resposta[schemas.DashboardStats], response_model_exclude_none=True)
def estatisticas(ctx: ContextoRequisicao = Depends(exige_permissao("view_dashboard"))):
    """Contadores do painel. Para terapeutas, restritos ao próprio profissional; totalTerapeutas só para admins."""
    dados = crud.estatisticas(ctx.escopo, ctx.restricao_profissional(), ctx.is_admin)
    return {"success": True, "data": dados}


@router.get("/agenda-hoje", response_model=schemas.Resposta[List[schemas.AgendamentoResponse]])
def agenda_hoje(ctx: ContextoRequisicao = Depends(exige_permissao("view_dashboard"))):
    return {"success": True, "data": crud.agenda_hoje(ctx.escopo, ctx.restricao_profissional())}


@router.get("/sessoes-recentes", response_model=schemas.Resposta[schemas.SessoesRecentesResponse])
def sessoes_recentes(ctx: ContextoRequisicao = Depends(exige_permissao("view_dashboard"))):
    return {"success": True, "data": crud.sessoes_recentes(ctx.escopo, ctx.restricao_profissional())}
