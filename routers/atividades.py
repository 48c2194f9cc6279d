# routers/atividades.py
"""
Router para atividades terapêuticas e sua atribuição a pacientes
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status, Query

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/atividades", tags=["Atividades"])

# =================================================================================
# ATRIBUIÇÕES (declaradas antes de /{atividade_id})
# =================================================================================

@router.post("/atribuir", response_model=schemas.Resposta[schemas.AtribuicaoAtividadeResponse], status_code=status.HTTP_201_CREATED)
def atribuir_atividade(
    dados: schemas.AtribuicaoAtividadeCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_activities")),
):
    atribuicao = crud.atribuir(ctx.escopo, "atividade", dados.paciente_id, dados.atividade_id, ctx.usuario.id)
    return {"success": True, "data": atribuicao, "message": "Atividade atribuída ao paciente"}


@router.get("/atribuir", response_model=schemas.Resposta[List[schemas.AtribuicaoAtividadeResponse]])
def listar_atividades_atribuidas(
    paciente_id: str = Query(..., alias="pacienteId"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_activities")),
):
    return {"success": True, "data": crud.listar_atribuicoes(ctx.escopo, "atividade", paciente_id)}


@router.delete("/atribuir", response_model=schemas.Mensagem)
def remover_atribuicao_atividade(
    atribuicao_id: str = Query(..., alias="id"),
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
):
    if not crud.remover_atribuicao(ctx.escopo, "atividade", atribuicao_id):
        raise HTTPException(status_code=404, detail="Atribuição não encontrada")
    return {"success": True, "message": "Atribuição removida com sucesso"}

# =================================================================================
# ATIVIDADES
# =================================================================================

@router.get("", response_model=schemas.Resposta[List[schemas.AtividadeResponse]])
def listar_atividades(ctx: ContextoRequisicao = Depends(exige_permissao("view_activities"))):
    return {"success": True, "data": crud.listar_atividades(ctx.escopo)}


@router.post("", response_model=schemas.Resposta[schemas.AtividadeResponse], status_code=status.HTTP_201_CREATED)
def criar_atividade(
    atividade_data: schemas.AtividadeCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_activities")),
):
    atividade = crud.criar_atividade(ctx.escopo, atividade_data)
    return {"success": True, "data": atividade, "message": "Atividade criada com sucesso"}


@router.get("/{atividade_id}", response_model=schemas.Resposta[schemas.AtividadeResponse])
def obter_atividade(
    atividade_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("view_activities")),
):
    atividade = crud.buscar_atividade_por_id(ctx.escopo, atividade_id)
    if not atividade:
        raise HTTPException(status_code=404, detail="Atividade não encontrada")
    return {"success": True, "data": atividade}


@router.put("/{atividade_id}", response_model=schemas.Resposta[schemas.AtividadeResponse])
def atualizar_atividade(
    atividade_id: str,
    update_data: schemas.AtividadeUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
):
    atividade = crud.atualizar_atividade(ctx.escopo, atividade_id, update_data)
    if not atividade:
        raise HTTPException(status_code=404, detail="Atividade não encontrada")
    return {"success": True, "data": atividade, "message": "Atividade atualizada com sucesso"}


@router.delete("/{atividade_id}", response_model=schemas.Mensagem)
def desativar_atividade(
    atividade_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("delete_activities")),
):
    if not crud.desativar_atividade(ctx.escopo, atividade_id):
        raise HTTPException(status_code=404, detail="Atividade não encontrada")
    return {"success": True, "message": "Atividade desativada com sucesso"}
