# routers/anamneses.py
"""
Router para anamneses
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/anamneses", tags=["Anamneses"])


@router.get("", response_model=schemas.Resposta[List[schemas.AnamneseResponse]])
def listar_anamneses(
    paciente_id: Optional[str] = Query(None, alias="pacienteId"),
    status_anamnese: Optional[schemas.StatusAnamnese] = Query(None, alias="status"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_anamneses")),
):
    anamneses = crud.listar_anamneses(
        ctx.escopo, paciente_id, status_anamnese.value if status_anamnese else None
    )
    return {"success": True, "data": anamneses}


@router.post("", response_model=schemas.Resposta[schemas.AnamneseResponse], status_code=status.HTTP_201_CREATED)
def criar_anamnese(
    anamnese_data: schemas.AnamneseCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_anamneses")),
):
    """Cria a anamnese. Sem profissionalId, usa o profissional vinculado ao usuário logado."""
    profissional_padrao = ctx.profissional.id if ctx.profissional else None
    anamnese = crud.criar_anamnese(ctx.escopo, anamnese_data, profissional_padrao)
    return {"success": True, "data": anamnese, "message": "Anamnese criada com sucesso"}


@router.get("/{anamnese_id}", response_model=schemas.Resposta[schemas.AnamneseResponse])
def obter_anamnese(
    anamnese_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("view_anamneses")),
):
    anamnese = crud.buscar_anamnese_por_id(ctx.escopo, anamnese_id)
    if not anamnese:
        raise HTTPException(status_code=404, detail="Anamnese não encontrada")
    return {"success": True, "data": anamnese}


@router.put("/{anamnese_id}", response_model=schemas.Resposta[schemas.AnamneseResponse])
def atualizar_anamnese(
    anamnese_id: str,
    update_data: schemas.AnamneseUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_anamneses")),
):
    anamnese = crud.atualizar_anamnese(ctx.escopo, anamnese_id, update_data)
    if not anamnese:
        raise HTTPException(status_code=404, detail="Anamnese não encontrada")
    return {"success": True, "data": anamnese, "message": "Anamnese atualizada com sucesso"}


@router.delete("/{anamnese_id}", response_model=schemas.Mensagem)
def deletar_anamnese(
    anamnese_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("delete_anamneses")),
):
    if not crud.deletar_anamnese(ctx.escopo, anamnese_id):
        raise HTTPException(status_code=404, detail="Anamnese não encontrada")
    return {"success": True, "message": "Anamnese excluída com sucesso"}
