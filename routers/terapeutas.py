# routers/terapeutas.py
"""
Router para gestão de profissionais (terapeutas)
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/terapeutas", tags=["Terapeutas"])


@router.get("", response_model=schemas.Resposta[List[schemas.ProfissionalResponse]])
def listar_terapeutas(ctx: ContextoRequisicao = Depends(exige_permissao("view_professionals"))):
    return {"success": True, "data": crud.listar_profissionais(ctx.escopo)}


@router.post("", response_model=schemas.Resposta[schemas.ProfissionalResponse], status_code=status.HTTP_201_CREATED)
def criar_terapeuta(
    profissional_data: schemas.ProfissionalCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_professionals")),
):
    profissional = crud.criar_profissional(ctx.escopo, profissional_data)
    return {"success": True, "data": profissional, "message": "Terapeuta cadastrado com sucesso"}


@router.get("/{profissional_id}", response_model=schemas.Resposta[schemas.ProfissionalResponse])
def obter_terapeuta(
    profissional_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("view_professionals")),
):
    profissional = crud.buscar_profissional_por_id(ctx.escopo, profissional_id)
    if not profissional:
        raise HTTPException(status_code=404, detail="Terapeuta não encontrado")
    return {"success": True, "data": profissional}


@router.put("/{profissional_id}", response_model=schemas.Resposta[schemas.ProfissionalResponse])
def atualizar_terapeuta(
    profissional_id: str,
    update_data: schemas.ProfissionalUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_professionals")),
):
    profissional = crud.atualizar_profissional(ctx.escopo, profissional_id, update_data)
    if not profissional:
        raise HTTPException(status_code=404, detail="Terapeuta não encontrado")
    return {"success": True, "data": profissional, "message": "Terapeuta atualizado com sucesso"}


@router.delete("/{profissional_id}", response_model=schemas.Mensagem)
def desativar_terapeuta(
    profissional_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("delete_professionals")),
):
    if not crud.desativar_profissional(ctx.escopo, profissional_id):
        raise HTTPException(status_code=404, detail="Terapeuta não encontrado")
    return {"success": True, "message": "Terapeuta desativado com sucesso"}
