# routers/curriculum.py
"""
Router para curriculums (sequências de atividades)
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status, Query

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/curriculum", tags=["Curriculum"])


@router.post("/atribuir", response_model=schemas.Resposta[schemas.AtribuicaoCurriculumResponse], status_code=status.HTTP_201_CREATED)
def atribuir_curriculum(
    dados: schemas.AtribuicaoCurriculumCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_activities")),
):
    atribuicao = crud.atribuir(ctx.escopo, "curriculum", dados.paciente_id, dados.curriculum_id, ctx.usuario.id)
    return {"success": True, "data": atribuicao, "message": "Curriculum atribuído ao paciente"}


@router.get("/atribuir", response_model=schemas.Resposta[List[schemas.AtribuicaoCurriculumResponse]])
def listar_curriculums_atribuidos(
    paciente_id: str = Query(..., alias="pacienteId"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_activities")),
):
    return {"success": True, "data": crud.listar_atribuicoes(ctx.escopo, "curriculum", paciente_id)}


@router.delete("/atribuir", response_model=schemas.Mensagem)
def remover_atribuicao_curriculum(
    atribuicao_id: str = Query(..., alias="id"),
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
):
    if not crud.remover_atribuicao(ctx.escopo, "curriculum", atribuicao_id):
        raise HTTPException(status_code=404, detail="Atribuição não encontrada")
    return {"success": True, "message": "Atribuição removida com sucesso"}


@router.get("", response_model=schemas.Resposta[List[schemas.CurriculumResponse]])
def listar_curriculums(ctx: ContextoRequisicao = Depends(exige_permissao("view_activities"))):
    return {"success": True, "data": crud.listar_curriculums(ctx.escopo)}


@router.post("", response_model=schemas.Resposta[schemas.CurriculumResponse], status_code=status.HTTP_201_CREATED)
def criar_curriculum(
    curriculum_data: schemas.CurriculumCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_activities")),
):
    curriculum = crud.criar_curriculum(ctx.escopo, curriculum_data)
    return {"success": True, "data": curriculum, "message": "Curriculum criado com sucesso"}


@router.get("/{curriculum_id}", response_model=schemas.Resposta[schemas.CurriculumResponse])
def obter_curriculum(
    curriculum_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("view_activities")),
):
    curriculum = crud.buscar_curriculum_por_id(ctx.escopo, curriculum_id)
    if not curriculum:
        raise HTTPException(status_code=404, detail="Curriculum não encontrado")
    return {"success": True, "data": curriculum}


@router.put("/{curriculum_id}", response_model=schemas.Resposta[schemas.CurriculumResponse])
def atualizar_curriculum(
    curriculum_id: str,
    update_data: schemas.CurriculumUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
):
    curriculum = crud.atualizar_curriculum(ctx.escopo, curriculum_id, update_data)
    if not curriculum:
        raise HTTPException(status_code=404, detail="Curriculum não encontrado")
    return {"success": True, "data": curriculum}


@router.delete("/{curriculum_id}", response_model=schemas.Mensagem)
def desativar_curriculum(
    curriculum_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("delete_activities")),
):
    if not crud.desativar_curriculum(ctx.escopo, curriculum_id):
        raise HTTPException(status_code=404, detail="Curriculum não encontrado")
    return {"success": True, "message": "Curriculum desativado com sucesso"}
