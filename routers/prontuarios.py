# routers/prontuarios.py
"""
Router para prontuários (evolução clínica por sessão)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/prontuarios", tags=["Prontuários"])


@router.get("", response_model=schemas.Resposta[List[schemas.ProntuarioResponse]])
def listar_prontuarios(
    paciente_id: Optional[str] = Query(None, alias="pacienteId"),
    profissional_id: Optional[str] = Query(None, alias="profissionalId"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_medical_records")),
):
    prontuarios = crud.listar_prontuarios(ctx.escopo, paciente_id, profissional_id)
    return {"success": True, "data": prontuarios}


@router.post("", response_model=schemas.Resposta[schemas.ProntuarioResponse], status_code=status.HTTP_201_CREATED)
def criar_prontuario(
    prontuario_data: schemas.ProntuarioCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_medical_records")),
):
    prontuario = crud.criar_prontuario(ctx.escopo, prontuario_data)
    return {"success": True, "data": prontuario, "message": "Prontuário registrado com sucesso"}


@router.get("/{prontuario_id}", response_model=schemas.Resposta[schemas.ProntuarioResponse])
def obter_prontuario(
    prontuario_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("view_medical_records")),
):
    prontuario = crud.buscar_prontuario_por_id(ctx.escopo, prontuario_id)
    if not prontuario:
        raise HTTPException(status_code=404, detail="Prontuário não encontrado")
    return {"success": True, "data": prontuario}


@router.put("/{prontuario_id}", response_model=schemas.Resposta[schemas.ProntuarioResponse])
def atualizar_prontuario(
    prontuario_id: str,
    update_data: schemas.ProntuarioUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_medical_records")),
):
    prontuario = crud.atualizar_prontuario(ctx.escopo, prontuario_id, update_data)
    if not prontuario:
        raise HTTPException(status_code=404, detail="Prontuário não encontrado")
    return {"success": True, "data": prontuario}


@router.delete("/{prontuario_id}", response_model=schemas.Mensagem)
def deletar_prontuario(
    prontuario_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("delete_medical_records")),
):
    if not crud.deletar_prontuario(ctx.escopo, prontuario_id):
        raise HTTPException(status_code=404, detail="Prontuário não encontrado")
    return {"success": True, "message": "Prontuário excluído com sucesso"}
