# routers/cadastros.py
"""
Router para salas e procedimentos da clínica
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(tags=["Salas", "Procedimentos"])

# =================================================================================
# ENDPOINTS DE SALAS
# =================================================================================

@router.get("/salas", response_model=schemas.Resposta[List[schemas.SalaResponse]])
def listar_salas(ctx: ContextoRequisicao = Depends(exige_permissao("view_patients"))):
    return {"success": True, "data": crud.listar_salas(ctx.escopo)}


@router.post("/salas", response_model=schemas.Resposta[schemas.SalaResponse], status_code=status.HTTP_201_CREATED)
def criar_sala(
    sala_data: schemas.SalaCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("manage_rooms")),
):
    return {"success": True, "data": crud.criar_sala(ctx.escopo, sala_data), "message": "Sala criada com sucesso"}


@router.put("/salas/{sala_id}", response_model=schemas.Resposta[schemas.SalaResponse])
def atualizar_sala(
    sala_id: str,
    update_data: schemas.SalaUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("manage_rooms")),
):
    sala = crud.atualizar_sala(ctx.escopo, sala_id, update_data)
    if not sala:
        raise HTTPException(status_code=404, detail="Sala não encontrada")
    return {"success": True, "data": sala}


@router.delete("/salas/{sala_id}", response_model=schemas.Mensagem)
def deletar_sala(
    sala_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("manage_rooms")),
):
    if not crud.deletar_sala(ctx.escopo, sala_id):
        raise HTTPException(status_code=404, detail="Sala não encontrada")
    return {"success": True, "message": "Sala excluída com sucesso"}

# =================================================================================
# ENDPOINTS DE PROCEDIMENTOS
# =================================================================================

@router.get("/procedimentos", response_model=schemas.Resposta[List[schemas.ProcedimentoResponse]])
def listar_procedimentos(ctx: ContextoRequisicao = Depends(exige_permissao("view_appointments"))):
    return {"success": True, "data": crud.listar_procedimentos(ctx.escopo)}


@router.post("/procedimentos", response_model=schemas.Resposta[schemas.ProcedimentoResponse], status_code=status.HTTP_201_CREATED)
def criar_procedimento(
    procedimento_data: schemas.ProcedimentoCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("manage_procedures")),
):
    return {"success": True, "data": crud.criar_procedimento(ctx.escopo, procedimento_data)}
