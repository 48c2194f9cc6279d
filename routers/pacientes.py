# routers/pacientes.py
"""
Router para gestão de pacientes
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/pacientes", tags=["Pacientes"])


@router.get("", response_model=schemas.Resposta[List[schemas.PacienteResponse]])
def listar_pacientes(
    busca: Optional[str] = Query(None, description="Trecho do nome ou CPF"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_patients")),
):
    """Lista os pacientes ativos. Terapeutas veem apenas os próprios pacientes."""
    pacientes = crud.listar_pacientes(ctx.escopo, ctx.restricao_profissional(), busca)
    return {"success": True, "data": pacientes}


@router.post("", response_model=schemas.Resposta[schemas.PacienteResponse], status_code=status.HTTP_201_CREATED)
def criar_paciente(
    paciente_data: schemas.PacienteCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_patients")),
):
    paciente = crud.criar_paciente(ctx.escopo, paciente_data)
    return {"success": True, "data": paciente, "message": "Paciente cadastrado com sucesso"}


@router.get("/{paciente_id}", response_model=schemas.Resposta[schemas.PacienteResponse])
def obter_paciente(
    paciente_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("view_patients")),
):
    paciente = crud.buscar_paciente_por_id(ctx.escopo, paciente_id)
    if not paciente:
        raise HTTPException(status_code=404, detail="Paciente não encontrado")
    return {"success": True, "data": paciente}


@router.put("/{paciente_id}", response_model=schemas.Resposta[schemas.PacienteResponse])
def atualizar_paciente(
    paciente_id: str,
    update_data: schemas.PacienteUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_patients")),
):
    paciente = crud.atualizar_paciente(ctx.escopo, paciente_id, update_data)
    if not paciente:
        raise HTTPException(status_code=404, detail="Paciente não encontrado")
    return {"success": True, "data": paciente, "message": "Paciente atualizado com sucesso"}


@router.delete("/{paciente_id}", response_model=schemas.Mensagem)
def desativar_paciente(
    paciente_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("delete_patients")),
):
    """Desativa o paciente (soft delete)."""
    if not crud.desativar_paciente(ctx.escopo, paciente_id):
        raise HTTPException(status_code=404, detail="Paciente não encontrado")
    return {"success": True, "message": "Paciente desativado com sucesso"}
