# routers/agendamentos.py
"""
Router para agendamentos da clínica
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/agendamentos", tags=["Agendamentos"])


@router.get("", response_model=schemas.Resposta[List[schemas.AgendamentoResponse]])
def listar_agendamentos(
    profissional_id: Optional[str] = Query(None, alias="profissionalId"),
    paciente_id: Optional[str] = Query(None, alias="pacienteId"),
    status_agendamento: Optional[schemas.StatusAgendamento] = Query(None, alias="status"),
    sala_id: Optional[str] = Query(None, alias="salaId"),
    data_inicio: Optional[schemas.DataHora] = Query(None),
    data_fim: Optional[schemas.DataHora] = Query(None),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_appointments")),
):
    """
    Lista agendamentos com filtros. O filtro de profissional só vale para
    administradores; terapeutas veem apenas a própria agenda.
    """
    restricao = ctx.restricao_profissional()
    agendamentos = crud.listar_agendamentos(
        ctx.escopo,
        profissional_id=profissional_id if restricao is None else restricao,
        paciente_id=paciente_id,
        status=status_agendamento.value if status_agendamento else None,
        sala_id=sala_id,
        data_inicio=data_inicio,
        data_fim=data_fim,
    )
    return {"success": True, "data": agendamentos}


@router.post("", response_model=schemas.Resposta[schemas.AgendamentoResponse], status_code=status.HTTP_201_CREATED)
def criar_agendamento(
    agendamento_data: schemas.AgendamentoCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_appointments")),
):
    agendamento = crud.criar_agendamento(ctx.escopo, agendamento_data)
    return {"success": True, "data": agendamento, "message": "Agendamento criado com sucesso"}


@router.post("/batch", response_model=schemas.AgendamentoLoteResponse)
def criar_agendamentos_em_lote(
    lote_data: schemas.AgendamentoLoteCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_appointments")),
):
    """Cria um agendamento por data informada. Responde 201 se ao menos um foi criado, senão 400."""
    resultado = crud.criar_agendamentos_em_lote(ctx.escopo, lote_data)
    corpo = schemas.AgendamentoLoteResponse.model_validate(resultado, from_attributes=True)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if resultado["success"] else status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(corpo, by_alias=True),
    )


@router.get("/{agendamento_id}", response_model=schemas.Resposta[schemas.AgendamentoResponse])
def obter_agendamento(
    agendamento_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("view_appointments")),
):
    agendamento = crud.buscar_agendamento_por_id(ctx.escopo, agendamento_id)
    if not agendamento:
        raise HTTPException(status_code=404, detail="Agendamento não encontrado")
    return {"success": True, "data": agendamento}


@router.put("/{agendamento_id}", response_model=schemas.Resposta[schemas.AgendamentoResponse])
def atualizar_agendamento(
    agendamento_id: str,
    update_data: schemas.AgendamentoUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_appointments")),
):
    agendamento = crud.atualizar_agendamento(ctx.escopo, agendamento_id, update_data)
    if not agendamento:
        raise HTTPException(status_code=404, detail="Agendamento não encontrado")
    return {"success": True, "data": agendamento, "message": "Agendamento atualizado com sucesso"}


@router.delete("/{agendamento_id}", response_model=schemas.Mensagem)
def deletar_agendamento(
    agendamento_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("delete_appointments")),
):
    if not crud.deletar_agendamento(ctx.escopo, agendamento_id):
        raise HTTPException(status_code=404, detail="Agendamento não encontrado")
    return {"success": True, "message": "Agendamento excluído com sucesso"}
