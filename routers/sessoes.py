# routers/sessoes.py
"""
Router para as sessões de aplicação: de atividade (/sessoes), de curriculum
(/sessoes-curriculum) e de avaliação (/sessoes-avaliacao).
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status, Query, Response

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(tags=["Sessões"])


def _status(valor: Optional[schemas.StatusSessao]) -> Optional[str]:
    return valor.value if valor else None

# =================================================================================
# SESSÕES DE ATIVIDADE
# =================================================================================

@router.post("/sessoes", response_model=schemas.Resposta[schemas.SessaoAtividadeResponse], status_code=status.HTTP_201_CREATED)
def iniciar_sessao(
    dados: schemas.SessaoAtividadeCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_sessions")),
):
    sessao, total = crud.iniciar_sessao_atividade(ctx.escopo, dados, ctx.usuario.id, ctx.is_admin)
    return {"success": True, "data": sessao, "message": f"Sessão iniciada com {total} instruções"}


@router.get("/sessoes", response_model=schemas.Resposta[Union[schemas.SessaoAtividadeResponse, List[schemas.SessaoAtividadeResponse]]])
def listar_sessoes(
    sessao_id: Optional[str] = Query(None, alias="id"),
    paciente_id: Optional[str] = Query(None, alias="pacienteId"),
    status_sessao: Optional[schemas.StatusSessao] = Query(None, alias="status"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_sessions")),
):
    """Com `id`, devolve a sessão com as avaliações na ordem das instruções; sem `id`, lista as sessões."""
    if sessao_id:
        sessao = crud.buscar_sessao_atividade(ctx.escopo, sessao_id)
        if not sessao:
            raise HTTPException(status_code=404, detail="Sessão não encontrada")
        detalhe = schemas.SessaoAtividadeResponse.model_validate(sessao)
        detalhe.avaliacoes.sort(key=lambda a: a.instrucao.ordem if a.instrucao else 0)
        return {"success": True, "data": detalhe}

    sessoes = crud.listar_sessoes_atividade(
        ctx.escopo, ctx.restricao_profissional(), paciente_id, _status(status_sessao)
    )
    return {"success": True, "data": sessoes}


@router.post("/sessoes/avaliar", response_model=schemas.Resposta[schemas.AvaliacaoInstrucaoResponse])
def avaliar_instrucao(
    dados: schemas.AvaliarInstrucaoRequest,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_sessions")),
):
    avaliacao = crud.avaliar_instrucao(ctx.escopo, dados, ctx.restricao_profissional())
    return {"success": True, "data": avaliacao, "message": "Instrução avaliada"}


@router.post("/sessoes/finalizar", response_model=schemas.Resposta[schemas.SessaoFinalizadaResponse])
def finalizar_sessao(
    dados: schemas.FinalizarSessaoRequest,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_sessions")),
):
    sessao, estatisticas = crud.finalizar_sessao_atividade(ctx.escopo, dados, ctx.restricao_profissional())
    return {
        "success": True,
        "data": {"sessao": sessao, "estatisticas": estatisticas},
        "message": "Sessão finalizada com sucesso",
    }

# =================================================================================
# SESSÕES DE CURRICULUM
# =================================================================================

@router.post("/sessoes-curriculum", response_model=schemas.SessaoCurriculumIniciadaResposta, status_code=status.HTTP_201_CREATED)
def iniciar_sessao_curriculum(
    dados: schemas.SessaoCurriculumCreate,
    response: Response,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_sessions")),
):
    """Inicia a sessão; se já houver uma em andamento para o paciente e o curriculum, ela é devolvida (200)."""
    sessao, existente = crud.iniciar_sessao_curriculum(ctx.escopo, dados, ctx.usuario.id, ctx.is_admin)
    if existente:
        response.status_code = status.HTTP_200_OK
        return {"success": True, "data": sessao, "existente": True, "message": "Sessão em andamento retomada"}
    return {"success": True, "data": sessao, "existente": False, "message": "Sessão de curriculum iniciada"}


@router.get("/sessoes-curriculum",
            response_model=schemas.Resposta[Union[schemas.SessaoCurriculumResponse, List[schemas.SessaoCurriculumResponse]]])
def listar_sessoes_curriculum(
    sessao_id: Optional[str] = Query(None, alias="id"),
    paciente_id: Optional[str] = Query(None, alias="pacienteId"),
    status_sessao: Optional[schemas.StatusSessao] = Query(None, alias="status"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_sessions")),
):
    if sessao_id:
        sessao = crud.buscar_sessao_curriculum(ctx.escopo, sessao_id)
        if not sessao:
            raise HTTPException(status_code=404, detail="Sessão não encontrada")
        return {"success": True, "data": schemas.SessaoCurriculumResponse.model_validate(sessao)}

    sessoes = crud.listar_sessoes_curriculum(
        ctx.escopo, ctx.restricao_profissional(), paciente_id, _status(status_sessao)
    )
    return {"success": True, "data": sessoes}


@router.post("/sessoes-curriculum/avaliar", response_model=schemas.Resposta[schemas.AvaliacaoCurriculumResponse])
def avaliar_instrucao_curriculum(
    dados: schemas.AvaliarCurriculumRequest,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_sessions")),
):
    avaliacao = crud.avaliar_instrucao_curriculum(ctx.escopo, dados, ctx.restricao_profissional())
    return {"success": True, "data": avaliacao, "message": "Instrução avaliada"}


@router.post("/sessoes-curriculum/finalizar", response_model=schemas.Resposta[schemas.SessaoCurriculumFinalizadaResponse])
def finalizar_sessao_curriculum(
    dados: schemas.FinalizarSessaoRequest,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_sessions")),
):
    sessao, estatisticas = crud.finalizar_sessao_curriculum(ctx.escopo, dados, ctx.restricao_profissional())
    return {
        "success": True,
        "data": {"sessao": sessao, "estatisticas": estatisticas},
        "message": "Sessão finalizada com sucesso",
    }

# =================================================================================
# SESSÕES DE AVALIAÇÃO
# =================================================================================

@router.post("/sessoes-avaliacao", response_model=schemas.Resposta[schemas.SessaoAvaliacaoResponse], status_code=status.HTTP_201_CREATED)
def iniciar_sessao_avaliacao(
    dados: schemas.SessaoAvaliacaoCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_sessions")),
):
    sessao, total = crud.iniciar_sessao_avaliacao(ctx.escopo, dados, ctx.usuario.id, ctx.is_admin)
    return {"success": True, "data": sessao, "message": f"Avaliação iniciada com {total} tarefas"}


@router.get("/sessoes-avaliacao",
            response_model=schemas.Resposta[Union[schemas.SessaoAvaliacaoResponse, List[schemas.SessaoAvaliacaoResponse]]])
def listar_sessoes_avaliacao(
    sessao_id: Optional[str] = Query(None, alias="id"),
    paciente_id: Optional[str] = Query(None, alias="pacienteId"),
    status_sessao: Optional[schemas.StatusSessao] = Query(None, alias="status"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_sessions")),
):
    if sessao_id:
        sessao = crud.buscar_sessao_avaliacao(ctx.escopo, sessao_id)
        if not sessao:
            raise HTTPException(status_code=404, detail="Sessão não encontrada")
        return {"success": True, "data": schemas.SessaoAvaliacaoResponse.model_validate(sessao)}

    sessoes = crud.listar_sessoes_avaliacao(
        ctx.escopo, ctx.restricao_profissional(), paciente_id, _status(status_sessao)
    )
    return {"success": True, "data": sessoes}


@router.put("/sessoes-avaliacao", response_model=schemas.Resposta[schemas.SessaoAvaliacaoResponse])
def responder_tarefa(
    dados: schemas.ResponderTarefaRequest,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_sessions")),
):
    """Grava a resposta de uma tarefa; com `finalizar`, encerra a sessão."""
    sessao = crud.responder_tarefa(ctx.escopo, dados, ctx.restricao_profissional())
    mensagem = "Avaliação finalizada" if dados.finalizar else "Resposta registrada"
    return {"success": True, "data": sessao, "message": mensagem}
