# routers/avaliacoes.py
"""
Router para avaliações (protocolos), seus itens e a atribuição a pacientes
"""

from typing import List, Optional, Type, Union

from fastapi import APIRouter, Depends, HTTPException, status, Query
from pydantic import BaseModel

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao

router = APIRouter(prefix="/avaliacoes", tags=["Avaliações"])

# =================================================================================
# ATRIBUIÇÕES
# =================================================================================

@router.post("/atribuir", response_model=schemas.Resposta[schemas.AtribuicaoAvaliacaoResponse], status_code=status.HTTP_201_CREATED)
def atribuir_avaliacao(
    dados: schemas.AtribuicaoAvaliacaoCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_activities")),
):
    atribuicao = crud.atribuir(ctx.escopo, "avaliacao", dados.paciente_id, dados.avaliacao_id, ctx.usuario.id)
    return {"success": True, "data": atribuicao, "message": "Avaliação atribuída ao paciente"}


@router.get("/atribuir", response_model=schemas.Resposta[List[schemas.AtribuicaoAvaliacaoResponse]])
def listar_avaliacoes_atribuidas(
    paciente_id: str = Query(..., alias="pacienteId"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_activities")),
):
    return {"success": True, "data": crud.listar_atribuicoes(ctx.escopo, "avaliacao", paciente_id)}


@router.delete("/atribuir", response_model=schemas.Mensagem)
def remover_atribuicao_avaliacao(
    atribuicao_id: str = Query(..., alias="id"),
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
):
    if not crud.remover_atribuicao(ctx.escopo, "avaliacao", atribuicao_id):
        raise HTTPException(status_code=404, detail="Atribuição não encontrada")
    return {"success": True, "message": "Atribuição removida com sucesso"}

# =================================================================================
# AVALIAÇÕES
# =================================================================================

@router.get("", response_model=schemas.Resposta[Union[schemas.AvaliacaoDetalhe, List[schemas.AvaliacaoResponse]]])
def listar_avaliacoes(
    avaliacao_id: Optional[str] = Query(None, alias="id"),
    ctx: ContextoRequisicao = Depends(exige_permissao("view_activities")),
):
    """Sem `id`, lista as avaliações ativas; com `id`, devolve a avaliação completa com seus itens."""
    if avaliacao_id:
        avaliacao = crud.buscar_avaliacao_por_id(ctx.escopo, avaliacao_id)
        if not avaliacao:
            raise HTTPException(status_code=404, detail="Avaliação não encontrada")
        return {"success": True, "data": schemas.AvaliacaoDetalhe.model_validate(avaliacao)}
    return {"success": True, "data": crud.listar_avaliacoes(ctx.escopo)}


@router.post("", response_model=schemas.Resposta[schemas.AvaliacaoResponse], status_code=status.HTTP_201_CREATED)
def criar_avaliacao(
    avaliacao_data: schemas.AvaliacaoCreate,
    ctx: ContextoRequisicao = Depends(exige_permissao("create_activities")),
):
    avaliacao = crud.criar_avaliacao(ctx.escopo, avaliacao_data)
    return {"success": True, "data": avaliacao, "message": "Avaliação criada com sucesso"}


@router.put("/{avaliacao_id}", response_model=schemas.Resposta[schemas.AvaliacaoResponse])
def atualizar_avaliacao(
    avaliacao_id: str,
    update_data: schemas.AvaliacaoUpdate,
    ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
):
    avaliacao = crud.atualizar_avaliacao(ctx.escopo, avaliacao_id, update_data)
    if not avaliacao:
        raise HTTPException(status_code=404, detail="Avaliação não encontrada")
    return {"success": True, "data": avaliacao}


@router.delete("/{avaliacao_id}", response_model=schemas.Mensagem)
def desativar_avaliacao(
    avaliacao_id: str,
    ctx: ContextoRequisicao = Depends(exige_permissao("delete_activities")),
):
    if not crud.desativar_avaliacao(ctx.escopo, avaliacao_id):
        raise HTTPException(status_code=404, detail="Avaliação não encontrada")
    return {"success": True, "message": "Avaliação desativada com sucesso"}

# =================================================================================
# ITENS DA AVALIAÇÃO (níveis, habilidades, pontuações e tarefas)
# =================================================================================

def _registrar_itens(recurso: str, nome: str, schema_criacao: Type[BaseModel],
                     schema_atualizacao: Type[BaseModel], schema_resposta: Type[BaseModel]) -> None:
    modelo = crud.ITENS_AVALIACAO[recurso]

    @router.get(f"/{{avaliacao_id}}/{recurso}", response_model=schemas.Resposta[List[schema_resposta]], name=f"listar_{recurso}")
    def listar(
        avaliacao_id: str,
        ctx: ContextoRequisicao = Depends(exige_permissao("view_activities")),
    ):
        return {"success": True, "data": crud.listar_itens(ctx.escopo, modelo, avaliacao_id)}

    @router.post(f"/{{avaliacao_id}}/{recurso}", response_model=schemas.Resposta[schema_resposta],
                 status_code=status.HTTP_201_CREATED, name=f"criar_{recurso}")
    def criar(
        avaliacao_id: str,
        dados: schema_criacao,
        ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
    ):
        return {"success": True, "data": crud.criar_item(ctx.escopo, modelo, avaliacao_id, dados)}

    @router.put(f"/{{avaliacao_id}}/{recurso}/{{item_id}}", response_model=schemas.Resposta[schema_resposta],
                name=f"atualizar_{recurso}")
    def atualizar(
        avaliacao_id: str,
        item_id: str,
        dados: schema_atualizacao,
        ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
    ):
        item = crud.atualizar_item(ctx.escopo, modelo, avaliacao_id, item_id, dados)
        if not item:
            raise HTTPException(status_code=404, detail=f"{nome} não encontrado(a)")
        return {"success": True, "data": item}

    @router.delete(f"/{{avaliacao_id}}/{recurso}/{{item_id}}", response_model=schemas.Mensagem, name=f"deletar_{recurso}")
    def deletar(
        avaliacao_id: str,
        item_id: str,
        ctx: ContextoRequisicao = Depends(exige_permissao("edit_activities")),
    ):
        if not crud.deletar_item(ctx.escopo, modelo, avaliacao_id, item_id):
            raise HTTPException(status_code=404, detail=f"{nome} não encontrado(a)")
        return {"success": True, "message": f"{nome} removido(a) com sucesso"}


_registrar_itens("niveis", "Nível", schemas.NivelIn, schemas.NivelUpdate, schemas.NivelResponse)
_registrar_itens("habilidades", "Habilidade", schemas.HabilidadeIn, schemas.HabilidadeUpdate, schemas.HabilidadeResponse)
_registrar_itens("pontuacoes", "Pontuação", schemas.PontuacaoAvaliacaoIn, schemas.PontuacaoAvaliacaoUpdate,
                 schemas.PontuacaoAvaliacaoResponse)
_registrar_itens("tarefas", "Tarefa", schemas.TarefaIn, schemas.TarefaUpdate, schemas.TarefaResponse)
