# routers/usuarios_sistema1.py
"""
Router para usuários do Sistema 1 e vínculo com profissionais da clínica
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

import schemas
import crud
from auth import ContextoRequisicao, exige_permissao
from sistema1 import Sistema1Client, Sistema1Error, get_sistema1

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/usuarios-sistema1", tags=["Usuários Sistema 1"])


@router.get("")
def listar_usuarios(
    ctx: ContextoRequisicao = Depends(exige_permissao("manage_users")),
    sistema1: Sistema1Client = Depends(get_sistema1),
):
    """Lista os usuários da clínica no Sistema 1, indicando o profissional vinculado a cada um."""
    try:
        usuarios = sistema1.listar_usuarios(ctx.escopo.tenant_id, ctx.usuario.token)
    except Sistema1Error as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Erro ao consultar o Sistema 1: {e}")

    vinculos = crud.mapa_vinculos(ctx.escopo)
    for usuario in usuarios:
        usuario["profissionalId"] = vinculos.get(usuario.get("id"))
    return {"success": True, "data": usuarios}


@router.post("", status_code=status.HTTP_201_CREATED)
def criar_usuario(
    dados: schemas.UsuarioSistema1Create,
    ctx: ContextoRequisicao = Depends(exige_permissao("manage_users")),
    sistema1: Sistema1Client = Depends(get_sistema1),
):
    payload = dados.model_dump(exclude_none=True)
    payload["tenantId"] = ctx.escopo.tenant_id
    try:
        usuario = sistema1.criar_usuario(payload, ctx.usuario.token)
    except Sistema1Error as e:
        codigo = e.status_code if 400 <= e.status_code < 500 else status.HTTP_502_BAD_GATEWAY
        raise HTTPException(status_code=codigo, detail=str(e))
    logger.info(f"Usuário {dados.email} criado no Sistema 1 para o tenant {ctx.escopo.tenant_id}")
    return {"success": True, "data": usuario, "message": "Usuário criado com sucesso"}


@router.post("/vincular", response_model=schemas.Resposta[schemas.ProfissionalResponse])
def vincular_usuario(
    dados: schemas.VinculoUsuarioRequest,
    ctx: ContextoRequisicao = Depends(exige_permissao("manage_users")),
):
    """Vincula um usuário do Sistema 1 a um profissional (usuarioId nulo desfaz o vínculo)."""
    profissional = crud.vincular_usuario(ctx.escopo, dados.profissional_id, dados.usuario_id)
    mensagem = "Vínculo removido" if dados.usuario_id is None else "Usuário vinculado ao profissional"
    return {"success": True, "data": profissional, "message": mensagem}
