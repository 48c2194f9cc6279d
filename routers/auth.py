# routers/auth.py
"""
Router de autenticação via Sistema 1 (SSO)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

import schemas
from auth import get_current_user
from sistema1 import Sistema1Client, Sistema1Error, get_sistema1

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Autenticação"])


@router.post("/login")
def login(dados: schemas.LoginRequest, sistema1: Sistema1Client = Depends(get_sistema1)):
    """Autentica no Sistema 1 e devolve o usuário (com tenant) e o token SSO do produto."""
    try:
        resultado = sistema1.sso_login(dados.email, dados.password)
    except Sistema1Error as e:
        logger.warning(f"Login recusado para {dados.email}: {e}")
        codigo = e.status_code if e.status_code in (401, 403) else status.HTTP_401_UNAUTHORIZED
        raise HTTPException(status_code=codigo, detail=str(e))

    usuario = dict(resultado["user"])
    usuario["token"] = resultado["token"]
    return {"success": True, "data": {"user": usuario, "token": resultado["token"], "config": resultado.get("config")}}


@router.get("/validate", response_model=schemas.Resposta[schemas.UsuarioAutenticado])
def validar_sessao(current_user: schemas.UsuarioAutenticado = Depends(get_current_user)):
    """Confirma que os headers de sessão ainda são válidos e devolve o usuário."""
    return {"success": True, "data": current_user}
