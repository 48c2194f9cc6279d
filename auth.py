# auth.py

import base64
import binascii
import json
import logging
from typing import Optional, Dict, FrozenSet

from fastapi import Depends, HTTPException, status, Header
from pydantic import ValidationError
from sqlalchemy.orm import Session

import schemas
import crud
from database import get_db
from sistema1 import Sistema1Client, get_sistema1

logger = logging.getLogger(__name__)

ADMIN_ROLES: FrozenSet[str] = frozenset({"ADMIN", "SUPER_ADMIN"})
TERAPEUTA_ROLES: FrozenSet[str] = ADMIN_ROLES | {"USER", "TERAPEUTA"}

# Tabela de capacidades: ação -> papéis autorizados. Ação ausente = negada.
PERMISSOES: Dict[str, FrozenSet[str]] = {
    "view_patients": TERAPEUTA_ROLES,
    "create_patients": TERAPEUTA_ROLES,
    "edit_patients": TERAPEUTA_ROLES,
    "delete_patients": ADMIN_ROLES,

    "view_professionals": TERAPEUTA_ROLES,
    "create_professionals": ADMIN_ROLES,
    "edit_professionals": ADMIN_ROLES,
    "delete_professionals": ADMIN_ROLES,

    "view_medical_records": TERAPEUTA_ROLES,
    "create_medical_records": TERAPEUTA_ROLES,
    "edit_medical_records": TERAPEUTA_ROLES,
    "delete_medical_records": TERAPEUTA_ROLES,

    "view_activities": TERAPEUTA_ROLES,
    "create_activities": TERAPEUTA_ROLES,
    "edit_activities": TERAPEUTA_ROLES,
    "delete_activities": ADMIN_ROLES,

    "view_sessions": TERAPEUTA_ROLES,
    "create_sessions": TERAPEUTA_ROLES,
    "edit_sessions": TERAPEUTA_ROLES,

    "view_anamneses": TERAPEUTA_ROLES,
    "create_anamneses": TERAPEUTA_ROLES,
    "edit_anamneses": TERAPEUTA_ROLES,
    "delete_anamneses": ADMIN_ROLES,

    "view_appointments": TERAPEUTA_ROLES,
    "create_appointments": TERAPEUTA_ROLES,
    "edit_appointments": TERAPEUTA_ROLES,
    "delete_appointments": ADMIN_ROLES,

    "view_reports": TERAPEUTA_ROLES,
    "view_dashboard": TERAPEUTA_ROLES,
    "upload_files": TERAPEUTA_ROLES,

    "manage_users": ADMIN_ROLES,
    "manage_rooms": ADMIN_ROLES,
    "manage_procedures": ADMIN_ROLES,
}


def tem_permissao(role: Optional[str], acao: str) -> bool:
    return role in PERMISSOES.get(acao, frozenset())


def is_admin(role: Optional[str]) -> bool:
    return role in ADMIN_ROLES


class ContextoRequisicao:
    """Usuário autenticado, escopo de dados do tenant e vínculo profissional da requisição."""

    def __init__(self, usuario: schemas.UsuarioAutenticado, escopo: crud.EscopoTenant):
        self.usuario = usuario
        self.escopo = escopo
        self._profissional = None
        self._profissional_carregado = False

    @property
    def is_admin(self) -> bool:
        return is_admin(self.usuario.role)

    @property
    def profissional(self):
        """Profissional vinculado ao usuário logado (None se não houver)."""
        if not self._profissional_carregado:
            self._profissional = crud.profissional_do_usuario(self.escopo, self.usuario.id)
            self._profissional_carregado = True
        return self._profissional

    def restricao_profissional(self) -> Optional[str]:
        """
        None para admins (sem restrição). Para terapeutas, o ID do profissional
        vinculado; sem vínculo, uma string vazia, que não casa com nenhum registro.
        """
        if self.is_admin:
            return None
        return self.profissional.id if self.profissional else ""


def _decodificar_usuario(x_user_data: str) -> schemas.UsuarioAutenticado:
    bruto = base64.b64decode(x_user_data, validate=False)
    return schemas.UsuarioAutenticado(**json.loads(bruto.decode("utf-8")))


def get_current_user(
    x_user_data: Optional[str] = Header(None, description="Usuário da sessão em JSON codificado em base64."),
    x_auth_token: Optional[str] = Header(None, description="Token SSO emitido pelo Sistema 1."),
    sistema1: Sistema1Client = Depends(get_sistema1),
) -> schemas.UsuarioAutenticado:
    """
    Decodifica o usuário enviado pelo front-end e revalida o token SSO no Sistema 1.
    Qualquer falha resulta em 401.
    """
    nao_autorizado = HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Não autorizado")
    if not x_user_data:
        raise nao_autorizado
    try:
        usuario = _decodificar_usuario(x_user_data)
    except (binascii.Error, UnicodeDecodeError, ValueError, TypeError, ValidationError) as e:
        logger.warning(f"X-User-Data inválido: {e}")
        raise nao_autorizado

    token = x_auth_token or usuario.token
    if not token or not sistema1.validate_sso_token(token):
        logger.warning(f"Token SSO rejeitado para o usuário {usuario.id}")
        raise nao_autorizado

    usuario.token = token
    return usuario


def get_usuario_tenant(
    current_user: schemas.UsuarioAutenticado = Depends(get_current_user),
) -> schemas.UsuarioAutenticado:
    if not current_user.tenant_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuário não está associado a uma clínica"
        )
    return current_user


def get_contexto(
    current_user: schemas.UsuarioAutenticado = Depends(get_usuario_tenant),
    db: Session = Depends(get_db),
) -> ContextoRequisicao:
    return ContextoRequisicao(current_user, crud.EscopoTenant(db, current_user.tenant_id))


def exige_permissao(acao: str):
    """
    Dependência que autoriza a ação pela tabela PERMISSOES e entrega o contexto da requisição.
    """
    def dependencia(ctx: ContextoRequisicao = Depends(get_contexto)) -> ContextoRequisicao:
        if not tem_permissao(ctx.usuario.role, acao):
            logger.warning(f"Usuário {ctx.usuario.id} ({ctx.usuario.role}) sem permissão para '{acao}'")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Acesso negado: você não tem permissão para esta ação."
            )
        return ctx
    return dependencia
