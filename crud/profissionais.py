# crud/profissionais.py
"""
CRUD para gestão de profissionais (terapeutas)
"""

from __future__ import annotations
import logging
from typing import Optional, List

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import ConflitoError, aplicar_atualizacao, normalizar_cpf, vazio_para_none

logger = logging.getLogger(__name__)


def profissional_do_usuario(escopo: EscopoTenant, usuario_id: str) -> Optional[models.Profissional]:
    """Profissional ativo vinculado ao usuário do Sistema 1, se houver."""
    return escopo.query(
        models.Profissional, models.Profissional.usuario_id == usuario_id, apenas_ativos=True
    ).first()


def _verificar_duplicidade(escopo: EscopoTenant, cpf: Optional[str], email: Optional[str], ignorar_id: Optional[str] = None):
    if cpf:
        q = escopo.query(models.Profissional, models.Profissional.cpf == cpf, apenas_ativos=True)
        if ignorar_id:
            q = q.filter(models.Profissional.id != ignorar_id)
        if q.first():
            raise ConflitoError("Já existe um profissional com este CPF")
    if email:
        q = escopo.query(models.Profissional, models.Profissional.email == email, apenas_ativos=True)
        if ignorar_id:
            q = q.filter(models.Profissional.id != ignorar_id)
        if q.first():
            raise ConflitoError("Já existe um profissional com este email")


def listar_profissionais(escopo: EscopoTenant) -> List[models.Profissional]:
    return escopo.query(models.Profissional, apenas_ativos=True).order_by(models.Profissional.nome).all()


def buscar_profissional_por_id(escopo: EscopoTenant, profissional_id: str) -> Optional[models.Profissional]:
    return escopo.buscar(models.Profissional, profissional_id)


def criar_profissional(escopo: EscopoTenant, dados: schemas.ProfissionalCreate) -> models.Profissional:
    valores = dados.model_dump()
    valores["cpf"] = normalizar_cpf(valores.get("cpf"))
    valores["email"] = vazio_para_none(valores.get("email"))
    _verificar_duplicidade(escopo, valores["cpf"], valores["email"])

    profissional = escopo.adicionar(models.Profissional(**valores))
    escopo.salvar(profissional)
    logger.info(f"Profissional {profissional.id} criado no tenant {escopo.tenant_id}")
    return profissional


def atualizar_profissional(escopo: EscopoTenant, profissional_id: str, dados: schemas.ProfissionalUpdate) -> Optional[models.Profissional]:
    profissional = escopo.buscar(models.Profissional, profissional_id)
    if not profissional:
        return None

    valores = dados.model_dump(exclude_unset=True)
    if "cpf" in valores:
        valores["cpf"] = normalizar_cpf(valores["cpf"])
    if "email" in valores:
        valores["email"] = vazio_para_none(valores["email"])
    _verificar_duplicidade(escopo, valores.get("cpf"), valores.get("email"), ignorar_id=profissional.id)

    aplicar_atualizacao(profissional, valores)
    escopo.salvar(profissional)
    logger.info(f"Profissional {profissional_id} atualizado")
    return profissional


def desativar_profissional(escopo: EscopoTenant, profissional_id: str) -> bool:
    profissional = escopo.buscar(models.Profissional, profissional_id)
    if not profissional:
        return False
    profissional.ativo = False
    escopo.salvar()
    logger.info(f"Profissional {profissional_id} desativado")
    return True


def vincular_usuario(escopo: EscopoTenant, profissional_id: str, usuario_id: Optional[str]) -> models.Profissional:
    """Associa (ou desassocia, com `usuario_id` nulo) um usuário do Sistema 1 a um profissional."""
    profissional = escopo.obter(models.Profissional, profissional_id, "Profissional não encontrado")

    if usuario_id:
        outro = escopo.query(
            models.Profissional,
            models.Profissional.usuario_id == usuario_id,
            models.Profissional.id != profissional.id,
            apenas_ativos=True,
        ).first()
        if outro:
            raise ConflitoError(f"Usuário já está vinculado ao profissional {outro.nome}")

    profissional.usuario_id = usuario_id
    escopo.salvar(profissional)
    logger.info(f"Profissional {profissional_id} vinculado ao usuário {usuario_id}")
    return profissional


def mapa_vinculos(escopo: EscopoTenant) -> dict:
    """usuario_id -> profissional_id para os profissionais ativos do tenant."""
    return {
        p.usuario_id: p.id
        for p in escopo.query(models.Profissional, models.Profissional.usuario_id.isnot(None), apenas_ativos=True)
    }

