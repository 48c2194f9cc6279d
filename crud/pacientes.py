# crud/pacientes.py
"""
CRUD para gestão de pacientes
"""

from __future__ import annotations
import logging
from typing import Optional, List

from sqlalchemy import or_

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import ConflitoError, NaoEncontradoError, aplicar_atualizacao, normalizar_cpf, vazio_para_none

logger = logging.getLogger(__name__)


def _normalizar_plano(plano: Optional[str]) -> Optional[str]:
    plano = vazio_para_none(plano)
    if plano and plano.lower() == "particular":
        return None
    return plano


def _verificar_cpf_duplicado(escopo: EscopoTenant, cpf: Optional[str], ignorar_id: Optional[str] = None):
    if not cpf:
        return
    q = escopo.query(models.Paciente, models.Paciente.cpf == cpf, apenas_ativos=True)
    if ignorar_id:
        q = q.filter(models.Paciente.id != ignorar_id)
    if q.first():
        raise ConflitoError("Já existe um paciente com este CPF")


def _verificar_profissional(escopo: EscopoTenant, profissional_id: Optional[str]):
    if profissional_id and not escopo.buscar(models.Profissional, profissional_id, apenas_ativos=True):
        raise NaoEncontradoError("Profissional não encontrado")


def listar_pacientes(escopo: EscopoTenant, profissional_id: Optional[str] = None, busca: Optional[str] = None) -> List[models.Paciente]:
    """
    Lista pacientes ativos ordenados por nome.

    Args:
        escopo: Escopo do tenant
        profissional_id: Restringe aos pacientes do profissional (usuários não-admin)
        busca: Trecho do nome ou CPF
    """
    q = escopo.query(models.Paciente, apenas_ativos=True)
    if profissional_id is not None:
        q = q.filter(models.Paciente.profissional_id == profissional_id)
    if busca:
        termo = f"%{busca.strip()}%"
        cpf = normalizar_cpf(busca)
        filtros = [models.Paciente.nome.ilike(termo)]
        if cpf:
            filtros.append(models.Paciente.cpf.like(f"%{cpf}%"))
        q = q.filter(or_(*filtros))
    return q.order_by(models.Paciente.nome).all()


def buscar_paciente_por_id(escopo: EscopoTenant, paciente_id: str) -> Optional[models.Paciente]:
    return escopo.buscar(models.Paciente, paciente_id)


def criar_paciente(escopo: EscopoTenant, dados: schemas.PacienteCreate) -> models.Paciente:
    valores = dados.model_dump()
    valores["cpf"] = normalizar_cpf(valores.get("cpf"))
    valores["plano_saude"] = _normalizar_plano(valores.get("plano_saude"))
    valores["email"] = vazio_para_none(valores.get("email"))

    _verificar_cpf_duplicado(escopo, valores["cpf"])
    _verificar_profissional(escopo, valores.get("profissional_id"))

    paciente = escopo.adicionar(models.Paciente(**valores))
    escopo.salvar(paciente)
    logger.info(f"Paciente {paciente.id} criado no tenant {escopo.tenant_id}")
    return paciente


def atualizar_paciente(escopo: EscopoTenant, paciente_id: str, dados: schemas.PacienteUpdate) -> Optional[models.Paciente]:
    paciente = escopo.buscar(models.Paciente, paciente_id)
    if not paciente:
        return None

    valores = dados.model_dump(exclude_unset=True)
    if "cpf" in valores:
        valores["cpf"] = normalizar_cpf(valores["cpf"])
        _verificar_cpf_duplicado(escopo, valores["cpf"], ignorar_id=paciente.id)
    if "plano_saude" in valores:
        valores["plano_saude"] = _normalizar_plano(valores["plano_saude"])
    if "email" in valores:
        valores["email"] = vazio_para_none(valores["email"])
    if valores.get("profissional_id"):
        _verificar_profissional(escopo, valores["profissional_id"])

    aplicar_atualizacao(paciente, valores)
    escopo.salvar(paciente)
    logger.info(f"Paciente {paciente_id} atualizado")
    return paciente


def desativar_paciente(escopo: EscopoTenant, paciente_id: str) -> bool:
    """Soft delete: o paciente some das listagens, mas o histórico continua referenciável."""
    paciente = escopo.buscar(models.Paciente, paciente_id)
    if not paciente:
        return False
    paciente.ativo = False
    escopo.salvar()
    logger.info(f"Paciente {paciente_id} desativado")
    return True
