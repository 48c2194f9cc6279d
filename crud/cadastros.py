# crud/cadastros.py
"""
CRUD de salas e procedimentos
"""

import logging
from typing import Optional, List

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import ConflitoError, aplicar_atualizacao

logger = logging.getLogger(__name__)


# --- Salas ---

def listar_salas(escopo: EscopoTenant) -> List[models.Sala]:
    return escopo.query(models.Sala, apenas_ativos=True).order_by(models.Sala.nome).all()


def criar_sala(escopo: EscopoTenant, dados: schemas.SalaCreate) -> models.Sala:
    sala = escopo.adicionar(models.Sala(**dados.model_dump()))
    escopo.salvar(sala)
    logger.info(f"Sala {sala.id} criada no tenant {escopo.tenant_id}")
    return sala


def atualizar_sala(escopo: EscopoTenant, sala_id: str, dados: schemas.SalaUpdate) -> Optional[models.Sala]:
    sala = escopo.buscar(models.Sala, sala_id)
    if not sala:
        return None
    aplicar_atualizacao(sala, dados.model_dump(exclude_unset=True))
    escopo.salvar(sala)
    return sala


def deletar_sala(escopo: EscopoTenant, sala_id: str) -> bool:
    sala = escopo.buscar(models.Sala, sala_id)
    if not sala:
        return False
    em_uso = escopo.query(models.Agendamento, models.Agendamento.sala_id == sala.id).first()
    if em_uso:
        raise ConflitoError("Sala possui agendamentos e não pode ser excluída. Desative-a.")
    escopo.remover(sala)
    logger.info(f"Sala {sala_id} excluída")
    return True


# --- Procedimentos ---

def listar_procedimentos(escopo: EscopoTenant) -> List[models.Procedimento]:
    return escopo.query(models.Procedimento, apenas_ativos=True).order_by(models.Procedimento.nome).all()


def criar_procedimento(escopo: EscopoTenant, dados: schemas.ProcedimentoCreate) -> models.Procedimento:
    procedimento = escopo.adicionar(models.Procedimento(**dados.model_dump()))
    escopo.salvar(procedimento)
    logger.info(f"Procedimento {procedimento.id} criado no tenant {escopo.tenant_id}")
    return procedimento
