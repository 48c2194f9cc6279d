# crud/anamneses.py
"""
CRUD para anamneses
"""

import logging
from typing import Optional, List

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import aplicar_atualizacao

logger = logging.getLogger(__name__)


def listar_anamneses(escopo: EscopoTenant, paciente_id: Optional[str] = None,
                     status: Optional[str] = None) -> List[models.Anamnese]:
    q = escopo.query(models.Anamnese)
    if paciente_id:
        q = q.filter(models.Anamnese.paciente_id == paciente_id)
    if status:
        q = q.filter(models.Anamnese.status == status)
    return q.order_by(models.Anamnese.updated_at.desc()).all()


def buscar_anamnese_por_id(escopo: EscopoTenant, anamnese_id: str) -> Optional[models.Anamnese]:
    return escopo.buscar(models.Anamnese, anamnese_id)


def criar_anamnese(escopo: EscopoTenant, dados: schemas.AnamneseCreate,
                   profissional_padrao_id: Optional[str] = None) -> models.Anamnese:
    """Cria a anamnese; sem profissional informado, usa o profissional do usuário logado."""
    escopo.obter(models.Paciente, dados.paciente_id, "Paciente não encontrado", apenas_ativos=True)

    valores = dados.model_dump()
    valores["profissional_id"] = valores.get("profissional_id") or profissional_padrao_id
    if valores["profissional_id"]:
        escopo.obter(models.Profissional, valores["profissional_id"], "Profissional não encontrado")

    anamnese = models.Anamnese(**valores)
    if anamnese.status == "FINALIZADA":
        anamnese.finalizada_em = models.agora()

    escopo.adicionar(anamnese)
    escopo.salvar(anamnese)
    logger.info(f"Anamnese {anamnese.id} criada para o paciente {dados.paciente_id}")
    return anamnese


def atualizar_anamnese(escopo: EscopoTenant, anamnese_id: str, dados: schemas.AnamneseUpdate) -> Optional[models.Anamnese]:
    anamnese = escopo.buscar(models.Anamnese, anamnese_id)
    if not anamnese:
        return None

    valores = dados.model_dump(exclude_unset=True)
    if valores.get("profissional_id"):
        escopo.obter(models.Profissional, valores["profissional_id"], "Profissional não encontrado")

    # finalizada_em registra apenas a primeira finalização
    if valores.get("status") == "FINALIZADA" and anamnese.finalizada_em is None:
        valores["finalizada_em"] = models.agora()

    aplicar_atualizacao(anamnese, valores)
    escopo.salvar(anamnese)
    logger.info(f"Anamnese {anamnese_id} atualizada (status {anamnese.status})")
    return anamnese


def deletar_anamnese(escopo: EscopoTenant, anamnese_id: str) -> bool:
    anamnese = escopo.buscar(models.Anamnese, anamnese_id)
    if not anamnese:
        return False
    escopo.remover(anamnese)
    logger.info(f"Anamnese {anamnese_id} excluída")
    return True
