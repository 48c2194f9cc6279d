# crud/avaliacoes.py
"""
CRUD de avaliações (protocolos de avaliação) e seus itens:
níveis, habilidades, pontuações e tarefas.
"""

import logging
from typing import Optional, List, Type

from pydantic import BaseModel

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import NaoEncontradoError, aplicar_atualizacao

logger = logging.getLogger(__name__)

ITENS_AVALIACAO = {
    "niveis": models.AvaliacaoNivel,
    "habilidades": models.AvaliacaoHabilidade,
    "pontuacoes": models.AvaliacaoPontuacao,
    "tarefas": models.AvaliacaoTarefa,
}


def listar_avaliacoes(escopo: EscopoTenant) -> List[models.Avaliacao]:
    return escopo.query(models.Avaliacao, apenas_ativos=True).order_by(models.Avaliacao.nome).all()


def buscar_avaliacao_por_id(escopo: EscopoTenant, avaliacao_id: str) -> Optional[models.Avaliacao]:
    return escopo.buscar(models.Avaliacao, avaliacao_id)


def criar_avaliacao(escopo: EscopoTenant, dados: schemas.AvaliacaoCreate) -> models.Avaliacao:
    avaliacao = escopo.adicionar(models.Avaliacao(**dados.model_dump()))
    escopo.salvar(avaliacao)
    logger.info(f"Avaliação {avaliacao.id} criada no tenant {escopo.tenant_id}")
    return avaliacao


def atualizar_avaliacao(escopo: EscopoTenant, avaliacao_id: str, dados: schemas.AvaliacaoUpdate) -> Optional[models.Avaliacao]:
    avaliacao = escopo.buscar(models.Avaliacao, avaliacao_id)
    if not avaliacao:
        return None
    aplicar_atualizacao(avaliacao, dados.model_dump(exclude_unset=True))
    escopo.salvar(avaliacao)
    return avaliacao


def desativar_avaliacao(escopo: EscopoTenant, avaliacao_id: str) -> bool:
    avaliacao = escopo.buscar(models.Avaliacao, avaliacao_id)
    if not avaliacao:
        return False
    avaliacao.ativo = False
    escopo.salvar()
    logger.info(f"Avaliação {avaliacao_id} desativada")
    return True


# --- Itens da avaliação (sempre acessados pela avaliação do tenant) ---

def _avaliacao(escopo: EscopoTenant, avaliacao_id: str) -> models.Avaliacao:
    return escopo.obter(models.Avaliacao, avaliacao_id, "Avaliação não encontrada")


def _validar_tarefa(escopo: EscopoTenant, avaliacao_id: str, valores: dict) -> None:
    """Nível e habilidade da tarefa precisam pertencer à mesma avaliação."""
    db = escopo.db
    nivel_id = valores.get("nivel_id")
    if nivel_id and not db.query(models.AvaliacaoNivel).filter_by(id=nivel_id, avaliacao_id=avaliacao_id).first():
        raise NaoEncontradoError("Nível não encontrado nesta avaliação")
    habilidade_id = valores.get("habilidade_id")
    if habilidade_id and not db.query(models.AvaliacaoHabilidade).filter_by(id=habilidade_id, avaliacao_id=avaliacao_id).first():
        raise NaoEncontradoError("Habilidade não encontrada nesta avaliação")


def listar_itens(escopo: EscopoTenant, modelo: Type, avaliacao_id: str) -> List:
    _avaliacao(escopo, avaliacao_id)
    return escopo.db.query(modelo).filter(modelo.avaliacao_id == avaliacao_id).order_by(modelo.ordem).all()


def criar_item(escopo: EscopoTenant, modelo: Type, avaliacao_id: str, dados: BaseModel):
    _avaliacao(escopo, avaliacao_id)
    valores = dados.model_dump()
    if modelo is models.AvaliacaoTarefa:
        _validar_tarefa(escopo, avaliacao_id, valores)
    item = modelo(avaliacao_id=avaliacao_id, **valores)
    escopo.db.add(item)
    escopo.salvar(item)
    logger.info(f"{modelo.__name__} {item.id} adicionado à avaliação {avaliacao_id}")
    return item


def atualizar_item(escopo: EscopoTenant, modelo: Type, avaliacao_id: str, item_id: str, dados: BaseModel):
    _avaliacao(escopo, avaliacao_id)
    item = escopo.db.query(modelo).filter_by(id=item_id, avaliacao_id=avaliacao_id).first()
    if not item:
        return None
    valores = dados.model_dump(exclude_unset=True)
    if modelo is models.AvaliacaoTarefa:
        _validar_tarefa(escopo, avaliacao_id, valores)
    aplicar_atualizacao(item, valores)
    escopo.salvar(item)
    return item


def deletar_item(escopo: EscopoTenant, modelo: Type, avaliacao_id: str, item_id: str) -> bool:
    _avaliacao(escopo, avaliacao_id)
    item = escopo.db.query(modelo).filter_by(id=item_id, avaliacao_id=avaliacao_id).first()
    if not item:
        return False
    escopo.remover(item)
    logger.info(f"{modelo.__name__} {item_id} removido da avaliação {avaliacao_id}")
    return True
