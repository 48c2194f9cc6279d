# crud/curriculum.py
"""
CRUD de curriculums (planos com atividades ordenadas)
"""

import logging
from typing import Optional, List

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import aplicar_atualizacao

logger = logging.getLogger(__name__)


def _montar_atividades(escopo: EscopoTenant, itens: List[schemas.CurriculumAtividadeIn]) -> List[models.CurriculumAtividade]:
    vinculos = []
    for i, item in enumerate(itens, start=1):
        escopo.obter(models.Atividade, item.atividade_id, f"Atividade {item.atividade_id} não encontrada", apenas_ativos=True)
        vinculos.append(models.CurriculumAtividade(atividade_id=item.atividade_id, ordem=item.ordem or i))
    return vinculos


def listar_curriculums(escopo: EscopoTenant) -> List[models.Curriculum]:
    return escopo.query(models.Curriculum, apenas_ativos=True).order_by(models.Curriculum.nome).all()


def buscar_curriculum_por_id(escopo: EscopoTenant, curriculum_id: str) -> Optional[models.Curriculum]:
    return escopo.buscar(models.Curriculum, curriculum_id)


def criar_curriculum(escopo: EscopoTenant, dados: schemas.CurriculumCreate) -> models.Curriculum:
    curriculum = models.Curriculum(nome=dados.nome, descricao=dados.descricao)
    curriculum.atividades = _montar_atividades(escopo, dados.atividades)
    escopo.adicionar(curriculum)
    escopo.salvar(curriculum)
    logger.info(f"Curriculum {curriculum.id} criado com {len(dados.atividades)} atividades")
    return curriculum


def atualizar_curriculum(escopo: EscopoTenant, curriculum_id: str, dados: schemas.CurriculumUpdate) -> Optional[models.Curriculum]:
    curriculum = escopo.buscar(models.Curriculum, curriculum_id)
    if not curriculum:
        return None
    aplicar_atualizacao(curriculum, dados.model_dump(exclude_unset=True, exclude={"atividades"}))
    if dados.atividades is not None:
        curriculum.atividades = _montar_atividades(escopo, dados.atividades)
    escopo.salvar(curriculum)
    logger.info(f"Curriculum {curriculum_id} atualizado")
    return curriculum


def desativar_curriculum(escopo: EscopoTenant, curriculum_id: str) -> bool:
    curriculum = escopo.buscar(models.Curriculum, curriculum_id)
    if not curriculum:
        return False
    curriculum.ativo = False
    escopo.salvar()
    logger.info(f"Curriculum {curriculum_id} desativado")
    return True
