# crud/atribuicoes.py
"""
Atribuição de atividades, curriculums e avaliações a pacientes.
"""

import logging
from typing import List

import models
from crud.escopo import EscopoTenant
from crud.utils import ConflitoError

logger = logging.getLogger(__name__)

# tipo -> (modelo da atribuição, coluna do item, modelo do item, nome do item)
TIPOS_ATRIBUICAO = {
    "atividade": (models.AtividadePaciente, "atividade_id", models.Atividade, "Atividade"),
    "curriculum": (models.CurriculumPaciente, "curriculum_id", models.Curriculum, "Curriculum"),
    "avaliacao": (models.AvaliacaoPaciente, "avaliacao_id", models.Avaliacao, "Avaliação"),
}


def atribuir(escopo: EscopoTenant, tipo: str, paciente_id: str, item_id: str, atribuida_por: str):
    modelo, coluna, modelo_item, nome = TIPOS_ATRIBUICAO[tipo]

    escopo.obter(models.Paciente, paciente_id, "Paciente não encontrado", apenas_ativos=True)
    escopo.obter(modelo_item, item_id, f"{nome} não encontrado(a)", apenas_ativos=True)

    existente = escopo.query(
        modelo,
        modelo.paciente_id == paciente_id,
        getattr(modelo, coluna) == item_id,
        modelo.ativa.is_(True),
    ).first()
    if existente:
        raise ConflitoError(f"{nome} já está atribuído(a) a este paciente")

    atribuicao = modelo(paciente_id=paciente_id, atribuida_por=atribuida_por)
    setattr(atribuicao, coluna, item_id)
    escopo.adicionar(atribuicao)
    escopo.salvar(atribuicao)
    logger.info(f"{nome} {item_id} atribuído(a) ao paciente {paciente_id} por {atribuida_por}")
    return atribuicao


def listar_atribuicoes(escopo: EscopoTenant, tipo: str, paciente_id: str) -> List:
    modelo = TIPOS_ATRIBUICAO[tipo][0]
    return escopo.query(
        modelo, modelo.paciente_id == paciente_id, modelo.ativa.is_(True)
    ).order_by(modelo.atribuida_em.desc()).all()


def remover_atribuicao(escopo: EscopoTenant, tipo: str, atribuicao_id: str) -> bool:
    modelo = TIPOS_ATRIBUICAO[tipo][0]
    atribuicao = escopo.buscar(modelo, atribuicao_id)
    if not atribuicao or not atribuicao.ativa:
        return False
    atribuicao.ativa = False
    escopo.salvar()
    logger.info(f"Atribuição {atribuicao_id} ({tipo}) desativada")
    return True
