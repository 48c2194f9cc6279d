# crud/prontuarios.py
"""
CRUD de prontuários (evolução clínica por sessão)
"""

import logging
from typing import Optional, List

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import aplicar_atualizacao

logger = logging.getLogger(__name__)


def listar_prontuarios(escopo: EscopoTenant, paciente_id: Optional[str] = None,
                       profissional_id: Optional[str] = None) -> List[models.Prontuario]:
    q = escopo.query(models.Prontuario)
    if paciente_id:
        q = q.filter(models.Prontuario.paciente_id == paciente_id)
    if profissional_id:
        q = q.filter(models.Prontuario.profissional_id == profissional_id)
    return q.order_by(models.Prontuario.data_sessao.desc()).all()


def buscar_prontuario_por_id(escopo: EscopoTenant, prontuario_id: str) -> Optional[models.Prontuario]:
    return escopo.buscar(models.Prontuario, prontuario_id)


def criar_prontuario(escopo: EscopoTenant, dados: schemas.ProntuarioCreate) -> models.Prontuario:
    escopo.obter(models.Paciente, dados.paciente_id, "Paciente não encontrado")
    escopo.obter(models.Profissional, dados.profissional_id, "Profissional não encontrado")

    prontuario = escopo.adicionar(models.Prontuario(**dados.model_dump()))
    escopo.salvar(prontuario)
    logger.info(f"Prontuário {prontuario.id} criado para o paciente {dados.paciente_id}")
    return prontuario


def atualizar_prontuario(escopo: EscopoTenant, prontuario_id: str, dados: schemas.ProntuarioUpdate) -> Optional[models.Prontuario]:
    prontuario = escopo.buscar(models.Prontuario, prontuario_id)
    if not prontuario:
        return None
    valores = dados.model_dump(exclude_unset=True)
    if valores.get("profissional_id"):
        escopo.obter(models.Profissional, valores["profissional_id"], "Profissional não encontrado")
    aplicar_atualizacao(prontuario, valores)
    escopo.salvar(prontuario)
    return prontuario


def deletar_prontuario(escopo: EscopoTenant, prontuario_id: str) -> bool:
    prontuario = escopo.buscar(models.Prontuario, prontuario_id)
    if not prontuario:
        return False
    escopo.remover(prontuario)
    logger.info(f"Prontuário {prontuario_id} excluído")
    return True
