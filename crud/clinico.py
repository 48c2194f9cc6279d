# crud/clinico.py
"""
Registros clínicos vinculados ao paciente: diagnósticos, prescrições,
encaminhamentos, anexos e relatórios clínicos.

Todos seguem o mesmo ciclo de vida, então as operações são genéricas sobre o modelo.
"""

import logging
from typing import Optional, List, Type

from pydantic import BaseModel

import models
from crud.escopo import EscopoTenant
from crud.utils import aplicar_atualizacao

logger = logging.getLogger(__name__)

REGISTROS_CLINICOS = {
    "diagnosticos": models.Diagnostico,
    "prescricoes": models.Prescricao,
    "encaminhamentos": models.Encaminhamento,
    "anexos": models.AnexoPaciente,
    "relatorios": models.RelatorioClinico,
}


def _paciente(escopo: EscopoTenant, paciente_id: str) -> models.Paciente:
    return escopo.obter(models.Paciente, paciente_id, "Paciente não encontrado")


def _registro(escopo: EscopoTenant, modelo: Type, paciente_id: str, item_id: str):
    return escopo.query(modelo, modelo.id == item_id, modelo.paciente_id == paciente_id).first()


def listar_registros(escopo: EscopoTenant, modelo: Type, paciente_id: str) -> List:
    _paciente(escopo, paciente_id)
    return escopo.query(modelo, modelo.paciente_id == paciente_id).order_by(modelo.created_at.desc()).all()


def criar_registro(escopo: EscopoTenant, modelo: Type, paciente_id: str, dados: BaseModel,
                   profissional_id: Optional[str]):
    _paciente(escopo, paciente_id)
    # None deixa o default da coluna agir (datas, status inicial)
    valores = {k: v for k, v in dados.model_dump().items() if v is not None}
    registro = escopo.adicionar(modelo(paciente_id=paciente_id, profissional_id=profissional_id, **valores))
    escopo.salvar(registro)
    logger.info(f"{modelo.__name__} {registro.id} criado para o paciente {paciente_id}")
    return registro


def atualizar_registro(escopo: EscopoTenant, modelo: Type, paciente_id: str, item_id: str, dados: BaseModel):
    _paciente(escopo, paciente_id)
    registro = _registro(escopo, modelo, paciente_id, item_id)
    if not registro:
        return None
    aplicar_atualizacao(registro, dados.model_dump(exclude_unset=True))
    escopo.salvar(registro)
    return registro


def deletar_registro(escopo: EscopoTenant, modelo: Type, paciente_id: str, item_id: str) -> bool:
    _paciente(escopo, paciente_id)
    registro = _registro(escopo, modelo, paciente_id, item_id)
    if not registro:
        return False
    escopo.remover(registro)
    logger.info(f"{modelo.__name__} {item_id} do paciente {paciente_id} excluído")
    return True
