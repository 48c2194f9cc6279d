# crud/atividades.py
"""
CRUD de atividades clínicas, com suas instruções e pontuações
"""

import logging
from typing import Optional, List

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import aplicar_atualizacao

logger = logging.getLogger(__name__)


def _montar_instrucoes(instrucoes: List[schemas.InstrucaoIn]) -> List[models.AtividadeInstrucao]:
    return [
        models.AtividadeInstrucao(ordem=i, texto=instrucao.texto, observacao=instrucao.observacao)
        for i, instrucao in enumerate(instrucoes, start=1)
    ]


def _montar_pontuacoes(pontuacoes: List[schemas.PontuacaoAtividadeIn]) -> List[models.AtividadePontuacao]:
    return [
        models.AtividadePontuacao(ordem=i, sigla=p.sigla, grau=p.grau)
        for i, p in enumerate(pontuacoes, start=1)
    ]


def listar_atividades(escopo: EscopoTenant) -> List[models.Atividade]:
    return escopo.query(models.Atividade, apenas_ativos=True).order_by(models.Atividade.nome).all()


def buscar_atividade_por_id(escopo: EscopoTenant, atividade_id: str) -> Optional[models.Atividade]:
    return escopo.buscar(models.Atividade, atividade_id)


def criar_atividade(escopo: EscopoTenant, dados: schemas.AtividadeCreate) -> models.Atividade:
    if not dados.instrucoes:
        raise ValueError("Informe pelo menos uma instrução")

    atividade = models.Atividade(
        nome=dados.nome,
        tipo=dados.tipo,
        descricao=dados.descricao,
        metodologia=dados.metodologia,
        objetivo=dados.objetivo,
    )
    atividade.instrucoes = _montar_instrucoes(dados.instrucoes)
    atividade.pontuacoes = _montar_pontuacoes(dados.pontuacoes)

    escopo.adicionar(atividade)
    escopo.salvar(atividade)
    logger.info(f"Atividade {atividade.id} criada com {len(dados.instrucoes)} instruções")
    return atividade


def atualizar_atividade(escopo: EscopoTenant, atividade_id: str, dados: schemas.AtividadeUpdate) -> Optional[models.Atividade]:
    atividade = escopo.buscar(models.Atividade, atividade_id)
    if not atividade:
        return None

    valores = dados.model_dump(exclude_unset=True, exclude={"instrucoes", "pontuacoes"})
    aplicar_atualizacao(atividade, valores)

    if dados.instrucoes is not None:
        if not dados.instrucoes:
            raise ValueError("Informe pelo menos uma instrução")
        atividade.instrucoes = _montar_instrucoes(dados.instrucoes)
    if dados.pontuacoes is not None:
        atividade.pontuacoes = _montar_pontuacoes(dados.pontuacoes)

    escopo.salvar(atividade)
    logger.info(f"Atividade {atividade_id} atualizada")
    return atividade


def desativar_atividade(escopo: EscopoTenant, atividade_id: str) -> bool:
    atividade = escopo.buscar(models.Atividade, atividade_id)
    if not atividade:
        return False
    atividade.ativo = False
    escopo.salvar()
    logger.info(f"Atividade {atividade_id} desativada")
    return True
