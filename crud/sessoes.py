# crud/sessoes.py
"""
Sessões de aplicação (atividade, curriculum e avaliação).

Uma sessão nasce EM_ANDAMENTO, recebe avaliações instrução a instrução e só
passa a FINALIZADA quando todas as instruções foram avaliadas.
"""

from __future__ import annotations
import logging
from typing import Optional, List, Dict, Tuple, Type

import models
import schemas
from crud.escopo import EscopoTenant
from crud.profissionais import profissional_do_usuario
from crud.utils import (
    AcessoNegadoError, ConflitoError, NaoEncontradoError, RegraNegocioError
)

logger = logging.getLogger(__name__)

EM_ANDAMENTO = "EM_ANDAMENTO"
FINALIZADA = "FINALIZADA"
LIMITE_LISTAGEM = 50


# =================================================================================
# AUXILIARES
# =================================================================================

def resolver_profissional(escopo: EscopoTenant, usuario_id: str, is_admin: bool,
                          paciente: models.Paciente) -> models.Profissional:
    """
    Profissional que conduz a sessão: o vinculado ao usuário; para admins sem
    vínculo, o profissional do paciente ou qualquer profissional ativo.
    """
    profissional = profissional_do_usuario(escopo, usuario_id)
    if profissional:
        return profissional
    if is_admin:
        if paciente.profissional_id:
            profissional = escopo.buscar(models.Profissional, paciente.profissional_id, apenas_ativos=True)
            if profissional:
                return profissional
        profissional = escopo.query(models.Profissional, apenas_ativos=True).order_by(models.Profissional.nome).first()
        if profissional:
            return profissional
    raise NaoEncontradoError("Nenhum profissional vinculado ao usuário")


def _listar(escopo: EscopoTenant, modelo: Type, profissional_id: Optional[str],
            paciente_id: Optional[str], status: Optional[str]) -> List:
    q = escopo.query(modelo)
    if profissional_id is not None:
        q = q.filter(modelo.profissional_id == profissional_id)
    if paciente_id:
        q = q.filter(modelo.paciente_id == paciente_id)
    if status:
        q = q.filter(modelo.status == status)
    return q.order_by(modelo.iniciada_em.desc()).limit(LIMITE_LISTAGEM).all()


def _sessao_em_andamento(escopo: EscopoTenant, modelo: Type, sessao_id: str,
                         profissional_restrito: Optional[str]):
    sessao = escopo.obter(modelo, sessao_id, "Sessão não encontrada")
    if profissional_restrito is not None and sessao.profissional_id != profissional_restrito:
        logger.warning(f"Tentativa de alterar a sessão {sessao_id} de outro profissional")
        raise AcessoNegadoError("Você só pode registrar avaliações nas suas próprias sessões")
    if sessao.status != EM_ANDAMENTO:
        raise ValueError("Sessão não está em andamento")
    return sessao


def _finalizar(sessao, observacoes_gerais: Optional[str]) -> None:
    sessao.status = FINALIZADA
    sessao.finalizada_em = models.agora()
    if observacoes_gerais is not None:
        sessao.observacoes_gerais = observacoes_gerais


def calcular_estatisticas(avaliacoes: List, total_instrucoes: int) -> Dict:
    notas = [a.nota for a in avaliacoes]
    com_ajuda = sum(1 for a in avaliacoes if any(t != "+" for t in (a.tipos_ajuda or [])))
    return {
        "totalInstrucoes": total_instrucoes,
        "mediaNotas": round(sum(notas) / len(notas), 2) if notas else 0.0,
        "totalComAjuda": com_ajuda,
        "percentualComAjuda": round(com_ajuda / len(avaliacoes) * 100, 1) if avaliacoes else 0.0,
        "notaMaxima": max(notas) if notas else None,
        "notaMinima": min(notas) if notas else None,
    }


# =================================================================================
# SESSÕES DE ATIVIDADE
# =================================================================================

def iniciar_sessao_atividade(escopo: EscopoTenant, dados: schemas.SessaoAtividadeCreate,
                             usuario_id: str, is_admin: bool) -> Tuple[models.SessaoAtividade, int]:
    paciente = escopo.obter(models.Paciente, dados.paciente_id, "Paciente não encontrado", apenas_ativos=True)
    atividade = escopo.obter(models.Atividade, dados.atividade_id, "Atividade não encontrada", apenas_ativos=True)
    profissional = resolver_profissional(escopo, usuario_id, is_admin, paciente)

    existente = escopo.query(
        models.SessaoAtividade,
        models.SessaoAtividade.paciente_id == paciente.id,
        models.SessaoAtividade.profissional_id == profissional.id,
        models.SessaoAtividade.status == EM_ANDAMENTO,
    ).first()
    if existente:
        raise ConflitoError("Já existe uma sessão em andamento para este paciente", {"sessaoId": existente.id})

    sessao = escopo.adicionar(models.SessaoAtividade(
        paciente_id=paciente.id, profissional_id=profissional.id, atividade_id=atividade.id,
    ))
    escopo.salvar(sessao)
    logger.info(f"Sessão de atividade {sessao.id} iniciada (paciente {paciente.id}, profissional {profissional.id})")
    return sessao, len(atividade.instrucoes)


def listar_sessoes_atividade(escopo: EscopoTenant, profissional_id: Optional[str] = None,
                             paciente_id: Optional[str] = None, status: Optional[str] = None) -> List[models.SessaoAtividade]:
    return _listar(escopo, models.SessaoAtividade, profissional_id, paciente_id, status)


def buscar_sessao_atividade(escopo: EscopoTenant, sessao_id: str) -> Optional[models.SessaoAtividade]:
    return escopo.buscar(models.SessaoAtividade, sessao_id)


def avaliar_instrucao(escopo: EscopoTenant, dados: schemas.AvaliarInstrucaoRequest,
                      profissional_restrito: Optional[str]) -> models.AvaliacaoInstrucao:
    """Registra (ou substitui) a nota de uma instrução na sessão."""
    sessao = _sessao_em_andamento(escopo, models.SessaoAtividade, dados.sessao_id, profissional_restrito)
    db = escopo.db

    instrucao = db.query(models.AtividadeInstrucao).filter_by(
        id=dados.instrucao_id, atividade_id=sessao.atividade_id
    ).first()
    if not instrucao:
        raise NaoEncontradoError("Instrução não encontrada nesta atividade")

    avaliacao = db.query(models.AvaliacaoInstrucao).filter_by(
        sessao_id=sessao.id, instrucao_id=instrucao.id
    ).first()
    if avaliacao is None:
        avaliacao = models.AvaliacaoInstrucao(sessao_id=sessao.id, instrucao_id=instrucao.id)
        db.add(avaliacao)
    avaliacao.nota = dados.nota
    avaliacao.tipos_ajuda = list(dados.tipos_ajuda)
    avaliacao.observacao = dados.observacao

    escopo.salvar(avaliacao)
    return avaliacao


def finalizar_sessao_atividade(escopo: EscopoTenant, dados: schemas.FinalizarSessaoRequest,
                               profissional_restrito: Optional[str]) -> Tuple[models.SessaoAtividade, Dict]:
    sessao = _sessao_em_andamento(escopo, models.SessaoAtividade, dados.sessao_id, profissional_restrito)

    total = len(sessao.atividade.instrucoes)
    avaliadas = len(sessao.avaliacoes)
    if avaliadas < total:
        raise RegraNegocioError(
            f"Nem todas as instruções foram avaliadas. Avaliadas: {avaliadas}/{total}",
            {"instrucoesAvaliadas": avaliadas, "totalInstrucoes": total, "instrucoesPendentes": total - avaliadas},
        )

    _finalizar(sessao, dados.observacoes_gerais)
    escopo.salvar(sessao)
    logger.info(f"Sessão de atividade {sessao.id} finalizada")
    return sessao, calcular_estatisticas(sessao.avaliacoes, total)


# =================================================================================
# SESSÕES DE CURRICULUM
# =================================================================================

def iniciar_sessao_curriculum(escopo: EscopoTenant, dados: schemas.SessaoCurriculumCreate,
                              usuario_id: str, is_admin: bool) -> Tuple[models.SessaoCurriculum, bool]:
    """Retorna (sessão, existente). Uma sessão em andamento do mesmo curriculum é reaproveitada."""
    paciente = escopo.obter(models.Paciente, dados.paciente_id, "Paciente não encontrado", apenas_ativos=True)
    curriculum = escopo.obter(models.Curriculum, dados.curriculum_id, "Curriculum não encontrado", apenas_ativos=True)
    if not curriculum.atividades:
        raise ValueError("Curriculum não possui atividades")

    existente = escopo.query(
        models.SessaoCurriculum,
        models.SessaoCurriculum.paciente_id == paciente.id,
        models.SessaoCurriculum.curriculum_id == curriculum.id,
        models.SessaoCurriculum.status == EM_ANDAMENTO,
    ).first()
    profissional = resolver_profissional(escopo, usuario_id, is_admin, paciente)
    if existente:
        # só quem conduz a sessão pode avaliá-la; terapeutas não herdam a de um colega
        if not is_admin and existente.profissional_id != profissional.id:
            raise ConflitoError("Já existe uma sessão em andamento deste curriculum com outro profissional",
                                {"sessaoId": existente.id})
        return existente, True

    sessao = escopo.adicionar(models.SessaoCurriculum(
        paciente_id=paciente.id, profissional_id=profissional.id, curriculum_id=curriculum.id,
    ))
    escopo.salvar(sessao)
    logger.info(f"Sessão de curriculum {sessao.id} iniciada (paciente {paciente.id})")
    return sessao, False


def listar_sessoes_curriculum(escopo: EscopoTenant, profissional_id: Optional[str] = None,
                              paciente_id: Optional[str] = None, status: Optional[str] = None) -> List[models.SessaoCurriculum]:
    return _listar(escopo, models.SessaoCurriculum, profissional_id, paciente_id, status)


def buscar_sessao_curriculum(escopo: EscopoTenant, sessao_id: str) -> Optional[models.SessaoCurriculum]:
    return escopo.buscar(models.SessaoCurriculum, sessao_id)


def avaliar_instrucao_curriculum(escopo: EscopoTenant, dados: schemas.AvaliarCurriculumRequest,
                                 profissional_restrito: Optional[str]) -> models.AvaliacaoCurriculum:
    sessao = _sessao_em_andamento(escopo, models.SessaoCurriculum, dados.sessao_id, profissional_restrito)
    db = escopo.db

    if not any(v.atividade_id == dados.atividade_id for v in sessao.curriculum.atividades):
        raise NaoEncontradoError("Atividade não faz parte deste curriculum")
    instrucao = db.query(models.AtividadeInstrucao).filter_by(
        id=dados.instrucao_id, atividade_id=dados.atividade_id
    ).first()
    if not instrucao:
        raise NaoEncontradoError("Instrução não encontrada nesta atividade")

    avaliacao = db.query(models.AvaliacaoCurriculum).filter_by(
        sessao_id=sessao.id, atividade_id=dados.atividade_id,
        instrucao_id=instrucao.id, tentativa=dados.tentativa,
    ).first()
    if avaliacao is None:
        avaliacao = models.AvaliacaoCurriculum(
            sessao_id=sessao.id, atividade_id=dados.atividade_id,
            instrucao_id=instrucao.id, tentativa=dados.tentativa,
        )
        db.add(avaliacao)
    avaliacao.nota = dados.nota
    avaliacao.tipos_ajuda = list(dados.tipos_ajuda)
    avaliacao.observacao = dados.observacao

    escopo.salvar(avaliacao)
    return avaliacao


def finalizar_sessao_curriculum(escopo: EscopoTenant, dados: schemas.FinalizarSessaoRequest,
                                profissional_restrito: Optional[str]) -> Tuple[models.SessaoCurriculum, Dict]:
    sessao = _sessao_em_andamento(escopo, models.SessaoCurriculum, dados.sessao_id, profissional_restrito)

    total = sum(len(v.atividade.instrucoes) for v in sessao.curriculum.atividades)
    # várias tentativas da mesma instrução contam uma vez
    avaliadas = len({(a.atividade_id, a.instrucao_id) for a in sessao.avaliacoes})
    if avaliadas < total:
        raise RegraNegocioError(
            f"Avalie todas as instruções antes de finalizar. {avaliadas}/{total} avaliadas.",
            {"instrucoesAvaliadas": avaliadas, "totalInstrucoes": total, "instrucoesPendentes": total - avaliadas},
        )

    _finalizar(sessao, dados.observacoes_gerais)
    escopo.salvar(sessao)
    logger.info(f"Sessão de curriculum {sessao.id} finalizada")
    return sessao, calcular_estatisticas(sessao.avaliacoes, total)


# =================================================================================
# SESSÕES DE AVALIAÇÃO
# =================================================================================

def iniciar_sessao_avaliacao(escopo: EscopoTenant, dados: schemas.SessaoAvaliacaoCreate,
                             usuario_id: str, is_admin: bool) -> Tuple[models.SessaoAvaliacao, int]:
    paciente = escopo.obter(models.Paciente, dados.paciente_id, "Paciente não encontrado", apenas_ativos=True)
    avaliacao = escopo.obter(models.Avaliacao, dados.avaliacao_id, "Avaliação não encontrada", apenas_ativos=True)
    profissional = resolver_profissional(escopo, usuario_id, is_admin, paciente)

    existente = escopo.query(
        models.SessaoAvaliacao,
        models.SessaoAvaliacao.paciente_id == paciente.id,
        models.SessaoAvaliacao.profissional_id == profissional.id,
        models.SessaoAvaliacao.status == EM_ANDAMENTO,
    ).first()
    if existente:
        raise ConflitoError("Já existe uma avaliação em andamento para este paciente", {"sessaoId": existente.id})

    sessao = escopo.adicionar(models.SessaoAvaliacao(
        paciente_id=paciente.id, profissional_id=profissional.id, avaliacao_id=avaliacao.id,
    ))
    escopo.salvar(sessao)
    logger.info(f"Sessão de avaliação {sessao.id} iniciada (paciente {paciente.id})")
    return sessao, len(avaliacao.tarefas)


def listar_sessoes_avaliacao(escopo: EscopoTenant, profissional_id: Optional[str] = None,
                             paciente_id: Optional[str] = None, status: Optional[str] = None) -> List[models.SessaoAvaliacao]:
    return _listar(escopo, models.SessaoAvaliacao, profissional_id, paciente_id, status)


def buscar_sessao_avaliacao(escopo: EscopoTenant, sessao_id: str) -> Optional[models.SessaoAvaliacao]:
    return escopo.buscar(models.SessaoAvaliacao, sessao_id)


def responder_tarefa(escopo: EscopoTenant, dados: schemas.ResponderTarefaRequest,
                     profissional_restrito: Optional[str]) -> models.SessaoAvaliacao:
    """Grava a resposta de uma tarefa e, se pedido, finaliza a sessão."""
    if not dados.tarefa_id and not dados.finalizar:
        raise ValueError("Informe tarefaId ou finalizar")

    sessao = _sessao_em_andamento(escopo, models.SessaoAvaliacao, dados.sessao_id, profissional_restrito)
    db = escopo.db

    if dados.tarefa_id:
        tarefa = db.query(models.AvaliacaoTarefa).filter_by(
            id=dados.tarefa_id, avaliacao_id=sessao.avaliacao_id
        ).first()
        if not tarefa:
            raise NaoEncontradoError("Tarefa não encontrada nesta avaliação")

        resposta = db.query(models.RespostaTarefa).filter_by(sessao_id=sessao.id, tarefa_id=tarefa.id).first()
        if resposta is None:
            resposta = models.RespostaTarefa(sessao_id=sessao.id, tarefa_id=tarefa.id)
            db.add(resposta)
        resposta.pontuacao = dados.pontuacao
        resposta.observacao = dados.observacao

    if dados.finalizar:
        _finalizar(sessao, dados.observacoes_gerais)
        logger.info(f"Sessão de avaliação {sessao.id} finalizada")

    escopo.salvar(sessao)
    return sessao
