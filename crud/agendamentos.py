# crud/agendamentos.py
"""
CRUD para gestão de agendamentos
"""

from __future__ import annotations
import logging
from typing import Optional, List, Dict, Tuple
from datetime import datetime, timedelta

import models
import schemas
from crud.escopo import EscopoTenant
from crud.utils import ConflitoError, NaoEncontradoError, aplicar_atualizacao, minutos_entre, rejeitar_nulos

logger = logging.getLogger(__name__)

# Agendamentos nesses status não ocupam horário
STATUS_LIVRES = ("CANCELADO", "FALTOU")


def _intervalo(inicio: datetime, fim: Optional[datetime], duracao_minutos: Optional[int]) -> Tuple[datetime, datetime, int]:
    if fim is None:
        fim = inicio + timedelta(minutes=duracao_minutos or 0)
    if fim <= inicio:
        raise ValueError("O horário de término deve ser posterior ao horário de início")
    return inicio, fim, minutos_entre(inicio, fim)


def verificar_conflitos(escopo: EscopoTenant, inicio: datetime, fim: datetime, profissional_id: str,
                        sala_id: Optional[str] = None, ignorar_id: Optional[str] = None) -> None:
    """
    Rejeita o intervalo [inicio, fim) se ele se sobrepõe a outro agendamento
    ativo do mesmo profissional ou da mesma sala.
    """
    ocupados = escopo.query(
        models.Agendamento,
        models.Agendamento.status.notin_(STATUS_LIVRES),
        models.Agendamento.data_hora < fim,
        models.Agendamento.horario_fim > inicio,
    )
    if ignorar_id:
        ocupados = ocupados.filter(models.Agendamento.id != ignorar_id)

    if ocupados.filter(models.Agendamento.profissional_id == profissional_id).first():
        logger.warning(f"Conflito de horário para o profissional {profissional_id} em {inicio}")
        raise ConflitoError("Já existe um agendamento neste horário para este profissional")
    if sala_id and ocupados.filter(models.Agendamento.sala_id == sala_id).first():
        logger.warning(f"Conflito de sala {sala_id} em {inicio}")
        raise ConflitoError("Sala já está ocupada neste horário")


def _validar_referencias(escopo: EscopoTenant, paciente_id: str, profissional_id: str,
                         sala_id: Optional[str], procedimento_id: Optional[str]) -> None:
    """Confere as referências e trava as linhas de profissional e sala até o commit."""
    escopo.obter(models.Paciente, paciente_id, "Paciente não encontrado", apenas_ativos=True)
    escopo.obter(models.Profissional, profissional_id, "Profissional não encontrado", apenas_ativos=True, bloquear=True)
    if sala_id:
        escopo.obter(models.Sala, sala_id, "Sala não encontrada", apenas_ativos=True, bloquear=True)
    if procedimento_id:
        escopo.obter(models.Procedimento, procedimento_id, "Procedimento não encontrado", apenas_ativos=True)


def listar_agendamentos(
    escopo: EscopoTenant,
    profissional_id: Optional[str] = None,
    paciente_id: Optional[str] = None,
    status: Optional[str] = None,
    sala_id: Optional[str] = None,
    data_inicio: Optional[datetime] = None,
    data_fim: Optional[datetime] = None,
) -> List[models.Agendamento]:
    q = escopo.query(models.Agendamento)
    if profissional_id is not None:
        q = q.filter(models.Agendamento.profissional_id == profissional_id)
    if paciente_id:
        q = q.filter(models.Agendamento.paciente_id == paciente_id)
    if status:
        q = q.filter(models.Agendamento.status == status)
    if sala_id:
        q = q.filter(models.Agendamento.sala_id == sala_id)
    if data_inicio:
        q = q.filter(models.Agendamento.data_hora >= data_inicio)
    if data_fim:
        q = q.filter(models.Agendamento.data_hora <= data_fim)
    return q.order_by(models.Agendamento.data_hora.asc()).all()


def buscar_agendamento_por_id(escopo: EscopoTenant, agendamento_id: str) -> Optional[models.Agendamento]:
    return escopo.buscar(models.Agendamento, agendamento_id)


def criar_agendamento(escopo: EscopoTenant, dados: schemas.AgendamentoCreate) -> models.Agendamento:
    """
    Cria um agendamento. A verificação de conflito e a inserção ocorrem na
    mesma transação, com as linhas do profissional e da sala travadas.
    """
    inicio, fim, duracao = _intervalo(dados.data_hora, dados.horario_fim, dados.duracao_minutos)
    try:
        _validar_referencias(escopo, dados.paciente_id, dados.profissional_id, dados.sala_id, dados.procedimento_id)
        if dados.status not in STATUS_LIVRES:
            verificar_conflitos(escopo, inicio, fim, dados.profissional_id, dados.sala_id)

        agendamento = escopo.adicionar(models.Agendamento(
            paciente_id=dados.paciente_id,
            profissional_id=dados.profissional_id,
            sala_id=dados.sala_id,
            procedimento_id=dados.procedimento_id,
            data_hora=inicio,
            horario_fim=fim,
            duracao_minutos=duracao,
            status=dados.status,
            observacoes=dados.observacoes,
        ))
        escopo.salvar(agendamento)
    except Exception:
        escopo.db.rollback()
        raise

    logger.info(f"Agendamento {agendamento.id} criado para {inicio} (profissional {dados.profissional_id})")
    return agendamento


def criar_agendamentos_em_lote(escopo: EscopoTenant, dados: schemas.AgendamentoLoteCreate) -> Dict:
    """Cria um agendamento por data; a falha de uma data não impede as demais."""
    resultados = []
    for dia in dados.datas:
        inicio = datetime.combine(dia, dados.horario)
        item = schemas.AgendamentoCreate(
            pacienteId=dados.paciente_id,
            profissionalId=dados.profissional_id,
            salaId=dados.sala_id,
            procedimentoId=dados.procedimento_id,
            data_hora=inicio,
            duracao_minutos=dados.duracao_minutos,
            status=dados.status,
            observacoes=dados.observacoes,
        )
        try:
            agendamento = criar_agendamento(escopo, item)
            resultados.append({"data": dia, "success": True, "agendamento": agendamento})
        except (ValueError, NaoEncontradoError) as e:
            logger.warning(f"Agendamento em lote falhou para {dia}: {e}")
            resultados.append({"data": dia, "success": False, "error": str(e)})

    sucessos = sum(1 for r in resultados if r["success"])
    falhas = len(resultados) - sucessos
    return {
        "success": sucessos > 0,
        "message": f"{sucessos} agendamento(s) criado(s), {falhas} falha(s)",
        "resultados": resultados,
        "resumo": {"total": len(resultados), "sucessos": sucessos, "falhas": falhas},
    }


def atualizar_agendamento(escopo: EscopoTenant, agendamento_id: str, dados: schemas.AgendamentoUpdate) -> Optional[models.Agendamento]:
    agendamento = escopo.buscar(models.Agendamento, agendamento_id)
    if not agendamento:
        return None

    valores = dados.model_dump(exclude_unset=True)
    # horario_fim nulo significa recalcular pela duração
    if "horario_fim" in valores and valores["horario_fim"] is None:
        del valores["horario_fim"]
    rejeitar_nulos(models.Agendamento, valores)
    inicio = valores.get("data_hora", agendamento.data_hora)
    if "horario_fim" in valores and valores["horario_fim"] is not None:
        fim = valores["horario_fim"]
    elif valores.get("duracao_minutos"):
        fim = inicio + timedelta(minutes=valores["duracao_minutos"])
    else:
        # mantém a duração atual ao mover o início
        fim = inicio + timedelta(minutes=agendamento.duracao_minutos)
    inicio, fim, duracao = _intervalo(inicio, fim, None)

    paciente_id = valores.get("paciente_id") or agendamento.paciente_id
    profissional_id = valores.get("profissional_id") or agendamento.profissional_id
    sala_id = valores["sala_id"] if "sala_id" in valores else agendamento.sala_id
    procedimento_id = valores["procedimento_id"] if "procedimento_id" in valores else agendamento.procedimento_id
    status = valores.get("status") or agendamento.status

    mudou_horario = (
        inicio != agendamento.data_hora or fim != agendamento.horario_fim
        or profissional_id != agendamento.profissional_id or sala_id != agendamento.sala_id
        or (agendamento.status in STATUS_LIVRES and status not in STATUS_LIVRES)
    )

    try:
        if mudou_horario or paciente_id != agendamento.paciente_id or procedimento_id != agendamento.procedimento_id:
            _validar_referencias(escopo, paciente_id, profissional_id, sala_id, procedimento_id)
        if mudou_horario and status not in STATUS_LIVRES:
            verificar_conflitos(escopo, inicio, fim, profissional_id, sala_id, ignorar_id=agendamento.id)

        valores.update({
            "data_hora": inicio,
            "horario_fim": fim,
            "duracao_minutos": duracao,
            "paciente_id": paciente_id,
            "profissional_id": profissional_id,
            "sala_id": sala_id,
            "procedimento_id": procedimento_id,
            "status": status,
        })
        aplicar_atualizacao(agendamento, valores)
        escopo.salvar(agendamento)
    except Exception:
        escopo.db.rollback()
        raise

    logger.info(f"Agendamento {agendamento_id} atualizado (status {status})")
    return agendamento


def deletar_agendamento(escopo: EscopoTenant, agendamento_id: str) -> bool:
    agendamento = escopo.buscar(models.Agendamento, agendamento_id)
    if not agendamento:
        return False
    escopo.remover(agendamento)
    logger.info(f"Agendamento {agendamento_id} excluído")
    return True
