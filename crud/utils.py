# crud/utils.py
"""
Utilitários e funções auxiliares reutilizáveis
"""

import logging
import re
from datetime import datetime, date, time, timedelta
from typing import Optional, Dict, Any

from sqlalchemy import inspect

logger = logging.getLogger(__name__)


class NaoEncontradoError(LookupError):
    """Recurso inexistente ou pertencente a outro tenant (ambos viram 404)."""


class ConflitoError(ValueError):
    """Operação rejeitada por conflito com dados existentes (409)."""

    def __init__(self, mensagem: str, extras: Optional[Dict[str, Any]] = None):
        super().__init__(mensagem)
        self.extras = extras or {}


class RegraNegocioError(ValueError):
    """Validação de negócio com campos adicionais na resposta (400)."""

    def __init__(self, mensagem: str, extras: Optional[Dict[str, Any]] = None):
        super().__init__(mensagem)
        self.extras = extras or {}


class AcessoNegadoError(PermissionError):
    """Recurso visível, porém a ação não é permitida ao usuário (403)."""


def rejeitar_nulos(modelo, dados: Dict[str, Any]) -> None:
    """Levanta ValueError se algum campo enviado como null é obrigatório no modelo."""
    colunas = inspect(modelo).columns
    for campo, valor in dados.items():
        coluna = colunas.get(campo)
        if valor is None and coluna is not None and not coluna.nullable:
            raise ValueError(f"O campo '{campo}' não pode ser nulo")


def aplicar_atualizacao(obj, dados: Dict[str, Any]) -> None:
    """Copia os campos enviados (já filtrados por exclude_unset) para o modelo."""
    rejeitar_nulos(type(obj), dados)
    for campo, valor in dados.items():
        setattr(obj, campo, valor)


def normalizar_cpf(cpf: Optional[str]) -> Optional[str]:
    """
    Mantém apenas os dígitos do CPF.

    Args:
        cpf: CPF com ou sem máscara

    Returns:
        Apenas os dígitos, ou None se não houver nenhum
    """
    if not cpf:
        return None
    digitos = re.sub(r"\D", "", cpf)
    return digitos or None


def vazio_para_none(valor: Optional[str]) -> Optional[str]:
    if valor is None:
        return None
    valor = valor.strip()
    return valor or None


def inicio_do_dia(dia: date) -> datetime:
    return datetime.combine(dia, time.min)


def fim_do_dia(dia: date) -> datetime:
    return datetime.combine(dia, time.max)


def inicio_do_mes(referencia: datetime) -> datetime:
    return datetime(referencia.year, referencia.month, 1)


def minutos_entre(inicio: datetime, fim: Optional[datetime]) -> int:
    if not fim or fim <= inicio:
        return 0
    return int((fim - inicio) / timedelta(minutes=1))
