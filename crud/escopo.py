# crud/escopo.py
"""
Camada única de acesso a dados isolada por tenant.

Toda consulta e toda inserção das rotas passa por um EscopoTenant, que
injeta o filtro `tenant_id` automaticamente. Um registro de outro tenant é
indistinguível de um registro inexistente.
"""

import logging
from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session, Query

from crud.utils import NaoEncontradoError

logger = logging.getLogger(__name__)

M = TypeVar("M")


class EscopoTenant:

    def __init__(self, db: Session, tenant_id: str):
        if not tenant_id:
            raise ValueError("tenant_id é obrigatório para o escopo de dados.")
        self.db = db
        self.tenant_id = tenant_id

    def query(self, modelo: Type[M], *criterios, apenas_ativos: bool = False) -> Query:
        """Consulta `modelo` restrita ao tenant (e a `ativo = true`, se pedido)."""
        q = self.db.query(modelo).filter(modelo.tenant_id == self.tenant_id)
        if apenas_ativos:
            q = q.filter(modelo.ativo.is_(True))
        if criterios:
            q = q.filter(*criterios)
        return q

    def buscar(self, modelo: Type[M], registro_id: Optional[str], apenas_ativos: bool = False) -> Optional[M]:
        if not registro_id:
            return None
        return self.query(modelo, modelo.id == registro_id, apenas_ativos=apenas_ativos).first()

    def obter(self, modelo: Type[M], registro_id: Optional[str], mensagem: str,
              apenas_ativos: bool = False, bloquear: bool = False) -> M:
        """
        Como `buscar`, mas levanta NaoEncontradoError quando o registro não existe no tenant.

        Com `bloquear=True` a linha é travada (SELECT ... FOR UPDATE) até o fim da transação.
        """
        if not registro_id:
            raise NaoEncontradoError(mensagem)
        q = self.query(modelo, modelo.id == registro_id, apenas_ativos=apenas_ativos)
        if bloquear:
            q = q.with_for_update()
        registro = q.first()
        if registro is None:
            raise NaoEncontradoError(mensagem)
        return registro

    def adicionar(self, registro: M) -> M:
        registro.tenant_id = self.tenant_id
        self.db.add(registro)
        return registro

    def salvar(self, registro=None):
        """Confirma a transação e recarrega o registro informado."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if registro is not None:
            self.db.refresh(registro)
        return registro

    def remover(self, registro) -> None:
        self.db.delete(registro)
        self.salvar()
