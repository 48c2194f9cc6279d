# database.py
"""
Conexão com o banco relacional via SQLAlchemy.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config import DATABASE_URL

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

Base = declarative_base()


def init_db():
    """Cria as tabelas que ainda não existem."""
    import models  # noqa: F401  registra os modelos no metadata
    Base.metadata.create_all(bind=engine)
    logger.info("Tabelas do banco verificadas/criadas.")


def get_db():
    """Dependência do FastAPI que entrega uma sessão por requisição."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
