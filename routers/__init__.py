# routers/__init__.py
"""
Routers modulares para a API FastAPI
"""

from . import auth
from . import usuarios_sistema1
from . import pacientes
from . import terapeutas
from . import cadastros
from . import agendamentos
from . import prontuarios
from . import anamneses
from . import clinico
from . import atividades
from . import curriculum
from . import avaliacoes
from . import sessoes
from . import relatorios
from . import dashboard
from . import upload

__all__ = [
    'auth',
    'usuarios_sistema1',
    'pacientes',
    'terapeutas',
    'cadastros',
    'agendamentos',
    'prontuarios',
    'anamneses',
    'clinico',
    'atividades',
    'curriculum',
    'avaliacoes',
    'sessoes',
    'relatorios',
    'dashboard',
    'upload',
]
