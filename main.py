# caleidoscopio-backend/main.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from crud import NaoEncontradoError, ConflitoError, RegraNegocioError, AcessoNegadoError
from database import init_db
from sistema1 import Sistema1Error
from routers import (
    auth, usuarios_sistema1, pacientes, terapeutas, cadastros, agendamentos,
    prontuarios, anamneses, clinico, atividades, curriculum, avaliacoes,
    sessoes, relatorios, dashboard, upload,
)

# --- Configuração da Aplicação ---
app = FastAPI(
    title="API Caleidoscópio",
    description="Backend multi-tenant para clínicas de terapia, com identidade delegada ao Sistema 1.",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# --- Evento de Startup ---
@app.on_event("startup")
def startup_event():
    """Cria as tabelas do banco ao iniciar a aplicação."""
    init_db()


# =================================================================================
# TRATAMENTO DE ERROS (envelope {success: false, error})
# =================================================================================

def _erro(status_code: int, mensagem: str, **extras) -> JSONResponse:
    conteudo = {"success": False, "error": mensagem}
    conteudo.update(extras)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(conteudo))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        return _erro(exc.status_code, exc.detail.get("error", ""), **{k: v for k, v in exc.detail.items() if k != "error"})
    return _erro(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _erro(status.HTTP_400_BAD_REQUEST, "Dados inválidos", detalhes=exc.errors())


@app.exception_handler(NaoEncontradoError)
async def nao_encontrado_handler(request: Request, exc: NaoEncontradoError):
    return _erro(status.HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(ConflitoError)
async def conflito_handler(request: Request, exc: ConflitoError):
    return _erro(status.HTTP_409_CONFLICT, str(exc), **exc.extras)


@app.exception_handler(RegraNegocioError)
async def regra_negocio_handler(request: Request, exc: RegraNegocioError):
    return _erro(status.HTTP_400_BAD_REQUEST, str(exc), **exc.extras)


@app.exception_handler(AcessoNegadoError)
async def acesso_negado_handler(request: Request, exc: AcessoNegadoError):
    return _erro(status.HTTP_403_FORBIDDEN, str(exc))


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return _erro(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(Sistema1Error)
async def sistema1_error_handler(request: Request, exc: Sistema1Error):
    logger.error(f"Falha na comunicação com o Sistema 1 em {request.url.path}: {exc}")
    return _erro(exc.status_code, str(exc))


@app.exception_handler(Exception)
async def erro_inesperado_handler(request: Request, exc: Exception):
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}: {exc}")
    if config.DEBUG:
        return _erro(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro interno do servidor", detalhes=str(exc))
    return _erro(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro interno do servidor")


# =================================================================================
# ROTAS
# =================================================================================

@app.get("/", tags=["Root"])
def root():
    return {"mensagem": "Bem-vindo à API Caleidoscópio", "versao": app.version}


for modulo in (
    auth, usuarios_sistema1, pacientes, terapeutas, cadastros, agendamentos,
    prontuarios, anamneses, clinico, atividades, curriculum, avaliacoes,
    sessoes, relatorios, dashboard, upload,
):
    app.include_router(modulo.router, prefix="/api")
