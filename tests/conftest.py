import base64
import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  registra os modelos no metadata
from database import Base, get_db
from main import app
from sistema1 import Sistema1Client, get_sistema1

TOKEN_VALIDO = "token-sso-valido"

TENANT_A = {"id": "tenant-a", "name": "Clínica A", "slug": "clinica-a"}
TENANT_B = {"id": "tenant-b", "name": "Clínica B", "slug": "clinica-b"}

USUARIOS_SISTEMA1 = [
    {"id": "user-terapeuta", "name": "Terapeuta", "email": "terapeuta@clinica.com", "role": "USER"},
    {"id": "user-outro", "name": "Outro", "email": "outro@clinica.com", "role": "USER"},
]


def _sistema1_fake(request: httpx.Request) -> httpx.Response:
    """Simula as rotas do Sistema 1 usadas pela API."""
    caminho = request.url.path
    if caminho == "/api/products/sso/educational" and request.method == "GET":
        return httpx.Response(200, json={"valid": request.url.params.get("token") == TOKEN_VALIDO})
    if caminho == "/api/users" and request.method == "GET":
        return httpx.Response(200, json={"users": [dict(u) for u in USUARIOS_SISTEMA1]})
    if caminho == "/api/users/create-with-sso":
        corpo = json.loads(request.content)
        return httpx.Response(201, json={"user": {"id": "user-novo", **corpo}})
    if caminho == "/api/auth/login":
        corpo = json.loads(request.content)
        if corpo.get("password") != "senha-correta":
            return httpx.Response(401, json={"error": "Credenciais inválidas"})
        return httpx.Response(200, json={
            "success": True, "token": "jwt-sistema1",
            "user": {"id": "user-admin", "email": corpo["email"], "role": "ADMIN", "tenant": TENANT_A},
        })
    if caminho == "/api/auth/validate-access":
        return httpx.Response(200, json={"hasAccess": True, "tenant": TENANT_A})
    if caminho == "/api/products/sso/educational" and request.method == "POST":
        return httpx.Response(200, json={"token": TOKEN_VALIDO})
    return httpx.Response(404, json={"error": "rota desconhecida"})


@pytest.fixture
def sistema1():
    return Sistema1Client(base_url="http://sistema1.test", transport=httpx.MockTransport(_sistema1_fake))


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield TestingSession
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session, sistema1):
    def override_get_db():
        db = db_session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sistema1] = lambda: sistema1
    yield TestClient(app)
    app.dependency_overrides.clear()


def cabecalhos(user_id="user-admin", role="ADMIN", tenant=TENANT_A, token=TOKEN_VALIDO):
    """Monta os headers de sessão que o front-end envia."""
    usuario = {"id": user_id, "email": f"{user_id}@clinica.com", "name": user_id, "role": role, "tenant": tenant}
    dados = base64.b64encode(json.dumps(usuario).encode("utf-8")).decode("ascii")
    headers = {"X-User-Data": dados}
    if token:
        headers["X-Auth-Token"] = token
    return headers


@pytest.fixture
def admin_headers():
    return cabecalhos()


@pytest.fixture
def terapeuta_headers():
    return cabecalhos(user_id="user-terapeuta", role="USER")


@pytest.fixture
def outro_tenant_headers():
    return cabecalhos(user_id="user-admin-b", role="ADMIN", tenant=TENANT_B)


@pytest.fixture
def profissional(client, admin_headers):
    r = client.post("/api/terapeutas", headers=admin_headers, json={
        "nome": "Ana Terapeuta", "especialidade": "ABA", "email": "ana@clinica.com",
        "usuarioId": "user-terapeuta",
    })
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.fixture
def paciente(client, admin_headers, profissional):
    r = client.post("/api/pacientes", headers=admin_headers, json={
        "nome": "João Paciente", "cpf": "123.456.789-00", "nascimento": "2018-05-10",
        "profissionalId": profissional["id"],
    })
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.fixture
def sala(client, admin_headers):
    r = client.post("/api/salas", headers=admin_headers, json={"nome": "Sala 1", "capacidade": 2})
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.fixture
def atividade(client, admin_headers):
    r = client.post("/api/atividades", headers=admin_headers, json={
        "nome": "Contato visual",
        "tipo": "Comunicação",
        "instrucoes": [{"texto": "Olhe para mim"}, {"texto": "Aponte o objeto"}],
        "pontuacoes": [{"sigla": "+", "grau": "Independente"}, {"sigla": "AFT", "grau": "Alta"}],
    })
    assert r.status_code == 201, r.text
    return r.json()["data"]
