from tests.conftest import TENANT_A, cabecalhos


def test_rota_protegida_sem_headers(client):
    r = client.get("/api/pacientes")
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Não autorizado"}


def test_token_sso_rejeitado(client):
    r = client.get("/api/pacientes", headers=cabecalhos(token="token-expirado"))
    assert r.status_code == 401


def test_x_user_data_corrompido(client):
    r = client.get("/api/pacientes", headers={"X-User-Data": "isto-nao-e-base64!!", "X-Auth-Token": "qualquer"})
    assert r.status_code == 401


def test_usuario_sem_clinica(client):
    r = client.get("/api/pacientes", headers=cabecalhos(tenant=None))
    assert r.status_code == 403
    assert "clínica" in r.json()["error"]


def test_papel_sem_permissao(client, terapeuta_headers):
    r = client.post("/api/salas", headers=terapeuta_headers, json={"nome": "Sala X"})
    assert r.status_code == 403
    assert r.json()["success"] is False


def test_validate_devolve_usuario(client, admin_headers):
    r = client.get("/api/auth/validate", headers=admin_headers)
    assert r.status_code == 200
    usuario = r.json()["data"]
    assert usuario["id"] == "user-admin"
    assert usuario["tenant"]["id"] == TENANT_A["id"]


def test_login_sucesso(client):
    r = client.post("/api/auth/login", json={"email": "admin@clinica.com", "password": "senha-correta"})
    assert r.status_code == 200, r.text
    dados = r.json()["data"]
    assert dados["token"] == "token-sso-valido"
    assert dados["user"]["token"] == dados["token"]
    assert dados["user"]["tenant"]["id"] == TENANT_A["id"]


def test_login_senha_errada(client):
    r = client.post("/api/auth/login", json={"email": "admin@clinica.com", "password": "errada"})
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_login_payload_invalido(client):
    r = client.post("/api/auth/login", json={"email": "nao-e-email"})
    assert r.status_code == 400
    assert r.json()["error"] == "Dados inválidos"
