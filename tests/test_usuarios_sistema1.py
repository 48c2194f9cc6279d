import httpx
import pytest

from sistema1 import Sistema1Client, Sistema1Error
from tests.conftest import TOKEN_VALIDO


def test_listar_usuarios_indica_vinculo(client, admin_headers, profissional):
    r = client.get("/api/usuarios-sistema1", headers=admin_headers)
    assert r.status_code == 200, r.text
    usuarios = {u["id"]: u for u in r.json()["data"]}
    assert usuarios["user-terapeuta"]["profissionalId"] == profissional["id"]
    assert usuarios["user-outro"]["profissionalId"] is None


def test_listar_usuarios_exige_admin(client, terapeuta_headers):
    assert client.get("/api/usuarios-sistema1", headers=terapeuta_headers).status_code == 403


def test_criar_usuario_no_sistema1(client, admin_headers):
    r = client.post("/api/usuarios-sistema1", headers=admin_headers,
                    json={"name": "Nova Terapeuta", "email": "nova@clinica.com"})
    assert r.status_code == 201, r.text
    usuario = r.json()["data"]
    assert usuario["id"] == "user-novo"
    assert usuario["tenantId"] == "tenant-a"


def test_vincular_usuario_ja_vinculado(client, admin_headers, profissional):
    outro = client.post("/api/terapeutas", headers=admin_headers, json={"nome": "Bruno", "especialidade": "Fono"}).json()["data"]

    r = client.post("/api/usuarios-sistema1/vincular", headers=admin_headers,
                    json={"usuarioId": "user-terapeuta", "profissionalId": outro["id"]})
    assert r.status_code == 409

    r = client.post("/api/usuarios-sistema1/vincular", headers=admin_headers,
                    json={"usuarioId": "user-outro", "profissionalId": outro["id"]})
    assert r.status_code == 200
    assert r.json()["data"]["usuarioId"] == "user-outro"


def test_desfazer_vinculo(client, admin_headers, profissional):
    r = client.post("/api/usuarios-sistema1/vincular", headers=admin_headers,
                    json={"usuarioId": None, "profissionalId": profissional["id"]})
    assert r.status_code == 200
    assert r.json()["data"]["usuarioId"] is None
    assert r.json()["message"] == "Vínculo removido"


def _cliente(handler):
    return Sistema1Client(base_url="http://sistema1.test", transport=httpx.MockTransport(handler))


def test_validate_sso_token(sistema1):
    assert sistema1.validate_sso_token(TOKEN_VALIDO) is True
    assert sistema1.validate_sso_token("outro") is False
    assert sistema1.validate_sso_token("") is False


def test_validate_sso_token_com_falha_de_rede():
    def handler(request):
        raise httpx.ConnectError("sem rota", request=request)

    assert _cliente(handler).validate_sso_token(TOKEN_VALIDO) is False


def test_sso_login_sem_acesso_ao_produto():
    def handler(request):
        if request.url.path == "/api/auth/login":
            return httpx.Response(200, json={"success": True, "token": "jwt", "user": {"id": "u1"}})
        return httpx.Response(200, json={"hasAccess": False, "error": "Produto não contratado"})

    with pytest.raises(Sistema1Error) as erro:
        _cliente(handler).sso_login("a@b.com", "x")
    assert erro.value.status_code == 403
    assert str(erro.value) == "Produto não contratado"


def test_sso_login_envia_bearer():
    recebidos = []

    def handler(request):
        recebidos.append((request.url.path, request.headers.get("Authorization")))
        if request.url.path == "/api/auth/login":
            return httpx.Response(200, json={"success": True, "token": "jwt", "user": {"id": "u1", "tenant": {"id": "t1"}}})
        if request.url.path == "/api/auth/validate-access":
            return httpx.Response(200, json={"hasAccess": True})
        return httpx.Response(200, json={"token": "sso"})

    resultado = _cliente(handler).sso_login("a@b.com", "x")
    assert resultado["token"] == "sso"
    assert resultado["user"]["tenant"] == {"id": "t1"}
    assert recebidos[1:] == [
        ("/api/auth/validate-access", "Bearer jwt"),
        ("/api/products/sso/educational", "Bearer jwt"),
    ]


def test_listar_usuarios_erro_http():
    def handler(request):
        return httpx.Response(500, json={"error": "falhou"})

    with pytest.raises(Sistema1Error) as erro:
        _cliente(handler).listar_usuarios("t1", "tok")
    assert erro.value.status_code == 500
