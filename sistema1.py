# sistema1.py
"""
Cliente HTTP do Sistema 1 (gestor de identidade, tenants e usuários).

O login acontece em três etapas: autenticação, verificação de acesso ao
produto e emissão do token SSO. O token emitido é revalidado a cada
requisição recebida por esta API.
"""

import logging
from typing import Optional, Dict, List

import httpx

from config import MANAGER_API_URL, MANAGER_API_TIMEOUT, PRODUTO_SSO

logger = logging.getLogger(__name__)


class Sistema1Error(Exception):
    """Falha de comunicação ou resposta de erro do Sistema 1."""

    def __init__(self, mensagem: str, status_code: int = 502):
        super().__init__(mensagem)
        self.status_code = status_code


def _mensagem_erro(response: httpx.Response) -> str:
    try:
        corpo = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(corpo, dict):
        return corpo.get("error") or corpo.get("message") or f"HTTP {response.status_code}"
    return f"HTTP {response.status_code}"


class Sistema1Client:

    def __init__(self, base_url: str = MANAGER_API_URL, timeout: float = MANAGER_API_TIMEOUT,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
            headers={"Accept": "application/json"},
        )

    @staticmethod
    def _json(response: httpx.Response) -> Dict:
        if response.is_error:
            raise Sistema1Error(_mensagem_erro(response), response.status_code)
        try:
            return response.json()
        except ValueError:
            raise Sistema1Error("Resposta inválida do Sistema 1")

    def validate_sso_token(self, token: str) -> bool:
        """Retorna True somente se o Sistema 1 confirmar o token (`valid: true`)."""
        if not token:
            return False
        try:
            with self._client() as client:
                response = client.get(f"/api/products/sso/{PRODUTO_SSO}", params={"token": token})
            dados = self._json(response)
        except (httpx.HTTPError, Sistema1Error) as e:
            logger.warning(f"Falha ao validar token SSO no Sistema 1: {e}")
            return False
        return dados.get("valid") is True

    def sso_login(self, email: str, password: str) -> Dict:
        """
        Executa o fluxo completo de login no Sistema 1.

        Returns:
            Dicionário com `user` (incluindo `tenant`), `config` e `token` (token SSO do produto).

        Raises:
            Sistema1Error: credenciais inválidas, acesso negado ou falha de rede.
        """
        try:
            # Um único client mantém os cookies de sessão entre as etapas
            with self._client() as client:
                login = self._json(client.post("/api/auth/login", json={"email": email, "password": password}))
                if not login.get("success") or not login.get("user"):
                    raise Sistema1Error("Resposta de login inválida do Sistema 1", 401)

                auth_headers = {"Authorization": f"Bearer {login['token']}"} if login.get("token") else {}

                acesso = client.post(
                    "/api/auth/validate-access",
                    json={"productSlug": PRODUTO_SSO, "userEmail": email},
                    headers=auth_headers,
                ).json()
                if not acesso.get("hasAccess"):
                    raise Sistema1Error(acesso.get("error") or "Você não tem acesso ao módulo educacional", 403)

                sso = self._json(client.post(f"/api/products/sso/{PRODUTO_SSO}", headers=auth_headers))
                if not sso.get("token"):
                    raise Sistema1Error("Erro ao gerar token de acesso")
        except httpx.HTTPError as e:
            logger.error(f"Erro de conexão com o Sistema 1 durante o login: {e}")
            raise Sistema1Error("Erro de conexão com o Sistema 1")
        except ValueError:
            raise Sistema1Error("Resposta inválida do Sistema 1")

        usuario = dict(acesso.get("user") or login["user"])
        usuario["tenant"] = acesso.get("tenant") or login["user"].get("tenant")
        logger.info(f"Login SSO concluído para {email}")
        return {"user": usuario, "config": acesso.get("config"), "token": sso["token"]}

    def listar_usuarios(self, tenant_id: str, token: str) -> List[Dict]:
        try:
            with self._client() as client:
                dados = self._json(client.get(
                    "/api/users", params={"tenantId": tenant_id},
                    headers={"Authorization": f"Bearer {token}"},
                ))
        except httpx.HTTPError as e:
            logger.error(f"Erro ao listar usuários do tenant {tenant_id} no Sistema 1: {e}")
            raise Sistema1Error("Erro de conexão com o Sistema 1")
        if isinstance(dados, list):
            return dados
        return dados.get("users") or dados.get("data") or []

    def criar_usuario(self, dados: Dict, token: str) -> Dict:
        try:
            with self._client() as client:
                resposta = self._json(client.post(
                    "/api/users/create-with-sso", params={"token": token}, json=dados,
                ))
        except httpx.HTTPError as e:
            logger.error(f"Erro ao criar usuário no Sistema 1: {e}")
            raise Sistema1Error("Erro de conexão com o Sistema 1")
        return resposta.get("user") or resposta


def get_sistema1() -> Sistema1Client:
    """Dependência do FastAPI. Substituída nos testes."""
    return Sistema1Client()
