# config.py
"""
Configurações da aplicação lidas de variáveis de ambiente.
"""

import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./caleidoscopio.db")

# Sistema 1 (gestor de identidade e tenants)
MANAGER_API_URL = os.getenv("MANAGER_API_URL", "http://localhost:3000").rstrip("/")
MANAGER_API_TIMEOUT = float(os.getenv("MANAGER_API_TIMEOUT", "10"))
PRODUTO_SSO = os.getenv("SSO_PRODUCT", "educational")

CLOUD_STORAGE_BUCKET_NAME = os.getenv("CLOUD_STORAGE_BUCKET_NAME")

CORS_ORIGINS = [origem.strip() for origem in os.getenv("CORS_ORIGINS", "*").split(",") if origem.strip()]

# Expõe o texto da exceção nas respostas 500. Apenas para desenvolvimento.
DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")
