# storage_utils.py
"""
Envio de arquivos para o Google Cloud Storage.
"""

import logging
import re
import unicodedata

from google.cloud import storage

logger = logging.getLogger(__name__)


def sanitizar_nome_arquivo(nome: str) -> str:
    """Remove acentos e troca caracteres fora de [A-Za-z0-9._-] por '_'."""
    normalizado = unicodedata.normalize("NFKD", nome).encode("ascii", "ignore").decode("ascii")
    limpo = re.sub(r"[^A-Za-z0-9._-]", "_", normalizado).strip("._")
    return limpo or "arquivo"


def enviar_arquivo(conteudo: bytes, nome_blob: str, content_type: str, bucket_name: str) -> str:
    """Envia o conteúdo ao bucket e retorna a URL pública do blob."""
    storage_client = storage.Client()
    bucket = storage_client.bucket(bucket_name)
    blob = bucket.blob(nome_blob)
    blob.upload_from_string(conteudo, content_type=content_type)
    logger.info(f"Arquivo enviado para gs://{bucket_name}/{nome_blob} ({len(conteudo)} bytes)")
    return blob.public_url
