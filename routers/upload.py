# routers/upload.py
"""
Router de upload de arquivos (anexos de prontuário, documentos de anamnese)
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File

import config
import schemas
import storage_utils
from auth import ContextoRequisicao, exige_permissao

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])

TAMANHO_MAXIMO = 10 * 1024 * 1024  # 10MB

TIPOS_PERMITIDOS = {
    # Documentos
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    # Imagens
    "image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp",
    # Vídeos
    "video/mp4", "video/mpeg", "video/quicktime", "video/webm",
    # Áudios
    "audio/mpeg", "audio/wav", "audio/ogg", "audio/webm",
}


@router.post("/upload", response_model=schemas.Resposta[schemas.UploadResponse])
async def upload_arquivo(
    file: Optional[UploadFile] = File(None),
    ctx: ContextoRequisicao = Depends(exige_permissao("upload_files")),
):
    """Envia o arquivo ao bucket da clínica em `{tenantId}/{timestamp}-{nome}`."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="Nenhum arquivo foi enviado")

    conteudo = await file.read()
    if len(conteudo) > TAMANHO_MAXIMO:
        raise HTTPException(status_code=400, detail="Arquivo muito grande. Tamanho máximo: 10MB")

    if file.content_type not in TIPOS_PERMITIDOS:
        raise HTTPException(status_code=400, detail="Tipo de arquivo não permitido")

    if not config.CLOUD_STORAGE_BUCKET_NAME:
        logger.error("CLOUD_STORAGE_BUCKET_NAME não configurado; upload recusado")
        raise HTTPException(status_code=500, detail="Armazenamento de arquivos não configurado")

    nome_blob = f"{ctx.escopo.tenant_id}/{int(time.time() * 1000)}-{storage_utils.sanitizar_nome_arquivo(file.filename)}"
    url = storage_utils.enviar_arquivo(conteudo, nome_blob, file.content_type, config.CLOUD_STORAGE_BUCKET_NAME)

    return {
        "success": True,
        "data": {
            "url": url,
            "fileName": file.filename,
            "fileType": file.content_type,
            "fileSize": len(conteudo),
            "downloadUrl": f"{url}?download=1",
        },
    }
