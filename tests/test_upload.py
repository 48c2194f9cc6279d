import pytest

import config
import storage_utils


@pytest.fixture
def bucket(monkeypatch):
    enviados = []

    def enviar_fake(conteudo, nome_blob, content_type, bucket_name):
        enviados.append((nome_blob, content_type, bucket_name, len(conteudo)))
        return f"https://storage.googleapis.com/{bucket_name}/{nome_blob}"

    monkeypatch.setattr(config, "CLOUD_STORAGE_BUCKET_NAME", "bucket-teste")
    monkeypatch.setattr(storage_utils, "enviar_arquivo", enviar_fake)
    return enviados


def test_upload_envia_para_pasta_do_tenant(client, admin_headers, bucket):
    r = client.post("/api/upload", headers=admin_headers,
                    files={"file": ("Relatório Final.pdf", b"%PDF-1.4 conteudo", "application/pdf")})
    assert r.status_code == 200, r.text
    dados = r.json()["data"]

    nome_blob, content_type, bucket_name, tamanho = bucket[0]
    assert nome_blob.startswith("tenant-a/")
    assert nome_blob.endswith("-Relatorio_Final.pdf")
    assert bucket_name == "bucket-teste"
    assert dados["fileName"] == "Relatório Final.pdf"
    assert dados["fileType"] == "application/pdf"
    assert dados["fileSize"] == tamanho
    assert dados["downloadUrl"] == dados["url"] + "?download=1"


def test_upload_sem_arquivo(client, admin_headers, bucket):
    r = client.post("/api/upload", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Nenhum arquivo foi enviado"


def test_upload_tipo_nao_permitido(client, admin_headers, bucket):
    r = client.post("/api/upload", headers=admin_headers,
                    files={"file": ("script.sh", b"echo oi", "application/x-sh")})
    assert r.status_code == 400
    assert bucket == []


def test_upload_sem_bucket_configurado(client, admin_headers, monkeypatch):
    monkeypatch.setattr(config, "CLOUD_STORAGE_BUCKET_NAME", None)
    r = client.post("/api/upload", headers=admin_headers,
                    files={"file": ("foto.png", b"\x89PNG", "image/png")})
    assert r.status_code == 500


def test_upload_exige_autenticacao(client, bucket):
    r = client.post("/api/upload", files={"file": ("foto.png", b"\x89PNG", "image/png")})
    assert r.status_code == 401


def test_sanitizar_nome_arquivo():
    assert storage_utils.sanitizar_nome_arquivo("Avaliação (1).pdf") == "Avaliacao__1_.pdf"
    assert storage_utils.sanitizar_nome_arquivo("...") == "arquivo"
