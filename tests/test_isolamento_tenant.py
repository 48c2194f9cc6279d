def test_avaliacao_de_outro_tenant_retorna_404(client, admin_headers, outro_tenant_headers):
    avaliacao = client.post("/api/avaliacoes", headers=outro_tenant_headers,
                            json={"tipo": "VB-MAPP", "nome": "Marcos"}).json()["data"]

    r = client.get("/api/avaliacoes", headers=admin_headers, params={"id": avaliacao["id"]})
    assert r.status_code == 404
    assert r.json()["success"] is False

    r = client.get("/api/avaliacoes", headers=outro_tenant_headers, params={"id": avaliacao["id"]})
    assert r.status_code == 200
    assert r.json()["data"]["tarefas"] == []


def test_paciente_de_outro_tenant_e_invisivel(client, paciente, outro_tenant_headers):
    assert client.get(f"/api/pacientes/{paciente['id']}", headers=outro_tenant_headers).status_code == 404
    assert client.put(f"/api/pacientes/{paciente['id']}", headers=outro_tenant_headers,
                      json={"nome": "Invasor"}).status_code == 404
    assert client.delete(f"/api/pacientes/{paciente['id']}", headers=outro_tenant_headers).status_code == 404
    assert client.get("/api/pacientes", headers=outro_tenant_headers).json()["data"] == []


def test_agendar_com_paciente_de_outro_tenant(client, paciente, outro_tenant_headers):
    profissional_b = client.post("/api/terapeutas", headers=outro_tenant_headers,
                                 json={"nome": "Carla", "especialidade": "TO"}).json()["data"]
    r = client.post("/api/agendamentos", headers=outro_tenant_headers, json={
        "pacienteId": paciente["id"],
        "profissionalId": profissional_b["id"],
        "data_hora": "2024-06-01T10:00:00Z",
        "duracao_minutos": 60,
    })
    assert r.status_code == 404


def test_registros_clinicos_de_outro_tenant(client, admin_headers, paciente, outro_tenant_headers):
    r = client.post(f"/api/pacientes/{paciente['id']}/diagnosticos", headers=admin_headers,
                    json={"cid10": "F84.0", "diagnostico_desc": "Transtorno do espectro autista"})
    assert r.status_code == 201

    r = client.get(f"/api/pacientes/{paciente['id']}/diagnosticos", headers=outro_tenant_headers)
    assert r.status_code == 404


def test_sessao_de_outro_tenant(client, admin_headers, paciente, atividade, outro_tenant_headers):
    sessao = client.post("/api/sessoes", headers=admin_headers,
                         json={"pacienteId": paciente["id"], "atividadeId": atividade["id"]}).json()["data"]

    assert client.get("/api/sessoes", headers=outro_tenant_headers, params={"id": sessao["id"]}).status_code == 404
    r = client.post("/api/sessoes/avaliar", headers=outro_tenant_headers, json={
        "sessaoId": sessao["id"], "instrucaoId": atividade["instrucoes"][0]["id"], "nota": 4,
    })
    assert r.status_code == 404


def test_listagens_separadas_por_tenant(client, admin_headers, outro_tenant_headers, sala, atividade):
    assert len(client.get("/api/salas", headers=admin_headers).json()["data"]) == 1
    assert client.get("/api/salas", headers=outro_tenant_headers).json()["data"] == []
    assert client.get("/api/atividades", headers=outro_tenant_headers).json()["data"] == []
