import pytest


@pytest.fixture
def sessao_finalizada(client, admin_headers, paciente, atividade):
    sessao_id = client.post("/api/sessoes", headers=admin_headers,
                            json={"pacienteId": paciente["id"], "atividadeId": atividade["id"]}).json()["data"]["id"]
    for instrucao in atividade["instrucoes"]:
        client.post("/api/sessoes/avaliar", headers=admin_headers,
                    json={"sessaoId": sessao_id, "instrucaoId": instrucao["id"], "nota": 3})
    r = client.post("/api/sessoes/finalizar", headers=admin_headers, json={"sessaoId": sessao_id})
    assert r.status_code == 200, r.text
    return sessao_id


@pytest.fixture
def agendamento(client, admin_headers, paciente, profissional):
    r = client.post("/api/agendamentos", headers=admin_headers, json={
        "pacienteId": paciente["id"], "profissionalId": profissional["id"],
        "data_hora": "2024-06-01T10:00:00Z", "duracao_minutos": 90, "status": "ATENDIDO",
    })
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_relatorio_resumo(client, admin_headers, paciente, sessao_finalizada, agendamento):
    r = client.get("/api/relatorios/profissionais", headers=admin_headers)
    assert r.status_code == 200, r.text
    dados = r.json()["data"]

    assert dados["resumo"]["totalSessoes"] == 2
    assert dados["resumo"]["sessoesFinalizadas"] == 2
    assert dados["resumo"]["pacientesUnicos"] == 1
    assert dados["resumo"]["taxaConclusao"] == 100.0
    assert dados["distribuicao"] == {"curriculum": 0, "atividade": 1, "avaliacao": 0, "agendamento": 1}
    assert dados["agrupados"][0]["pacienteId"] == paciente["id"]
    assert dados["agrupados"][0]["total"] == 2


def test_relatorio_filtra_por_tipo_e_periodo(client, admin_headers, sessao_finalizada, agendamento):
    r = client.get("/api/relatorios/profissionais", headers=admin_headers,
                   params={"tipo": "agendamento", "dataInicio": "2024-06-01", "dataFim": "2024-06-01"})
    dados = r.json()["data"]
    assert [a["tipo"] for a in dados["atendimentos"]] == ["agendamento"]
    assert dados["atendimentos"][0]["status"] == "FINALIZADA"
    assert dados["resumo"]["horasTotais"] == 1.5


def test_relatorio_status_invalido(client, admin_headers):
    r = client.get("/api/relatorios/profissionais", headers=admin_headers, params={"status": "PERDIDO"})
    assert r.status_code == 400


def test_relatorio_tipo_invalido(client, admin_headers):
    r = client.get("/api/relatorios/profissionais", headers=admin_headers, params={"tipo": "outro"})
    assert r.status_code == 400


def test_relatorio_do_terapeuta_ignora_filtro(client, admin_headers, terapeuta_headers, paciente, agendamento):
    outro = client.post("/api/terapeutas", headers=admin_headers, json={"nome": "Bruno", "especialidade": "Fono"}).json()["data"]
    client.post("/api/agendamentos", headers=admin_headers, json={
        "pacienteId": paciente["id"], "profissionalId": outro["id"],
        "data_hora": "2024-06-02T10:00:00Z", "duracao_minutos": 60,
    })

    r = client.get("/api/relatorios/profissionais", headers=terapeuta_headers, params={"profissionais": outro["id"]})
    atendimentos = r.json()["data"]["atendimentos"]
    assert [a["id"] for a in atendimentos] == [agendamento["id"]]


def test_dashboard_admin(client, admin_headers, paciente, atividade, sessao_finalizada):
    client.post("/api/anamneses", headers=admin_headers, json={"pacienteId": paciente["id"]})

    r = client.get("/api/dashboard/stats", headers=admin_headers)
    assert r.status_code == 200
    dados = r.json()["data"]
    assert dados["totalPacientes"] == 1
    assert dados["sessoesEmAndamento"] == 0
    assert dados["sessoesRealizadasMes"] == 1
    assert dados["anamnesesPendentes"] == 1
    assert dados["atividadesCadastradas"] == 1
    assert dados["totalTerapeutas"] == 1


def test_dashboard_terapeuta_sem_total_de_terapeutas(client, terapeuta_headers, paciente):
    dados = client.get("/api/dashboard/stats", headers=terapeuta_headers).json()["data"]
    assert dados["totalPacientes"] == 1
    assert "totalTerapeutas" not in dados


def test_sessoes_recentes(client, admin_headers, sessao_finalizada):
    dados = client.get("/api/dashboard/sessoes-recentes", headers=admin_headers).json()["data"]
    assert dados["pendentes"] == []
    assert [s["id"] for s in dados["recentes"]] == [sessao_finalizada]
    assert dados["recentes"][0]["tipo"] == "atividade"
    assert dados["recentes"][0]["titulo"] == "Contato visual"
