import pytest


@pytest.fixture
def agendamento_base(paciente, profissional):
    return {
        "pacienteId": paciente["id"],
        "profissionalId": profissional["id"],
        "data_hora": "2024-06-01T10:00:00Z",
        "duracao_minutos": 60,
    }


def test_criar_agendamento_calcula_horario_fim(client, admin_headers, agendamento_base):
    r = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    assert r.status_code == 201, r.text
    dados = r.json()["data"]
    assert dados["horario_fim"].startswith("2024-06-01T11:00:00")
    assert dados["duracao_minutos"] == 60
    assert dados["status"] == "AGENDADO"
    assert dados["salaId"] is None
    assert dados["paciente"]["nome"] == "João Paciente"


def test_sobreposicao_do_profissional_retorna_409(client, admin_headers, agendamento_base):
    assert client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base).status_code == 201

    segundo = dict(agendamento_base, data_hora="2024-06-01T10:30:00Z")
    r = client.post("/api/agendamentos", headers=admin_headers, json=segundo)
    assert r.status_code == 409
    assert r.json() == {"success": False, "error": "Já existe um agendamento neste horário para este profissional"}


def test_horarios_encostados_nao_conflitam(client, admin_headers, agendamento_base):
    assert client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base).status_code == 201

    seguinte = dict(agendamento_base, data_hora="2024-06-01T11:00:00Z")
    r = client.post("/api/agendamentos", headers=admin_headers, json=seguinte)
    assert r.status_code == 201, r.text


def test_sala_ocupada_retorna_409(client, admin_headers, agendamento_base, sala):
    r = client.post("/api/agendamentos", headers=admin_headers, json=dict(agendamento_base, salaId=sala["id"]))
    assert r.status_code == 201

    outro = client.post("/api/terapeutas", headers=admin_headers, json={"nome": "Bruno", "especialidade": "Fono"}).json()["data"]
    r = client.post("/api/agendamentos", headers=admin_headers, json=dict(
        agendamento_base, profissionalId=outro["id"], salaId=sala["id"], data_hora="2024-06-01T10:15:00Z",
    ))
    assert r.status_code == 409
    assert r.json()["error"] == "Sala já está ocupada neste horário"


def test_agendamento_cancelado_nao_bloqueia_horario(client, admin_headers, agendamento_base):
    r = client.post("/api/agendamentos", headers=admin_headers, json=dict(agendamento_base, status="CANCELADO"))
    assert r.status_code == 201

    r = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    assert r.status_code == 201, r.text


def test_cancelar_libera_o_horario(client, admin_headers, agendamento_base):
    primeiro = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base).json()["data"]

    r = client.put(f"/api/agendamentos/{primeiro['id']}", headers=admin_headers, json={"status": "CANCELADO"})
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "CANCELADO"

    r = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    assert r.status_code == 201


def test_mover_agendamento_para_horario_ocupado(client, admin_headers, agendamento_base):
    client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    tarde = client.post("/api/agendamentos", headers=admin_headers,
                        json=dict(agendamento_base, data_hora="2024-06-01T14:00:00Z")).json()["data"]

    r = client.put(f"/api/agendamentos/{tarde['id']}", headers=admin_headers, json={"data_hora": "2024-06-01T10:30:00Z"})
    assert r.status_code == 409


def test_atualizar_com_campo_obrigatorio_nulo(client, admin_headers, agendamento_base):
    agendamento = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base).json()["data"]
    url = f"/api/agendamentos/{agendamento['id']}"

    r = client.put(url, headers=admin_headers, json={"data_hora": None})
    assert r.status_code == 400
    assert r.json()["error"] == "O campo 'data_hora' não pode ser nulo"
    assert client.put(url, headers=admin_headers, json={"pacienteId": None}).status_code == 400

    r = client.put(url, headers=admin_headers, json={"horario_fim": None, "observacoes": "Trazer material"})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["horario_fim"].startswith("2024-06-01T11:00:00")


def test_sem_horario_fim_nem_duracao(client, admin_headers, agendamento_base):
    del agendamento_base["duracao_minutos"]
    r = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    assert r.status_code == 400
    assert r.json()["error"] == "Dados inválidos"


def test_horario_fim_antes_do_inicio(client, admin_headers, agendamento_base):
    del agendamento_base["duracao_minutos"]
    agendamento_base["horario_fim"] = "2024-06-01T09:00:00Z"
    r = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    assert r.status_code == 400


def test_paciente_inexistente(client, admin_headers, agendamento_base):
    agendamento_base["pacienteId"] = "nao-existe"
    r = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    assert r.status_code == 404


def test_filtro_por_periodo(client, admin_headers, agendamento_base):
    client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    client.post("/api/agendamentos", headers=admin_headers, json=dict(agendamento_base, data_hora="2024-07-01T10:00:00Z"))

    r = client.get("/api/agendamentos", headers=admin_headers,
                   params={"data_inicio": "2024-06-01T00:00:00", "data_fim": "2024-06-30T23:59:59"})
    assert r.status_code == 200
    assert len(r.json()["data"]) == 1


def test_terapeuta_ve_apenas_a_propria_agenda(client, admin_headers, terapeuta_headers, agendamento_base):
    client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base)
    outro = client.post("/api/terapeutas", headers=admin_headers, json={"nome": "Bruno", "especialidade": "Fono"}).json()["data"]
    client.post("/api/agendamentos", headers=admin_headers, json=dict(agendamento_base, profissionalId=outro["id"]))

    r = client.get("/api/agendamentos", headers=terapeuta_headers, params={"profissionalId": outro["id"]})
    assert r.status_code == 200
    dados = r.json()["data"]
    assert len(dados) == 1
    assert dados[0]["profissionalId"] == agendamento_base["profissionalId"]


def test_lote_cria_as_datas_livres(client, admin_headers, agendamento_base):
    client.post("/api/agendamentos", headers=admin_headers, json=dict(agendamento_base, data_hora="2024-06-08T10:00:00"))

    r = client.post("/api/agendamentos/batch", headers=admin_headers, json={
        "pacienteId": agendamento_base["pacienteId"],
        "profissionalId": agendamento_base["profissionalId"],
        "datas": ["2024-06-01", "2024-06-08", "2024-06-15"],
        "horario": "10:00",
        "duracao_minutos": 50,
    })
    assert r.status_code == 201, r.text
    corpo = r.json()
    assert corpo["resumo"] == {"total": 3, "sucessos": 2, "falhas": 1}
    falha = [item for item in corpo["resultados"] if not item["success"]][0]
    assert falha["data"] == "2024-06-08"
    assert "profissional" in falha["error"]


def test_lote_sem_nenhum_sucesso_retorna_400(client, admin_headers, agendamento_base):
    r = client.post("/api/agendamentos/batch", headers=admin_headers, json={
        "pacienteId": "nao-existe",
        "profissionalId": agendamento_base["profissionalId"],
        "datas": ["2024-06-01", "2024-06-08"],
        "horario": "10:00",
    })
    assert r.status_code == 400
    corpo = r.json()
    assert corpo["success"] is False
    assert corpo["resumo"]["falhas"] == 2


def test_excluir_agendamento_exige_admin(client, admin_headers, terapeuta_headers, agendamento_base):
    agendamento = client.post("/api/agendamentos", headers=admin_headers, json=agendamento_base).json()["data"]

    assert client.delete(f"/api/agendamentos/{agendamento['id']}", headers=terapeuta_headers).status_code == 403
    assert client.delete(f"/api/agendamentos/{agendamento['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/agendamentos/{agendamento['id']}", headers=admin_headers).status_code == 404
