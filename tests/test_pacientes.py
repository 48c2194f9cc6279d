from tests.conftest import cabecalhos


def test_criar_paciente_normaliza_cpf(client, paciente):
    assert paciente["cpf"] == "12345678900"
    assert paciente["ativo"] is True
    assert paciente["plano_saude"] is None
    assert paciente["profissional"]["nome"] == "Ana Terapeuta"


def test_cpf_duplicado(client, admin_headers, paciente):
    r = client.post("/api/pacientes", headers=admin_headers, json={
        "nome": "Outro", "cpf": "12345678900", "nascimento": "2019-01-01",
    })
    assert r.status_code == 409


def test_plano_particular_vira_nulo(client, admin_headers):
    r = client.post("/api/pacientes", headers=admin_headers, json={
        "nome": "Maria", "nascimento": "2017-03-02", "plano_saude": "Particular",
    })
    assert r.status_code == 201
    assert r.json()["data"]["plano_saude"] is None


def test_busca_por_nome_e_cpf(client, admin_headers, paciente):
    client.post("/api/pacientes", headers=admin_headers, json={"nome": "Maria Silva", "nascimento": "2017-03-02"})

    por_nome = client.get("/api/pacientes", headers=admin_headers, params={"busca": "joão"}).json()["data"]
    assert [p["id"] for p in por_nome] == [paciente["id"]]

    por_cpf = client.get("/api/pacientes", headers=admin_headers, params={"busca": "456.789"}).json()["data"]
    assert [p["id"] for p in por_cpf] == [paciente["id"]]


def test_soft_delete(client, admin_headers, paciente):
    r = client.delete(f"/api/pacientes/{paciente['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["success"] is True

    assert client.get("/api/pacientes", headers=admin_headers).json()["data"] == []
    r = client.get(f"/api/pacientes/{paciente['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"]["ativo"] is False


def test_terapeuta_nao_exclui_paciente(client, terapeuta_headers, paciente):
    r = client.delete(f"/api/pacientes/{paciente['id']}", headers=terapeuta_headers)
    assert r.status_code == 403


def test_terapeuta_ve_apenas_seus_pacientes(client, admin_headers, terapeuta_headers, paciente):
    client.post("/api/pacientes", headers=admin_headers, json={"nome": "Sem Terapeuta", "nascimento": "2016-01-01"})

    dados = client.get("/api/pacientes", headers=terapeuta_headers).json()["data"]
    assert [p["id"] for p in dados] == [paciente["id"]]


def test_usuario_sem_vinculo_nao_ve_pacientes(client, paciente):
    r = client.get("/api/pacientes", headers=cabecalhos(user_id="user-sem-vinculo", role="USER"))
    assert r.status_code == 200
    assert r.json()["data"] == []


def test_atualizar_paciente(client, admin_headers, paciente):
    r = client.put(f"/api/pacientes/{paciente['id']}", headers=admin_headers, json={"telefone": "(11) 99999-0000"})
    assert r.status_code == 200
    dados = r.json()["data"]
    assert dados["telefone"] == "(11) 99999-0000"
    assert dados["nome"] == "João Paciente"


def test_atualizar_paciente_com_nome_nulo(client, admin_headers, paciente):
    url = f"/api/pacientes/{paciente['id']}"
    r = client.put(url, headers=admin_headers, json={"nome": None, "telefone": "(11) 90000-0000"})
    assert r.status_code == 400
    assert r.json()["error"] == "O campo 'nome' não pode ser nulo"

    dados = client.get(url, headers=admin_headers).json()["data"]
    assert dados["nome"] == "João Paciente"
    assert dados["telefone"] != "(11) 90000-0000"


def test_sala_com_agendamento_nao_pode_ser_excluida(client, admin_headers, paciente, profissional, sala):
    client.post("/api/agendamentos", headers=admin_headers, json={
        "pacienteId": paciente["id"], "profissionalId": profissional["id"], "salaId": sala["id"],
        "data_hora": "2024-06-01T10:00:00Z", "duracao_minutos": 60,
    })

    r = client.delete(f"/api/salas/{sala['id']}", headers=admin_headers)
    assert r.status_code == 409


def test_excluir_sala_livre(client, admin_headers, sala):
    assert client.delete(f"/api/salas/{sala['id']}", headers=admin_headers).status_code == 200
    assert client.get("/api/salas", headers=admin_headers).json()["data"] == []


def test_terapeuta_duplicado_por_email(client, admin_headers, profissional):
    r = client.post("/api/terapeutas", headers=admin_headers, json={
        "nome": "Outra Ana", "especialidade": "ABA", "email": "ana@clinica.com",
    })
    assert r.status_code == 409
