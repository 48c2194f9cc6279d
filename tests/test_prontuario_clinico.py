def test_anamnese_registra_primeira_finalizacao(client, terapeuta_headers, paciente, profissional):
    r = client.post("/api/anamneses", headers=terapeuta_headers, json={
        "pacienteId": paciente["id"], "historiaDesenvolvimento": "Marcos motores no tempo esperado",
    })
    assert r.status_code == 201, r.text
    anamnese = r.json()["data"]
    assert anamnese["profissionalId"] == profissional["id"]
    assert anamnese["status"] == "RASCUNHO"
    assert anamnese["finalizadaEm"] is None

    r = client.put(f"/api/anamneses/{anamnese['id']}", headers=terapeuta_headers, json={"status": "FINALIZADA"})
    finalizada_em = r.json()["data"]["finalizadaEm"]
    assert finalizada_em is not None

    r = client.put(f"/api/anamneses/{anamnese['id']}", headers=terapeuta_headers, json={"status": "FINALIZADA"})
    assert r.json()["data"]["finalizadaEm"] == finalizada_em


def test_anamnese_filtra_por_status(client, admin_headers, paciente):
    client.post("/api/anamneses", headers=admin_headers, json={"pacienteId": paciente["id"]})
    client.post("/api/anamneses", headers=admin_headers, json={"pacienteId": paciente["id"], "status": "FINALIZADA"})

    r = client.get("/api/anamneses", headers=admin_headers, params={"status": "FINALIZADA"})
    dados = r.json()["data"]
    assert len(dados) == 1
    assert dados[0]["finalizadaEm"] is not None


def test_terapeuta_nao_exclui_anamnese(client, admin_headers, terapeuta_headers, paciente):
    anamnese = client.post("/api/anamneses", headers=admin_headers, json={"pacienteId": paciente["id"]}).json()["data"]
    assert client.delete(f"/api/anamneses/{anamnese['id']}", headers=terapeuta_headers).status_code == 403
    assert client.delete(f"/api/anamneses/{anamnese['id']}", headers=admin_headers).status_code == 200


def test_prontuario(client, terapeuta_headers, paciente, profissional):
    r = client.post("/api/prontuarios", headers=terapeuta_headers, json={
        "pacienteId": paciente["id"], "profissionalId": profissional["id"],
        "data_sessao": "2024-06-01T10:00:00Z", "evolucao_clinica": "Manteve atenção por 10 minutos",
    })
    assert r.status_code == 201, r.text

    dados = client.get("/api/prontuarios", headers=terapeuta_headers, params={"pacienteId": paciente["id"]}).json()["data"]
    assert len(dados) == 1
    assert dados[0]["profissional"]["nome"] == "Ana Terapeuta"


def test_registros_clinicos_aninhados_no_paciente(client, terapeuta_headers, paciente):
    base = f"/api/pacientes/{paciente['id']}"

    r = client.post(f"{base}/prescricoes", headers=terapeuta_headers, json={
        "medicamento": "Risperidona", "dosagem": "0,5mg", "frequencia": "1x ao dia",
    })
    assert r.status_code == 201, r.text
    prescricao = r.json()["data"]
    assert prescricao["profissionalId"] == "user-terapeuta"

    r = client.put(f"{base}/prescricoes/{prescricao['id']}", headers=terapeuta_headers, json={"dosagem": "1mg"})
    assert r.status_code == 200
    assert r.json()["data"]["dosagem"] == "1mg"

    r = client.post(f"{base}/encaminhamentos", headers=terapeuta_headers, json={
        "tipo": "Externo", "especialidade": "Neuropediatria", "motivo": "Avaliação complementar",
    })
    assert r.status_code == 201
    assert r.json()["data"]["status"] == "PENDENTE"

    assert len(client.get(f"{base}/prescricoes", headers=terapeuta_headers).json()["data"]) == 1
    assert client.delete(f"{base}/prescricoes/{prescricao['id']}", headers=terapeuta_headers).status_code == 200
    assert client.get(f"{base}/prescricoes", headers=terapeuta_headers).json()["data"] == []


def test_registro_de_outro_paciente_nao_e_alterado(client, admin_headers, paciente):
    outro = client.post("/api/pacientes", headers=admin_headers,
                        json={"nome": "Maria", "nascimento": "2017-03-02"}).json()["data"]
    diagnostico = client.post(f"/api/pacientes/{paciente['id']}/diagnosticos", headers=admin_headers,
                              json={"diagnostico_desc": "TEA nível 1"}).json()["data"]

    r = client.put(f"/api/pacientes/{outro['id']}/diagnosticos/{diagnostico['id']}", headers=admin_headers,
                   json={"hipotese": True})
    assert r.status_code == 404


def test_paciente_inexistente_nos_registros(client, admin_headers):
    r = client.get("/api/pacientes/nao-existe/relatorios", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Paciente não encontrado"


def test_atividade_com_instrucoes_ordenadas(atividade):
    assert [i["ordem"] for i in atividade["instrucoes"]] == [1, 2]
    assert [p["sigla"] for p in atividade["pontuacoes"]] == ["+", "AFT"]


def test_atribuir_atividade_duplicada(client, admin_headers, paciente, atividade):
    corpo = {"pacienteId": paciente["id"], "atividadeId": atividade["id"]}
    assert client.post("/api/atividades/atribuir", headers=admin_headers, json=corpo).status_code == 201
    assert client.post("/api/atividades/atribuir", headers=admin_headers, json=corpo).status_code == 409

    atribuidas = client.get("/api/atividades/atribuir", headers=admin_headers,
                            params={"pacienteId": paciente["id"]}).json()["data"]
    assert len(atribuidas) == 1

    r = client.delete("/api/atividades/atribuir", headers=admin_headers, params={"id": atribuidas[0]["id"]})
    assert r.status_code == 200
    assert client.post("/api/atividades/atribuir", headers=admin_headers, json=corpo).status_code == 201


def test_avaliacao_detalhada_com_itens(client, admin_headers):
    avaliacao = client.post("/api/avaliacoes", headers=admin_headers,
                            json={"tipo": "VB-MAPP", "nome": "Marcos"}).json()["data"]
    base = f"/api/avaliacoes/{avaliacao['id']}"
    nivel = client.post(f"{base}/niveis", headers=admin_headers, json={"ordem": 1, "descricao": "Nível 1"}).json()["data"]
    client.post(f"{base}/tarefas", headers=admin_headers,
                json={"pergunta": "Pede itens?", "ordem": 1, "nivelId": nivel["id"]})

    detalhe = client.get("/api/avaliacoes", headers=admin_headers, params={"id": avaliacao["id"]}).json()["data"]
    assert [n["descricao"] for n in detalhe["niveis"]] == ["Nível 1"]
    assert detalhe["tarefas"][0]["nivelId"] == nivel["id"]

    r = client.post(f"{base}/tarefas", headers=admin_headers,
                    json={"pergunta": "Nível de outra avaliação", "ordem": 2, "nivelId": "nao-existe"})
    assert r.status_code == 404
