from types import SimpleNamespace

import pytest

from crud import calcular_estatisticas
from tests.conftest import cabecalhos


@pytest.fixture
def sessao(client, admin_headers, paciente, atividade):
    r = client.post("/api/sessoes", headers=admin_headers,
                    json={"pacienteId": paciente["id"], "atividadeId": atividade["id"]})
    assert r.status_code == 201, r.text
    return r.json()


def _avaliar(client, headers, sessao_id, instrucao_id, nota, tipos_ajuda=()):
    return client.post("/api/sessoes/avaliar", headers=headers, json={
        "sessaoId": sessao_id, "instrucaoId": instrucao_id, "nota": nota, "tipos_ajuda": list(tipos_ajuda),
    })


def test_iniciar_sessao(sessao, profissional):
    assert sessao["message"] == "Sessão iniciada com 2 instruções"
    assert sessao["data"]["status"] == "EM_ANDAMENTO"
    # admin sem vínculo conduz pelo profissional do paciente
    assert sessao["data"]["profissionalId"] == profissional["id"]


def test_sessao_duplicada_retorna_409_com_id(client, admin_headers, paciente, atividade, sessao):
    r = client.post("/api/sessoes", headers=admin_headers,
                    json={"pacienteId": paciente["id"], "atividadeId": atividade["id"]})
    assert r.status_code == 409
    assert r.json()["sessaoId"] == sessao["data"]["id"]


def test_finalizar_exige_todas_as_instrucoes(client, terapeuta_headers, atividade, sessao):
    sessao_id = sessao["data"]["id"]
    primeira, segunda = atividade["instrucoes"]

    assert _avaliar(client, terapeuta_headers, sessao_id, primeira["id"], 4, ["+"]).status_code == 200

    r = client.post("/api/sessoes/finalizar", headers=terapeuta_headers, json={"sessaoId": sessao_id})
    assert r.status_code == 400
    corpo = r.json()
    assert corpo["error"] == "Nem todas as instruções foram avaliadas. Avaliadas: 1/2"
    assert corpo["instrucoesAvaliadas"] == 1
    assert corpo["totalInstrucoes"] == 2
    assert corpo["instrucoesPendentes"] == 1

    assert _avaliar(client, terapeuta_headers, sessao_id, segunda["id"], 1, ["AFT"]).status_code == 200
    r = client.post("/api/sessoes/finalizar", headers=terapeuta_headers,
                    json={"sessaoId": sessao_id, "observacoes_gerais": "Boa evolução"})
    assert r.status_code == 200, r.text
    dados = r.json()["data"]
    assert dados["sessao"]["status"] == "FINALIZADA"
    assert dados["sessao"]["finalizada_em"] is not None
    assert dados["estatisticas"]["mediaNotas"] == 2.5
    assert dados["estatisticas"]["totalComAjuda"] == 1
    assert dados["estatisticas"]["percentualComAjuda"] == 50.0


def test_reavaliar_substitui_a_nota(client, terapeuta_headers, atividade, sessao):
    sessao_id = sessao["data"]["id"]
    instrucao_id = atividade["instrucoes"][0]["id"]
    _avaliar(client, terapeuta_headers, sessao_id, instrucao_id, 1)
    _avaliar(client, terapeuta_headers, sessao_id, instrucao_id, 3)

    detalhe = client.get("/api/sessoes", headers=terapeuta_headers, params={"id": sessao_id}).json()["data"]
    assert [a["nota"] for a in detalhe["avaliacoes"]] == [3]


def test_sessao_finalizada_nao_aceita_avaliacao(client, admin_headers, atividade, sessao):
    sessao_id = sessao["data"]["id"]
    for instrucao in atividade["instrucoes"]:
        _avaliar(client, admin_headers, sessao_id, instrucao["id"], 4)
    assert client.post("/api/sessoes/finalizar", headers=admin_headers, json={"sessaoId": sessao_id}).status_code == 200

    r = _avaliar(client, admin_headers, sessao_id, atividade["instrucoes"][0]["id"], 2)
    assert r.status_code == 400
    assert r.json()["error"] == "Sessão não está em andamento"


def test_outro_terapeuta_nao_avalia(client, admin_headers, atividade, sessao):
    client.post("/api/terapeutas", headers=admin_headers,
                json={"nome": "Bruno", "especialidade": "Fono", "usuarioId": "user-outro"})

    r = _avaliar(client, cabecalhos(user_id="user-outro", role="USER"), sessao["data"]["id"],
                 atividade["instrucoes"][0]["id"], 4)
    assert r.status_code == 403


def test_nota_fora_da_escala(client, admin_headers, atividade, sessao):
    r = _avaliar(client, admin_headers, sessao["data"]["id"], atividade["instrucoes"][0]["id"], 5)
    assert r.status_code == 400


def test_instrucao_de_outra_atividade(client, admin_headers, sessao):
    outra = client.post("/api/atividades", headers=admin_headers, json={
        "nome": "Imitação", "tipo": "Motora", "instrucoes": [{"texto": "Bata palmas"}],
    }).json()["data"]

    r = _avaliar(client, admin_headers, sessao["data"]["id"], outra["instrucoes"][0]["id"], 4)
    assert r.status_code == 404


def test_listagem_do_terapeuta(client, terapeuta_headers, sessao):
    dados = client.get("/api/sessoes", headers=terapeuta_headers).json()["data"]
    assert [s["id"] for s in dados] == [sessao["data"]["id"]]

    outro = cabecalhos(user_id="user-sem-vinculo", role="USER")
    assert client.get("/api/sessoes", headers=outro).json()["data"] == []


def test_sessao_curriculum_reaproveita_a_em_andamento(client, admin_headers, paciente, atividade):
    curriculum = client.post("/api/curriculum", headers=admin_headers, json={
        "nome": "Plano inicial", "atividades": [{"atividadeId": atividade["id"]}],
    }).json()["data"]
    corpo = {"pacienteId": paciente["id"], "curriculumId": curriculum["id"]}

    r = client.post("/api/sessoes-curriculum", headers=admin_headers, json=corpo)
    assert r.status_code == 201, r.text
    assert r.json()["existente"] is False
    sessao_id = r.json()["data"]["id"]

    r = client.post("/api/sessoes-curriculum", headers=admin_headers, json=corpo)
    assert r.status_code == 200
    assert r.json()["existente"] is True
    assert r.json()["data"]["id"] == sessao_id


def test_sessao_curriculum_conta_instrucoes_distintas(client, admin_headers, paciente, atividade):
    curriculum = client.post("/api/curriculum", headers=admin_headers, json={
        "nome": "Plano inicial", "atividades": [{"atividadeId": atividade["id"]}],
    }).json()["data"]
    sessao_id = client.post("/api/sessoes-curriculum", headers=admin_headers, json={
        "pacienteId": paciente["id"], "curriculumId": curriculum["id"],
    }).json()["data"]["id"]
    primeira, segunda = atividade["instrucoes"]

    for tentativa in (1, 2):
        r = client.post("/api/sessoes-curriculum/avaliar", headers=admin_headers, json={
            "sessaoId": sessao_id, "atividadeId": atividade["id"], "instrucaoId": primeira["id"],
            "tentativa": tentativa, "nota": 2,
        })
        assert r.status_code == 200, r.text

    r = client.post("/api/sessoes-curriculum/finalizar", headers=admin_headers, json={"sessaoId": sessao_id})
    assert r.status_code == 400
    assert r.json()["instrucoesAvaliadas"] == 1

    client.post("/api/sessoes-curriculum/avaliar", headers=admin_headers, json={
        "sessaoId": sessao_id, "atividadeId": atividade["id"], "instrucaoId": segunda["id"], "nota": 4,
    })
    r = client.post("/api/sessoes-curriculum/finalizar", headers=admin_headers, json={"sessaoId": sessao_id})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["estatisticas"]["totalInstrucoes"] == 2


def test_sessao_de_avaliacao(client, admin_headers, paciente):
    avaliacao = client.post("/api/avaliacoes", headers=admin_headers,
                            json={"tipo": "VB-MAPP", "nome": "Marcos"}).json()["data"]
    tarefa = client.post(f"/api/avaliacoes/{avaliacao['id']}/tarefas", headers=admin_headers,
                         json={"pergunta": "Nomeia 5 objetos?", "ordem": 1}).json()["data"]

    r = client.post("/api/sessoes-avaliacao", headers=admin_headers,
                    json={"pacienteId": paciente["id"], "avaliacaoId": avaliacao["id"]})
    assert r.status_code == 201, r.text
    assert r.json()["message"] == "Avaliação iniciada com 1 tarefas"
    sessao_id = r.json()["data"]["id"]

    r = client.put("/api/sessoes-avaliacao", headers=admin_headers,
                   json={"sessaoId": sessao_id, "tarefaId": tarefa["id"], "pontuacao": 1.0})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["respostas"][0]["pontuacao"] == 1.0

    r = client.put("/api/sessoes-avaliacao", headers=admin_headers,
                   json={"sessaoId": sessao_id, "finalizar": True})
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "FINALIZADA"

    r = client.put("/api/sessoes-avaliacao", headers=admin_headers, json={"sessaoId": sessao_id})
    assert r.status_code == 400


def test_calcular_estatisticas():
    avaliacoes = [
        SimpleNamespace(nota=4, tipos_ajuda=["+"]),
        SimpleNamespace(nota=2, tipos_ajuda=["AFP"]),
        SimpleNamespace(nota=0, tipos_ajuda=[]),
    ]
    resultado = calcular_estatisticas(avaliacoes, 3)
    assert resultado == {
        "totalInstrucoes": 3,
        "mediaNotas": 2.0,
        "totalComAjuda": 1,
        "percentualComAjuda": 33.3,
        "notaMaxima": 4,
        "notaMinima": 0,
    }


def test_calcular_estatisticas_sem_avaliacoes():
    resultado = calcular_estatisticas([], 0)
    assert resultado["mediaNotas"] == 0.0
    assert resultado["notaMaxima"] is None


def test_sessao_curriculum_de_colega_nao_e_retomada(client, admin_headers, terapeuta_headers, paciente, atividade):
    curriculum = client.post("/api/curriculum", headers=admin_headers, json={
        "nome": "Plano inicial", "atividades": [{"atividadeId": atividade["id"]}],
    }).json()["data"]
    client.post("/api/terapeutas", headers=admin_headers,
                json={"nome": "Bruno", "especialidade": "Fono", "usuarioId": "user-outro"})
    corpo = {"pacienteId": paciente["id"], "curriculumId": curriculum["id"]}

    sessao_id = client.post("/api/sessoes-curriculum", headers=terapeuta_headers, json=corpo).json()["data"]["id"]

    r = client.post("/api/sessoes-curriculum", headers=cabecalhos(user_id="user-outro", role="USER"), json=corpo)
    assert r.status_code == 409
    assert r.json()["sessaoId"] == sessao_id

    r = client.post("/api/sessoes-curriculum", headers=terapeuta_headers, json=corpo)
    assert r.status_code == 200
    assert r.json()["existente"] is True
