import time

import pytest
from django.test import Client

from apps.core.exceptions import ErroArmazenamento
from apps.core.tokens import Identidade, SessionTokenCodec

JSON = "application/json"


def _json(client, metodo, url, corpo=None):
    return getattr(client, metodo)(url, corpo if corpo is not None else {}, content_type=JSON)


def test_full_board_flow(api, registrar):
    registrar()

    resp = _json(api, "post", "/api/boards", {"name": "Work"})
    assert resp.status_code == 201
    board = resp.json()
    assert board["name"] == "Work"

    resp = _json(api, "post", f"/api/boards/{board['id']}/tasks", {"title": "Write report"})
    assert resp.status_code == 201
    tarefa = resp.json()
    assert tarefa["status"] == "Pending"
    assert tarefa["boardId"] == board["id"]

    resp = _json(api, "put", f"/api/tasks/{tarefa['id']}", {"status": "Completed"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "Completed"
    assert resp.json()["title"] == "Write report"

    resp = api.get(f"/api/boards/{board['id']}/tasks")
    assert [t["id"] for t in resp.json()] == [tarefa["id"]]

    resp = _json(api, "delete", f"/api/boards/{board['id']}")
    assert resp.status_code == 200
    assert resp.json()["deletedTasks"] == 1

    assert api.get(f"/api/boards/{board['id']}/tasks").status_code == 404
    assert api.get("/api/boards").json() == []


def test_register_sets_session_cookie(api):
    resp = _json(api, "post", "/api/auth/register", {"username": "alice", "password": "pw1"})

    assert resp.status_code == 201
    assert resp.json()["user"]["username"] == "alice"
    assert "passwordHash" not in resp.json()["user"]

    cookie = resp.cookies["token"]
    assert cookie.value
    assert cookie["httponly"]
    assert cookie["samesite"] == "Strict"
    assert cookie["path"] == "/"
    assert int(cookie["max-age"]) == 24 * 60 * 60


def test_login_sets_cookie_and_logout_clears_it(api, registrar):
    registrar()
    api.cookies.clear()

    resp = _json(api, "post", "/api/auth/login", {"username": "alice", "password": "pw1"})
    assert resp.status_code == 200
    assert resp.cookies["token"].value
    assert api.get("/api/boards").status_code == 200

    resp = _json(api, "post", "/api/auth/logout")
    assert resp.status_code == 200
    assert resp.cookies["token"].value == ""
    assert int(resp.cookies["token"]["max-age"]) == 0

    assert api.get("/api/boards").status_code == 401


def test_duplicate_register_is_conflict(api, registrar):
    registrar()

    resp = _json(api, "post", "/api/auth/register", {"username": "alice", "password": "outra"})

    assert resp.status_code == 409
    assert resp.json() == {"message": "User already exists"}


def test_wrong_password_is_unauthorized(api, registrar):
    registrar()

    resp = _json(api, "post", "/api/auth/login", {"username": "alice", "password": "errada"})

    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}


@pytest.mark.parametrize(
    "metodo,url",
    [
        ("get", "/api/boards"),
        ("post", "/api/boards"),
        ("put", "/api/boards/b1"),
        ("delete", "/api/boards/b1"),
        ("get", "/api/boards/b1/tasks"),
        ("post", "/api/boards/b1/tasks"),
        ("put", "/api/tasks/t1"),
        ("delete", "/api/tasks/t1"),
    ],
)
def test_protected_endpoints_require_session(api, metodo, url):
    resp = _json(api, metodo, url)

    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized"}


def test_token_from_other_key_is_unauthorized(api, alice):
    api.cookies["token"] = SessionTokenCodec(chave="outra-chave").emitir(alice)
    assert api.get("/api/boards").status_code == 401


def test_expired_token_is_unauthorized(api, contexto, alice):
    api.cookies["token"] = contexto.codec.emitir(alice, agora=time.time() - 2 * contexto.codec.duracao)
    assert api.get("/api/boards").status_code == 401


def test_token_for_user_missing_from_store_is_unauthorized(api, contexto, alice):
    # token bem assinado de um usuário que o store não conhece (ex.: store em memória reiniciado)
    api.cookies["token"] = contexto.codec.emitir(Identidade(user_id="fantasma", username="ghost"))
    antes = contexto.store.carregar()

    resp = _json(api, "post", "/api/boards", {"name": "Work"})

    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized"}
    assert api.get("/api/boards").status_code == 401
    assert contexto.store.carregar() == antes


def test_other_user_cannot_touch_my_records(api, registrar):
    registrar()
    board = _json(api, "post", "/api/boards", {"name": "Work"}).json()
    tarefa = _json(api, "post", f"/api/boards/{board['id']}/tasks", {"title": "x"}).json()

    bob = Client()
    registrar(client=bob, username="bob", password="pw2")

    assert bob.get("/api/boards").json() == []
    assert bob.get(f"/api/boards/{board['id']}/tasks").status_code == 404
    assert _json(bob, "put", f"/api/boards/{board['id']}", {"name": "Hacked"}).status_code == 404
    assert _json(bob, "delete", f"/api/boards/{board['id']}").status_code == 404
    assert _json(bob, "post", f"/api/boards/{board['id']}/tasks", {"title": "y"}).status_code == 404
    assert _json(bob, "put", f"/api/tasks/{tarefa['id']}", {"status": "Completed"}).status_code == 404
    assert _json(bob, "delete", f"/api/tasks/{tarefa['id']}").status_code == 404

    # nada mudou para a dona
    assert api.get("/api/boards").json()[0]["name"] == "Work"
    assert api.get(f"/api/boards/{board['id']}/tasks").json()[0]["status"] == "Pending"


def test_missing_and_foreign_board_give_same_response(api, registrar):
    registrar()
    board = _json(api, "post", "/api/boards", {"name": "Work"}).json()
    bob = Client()
    registrar(client=bob, username="bob", password="pw2")

    alheio = bob.get(f"/api/boards/{board['id']}/tasks")
    inexistente = bob.get("/api/boards/nao-existe/tasks")

    assert alheio.status_code == inexistente.status_code == 404
    assert alheio.json() == inexistente.json()


def test_invalid_json_is_bad_request(api, registrar):
    registrar()

    resp = api.post("/api/boards", "{nope", content_type=JSON)

    assert resp.status_code == 400
    assert "message" in resp.json()


def test_non_object_json_is_bad_request(api, registrar):
    registrar()
    assert api.post("/api/boards", "[1, 2]", content_type=JSON).status_code == 400


def test_invalid_status_is_bad_request(api, registrar):
    registrar()
    board = _json(api, "post", "/api/boards", {"name": "Work"}).json()
    tarefa = _json(api, "post", f"/api/boards/{board['id']}/tasks", {"title": "x"}).json()

    resp = _json(api, "put", f"/api/tasks/{tarefa['id']}", {"status": "Done"})

    assert resp.status_code == 400
    assert resp.json() == {"message": "Status must be Pending or Completed"}


def test_wrong_method_is_not_allowed(api):
    assert api.get("/api/auth/register").status_code == 405
    assert _json(api, "patch", "/api/boards").status_code == 405


def test_legacy_query_operations(api, registrar):
    registrar()
    board = _json(api, "post", "/api/boards", {"name": "Work"}).json()

    resp = _json(api, "put", f"/api/boards?id={board['id']}", {"name": "Renamed"})
    assert resp.status_code == 200
    assert resp.json()["board"]["name"] == "Renamed"

    resp = _json(api, "post", f"/api/boards?id={board['id']}&action=rename", {"name": "Again"})
    assert resp.json()["board"]["name"] == "Again"

    assert api.get(f"/api/boards?id={board['id']}").status_code == 400

    resp = _json(api, "post", f"/api/boards?id={board['id']}&action=delete")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Board deleted successfully"
    assert api.get("/api/boards").json() == []


def test_storage_failure_is_generic_500(api, contexto, registrar, monkeypatch):
    registrar()

    def quebrado():
        raise ErroArmazenamento("disco cheio em /var/data")

    monkeypatch.setattr(contexto.store, "transacao", quebrado)

    resp = _json(api, "post", "/api/boards", {"name": "Work"})

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}


def test_health_check(api, registrar):
    registrar()

    resp = api.get("/health")

    assert resp.status_code == 200
    dados = resp.json()
    assert dados["status"] == "healthy"
    assert dados["storage"] == "memoria"
    assert dados["counts"]["users"] == 1


def test_health_check_reports_storage_failure(api, contexto, monkeypatch):
    def quebrado():
        raise ErroArmazenamento("arquivo ilegível")

    monkeypatch.setattr(contexto.store, "carregar", quebrado)

    resp = api.get("/health")

    assert resp.status_code == 500
    assert resp.json()["status"] == "unhealthy"
