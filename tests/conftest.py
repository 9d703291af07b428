import pytest
from django.apps import apps as django_apps

from apps.core.contexto import construir_contexto
from apps.core.storage import JsonFileDocumentStore, MemoryDocumentStore

CHAVE_TESTE = "chave-de-teste-1"


@pytest.fixture
def store():
    return MemoryDocumentStore(timeout_lock=1.0)


@pytest.fixture
def file_store(tmp_path):
    return JsonFileDocumentStore(tmp_path / "data.json", timeout_lock=1.0)


@pytest.fixture
def contexto(store):
    return construir_contexto(store=store, chave_sessao=CHAVE_TESTE, cookie_seguro=False)


@pytest.fixture
def alice(contexto):
    usuario, token = contexto.auth_service.registrar_usuario("alice", "pw1")
    return contexto.codec.verificar(token)


@pytest.fixture
def bob(contexto):
    usuario, token = contexto.auth_service.registrar_usuario("bob", "pw2")
    return contexto.codec.verificar(token)


@pytest.fixture
def api(client, contexto, monkeypatch):
    """Client HTTP apontando para o contexto do teste"""
    monkeypatch.setattr(django_apps.get_app_config("core"), "contexto", contexto)
    return client


@pytest.fixture
def registrar(api):
    """Registra um usuário por HTTP; o cookie de sessão fica no client"""

    def _registrar(client=api, username="alice", password="pw1"):
        resp = client.post(
            "/api/auth/register",
            {"username": username, "password": password},
            content_type="application/json",
        )
        assert resp.status_code == 201
        return resp

    return _registrar
