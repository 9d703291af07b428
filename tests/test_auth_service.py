import pytest

from apps.core.exceptions import Conflito, ErroValidacao, NaoAutorizado
from apps.core.tokens import Identidade


def test_register_creates_user_and_returns_valid_token(contexto):
    usuario, token = contexto.auth_service.registrar_usuario("alice", "pw1")

    assert usuario.username == "alice"
    assert contexto.codec.verificar(token) == Identidade(user_id=usuario.id, username="alice")
    salvos = contexto.store.carregar().users
    assert [u.id for u in salvos] == [usuario.id]


def test_password_is_stored_hashed(contexto):
    usuario, _ = contexto.auth_service.registrar_usuario("alice", "pw1")

    salvo = contexto.store.carregar().usuario_por_username("alice")
    assert salvo.password_hash
    assert "pw1" not in salvo.password_hash
    assert salvo.password_hash == usuario.password_hash


def test_duplicate_username_is_conflict_and_count_unchanged(contexto):
    contexto.auth_service.registrar_usuario("alice", "pw1")

    with pytest.raises(Conflito):
        contexto.auth_service.registrar_usuario("alice", "outra")

    assert len(contexto.store.carregar().users) == 1


def test_username_is_trimmed(contexto):
    contexto.auth_service.registrar_usuario("  alice ", "pw1")

    with pytest.raises(Conflito):
        contexto.auth_service.registrar_usuario("alice", "pw1")


@pytest.mark.parametrize(
    "username,password",
    [(None, "pw"), ("alice", None), ("", "pw"), ("   ", "pw"), ("alice", ""), (123, "pw"), ("alice", ["pw"])],
)
def test_register_requires_username_and_password(contexto, username, password):
    with pytest.raises(ErroValidacao):
        contexto.auth_service.registrar_usuario(username, password)

    assert contexto.store.carregar().users == []


def test_login_returns_token_for_right_password(contexto):
    registrado, _ = contexto.auth_service.registrar_usuario("alice", "pw1")

    usuario, token = contexto.auth_service.fazer_login("alice", "pw1")

    assert usuario.id == registrado.id
    assert contexto.codec.verificar(token).user_id == registrado.id


def test_login_failures_are_indistinguishable(contexto):
    contexto.auth_service.registrar_usuario("alice", "pw1")

    with pytest.raises(NaoAutorizado) as senha_errada:
        contexto.auth_service.fazer_login("alice", "errada")
    with pytest.raises(NaoAutorizado) as inexistente:
        contexto.auth_service.fazer_login("carol", "pw1")

    assert senha_errada.value.mensagem == inexistente.value.mensagem


def test_password_is_not_stripped(contexto):
    contexto.auth_service.registrar_usuario("alice", " pw1 ")

    with pytest.raises(NaoAutorizado):
        contexto.auth_service.fazer_login("alice", "pw1")
    assert contexto.auth_service.fazer_login("alice", " pw1 ")
