# apps/core/auth_service.py

"""
Serviço de Autenticação - registro e login sobre o documento JSON

Senhas passam pelos hashers do Django (bcrypt primeiro, ver
PASSWORD_HASHERS); o texto puro nunca é gravado nem devolvido.
"""

import logging
from typing import Tuple

from django.contrib.auth.hashers import check_password, make_password

from .exceptions import Conflito, NaoAutorizado
from .forms import CredenciaisForm, validar_ou_falhar
from .models import COLECAO_USUARIOS, Usuario
from .tokens import Identidade

logger = logging.getLogger(__name__)

MENSAGEM_CREDENCIAIS_INVALIDAS = 'Invalid credentials'


class AuthenticationService:
    """
    Serviço encapsulado para registro e login

    Recebe o store e o codec de sessão prontos (ver apps.core.contexto);
    não guarda estado próprio entre chamadas.
    """

    def __init__(self, store, codec):
        self._store = store
        self._codec = codec

    def registrar_usuario(self, username, password) -> Tuple[Usuario, str]:
        """
        Cria um usuário novo e já devolve o token de sessão

        Returns:
            Tuple[usuario_criado, token]
        """
        username, password = self._validar_credenciais(username, password)

        # Hash fora do lock: bcrypt é lento de propósito
        password_hash = make_password(password)

        with self._store.transacao() as documento:
            if documento.usuario_por_username(username) is not None:
                logger.info("Registro recusado, username já existe: %s", username)
                raise Conflito()

            usuario = Usuario(
                id=documento.novo_id(COLECAO_USUARIOS),
                username=username,
                password_hash=password_hash,
            )
            documento.users.append(usuario)

        logger.info("Usuário registrado: %s", usuario.username)
        return usuario, self._emitir_token(usuario)

    def fazer_login(self, username, password) -> Tuple[Usuario, str]:
        """
        Confere as credenciais e devolve o token de sessão

        Usuário inexistente e senha errada dão a mesma resposta.
        """
        username, password = self._validar_credenciais(username, password)

        usuario = self._store.carregar().usuario_por_username(username)

        if usuario is None:
            # Mesmo custo de um hash real, para não vazar quem existe pelo tempo
            make_password(password)
            logger.info("Login falhou para usuário inexistente: %s", username)
            raise NaoAutorizado(MENSAGEM_CREDENCIAIS_INVALIDAS)

        if not check_password(password, usuario.password_hash):
            logger.info("Login falhou, senha incorreta: %s", username)
            raise NaoAutorizado(MENSAGEM_CREDENCIAIS_INVALIDAS)

        logger.info("Login bem-sucedido: %s", username)
        return usuario, self._emitir_token(usuario)

    # =================== MÉTODOS PRIVADOS (ENCAPSULADOS) ===================

    def _validar_credenciais(self, username, password) -> Tuple[str, str]:
        dados = {
            campo: valor
            for campo, valor in (('username', username), ('password', password))
            if valor is not None
        }
        limpos = validar_ou_falhar(CredenciaisForm(data=dados))
        return limpos['username'], limpos['password']

    def _emitir_token(self, usuario: Usuario) -> str:
        return self._codec.emitir(Identidade(user_id=usuario.id, username=usuario.username))
