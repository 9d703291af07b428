# apps/core/tokens.py

"""
Token de sessão assinado

O token carrega {id, username, exp} assinado com django.core.signing.
Trocar a chave invalida todas as sessões emitidas com a anterior.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from django.core import signing

logger = logging.getLogger(__name__)

DURACAO_PADRAO = 60 * 60 * 24  # 24 horas
SALT_SESSAO = 'vortex.sessao'


@dataclass(frozen=True)
class Identidade:
    """Quem está fazendo a requisição"""

    user_id: str
    username: str


class SessionTokenCodec:
    """
    Emite e verifica tokens de sessão

    verificar() nunca levanta exceção: qualquer token ruim vira None,
    e quem chama trata None exatamente como ausência de token.
    """

    def __init__(self, chave: str, duracao: int = DURACAO_PADRAO, salt: str = SALT_SESSAO):
        if not chave:
            raise ValueError("Chave de assinatura de sessão não configurada")
        self._chave = chave
        self._salt = salt
        self.duracao = int(duracao)

    def emitir(self, identidade: Identidade, agora: Optional[float] = None) -> str:
        emitido_em = time.time() if agora is None else agora
        payload = {
            'id': identidade.user_id,
            'username': identidade.username,
            'exp': int(emitido_em) + self.duracao,
        }
        return signing.dumps(payload, key=self._chave, salt=self._salt, compress=True)

    def verificar(self, token: Optional[str], agora: Optional[float] = None) -> Optional[Identidade]:
        if not token or not isinstance(token, str):
            return None

        try:
            payload = signing.loads(token, key=self._chave, salt=self._salt, max_age=self.duracao)
        except signing.SignatureExpired:
            logger.info("Token de sessão expirado")
            return None
        except signing.BadSignature:
            logger.info("Token de sessão com assinatura inválida")
            return None
        except (ValueError, TypeError):
            # payload assinado mas ilegível
            logger.info("Token de sessão malformado")
            return None

        if not isinstance(payload, dict):
            return None

        user_id = payload.get('id')
        username = payload.get('username')
        expira_em = payload.get('exp')
        if not isinstance(user_id, str) or not user_id or not isinstance(username, str):
            return None
        if not isinstance(expira_em, int):
            return None

        momento = time.time() if agora is None else agora
        if momento >= expira_em:
            logger.info("Token de sessão expirado para %s", username)
            return None

        return Identidade(user_id=user_id, username=username)
