# apps/core/contexto.py

"""
Contexto da aplicação

Reúne store, codec de sessão, guarda e serviços em um único objeto,
criado uma vez por processo (CoreConfig.ready) e entregue a cada
requisição pelo ContextoMiddleware. Testes montam o próprio contexto
com construir_contexto().
"""

from dataclasses import dataclass

from django.conf import settings

from apps.board.services import BoardService

from .auth_service import AuthenticationService
from .permissions import OwnershipGuard
from .storage import DocumentStore, construir_store
from .tokens import SessionTokenCodec


@dataclass
class ContextoAplicacao:
    store: DocumentStore
    codec: SessionTokenCodec
    guard: OwnershipGuard
    auth_service: AuthenticationService
    board_service: BoardService
    nome_cookie: str = 'token'
    cookie_seguro: bool = False


def construir_contexto(store=None, chave_sessao=None, duracao_sessao=None,
                       nome_cookie=None, cookie_seguro=None) -> ContextoAplicacao:
    """
    Monta o contexto a partir dos settings

    Qualquer argumento informado substitui o valor dos settings.
    """
    if store is None:
        store = construir_store(
            settings.VORTEX_STORAGE_MODE,
            settings.VORTEX_DATA_FILE,
            settings.VORTEX_STORAGE_LOCK_TIMEOUT,
        )

    codec = SessionTokenCodec(
        chave=chave_sessao or settings.VORTEX_SESSION_TOKEN_KEY,
        duracao=duracao_sessao or settings.VORTEX_SESSION_TOKEN_MAX_AGE,
    )
    guard = OwnershipGuard(codec)

    return ContextoAplicacao(
        store=store,
        codec=codec,
        guard=guard,
        auth_service=AuthenticationService(store, codec),
        board_service=BoardService(store, guard),
        nome_cookie=nome_cookie or settings.VORTEX_SESSION_COOKIE_NAME,
        cookie_seguro=settings.VORTEX_SESSION_COOKIE_SECURE if cookie_seguro is None else cookie_seguro,
    )
