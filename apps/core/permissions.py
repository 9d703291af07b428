# apps/core/permissions.py

from functools import wraps

from .exceptions import NaoAutorizado, NaoEncontrado
from .models import COLECAO_BOARDS, COLECAO_TAREFAS, COLECAO_USUARIOS

# Coleções que têm dono (campo userId)
COLECOES_COM_DONO = (COLECAO_BOARDS, COLECAO_TAREFAS)

MENSAGENS_NAO_ENCONTRADO = {
    COLECAO_BOARDS: 'Board not found',
    COLECAO_TAREFAS: 'Task not found or access denied',
}


class OwnershipGuard:
    """
    Guarda de propriedade do Vortex Tasks

    Três camadas, sempre nesta ordem:
    1. Resolver a identidade a partir do token (401 se não houver)
    2. Confirmar que o usuário da identidade existe no documento (401 caso contrário)
    3. Confirmar que o registro pedido pertence a essa identidade (404 caso contrário)

    Registro inexistente e registro de outro usuário dão o mesmo 404,
    para não revelar o que existe em outros tenants. Nada é cacheado
    entre requisições.
    """

    def __init__(self, codec):
        self._codec = codec

    def identidade(self, token):
        """Resolve o token ou levanta NaoAutorizado"""
        identidade = self._codec.verificar(token)
        if identidade is None:
            raise NaoAutorizado()
        return identidade

    def confirmar_usuario(self, identidade, documento):
        """
        Token válido de usuário que não está no documento não é sessão

        Acontece quando o store em memória reinicia e os tokens antigos
        ainda não expiraram.
        """
        usuario = documento.buscar(COLECAO_USUARIOS, identidade.user_id)
        if usuario is None:
            raise NaoAutorizado()
        return usuario

    def verificar_acesso(self, identidade, documento, colecao=None, registro_id=None):
        """
        Camadas 2 e 3 sobre um documento já carregado

        Sem colecao só confirma o usuário; com colecao retorna o registro.
        """
        self.confirmar_usuario(identidade, documento)
        if colecao is None:
            return None
        return self.verificar_propriedade(identidade, documento, colecao, registro_id)

    def verificar_propriedade(self, identidade, documento, colecao, registro_id):
        """Retorna o registro se ele existir e pertencer à identidade"""
        if colecao not in COLECOES_COM_DONO:
            raise ValueError(f"Coleção sem dono: {colecao}")

        mensagem = MENSAGENS_NAO_ENCONTRADO[colecao]
        if not registro_id or not isinstance(registro_id, str):
            raise NaoEncontrado(mensagem)

        registro = documento.buscar(colecao, registro_id)
        if registro is None or not registro.pertence_a(identidade.user_id):
            raise NaoEncontrado(mensagem)

        return registro

    def autorizar(self, token, documento, colecao, registro_id):
        """Token -> identidade -> usuário -> registro, na ordem certa"""
        identidade = self.identidade(token)
        return self.verificar_acesso(identidade, documento, colecao, registro_id)


# Decoradores para views

def requer_sessao(view_func):
    """
    Decorador que exige sessão válida

    Lê o cookie de sessão, resolve a identidade pelo guarda do contexto
    e a injeta em request.identidade. Sem sessão válida levanta
    NaoAutorizado (tratado pelo ApiErroMiddleware).
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        contexto = request.contexto
        token = request.COOKIES.get(contexto.nome_cookie)
        request.identidade = contexto.guard.identidade(token)
        return view_func(request, *args, **kwargs)

    return wrapped_view
