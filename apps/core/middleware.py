# apps/core/middleware.py

import logging

from django.apps import apps
from django.http import JsonResponse

from .exceptions import ErroAplicacao, ErroArmazenamento

logger = logging.getLogger(__name__)


class ContextoMiddleware:
    """
    Entrega o contexto da aplicação (store, guarda, serviços) em
    request.contexto, sem estado global espalhado pelas views
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.contexto = apps.get_app_config('core').contexto
        request.identidade = None
        return self.get_response(request)


class ApiErroMiddleware:
    """
    Traduz os erros da aplicação para respostas JSON

    401/404/400/409 são respostas esperadas; erro de armazenamento é
    registrado com traceback e respondido com mensagem genérica, sem
    detalhes internos.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not isinstance(exception, ErroAplicacao):
            return None  # Deixar o Django lidar com o resto

        if isinstance(exception, ErroArmazenamento):
            logger.error(
                "Erro de armazenamento em %s %s: %s",
                request.method, request.path, exception.mensagem,
                exc_info=exception,
            )
            mensagem = ErroArmazenamento.mensagem_padrao
        else:
            logger.info(
                "%s em %s %s: %s",
                type(exception).__name__, request.method, request.path, exception.mensagem,
            )
            mensagem = exception.mensagem

        return JsonResponse({'message': mensagem}, status=exception.status_code)
