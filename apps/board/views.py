# apps/board/views.py

"""
API JSON de boards e tarefas

As views só traduzem HTTP <-> serviço. Sessão é exigida pelo
decorator requer_sessao; posse, validação e persistência ficam no
BoardService; erros viram JSON no ApiErroMiddleware.
"""

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.exceptions import ErroValidacao
from apps.core.permissions import requer_sessao
from apps.core.utils import ler_corpo_json

ACOES_LEGADAS = ('rename', 'delete')


@csrf_exempt  # API JSON; proteção via cookie SameSite=Strict
@require_http_methods(["GET", "POST", "PUT", "DELETE"])
@requer_sessao
def boards_view(request):
    """
    Lista e cria boards do usuário logado

    Também aceita o formato antigo do painel: ?id=<board>&action=rename|delete
    """
    service = request.contexto.board_service
    board_id = request.GET.get('id')

    if board_id:
        return _operacao_legada(request, board_id)

    if request.method == 'GET':
        boards = service.listar_boards(request.identidade)
        return JsonResponse([b.para_dict() for b in boards], safe=False)

    if request.method == 'POST':
        dados = ler_corpo_json(request)
        board = service.criar_board(request.identidade, dados.get('name'))
        return JsonResponse(board.para_dict(), status=201)

    return JsonResponse({'message': 'Method not allowed'}, status=405)


def _operacao_legada(request, board_id):
    acao = request.GET.get('action')

    if request.method == 'PUT' or acao == 'rename':
        return _renomear(request, board_id)

    if request.method == 'DELETE' or acao == 'delete':
        return _deletar(request, board_id)

    raise ErroValidacao(f"action must be one of: {', '.join(ACOES_LEGADAS)}")


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@requer_sessao
def board_detalhe_view(request, board_id):
    """Renomeia (PUT) ou remove (DELETE) um board"""
    if request.method == 'PUT':
        return _renomear(request, board_id)
    return _deletar(request, board_id)


def _renomear(request, board_id):
    dados = ler_corpo_json(request)
    board = request.contexto.board_service.renomear_board(
        request.identidade, board_id, dados.get('name')
    )
    return JsonResponse({'message': 'Board renamed successfully', 'board': board.para_dict()})


def _deletar(request, board_id):
    removidas = request.contexto.board_service.deletar_board(request.identidade, board_id)
    return JsonResponse({'message': 'Board deleted successfully', 'deletedTasks': removidas})


@csrf_exempt
@require_http_methods(["GET", "POST"])
@requer_sessao
def board_tarefas_view(request, board_id):
    """Lista (GET) ou cria (POST) tarefas de um board"""
    service = request.contexto.board_service

    if request.method == 'GET':
        tarefas = service.listar_tarefas(request.identidade, board_id)
        return JsonResponse([t.para_dict() for t in tarefas], safe=False)

    dados = ler_corpo_json(request)
    tarefa = service.criar_tarefa(
        request.identidade, board_id, dados.get('title'), dados.get('description')
    )
    return JsonResponse(tarefa.para_dict(), status=201)


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@requer_sessao
def tarefa_detalhe_view(request, tarefa_id):
    """Atualiza parcialmente (PUT) ou remove (DELETE) uma tarefa"""
    service = request.contexto.board_service

    if request.method == 'PUT':
        patch = ler_corpo_json(request)
        tarefa = service.atualizar_tarefa(request.identidade, tarefa_id, patch)
        return JsonResponse(tarefa.para_dict())

    service.deletar_tarefa(request.identidade, tarefa_id)
    return JsonResponse({'message': 'Task deleted successfully'})
