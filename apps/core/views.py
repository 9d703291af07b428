# apps/core/views.py

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps import __version__
from .exceptions import ErroArmazenamento
from .utils import definir_cookie_sessao, ler_corpo_json, limpar_cookie_sessao


@csrf_exempt  # API JSON; proteção via cookie SameSite=Strict
@require_POST
def registro_view(request):
    """
    Registra um usuário e já abre a sessão

    O encapsulamento separa a lógica HTTP (view) da lógica de autenticação (service)
    """
    dados = ler_corpo_json(request)
    contexto = request.contexto

    usuario, token = contexto.auth_service.registrar_usuario(
        dados.get('username'), dados.get('password')
    )

    response = JsonResponse(
        {'message': 'User registered successfully', 'user': usuario.para_dict_publico()},
        status=201,
    )
    return definir_cookie_sessao(response, contexto, token)


@csrf_exempt
@require_POST
def login_view(request):
    dados = ler_corpo_json(request)
    contexto = request.contexto

    usuario, token = contexto.auth_service.fazer_login(
        dados.get('username'), dados.get('password')
    )

    response = JsonResponse({'message': 'Login successful', 'user': usuario.para_dict_publico()})
    return definir_cookie_sessao(response, contexto, token)


@csrf_exempt
@require_POST
def logout_view(request):
    """Logout é só apagar o cookie; o token em si expira sozinho"""
    response = JsonResponse({'message': 'Logged out successfully'})
    return limpar_cookie_sessao(response, request.contexto)


@require_GET
def health_check(request):
    """
    Health check para monitoramento
    """
    store = request.contexto.store
    try:
        contagens = store.carregar().contagens()
    except ErroArmazenamento:
        status = {
            'status': 'unhealthy',
            'storage': store.modo,
            'error': 'storage unavailable',
            'timestamp': timezone.now().isoformat(),
            'version': __version__,
        }
        return JsonResponse(status, status=500)

    status = {
        'status': 'healthy',
        'storage': store.modo,
        'counts': contagens,
        'timestamp': timezone.now().isoformat(),
        'version': __version__,
    }
    return JsonResponse(status)
