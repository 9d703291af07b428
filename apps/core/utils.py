# apps/core/utils.py

import json
from typing import Dict

from .exceptions import ErroValidacao


def ler_corpo_json(request) -> Dict:
    """
    Lê o corpo da requisição como objeto JSON

    Corpo vazio vale como {}. Qualquer outra coisa que não seja um
    objeto JSON é erro de validação.
    """
    bruto = request.body
    if not bruto or not bruto.strip():
        return {}

    try:
        dados = json.loads(bruto)
    except (ValueError, UnicodeDecodeError):
        raise ErroValidacao('Request body must be valid JSON')

    if not isinstance(dados, dict):
        raise ErroValidacao('Request body must be a JSON object')

    return dados


def definir_cookie_sessao(response, contexto, token: str):
    """Cookie http-only, same-site strict, válido pela duração do token"""
    response.set_cookie(
        contexto.nome_cookie,
        token,
        max_age=contexto.codec.duracao,
        path='/',
        secure=contexto.cookie_seguro,
        httponly=True,
        samesite='Strict',
    )
    return response


def limpar_cookie_sessao(response, contexto):
    """Sobrescreve o cookie com um já expirado"""
    response.set_cookie(
        contexto.nome_cookie,
        '',
        max_age=0,
        expires='Thu, 01 Jan 1970 00:00:00 GMT',
        path='/',
        secure=contexto.cookie_seguro,
        httponly=True,
        samesite='Strict',
    )
    return response
