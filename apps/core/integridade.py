# apps/core/integridade.py

"""
Verificação de consistência do documento

Regras conferidas:
- todo board aponta para um usuário existente
- toda tarefa aponta para um board existente, do mesmo dono
- usernames únicos
- ids únicos dentro de cada coleção
"""

from collections import Counter
from typing import Dict, List

from .models import COLECOES, Documento


def _duplicados(valores) -> List[str]:
    return sorted(valor for valor, total in Counter(valores).items() if total > 1)


def encontrar_problemas(documento: Documento) -> Dict[str, List[str]]:
    """
    Retorna os problemas encontrados, agrupados por tipo

    Dicionário vazio significa documento consistente.
    """
    problemas: Dict[str, List[str]] = {}

    ids_usuarios = {u.id for u in documento.users}
    boards_por_id = {b.id: b for b in documento.boards}

    usernames = _duplicados(u.username for u in documento.users)
    if usernames:
        problemas['usernames_duplicados'] = usernames

    for nome in COLECOES:
        ids = _duplicados(registro.id for registro in documento.colecao(nome))
        if ids:
            problemas[f'ids_duplicados_{nome}'] = ids

    boards_orfaos = [b.id for b in documento.boards if b.user_id not in ids_usuarios]
    if boards_orfaos:
        problemas['boards_sem_dono'] = boards_orfaos

    tarefas_orfas = [t.id for t in documento.tasks if t.board_id not in boards_por_id]
    if tarefas_orfas:
        problemas['tarefas_sem_board'] = tarefas_orfas

    tarefas_inconsistentes = [
        t.id for t in documento.tasks
        if t.board_id in boards_por_id and boards_por_id[t.board_id].user_id != t.user_id
    ]
    if tarefas_inconsistentes:
        problemas['tarefas_com_dono_diferente_do_board'] = tarefas_inconsistentes

    return problemas


def remover_orfaos(documento: Documento) -> Dict[str, int]:
    """
    Remove boards sem dono e tarefas sem board válido do mesmo dono (in place)

    Tarefas de boards removidos aqui também saem, como no delete normal.

    Returns:
        Quantidade removida por coleção
    """
    ids_usuarios = {u.id for u in documento.users}

    boards_antes = len(documento.boards)
    documento.boards = [b for b in documento.boards if b.user_id in ids_usuarios]

    donos_por_board = {b.id: b.user_id for b in documento.boards}
    tarefas_antes = len(documento.tasks)
    documento.tasks = [
        t for t in documento.tasks
        if donos_por_board.get(t.board_id) == t.user_id
    ]

    return {
        'boards': boards_antes - len(documento.boards),
        'tasks': tarefas_antes - len(documento.tasks),
    }
