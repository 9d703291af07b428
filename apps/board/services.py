# apps/board/services.py

"""
Serviço de Boards e Tarefas

Toda operação roda dentro de store.transacao(): a verificação de
propriedade e a alteração acontecem sobre o mesmo documento, e o
salvamento é um só. Leituras usam store.carregar(), que entrega um
documento inteiro e consistente.
"""

import logging
from typing import Dict, List

from apps.core.forms import AtualizarTarefaForm, BoardForm, TarefaForm, validar_ou_falhar
from apps.core.models import (
    COLECAO_BOARDS,
    COLECAO_TAREFAS,
    STATUS_PENDENTE,
    Board,
    Tarefa,
    agora_iso,
)

logger = logging.getLogger(__name__)


class BoardService:
    """
    Regras de negócio de boards e tarefas

    Sempre recebe a identidade já resolvida; a existência do usuário e a
    posse de cada board ou tarefa são conferidas pelo OwnershipGuard
    (verificar_acesso) a cada chamada, sobre o documento da transação.
    """

    def __init__(self, store, guard):
        self._store = store
        self._guard = guard

    # === BOARDS ===

    def criar_board(self, identidade, name) -> Board:
        dados = validar_ou_falhar(BoardForm(data=self._somente_presentes(name=name)))

        with self._store.transacao() as documento:
            self._guard.verificar_acesso(identidade, documento)
            board = Board(
                id=documento.novo_id(COLECAO_BOARDS),
                user_id=identidade.user_id,
                name=dados['name'],
            )
            documento.boards.append(board)

        logger.info("Board criado por %s: %s (%s)", identidade.username, board.name, board.id)
        return board

    def listar_boards(self, identidade) -> List[Board]:
        documento = self._store.carregar()
        self._guard.verificar_acesso(identidade, documento)
        return documento.boards_do_usuario(identidade.user_id)

    def renomear_board(self, identidade, board_id, name) -> Board:
        with self._store.transacao() as documento:
            board = self._guard.verificar_acesso(identidade, documento, COLECAO_BOARDS, board_id)

            # Nome inválido levanta antes de qualquer alteração: nada é salvo
            dados = validar_ou_falhar(BoardForm(data=self._somente_presentes(name=name)))
            board.name = dados['name']

        logger.info("Board %s renomeado para %s", board.id, board.name)
        return board

    def deletar_board(self, identidade, board_id) -> int:
        """
        Remove o board e, no mesmo salvamento, todas as suas tarefas

        Returns:
            Quantidade de tarefas removidas junto
        """
        with self._store.transacao() as documento:
            board = self._guard.verificar_acesso(identidade, documento, COLECAO_BOARDS, board_id)

            documento.boards = [b for b in documento.boards if b.id != board.id]
            total_antes = len(documento.tasks)
            documento.tasks = [t for t in documento.tasks if t.board_id != board.id]
            removidas = total_antes - len(documento.tasks)

        logger.info("Board %s removido com %d tarefa(s)", board.id, removidas)
        return removidas

    # === TAREFAS ===

    def criar_tarefa(self, identidade, board_id, title, description=None) -> Tarefa:
        with self._store.transacao() as documento:
            board = self._guard.verificar_acesso(identidade, documento, COLECAO_BOARDS, board_id)

            dados = validar_ou_falhar(
                TarefaForm(data=self._somente_presentes(title=title, description=description))
            )
            tarefa = Tarefa(
                id=documento.novo_id(COLECAO_TAREFAS),
                board_id=board.id,
                user_id=identidade.user_id,
                title=dados['title'],
                description=dados.get('description') or '',
                status=STATUS_PENDENTE,
                created_at=agora_iso(),
            )
            documento.tasks.append(tarefa)

        logger.info("Tarefa criada no board %s: %s (%s)", board.id, tarefa.title, tarefa.id)
        return tarefa

    def listar_tarefas(self, identidade, board_id) -> List[Tarefa]:
        documento = self._store.carregar()
        board = self._guard.verificar_acesso(identidade, documento, COLECAO_BOARDS, board_id)
        return documento.tarefas_do_board(board.id, identidade.user_id)

    def atualizar_tarefa(self, identidade, tarefa_id, patch: Dict) -> Tarefa:
        """
        Aplica só os campos presentes no patch (title, description, status)

        A posse é conferida no próprio registro da tarefa, não no board.
        """
        if not isinstance(patch, dict):
            patch = {}

        with self._store.transacao() as documento:
            tarefa = self._guard.verificar_acesso(identidade, documento, COLECAO_TAREFAS, tarefa_id)

            form = AtualizarTarefaForm(data=patch)
            dados = validar_ou_falhar(form)
            for campo in form.campos_presentes():
                setattr(tarefa, campo, dados[campo])

        logger.info("Tarefa %s atualizada (%s)", tarefa.id, tarefa.status)
        return tarefa

    def deletar_tarefa(self, identidade, tarefa_id) -> bool:
        with self._store.transacao() as documento:
            tarefa = self._guard.verificar_acesso(identidade, documento, COLECAO_TAREFAS, tarefa_id)
            documento.tasks = [t for t in documento.tasks if t.id != tarefa.id]

        logger.info("Tarefa %s removida", tarefa.id)
        return True

    @staticmethod
    def _somente_presentes(**campos) -> Dict:
        return {nome: valor for nome, valor in campos.items() if valor is not None}
