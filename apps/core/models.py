# apps/core/models.py

"""
Entidades do Vortex Tasks

Não há banco relacional: tudo vive em um único documento JSON
com três coleções (users, boards, tasks). As classes abaixo são a
representação em memória desses registros e sabem se converter
de/para o formato persistido (chaves em camelCase).
"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional


STATUS_PENDENTE = 'Pending'
STATUS_CONCLUIDO = 'Completed'
STATUS_CHOICES = [
    (STATUS_PENDENTE, 'Pendente'),
    (STATUS_CONCLUIDO, 'Concluído'),
]

COLECAO_USUARIOS = 'users'
COLECAO_BOARDS = 'boards'
COLECAO_TAREFAS = 'tasks'
COLECOES = (COLECAO_USUARIOS, COLECAO_BOARDS, COLECAO_TAREFAS)


def gerar_id() -> str:
    """Gera um id opaco e imprevisível"""
    return secrets.token_urlsafe(12)


def agora_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def _texto(valor) -> str:
    if valor is None:
        return ''
    return str(valor)


@dataclass
class Usuario:
    """
    Usuário do sistema

    Criado no registro e imutável depois disso. O hash da senha
    nunca sai do servidor (ver para_dict_publico).
    """

    id: str
    username: str
    password_hash: str

    @classmethod
    def de_dict(cls, dados: Dict) -> 'Usuario':
        return cls(
            id=_texto(dados.get('id')),
            username=_texto(dados.get('username')),
            password_hash=_texto(dados.get('passwordHash')),
        )

    def para_dict(self) -> Dict:
        return {
            'id': self.id,
            'username': self.username,
            'passwordHash': self.password_hash,
        }

    def para_dict_publico(self) -> Dict:
        return {'id': self.id, 'username': self.username}

    def __str__(self):
        return self.username


@dataclass
class Board:
    """Quadro de tarefas pertencente a um único usuário"""

    id: str
    user_id: str
    name: str

    @classmethod
    def de_dict(cls, dados: Dict) -> 'Board':
        return cls(
            id=_texto(dados.get('id')),
            user_id=_texto(dados.get('userId')),
            name=_texto(dados.get('name')),
        )

    def para_dict(self) -> Dict:
        return {'id': self.id, 'userId': self.user_id, 'name': self.name}

    def pertence_a(self, user_id: str) -> bool:
        return bool(user_id) and self.user_id == user_id

    def __str__(self):
        return self.name


@dataclass
class Tarefa:
    """
    Tarefa dentro de um board

    Guarda o dono (userId) diretamente no registro: a verificação de
    propriedade em update/delete olha só para a tarefa, não para o board.
    """

    id: str
    board_id: str
    user_id: str
    title: str
    description: str = ''
    status: str = STATUS_PENDENTE
    created_at: str = field(default_factory=agora_iso)

    @classmethod
    def de_dict(cls, dados: Dict) -> 'Tarefa':
        return cls(
            id=_texto(dados.get('id')),
            board_id=_texto(dados.get('boardId')),
            user_id=_texto(dados.get('userId')),
            title=_texto(dados.get('title')),
            description=_texto(dados.get('description')),
            status=_texto(dados.get('status')) or STATUS_PENDENTE,
            created_at=_texto(dados.get('createdAt')),
        )

    def para_dict(self) -> Dict:
        return {
            'id': self.id,
            'boardId': self.board_id,
            'userId': self.user_id,
            'title': self.title,
            'description': self.description,
            'status': self.status,
            'createdAt': self.created_at,
        }

    def pertence_a(self, user_id: str) -> bool:
        return bool(user_id) and self.user_id == user_id

    def __str__(self):
        return f"{self.title} ({self.status})"


_CLASSES_POR_COLECAO = {
    COLECAO_USUARIOS: Usuario,
    COLECAO_BOARDS: Board,
    COLECAO_TAREFAS: Tarefa,
}


@dataclass
class Documento:
    """
    Agregado persistido: todos os usuários, boards e tarefas

    A ordem das listas é a ordem de inserção.
    """

    users: List[Usuario] = field(default_factory=list)
    boards: List[Board] = field(default_factory=list)
    tasks: List[Tarefa] = field(default_factory=list)

    @classmethod
    def de_dict(cls, dados: Optional[Dict]) -> 'Documento':
        """
        Monta o documento tolerando formatos parciais

        Coleções ausentes, nulas ou que não sejam listas viram listas
        vazias; entradas que não sejam objetos são ignoradas.
        """
        if not isinstance(dados, dict):
            dados = {}

        colecoes = {}
        for nome in COLECOES:
            brutos = dados.get(nome)
            if not isinstance(brutos, list):
                brutos = []
            classe = _CLASSES_POR_COLECAO[nome]
            colecoes[nome] = [classe.de_dict(item) for item in brutos if isinstance(item, dict)]

        return cls(**colecoes)

    def para_dict(self) -> Dict:
        return {
            COLECAO_USUARIOS: [u.para_dict() for u in self.users],
            COLECAO_BOARDS: [b.para_dict() for b in self.boards],
            COLECAO_TAREFAS: [t.para_dict() for t in self.tasks],
        }

    def colecao(self, nome: str) -> list:
        if nome not in COLECOES:
            raise ValueError(f"Coleção desconhecida: {nome}")
        return getattr(self, nome)

    # === ACESSORES FILTRADOS ===

    def buscar(self, nome_colecao: str, registro_id: str):
        for registro in self.colecao(nome_colecao):
            if registro.id == registro_id:
                return registro
        return None

    def usuario_por_username(self, username: str) -> Optional[Usuario]:
        for usuario in self.users:
            if usuario.username == username:
                return usuario
        return None

    def boards_do_usuario(self, user_id: str) -> List[Board]:
        return [b for b in self.boards if b.user_id == user_id]

    def tarefas_do_board(self, board_id: str, user_id: str) -> List[Tarefa]:
        return [t for t in self.tasks if t.board_id == board_id and t.user_id == user_id]

    def novo_id(self, nome_colecao: str) -> str:
        """Gera um id que ainda não existe na coleção"""
        existentes = {registro.id for registro in self.colecao(nome_colecao)}
        while True:
            candidato = gerar_id()
            if candidato not in existentes:
                return candidato

    def contagens(self) -> Dict[str, int]:
        return {nome: len(self.colecao(nome)) for nome in COLECOES}
