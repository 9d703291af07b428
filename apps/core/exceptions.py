# apps/core/exceptions.py

"""
Taxonomia de erros da aplicação

Cada erro sabe o status HTTP com que deve ser respondido. Os serviços
levantam estes erros e o ApiErroMiddleware faz a tradução para JSON.
"""


class ErroAplicacao(Exception):
    """Base de todos os erros esperados da aplicação"""

    status_code = 500
    mensagem_padrao = 'Erro interno do sistema'

    def __init__(self, mensagem=None):
        self.mensagem = mensagem or self.mensagem_padrao
        super().__init__(self.mensagem)


class NaoAutorizado(ErroAplicacao):
    """Sessão ausente, inválida ou expirada"""

    status_code = 401
    mensagem_padrao = 'Unauthorized'


class NaoEncontrado(ErroAplicacao):
    """Registro inexistente ou pertencente a outro usuário"""

    status_code = 404
    mensagem_padrao = 'Not found'


class ErroValidacao(ErroAplicacao):
    status_code = 400
    mensagem_padrao = 'Invalid request'


class Conflito(ErroAplicacao):
    """Username já cadastrado"""

    status_code = 409
    mensagem_padrao = 'User already exists'


class ErroArmazenamento(ErroAplicacao):
    """
    Falha de leitura/escrita do documento

    A mensagem detalhada vai para o log; o cliente recebe só a
    mensagem padrão.
    """

    status_code = 500
    mensagem_padrao = 'Internal server error'
