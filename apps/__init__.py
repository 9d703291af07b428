# apps/__init__.py

"""
Vortex Tasks - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Sessão, armazenamento, autenticação e permissões
- board: API de boards e tarefas
"""

__version__ = '0.1.0'
__author__ = 'Equipe Vórtex'
