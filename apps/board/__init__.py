# apps/board/__init__.py

"""
Board - Boards e tarefas do Vortex Tasks

Funcionalidades:
- Criar, renomear e remover boards (remoção leva as tarefas junto)
- Criar, listar, atualizar e remover tarefas
- API JSON consumida pelo cliente web
"""
