# apps/core/__init__.py

"""
Core - Aplicação principal do Vortex Tasks

Contém:
- Entidades e o documento JSON (Usuario, Board, Tarefa)
- Armazenamento em arquivo ou memória
- Token de sessão e guarda de propriedade
- Views de autenticação e health check
- Comandos de verificação e reset do documento
"""
