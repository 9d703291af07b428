#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Vortex Tasks - Boards e tarefas
Startup Vórtex © 2024
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Configuração padrão para desenvolvimento
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Atalhos do Vortex Tasks
    if len(sys.argv) > 1:
        command = sys.argv[1]

        # Verificação do documento
        if command == 'check-data':
            sys.argv = [sys.argv[0], 'verificar_integridade'] + sys.argv[2:]

        # Reset do documento (só em DEBUG)
        elif command == 'reset':
            confirm = input("⚠️  Isso irá apagar TODOS os dados. Continuar? (y/N): ")
            if confirm.lower() != 'y':
                return
            sys.argv = [sys.argv[0], 'reset_completo', '--confirmar-reset-total']

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
