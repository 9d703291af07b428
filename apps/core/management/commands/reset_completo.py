# apps/core/management/commands/reset_completo.py

from django.apps import apps
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.core.exceptions import ErroArmazenamento
from apps.core.models import Documento


class Command(BaseCommand):
    help = 'Reset absoluto do documento - remove TODOS os usuários, boards e tarefas'

    def add_arguments(self, parser):
        parser.add_argument(
            '--confirmar-reset-total',
            action='store_true',
            help='Confirma que você quer apagar todos os dados'
        )

    def handle(self, *args, **options):
        # Verificações de segurança
        if not settings.DEBUG:
            self.stdout.write(
                self.style.ERROR(
                    '🚫 BLOQUEADO: Este comando só funciona em modo DEBUG.\n'
                    '   Em produção, dados devem ser preservados.'
                )
            )
            return

        if not options['confirmar_reset_total']:
            self.stdout.write(
                self.style.WARNING(
                    '⚠️  RESET ABSOLUTO - ÚLTIMA CHANCE DE CANCELAR\n'
                    '\n'
                    'Este comando vai:\n'
                    '  • APAGAR todos os usuários\n'
                    '  • APAGAR todos os boards\n'
                    '  • APAGAR todas as tarefas\n'
                    '\n'
                    'Para confirmar, execute:\n'
                    '  python manage.py reset_completo --confirmar-reset-total\n'
                )
            )
            return

        store = apps.get_app_config('core').contexto.store

        try:
            antes = store.carregar().contagens()
            store.salvar(Documento())
        except ErroArmazenamento as e:
            raise CommandError(f'Falha no reset: {e.mensagem}') from e

        self.stdout.write(
            self.style.SUCCESS(
                '🎉 RESET CONCLUÍDO!\n'
                f"  🗑️  Usuários removidos: {antes['users']}\n"
                f"  🗑️  Boards removidos: {antes['boards']}\n"
                f"  🗑️  Tarefas removidas: {antes['tasks']}\n"
            )
        )
