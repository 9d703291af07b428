# apps/core/management/commands/verificar_integridade.py

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from apps.core.exceptions import ErroArmazenamento
from apps.core.integridade import encontrar_problemas, remover_orfaos


class Command(BaseCommand):
    help = 'Verifica a consistência do documento (donos, boards, ids duplicados)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--corrigir',
            action='store_true',
            help='Remove boards sem dono e tarefas sem board válido'
        )

    def handle(self, *args, **options):
        store = apps.get_app_config('core').contexto.store

        self.stdout.write(f'🔍 Verificando documento ({store.descrever()})...')

        try:
            if options['corrigir']:
                with store.transacao() as documento:
                    problemas = encontrar_problemas(documento)
                    removidos = remover_orfaos(documento)
            else:
                documento = store.carregar()
                problemas = encontrar_problemas(documento)
                removidos = None
        except ErroArmazenamento as e:
            raise CommandError(f'Documento inacessível: {e.mensagem}') from e

        contagens = documento.contagens()
        self.stdout.write(
            f"  📊 Usuários: {contagens['users']} | Boards: {contagens['boards']} | "
            f"Tarefas: {contagens['tasks']}"
        )

        if not problemas:
            self.stdout.write(self.style.SUCCESS('✅ Documento consistente'))
            return

        self.stdout.write(self.style.WARNING('⚠️  Problemas encontrados:'))
        for tipo, ids in problemas.items():
            self.stdout.write(f'  • {tipo}: {", ".join(ids)}')

        if removidos is not None:
            self.stdout.write(
                self.style.SUCCESS(
                    f"🧹 Removidos: {removidos['boards']} board(s), {removidos['tasks']} tarefa(s)"
                )
            )
        else:
            self.stdout.write(
                '\n💡 Para remover registros órfãos execute:\n'
                '   python manage.py verificar_integridade --corrigir\n'
            )
