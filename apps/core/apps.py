# apps/core/apps.py

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """Configuração da app Core"""

    name = 'apps.core'
    verbose_name = 'Core - Sessão, Armazenamento e Autenticação'

    contexto = None

    def ready(self):
        """
        Cria o contexto da aplicação uma única vez por processo

        Store, codec de sessão e serviços vivem aqui; as views recebem
        o contexto via ContextoMiddleware.
        """
        from .contexto import construir_contexto

        self.contexto = construir_contexto()
        logger.info("Contexto inicializado - armazenamento: %s", self.contexto.store.descrever())
