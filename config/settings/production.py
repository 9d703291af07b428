# config/settings/production.py

import logging
from .base import *

DEBUG = False

# Domínios do deploy; em produção sempre via variável ALLOWED_HOSTS
ALLOWED_HOSTS = env('ALLOWED_HOSTS', default=['vortex-tasks.com', '.vortex-tasks.com'])

# === HTTPS ===

SECURE_SSL_REDIRECT = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_HSTS_SECONDS = 60 * 60 * 24 * 365
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

# Cookie de sessão só trafega em HTTPS
VORTEX_SESSION_COOKIE_SECURE = True

# === ARMAZENAMENTO ===

# Alvos de deploy com disco somente leitura: memória por padrão.
# Com disco persistente, definir STORAGE_MODE=arquivo e DATA_FILE.
VORTEX_STORAGE_MODE = env('STORAGE_MODE', default='memoria')

# === LOGGING ===

# Console sempre; arquivo só quando LOG_FILE aponta para um caminho gravável
LOG_FILE = env('LOG_FILE', default=None)
if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'class': 'logging.FileHandler',
        'filename': LOG_FILE,
        'formatter': 'detalhado',
    }
    for _logger in LOGGING['loggers'].values():
        _logger['handlers'] = ['console', 'file']

# Erros de armazenamento (logger.error) viram eventos no Sentry
SENTRY_DSN = env('SENTRY_DSN', default=None)
if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[
            DjangoIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=env.float('SENTRY_TRACES_SAMPLE_RATE', default=0.0),
        send_default_pii=False,
        environment=env('ENVIRONMENT', default='production'),
    )

# === VALIDAÇÕES ===

# Sem SECRET_KEY própria os tokens de sessão seriam assinados com a chave padrão
if not env('SECRET_KEY', default=None):
    raise ValueError("Variável de ambiente SECRET_KEY é obrigatória em produção")

print(f"🚀 Vortex Tasks em PRODUÇÃO (armazenamento: {VORTEX_STORAGE_MODE})")
