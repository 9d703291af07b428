# config/settings/base.py

import environ
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Variáveis de ambiente (e .env na raiz, se existir)
env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, []),
    LOG_LEVEL=(str, 'INFO'),
)
environ.Env.read_env(BASE_DIR / '.env')

# === CONFIGURAÇÕES BÁSICAS ===

SECRET_KEY = env('SECRET_KEY', default='django-insecure-vortex-tasks-troque-em-producao')
DEBUG = env('DEBUG')
ALLOWED_HOSTS = env('ALLOWED_HOSTS')

# === APLICAÇÕES ===

# Sem banco relacional, sem admin, sem templates: só a API JSON
INSTALLED_APPS = [
    'apps.core',
    'apps.board',
]

# ContextoMiddleware precisa vir antes de qualquer view que use request.contexto
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'apps.core.middleware.ContextoMiddleware',
    'apps.core.middleware.ApiErroMiddleware',
]

ROOT_URLCONF = 'config.urls'
WSGI_APPLICATION = 'config.wsgi.application'
ASGI_APPLICATION = 'config.asgi.application'

# Persistência é o documento JSON (ver VORTEX_STORAGE_MODE)
DATABASES = {}

# === INTERNACIONALIZAÇÃO ===

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

# === LOGGING ===

# Só console: importar os settings não toca o disco (deploy somente leitura).
# Log em arquivo: development.py, e production.py quando LOG_FILE existe.
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'detalhado': {
            'format': '{asctime} {levelname} [{name}] pid={process:d} {message}',
            'style': '{',
        },
        'curto': {
            'format': '{levelname} [{name}] {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'curto',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        # Requisições com erro 4xx/5xx
        'django.request': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        # Serviços, store e middleware do projeto
        'apps': {
            'handlers': ['console'],
            'level': env('LOG_LEVEL'),
            'propagate': False,
        },
    },
}

# === SENHAS ===

# bcrypt primeiro; PBKDF2 continua aceito para hashes antigos
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.BCryptSHA256PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
]

# === VORTEX TASKS ===

# Armazenamento: 'arquivo' (JSON em disco) ou 'memoria' (volátil)
VORTEX_STORAGE_MODE = env('STORAGE_MODE', default='arquivo')
VORTEX_DATA_FILE = Path(env('DATA_FILE', default=str(BASE_DIR / 'data.json')))
VORTEX_STORAGE_LOCK_TIMEOUT = env.float('STORAGE_LOCK_TIMEOUT', default=5.0)  # segundos

# Sessão: trocar a chave invalida todas as sessões abertas
VORTEX_SESSION_TOKEN_KEY = env('SESSION_TOKEN_KEY', default=SECRET_KEY)
VORTEX_SESSION_TOKEN_MAX_AGE = 86400  # 24 horas
VORTEX_SESSION_COOKIE_NAME = 'token'
VORTEX_SESSION_COOKIE_SECURE = env.bool('SESSION_COOKIE_SECURE', default=False)
