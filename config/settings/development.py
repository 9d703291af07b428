# config/settings/development.py

from .base import *

# === DESENVOLVIMENTO ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# === ARMAZENAMENTO ===

# Arquivo local por padrão; STORAGE_MODE=memoria para testar o modo volátil
VORTEX_STORAGE_MODE = env('STORAGE_MODE', default='arquivo')

# === LOGGING MAIS VERBOSO ===

LOGGING['loggers']['apps']['level'] = 'DEBUG'

# Log em arquivo na pasta logs/ do projeto
LOG_DIR = BASE_DIR / 'logs'
LOG_DIR.mkdir(exist_ok=True)

LOGGING['handlers']['file'] = {
    'class': 'logging.FileHandler',
    'filename': LOG_DIR / 'vortex-tasks.log',
    'formatter': 'detalhado',
}
for _logger in LOGGING['loggers'].values():
    _logger['handlers'].append('file')

# === CONFIGURAÇÕES DE DESENVOLVIMENTO ===

# Cookie de sessão sem Secure (http://localhost)
VORTEX_SESSION_COOKIE_SECURE = False

print("🚀 Configurações de DESENVOLVIMENTO carregadas")
print(f"📁 BASE_DIR: {BASE_DIR}")
print(f"🔑 DEBUG: {DEBUG}")
print(f"💾 Armazenamento: {VORTEX_STORAGE_MODE} ({VORTEX_DATA_FILE})")
