# config/settings/test.py

from .base import *

# === TESTES ===

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

SECRET_KEY = 'vortex-tests-secret-key'

# Hash rápido: bcrypt deixaria a suíte lenta
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Cada teste monta o próprio store; o do processo fica em memória
VORTEX_STORAGE_MODE = 'memoria'
VORTEX_STORAGE_LOCK_TIMEOUT = 2.0

VORTEX_SESSION_TOKEN_KEY = 'vortex-tests-session-key'
VORTEX_SESSION_COOKIE_SECURE = False
