# config/wsgi.py

import os
from django.core.wsgi import get_wsgi_application

# Servidores WSGI (gunicorn, etc.) sobem com os settings de produção
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.production')

application = get_wsgi_application()
