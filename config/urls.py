# config/urls.py

from django.urls import path, include

urlpatterns = [
    # Autenticação e health check
    path('', include('apps.core.urls')),

    # API de boards e tarefas
    path('api/', include('apps.board.urls')),
]
