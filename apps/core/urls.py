# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # === AUTENTICAÇÃO ===
    path('api/auth/register', views.registro_view, name='registro'),
    path('api/auth/login', views.login_view, name='login'),
    path('api/auth/logout', views.logout_view, name='logout'),

    # === MONITORAMENTO ===
    path('health', views.health_check, name='health'),
]
