# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Boards do usuário (inclui o formato legado ?id=&action=)
    path('boards', views.boards_view, name='boards'),
    path('boards/<str:board_id>', views.board_detalhe_view, name='board_detalhe'),

    # Tarefas
    path('boards/<str:board_id>/tasks', views.board_tarefas_view, name='board_tarefas'),
    path('tasks/<str:tarefa_id>', views.tarefa_detalhe_view, name='tarefa_detalhe'),
]
