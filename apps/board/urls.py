# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Kanban principal
    path('<int:board_id>/', views.board_kanban_view, name='kanban'),

    # AJAX/HTMX - Movimentação de tarefas e colunas
    path('mover-tarefa/', views.mover_tarefa_ajax, name='mover_tarefa'),
    path('<int:board_id>/colunas/reordenar/', views.reordenar_colunas_ajax, name='reordenar_colunas'),

    # Tarefas
    path('<int:board_id>/criar-tarefa/', views.criar_tarefa, name='criar_tarefa'),
    path('tarefa/<int:tarefa_id>/', views.detalhes_tarefa, name='detalhes_tarefa'),
    path('tarefa/<int:tarefa_id>/campo/', views.salvar_campo_ajax, name='salvar_campo'),

    # Busca e filtros
    path('<int:board_id>/buscar/', views.buscar_tarefas, name='buscar_tarefas'),

    # Cronômetro
    path('cronometro/iniciar/', views.iniciar_cronometro, name='iniciar_cronometro'),
    path('cronometro/parar/', views.parar_cronometro, name='parar_cronometro'),
    path('cronometro/', views.status_cronometro, name='status_cronometro'),
]
