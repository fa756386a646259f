# apps/core/urls.py

from django.contrib.auth import views as auth_views
from django.urls import path
from . import views
from .forms import LoginForm

app_name = 'core'

urlpatterns = [
    # === AUTENTICAÇÃO ===
    path('login/', auth_views.LoginView.as_view(
        template_name='core/login.html',
        authentication_form=LoginForm,
        redirect_authenticated_user=True,
    ), name='login'),
    path('logout/', auth_views.LogoutView.as_view(), name='logout'),

    # === PAINEL PRINCIPAL ===
    path('painel/', views.painel_principal, name='painel'),
    path('', views.painel_principal, name='home'),

    # === NOTIFICAÇÕES ===
    path('notificacoes/', views.listar_notificacoes, name='notificacoes'),
    path('notificacoes/nao-lidas/', views.contar_nao_lidas, name='notificacoes_nao_lidas'),
    path('notificacoes/marcar-todas/', views.marcar_todas_lidas, name='marcar_todas_lidas'),
    path('notificacoes/<int:notificacao_id>/lida/', views.marcar_notificacao_lida, name='marcar_notificacao_lida'),
    path('notificacoes/<int:notificacao_id>/excluir/', views.excluir_notificacao, name='excluir_notificacao'),

    # === PREFERÊNCIAS ===
    path('tema/', views.salvar_tema, name='salvar_tema'),

    # === MONITORAMENTO ===
    path('health/', views.health_check, name='health'),

    # === APIs AJAX ===
    path('api/painel/stats/', views.api_estatisticas_painel, name='api_stats_painel'),
]
