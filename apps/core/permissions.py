# apps/core/permissions.py

from functools import wraps
from django.shortcuts import redirect
from django.contrib import messages
from django.core.exceptions import PermissionDenied


class TrilhaPermissions:
    """
    Sistema de permissões do Trilha Board
    Baseado nos tipos de usuário: admin, gerente, funcionário
    """

    @staticmethod
    def is_gerente_ou_admin(user):
        return user.is_authenticated and user.tipo in ['admin', 'gerente']

    @staticmethod
    def eh_membro(user, projeto):
        return projeto.membros.filter(id=user.id).exists()

    @staticmethod
    def tem_acesso_projeto(user, projeto):
        """Admin acessa todos os projetos; os demais precisam ser membros"""
        if not user.is_authenticated:
            return False
        if user.tipo == 'admin':
            return True
        return TrilhaPermissions.eh_membro(user, projeto)

    @staticmethod
    def tem_acesso_board(user, board):
        return TrilhaPermissions.tem_acesso_projeto(user, board.projeto)

    @staticmethod
    def pode_editar_projeto(user, projeto):
        if not user.is_authenticated:
            return False
        if user.tipo == 'admin' or projeto.criado_por_id == user.id:
            return True
        return user.tipo == 'gerente' and TrilhaPermissions.eh_membro(user, projeto)

    @staticmethod
    def pode_editar_tarefa(user, tarefa):
        """
        Verifica se pode editar os campos de uma tarefa

        Admin edita qualquer tarefa; criador e responsável editam a própria;
        gerentes editam as tarefas dos projetos em que são membros.
        """
        if not user.is_authenticated:
            return False

        if user.tipo == 'admin':
            return True

        if tarefa.criado_por_id == user.id or tarefa.responsavel_id == user.id:
            return True

        if user.tipo == 'gerente':
            return TrilhaPermissions.eh_membro(user, tarefa.board.projeto)

        return False

    @staticmethod
    def pode_mover_tarefa(user, tarefa):
        """Gerentes/admin movem qualquer tarefa do projeto; funcionário só as suas"""
        if not user.is_authenticated:
            return False

        if user.tipo == 'admin':
            return True

        if user.tipo == 'gerente':
            return TrilhaPermissions.eh_membro(user, tarefa.board.projeto)

        return tarefa.responsavel_id == user.id

    @staticmethod
    def pode_registrar_hora(user, tarefa):
        """Apenas o responsável registra horas na tarefa"""
        if not user.is_authenticated:
            return False
        return tarefa.responsavel_id == user.id


# Decoradores para views

def requer_acesso_board(view_func):
    """
    Decorador que verifica acesso ao board
    Espera que a view receba board_id como parâmetro
    """

    @wraps(view_func)
    def wrapped_view(request, board_id, *args, **kwargs):
        from .models import Board

        try:
            board = Board.objects.select_related('projeto').get(id=board_id, ativo=True)
        except Board.DoesNotExist:
            messages.error(request, 'Board não encontrado.')
            return redirect('core:painel')

        if not TrilhaPermissions.tem_acesso_board(request.user, board):
            messages.error(request, 'Você não tem acesso a este board.')
            return redirect('core:painel')

        # Adiciona o board ao request para uso na view
        request.board = board
        return view_func(request, board_id, *args, **kwargs)

    return wrapped_view


def ajax_requer_acesso_board(view_func):
    """
    Versão AJAX/HTMX de requer_acesso_board
    Retorna 403 ao invés de redirecionar
    """

    @wraps(view_func)
    def wrapped_view(request, board_id, *args, **kwargs):
        from django.shortcuts import get_object_or_404
        from .models import Board

        board = get_object_or_404(Board.objects.select_related('projeto'), id=board_id, ativo=True)
        if not TrilhaPermissions.tem_acesso_board(request.user, board):
            raise PermissionDenied("Você não tem acesso a este board.")

        request.board = board
        return view_func(request, board_id, *args, **kwargs)

    return wrapped_view
