# apps/core/context_processors.py

from .tema import ConfiguracaoTema


def tema(request):
    """Tema do usuário logado para o template base"""
    return {'tema': ConfiguracaoTema.carregar(getattr(request, 'user', None)).aplicar()}


def notificacoes(request):
    """Contador de notificações não lidas do menu"""
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return {'notificacoes_nao_lidas': 0}
    return {'notificacoes_nao_lidas': user.notificacoes.filter(lida=False).count()}
