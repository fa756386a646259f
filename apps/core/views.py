# apps/core/views.py

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.cache import cache
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from .forms import TemaForm
from .models import Notificacao, Usuario, STATUS_CONCLUIDO
from .permissions import TrilhaPermissions
from .tema import ConfiguracaoTema
from .utils import calcular_estatisticas_usuario

logger = logging.getLogger(__name__)

FILTROS_NOTIFICACAO = ('all', 'unread', 'today')


@login_required
def painel_principal(request):
    """
    Painel do usuário: projetos acessíveis, boards e estatísticas pessoais
    """
    projetos = request.user.get_projetos_acessiveis().prefetch_related('boards')

    tarefas_urgentes = (
        request.user.tarefas_responsavel
        .filter(arquivado=False, prazo__isnull=False)
        .exclude(status=STATUS_CONCLUIDO)
        .select_related('board')
        .order_by('prazo')[:5]
    )

    context = {
        'title': 'Painel',
        'projetos': projetos,
        'stats': calcular_estatisticas_usuario(request.user),
        'tarefas_urgentes': tarefas_urgentes,
        'pode_gerenciar': TrilhaPermissions.is_gerente_ou_admin(request.user),
    }
    return render(request, 'core/painel.html', context)


@login_required
@require_GET
def api_estatisticas_painel(request):
    """Estatísticas do painel em JSON (atualização periódica)"""
    return JsonResponse(calcular_estatisticas_usuario(request.user))


def health_check(request):
    """
    Health check para monitoramento (banco + cache)
    """
    try:
        Usuario.objects.exists()

        cache.set('health_check', 'ok', 60)
        if cache.get('health_check') != 'ok':
            raise RuntimeError('cache não respondeu')

    except Exception as e:
        logger.error(f"❌ Health check falhou: {e}")
        return JsonResponse({
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
        }, status=500)

    return JsonResponse({
        'status': 'healthy',
        'database': 'ok',
        'cache': 'ok',
        'timestamp': timezone.now().isoformat(),
    })


# === NOTIFICAÇÕES ===

@login_required
@require_GET
def listar_notificacoes(request):
    """
    Notificações do usuário, mais recentes primeiro
    ?filtro=all|unread|today
    """
    filtro = request.GET.get('filtro', 'all')
    if filtro not in FILTROS_NOTIFICACAO:
        return JsonResponse({'success': False, 'error': 'Filtro inválido'}, status=400)

    notificacoes = Notificacao.objects.filter(usuario=request.user)
    if filtro == 'unread':
        notificacoes = notificacoes.filter(lida=False)
    elif filtro == 'today':
        notificacoes = notificacoes.filter(criado_em__date=timezone.localdate())

    limite = settings.TRILHA_NOTIFICACOES_LIMITE
    itens = [n.para_dict() for n in notificacoes.order_by('-criado_em')[:limite]]

    return JsonResponse({
        'notificacoes': itens,
        'nao_lidas': Notificacao.objects.filter(usuario=request.user, lida=False).count(),
    })


@login_required
@require_GET
def contar_nao_lidas(request):
    return JsonResponse({'nao_lidas': request.user.notificacoes.filter(lida=False).count()})


@login_required
@require_POST
def marcar_notificacao_lida(request, notificacao_id):
    notificacao = get_object_or_404(Notificacao, id=notificacao_id, usuario=request.user)
    if not notificacao.lida:
        notificacao.lida = True
        notificacao.save(update_fields=['lida'])
    return JsonResponse({'success': True})


@login_required
@require_POST
def marcar_todas_lidas(request):
    total = request.user.notificacoes.filter(lida=False).update(lida=True)
    return JsonResponse({'success': True, 'marcadas': total})


@login_required
@require_http_methods(['POST', 'DELETE'])
def excluir_notificacao(request, notificacao_id):
    notificacao = get_object_or_404(Notificacao, id=notificacao_id, usuario=request.user)
    notificacao.delete()
    return JsonResponse({'success': True})


# === TEMA ===

@login_required
@require_POST
def salvar_tema(request):
    """
    Salva a preferência de tema (modo + cor)
    Requisições HTMX/AJAX recebem JSON; formulários comuns voltam ao painel
    """
    form = TemaForm(request.POST)
    if not form.is_valid():
        if request.htmx or request.headers.get('x-requested-with') == 'XMLHttpRequest':
            return JsonResponse({'success': False, 'errors': form.errors}, status=400)
        messages.error(request, 'Tema inválido.')
        return redirect('core:painel')

    tema = ConfiguracaoTema(form.cleaned_data['modo'], form.cleaned_data['cor'])
    tema.persistir(request.user)

    if request.htmx or request.headers.get('x-requested-with') == 'XMLHttpRequest':
        return JsonResponse({'success': True, 'tema': tema.para_dict(), 'aplicado': tema.aplicar()})

    messages.success(request, 'Tema atualizado.')
    return redirect('core:painel')
