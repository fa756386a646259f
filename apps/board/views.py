# apps/board/views.py

import json
import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied, ValidationError
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.cronometro import ServicoCronometro
from apps.core.forms import TarefaForm
from apps.core.models import Coluna, Tarefa
from apps.core.permissions import (
    TrilhaPermissions,
    ajax_requer_acesso_board,
    requer_acesso_board,
)
from apps.core.realtime import dados_usuario, enviar_para_grupo, grupo_board
from apps.core.utils import formatar_duracao
from .edicao_inline import IdentidadeCampo
from .gateway import CAMPOS_EDITAVEIS, GatewayTarefa, montar_campo
from .status import agrupar_por_coluna, tarefas_sem_coluna

logger = logging.getLogger(__name__)


def _ler_json(request):
    try:
        return json.loads(request.body or b'{}')
    except ValueError:
        return None


def tarefa_para_dict(tarefa):
    return {
        'id': tarefa.id,
        'titulo': tarefa.titulo,
        'status': tarefa.status,
        'posicao_kanban': tarefa.posicao_kanban,
        'prioridade': tarefa.prioridade,
        'prioridade_display': tarefa.get_prioridade_display(),
        'prazo': tarefa.prazo.isoformat() if tarefa.prazo else None,
        'atrasada': tarefa.esta_atrasado(),
        'responsavel': tarefa.responsavel.get_nome_exibicao() if tarefa.responsavel else None,
        'responsavel_id': tarefa.responsavel_id,
    }


@login_required
@requer_acesso_board
def board_kanban_view(request, board_id):
    """
    View principal do Kanban Board
    Cada coluna mostra as tarefas cujo status é o status da coluna
    """
    board = request.board  # Injetado pelo decorator

    colunas = list(board.colunas.order_by('ordem'))
    tarefas = list(board.tarefas_ativas().select_related('responsavel'))

    context = {
        'title': f'{board.titulo} - Kanban',
        'board': board,
        'colunas_com_tarefas': agrupar_por_coluna(tarefas, colunas),
        'tarefas_orfas': tarefas_sem_coluna(tarefas, colunas),
        'form': TarefaForm(board=board),
        'pode_editar': TrilhaPermissions.pode_editar_projeto(request.user, board.projeto),
        'websocket_group': grupo_board(board_id),
    }

    return render(request, 'board/kanban.html', context)


@login_required
@require_POST
def mover_tarefa_ajax(request):
    """
    Move tarefa para outra coluna (drag-and-drop)
    O status da tarefa passa a ser o status da coluna de destino
    """
    data = _ler_json(request)
    if data is None:
        return JsonResponse({'success': False, 'error': 'JSON inválido'}, status=400)

    tarefa_id = data.get('tarefa_id')
    coluna_id = data.get('coluna_id')
    posicao = data.get('posicao', 0)

    if not tarefa_id or not coluna_id:
        return JsonResponse({'success': False, 'error': 'Parâmetros inválidos'}, status=400)

    tarefa = get_object_or_404(Tarefa.objects.select_related('board__projeto'), id=tarefa_id)
    if not TrilhaPermissions.pode_mover_tarefa(request.user, tarefa):
        return JsonResponse({'success': False, 'error': 'Sem permissão para mover a tarefa'}, status=403)

    nova_coluna = get_object_or_404(Coluna, id=coluna_id, board_id=tarefa.board_id)
    status_anterior = tarefa.status

    try:
        posicao = int(posicao)
    except (TypeError, ValueError):
        return JsonResponse({'success': False, 'error': 'Posição inválida'}, status=400)

    if not tarefa.mover_para_coluna(nova_coluna, posicao):
        return JsonResponse({
            'success': False,
            'error': f'Coluna {nova_coluna.titulo} atingiu limite WIP ({nova_coluna.limite_wip})'
        })

    enviar_para_grupo(grupo_board(tarefa.board_id), 'tarefa_movida', {
        'tarefa_id': tarefa.id,
        'tarefa_titulo': tarefa.titulo,
        'status_anterior': status_anterior,
        'novo_status': tarefa.status,
        'posicao': tarefa.posicao_kanban,
        **dados_usuario(request.user),
    })

    logger.info(f"📦 Tarefa {tarefa.id} movida para {nova_coluna.titulo} por {request.user.username}")
    return JsonResponse({
        'success': True,
        'message': f'Tarefa movida para {nova_coluna.titulo}',
        'tarefa': tarefa_para_dict(tarefa),
    })


@login_required
@require_POST
@ajax_requer_acesso_board
def reordenar_colunas_ajax(request, board_id):
    """Recebe a nova ordem das colunas ({'colunas': [ids]})"""
    board = request.board
    if not TrilhaPermissions.pode_editar_projeto(request.user, board.projeto):
        raise PermissionDenied("Apenas gerentes do projeto podem reordenar colunas.")

    data = _ler_json(request)
    if data is None or not isinstance(data.get('colunas'), list):
        return JsonResponse({'success': False, 'error': 'Parâmetros inválidos'}, status=400)

    try:
        board.reordenar_colunas(data['colunas'])
    except (ValidationError, TypeError, ValueError) as e:
        mensagem = e.messages[0] if isinstance(e, ValidationError) else 'Ids de coluna inválidos'
        return JsonResponse({'success': False, 'error': mensagem}, status=400)

    enviar_para_grupo(grupo_board(board_id), 'board_refresh', {
        'motivo': 'colunas_reordenadas',
        **dados_usuario(request.user),
    })

    return JsonResponse({
        'success': True,
        'colunas': list(board.colunas.order_by('ordem').values('id', 'titulo', 'ordem')),
    })


@login_required
@require_http_methods(["GET", "POST"])
@requer_acesso_board
def criar_tarefa(request, board_id):
    """Cria uma tarefa no fim da coluna escolhida"""
    board = request.board

    if request.method == 'POST':
        form = TarefaForm(request.POST, board=board)
        if form.is_valid():
            tarefa = form.save(commit=False, criado_por=request.user)
            tarefa.posicao_kanban = board.tarefas_ativas().filter(status=tarefa.status).count()
            tarefa.save()

            enviar_para_grupo(grupo_board(board_id), 'tarefa_criada', {
                'tarefa': tarefa_para_dict(tarefa),
                **dados_usuario(request.user),
            })

            if request.htmx:
                return JsonResponse({'success': True, 'tarefa': tarefa_para_dict(tarefa)})
            messages.success(request, 'Tarefa criada com sucesso!')
            return redirect('board:kanban', board_id=board_id)

        if request.htmx:
            return JsonResponse({'success': False, 'errors': form.errors}, status=400)
    else:
        form = TarefaForm(board=board)

    return render(request, 'board/criar_tarefa.html', {'board': board, 'form': form})


@login_required
@require_GET
def detalhes_tarefa(request, tarefa_id):
    """Dados da tarefa com os campos editáveis (valor, tipo e opções)"""
    tarefa = get_object_or_404(
        Tarefa.objects.select_related('board__projeto', 'responsavel', 'criado_por'),
        id=tarefa_id
    )
    if not TrilhaPermissions.tem_acesso_board(request.user, tarefa.board):
        raise PermissionDenied("Sem acesso à tarefa.")

    campos = {}
    for nome in CAMPOS_EDITAVEIS:
        campo = montar_campo(tarefa, nome)
        campos[nome] = {
            'tipo': campo.tipo,
            'valor': campo.valor_atual,
            'opcoes': campo.opcoes,
        }

    return JsonResponse({
        'tarefa': tarefa_para_dict(tarefa),
        'campos': campos,
        'pode_editar': TrilhaPermissions.pode_editar_tarefa(request.user, tarefa),
        'pode_registrar_hora': TrilhaPermissions.pode_registrar_hora(request.user, tarefa),
    })


@login_required
@require_POST
def salvar_campo_ajax(request, tarefa_id):
    """
    Grava um campo da tarefa sem WebSocket ({'campo': ..., 'valor': ...})
    Mesmo caminho de gravação usado pelos editores inline
    """
    data = _ler_json(request)
    if data is None or 'campo' not in data:
        return JsonResponse({'success': False, 'error': 'Parâmetros inválidos'}, status=400)

    identidade = IdentidadeCampo(tarefa_id, data['campo'])
    resultado = GatewayTarefa(request.user).salvar(identidade, data.get('valor'))

    if not resultado.sucesso:
        return JsonResponse({'success': False, 'error': resultado.mensagem})

    board_id = Tarefa.objects.values_list('board_id', flat=True).get(id=tarefa_id)
    valor = resultado.valor
    enviar_para_grupo(grupo_board(board_id), 'campo_atualizado', {
        'tarefa_id': tarefa_id,
        'campo': identidade.campo,
        'valor': valor,
        **dados_usuario(request.user),
    })

    return JsonResponse({'success': True, 'campo': identidade.campo, 'valor': valor})


@login_required
@require_GET
@ajax_requer_acesso_board
def buscar_tarefas(request, board_id):
    """
    Busca tarefas no board (pesquisa e filtros)
    Parâmetros: q, status, prioridade, responsavel ('unassigned' = sem responsável)
    """
    board = request.board

    query = request.GET.get('q', '').strip()
    status = request.GET.get('status')
    prioridade = request.GET.get('prioridade')
    responsavel = request.GET.get('responsavel')

    tarefas = board.tarefas_ativas().select_related('responsavel')

    if query:
        tarefas = tarefas.filter(
            Q(titulo__icontains=query) | Q(descricao__icontains=query) | Q(notas__icontains=query)
        )
    if status:
        tarefas = tarefas.filter(status=status)
    if prioridade:
        tarefas = tarefas.filter(prioridade=prioridade)
    if responsavel == 'unassigned':
        tarefas = tarefas.filter(responsavel__isnull=True)
    elif responsavel:
        tarefas = tarefas.filter(responsavel_id=responsavel)

    resultados = [tarefa_para_dict(tarefa) for tarefa in tarefas.order_by('posicao_kanban', 'id')[:50]]

    return JsonResponse({
        'resultados': resultados,
        'total': len(resultados),
    })


# === CRONÔMETRO ===

@login_required
@require_POST
def iniciar_cronometro(request):
    """
    Inicia o cronômetro do usuário (para o anterior, se houver)
    POST: descricao, tarefa_id (opcional)
    """
    tarefa = None
    tarefa_id = request.POST.get('tarefa_id')
    if tarefa_id:
        tarefa = get_object_or_404(Tarefa.objects.select_related('board__projeto'), id=tarefa_id)
        if not TrilhaPermissions.pode_registrar_hora(request.user, tarefa):
            return JsonResponse({'success': False, 'error': 'Apenas o responsável pode registrar horas'})

    servico = ServicoCronometro(request.user)
    try:
        registro = servico.iniciar(request.POST.get('descricao', ''), tarefa=tarefa)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)})

    return JsonResponse({
        'success': True,
        'registro_id': registro.id,
        'message': 'Cronômetro iniciado',
    })


@login_required
@require_POST
def parar_cronometro(request):
    registro = ServicoCronometro(request.user).parar()
    if registro is None:
        return JsonResponse({'success': False, 'error': 'Nenhum cronômetro ativo'})

    return JsonResponse({
        'success': True,
        'registro_id': registro.id,
        'duracao_segundos': registro.duracao_segundos,
        'message': f'Registro finalizado: {formatar_duracao(registro.duracao_segundos)}',
    })


@login_required
@require_GET
def status_cronometro(request):
    return JsonResponse(ServicoCronometro(request.user).estado())
