# apps/board/consumers.py

import asyncio
import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from django.utils import timezone

from apps.core.models import Board, Notificacao, Tarefa
from apps.core.permissions import TrilhaPermissions
from apps.core.realtime import dados_usuario, grupo_board, grupo_usuario
from .edicao_inline import EditorCampo, IdentidadeCampo, SALVANDO, VISUALIZANDO
from .gateway import CAMPOS_EDITAVEIS, GatewayTarefa, montar_campo
from .status import agrupar_por_coluna

logger = logging.getLogger(__name__)


def get_timestamp():
    return timezone.now().isoformat()


class BoardConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket do board Kanban

    Funcionalidades:
    - Edição inline de campos (um EditorCampo por tarefa/campo aberto)
    - Notificações de movimentação e criação de tarefas
    - Indicação de usuários online e digitando
    - Sincronização do estado do board
    """

    async def connect(self):
        """
        Conecta usuário ao grupo do board
        Verifica permissões antes de aceitar conexão
        """
        self.board_id = int(self.scope['url_route']['kwargs']['board_id'])
        self.board_group_name = grupo_board(self.board_id)
        self.user = self.scope['user']
        self.editores = {}
        self.tarefas_pendentes = set()

        if not self.user.is_authenticated:
            logger.warning("❌ Conexão WebSocket rejeitada - usuário não autenticado")
            await self.close()
            return

        has_access = await self.check_board_access()
        if not has_access:
            logger.warning(f"❌ Conexão WebSocket rejeitada - {self.user.username} sem acesso ao board {self.board_id}")
            await self.close()
            return

        self.gateway = GatewayTarefa(self.user)

        await self.channel_layer.group_add(self.board_group_name, self.channel_name)
        await self.accept()

        await self.channel_layer.group_send(
            self.board_group_name,
            {
                'type': 'user_joined',
                'message': self.dados_usuario(),
            }
        )

        logger.info(f"✅ WebSocket conectado - {self.user.username} no board {self.board_id}")

    async def disconnect(self, close_code):
        for editor in self.editores.values():
            editor.desmontar()
        self.editores = {}

        if hasattr(self, 'gateway'):
            await self.channel_layer.group_send(
                self.board_group_name,
                {
                    'type': 'user_left',
                    'message': self.dados_usuario(),
                }
            )
            await self.channel_layer.group_discard(self.board_group_name, self.channel_name)

        logger.info(f"🔌 WebSocket desconectado - board {self.board_id}")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Recebe mensagens do cliente WebSocket
        Cada 'type' é tratado por um método do mesmo nome com prefixo ws_
        """
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError:
            logger.error(f"❌ JSON inválido recebido via WebSocket de {self.user.username}")
            await self.enviar_erro('JSON inválido')
            return

        message_type = data.get('type') or ''
        handler = getattr(self, f'ws_{message_type}', None)
        if handler is None:
            await self.enviar_erro(f'Tipo de mensagem desconhecido: {message_type}')
            return

        await handler(data)

    async def send_json(self, content):
        await self.send(text_data=json.dumps(content))

    async def enviar_erro(self, mensagem, **extra):
        await self.send_json({'type': 'erro', 'mensagem': mensagem, **extra})

    # === Mensagens do cliente ===

    async def ws_ping(self, data):
        await self.send_json({
            'type': 'pong',
            'timestamp': get_timestamp(),
            'intervalo': settings.TRILHA_WS_HEARTBEAT_INTERVAL,
        })

    async def ws_typing(self, data):
        await self.channel_layer.group_send(
            self.board_group_name,
            {
                'type': 'user_typing',
                'message': {
                    **self.dados_usuario(),
                    'tarefa_id': data.get('tarefa_id'),
                    'campo': data.get('campo'),
                    'is_typing': data.get('is_typing', True),
                }
            }
        )

    async def ws_sync_board(self, data):
        board_data = await self.get_board_state()
        await self.send_json({
            'type': 'board_sync',
            'board_data': board_data,
            'timestamp': get_timestamp(),
        })

    # === Edição inline ===

    def _identidade(self, data):
        try:
            tarefa_id = int(data.get('tarefa_id'))
        except (TypeError, ValueError):
            return None
        campo = data.get('campo')
        if campo not in CAMPOS_EDITAVEIS:
            return None
        return IdentidadeCampo(tarefa_id, campo)

    async def _editor_aberto(self, data):
        identidade = self._identidade(data)
        editor = self.editores.get(identidade) if identidade else None
        if editor is None:
            await self.enviar_erro('Campo não está aberto para edição',
                                   tarefa_id=data.get('tarefa_id'), campo=data.get('campo'))
        return editor

    async def enviar_estado(self, editor):
        await self.send_json({'type': 'campo_estado', **editor.estado()})

    async def ws_campo_ativar(self, data):
        identidade = self._identidade(data)
        if identidade is None:
            await self.enviar_erro('Campo inválido', tarefa_id=data.get('tarefa_id'), campo=data.get('campo'))
            return

        editor = self.editores.get(identidade)
        if editor is None:
            campo = await self.carregar_campo(identidade)
            if campo is None:
                await self.enviar_erro('Sem permissão para editar este campo',
                                       tarefa_id=identidade.tarefa_id, campo=identidade.campo)
                return
            editor = EditorCampo(campo, self.gateway, on_change=self._criar_on_change(identidade))
            self.editores[identidade] = editor

        editor.ativar()
        await self.send_json({
            'type': 'campo_estado',
            **editor.estado(),
            'opcoes': editor.campo.opcoes,
        })

    async def ws_campo_modificar(self, data):
        editor = await self._editor_aberto(data)
        if editor is not None:
            editor.modificar(data.get('valor'))

    async def ws_campo_tecla(self, data):
        editor = await self._editor_aberto(data)
        if editor is not None:
            await self._disparar(editor, editor.tecla(data.get('tecla', ''), bool(data.get('shift'))))

    async def ws_campo_blur(self, data):
        editor = await self._editor_aberto(data)
        if editor is not None:
            await self._disparar(editor, editor.perder_foco())

    async def ws_campo_selecionar(self, data):
        editor = await self._editor_aberto(data)
        if editor is not None:
            await self._disparar(editor, editor.selecionar(data.get('valor')))

    async def ws_campo_cancelar(self, data):
        editor = await self._editor_aberto(data)
        if editor is not None:
            editor.cancelar()
            await self.enviar_estado(editor)

    async def ws_item_fechar(self, data):
        """O cartão/modal da tarefa foi fechado: desmonta todos os editores dela"""
        try:
            tarefa_id = int(data.get('tarefa_id'))
        except (TypeError, ValueError):
            await self.enviar_erro('Tarefa inválida')
            return

        for identidade in [i for i in self.editores if i.tarefa_id == tarefa_id]:
            self.editores.pop(identidade).desmontar()

    async def _disparar(self, editor, gatilho):
        """
        Executa um gatilho de gravação em segundo plano

        Enquanto um campo grava, as mensagens dos outros campos desta
        conexão continuam sendo processadas.
        """
        tarefa = asyncio.ensure_future(self._executar_gatilho(editor, gatilho))
        self.tarefas_pendentes.add(tarefa)
        tarefa.add_done_callback(self.tarefas_pendentes.discard)

        # Deixa o gatilho rodar até a primeira espera (chamada ao gateway)
        await asyncio.sleep(0)
        if not tarefa.done() and editor.modo == SALVANDO:
            await self.enviar_estado(editor)

    async def _executar_gatilho(self, editor, gatilho):
        try:
            await gatilho
        except Exception:
            logger.exception(f"❌ Erro ao processar edição de {editor.campo.identidade}")
        if not editor.desmontado:
            await self.enviar_estado(editor)

    def _criar_on_change(self, identidade):
        async def on_change(valor):
            await self.channel_layer.group_send(
                self.board_group_name,
                {
                    'type': 'campo_atualizado',
                    'message': {
                        'tarefa_id': identidade.tarefa_id,
                        'campo': identidade.campo,
                        'valor': valor,
                        **self.dados_usuario(),
                    }
                }
            )

        return on_change

    # === Handlers de eventos do grupo ===

    async def campo_atualizado(self, event):
        """
        Um campo foi gravado (por esta ou outra conexão)

        O valor atual dos editores locais sempre acompanha o banco; o
        rascunho só é substituído fora da edição.
        """
        message = event['message']
        identidade = IdentidadeCampo(message['tarefa_id'], message['campo'])
        editor = self.editores.get(identidade)
        if editor is not None:
            editor.campo.valor_atual = message['valor']
            if editor.modo == VISUALIZANDO:
                editor.campo.valor_rascunho = message['valor']

        await self.send_json({'type': 'campo_atualizado', 'message': message})

    async def tarefa_movida(self, event):
        await self.send_json({'type': 'tarefa_movida', 'message': event['message']})

    async def tarefa_criada(self, event):
        await self.send_json({'type': 'tarefa_criada', 'message': event['message']})

    async def user_joined(self, event):
        # Não enviar para o próprio usuário
        if event['message']['user_id'] != self.user.id:
            await self.send_json({'type': 'user_joined', 'message': event['message']})

    async def user_left(self, event):
        if event['message']['user_id'] != self.user.id:
            await self.send_json({'type': 'user_left', 'message': event['message']})

    async def user_typing(self, event):
        if event['message']['user_id'] != self.user.id:
            await self.send_json({'type': 'user_typing', 'message': event['message']})

    async def board_refresh(self, event):
        """Força refresh do board (reordenação de colunas, grandes mudanças)"""
        await self.send_json({'type': 'board_refresh', 'message': event['message']})

    # === Métodos auxiliares ===

    def dados_usuario(self):
        return dados_usuario(self.user)

    @database_sync_to_async
    def check_board_access(self):
        try:
            board = Board.objects.select_related('projeto').get(id=self.board_id, ativo=True)
        except Board.DoesNotExist:
            return False
        return TrilhaPermissions.tem_acesso_board(self.user, board)

    @database_sync_to_async
    def carregar_campo(self, identidade):
        """CampoEditavel da tarefa, se ela for deste board e o usuário puder editá-la"""
        try:
            tarefa = Tarefa.objects.select_related('board__projeto').get(
                id=identidade.tarefa_id, board_id=self.board_id
            )
        except Tarefa.DoesNotExist:
            return None
        if not TrilhaPermissions.pode_editar_tarefa(self.user, tarefa):
            return None
        return montar_campo(tarefa, identidade.campo)

    @database_sync_to_async
    def get_board_state(self):
        """Colunas com as tarefas de cada uma, na ordem do Kanban"""
        board = Board.objects.get(id=self.board_id)
        colunas = list(board.colunas.order_by('ordem'))
        tarefas = list(board.tarefas_ativas())

        return {
            'board_id': board.id,
            'titulo': board.titulo,
            'colunas': [
                {
                    'id': coluna.id,
                    'titulo': coluna.titulo,
                    'status': coluna.status_valor,
                    'limite_wip': coluna.limite_wip,
                    'cor': coluna.cor,
                    'tarefas': [tarefa.id for tarefa in tarefas_coluna],
                }
                for coluna, tarefas_coluna in agrupar_por_coluna(tarefas, colunas)
            ],
        }


class NotificationConsumer(AsyncWebsocketConsumer):
    """
    Notificações do usuário em tempo real

    Entra no grupo `user_<id>`; cada notificação criada chega como
    'notification'. O cliente pode marcar uma ou todas como lidas.
    """

    async def connect(self):
        self.user = self.scope['user']

        if not self.user.is_authenticated:
            await self.close()
            return

        self.user_group_name = grupo_usuario(self.user.id)
        await self.channel_layer.group_add(self.user_group_name, self.channel_name)
        await self.accept()

        await self.enviar_nao_lidas()
        logger.info(f"🔔 Notificações conectadas para {self.user.username}")

    async def disconnect(self, close_code):
        if hasattr(self, 'user_group_name'):
            await self.channel_layer.group_discard(self.user_group_name, self.channel_name)
            logger.info(f"🔕 Notificações desconectadas para {self.user.username}")

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError:
            await self.send(text_data=json.dumps({'type': 'erro', 'mensagem': 'JSON inválido'}))
            return

        if data.get('type') == 'mark_read':
            await self.mark_notification_read(data.get('notification_id'))
            await self.enviar_nao_lidas()
        elif data.get('type') == 'mark_all_read':
            await self.mark_all_read()
            await self.enviar_nao_lidas()

    async def notification_message(self, event):
        await self.send(text_data=json.dumps({
            'type': 'notification',
            'message': event['message']
        }))

    async def enviar_nao_lidas(self):
        total = await self.contar_nao_lidas()
        await self.send(text_data=json.dumps({'type': 'nao_lidas', 'total': total}))

    @database_sync_to_async
    def contar_nao_lidas(self):
        return Notificacao.objects.filter(usuario=self.user, lida=False).count()

    @database_sync_to_async
    def mark_notification_read(self, notification_id):
        return Notificacao.objects.filter(id=notification_id, usuario=self.user).update(lida=True)

    @database_sync_to_async
    def mark_all_read(self):
        return Notificacao.objects.filter(usuario=self.user, lida=False).update(lida=True)
