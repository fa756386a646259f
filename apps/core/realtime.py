# apps/core/realtime.py

"""
Assinaturas de eventos em tempo real

Dois caminhos de entrega:
- inscritos no próprio processo (CanalRealtime.inscrever), cada um com um
  handle de cancelamento explícito;
- grupos do channel layer (Django Channels), consumidos pelos WebSockets.

Os canais são identificados por chave; as notificações usam `user_<id>` e
os boards usam `board_<id>`.
"""

import logging
import threading
from collections import defaultdict
from typing import Callable, Dict, List

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.utils import timezone

logger = logging.getLogger(__name__)


def grupo_usuario(usuario_id) -> str:
    return f'user_{usuario_id}'


def grupo_board(board_id) -> str:
    return f'board_{board_id}'


def dados_usuario(usuario) -> Dict:
    """Autor de um evento de board, no mesmo formato para HTTP e WebSocket"""
    return {
        'usuario': usuario.get_nome_exibicao(),
        'user_id': usuario.id,
        'timestamp': timezone.now().isoformat(),
    }


def enviar_para_grupo(grupo: str, tipo: str, mensagem: Dict) -> bool:
    """
    Envia uma mensagem ao grupo do channel layer a partir de código síncrono

    `tipo` é o nome do handler no consumer (ex: 'tarefa_movida').
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning(f"⚠️ Channel layer não configurado; evento {tipo} não enviado")
        return False

    async_to_sync(channel_layer.group_send)(
        grupo,
        {
            'type': tipo,
            'message': mensagem,
        }
    )
    return True


class Inscricao:
    """Handle devolvido por CanalRealtime.inscrever"""

    def __init__(self, canal, chave: str, callback: Callable):
        self._canal = canal
        self.chave = chave
        self.callback = callback
        self.ativa = True

    def cancelar(self):
        """Remove a inscrição; chamadas repetidas não têm efeito"""
        if self.ativa:
            self._canal._remover(self)
            self.ativa = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.cancelar()


class CanalRealtime:
    """
    Registro de inscritos por chave

    Substitui o estado global implícito por inscrições explícitas: quem se
    inscreve recebe uma Inscricao e deve cancelá-la ao encerrar.
    """

    def __init__(self):
        self._inscricoes: Dict[str, List[Inscricao]] = defaultdict(list)
        self._lock = threading.Lock()

    def inscrever(self, chave: str, callback: Callable) -> Inscricao:
        inscricao = Inscricao(self, chave, callback)
        with self._lock:
            self._inscricoes[chave].append(inscricao)
        logger.debug(f"📡 Nova inscrição em {chave}")
        return inscricao

    def _remover(self, inscricao: Inscricao):
        with self._lock:
            inscritos = self._inscricoes.get(inscricao.chave, [])
            if inscricao in inscritos:
                inscritos.remove(inscricao)
            if not inscritos:
                self._inscricoes.pop(inscricao.chave, None)

    def total_inscritos(self, chave: str) -> int:
        with self._lock:
            return len(self._inscricoes.get(chave, []))

    def publicar(self, chave: str, evento: Dict) -> int:
        """
        Entrega o evento a todos os inscritos da chave

        Um inscrito que falha é registrado no log e não impede a entrega
        aos demais. Retorna quantos inscritos receberam o evento.
        """
        with self._lock:
            inscritos = list(self._inscricoes.get(chave, []))

        entregues = 0
        for inscricao in inscritos:
            try:
                inscricao.callback(evento)
                entregues += 1
            except Exception:
                logger.exception(f"❌ Erro em inscrito de {chave}")
        return entregues


canal_notificacoes = CanalRealtime()


def publicar_notificacao(notificacao) -> Dict:
    """Publica a inserção de uma notificação para o usuário destinatário"""
    chave = grupo_usuario(notificacao.usuario_id)
    evento = {
        'event': 'INSERT',
        'table': 'notificacao',
        'new': notificacao.para_dict(),
    }

    canal_notificacoes.publicar(chave, evento)
    enviar_para_grupo(chave, 'notification_message', evento['new'])

    logger.info(f"🔔 Notificação {notificacao.id} publicada para {chave}")
    return evento
