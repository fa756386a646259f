# apps/board/routing.py

from django.urls import re_path
from . import consumers

websocket_urlpatterns = [
    # Board: edição inline, movimentação e presença
    re_path(r'ws/board/(?P<board_id>\d+)/$', consumers.BoardConsumer.as_asgi()),

    # Notificações do usuário (grupo user_<id>)
    re_path(r'ws/notifications/$', consumers.NotificationConsumer.as_asgi()),
]
