# config/asgi.py

import os
from django.core.asgi import get_asgi_application
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.auth import AuthMiddlewareStack
from channels.security.websocket import AllowedHostsOriginValidator

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

# Inicializa o Django antes de importar consumers/models
django_asgi_app = get_asgi_application()

from apps.board.routing import websocket_urlpatterns  # noqa: E402

application = ProtocolTypeRouter({
    # HTTP tradicional
    "http": django_asgi_app,

    # WebSocket com autenticação de sessão
    "websocket": AllowedHostsOriginValidator(
        AuthMiddlewareStack(
            URLRouter(websocket_urlpatterns)
        )
    ),
})
