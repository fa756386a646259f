# config/wsgi.py

import os
from django.core.wsgi import get_wsgi_application

# WSGI atende apenas HTTP; WebSockets exigem o ASGI (config.asgi)
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.production')

application = get_wsgi_application()
