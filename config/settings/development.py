# config/settings/development.py

from .base import *

# === DESENVOLVIMENTO ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# === BANCO DE DADOS ===

# PostgreSQL por padrão; DATABASE_URL tem prioridade
if env('DATABASE_URL', default=None):
    import dj_database_url

    DATABASES['default'] = dj_database_url.parse(env('DATABASE_URL'), conn_max_age=600)
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': env('DB_NAME', default='trilha_board'),
            'USER': env('DB_USER', default='trilha_user'),
            'PASSWORD': env('DB_PASSWORD', default='trilha123'),
            'HOST': env('DB_HOST', default='localhost'),
            'PORT': env('DB_PORT', default='5432'),
            'OPTIONS': {
                'sslmode': 'prefer',
            },
            'CONN_MAX_AGE': 60,
        }
    }

# Fallback para SQLite apenas se explicitamente solicitado
if env('USE_SQLITE', cast=bool, default=False):
    print("🔄 Usando SQLite para desenvolvimento")
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }
else:
    print(f"🐘 Usando PostgreSQL: {DATABASES['default']['NAME']}@{DATABASES['default'].get('HOST')}")

# === LOGGING MAIS VERBOSO ===

LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['loggers']['apps']['level'] = 'DEBUG'

# === CACHE ===

# Cache em memória local (sem Redis obrigatório)
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'trilha-dev-cache',
    }
}

if env('REDIS_URL', default=None):
    CACHES['default'] = {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': env('REDIS_URL'),
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
        }
    }
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels_redis.core.RedisChannelLayer',
            'CONFIG': {
                'hosts': [env('REDIS_URL')],
            },
        },
    }
    print("🔴 Usando Redis em", env('REDIS_URL'))
else:
    # Channels em memória: um único processo
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels.layers.InMemoryChannelLayer'
        }
    }

# Arquivos estáticos sem manifest em desenvolvimento
STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# === DJANGO EXTENSIONS ===

SHELL_PLUS_IMPORTS = [
    'from apps.core.models import *',
    'from apps.core.cronometro import ServicoCronometro',
    'from apps.board.gateway import GatewayTarefa',
]

print("🚀 Configurações de DESENVOLVIMENTO carregadas")
print(f"🔑 DEBUG: {DEBUG}")
