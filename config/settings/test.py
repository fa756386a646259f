# config/settings/test.py

from .base import *

# === TESTES ===

DEBUG = False

SECRET_KEY = 'trilha-test-secret-key'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'trilha-test-cache',
    }
}

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

SESSION_ENGINE = 'django.contrib.sessions.backends.db'

STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

# Hash rápido
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Sem arquivo de log durante os testes
LOGGING['handlers'].pop('file')
LOGGING['root']['handlers'] = ['console']
LOGGING['loggers']['django']['handlers'] = ['console']
LOGGING['loggers']['django']['level'] = 'WARNING'
LOGGING['loggers']['apps']['handlers'] = ['console']
LOGGING['loggers']['apps']['level'] = 'WARNING'
