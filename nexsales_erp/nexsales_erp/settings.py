import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default):
    return os.environ.get(name, str(default)).lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'nexsales-erp-insecure-dev-key')

DEBUG = env_bool('DJANGO_DEBUG', True)

ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',')

INSTALLED_APPS = [
    'corsheaders',
    'rest_framework',
    'apps.inventory.apps.InventoryConfig',
    'apps.assistant.apps.AssistantConfig',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'nexsales_erp.urls'

WSGI_APPLICATION = 'nexsales_erp.wsgi.application'

CORS_ALLOW_ALL_ORIGINS = True

# Business state lives in memory for the lifetime of the process.
DATABASES = {}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'nexsales-erp',
    }
}

# "Today" in reports is the calendar day in this zone.
TIME_ZONE = os.environ.get('TIME_ZONE', 'UTC')
USE_TZ = True
USE_I18N = False

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PARSER_CLASSES': ['rest_framework.parsers.JSONParser'],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [],
    'UNAUTHENTICATED_USER': None,
    'COERCE_DECIMAL_TO_STRING': False,
}

# OpenAI
OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY', '')
OPENAI_MODEL = os.environ.get('OPENAI_MODEL', 'gpt-4o')
OPENAI_TIMEOUT = float(os.environ.get('OPENAI_TIMEOUT', '30'))

# Company
COMPANY_NAME = os.environ.get('COMPANY_NAME', 'NexSales Corp')
COMPANY_CURRENCY = os.environ.get('COMPANY_CURRENCY', 'USD')
COMPANY_TAX_RATE = os.environ.get('COMPANY_TAX_RATE', '0.15')

INVENTORY_LOAD_DEMO_DATA = env_bool('INVENTORY_LOAD_DEMO_DATA', True)

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)-7s %(name)s — %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
        },
    },
}

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'Local')

try:
    from .local_settings import *  # noqa: F401,F403
except ImportError:
    pass
