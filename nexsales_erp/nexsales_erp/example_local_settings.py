# Copy to local_settings.py and fill in. Anything here overrides settings.py.

SECRET_KEY = 'change-me'

DEBUG = True

ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True

# Reports treat "today" as the calendar day in this zone.
TIME_ZONE = 'Asia/Kolkata'

# Cache — local memory for dev, Redis for production
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'nexsales-erp',
    }
}

# For production use Redis:
# CACHES = {
#     'default': {
#         'BACKEND': 'django.core.cache.backends.redis.RedisCache',
#         'LOCATION': 'redis://127.0.0.1:6379/1',
#     }
# }

# OpenAI
OPENAI_API_KEY = ""
OPENAI_MODEL = "gpt-4o"

# Company
COMPANY_NAME = "NexSales Corp"
COMPANY_CURRENCY = "USD"
COMPANY_TAX_RATE = "0.15"

# False starts with an empty store; populate it through the mock-data endpoint
INVENTORY_LOAD_DEMO_DATA = True

ENVIRONMENT = "Local"
