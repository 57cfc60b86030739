from django.apps import AppConfig


class AssistantConfig(AppConfig):
    name = 'apps.assistant'
    label = 'assistant'
    verbose_name = 'ERP Assistant'
