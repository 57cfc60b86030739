import json

from django.core.management.base import BaseCommand

from apps.assistant.services.agent import AssistantAgent
from apps.assistant.services.store_context import DecimalEncoder
from apps.inventory.demo_data import build_store
from apps.inventory.store import get_store

EXIT_WORDS = {'exit', 'quit'}


class Command(BaseCommand):
    help = 'Chat with the ERP assistant against the in-memory store of this process'

    def add_arguments(self, parser):
        parser.add_argument('--message', help='Send a single message and exit')
        parser.add_argument('--empty', action='store_true', help='Start from an empty store instead of the demo data')

    def handle(self, *args, **options):
        store = build_store(with_demo_data=False) if options['empty'] else get_store()
        agent = AssistantAgent(store=store)

        if options['message']:
            self._turn(agent, options['message'])
            return

        self.stdout.write(self.style.SUCCESS(
            'ERP Assistant for {} — type "exit" to quit.'.format(store.config.name)
        ))
        while True:
            try:
                line = input('> ')
            except EOFError:
                break
            line = line.strip()
            if not line:
                continue
            if line.lower() in EXIT_WORDS:
                break
            self._turn(agent, line)

    def _turn(self, agent, message):
        result = agent.run(message)
        style = self.style.SUCCESS if result.success else self.style.WARNING
        self.stdout.write(style(result.text))
        if result.data:
            self.stdout.write(json.dumps(result.data, cls=DecimalEncoder, indent=2))
