import json
import logging

from django.conf import settings
from openai import OpenAIError

from apps.inventory.serializers import CustomerSerializer, ProductSerializer
from ..errors import UpstreamUnavailable
from .agent import build_client
from .business_context import MOCK_DATA_PROMPT

logger = logging.getLogger(__name__)


class MockDataGenerator:
    """Asks the model for sample products and customers and appends them to the store."""

    def __init__(self, store, client=None):
        self.store = store
        self.client = client

    def generate(self):
        client = self.client or build_client()
        existing = [p.id for p in self.store.products()] + [c.id for c in self.store.customers()]
        try:
            response = client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=[
                    {"role": "user", "content": MOCK_DATA_PROMPT.format(existing_ids=', '.join(existing) or 'none')},
                ],
                response_format={"type": "json_object"},
                temperature=0.7,
                max_tokens=2048,
            )
        except OpenAIError as e:
            raise UpstreamUnavailable(str(e)) from e

        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise UpstreamUnavailable("empty mock data reply")
        try:
            payload = json.loads(text)
        except ValueError as e:
            raise UpstreamUnavailable("mock data is not JSON ({})".format(e)) from e
        if not isinstance(payload, dict):
            raise UpstreamUnavailable("mock data is not a JSON object")

        products = self._records(ProductSerializer, payload.get('products'), 'products')
        customers = self._records(CustomerSerializer, payload.get('customers'), 'customers')
        return products, customers

    def load(self):
        """Generate and append. Returns the added products and customers."""
        products, customers = self.generate()
        return self.store.load_mock_data(products, customers)

    @staticmethod
    def _records(serializer_class, items, label):
        serializer = serializer_class(data=items or [], many=True)
        if not serializer.is_valid():
            logger.warning("MOCK DATA — invalid %s: %s", label, serializer.errors)
            raise UpstreamUnavailable("mock data has invalid {}".format(label))
        return serializer.save()
