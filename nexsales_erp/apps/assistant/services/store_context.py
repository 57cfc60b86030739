import json
import logging
from datetime import date, datetime
from decimal import Decimal

from django.core.cache import cache

logger = logging.getLogger(__name__)


class DecimalEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


class StoreContextBuilder:
    """
    Builds the redacted JSON snapshot of the store that goes into the
    assistant prompt: company config, product id/name/price/stock and
    customer id/name/company. Cached per store revision.
    """

    CACHE_KEY = 'erp_store_context_v1'
    CACHE_TTL = 3600  # 1 hour

    def __init__(self, store):
        self.store = store

    def get_context(self):
        """Return cached snapshot string or build fresh one."""
        key = '{}:{}'.format(self.CACHE_KEY, self.store.version_key)
        cached = cache.get(key)
        if cached:
            logger.debug("CONTEXT — loaded from cache (revision %d)", self.store.revision)
            return cached
        logger.debug("CONTEXT — cache miss, building for revision %d", self.store.revision)
        context = self._build_context()
        cache.set(key, context, self.CACHE_TTL)
        return context

    def _build_context(self):
        config = self.store.config
        snapshot = {
            'config': {
                'name': config.name,
                'currency': config.currency,
                'taxRate': config.tax_rate,
            },
            'products': [
                {'id': p.id, 'name': p.name, 'price': p.price, 'stock': p.stock}
                for p in self.store.products()
            ],
            'customers': [
                {'id': c.id, 'name': c.name, 'company': c.company}
                for c in self.store.customers()
            ],
        }
        return json.dumps(snapshot, cls=DecimalEncoder)
