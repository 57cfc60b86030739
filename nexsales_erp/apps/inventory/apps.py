import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class InventoryConfig(AppConfig):
    name = 'apps.inventory'
    label = 'inventory'
    verbose_name = 'Inventory'

    store = None

    def ready(self):
        from .demo_data import build_store

        self.store = build_store(with_demo_data=settings.INVENTORY_LOAD_DEMO_DATA)
        config = self.store.config
        logger.info("ERP system initialized — %s | %s | tax %s", config.name, config.currency, config.tax_rate)
        logger.info(
            "Data loaded: %d products, %d customers, %d orders",
            len(self.store.products()), len(self.store.customers()), len(self.store.orders()),
        )
