import time
import logging
from collections import namedtuple

from django.utils import timezone

from apps.inventory.errors import NotFound
from apps.inventory.orders import create_order
from apps.inventory.records import OrderStatus
from apps.inventory.reports import customer_total_spent, daily_report
from .actions import (
    CreateOrder,
    GenerateReport,
    LookupCustomerHistory,
    LookupProduct,
    PlainText,
    UpdateStock,
)

logger = logging.getLogger(__name__)

StockChange = namedtuple('StockChange', ['before', 'after', 'quantity'])
CustomerHistory = namedtuple('CustomerHistory', ['customer', 'orders', 'total_spent'])


class ExecutionResult:
    def __init__(self, success, value=None, error=None, execution_time_ms=0):
        self.success = success
        self.value = value
        self.error = error
        self.execution_time_ms = execution_time_ms


class ActionExecutor:
    """
    Applies parsed actions to a store. Order creation is all-or-nothing:
    a missing customer or product leaves the store untouched.
    """

    def __init__(self, store, clock=timezone.now):
        self.store = store
        self.clock = clock
        self._handlers = {
            PlainText: self._plain_text,
            CreateOrder: self._create_order,
            LookupProduct: self._lookup_product,
            UpdateStock: self._update_stock,
            LookupCustomerHistory: self._lookup_customer_history,
            GenerateReport: self._generate_report,
        }

    def execute(self, action):
        start = time.time()
        handler = self._handlers[type(action)]
        try:
            value = handler(action)
        except NotFound as e:
            elapsed = int((time.time() - start) * 1000)
            logger.warning("ACTION %s — %s", action.kind, e)
            return ExecutionResult(success=False, error=e, execution_time_ms=elapsed)
        except Exception as e:
            elapsed = int((time.time() - start) * 1000)
            logger.exception("ACTION %s FAILED after %dms — %s", action.kind, elapsed, str(e))
            return ExecutionResult(success=False, error=e, execution_time_ms=elapsed)

        elapsed = int((time.time() - start) * 1000)
        logger.debug("ACTION %s — done in %dms", action.kind, elapsed)
        return ExecutionResult(success=True, value=value, execution_time_ms=elapsed)

    def _plain_text(self, action):
        return action.message

    def _create_order(self, action):
        # Assistant orders skip the pending stage.
        return create_order(
            self.store,
            customer_id=action.customer_id,
            lines=action.items,
            status=OrderStatus.CONFIRMED,
            now=self.clock(),
        )

    def _lookup_product(self, action):
        return self.store.get_product(action.product_id)

    def _update_stock(self, action):
        # Stock may go negative; nothing clamps it.
        with self.store.transaction():
            before = self.store.get_product(action.product_id)
            after = self.store.update_product(before.id, stock=before.stock + action.quantity)
        return StockChange(before=before, after=after, quantity=action.quantity)

    def _lookup_customer_history(self, action):
        customer = self.store.get_customer(action.customer_id)
        orders = sorted(
            self.store.orders_for_customer(customer.id),
            key=lambda o: o.date,
            reverse=True,
        )
        return CustomerHistory(
            customer=customer,
            orders=orders,
            total_spent=customer_total_spent(orders),
        )

    def _generate_report(self, action):
        return daily_report(self.store, now=self.clock(), period=action.period)
