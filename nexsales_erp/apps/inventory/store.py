import logging
import threading
import time
import uuid
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import fields, replace

from .errors import DuplicateRecord, InvalidUpdate, NotFound
from .records import STATUS_TRANSITIONS, OrderStatus, Product

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = frozenset(f.name for f in fields(Product)) - {'id'}


class OrderNumberSequence:
    """
    Issues ``ORD-<digits>`` numbers from the last six digits of the
    millisecond clock. Numbers only ever increase within one process, so two
    orders placed in the same millisecond still get distinct ids. Nothing is
    guaranteed across processes.
    """

    SUFFIX_MODULUS = 1000000

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0

    def next(self, taken=()):
        candidate = int(self._clock() * 1000) % self.SUFFIX_MODULUS
        if candidate <= self._last:
            candidate = self._last + 1
        while "ORD-{}".format(candidate) in taken:
            candidate += 1
        self._last = candidate
        return "ORD-{}".format(candidate)


class Store:
    """
    In-memory owner of products, customers and orders.

    Every mutation runs under a single re-entrant lock. Callers that need a
    read-then-write sequence to be atomic (e.g. building and placing an
    order) wrap it in ``transaction()``.
    """

    def __init__(self, config, products=(), customers=(), orders=(), order_numbers=None):
        self._config = config
        self._lock = threading.RLock()
        self._products = OrderedDict()
        self._customers = OrderedDict()
        self._orders = []
        self._order_ids = set()
        self._order_numbers = order_numbers or OrderNumberSequence()
        self._revision = 0
        self._uid = uuid.uuid4().hex

        for product in products:
            self.add_product(product)
        for customer in customers:
            self.add_customer(customer)
        # Seed orders keep their given order and do not touch stock.
        for order in orders:
            if order.order_id in self._order_ids:
                raise DuplicateRecord('order', order.order_id)
            self._orders.append(order)
            self._order_ids.add(order.order_id)

    @property
    def config(self):
        return self._config

    @property
    def revision(self):
        """Incremented on every mutation."""
        return self._revision

    @property
    def version_key(self):
        """Identifies this store at its current revision."""
        return "{}:{}".format(self._uid, self._revision)

    @contextmanager
    def transaction(self):
        with self._lock:
            yield self

    # ── Reads ────────────────────────────────────────────────────────────

    def products(self):
        with self._lock:
            return tuple(self._products.values())

    def customers(self):
        with self._lock:
            return tuple(self._customers.values())

    def orders(self):
        """All orders, most recent first."""
        with self._lock:
            return tuple(self._orders)

    def get_product(self, product_id):
        with self._lock:
            try:
                return self._products[product_id]
            except KeyError:
                raise NotFound('product', product_id) from None

    def get_customer(self, customer_id):
        with self._lock:
            try:
                return self._customers[customer_id]
            except KeyError:
                raise NotFound('customer', customer_id) from None

    def get_order(self, order_id):
        with self._lock:
            for order in self._orders:
                if order.order_id == order_id:
                    return order
            raise NotFound('order', order_id)

    def orders_for_customer(self, customer_id):
        with self._lock:
            return tuple(o for o in self._orders if o.customer_id == customer_id)

    # ── Products ─────────────────────────────────────────────────────────

    def add_product(self, product):
        with self._lock:
            if product.id in self._products:
                raise DuplicateRecord('product', product.id)
            self._products[product.id] = product
            self._touch()
            logger.debug("STORE — product added: %s", product.id)
            return product

    def update_product(self, product_id, **changes):
        unknown = set(changes) - PRODUCT_FIELDS
        if unknown:
            raise InvalidUpdate('product', product_id, "unknown field(s): {}".format(', '.join(sorted(unknown))))
        with self._lock:
            current = self.get_product(product_id)
            updated = replace(current, **changes)
            self._products[product_id] = updated
            self._touch()
            logger.debug("STORE — product updated: %s %s", product_id, changes)
            return updated

    def remove_product(self, product_id):
        with self._lock:
            removed = self.get_product(product_id)
            del self._products[product_id]
            self._touch()
            logger.debug("STORE — product removed: %s", product_id)
            return removed

    # ── Customers ────────────────────────────────────────────────────────

    def add_customer(self, customer):
        with self._lock:
            if customer.id in self._customers:
                raise DuplicateRecord('customer', customer.id)
            self._customers[customer.id] = customer
            self._touch()
            logger.debug("STORE — customer added: %s", customer.id)
            return customer

    def remove_customer(self, customer_id):
        with self._lock:
            removed = self.get_customer(customer_id)
            del self._customers[customer_id]
            self._touch()
            logger.debug("STORE — customer removed: %s", customer_id)
            return removed

    # ── Orders ───────────────────────────────────────────────────────────

    def next_order_id(self):
        with self._lock:
            return self._order_numbers.next(taken=self._order_ids)

    def place_order(self, order):
        """
        Insert ``order`` at the front and deduct stock once per distinct
        product by the summed quantity of its lines. Nothing is written unless
        the customer and every product exist and the id is free.
        """
        with self._lock:
            if order.order_id in self._order_ids:
                raise DuplicateRecord('order', order.order_id)
            self.get_customer(order.customer_id)

            deductions = OrderedDict()
            for item in order.items:
                deductions[item.product_id] = deductions.get(item.product_id, 0) + item.quantity
            for product_id in deductions:
                self.get_product(product_id)

            self._orders.insert(0, order)
            self._order_ids.add(order.order_id)
            for product_id, quantity in deductions.items():
                product = self._products[product_id]
                self._products[product_id] = replace(product, stock=product.stock - quantity)
            self._touch()

            logger.info(
                "STORE — order %s placed for %s | lines: %d | total: %s",
                order.order_id, order.customer_id, len(order.items), order.total,
            )
            return order

    def set_order_status(self, order_id, status):
        if status not in OrderStatus.values:
            raise InvalidUpdate('order', order_id, "unknown status '{}'".format(status))
        status = OrderStatus(status)
        with self._lock:
            for index, order in enumerate(self._orders):
                if order.order_id == order_id:
                    if status not in STATUS_TRANSITIONS[OrderStatus(order.status)]:
                        raise InvalidUpdate(
                            'order', order_id, "cannot move from '{}' to '{}'".format(order.status, status),
                        )
                    updated = replace(order, status=status)
                    self._orders[index] = updated
                    self._touch()
                    logger.info("STORE — order %s status: %s → %s", order_id, order.status, status)
                    return updated
            raise NotFound('order', order_id)

    # ── Bulk ─────────────────────────────────────────────────────────────

    def load_mock_data(self, products, customers):
        """
        Append generated records as-is. Duplicate SKUs or emails are accepted;
        a duplicate id rejects the whole batch.
        """
        products = list(products)
        customers = list(customers)
        with self._lock:
            seen = set(self._products)
            for product in products:
                if product.id in seen:
                    raise DuplicateRecord('product', product.id)
                seen.add(product.id)
            seen = set(self._customers)
            for customer in customers:
                if customer.id in seen:
                    raise DuplicateRecord('customer', customer.id)
                seen.add(customer.id)

            for product in products:
                self._products[product.id] = product
            for customer in customers:
                self._customers[customer.id] = customer
            self._touch()
            logger.info("STORE — mock data loaded: %d product(s), %d customer(s)", len(products), len(customers))
            return products, customers

    def _touch(self):
        self._revision += 1


def get_store():
    """The process-wide store owned by the inventory app."""
    from django.apps import apps
    return apps.get_app_config('inventory').store
