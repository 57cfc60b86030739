import logging
from collections import namedtuple

from django.utils import timezone

from .records import Order, OrderItem, OrderStatus, order_total

logger = logging.getLogger(__name__)

OrderLine = namedtuple('OrderLine', ['product_id', 'quantity'])


def merge_lines(lines):
    """Collapse repeated products into one line, keeping first-seen order."""
    merged = {}
    for line in lines:
        merged[line.product_id] = merged.get(line.product_id, 0) + line.quantity
    return [OrderLine(product_id, quantity) for product_id, quantity in merged.items()]


def create_order(store, customer_id, lines, status=OrderStatus.PENDING, now=None):
    """
    Resolve the customer and products, snapshot names and current prices,
    and place the order. Runs as one store transaction: a missing customer
    or product raises ``NotFound`` before anything is written.
    """
    with store.transaction():
        customer = store.get_customer(customer_id)

        items = []
        for line in lines:
            product = store.get_product(line.product_id)
            items.append(OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=line.quantity,
                price_at_time=product.price,
            ))

        order = Order(
            order_id=store.next_order_id(),
            customer_id=customer.id,
            customer_name=customer.name,
            date=now or timezone.now(),
            items=tuple(items),
            total=order_total(items, store.config.tax_rate),
            status=status,
        )
        return store.place_order(order)
