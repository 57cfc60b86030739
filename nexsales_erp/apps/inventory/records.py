from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'
    SHIPPED = 'shipped', 'Shipped'
    DELIVERED = 'delivered', 'Delivered'
    CANCELLED = 'cancelled', 'Cancelled'


# Status moves an order may make. Delivered and cancelled are final.
STATUS_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


# Statuses that count as realised revenue.
REVENUE_STATUSES = frozenset({
    OrderStatus.CONFIRMED,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
})


@dataclass(frozen=True)
class CompanyConfig:
    """Process-wide company settings."""

    name: str
    currency: str
    tax_rate: Decimal


@dataclass(frozen=True)
class Product:
    """Products available for sale."""

    id: str
    sku: str
    name: str
    category: str
    price: Decimal
    stock: int
    reorder_level: int

    @property
    def is_low_stock(self):
        return self.stock <= self.reorder_level


@dataclass(frozen=True)
class Customer:
    """People and companies that place orders."""

    id: str
    name: str
    email: str = ''
    phone: str = ''
    company: str = ''


@dataclass(frozen=True)
class OrderItem:
    """
    One line of an order. Name and price are copied from the product when the
    order is created and never follow later product edits.
    """

    product_id: str
    product_name: str
    quantity: int
    price_at_time: Decimal

    @property
    def line_total(self):
        return self.price_at_time * self.quantity


@dataclass(frozen=True)
class Order:
    """Customer purchase orders."""

    order_id: str
    customer_id: str
    customer_name: str
    date: datetime
    items: tuple = field(default_factory=tuple)
    total: Decimal = Decimal('0')
    status: str = OrderStatus.PENDING

    @property
    def subtotal(self):
        return sum((item.line_total for item in self.items), Decimal('0'))


def order_total(items, tax_rate):
    """Subtotal of ``items`` with tax applied. Not rounded."""
    subtotal = sum((item.line_total for item in items), Decimal('0'))
    return subtotal * (1 + tax_rate)
