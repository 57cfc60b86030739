from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.utils import timezone

from .records import CompanyConfig, Customer, Order, OrderItem, OrderStatus, Product
from .store import Store


PRODUCTS = [
    ('prod-001', 'PROD001', 'Wireless Mouse', 'Electronics', '27.99', 145, 20),
    ('prod-002', 'PROD002', 'USB Cable', 'Accessories', '9.99', 340, 50),
    ('prod-003', 'PROD003', 'Laptop Stand', 'Office', '45.50', 12, 15),
    ('prod-004', 'PROD004', 'Laptop Bag', 'Accessories', '39.99', 50, 10),
]

CUSTOMERS = [
    ('cust-001', 'John Smith', 'john@email.com', '+1234567890', 'Tech Corp'),
    ('cust-002', 'Sarah Johnson', 'sarah@email.com', '+0987654321', 'Design Studio'),
    ('cust-003', 'Mike Davis', 'mike@email.com', '+1122334455', 'Retail Plus'),
]


def company_config():
    return CompanyConfig(
        name=settings.COMPANY_NAME,
        currency=settings.COMPANY_CURRENCY,
        tax_rate=Decimal(str(settings.COMPANY_TAX_RATE)),
    )


def demo_products():
    return [
        Product(id=pid, sku=sku, name=name, category=category,
                price=Decimal(price), stock=stock, reorder_level=reorder)
        for pid, sku, name, category, price, stock, reorder in PRODUCTS
    ]


def demo_customers():
    return [
        Customer(id=cid, name=name, email=email, phone=phone, company=company)
        for cid, name, email, phone, company in CUSTOMERS
    ]


def demo_orders(now=None):
    """Historical orders. Prices are snapshots and differ from today's list prices."""
    now = now or timezone.now()
    return [
        Order(
            order_id='ORD-100002',
            customer_id='cust-002',
            customer_name='Sarah Johnson',
            date=now,
            status=OrderStatus.CONFIRMED,
            items=(
                OrderItem('prod-003', 'Laptop Stand', 3, Decimal('45.50')),
                OrderItem('prod-001', 'Wireless Mouse', 1, Decimal('27.99')),
            ),
            total=Decimal('189.16'),
        ),
        Order(
            order_id='ORD-100001',
            customer_id='cust-001',
            customer_name='John Smith',
            date=now - timedelta(days=2),
            status=OrderStatus.DELIVERED,
            items=(
                OrderItem('prod-001', 'Wireless Mouse', 5, Decimal('25.99')),
                OrderItem('prod-002', 'USB Cable', 10, Decimal('9.99')),
            ),
            total=Decimal('264.33'),
        ),
    ]


def build_store(with_demo_data=True):
    config = company_config()
    if not with_demo_data:
        return Store(config)
    return Store(
        config,
        products=demo_products(),
        customers=demo_customers(),
        orders=demo_orders(),
    )
