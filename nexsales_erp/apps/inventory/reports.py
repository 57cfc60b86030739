import logging
from collections import namedtuple
from decimal import Decimal

from django.utils import timezone

from .records import REVENUE_STATUSES, OrderStatus

logger = logging.getLogger(__name__)

RESTOCK_BUFFER = 25
RESTOCK_MIN_TARGET = 20
BEST_SELLER_COUNT = 3

DailyReport = namedtuple('DailyReport', [
    'period',
    'date',
    'orders_count',
    'revenue',
    'low_stock_items',
    'pending_orders_count',
    'pending_orders_total',
])

BestSeller = namedtuple('BestSeller', ['product_id', 'name', 'quantity', 'revenue'])
TopCustomer = namedtuple('TopCustomer', ['customer_id', 'name', 'company', 'total_spent'])
RestockRecommendation = namedtuple('RestockRecommendation', ['product', 'suggested_order', 'estimated_cost'])

InventoryReport = namedtuple('InventoryReport', [
    'total_inventory_value',
    'low_stock_items',
    'todays_sales_total',
    'confirmed_revenue',
    'best_sellers',
    'top_customer',
    'restock_recommendations',
])


def _total(orders):
    return sum((o.total for o in orders), Decimal('0'))


def _todays_orders(orders, now):
    today = timezone.localdate(now)
    return [o for o in orders if timezone.localdate(o.date) == today]


def low_stock_products(store):
    return [p for p in store.products() if p.is_low_stock]


def daily_report(store, now=None, period='today'):
    """Today's orders and revenue, low stock, and the pending backlog."""
    now = now or timezone.now()
    orders = store.orders()

    todays = _todays_orders(orders, now)
    pending = [o for o in orders if o.status == OrderStatus.PENDING]

    return DailyReport(
        period=period,
        date=timezone.localdate(now),
        orders_count=len(todays),
        revenue=_total(todays),
        low_stock_items=low_stock_products(store),
        pending_orders_count=len(pending),
        pending_orders_total=_total(pending),
    )


def customer_total_spent(orders):
    return _total(o for o in orders if o.status != OrderStatus.CANCELLED)


def inventory_report(store, now=None):
    now = now or timezone.now()
    products = store.products()
    orders = store.orders()
    live_orders = [o for o in orders if o.status != OrderStatus.CANCELLED]
    by_id = {p.id: p for p in products}

    sold = {}
    for order in live_orders:
        for item in order.items:
            sold[item.product_id] = sold.get(item.product_id, 0) + item.quantity

    best_sellers = []
    for product_id, quantity in sorted(sold.items(), key=lambda kv: kv[1], reverse=True)[:BEST_SELLER_COUNT]:
        product = by_id.get(product_id)
        best_sellers.append(BestSeller(
            product_id=product_id,
            name=product.name if product else 'Unknown Product',
            quantity=quantity,
            revenue=(product.price if product else Decimal('0')) * quantity,
        ))

    spend = {}
    for order in live_orders:
        spend[order.customer_id] = spend.get(order.customer_id, Decimal('0')) + order.total
    top_customer = None
    if spend:
        customer_id, total_spent = max(spend.items(), key=lambda kv: kv[1])
        customer = next((c for c in store.customers() if c.id == customer_id), None)
        top_customer = TopCustomer(
            customer_id=customer_id,
            name=customer.name if customer else None,
            company=customer.company if customer else None,
            total_spent=total_spent,
        )

    low_stock = [p for p in products if p.is_low_stock]
    recommendations = []
    for product in low_stock:
        target = max(product.reorder_level * 3, RESTOCK_MIN_TARGET)
        suggested = max(0, target - product.stock)
        recommendations.append(RestockRecommendation(
            product=product,
            suggested_order=suggested,
            estimated_cost=product.price * suggested,
        ))

    return InventoryReport(
        total_inventory_value=sum((p.price * p.stock for p in products), Decimal('0')),
        low_stock_items=low_stock,
        todays_sales_total=_total(_todays_orders(orders, now)),
        confirmed_revenue=_total(o for o in orders if o.status in REVENUE_STATUSES),
        best_sellers=best_sellers,
        top_customer=top_customer,
        restock_recommendations=recommendations,
    )


def restock_low_stock(store, buffer=RESTOCK_BUFFER):
    """Bring every low-stock product up to its reorder level plus ``buffer``."""
    with store.transaction():
        updated = [
            store.update_product(p.id, stock=p.reorder_level + buffer)
            for p in low_stock_products(store)
        ]
    logger.info("RESTOCK — %d product(s) restocked", len(updated))
    return updated
