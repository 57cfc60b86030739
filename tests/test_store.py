"""Tests for the in-memory Store."""

import threading
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from apps.inventory.errors import DuplicateRecord, InvalidUpdate, NotFound
from apps.inventory.records import Customer, Order, OrderItem, OrderStatus, Product
from apps.inventory.store import OrderNumberSequence, Store

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=dt_timezone.utc)


def make_order(order_id, *items, customer_id='c1', status=OrderStatus.PENDING):
    return Order(
        order_id=order_id,
        customer_id=customer_id,
        customer_name='Ada Lovelace',
        date=NOW,
        items=tuple(OrderItem(pid, 'name', qty, Decimal('1')) for pid, qty in items),
        total=Decimal('0'),
        status=status,
    )


class TestProducts:

    def test_add_and_get(self, store):
        product = Product(id='p3', sku='SKU-3', name='Gizmo', category='', price=Decimal('1'), stock=0, reorder_level=0)
        store.add_product(product)

        assert store.get_product('p3') == product
        assert [p.id for p in store.products()] == ['p1', 'p2', 'p3']

    def test_add_duplicate_id_raises(self, store):
        duplicate = Product(id='p1', sku='OTHER', name='Other', category='', price=Decimal('1'), stock=0, reorder_level=0)

        with pytest.raises(DuplicateRecord) as exc:
            store.add_product(duplicate)

        assert exc.value.kind == 'product'
        assert store.get_product('p1').name == 'Widget'

    def test_update_is_partial(self, store):
        updated = store.update_product('p1', price=Decimal('12'), stock=9)

        assert updated.price == Decimal('12')
        assert updated.stock == 9
        assert updated.name == 'Widget'
        assert store.get_product('p1') == updated

    def test_update_rejects_unknown_field(self, store):
        with pytest.raises(InvalidUpdate):
            store.update_product('p1', colour='red')

    def test_update_rejects_id_change(self, store):
        with pytest.raises(InvalidUpdate):
            store.update_product('p1', id='p9')

    def test_update_missing_raises_not_found(self, store):
        with pytest.raises(NotFound) as exc:
            store.update_product('nope', stock=1)

        assert exc.value.kind == 'product'
        assert exc.value.record_id == 'nope'

    def test_remove(self, store):
        store.remove_product('p1')

        with pytest.raises(NotFound):
            store.get_product('p1')

    def test_snapshots_are_immutable(self, store):
        product = store.get_product('p1')

        with pytest.raises(AttributeError):
            product.stock = 100
        assert store.get_product('p1').stock == 5


class TestCustomers:

    def test_add_duplicate_raises(self, store):
        with pytest.raises(DuplicateRecord):
            store.add_customer(Customer(id='c1', name='Someone'))

    def test_remove(self, store):
        store.remove_customer('c2')

        assert [c.id for c in store.customers()] == ['c1']

    def test_remove_missing_raises(self, store):
        with pytest.raises(NotFound) as exc:
            store.remove_customer('c9')

        assert exc.value.kind == 'customer'


class TestPlaceOrder:

    def test_new_orders_are_prepended(self, store):
        store.place_order(make_order('ORD-1', ('p1', 1)))
        store.place_order(make_order('ORD-2', ('p2', 1)))

        assert [o.order_id for o in store.orders()] == ['ORD-2', 'ORD-1']

    def test_stock_deducted_once_per_product(self, store):
        store.place_order(make_order('ORD-1', ('p1', 1), ('p2', 3), ('p1', 2)))

        assert store.get_product('p1').stock == 2
        assert store.get_product('p2').stock == 47

    def test_duplicate_order_id_raises(self, store):
        store.place_order(make_order('ORD-1', ('p1', 1)))

        with pytest.raises(DuplicateRecord):
            store.place_order(make_order('ORD-1', ('p1', 1)))
        assert store.get_product('p1').stock == 4

    def test_unknown_product_writes_nothing(self, store):
        revision = store.revision

        with pytest.raises(NotFound):
            store.place_order(make_order('ORD-1', ('p1', 1), ('ghost', 1)))

        assert store.orders() == ()
        assert store.get_product('p1').stock == 5
        assert store.revision == revision

    def test_unknown_customer_writes_nothing(self, store):
        with pytest.raises(NotFound) as exc:
            store.place_order(make_order('ORD-1', ('p1', 1), customer_id='nobody'))

        assert exc.value.kind == 'customer'
        assert store.orders() == ()

    def test_deleting_product_keeps_order_snapshot(self, store):
        store.place_order(make_order('ORD-1', ('p1', 1)))
        store.remove_product('p1')

        assert store.get_order('ORD-1').items[0].product_id == 'p1'

    def test_concurrent_orders_do_not_lose_deductions(self, store):
        def place(n):
            store.place_order(make_order('ORD-T{}'.format(n), ('p2', 1)))

        threads = [threading.Thread(target=place, args=(n,)) for n in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.get_product('p2').stock == 30
        assert len(store.orders()) == 20


class TestOrderStatus:

    def test_set_status(self, store):
        store.place_order(make_order('ORD-1', ('p1', 1)))

        updated = store.set_order_status('ORD-1', 'confirmed')

        assert updated.status == OrderStatus.CONFIRMED
        assert store.get_order('ORD-1').status == 'confirmed'

    def test_walks_forward_to_delivered(self, store):
        store.place_order(make_order('ORD-1', ('p1', 1)))

        for status in ('confirmed', 'shipped', 'delivered'):
            store.set_order_status('ORD-1', status)

        assert store.get_order('ORD-1').status == OrderStatus.DELIVERED

    @pytest.mark.parametrize("start, target", [
        (OrderStatus.CANCELLED, 'confirmed'),
        (OrderStatus.DELIVERED, 'pending'),
        (OrderStatus.SHIPPED, 'cancelled'),
        (OrderStatus.PENDING, 'shipped'),
    ])
    def test_backward_or_skipping_moves_rejected(self, store, start, target):
        store.place_order(make_order('ORD-1', ('p1', 1), status=start))
        revision = store.revision

        with pytest.raises(InvalidUpdate):
            store.set_order_status('ORD-1', target)

        assert store.get_order('ORD-1').status == start
        assert store.revision == revision

    def test_unknown_status_rejected(self, store):
        store.place_order(make_order('ORD-1', ('p1', 1)))

        with pytest.raises(InvalidUpdate):
            store.set_order_status('ORD-1', 'lost')

    def test_unknown_order_raises(self, store):
        with pytest.raises(NotFound) as exc:
            store.set_order_status('ORD-404', 'shipped')

        assert exc.value.kind == 'order'


class TestLoadMockData:

    def test_appends_wholesale_with_duplicate_skus(self, store):
        products = [
            Product(id='m1', sku='SKU-1', name='Copy', category='', price=Decimal('1'), stock=1, reorder_level=0),
        ]
        customers = [Customer(id='mc1', name='Ada again', email='ada@example.com')]

        store.load_mock_data(products, customers)

        assert [p.sku for p in store.products()].count('SKU-1') == 2
        assert len(store.customers()) == 3

    def test_duplicate_id_rejects_whole_batch(self, store):
        products = [
            Product(id='m1', sku='A', name='A', category='', price=Decimal('1'), stock=1, reorder_level=0),
            Product(id='p1', sku='B', name='B', category='', price=Decimal('1'), stock=1, reorder_level=0),
        ]

        with pytest.raises(DuplicateRecord):
            store.load_mock_data(products, [])

        assert len(store.products()) == 2


class TestOrderNumbers:

    def test_same_millisecond_still_unique(self):
        sequence = OrderNumberSequence(clock=lambda: 1700000000.5)

        first, second = sequence.next(), sequence.next()

        assert first == 'ORD-500'
        assert second == 'ORD-501'

    def test_skips_taken_ids(self, store):
        sequence = OrderNumberSequence(clock=lambda: 1700000000.5)

        assert sequence.next(taken={'ORD-500', 'ORD-501'}) == 'ORD-502'

    def test_store_ids_have_expected_format(self, store):
        order_id = store.next_order_id()

        assert order_id.startswith('ORD-')
        assert order_id[4:].isdigit()


def test_seed_orders_keep_given_order(company_config):
    orders = [make_order('ORD-2', ('p1', 1)), make_order('ORD-1', ('p1', 1))]

    seeded = Store(company_config, orders=orders)

    assert [o.order_id for o in seeded.orders()] == ['ORD-2', 'ORD-1']
