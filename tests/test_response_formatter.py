"""Tests for ResponseFormatter."""

from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from apps.assistant.services.action_executor import (
    CustomerHistory,
    ExecutionResult,
    StockChange,
)
from apps.assistant.services.actions import (
    CreateOrder,
    GenerateReport,
    LookupCustomerHistory,
    LookupProduct,
    PlainText,
    UpdateStock,
)
from apps.assistant.services.response_formatter import (
    GENERIC_FAILURE,
    ResponseFormatter,
    format_money,
)
from apps.inventory.errors import NotFound
from apps.inventory.orders import OrderLine
from apps.inventory.records import Order, OrderItem, OrderStatus
from apps.inventory.reports import DailyReport


@pytest.fixture
def formatter(company_config):
    return ResponseFormatter(company_config)


def ok(value):
    return ExecutionResult(success=True, value=value)


def failed(error):
    return ExecutionResult(success=False, error=error)


class TestFormatMoney:

    def test_known_symbol(self):
        assert format_money(Decimal('1234.5'), 'USD') == '$1,234.50'

    def test_rounds_half_up(self):
        assert format_money(Decimal('27.025'), 'EUR') == '€27.03'

    def test_unknown_currency_uses_code(self):
        assert format_money(Decimal('3'), 'CHF') == '3.00 CHF'


class TestSuccess:

    def test_plain_text(self, formatter):
        response = formatter.format(PlainText('Hello'), ok('Hello'))

        assert response.text == 'Hello'
        assert response.data is None
        assert response.action == 'plain_text'

    def test_order_confirmation(self, formatter):
        action = CreateOrder('c1', (OrderLine('p1', 2),), 'Ordered 2 widgets for Ada')
        order = Order(
            order_id='ORD-123456', customer_id='c1', customer_name='Ada Lovelace',
            date=datetime(2026, 10, 18, tzinfo=dt_timezone.utc),
            items=(OrderItem('p1', 'Widget', 2, Decimal('10')),),
            total=Decimal('23.00'), status=OrderStatus.CONFIRMED,
        )

        response = formatter.format(action, ok(order))

        assert response.success
        assert response.data is None
        assert response.text == "✅ Success! Ordered 2 widgets for Ada\nOrder ORD-123456 · Total: $23.00"

    def test_product_card(self, formatter, store):
        product = store.get_product('p1')

        response = formatter.format(LookupProduct('p1'), ok(product))

        assert response.text == 'Here is the current stock information for Widget:'
        assert response.data['type'] == 'product_card'
        assert response.data['product']['sku'] == 'SKU-1'
        assert response.data['product']['stock'] == 5
        assert response.data['product']['is_low_stock'] is False

    def test_stock_added(self, formatter, store):
        before = store.get_product('p1')
        after = store.update_product('p1', stock=25)

        response = formatter.format(UpdateStock('p1', 20), ok(StockChange(before, after, 20)))

        assert response.text == "✅ Inventory Updated.\nAdded 20 units to Widget.\nNew Stock Level: 25"

    def test_stock_removed(self, formatter, store):
        before = store.get_product('p1')
        after = store.update_product('p1', stock=1)

        response = formatter.format(UpdateStock('p1', -4), ok(StockChange(before, after, -4)))

        assert "Removed 4 units from Widget." in response.text

    def test_customer_history(self, formatter, store):
        history = CustomerHistory(customer=store.get_customer('c2'), orders=[], total_spent=Decimal('0'))

        response = formatter.format(LookupCustomerHistory('c2'), ok(history))

        assert response.text == 'Found 0 orders for Grace Hopper.'
        assert response.data['type'] == 'customer_history'
        assert response.data['customer']['company'] == 'Compilers Inc'
        assert response.data['orders'] == []
        assert response.data['total_spent'] == 0

    def test_daily_report(self, formatter, store):
        report = DailyReport(
            period='today', date=date(2026, 10, 18), orders_count=2, revenue=Decimal('50.5'),
            low_stock_items=[store.get_product('p1')], pending_orders_count=1,
            pending_orders_total=Decimal('11.5'),
        )

        response = formatter.format(GenerateReport(), ok(report))

        assert response.text == 'Generated End of Day Report for Sun Oct 18 2026.'
        payload = response.data['report']
        assert response.data['type'] == 'daily_report'
        assert payload['date'] == '2026-10-18'
        assert payload['orders_count'] == 2
        assert payload['low_stock_items'][0]['id'] == 'p1'
        assert payload['pending_orders_total'] == Decimal('11.50')


class TestFailure:

    def test_order_names_missing_customer(self, formatter):
        action = CreateOrder('c404', (OrderLine('p1', 1),))

        response = formatter.format(action, failed(NotFound('customer', 'c404')))

        assert not response.success
        assert response.data is None
        assert "customer 'c404' was not found" in response.text

    def test_order_names_missing_product(self, formatter):
        action = CreateOrder('c1', (OrderLine('ghost', 1),))

        response = formatter.format(action, failed(NotFound('product', 'ghost')))

        assert "product 'ghost' was not found" in response.text

    def test_lookup_missing_product(self, formatter):
        response = formatter.format(LookupProduct('x'), failed(NotFound('product', 'x')))

        assert 'seems invalid' in response.text

    def test_update_stock_missing_product(self, formatter):
        response = formatter.format(UpdateStock('x', 1), failed(NotFound('product', 'x')))

        assert response.text.startswith('Could not update stock')

    def test_history_missing_customer(self, formatter):
        response = formatter.format(LookupCustomerHistory('x'), failed(NotFound('customer', 'x')))

        assert response.text == "I couldn't find that customer in the database."

    def test_unexpected_error_is_generic(self, formatter):
        response = formatter.format(LookupProduct('p1'), failed(RuntimeError('boom')))

        assert response.text == GENERIC_FAILURE
