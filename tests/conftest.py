"""Pytest fixtures for nexsales_erp tests."""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.apps import apps

from apps.inventory.records import CompanyConfig, Customer, Product
from apps.inventory.store import Store


class FakeCompletions:
    """Stands in for ``client.chat.completions``; replays canned replies."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply, tool_calls=None)
        return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason='stop')])


class FakeClient:
    def __init__(self, *replies):
        self.completions = FakeCompletions(replies)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture(autouse=True)
def utc_calendar(settings):
    """Pin "today" to the UTC calendar day unless a test says otherwise."""
    settings.TIME_ZONE = 'UTC'


@pytest.fixture
def company_config():
    return CompanyConfig(name='Test Co', currency='USD', tax_rate=Decimal('0.15'))


@pytest.fixture
def store(company_config):
    """Two products and two customers, no orders."""
    return Store(
        company_config,
        products=[
            Product(id='p1', sku='SKU-1', name='Widget', category='Parts',
                    price=Decimal('10'), stock=5, reorder_level=2),
            Product(id='p2', sku='SKU-2', name='Gadget', category='Parts',
                    price=Decimal('4.50'), stock=50, reorder_level=10),
        ],
        customers=[
            Customer(id='c1', name='Ada Lovelace', email='ada@example.com', company='Engines Ltd'),
            Customer(id='c2', name='Grace Hopper', email='grace@example.com', company='Compilers Inc'),
        ],
    )


@pytest.fixture
def app_store(store, monkeypatch):
    """Install ``store`` as the process-wide store used by the views."""
    monkeypatch.setattr(apps.get_app_config('inventory'), 'store', store)
    return store


@pytest.fixture
def fake_client():
    return FakeClient
