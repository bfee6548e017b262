"""
Pytest configuration and fixtures.
"""
import itertools
import uuid
from decimal import Decimal

import pytest
from django.core.cache import cache


@pytest.fixture
def api_client():
    """Create an API client for testing."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_order(db):
    """
    Create an order with articles.

    created_at is written after insert since the column is auto_now_add.
    """
    from modules.orders.models import OrderArticleModel, OrderModel

    counter = itertools.count(1)

    def _make(created_at=None, articles=None, **fields):
        n = next(counter)
        values = {
            'uuid': str(uuid.uuid4()),
            'hash': f"{n:064x}",
            'token': f"{n:032x}",
            'number': f"ORD-2024-{n:03d}",
            'name': f"Order {n}",
            'client_name': 'Client',
            'client_surname': f"Number{n}",
            'email': f"client{n}@example.com",
            'status': OrderModel.STATUS_PENDING,
        }
        values.update(fields)
        order = OrderModel.objects.create(**values)

        if articles is None:
            articles = [{'article_id': 1001, 'amount': Decimal('2'), 'price': Decimal('10.50')}]
        for article in articles:
            OrderArticleModel.objects.create(order=order, **article)

        if created_at is not None:
            OrderModel.objects.filter(pk=order.pk).update(created_at=created_at)
        order.refresh_from_db()
        return order

    return _make


@pytest.fixture
def order_data():
    """Valid order payload with one article."""
    from modules.orders.dtos import OrderArticleData, OrderData

    def _data(**overrides):
        values = {
            'name': 'Bathroom tiles',
            'client_name': 'John',
            'client_surname': 'Doe',
            'email': 'john@example.com',
            'articles': [
                OrderArticleData(
                    article_id=1001,
                    article_name='Marble 60x60',
                    amount=Decimal('12.5'),
                    price=Decimal('25.99'),
                ),
            ],
        }
        values.update(overrides)
        return OrderData(**values)

    return _data
