"""
Order service tests.
"""
import re
from decimal import Decimal
from unittest import mock

import pytest
from django.db import transaction
from django.utils import timezone

from modules.orders.dtos import OrderArticleData, OrderResponse
from modules.orders.exceptions import (
    OrderCreationError,
    OrderNotFoundError,
    OrderValidationError,
)
from modules.orders.models import OrderArticleModel, OrderModel
from modules.orders.services import OrderService, generate_order_hash
from modules.orders.value_objects import OrderNumber

UUID4_PATTERN = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$')
HASH_PATTERN = re.compile(r'^[0-9a-f]{64}$')
NUMBER_PATTERN = re.compile(r'^ORD-\d{4}-\d{3}$')


@pytest.mark.django_db
class TestCreateOrder:

    def test_assigns_identifiers(self, order_data):
        order = OrderService().create_order(order_data())

        assert UUID4_PATTERN.match(order.uuid)
        assert HASH_PATTERN.match(order.hash)
        assert NUMBER_PATTERN.match(order.number)
        assert order.status == OrderModel.STATUS_PENDING
        assert len(order.articles) == 1

    def test_numbers_follow_yearly_sequence(self, order_data):
        service = OrderService()
        year = timezone.now().year

        first = service.create_order(order_data())
        second = service.create_order(order_data())

        assert first.number == f"ORD-{year}-001"
        assert second.number == f"ORD-{year}-002"

    def test_sequence_is_per_year(self):
        service = OrderService()
        with transaction.atomic():
            assert str(service.next_order_number(year=2023)) == 'ORD-2023-001'
            assert str(service.next_order_number(year=2023)) == 'ORD-2023-002'
            assert str(service.next_order_number(year=2022)) == 'ORD-2022-001'

    def test_persists_articles_atomically(self, order_data):
        data = order_data(articles=[
            OrderArticleData(article_id=1, amount=Decimal('1'), price=Decimal('5')),
            OrderArticleData(article_id=2, amount=Decimal('3'), price=Decimal('7.25'), currency='USD'),
        ])

        order = OrderService().create_order(data)

        stored = OrderArticleModel.objects.filter(order_id=order.id).order_by('article_id')
        assert [article.article_id for article in stored] == [1, 2]
        assert stored[0].currency == 'EUR'
        assert stored[1].currency == 'USD'

    def test_hashes_are_unique(self):
        hashes = {generate_order_hash() for _ in range(200)}

        assert len(hashes) == 200

    def test_requires_articles(self, order_data):
        with pytest.raises(OrderValidationError) as exc_info:
            OrderService().create_order(order_data(articles=[]))

        assert any(detail.startswith('articles') for detail in exc_info.value.details)
        assert OrderModel.objects.count() == 0

    @pytest.mark.parametrize('overrides', [
        {'currency': 'JPY'},
        {'discount': 150},
        {'email': 'not-an-email'},
        {'client_name': '  '},
        {'articles': [OrderArticleData(article_id=1, amount=Decimal('0'), price=Decimal('1'))]},
        {'articles': [OrderArticleData(article_id=1, amount=Decimal('1'), price=Decimal('-1'))]},
    ])
    def test_rejects_invalid_input(self, order_data, overrides):
        with pytest.raises(OrderValidationError):
            OrderService().create_order(order_data(**overrides))

    def test_wraps_storage_failures(self, order_data):
        with mock.patch.object(OrderArticleModel.objects, 'bulk_create', side_effect=RuntimeError('disk full')):
            with pytest.raises(OrderCreationError) as exc_info:
                OrderService().create_order(order_data())

        assert 'disk full' in exc_info.value.message
        assert OrderModel.objects.count() == 0


@pytest.mark.django_db
class TestLookupAndStatus:

    def test_get_by_id_and_hash(self, make_order):
        order = make_order()
        service = OrderService()

        assert service.get_order(order.id).pk == order.pk
        assert service.get_order(str(order.id)).pk == order.pk
        assert service.get_order(order.hash).pk == order.pk

    def test_missing_order(self):
        with pytest.raises(OrderNotFoundError):
            OrderService().get_order(999)

    def test_update_status(self, make_order):
        order = make_order()
        before = order.updated_at

        response = OrderService().update_order_status(order.id, OrderModel.STATUS_SHIPPED)

        order.refresh_from_db()
        assert response.status == OrderModel.STATUS_SHIPPED
        assert order.status == OrderModel.STATUS_SHIPPED
        assert order.updated_at >= before

    @pytest.mark.parametrize('status', [0, 6, -1])
    def test_update_status_rejects_unknown_codes(self, make_order, status):
        order = make_order()

        with pytest.raises(OrderValidationError):
            OrderService().update_order_status(order.id, status)

    def test_update_status_of_missing_order(self):
        with pytest.raises(OrderNotFoundError):
            OrderService().update_order_status(404, OrderModel.STATUS_CONFIRMED)


@pytest.mark.django_db
class TestOrderResponse:

    def test_article_projection(self, make_order):
        order = make_order(articles=[
            {'article_id': 1, 'amount': Decimal('2.5'), 'price': Decimal('10.10'), 'weight': Decimal('1.200')},
            {'article_id': 2, 'amount': Decimal('3'), 'price': Decimal('0.99')},
            {'article_id': 3, 'amount': Decimal('1'), 'price': Decimal('100')},
        ])

        response = OrderService().to_response(order)

        assert len(response.articles) == 3
        for projection, article in zip(response.articles, order.articles.all()):
            assert Decimal(projection.total_price) == article.price * article.amount
        assert response.articles[0].amount == '2.5000'
        assert response.articles[0].price == '10.10'
        assert Decimal(response.articles[0].total_weight) == Decimal('3.0')
        assert response.articles[1].total_weight is None

    def test_nullable_fields_stay_none(self, make_order):
        order = make_order(email=None, company_name=None)

        response = OrderService().to_response(order)

        assert response.email is None
        assert response.company_name is None
        assert response.delivery_price is None
        assert response.articles[0].price_eur is None

    def test_decimals_are_fixed_point_strings(self, make_order):
        order = make_order(delivery_price=Decimal('15'), cur_rate=Decimal('1.1'))

        data = OrderService().to_response(order).to_dict()

        assert data['delivery_price'] == '15.00'
        assert data['cur_rate'] == '1.100000'
        assert isinstance(data['articles'], list)
        assert isinstance(data['created_at'], str)

    def test_delivery_days(self, make_order):
        from datetime import date

        order = make_order(articles=[{
            'article_id': 1,
            'amount': Decimal('1'),
            'price': Decimal('1'),
            'delivery_time_min': date(2024, 3, 1),
            'delivery_time_max': date(2024, 3, 15),
        }])

        response = OrderResponse.from_model(order)

        assert response.articles[0].delivery_days == 14
        assert response.articles[0].delivery_time_min == '2024-03-01'


class TestOrderNumber:

    def test_format_and_parse(self):
        number = OrderNumber(year=2024, sequence=7)

        assert str(number) == 'ORD-2024-007'
        assert OrderNumber.parse('ORD-2024-007') == number
        assert str(OrderNumber(year=2024, sequence=1234)) == 'ORD-2024-1234'

    @pytest.mark.parametrize('value', ['ORD-24-001', 'ORD-2024-01', 'X-2024-001', ''])
    def test_parse_rejects_malformed(self, value):
        with pytest.raises(OrderValidationError):
            OrderNumber.parse(value)

    def test_sequence_must_be_positive(self):
        with pytest.raises(OrderValidationError):
            OrderNumber(year=2024, sequence=0)
