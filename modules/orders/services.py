"""
Orders module service layer.
"""
import hashlib
import logging
import secrets
import time
import uuid
from decimal import Decimal
from typing import Union

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from shared.interfaces.pagination import total_pages

from .dtos import AggregationPage, OrderData, OrderResponse
from .exceptions import OrderCreationError, OrderNotFoundError, OrderValidationError
from .models import OrderArticleModel, OrderModel, OrderNumberSequenceModel
from .repositories import OrderRepository
from .value_objects import OrderNumber

logger = logging.getLogger(__name__)


def generate_order_hash() -> str:
    """64 hex chars derived from the current time and random bytes."""
    seed = f"order_{time.time_ns()}_{secrets.token_hex(16)}"
    return hashlib.sha256(seed.encode('utf-8')).hexdigest()


def generate_order_token() -> str:
    return secrets.token_hex(16)


class OrderService:
    """
    Order business logic service.
    """

    def __init__(self, repository: OrderRepository = None):
        self.repository = repository or OrderRepository()

    def create_order(self, data: OrderData) -> OrderResponse:
        """
        Validate and persist a new order with its articles.

        Args:
            data: Order payload from the REST or SOAP intake

        Returns:
            Projection of the stored order

        Raises:
            OrderValidationError: If the payload is invalid
            OrderCreationError: If persistence fails
        """
        errors = data.validate()
        if errors:
            raise OrderValidationError('Validation failed', details=errors)

        try:
            order = self._persist(data)
        except OrderValidationError:
            raise
        except Exception as e:
            logger.error(f"Order creation failed for {data.email}: {e}", exc_info=True)
            raise OrderCreationError(f"Failed to create order: {e}") from e

        logger.info(f"Order created: id={order.id}, number={order.number}, articles={len(data.articles)}")
        return self.to_response(order)

    @transaction.atomic
    def _persist(self, data: OrderData) -> OrderModel:
        order = OrderModel.objects.create(
            uuid=str(uuid.uuid4()),
            hash=generate_order_hash(),
            token=generate_order_token(),
            number=str(self.next_order_number()),
            status=OrderModel.STATUS_PENDING,
            user_id=data.user_id,
            name=data.name,
            client_name=data.client_name,
            client_surname=data.client_surname,
            email=data.email,
            company_name=data.company_name,
            description=data.description,
            currency=data.currency,
            discount=data.discount,
            delivery_price=data.delivery_price,
            delivery_type=data.delivery_type,
            delivery_index=data.delivery_index,
            delivery_country=data.delivery_country,
            delivery_region=data.delivery_region,
            delivery_city=data.delivery_city,
            delivery_address=data.delivery_address,
            delivery_phone=data.delivery_phone,
            pay_type=data.pay_type,
            locale=data.locale,
            measure=data.measure,
        )
        OrderArticleModel.objects.bulk_create([
            OrderArticleModel(
                order=order,
                article_id=article.article_id,
                article_code=article.article_code,
                article_name=article.article_name,
                amount=Decimal(article.amount),
                price=Decimal(article.price),
                price_eur=article.price_eur,
                currency=article.currency or data.currency,
                measure=article.measure or data.measure,
                delivery_time_min=article.delivery_time_min,
                delivery_time_max=article.delivery_time_max,
                weight=article.weight,
                packaging_count=article.packaging_count,
                pallet=article.pallet,
                packaging=article.packaging,
                swimming_pool=article.swimming_pool,
            )
            for article in data.articles
        ])
        return self.repository.find_by_id(order.id)

    def next_order_number(self, year: int = None) -> OrderNumber:
        """Reserve the next sequence value for the year. Must run inside a transaction."""
        year = year or timezone.now().year
        sequence, _ = OrderNumberSequenceModel.objects.select_for_update().get_or_create(year=year)
        OrderNumberSequenceModel.objects.filter(pk=sequence.pk).update(last_value=F('last_value') + 1)
        sequence.refresh_from_db(fields=['last_value'])
        return OrderNumber(year=year, sequence=sequence.last_value)

    def get_order(self, identifier: Union[int, str]) -> OrderModel:
        """Get order by numeric id or by hash."""
        order = self.repository.find_by_id_or_hash(identifier)
        if order is None:
            raise OrderNotFoundError(identifier)
        return order

    @transaction.atomic
    def update_order_status(self, order_id: int, status: int) -> OrderResponse:
        """Change the status of an order. Only status and updated_at are written."""
        if status not in OrderModel.VALID_STATUSES:
            raise OrderValidationError(
                f"status must be one of: {', '.join(str(code) for code in OrderModel.VALID_STATUSES)}",
                field='status',
            )
        order = self.get_order(order_id)
        previous = order.status
        order.status = status
        order.save(update_fields=['status', 'updated_at'])
        logger.info(f"Order {order.id} status changed: {previous} -> {status}")
        return self.to_response(order)

    def to_response(self, order: OrderModel) -> OrderResponse:
        return OrderResponse.from_model(order)


class AggregationService:
    """
    Grouped order counts by creation period.
    """

    def __init__(self, repository: OrderRepository = None):
        self.repository = repository or OrderRepository()

    def aggregate(
        self,
        group_by: str,
        page: int = 1,
        per_page: int = 20,
        status: int = None,
        from_date=None,
        to_date=None,
        user_id: int = None,
    ) -> AggregationPage:
        filters = {
            'status': status,
            'from_date': from_date,
            'to_date': to_date,
            'user_id': user_id,
        }
        buckets = self.repository.aggregate(group_by, page=page, per_page=per_page, **filters)
        total_items = self.repository.total_buckets(group_by, **filters)
        return AggregationPage(
            buckets=tuple(buckets),
            page=page,
            per_page=per_page,
            total_items=total_items,
            total_pages=total_pages(total_items, per_page),
        )
