"""
Orders module serializers.
"""
import re
from datetime import datetime, time

from dateutil import parser as date_parser
from django.utils import timezone
from rest_framework import serializers

from .dtos import ALLOWED_CURRENCIES, OrderArticleData, OrderData
from .models import OrderModel
from .repositories import GROUP_BY_CHOICES

DATE_ONLY_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def parse_query_datetime(value: str, end_of_day: bool = False) -> datetime:
    """
    Parse an ISO 8601 date or datetime query value into an aware datetime.

    A bare YYYY-MM-DD as an upper bound covers the whole day.
    """
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        raise serializers.ValidationError(f"Invalid date: {value}")
    if end_of_day and DATE_ONLY_PATTERN.match(value):
        parsed = datetime.combine(parsed.date(), time.max)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, timezone.get_current_timezone())
    return parsed


# Aggregation

class AggregationQuerySerializer(serializers.Serializer):
    """Query parameters of the aggregation endpoint."""
    group_by = serializers.ChoiceField(
        choices=GROUP_BY_CHOICES,
        error_messages={
            'required': 'group_by is required',
            'invalid_choice': 'group_by must be one of: day, month, year',
        },
    )
    status = serializers.ChoiceField(
        choices=OrderModel.VALID_STATUSES,
        required=False,
        error_messages={'invalid_choice': 'status must be one of: 1, 2, 3, 4, 5'},
    )
    from_date = serializers.CharField(required=False)
    to_date = serializers.CharField(required=False)
    user_id = serializers.IntegerField(required=False, min_value=1)

    def validate_status(self, value):
        return int(value)

    def validate_from_date(self, value):
        return parse_query_datetime(value)

    def validate_to_date(self, value):
        return parse_query_datetime(value, end_of_day=True)

    def validate(self, attrs):
        from_date = attrs.get('from_date')
        to_date = attrs.get('to_date')
        if from_date and to_date and from_date > to_date:
            raise serializers.ValidationError({'from_date': 'from_date must not be after to_date'})
        return attrs


class AggregationBucketSerializer(serializers.Serializer):
    group = serializers.CharField()
    count = serializers.IntegerField()


class AggregationMetaSerializer(serializers.Serializer):
    page = serializers.IntegerField()
    per_page = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    total_items = serializers.IntegerField()


class AggregationResponseSerializer(serializers.Serializer):
    """Serializer for aggregation output (schema only)."""
    meta = AggregationMetaSerializer()
    data = AggregationBucketSerializer(many=True)


# Order output

class OrderArticleSerializer(serializers.Serializer):
    """Serializer for order article output."""
    id = serializers.IntegerField(read_only=True)
    article_id = serializers.IntegerField(read_only=True)
    article_code = serializers.CharField(read_only=True, allow_null=True)
    article_name = serializers.CharField(read_only=True, allow_null=True)
    amount = serializers.CharField(read_only=True)
    price = serializers.CharField(read_only=True)
    price_eur = serializers.CharField(read_only=True, allow_null=True)
    currency = serializers.CharField(read_only=True, allow_null=True)
    measure = serializers.CharField(read_only=True, allow_null=True)
    delivery_time_min = serializers.DateField(read_only=True, allow_null=True)
    delivery_time_max = serializers.DateField(read_only=True, allow_null=True)
    weight = serializers.CharField(read_only=True, allow_null=True)
    packaging_count = serializers.CharField(read_only=True, allow_null=True)
    pallet = serializers.CharField(read_only=True, allow_null=True)
    packaging = serializers.CharField(read_only=True, allow_null=True)
    swimming_pool = serializers.BooleanField(read_only=True)
    total_price = serializers.CharField(read_only=True)
    total_weight = serializers.CharField(read_only=True, allow_null=True)
    delivery_days = serializers.IntegerField(read_only=True, allow_null=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class OrderSerializer(serializers.Serializer):
    """Serializer for order output (schema only, responses come from OrderResponse)."""
    id = serializers.IntegerField(read_only=True)
    uuid = serializers.CharField(read_only=True)
    hash = serializers.CharField(read_only=True)
    user_id = serializers.IntegerField(read_only=True, allow_null=True)
    token = serializers.CharField(read_only=True)
    number = serializers.CharField(read_only=True, allow_null=True)
    status = serializers.IntegerField(read_only=True)
    email = serializers.CharField(read_only=True, allow_null=True)
    client_name = serializers.CharField(read_only=True, allow_null=True)
    client_surname = serializers.CharField(read_only=True, allow_null=True)
    company_name = serializers.CharField(read_only=True, allow_null=True)
    currency = serializers.CharField(read_only=True)
    measure = serializers.CharField(read_only=True)
    locale = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True, allow_null=True)
    delivery_price = serializers.CharField(read_only=True, allow_null=True)
    cur_rate = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
    articles = OrderArticleSerializer(many=True, read_only=True)


# Order input

class OrderArticleCreateSerializer(serializers.Serializer):
    """Serializer for an article of a new order."""
    article_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(max_digits=12, decimal_places=4)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    article_code = serializers.CharField(max_length=100, required=False, allow_null=True)
    article_name = serializers.CharField(max_length=255, required=False, allow_null=True)
    price_eur = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    currency = serializers.CharField(min_length=3, max_length=3, required=False, allow_null=True)
    measure = serializers.CharField(max_length=5, required=False, allow_null=True)
    delivery_time_min = serializers.DateField(required=False, allow_null=True)
    delivery_time_max = serializers.DateField(required=False, allow_null=True)
    weight = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=0, required=False, allow_null=True)
    packaging_count = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=0, required=False, allow_null=True)
    pallet = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=0, required=False, allow_null=True)
    packaging = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=0, required=False, allow_null=True)
    swimming_pool = serializers.BooleanField(required=False, default=False)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('amount must be positive')
        return value


class OrderCreateSerializer(serializers.Serializer):
    """Serializer for creating an order."""
    name = serializers.CharField(max_length=200)
    client_name = serializers.CharField(max_length=150)
    client_surname = serializers.CharField(max_length=150)
    email = serializers.EmailField(max_length=150, required=False, allow_null=True)
    company_name = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    description = serializers.CharField(max_length=1000, required=False, allow_null=True, allow_blank=True)
    user_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    currency = serializers.ChoiceField(choices=ALLOWED_CURRENCIES, default='EUR')
    discount = serializers.IntegerField(min_value=0, max_value=100, required=False, allow_null=True)
    delivery_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    delivery_type = serializers.ChoiceField(choices=[code for code, _ in OrderModel.DELIVERY_TYPE_CHOICES], default=0)
    delivery_index = serializers.CharField(max_length=20, required=False, allow_null=True)
    delivery_country = serializers.IntegerField(required=False, allow_null=True)
    delivery_region = serializers.CharField(max_length=100, required=False, allow_null=True)
    delivery_city = serializers.CharField(max_length=200, required=False, allow_null=True)
    delivery_address = serializers.CharField(max_length=300, required=False, allow_null=True)
    delivery_phone = serializers.CharField(max_length=50, required=False, allow_null=True)
    pay_type = serializers.ChoiceField(choices=[code for code, _ in OrderModel.PAY_TYPE_CHOICES], default=0)
    locale = serializers.CharField(max_length=10, default='en')
    measure = serializers.CharField(max_length=5, default='m')
    articles = OrderArticleCreateSerializer(many=True, allow_empty=False)

    def to_order_data(self) -> OrderData:
        data = dict(self.validated_data)
        articles = [OrderArticleData(**article) for article in data.pop('articles')]
        return OrderData(articles=articles, **data)


class OrderStatusUpdateSerializer(serializers.Serializer):
    """Serializer for changing an order status."""
    status = serializers.ChoiceField(
        choices=OrderModel.VALID_STATUSES,
        error_messages={'invalid_choice': 'status must be one of: 1, 2, 3, 4, 5'},
    )
