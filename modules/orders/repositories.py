"""
Django ORM queries for orders: lookup, grouped aggregation and substring search.
"""
import re
from datetime import datetime
from typing import List, Optional, Union

from django.db.models import Count, Q, QuerySet
from django.db.models.functions import TruncDate, TruncMonth, TruncYear

from .dtos import AggregationBucket
from .exceptions import InvalidGroupByError
from .models import OrderModel

GROUP_BY_CHOICES = ('day', 'month', 'year')

_TRUNCATORS = {
    'day': TruncDate,
    'month': TruncMonth,
    'year': TruncYear,
}

_KEY_FORMATS = {
    'day': '%Y-%m-%d',
    'month': '%Y-%m',
    'year': '%Y',
}

SEARCH_FIELDS = (
    'client_name',
    'client_surname',
    'email',
    'company_name',
    'number',
    'hash',
)


def glob_to_regex(query: str) -> str:
    """Translate a `*`/`?` glob into an unanchored regular expression."""
    parts = []
    for char in query:
        if char == '*':
            parts.append('.*')
        elif char == '?':
            parts.append('.')
        else:
            parts.append(re.escape(char))
    return ''.join(parts)


class OrderRepository:
    """Read/write access to OrderModel used by the services."""

    def base_queryset(self) -> QuerySet:
        return OrderModel.objects.prefetch_related('articles')

    def find_by_id(self, order_id: int) -> Optional[OrderModel]:
        try:
            return self.base_queryset().get(id=order_id)
        except OrderModel.DoesNotExist:
            return None

    def find_by_hash(self, order_hash: str) -> Optional[OrderModel]:
        try:
            return self.base_queryset().get(hash=order_hash)
        except OrderModel.DoesNotExist:
            return None

    def find_by_id_or_hash(self, identifier: Union[int, str]) -> Optional[OrderModel]:
        """Numeric identifiers are treated as ids, anything else as a hash."""
        if isinstance(identifier, int) or str(identifier).isdigit():
            return self.find_by_id(int(identifier))
        return self.find_by_hash(str(identifier))

    def find_by_uuid(self, uuid: str) -> Optional[OrderModel]:
        return self.base_queryset().filter(uuid=uuid).first()

    def find_by_number(self, number: str) -> Optional[OrderModel]:
        return self.base_queryset().filter(number=number).first()

    def iterate_all(self, chunk_size: int = 500):
        """Stream every order with its articles, oldest first."""
        queryset = OrderModel.objects.prefetch_related('articles').order_by('id')
        return queryset.iterator(chunk_size=chunk_size)

    def count(self) -> int:
        return OrderModel.objects.count()

    # ============================================================
    # Aggregation
    # ============================================================

    def _period_expression(self, group_by: str):
        if group_by not in _TRUNCATORS:
            raise InvalidGroupByError(group_by)
        return _TRUNCATORS[group_by]('created_at')

    def _filtered(
        self,
        status: Optional[int] = None,
        from_date: Optional[datetime] = None,
        to_date: Optional[datetime] = None,
        user_id: Optional[int] = None,
    ) -> QuerySet:
        queryset = OrderModel.objects.all()
        if status is not None:
            queryset = queryset.filter(status=status)
        if from_date is not None:
            queryset = queryset.filter(created_at__gte=from_date)
        if to_date is not None:
            queryset = queryset.filter(created_at__lte=to_date)
        if user_id is not None:
            queryset = queryset.filter(user_id=user_id)
        return queryset

    def _grouped(self, group_by: str, **filters) -> QuerySet:
        period = self._period_expression(group_by)
        return (
            self._filtered(**filters)
            .annotate(period=period)
            .values('period')
            .annotate(count=Count('id'))
        )

    def aggregate(
        self,
        group_by: str,
        page: int = 1,
        per_page: int = 20,
        status: Optional[int] = None,
        from_date: Optional[datetime] = None,
        to_date: Optional[datetime] = None,
        user_id: Optional[int] = None,
    ) -> List[AggregationBucket]:
        """
        Count orders per creation period, most recent period first.

        Pagination applies to the groups: the page holds at most per_page
        buckets starting at (page - 1) * per_page.

        Raises:
            InvalidGroupByError: group_by is not day, month or year.
        """
        grouped = self._grouped(
            group_by,
            status=status,
            from_date=from_date,
            to_date=to_date,
            user_id=user_id,
        )
        offset = (page - 1) * per_page
        rows = grouped.order_by('-period')[offset:offset + per_page]
        key_format = _KEY_FORMATS[group_by]
        return [
            AggregationBucket(group=row['period'].strftime(key_format), count=row['count'])
            for row in rows
        ]

    def total_buckets(
        self,
        group_by: str,
        status: Optional[int] = None,
        from_date: Optional[datetime] = None,
        to_date: Optional[datetime] = None,
        user_id: Optional[int] = None,
    ) -> int:
        """Number of distinct periods matching the filters, ignoring pagination."""
        grouped = self._grouped(
            group_by,
            status=status,
            from_date=from_date,
            to_date=to_date,
            user_id=user_id,
        )
        return grouped.order_by().count()

    # ============================================================
    # Substring search
    # ============================================================

    def _search_filter(self, query: str) -> Q:
        if '*' in query or '?' in query:
            lookup, value = 'iregex', glob_to_regex(query)
        else:
            lookup, value = 'icontains', query
        condition = Q()
        for field_name in SEARCH_FIELDS:
            condition |= Q(**{f"{field_name}__{lookup}": value})
        return condition

    def search_orders(self, query: str, page: int = 1, per_page: int = 20) -> List[OrderModel]:
        """Case-insensitive match over client, email, company, number and hash, newest first."""
        offset = (page - 1) * per_page
        queryset = (
            self.base_queryset()
            .filter(self._search_filter(query))
            .order_by('-created_at', '-id')
        )
        return list(queryset[offset:offset + per_page])

    def count_search(self, query: str) -> int:
        return OrderModel.objects.filter(self._search_filter(query)).count()
