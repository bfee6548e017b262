"""
Order DTOs.
"""
import re
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

ALLOWED_CURRENCIES = ('EUR', 'USD', 'GBP')
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def decimal_str(value, places: int) -> Optional[str]:
    """Render a decimal as a fixed-point string with the column's scale."""
    if value is None:
        return None
    return format(Decimal(value).quantize(Decimal(1).scaleb(-places)), 'f')


def iso_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def iso_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


# ============================================================
# Input
# ============================================================

@dataclass
class OrderArticleData:
    """Line item submitted with a new order."""
    article_id: Optional[int] = None
    amount: Optional[Decimal] = None
    price: Optional[Decimal] = None
    article_code: Optional[str] = None
    article_name: Optional[str] = None
    price_eur: Optional[Decimal] = None
    currency: Optional[str] = None
    measure: Optional[str] = None
    delivery_time_min: Optional[date] = None
    delivery_time_max: Optional[date] = None
    weight: Optional[Decimal] = None
    packaging_count: Optional[Decimal] = None
    pallet: Optional[Decimal] = None
    packaging: Optional[Decimal] = None
    swimming_pool: bool = False

    @property
    def total_price(self) -> Decimal:
        return Decimal(self.price or 0) * Decimal(self.amount or 0)

    def validate(self, prefix: str = '') -> List[str]:
        errors = []
        if self.article_id is None or self.article_id <= 0:
            errors.append(f"{prefix}article_id: must be a positive integer")
        if self.amount is None or Decimal(self.amount) <= 0:
            errors.append(f"{prefix}amount: must be positive")
        if self.price is None or Decimal(self.price) < 0:
            errors.append(f"{prefix}price: must be zero or positive")
        if self.price_eur is not None and Decimal(self.price_eur) < 0:
            errors.append(f"{prefix}price_eur: must be zero or positive")
        if self.currency is not None and len(self.currency) != 3:
            errors.append(f"{prefix}currency: must be exactly 3 characters")
        if self.measure is not None and len(self.measure) > 5:
            errors.append(f"{prefix}measure: must be at most 5 characters")
        if self.article_code is not None and len(self.article_code) > 100:
            errors.append(f"{prefix}article_code: must be at most 100 characters")
        if self.article_name is not None and len(self.article_name) > 255:
            errors.append(f"{prefix}article_name: must be at most 255 characters")
        for name in ('weight', 'packaging_count', 'pallet', 'packaging'):
            value = getattr(self, name)
            if value is not None and Decimal(value) < 0:
                errors.append(f"{prefix}{name}: must be zero or positive")
        return errors


@dataclass
class OrderData:
    """New order as accepted from the REST or SOAP intake."""
    name: Optional[str] = None
    client_name: Optional[str] = None
    client_surname: Optional[str] = None
    email: Optional[str] = None
    company_name: Optional[str] = None
    description: Optional[str] = None
    user_id: Optional[int] = None
    currency: str = 'EUR'
    discount: Optional[int] = None
    delivery_price: Optional[Decimal] = None
    delivery_type: int = 0
    delivery_index: Optional[str] = None
    delivery_country: Optional[int] = None
    delivery_region: Optional[str] = None
    delivery_city: Optional[str] = None
    delivery_address: Optional[str] = None
    delivery_phone: Optional[str] = None
    pay_type: int = 0
    locale: str = 'en'
    measure: str = 'm'
    articles: List[OrderArticleData] = field(default_factory=list)

    @property
    def full_client_name(self) -> str:
        return f"{self.client_name or ''} {self.client_surname or ''}".strip()

    @property
    def total_amount(self) -> Decimal:
        return sum((article.total_price for article in self.articles), Decimal('0'))

    def validate(self) -> List[str]:
        """Return a list of 'field: problem' messages; empty when valid."""
        errors = []
        for name, max_length in (('client_name', 150), ('client_surname', 150), ('name', 200)):
            value = getattr(self, name)
            if not value or not value.strip():
                errors.append(f"{name}: must not be blank")
            elif len(value) > max_length:
                errors.append(f"{name}: must be at most {max_length} characters")
        if self.email:
            if len(self.email) > 150 or not EMAIL_PATTERN.match(self.email):
                errors.append("email: must be a valid email address")
        if self.company_name and len(self.company_name) > 255:
            errors.append("company_name: must be at most 255 characters")
        if self.description and len(self.description) > 1000:
            errors.append("description: must be at most 1000 characters")
        if self.currency not in ALLOWED_CURRENCIES:
            errors.append(f"currency: must be one of {', '.join(ALLOWED_CURRENCIES)}")
        if self.discount is not None and not 0 <= self.discount <= 100:
            errors.append("discount: must be between 0 and 100")
        if self.delivery_price is not None and Decimal(self.delivery_price) < 0:
            errors.append("delivery_price: must be zero or positive")
        if self.delivery_type not in (0, 1, 2):
            errors.append("delivery_type: must be one of 0, 1, 2")
        if self.pay_type not in (0, 1, 2, 3):
            errors.append("pay_type: must be one of 0, 1, 2, 3")
        if len(self.locale or '') > 10:
            errors.append("locale: must be at most 10 characters")
        if len(self.measure or '') > 5:
            errors.append("measure: must be at most 5 characters")
        if not self.articles:
            errors.append("articles: at least one article is required")
        for index, article in enumerate(self.articles):
            errors.extend(article.validate(prefix=f"articles[{index}]."))
        return errors


# ============================================================
# Output
# ============================================================

@dataclass(frozen=True)
class OrderArticleResponse:
    """Read-only projection of an order article."""
    id: int
    article_id: int
    article_code: Optional[str]
    article_name: Optional[str]
    amount: str
    price: str
    price_eur: Optional[str]
    currency: Optional[str]
    measure: Optional[str]
    delivery_time_min: Optional[str]
    delivery_time_max: Optional[str]
    weight: Optional[str]
    packaging_count: Optional[str]
    pallet: Optional[str]
    packaging: Optional[str]
    swimming_pool: bool
    total_price: str
    total_weight: Optional[str]
    delivery_days: Optional[int]
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_model(cls, article) -> 'OrderArticleResponse':
        amount = Decimal(decimal_str(article.amount, 4))
        price = Decimal(decimal_str(article.price, 2))
        weight = decimal_str(article.weight, 3)
        return cls(
            id=article.id,
            article_id=article.article_id,
            article_code=article.article_code,
            article_name=article.article_name,
            amount=format(amount, 'f'),
            price=format(price, 'f'),
            price_eur=decimal_str(article.price_eur, 2),
            currency=article.currency,
            measure=article.measure,
            delivery_time_min=iso_date(article.delivery_time_min),
            delivery_time_max=iso_date(article.delivery_time_max),
            weight=weight,
            packaging_count=decimal_str(article.packaging_count, 4),
            pallet=decimal_str(article.pallet, 4),
            packaging=decimal_str(article.packaging, 4),
            swimming_pool=article.swimming_pool,
            total_price=format(price * amount, 'f'),
            total_weight=format(Decimal(weight) * amount, 'f') if weight is not None else None,
            delivery_days=article.delivery_days,
            created_at=iso_datetime(article.created_at),
            updated_at=iso_datetime(article.updated_at),
        )


@dataclass(frozen=True)
class OrderResponse:
    """Read-only projection of an order with its articles."""
    id: int
    uuid: str
    hash: str
    user_id: Optional[int]
    token: str
    number: Optional[str]
    status: int
    email: Optional[str]
    vat_type: int
    vat_number: Optional[str]
    discount: Optional[int]
    delivery_price: Optional[str]
    delivery_type: int
    delivery_index: Optional[str]
    delivery_country: Optional[int]
    delivery_region: Optional[str]
    delivery_city: Optional[str]
    delivery_address: Optional[str]
    delivery_phone: Optional[str]
    delivery_apartment_office: Optional[str]
    client_name: Optional[str]
    client_surname: Optional[str]
    company_name: Optional[str]
    pay_type: int
    pay_date_execution: Optional[str]
    proposed_date: Optional[str]
    ship_date: Optional[str]
    tracking_number: Optional[str]
    manager_name: Optional[str]
    manager_email: Optional[str]
    locale: str
    cur_rate: str
    currency: str
    measure: str
    name: str
    description: Optional[str]
    created_at: str
    updated_at: str
    warehouse_data: Optional[dict]
    address_equal: bool
    accept_pay: bool
    weight_gross: Optional[str]
    payment_euro: bool
    spec_price: bool
    articles: Tuple[OrderArticleResponse, ...] = ()

    @classmethod
    def from_model(cls, order) -> 'OrderResponse':
        return cls(
            id=order.id,
            uuid=order.uuid,
            hash=order.hash,
            user_id=order.user_id,
            token=order.token,
            number=order.number,
            status=order.status,
            email=order.email,
            vat_type=order.vat_type,
            vat_number=order.vat_number,
            discount=order.discount,
            delivery_price=decimal_str(order.delivery_price, 2),
            delivery_type=order.delivery_type,
            delivery_index=order.delivery_index,
            delivery_country=order.delivery_country,
            delivery_region=order.delivery_region,
            delivery_city=order.delivery_city,
            delivery_address=order.delivery_address,
            delivery_phone=order.delivery_phone,
            delivery_apartment_office=order.delivery_apartment_office,
            client_name=order.client_name,
            client_surname=order.client_surname,
            company_name=order.company_name,
            pay_type=order.pay_type,
            pay_date_execution=iso_datetime(order.pay_date_execution),
            proposed_date=iso_datetime(order.proposed_date),
            ship_date=iso_datetime(order.ship_date),
            tracking_number=order.tracking_number,
            manager_name=order.manager_name,
            manager_email=order.manager_email,
            locale=order.locale,
            cur_rate=decimal_str(order.cur_rate, 6),
            currency=order.currency,
            measure=order.measure,
            name=order.name,
            description=order.description,
            created_at=iso_datetime(order.created_at),
            updated_at=iso_datetime(order.updated_at),
            warehouse_data=order.warehouse_data,
            address_equal=order.address_equal,
            accept_pay=order.accept_pay,
            weight_gross=decimal_str(order.weight_gross, 3),
            payment_euro=order.payment_euro,
            spec_price=order.spec_price,
            articles=tuple(OrderArticleResponse.from_model(article) for article in order.articles.all()),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data['articles'] = list(data['articles'])
        return data


@dataclass(frozen=True)
class AggregationBucket:
    """One aggregation group: truncated creation period and its order count."""
    group: str
    count: int


@dataclass(frozen=True)
class AggregationPage:
    """A page of aggregation buckets with pagination metadata."""
    buckets: Tuple[AggregationBucket, ...]
    page: int
    per_page: int
    total_items: int
    total_pages: int

    def to_dict(self) -> dict:
        return {
            'meta': {
                'page': self.page,
                'per_page': self.per_page,
                'total_pages': self.total_pages,
                'total_items': self.total_items,
            },
            'data': [asdict(bucket) for bucket in self.buckets],
        }
