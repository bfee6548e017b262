"""
SOAP request DTOs.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from modules.orders.dtos import OrderArticleData, OrderData

NAME_PREFIX = 'SOAP Order for '
NAME_MAX_LENGTH = 200


@dataclass
class SoapOrderItem:
    """One item of a SOAP createOrder request."""
    article_id: Optional[int] = None
    article_code: Optional[str] = None
    article_name: Optional[str] = None
    amount: Optional[Decimal] = None
    price: Optional[Decimal] = None
    currency: str = 'EUR'
    measure: str = 'm'

    def to_article_data(self) -> OrderArticleData:
        return OrderArticleData(
            article_id=self.article_id,
            article_code=self.article_code,
            article_name=self.article_name,
            amount=self.amount,
            price=self.price,
            currency=self.currency,
            measure=self.measure,
        )

    def validate(self) -> List[str]:
        return self.to_article_data().validate()


@dataclass
class SoapCreateOrderRequest:
    """Parsed body of a SOAP createOrder call."""
    client_name: Optional[str] = None
    client_surname: Optional[str] = None
    email: Optional[str] = None
    company_name: Optional[str] = None
    description: Optional[str] = None
    items: List[SoapOrderItem] = field(default_factory=list)

    @property
    def full_client_name(self) -> str:
        return f"{self.client_name or ''} {self.client_surname or ''}".strip()

    def to_order_data(self) -> OrderData:
        name = f"{NAME_PREFIX}{self.full_client_name}"[:NAME_MAX_LENGTH]
        return OrderData(
            name=name,
            client_name=self.client_name,
            client_surname=self.client_surname,
            email=self.email,
            company_name=self.company_name,
            description=self.description,
            articles=[item.to_article_data() for item in self.items],
        )
