"""
Price DTOs.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from dateutil import parser as date_parser


@dataclass(frozen=True)
class PriceQuote:
    """Price of one article as scraped from a source page."""
    price: Decimal
    currency: str
    factory: str
    collection: str
    article: str
    fetched_at: datetime
    source_url: str

    def to_dict(self) -> dict:
        return {
            'price': float(self.price),
            'currency': self.currency,
            'factory': self.factory,
            'collection': self.collection,
            'article': self.article,
            'fetched_at': self.fetched_at.isoformat(),
            'source_url': self.source_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PriceQuote':
        return cls(
            price=Decimal(str(data['price'])),
            currency=data['currency'],
            factory=data['factory'],
            collection=data['collection'],
            article=data['article'],
            fetched_at=date_parser.isoparse(data['fetched_at']),
            source_url=data['source_url'],
        )
