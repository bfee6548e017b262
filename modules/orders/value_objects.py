"""
Order value objects.
"""
import re
from dataclasses import dataclass

from shared.domain import ValueObject

from .exceptions import OrderValidationError

ORDER_NUMBER_PATTERN = re.compile(r'^ORD-(\d{4})-(\d{3,})$')


@dataclass(frozen=True)
class OrderNumber(ValueObject):
    """Human-facing order number: ORD-<year>-<sequence padded to 3 digits>."""
    year: int
    sequence: int

    def validate(self) -> None:
        if not 1000 <= self.year <= 9999:
            raise OrderValidationError(f"Invalid order number year: {self.year}", field='number')
        if self.sequence < 1:
            raise OrderValidationError(f"Invalid order number sequence: {self.sequence}", field='number')

    @classmethod
    def parse(cls, value: str) -> 'OrderNumber':
        match = ORDER_NUMBER_PATTERN.match(value or '')
        if not match:
            raise OrderValidationError(f"Invalid order number: {value}", field='number')
        return cls(year=int(match.group(1)), sequence=int(match.group(2)))

    def __str__(self) -> str:
        return f"ORD-{self.year}-{self.sequence:03d}"
