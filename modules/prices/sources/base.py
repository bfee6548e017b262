"""
Price source interface.
"""
from abc import ABC, abstractmethod

from ..dtos import PriceQuote


class PriceSource(ABC):
    """A site that can quote article prices."""

    name: str = ''

    def supports(self, source: str) -> bool:
        return source == self.name

    @abstractmethod
    def fetch(self, factory: str, collection: str, article: str) -> PriceQuote:
        """
        Fetch the current price of an article.

        Raises:
            PriceNotFoundError: If the page holds no usable price
            PriceFetcherError: If the source cannot be reached
        """
