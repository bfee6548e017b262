"""
Prices module service layer.
"""
import logging
from typing import List, Optional, Sequence

from django.conf import settings

from .dtos import PriceQuote
from .exceptions import PriceFetcherError, PriceNotFoundError
from .sources import SOURCE_CLASSES, PriceSource

logger = logging.getLogger(__name__)


def build_sources(names: Sequence[str] = None) -> List[PriceSource]:
    """Instantiate the configured price sources, in order."""
    names = names if names is not None else settings.PRICE_SOURCES
    sources = []
    for name in names:
        source_class = SOURCE_CLASSES.get(name)
        if source_class is None:
            logger.warning(f"Unknown price source in PRICE_SOURCES: {name}")
            continue
        sources.append(source_class())
    return sources


class PriceFetcherService:
    """
    Dispatches price lookups to the first source that can answer.

    Sources are tried in order; a failing source hands over to the next
    one and the last error is reported if none succeeds.
    """

    def __init__(self, sources: Sequence[PriceSource] = None, default_source: str = None):
        self.sources = list(sources) if sources is not None else build_sources()
        self.default_source = default_source or settings.PRICE_DEFAULT_SOURCE

    def supported_sources(self) -> List[str]:
        return [source.name for source in self.sources]

    def fetch_price(
        self,
        factory: str,
        collection: str,
        article: str,
        source: Optional[str] = None,
    ) -> PriceQuote:
        source = source or self.default_source
        last_error: Optional[Exception] = None

        for price_source in self.sources:
            if not price_source.supports(source):
                continue
            try:
                return price_source.fetch(factory, collection, article)
            except (PriceNotFoundError, PriceFetcherError) as e:
                logger.warning(f"Price source {price_source.name} failed for {factory}/{collection}/{article}: {e}")
                last_error = e

        if isinstance(last_error, PriceNotFoundError):
            raise last_error
        if last_error is not None:
            raise PriceFetcherError(f"All price sources failed: {last_error}", source=source) from last_error
        raise PriceFetcherError(f"No price fetcher available for source: {source}", source=source)
