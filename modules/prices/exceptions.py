"""
Price domain exceptions.
"""
from shared.domain.exceptions import EntityNotFoundError, UpstreamUnavailableError


class PriceNotFoundError(EntityNotFoundError):
    """Raised when a page was fetched but holds no usable price."""

    def __init__(self, message: str = 'Price not found'):
        super().__init__(entity_name='Price', entity_id='', message=message)
        self.code = "PRICE_NOT_FOUND"


class PriceFetcherError(UpstreamUnavailableError):
    """Raised when no price source could be reached."""

    def __init__(self, message: str, source: str = None):
        super().__init__(message=message, service=source)
        self.code = "PRICE_SOURCE_UNAVAILABLE"
