"""
Search module exceptions.
"""
from shared.domain.exceptions import UpstreamUnavailableError


class SearchBackendError(UpstreamUnavailableError):
    """Raised when the search daemon cannot be reached or answers garbage."""

    def __init__(self, message: str):
        super().__init__(message=message, service='manticore')
