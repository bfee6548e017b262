"""
Page/per_page handling for list endpoints that paginate in SQL.
"""
import math
from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
# keeps (page - 1) * per_page well inside a signed 64-bit SQL offset
MAX_PAGE = 1_000_000


def _to_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class PageRequest:
    """Normalized page window: page in [1, MAX_PAGE], per_page in [1, MAX_PAGE_SIZE]."""
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_query(cls, query_params) -> 'PageRequest':
        """
        Build a page window from request query params.

        Missing, malformed or non-positive values fall back to the defaults;
        page and per_page above their maximums are capped.
        """
        page = _to_int(query_params.get('page'), 1)
        per_page = _to_int(query_params.get('per_page'), DEFAULT_PAGE_SIZE)
        if page < 1:
            page = 1
        if per_page < 1:
            per_page = DEFAULT_PAGE_SIZE
        return cls(page=min(page, MAX_PAGE), per_page=min(per_page, MAX_PAGE_SIZE))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


def total_pages(total_items: int, per_page: int) -> int:
    """Number of pages needed for total_items."""
    if per_page <= 0:
        return 0
    return math.ceil(total_items / per_page)
