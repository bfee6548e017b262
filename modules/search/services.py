"""
Order search service: full-text index first, database substring match as fallback.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

from modules.orders.dtos import OrderResponse
from modules.orders.exceptions import OrderNotFoundError
from modules.orders.models import OrderModel
from modules.orders.repositories import OrderRepository
from modules.orders.services import OrderService
from shared.interfaces.pagination import total_pages

from .exceptions import SearchBackendError
from .manticore import ManticoreClient, parse_count, parse_match_ids

logger = logging.getLogger(__name__)

SOURCE_INDEX = 'index'
SOURCE_DATABASE = 'database'


@dataclass(frozen=True)
class SearchResult:
    """One page of search hits."""
    query: str
    orders: Tuple[OrderResponse, ...]
    total: int
    page: int
    per_page: int
    source: str = SOURCE_INDEX

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.per_page)

    def to_dict(self) -> dict:
        return {
            'meta': {
                'query': self.query,
                'page': self.page,
                'per_page': self.per_page,
                'total': self.total,
                'total_pages': self.total_pages,
            },
            'data': [order.to_dict() for order in self.orders],
        }


def build_document(order: OrderModel) -> dict:
    """Index document for an order."""
    return {
        'id': order.id,
        'client_name': order.client_name or '',
        'client_surname': order.client_surname or '',
        'email': order.email or '',
        'company_name': order.company_name or '',
        'number': order.number or '',
        'articles': ' '.join(
            article.article_name for article in order.articles.all() if article.article_name
        ),
        'created_at': int(order.created_at.timestamp()) if order.created_at else 0,
        'status': order.status,
        'currency': order.currency or '',
        'hash': order.hash,
    }


class OrderSearchService:
    """
    Search orders through the Manticore index, degrading to the database.

    Index maintenance (index_order, remove_order, rebuild_index) is best
    effort: failures are logged and reported as False.
    """

    def __init__(
        self,
        client: ManticoreClient = None,
        order_service: OrderService = None,
        repository: OrderRepository = None,
    ):
        self.client = client or ManticoreClient()
        self.order_service = order_service or OrderService()
        self.repository = repository or OrderRepository()

    def search(self, query: str, page: int = 1, per_page: int = 20) -> SearchResult:
        try:
            return self.search_index(query, page, per_page)
        except Exception as e:
            logger.warning(
                f"Index search failed for query='{query}' page={page} per_page={per_page}, "
                f"falling back to database: {e}"
            )
            return self.search_database(query, page, per_page)

    def search_index(self, query: str, page: int, per_page: int) -> SearchResult:
        """
        Search via the daemon only.

        Raises:
            SearchBackendError: If the daemon is unreachable or errors.
        """
        offset = (page - 1) * per_page
        ids = parse_match_ids(self.client.execute(self.client.match_sql(query, offset, per_page)))
        total = parse_count(self.client.execute(self.client.count_sql(query)))
        orders = self._hydrate(ids)
        logger.info(f"Index search query='{query}': {len(orders)} hits on page {page}, total={total}")
        return SearchResult(
            query=query,
            orders=tuple(orders),
            total=total,
            page=page,
            per_page=per_page,
            source=SOURCE_INDEX,
        )

    def search_database(self, query: str, page: int, per_page: int) -> SearchResult:
        """Case-insensitive substring search over client, contact and order identifiers."""
        term = (query or '').strip()
        orders = self.repository.search_orders(term, page=page, per_page=per_page)
        total = self.repository.count_search(term)
        return SearchResult(
            query=query,
            orders=tuple(self.order_service.to_response(order) for order in orders),
            total=total,
            page=page,
            per_page=per_page,
            source=SOURCE_DATABASE,
        )

    def _hydrate(self, ids: List[int]) -> List[OrderResponse]:
        orders = []
        for order_id in ids:
            try:
                order = self.order_service.get_order(order_id)
            except OrderNotFoundError:
                logger.warning(f"Indexed order {order_id} not found in database, skipping")
                continue
            orders.append(self.order_service.to_response(order))
        return orders

    # ============================================================
    # Index maintenance
    # ============================================================

    def index_order(self, order: OrderModel) -> bool:
        """Insert or replace the order document in the index."""
        try:
            response = self.client.execute(self.client.insert_sql(build_document(order)))
        except SearchBackendError as e:
            logger.error(f"Failed to index order {order.id}: {e}")
            return False
        if 'Query OK' not in response:
            logger.error(f"Failed to index order {order.id}: {response.strip()}")
            return False
        logger.info(f"Order {order.id} indexed")
        return True

    def remove_order(self, order_id: int) -> bool:
        try:
            response = self.client.execute(self.client.delete_sql(order_id))
        except SearchBackendError as e:
            logger.error(f"Failed to remove order {order_id} from index: {e}")
            return False
        return 'Query OK' in response

    def rebuild_index(self) -> dict:
        """Index every stored order. Returns indexed/failed counts."""
        indexed = 0
        failed = 0
        for order in self.repository.iterate_all():
            if self.index_order(order):
                indexed += 1
            else:
                failed += 1
        logger.info(f"Search index rebuilt: indexed={indexed}, failed={failed}")
        return {'indexed': indexed, 'failed': failed}
