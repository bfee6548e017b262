"""
Search module Celery tasks.
Mirrors order writes into the full-text index.
"""
import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name='search.index_order')
def index_order(order_id: int) -> bool:
    """
    Index a single order.

    Args:
        order_id: Order ID

    Returns:
        True if the daemon acknowledged the write
    """
    from modules.orders.exceptions import OrderNotFoundError
    from .services import OrderSearchService

    service = OrderSearchService()
    try:
        order = service.order_service.get_order(order_id)
    except OrderNotFoundError:
        logger.warning(f"Order {order_id} vanished before indexing")
        return False
    return service.index_order(order)


@shared_task(name='search.remove_order')
def remove_order(order_id: int) -> bool:
    from .services import OrderSearchService

    return OrderSearchService().remove_order(order_id)


@shared_task(name='search.rebuild_index')
def rebuild_index() -> dict:
    """Re-index every order."""
    from .services import OrderSearchService

    return OrderSearchService().rebuild_index()
