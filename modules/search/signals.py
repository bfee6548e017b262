"""
Keep the search index in step with order writes.
"""
import logging

from django.conf import settings
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from modules.orders.models import OrderModel

from .tasks import index_order, remove_order

logger = logging.getLogger(__name__)


@receiver(post_save, sender=OrderModel, dispatch_uid='search_index_order')
def enqueue_index_order(sender, instance, **kwargs):
    if not settings.SEARCH_INDEX_ON_WRITE:
        return
    order_id = instance.pk
    # articles are written after the order row, so wait for the commit
    transaction.on_commit(lambda: index_order.delay(order_id))


@receiver(post_delete, sender=OrderModel, dispatch_uid='search_remove_order')
def enqueue_remove_order(sender, instance, **kwargs):
    if not settings.SEARCH_INDEX_ON_WRITE:
        return
    order_id = instance.pk
    transaction.on_commit(lambda: remove_order.delay(order_id))
