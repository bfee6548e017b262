"""
Orders module URLs.
"""
from django.urls import path

from .views import (
    OrderAggregateView,
    OrderByHashView,
    OrderCreateView,
    OrderDetailView,
    OrderStatusView,
)

urlpatterns = [
    path('orders', OrderCreateView.as_view(), name='order-create'),
    path('orders/aggregate', OrderAggregateView.as_view(), name='order-aggregate'),
    path('orders/<int:order_id>/status', OrderStatusView.as_view(), name='order-status'),
    path('orders/<int:order_id>', OrderDetailView.as_view(), name='order-detail'),
    path('orders/<str:order_hash>', OrderByHashView.as_view(), name='order-by-hash'),
]
