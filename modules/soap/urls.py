"""
SOAP module URLs.
"""
from django.urls import path

from .views import SoapCreateOrderView

urlpatterns = [
    path('orders', SoapCreateOrderView.as_view(), name='soap-create-order'),
]
