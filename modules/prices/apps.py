"""
Prices module configuration.
Scrapes supplier pages for current article prices.
"""
from django.apps import AppConfig


class PricesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'modules.prices'
    label = 'prices'
    verbose_name = 'Prices'
