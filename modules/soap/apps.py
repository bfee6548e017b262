"""
SOAP module configuration.
XML intake for orders from legacy clients.
"""
from django.apps import AppConfig


class SoapConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'modules.soap'
    label = 'soap'
    verbose_name = 'SOAP'
