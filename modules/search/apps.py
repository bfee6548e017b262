"""
Search module configuration.
Full-text order search backed by Manticore with a database fallback.
"""
from django.apps import AppConfig


class SearchConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'modules.search'
    label = 'search'
    verbose_name = 'Search'

    def ready(self):
        from . import signals  # noqa: F401
