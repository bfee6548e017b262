# Shared interfaces module
from .exception_handlers import custom_exception_handler
from .pagination import PageRequest, total_pages

__all__ = ['custom_exception_handler', 'PageRequest', 'total_pages']
