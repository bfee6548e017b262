# Shared domain module
from .base_value_object import ValueObject
from .exceptions import (
    BusinessRuleViolationError,
    DomainException,
    EntityNotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)

__all__ = [
    'ValueObject',
    'DomainException',
    'EntityNotFoundError',
    'ValidationError',
    'BusinessRuleViolationError',
    'UpstreamUnavailableError',
]
