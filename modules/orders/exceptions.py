"""
Order domain exceptions.
"""
from shared.domain.exceptions import DomainException, EntityNotFoundError, ValidationError


class OrderNotFoundError(EntityNotFoundError):
    """Raised when an order is not found by id or hash."""

    def __init__(self, identifier):
        super().__init__(
            entity_name='Order',
            entity_id=str(identifier),
            message='Order not found',
        )
        self.code = "ORDER_NOT_FOUND"
        self.identifier = identifier


class OrderValidationError(ValidationError):
    """Raised when order input is invalid."""


class InvalidGroupByError(OrderValidationError):
    """Raised when an aggregation period is not day, month or year."""

    def __init__(self, group_by):
        super().__init__(
            message="group_by must be one of: day, month, year",
            field='group_by',
        )
        self.group_by = group_by


class OrderCreationError(DomainException):
    """Raised when an order cannot be persisted."""

    def __init__(self, message: str):
        super().__init__(message=message, code="ORDER_CREATION_FAILED")
