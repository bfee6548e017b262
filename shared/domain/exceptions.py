"""
Domain exceptions.
"""


class DomainException(Exception):
    """Base exception for domain layer."""

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_name: str, entity_id: str, message: str = None):
        super().__init__(
            message=message or f"{entity_name} '{entity_id}' not found",
            code="ENTITY_NOT_FOUND"
        )
        self.entity_name = entity_name
        self.entity_id = entity_id


class ValidationError(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: str = None, details: list = None):
        super().__init__(message=message, code="VALIDATION_ERROR")
        self.field = field
        self.details = details or []


class BusinessRuleViolationError(DomainException):
    """Raised when a business rule is violated."""

    def __init__(self, message: str, rule: str = None):
        super().__init__(message=message, code="BUSINESS_RULE_VIOLATION")
        self.rule = rule


class UpstreamUnavailableError(DomainException):
    """Raised when an external collaborator cannot be reached."""

    def __init__(self, message: str, service: str = None):
        super().__init__(message=message, code="UPSTREAM_UNAVAILABLE")
        self.service = service
