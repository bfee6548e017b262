"""
Custom exception handlers for DRF.
"""
import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from shared.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
    BusinessRuleViolationError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """Map domain exceptions to HTTP responses; hide unexpected errors behind a 500."""
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, exceptions.ValidationError):
            response.data = {
                'error': 'Invalid parameters',
                'details': response.data,
            }
        return response

    if isinstance(exc, EntityNotFoundError):
        return Response(
            {
                'error': f"{exc.entity_name} not found",
                'message': exc.message,
                'code': exc.code,
            },
            status=status.HTTP_404_NOT_FOUND,
        )

    if isinstance(exc, ValidationError):
        body = {
            'error': 'Invalid parameters',
            'message': exc.message,
            'code': exc.code,
        }
        if exc.field:
            body['field'] = exc.field
        if exc.details:
            body['details'] = exc.details
        return Response(body, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, BusinessRuleViolationError):
        return Response(
            {
                'error': exc.message,
                'code': exc.code,
                'rule': exc.rule,
            },
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    if isinstance(exc, UpstreamUnavailableError):
        logger.error(f"Upstream unavailable ({exc.service}): {exc.message}")
        return Response(
            {
                'error': 'Service unavailable',
                'message': exc.message,
                'code': exc.code,
            },
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, DomainException):
        return Response(
            {
                'error': exc.message,
                'code': exc.code,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    view = context.get('view')
    request = context.get('request')
    logger.error(
        f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
        extra={'query_params': dict(request.query_params) if request is not None else {}},
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return Response(
        {
            'error': 'Internal server error',
            'message': 'An unexpected error occurred',
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
