"""
SOAP order intake view.

Plain Django view: the request and response bodies are XML, so DRF parsing
and content negotiation are bypassed.
"""
import logging

from django.http import HttpResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from modules.orders.exceptions import OrderCreationError, OrderValidationError
from modules.orders.services import OrderService

from . import envelopes
from .parser import SoapParserService

logger = logging.getLogger(__name__)

XML_CONTENT_TYPES = ('text/xml', 'application/xml')
RESPONSE_CONTENT_TYPE = 'text/xml; charset=utf-8'

order_service = OrderService()
soap_parser = SoapParserService()


def soap_response(content: bytes, status_code: int) -> HttpResponse:
    return HttpResponse(content, status=status_code, content_type=RESPONSE_CONTENT_TYPE)


def soap_fault(fault_string: str, error_message: str) -> HttpResponse:
    return soap_response(envelopes.fault_envelope(fault_string, error_message), 500)


@method_decorator(csrf_exempt, name='dispatch')
class SoapCreateOrderView(View):
    """Create an order from a SOAP createOrder envelope."""
    http_method_names = ['post']

    def post(self, request):
        content_type = request.META.get('CONTENT_TYPE', '')
        if not any(allowed in content_type for allowed in XML_CONTENT_TYPES):
            return soap_fault(envelopes.FAULT_CONTENT_TYPE, 'Content-Type must be text/xml or application/xml')

        content = request.body
        if not content or not content.strip():
            return soap_fault(envelopes.FAULT_EMPTY_BODY, 'Request body cannot be empty')

        logger.info(f"SOAP create order request received: {len(content)} bytes, content_type={content_type}")

        try:
            soap_request = soap_parser.parse_create_order(content)
            order = order_service.create_order(soap_request.to_order_data())
        except OrderValidationError as e:
            logger.warning(f"SOAP order validation failed: {e.message}")
            return soap_fault(envelopes.FAULT_VALIDATION, e.message)
        except OrderCreationError as e:
            logger.error(f"SOAP order creation failed: {e.message}")
            return soap_fault(envelopes.FAULT_CREATION, e.message)
        except Exception as e:
            logger.error(f"Unexpected error in SOAP order creation: {e}", exc_info=True)
            return soap_fault(envelopes.FAULT_INTERNAL, 'An unexpected error occurred while creating the order')

        logger.info(
            f"SOAP order created: id={order.id}, hash={order.hash}, "
            f"client='{soap_request.full_client_name}', items={len(soap_request.items)}"
        )
        return soap_response(envelopes.success_envelope(order.id, order.hash), 200)
