"""
SOAP response envelopes.
"""
from lxml import etree

SOAP_ENV_NS = 'http://schemas.xmlsoap.org/soap/envelope/'
ORDERS_NS = 'http://orders.example.com/soap'

FAULT_VALIDATION = 'Validation error'
FAULT_CREATION = 'Order creation error'
FAULT_INTERNAL = 'Internal server error'
FAULT_CONTENT_TYPE = 'Invalid content type'
FAULT_EMPTY_BODY = 'Empty request body'


def _envelope():
    envelope = etree.Element(f"{{{SOAP_ENV_NS}}}Envelope", nsmap={'soap': SOAP_ENV_NS})
    body = etree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    return envelope, body


def _serialize(envelope) -> bytes:
    return etree.tostring(envelope, xml_declaration=True, encoding='UTF-8')


def success_envelope(order_id, order_hash: str, message: str = 'Order created successfully') -> bytes:
    envelope, body = _envelope()
    response = etree.SubElement(body, f"{{{ORDERS_NS}}}createOrderResponse", nsmap={None: ORDERS_NS})
    for tag, value in (
        ('result', 'success'),
        ('orderId', str(order_id)),
        ('orderHash', order_hash),
        ('message', message),
    ):
        etree.SubElement(response, f"{{{ORDERS_NS}}}{tag}").text = value
    return _serialize(envelope)


def fault_envelope(fault_string: str, error_message: str) -> bytes:
    envelope, body = _envelope()
    fault = etree.SubElement(body, f"{{{SOAP_ENV_NS}}}Fault")
    etree.SubElement(fault, 'faultcode').text = 'soap:Server'
    etree.SubElement(fault, 'faultstring').text = fault_string
    detail = etree.SubElement(fault, 'detail')
    etree.SubElement(detail, 'errorMessage').text = error_message
    return _serialize(envelope)
