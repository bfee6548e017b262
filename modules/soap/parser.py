"""
SOAP createOrder request parser.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from lxml import etree

from modules.orders.exceptions import OrderValidationError

from .dtos import SoapCreateOrderRequest, SoapOrderItem

logger = logging.getLogger(__name__)

# first path that yields elements wins
ITEM_PATHS = (
    ('items', 'item'),
    ('item',),
    ('orderItems', 'item'),
    ('products', 'product'),
)


def _local(name: str) -> str:
    return f"*[local-name()='{name}']"


class SoapParserService:
    """Turns a SOAP envelope into a SoapCreateOrderRequest."""

    def __init__(self):
        self.xml_parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            huge_tree=False,
        )

    def parse_create_order(self, content: bytes) -> SoapCreateOrderRequest:
        """
        Parse and validate a createOrder request.

        Raises:
            OrderValidationError: If the XML is malformed, has no createOrder
                element, carries no valid item or fails field validation.
        """
        try:
            root = etree.fromstring(content, parser=self.xml_parser)
        except etree.XMLSyntaxError as e:
            logger.error(f"Malformed SOAP request ({len(content)} bytes): {e}")
            raise OrderValidationError(f"Failed to parse SOAP request: {e}")

        matches = root.xpath(f"//{_local('createOrder')}")
        if not matches:
            raise OrderValidationError('createOrder element not found')
        element = matches[0]

        request = SoapCreateOrderRequest(
            client_name=self._text(element, 'client_name'),
            client_surname=self._text(element, 'client_surname'),
            email=self._text(element, 'email'),
            company_name=self._text(element, 'company_name'),
            description=self._text(element, 'description'),
            items=self._parse_items(element),
        )
        if not request.items:
            raise OrderValidationError('No items found in order')

        errors = request.to_order_data().validate()
        if errors:
            raise OrderValidationError(f"Validation failed: {', '.join(errors)}", details=errors)

        logger.info(
            f"SOAP request parsed: client='{request.full_client_name}', "
            f"email={request.email}, items={len(request.items)}"
        )
        return request

    def _parse_items(self, element) -> List[SoapOrderItem]:
        for path in ITEM_PATHS:
            item_elements = element.xpath('/'.join(_local(name) for name in path))
            if item_elements:
                items = [self._parse_item(item) for item in item_elements]
                return [item for item in items if item is not None]
        return []

    def _parse_item(self, element) -> Optional[SoapOrderItem]:
        try:
            item = SoapOrderItem(
                article_id=self._int(element, 'article_id', 'articleId'),
                article_code=self._text(element, 'article_code', 'articleCode'),
                article_name=self._text(element, 'article_name', 'articleName'),
                amount=self._decimal(element, 'amount', 'quantity'),
                price=self._decimal(element, 'price', 'cost'),
                currency=self._text(element, 'currency') or 'EUR',
                measure=self._text(element, 'measure') or 'm',
            )
        except (ValueError, InvalidOperation) as e:
            logger.warning(f"Skipping unparsable SOAP item: {e}")
            return None

        errors = item.validate()
        if errors:
            logger.warning(f"Skipping invalid SOAP item: {', '.join(errors)}")
            return None
        return item

    # Field readers, each tries the given tag names in order

    def _text(self, element, *names: str) -> Optional[str]:
        for name in names:
            children = element.xpath(_local(name))
            if children:
                value = ''.join(children[0].itertext()).strip()
                if value:
                    return value
        return None

    def _int(self, element, *names: str) -> Optional[int]:
        value = self._text(element, *names)
        return int(value) if value is not None else None

    def _decimal(self, element, *names: str) -> Optional[Decimal]:
        value = self._text(element, *names)
        if value is None:
            return None
        number = Decimal(value)
        if not number.is_finite():
            raise ValueError(f"Not a finite number: {value}")
        return number
