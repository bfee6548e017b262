"""
Orders module API views.
"""
import logging

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from shared.domain.exceptions import ValidationError
from shared.interfaces.pagination import PageRequest

from .exceptions import OrderCreationError
from .serializers import (
    AggregationQuerySerializer,
    AggregationResponseSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)
from .services import AggregationService, OrderService


logger = logging.getLogger(__name__)

order_service = OrderService()
aggregation_service = AggregationService()


@extend_schema(tags=['Orders'])
class OrderAggregateView(APIView):
    """Grouped order counts by day, month or year."""

    @extend_schema(
        parameters=[
            AggregationQuerySerializer,
            OpenApiParameter('page', int, description='Page number (default 1)'),
            OpenApiParameter('per_page', int, description='Groups per page (default 20, max 100)'),
        ],
        responses={200: AggregationResponseSerializer},
        summary="Aggregate orders by period",
    )
    def get(self, request):
        serializer = AggregationQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data
        page_request = PageRequest.from_query(request.query_params)

        result = aggregation_service.aggregate(
            group_by=params['group_by'],
            page=page_request.page,
            per_page=page_request.per_page,
            status=params.get('status'),
            from_date=params.get('from_date'),
            to_date=params.get('to_date'),
            user_id=params.get('user_id'),
        )
        return Response(result.to_dict(), status=status.HTTP_200_OK)


@extend_schema(tags=['Orders'])
class OrderCreateView(APIView):
    """Order creation endpoint."""

    @extend_schema(
        request=OrderCreateSerializer,
        responses={201: OrderSerializer},
        summary="Create an order",
    )
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = order_service.create_order(serializer.to_order_data())
        except OrderCreationError as e:
            return Response(
                {'error': 'Order creation error', 'message': e.message, 'code': e.code},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(order.to_dict(), status=status.HTTP_201_CREATED)


@extend_schema(tags=['Orders'])
class OrderDetailView(APIView):
    """Order detail by numeric id."""

    @extend_schema(responses={200: OrderSerializer}, summary="Get order by id")
    def get(self, request, order_id):
        order = order_service.get_order(order_id)
        return Response(order_service.to_response(order).to_dict(), status=status.HTTP_200_OK)


@extend_schema(tags=['Orders'])
class OrderByHashView(APIView):
    """Order detail by hash, requires ?by=hash."""

    @extend_schema(
        parameters=[OpenApiParameter('by', str, enum=['hash'], required=True)],
        responses={200: OrderSerializer},
        summary="Get order by hash",
    )
    def get(self, request, order_hash):
        lookup = request.query_params.get('by')
        if lookup != 'hash':
            raise ValidationError("Use ?by=hash to look up an order by hash", field='by')
        order = order_service.get_order(order_hash)
        return Response(order_service.to_response(order).to_dict(), status=status.HTTP_200_OK)


@extend_schema(tags=['Orders'])
class OrderStatusView(APIView):
    """Order status update endpoint."""

    @extend_schema(
        request=OrderStatusUpdateSerializer,
        responses={200: OrderSerializer},
        summary="Update order status",
    )
    def patch(self, request, order_id):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = order_service.update_order_status(order_id, int(serializer.validated_data['status']))
        return Response(order.to_dict(), status=status.HTTP_200_OK)
