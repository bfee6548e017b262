"""
Prices module API views.
"""
import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import PriceQuerySerializer, PriceSerializer
from .services import PriceFetcherService

logger = logging.getLogger(__name__)

price_fetcher_service = PriceFetcherService()


@extend_schema(tags=['Prices'])
class PriceView(APIView):
    """Current article price scraped from the supplier site."""

    @extend_schema(
        parameters=[PriceQuerySerializer],
        responses={200: PriceSerializer},
        summary="Get article price",
    )
    def get(self, request):
        serializer = PriceQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        quote = price_fetcher_service.fetch_price(
            factory=params['factory'],
            collection=params['collection'],
            article=params['article'],
        )
        logger.info(
            f"Price served: {params['factory']}/{params['collection']}/{params['article']} "
            f"= {quote.price} {quote.currency}"
        )
        return Response(quote.to_dict(), status=status.HTTP_200_OK)
