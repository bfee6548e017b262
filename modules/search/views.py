"""
Search API views.
"""
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from shared.interfaces.pagination import PageRequest

from .serializers import SearchQuerySerializer, SearchResultSerializer
from .services import OrderSearchService


class SearchView(APIView):
    """Order full-text search endpoint."""
    search_service = OrderSearchService()

    @extend_schema(
        tags=['Search'],
        summary='Search orders',
        parameters=[
            SearchQuerySerializer,
            OpenApiParameter(name='page', type=int, required=False),
            OpenApiParameter(name='per_page', type=int, required=False),
        ],
        responses={200: SearchResultSerializer},
    )
    def get(self, request):
        serializer = SearchQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        page_request = PageRequest.from_query(request.query_params)
        result = self.search_service.search(
            query=serializer.validated_data['q'],
            page=page_request.page,
            per_page=page_request.per_page,
        )
        return Response(result.to_dict(), status=status.HTTP_200_OK)
