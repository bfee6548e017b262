"""
Search serializers.
"""
from rest_framework import serializers

from modules.orders.serializers import OrderSerializer

QUERY_PATTERN = r'^[a-zA-Z0-9 *.\-_]+$'


class SearchQuerySerializer(serializers.Serializer):
    """Serializer for search request."""

    q = serializers.RegexField(
        QUERY_PATTERN,
        min_length=2,
        max_length=200,
        help_text='Search text; * acts as a wildcard',
        error_messages={
            'required': 'Query parameter q is required',
            'blank': 'Query parameter q is required',
            'invalid': 'Query contains invalid characters',
            'min_length': 'Query must be at least 2 characters',
            'max_length': 'Query must be at most 200 characters',
        },
    )


class SearchMetaSerializer(serializers.Serializer):
    query = serializers.CharField()
    page = serializers.IntegerField()
    per_page = serializers.IntegerField()
    total = serializers.IntegerField()
    total_pages = serializers.IntegerField()


class SearchResultSerializer(serializers.Serializer):
    """Serializer for search results (schema only)."""
    meta = SearchMetaSerializer()
    data = OrderSerializer(many=True)
