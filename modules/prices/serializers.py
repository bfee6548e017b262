"""
Prices module serializers.
"""
from rest_framework import serializers


class PriceQuerySerializer(serializers.Serializer):
    """Query parameters of the price endpoint."""
    factory = serializers.CharField(max_length=100)
    collection = serializers.CharField(max_length=100)
    article = serializers.CharField(max_length=200)


class PriceSerializer(serializers.Serializer):
    """Serializer for price output (schema only)."""
    price = serializers.FloatField()
    currency = serializers.CharField()
    factory = serializers.CharField()
    collection = serializers.CharField()
    article = serializers.CharField()
    fetched_at = serializers.DateTimeField()
    source_url = serializers.URLField()
