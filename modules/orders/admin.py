"""
Orders module admin configuration.
"""
from django.contrib import admin

from .models import OrderArticleModel, OrderModel, OrderNumberSequenceModel


class OrderArticleInline(admin.TabularInline):
    """Inline admin for order articles."""
    model = OrderArticleModel
    extra = 0
    readonly_fields = ('created_at', 'updated_at')


@admin.register(OrderModel)
class OrderAdmin(admin.ModelAdmin):
    """Admin configuration for Order model."""
    list_display = ('id', 'number', 'status', 'client_name', 'client_surname', 'email', 'currency', 'created_at')
    list_filter = ('status', 'currency', 'created_at')
    search_fields = ('number', 'hash', 'email', 'client_name', 'client_surname', 'company_name')
    ordering = ('-created_at',)
    readonly_fields = ('uuid', 'hash', 'token', 'number', 'created_at', 'updated_at')
    inlines = [OrderArticleInline]


@admin.register(OrderNumberSequenceModel)
class OrderNumberSequenceAdmin(admin.ModelAdmin):
    """Admin configuration for the yearly order number counters."""
    list_display = ('year', 'last_value')
    ordering = ('-year',)
