"""
Orders module Django ORM models.
"""
from decimal import Decimal

from django.db import models


class OrderModel(models.Model):
    """Customer order (orders table)."""

    STATUS_PENDING = 1
    STATUS_CONFIRMED = 2
    STATUS_SHIPPED = 3
    STATUS_DELIVERED = 4
    STATUS_CANCELLED = 5
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_SHIPPED, 'Shipped'),
        (STATUS_DELIVERED, 'Delivered'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    VALID_STATUSES = tuple(code for code, _ in STATUS_CHOICES)

    VAT_TYPE_CHOICES = [
        (0, 'None'),
        (1, 'Individual'),
        (2, 'Company'),
    ]
    DELIVERY_TYPE_CHOICES = [
        (0, 'Standard'),
        (1, 'Express'),
        (2, 'Pickup'),
    ]
    PAY_TYPE_CHOICES = [
        (0, 'Card'),
        (1, 'Bank transfer'),
        (2, 'Cash'),
        (3, 'PayPal'),
    ]
    CURRENCY_CHOICES = [
        ('EUR', 'Euro'),
        ('USD', 'US Dollar'),
        ('GBP', 'Pound Sterling'),
    ]

    uuid = models.CharField(max_length=36, unique=True)
    hash = models.CharField(max_length=64, unique=True)
    user_id = models.BigIntegerField(null=True, blank=True)
    token = models.CharField(max_length=64)
    number = models.CharField(max_length=50, null=True, blank=True)
    status = models.SmallIntegerField(choices=STATUS_CHOICES, default=STATUS_PENDING)
    email = models.CharField(max_length=150, null=True, blank=True)

    vat_type = models.SmallIntegerField(choices=VAT_TYPE_CHOICES, default=0)
    vat_number = models.CharField(max_length=64, null=True, blank=True)
    discount = models.SmallIntegerField(null=True, blank=True)

    # Delivery
    delivery_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    delivery_type = models.SmallIntegerField(choices=DELIVERY_TYPE_CHOICES, default=0)
    delivery_index = models.CharField(max_length=20, null=True, blank=True)
    delivery_country = models.IntegerField(null=True, blank=True)
    delivery_region = models.CharField(max_length=100, null=True, blank=True)
    delivery_city = models.CharField(max_length=200, null=True, blank=True)
    delivery_address = models.CharField(max_length=300, null=True, blank=True)
    delivery_phone = models.CharField(max_length=50, null=True, blank=True)
    delivery_apartment_office = models.CharField(max_length=30, null=True, blank=True)

    # Client
    client_name = models.CharField(max_length=150, null=True, blank=True)
    client_surname = models.CharField(max_length=150, null=True, blank=True)
    company_name = models.CharField(max_length=255, null=True, blank=True)

    # Payment
    pay_type = models.SmallIntegerField(choices=PAY_TYPE_CHOICES, default=0)
    pay_date_execution = models.DateTimeField(null=True, blank=True)
    accept_pay = models.BooleanField(default=False)
    payment_euro = models.BooleanField(default=False)

    proposed_date = models.DateTimeField(null=True, blank=True)
    ship_date = models.DateTimeField(null=True, blank=True)
    tracking_number = models.CharField(max_length=100, null=True, blank=True)
    manager_name = models.CharField(max_length=100, null=True, blank=True)
    manager_email = models.CharField(max_length=100, null=True, blank=True)

    locale = models.CharField(max_length=10, default='en')
    cur_rate = models.DecimalField(max_digits=12, decimal_places=6, default=Decimal('1.000000'))
    currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default='EUR')
    measure = models.CharField(max_length=5, default='m')
    name = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    warehouse_data = models.JSONField(null=True, blank=True)
    address_equal = models.BooleanField(default=True)
    weight_gross = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    spec_price = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        verbose_name = 'Order'
        verbose_name_plural = 'Orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_at'], name='idx_orders_created_at'),
            models.Index(fields=['status'], name='idx_orders_status'),
            models.Index(fields=['email'], name='idx_orders_email'),
            models.Index(fields=['currency'], name='idx_orders_currency'),
            models.Index(fields=['client_name', 'client_surname'], name='idx_orders_client_name'),
            models.Index(fields=['company_name'], name='idx_orders_company_name'),
            models.Index(fields=['number'], name='idx_orders_number'),
        ]

    def __str__(self):
        return self.number or f"Order {self.pk}"

    @property
    def full_client_name(self) -> str:
        return f"{self.client_name or ''} {self.client_surname or ''}".strip()


class OrderArticleModel(models.Model):
    """Order line item (orders_article table), owned by one order."""

    order = models.ForeignKey(
        OrderModel,
        on_delete=models.CASCADE,
        related_name='articles',
    )
    article_id = models.IntegerField()
    article_code = models.CharField(max_length=100, null=True, blank=True)
    article_name = models.CharField(max_length=255, null=True, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=4)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    price_eur = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, null=True, blank=True)
    measure = models.CharField(max_length=5, null=True, blank=True)
    delivery_time_min = models.DateField(null=True, blank=True)
    delivery_time_max = models.DateField(null=True, blank=True)
    weight = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    packaging_count = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    pallet = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    packaging = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    swimming_pool = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders_article'
        verbose_name = 'Order Article'
        verbose_name_plural = 'Order Articles'
        ordering = ['id']
        indexes = [
            models.Index(fields=['article_id'], name='idx_article_article_id'),
            models.Index(fields=['article_code'], name='idx_article_article_code'),
            models.Index(fields=['delivery_time_min', 'delivery_time_max'], name='idx_article_delivery_time'),
            models.Index(fields=['currency'], name='idx_article_currency'),
        ]

    def __str__(self):
        return f"Order {self.order_id} - Article {self.article_id} x {self.amount}"

    @property
    def total_price(self) -> Decimal:
        return Decimal(self.price) * Decimal(self.amount)

    @property
    def total_weight(self):
        """Weight times amount, None when the article has no weight."""
        if self.weight is None:
            return None
        return Decimal(self.weight) * Decimal(self.amount)

    @property
    def delivery_days(self):
        """Length of the delivery window in days, None if either bound is missing."""
        if not self.delivery_time_min or not self.delivery_time_max:
            return None
        return abs((self.delivery_time_max - self.delivery_time_min).days)


class OrderNumberSequenceModel(models.Model):
    """Per-year counter backing the human-facing order number."""

    year = models.IntegerField(unique=True)
    last_value = models.IntegerField(default=0)

    class Meta:
        db_table = 'orders_number_sequence'
        verbose_name = 'Order Number Sequence'
        verbose_name_plural = 'Order Number Sequences'

    def __str__(self):
        return f"{self.year}: {self.last_value}"
