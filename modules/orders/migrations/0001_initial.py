from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='OrderModel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.CharField(max_length=36, unique=True)),
                ('hash', models.CharField(max_length=64, unique=True)),
                ('user_id', models.BigIntegerField(blank=True, null=True)),
                ('token', models.CharField(max_length=64)),
                ('number', models.CharField(blank=True, max_length=50, null=True)),
                ('status', models.SmallIntegerField(choices=[(1, 'Pending'), (2, 'Confirmed'), (3, 'Shipped'), (4, 'Delivered'), (5, 'Cancelled')], default=1)),
                ('email', models.CharField(blank=True, max_length=150, null=True)),
                ('vat_type', models.SmallIntegerField(choices=[(0, 'None'), (1, 'Individual'), (2, 'Company')], default=0)),
                ('vat_number', models.CharField(blank=True, max_length=64, null=True)),
                ('discount', models.SmallIntegerField(blank=True, null=True)),
                ('delivery_price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('delivery_type', models.SmallIntegerField(choices=[(0, 'Standard'), (1, 'Express'), (2, 'Pickup')], default=0)),
                ('delivery_index', models.CharField(blank=True, max_length=20, null=True)),
                ('delivery_country', models.IntegerField(blank=True, null=True)),
                ('delivery_region', models.CharField(blank=True, max_length=100, null=True)),
                ('delivery_city', models.CharField(blank=True, max_length=200, null=True)),
                ('delivery_address', models.CharField(blank=True, max_length=300, null=True)),
                ('delivery_phone', models.CharField(blank=True, max_length=50, null=True)),
                ('delivery_apartment_office', models.CharField(blank=True, max_length=30, null=True)),
                ('client_name', models.CharField(blank=True, max_length=150, null=True)),
                ('client_surname', models.CharField(blank=True, max_length=150, null=True)),
                ('company_name', models.CharField(blank=True, max_length=255, null=True)),
                ('pay_type', models.SmallIntegerField(choices=[(0, 'Card'), (1, 'Bank transfer'), (2, 'Cash'), (3, 'PayPal')], default=0)),
                ('pay_date_execution', models.DateTimeField(blank=True, null=True)),
                ('accept_pay', models.BooleanField(default=False)),
                ('payment_euro', models.BooleanField(default=False)),
                ('proposed_date', models.DateTimeField(blank=True, null=True)),
                ('ship_date', models.DateTimeField(blank=True, null=True)),
                ('tracking_number', models.CharField(blank=True, max_length=100, null=True)),
                ('manager_name', models.CharField(blank=True, max_length=100, null=True)),
                ('manager_email', models.CharField(blank=True, max_length=100, null=True)),
                ('locale', models.CharField(default='en', max_length=10)),
                ('cur_rate', models.DecimalField(decimal_places=6, default=Decimal('1.000000'), max_digits=12)),
                ('currency', models.CharField(choices=[('EUR', 'Euro'), ('USD', 'US Dollar'), ('GBP', 'Pound Sterling')], default='EUR', max_length=3)),
                ('measure', models.CharField(default='m', max_length=5)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, null=True)),
                ('warehouse_data', models.JSONField(blank=True, null=True)),
                ('address_equal', models.BooleanField(default=True)),
                ('weight_gross', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ('spec_price', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'db_table': 'orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['created_at'], name='idx_orders_created_at'),
                    models.Index(fields=['status'], name='idx_orders_status'),
                    models.Index(fields=['email'], name='idx_orders_email'),
                    models.Index(fields=['currency'], name='idx_orders_currency'),
                    models.Index(fields=['client_name', 'client_surname'], name='idx_orders_client_name'),
                    models.Index(fields=['company_name'], name='idx_orders_company_name'),
                    models.Index(fields=['number'], name='idx_orders_number'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderNumberSequenceModel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('year', models.IntegerField(unique=True)),
                ('last_value', models.IntegerField(default=0)),
            ],
            options={
                'verbose_name': 'Order Number Sequence',
                'verbose_name_plural': 'Order Number Sequences',
                'db_table': 'orders_number_sequence',
            },
        ),
        migrations.CreateModel(
            name='OrderArticleModel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('article_id', models.IntegerField()),
                ('article_code', models.CharField(blank=True, max_length=100, null=True)),
                ('article_name', models.CharField(blank=True, max_length=255, null=True)),
                ('amount', models.DecimalField(decimal_places=4, max_digits=12)),
                ('price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('price_eur', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('currency', models.CharField(blank=True, max_length=3, null=True)),
                ('measure', models.CharField(blank=True, max_length=5, null=True)),
                ('delivery_time_min', models.DateField(blank=True, null=True)),
                ('delivery_time_max', models.DateField(blank=True, null=True)),
                ('weight', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ('packaging_count', models.DecimalField(blank=True, decimal_places=4, max_digits=12, null=True)),
                ('pallet', models.DecimalField(blank=True, decimal_places=4, max_digits=12, null=True)),
                ('packaging', models.DecimalField(blank=True, decimal_places=4, max_digits=12, null=True)),
                ('swimming_pool', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='articles', to='orders.ordermodel')),
            ],
            options={
                'verbose_name': 'Order Article',
                'verbose_name_plural': 'Order Articles',
                'db_table': 'orders_article',
                'ordering': ['id'],
                'indexes': [
                    models.Index(fields=['article_id'], name='idx_article_article_id'),
                    models.Index(fields=['article_code'], name='idx_article_article_code'),
                    models.Index(fields=['delivery_time_min', 'delivery_time_max'], name='idx_article_delivery_time'),
                    models.Index(fields=['currency'], name='idx_article_currency'),
                ],
            },
        ),
    ]
