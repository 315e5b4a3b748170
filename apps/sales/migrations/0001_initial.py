import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('vehicles', '0001_initial'),
        ('purchases', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='SaleRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('sale_price', models.DecimalField(decimal_places=2, help_text='Net sale price excl. VAT', max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('vat_type', models.CharField(choices=[('21%', '21% BTW'), ('marge', 'Marge regeling'), ('geen_btw', 'Geen BTW')], default='21%', max_length=10)),
                ('discount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('vat_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('sale_price_incl_vat', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('final_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('profit_excl_vat', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('profit_incl_vat', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('customer_name', models.CharField(max_length=200)),
                ('customer_email', models.EmailField(blank=True, max_length=254)),
                ('customer_phone', models.CharField(blank=True, max_length=50)),
                ('customer_address', models.TextField(blank=True)),
                ('payment_method', models.CharField(choices=[('bank', 'Bankoverschrijving'), ('cash', 'Contant'), ('financing', 'Financiering')], default='bank', max_length=20)),
                ('sale_date', models.DateField(default=django.utils.timezone.localdate)),
                ('delivery_date', models.DateField(blank=True, null=True)),
                ('warranty_months', models.PositiveIntegerField(default=12)),
                ('invoice_number', models.CharField(blank=True, max_length=50)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('purchase', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='sales', to='purchases.purchaserecord')),
                ('vehicle', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sales', to='vehicles.vehicle')),
            ],
            options={
                'db_table': 'vehicle_sales',
                'ordering': ['-sale_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['sale_date'], name='sales_date_idx'),
                ],
            },
        ),
    ]
