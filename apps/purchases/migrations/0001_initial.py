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
    ]

    operations = [
        migrations.CreateModel(
            name='PurchaseRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('purchase_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('vat_type', models.CharField(choices=[('21%', '21% BTW'), ('marge', 'Marge regeling'), ('geen_btw', 'Geen BTW')], default='21%', max_length=10)),
                ('bpm_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='BPM registration tax, not subject to VAT', max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('transport_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('maintenance_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('cleaning_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('guarantee_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('other_costs', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('vat_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('total_cost_incl_vat', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('supplier', models.CharField(blank=True, max_length=200)),
                ('invoice_number', models.CharField(blank=True, max_length=50)),
                ('purchase_date', models.DateField(default=django.utils.timezone.localdate)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('vehicle', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='vehicles.vehicle')),
            ],
            options={
                'db_table': 'vehicle_purchases',
                'ordering': ['-purchase_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['purchase_date'], name='purchases_date_idx'),
                ],
            },
        ),
    ]
