from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.accounting.services.vat_calculator import VatRegime


class PaymentMethod(models.TextChoices):
    BANK = 'bank', 'Bankoverschrijving'
    CASH = 'cash', 'Contant'
    FINANCING = 'financing', 'Financiering'


class SaleRecord(models.Model):
    """
    Sale of a vehicle to a customer.

    Derived amounts are written only by ``SaleService``. ``profit_excl_vat``
    and ``profit_incl_vat`` are NULL when the sale has no linked purchase;
    NULL means "unknown", not zero.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    vehicle = models.ForeignKey(
        'vehicles.Vehicle',
        on_delete=models.PROTECT,
        related_name='sales'
    )
    purchase = models.ForeignKey(
        'purchases.PurchaseRecord',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='sales'
    )

    # Raw inputs (EUR)
    sale_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text='Net sale price excl. VAT'
    )
    vat_type = models.CharField(
        max_length=10,
        choices=VatRegime.choices,
        default=VatRegime.STANDARD_21
    )
    discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Derived amounts
    vat_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    sale_price_incl_vat = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    final_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    profit_excl_vat = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    profit_incl_vat = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    # Customer
    customer_name = models.CharField(max_length=200)
    customer_email = models.EmailField(blank=True)
    customer_phone = models.CharField(max_length=50, blank=True)
    customer_address = models.TextField(blank=True)

    # Deal
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.BANK
    )
    sale_date = models.DateField(default=timezone.localdate)
    delivery_date = models.DateField(null=True, blank=True)
    warranty_months = models.PositiveIntegerField(default=12)
    invoice_number = models.CharField(max_length=50, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vehicle_sales'
        indexes = [
            models.Index(fields=['sale_date'], name='sales_date_idx'),
        ]
        ordering = ['-sale_date', '-created_at']

    def __str__(self):
        return f"Sale {self.vehicle} to {self.customer_name} - {self.final_price} EUR"

    @property
    def profit_available(self):
        return self.profit_excl_vat is not None and self.profit_incl_vat is not None
