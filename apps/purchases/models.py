from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.accounting.services.vat_calculator import VatRegime


def _cost_field(**kwargs):
    return models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        **kwargs
    )


class PurchaseRecord(models.Model):
    """
    Acquisition of a vehicle by the dealership.

    ``vat_amount`` and ``total_cost_incl_vat`` are derived; they are written
    only by ``PurchaseService``, which always runs the VAT calculator.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    vehicle = models.ForeignKey(
        'vehicles.Vehicle',
        on_delete=models.PROTECT,
        related_name='purchases'
    )

    # Raw inputs (EUR, excl. VAT)
    purchase_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    vat_type = models.CharField(
        max_length=10,
        choices=VatRegime.choices,
        default=VatRegime.STANDARD_21
    )
    bpm_amount = _cost_field(help_text='BPM registration tax, not subject to VAT')
    transport_cost = _cost_field()
    maintenance_cost = _cost_field()
    cleaning_cost = _cost_field()
    guarantee_cost = _cost_field()
    other_costs = _cost_field()

    # Derived totals
    vat_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    total_cost_incl_vat = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    # Paperwork
    supplier = models.CharField(max_length=200, blank=True)
    invoice_number = models.CharField(max_length=50, blank=True)
    purchase_date = models.DateField(default=timezone.localdate)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vehicle_purchases'
        indexes = [
            models.Index(fields=['purchase_date'], name='purchases_date_idx'),
        ]
        ordering = ['-purchase_date', '-created_at']

    def __str__(self):
        return f"Purchase {self.vehicle} - {self.purchase_price} EUR"

    @property
    def additional_costs(self):
        return (
            self.transport_cost
            + self.maintenance_cost
            + self.cleaning_cost
            + self.guarantee_cost
            + self.other_costs
        )

    @property
    def total_cost_excl_vat(self):
        """Purchase price plus BPM and additional costs, without VAT."""
        return self.purchase_price + self.bpm_amount + self.additional_costs
