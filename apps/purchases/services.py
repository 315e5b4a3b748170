"""
Purchase Services Module
=========================

Business logic for recording vehicle acquisitions. Every write goes through
the VAT calculator, so the stored ``vat_amount`` and ``total_cost_incl_vat``
always equal what the preview endpoint shows for the same inputs.

Classes:
    PurchaseService: Records, updates and deletes purchases, and rebuilds
        their calculator totals for use as a sale's purchase reference.

Example:
    Recording a purchase with costs::

        from apps.purchases.services import PurchaseService
        from decimal import Decimal

        purchase = PurchaseService.record_purchase(
            vehicle=golf,
            purchase_price=Decimal('20000.00'),
            vat_type='21%',
            bpm_amount=Decimal('1500.00'),
            transport_cost=Decimal('200.00'),
            maintenance_cost=Decimal('300.00'),
            supplier='Autohandel Jansen',
        )
        print(purchase.vat_amount)           # 4305.00
        print(purchase.total_cost_incl_vat)  # 26305.00
"""

import logging
from django.db import transaction
from django.utils import timezone
from .models import PurchaseRecord
from .exceptions import (
    DuplicatePurchaseError,
    PurchaseNotFoundError,
    PurchaseInUseError,
    PurchasesServiceError,
)
from apps.accounting.services import PurchaseTotals, compute_purchase_totals
from apps.vehicles.models import Vehicle

logger = logging.getLogger(__name__)


class PurchaseService:
    """
    Service for vehicle purchase records.

    Raw monetary fields are validated and converted by the calculator; the
    service only persists its output. Purchase records are one per vehicle.

    Methods:
        record_purchase: Create the purchase record of a vehicle.
        update_purchase: Change raw fields and recompute totals.
        totals_for: Calculator totals rebuilt from a stored record.
        delete_purchase: Delete a purchase no sale refers to.
        get_for_vehicle: Look up the purchase of a vehicle.
    """

    # Fields the calculator reads
    AMOUNT_FIELDS = (
        'purchase_price',
        'bpm_amount',
        'transport_cost',
        'maintenance_cost',
        'cleaning_cost',
        'guarantee_cost',
        'other_costs',
    )
    # Fields update_purchase accepts
    EDITABLE_FIELDS = AMOUNT_FIELDS + (
        'vat_type',
        'supplier',
        'invoice_number',
        'purchase_date',
        'notes',
    )

    @staticmethod
    def record_purchase(
        vehicle,
        purchase_price,
        vat_type='21%',
        bpm_amount=0,
        transport_cost=0,
        maintenance_cost=0,
        cleaning_cost=0,
        guarantee_cost=0,
        other_costs=0,
        supplier='',
        invoice_number='',
        purchase_date=None,
        notes='',
    ):
        """
        Record the purchase of a vehicle.

        Args:
            vehicle (Vehicle): The acquired vehicle.
            purchase_price (Decimal): Net purchase price excl. VAT.
            vat_type (str): VAT regime token ('21%', 'marge', 'geen_btw').
                Defaults to '21%'.
            bpm_amount (Decimal, optional): BPM registration tax.
            transport_cost, maintenance_cost, cleaning_cost, guarantee_cost,
            other_costs (Decimal, optional): Acquisition costs excl. VAT.
            supplier (str, optional): Seller of the vehicle.
            invoice_number (str, optional): Supplier invoice number.
            purchase_date (date, optional): Defaults to today.
            notes (str, optional): Free text.

        Returns:
            PurchaseRecord: The saved record with derived totals.

        Raises:
            DuplicatePurchaseError: If the vehicle already has a purchase.
            InvalidAmountError: If an amount is negative or not a number.
            UnknownVatRegimeError: If the VAT regime is unknown.

        Note:
            The vehicle row is locked with SELECT FOR UPDATE so that two
            concurrent requests cannot both record a purchase.
        """
        totals = compute_purchase_totals(
            purchase_price,
            vat_type,
            bpm_amount=bpm_amount,
            transport_cost=transport_cost,
            maintenance_cost=maintenance_cost,
            cleaning_cost=cleaning_cost,
            guarantee_cost=guarantee_cost,
            other_costs=other_costs,
        )

        with transaction.atomic():
            vehicle = Vehicle.objects.select_for_update().get(pk=vehicle.pk)

            if PurchaseRecord.objects.filter(vehicle=vehicle).exists():
                raise DuplicatePurchaseError(
                    f"Vehicle {vehicle} already has a purchase record"
                )

            purchase = PurchaseRecord(
                vehicle=vehicle,
                supplier=supplier or '',
                invoice_number=invoice_number or '',
                purchase_date=purchase_date or timezone.localdate(),
                notes=notes or '',
            )
            PurchaseService.apply_totals(purchase, totals)
            purchase.save()

        logger.info(
            "Purchase %s recorded for vehicle %s: total %s incl. VAT (%s)",
            purchase.id, vehicle.id, purchase.total_cost_incl_vat, purchase.vat_type
        )
        return purchase

    @staticmethod
    def update_purchase(purchase, **changes):
        """
        Update a purchase and recompute its totals.

        Sales linked to this purchase are recomputed as well, since their
        profit depends on the purchase totals.

        Args:
            purchase (PurchaseRecord): Record to update.
            **changes: New values for any of ``EDITABLE_FIELDS``.

        Returns:
            PurchaseRecord: The updated record.

        Raises:
            PurchasesServiceError: If a field is not editable.
            InvalidAmountError: If an amount is negative or not a number.
            UnknownVatRegimeError: If the VAT regime is unknown.
        """
        from apps.sales.services import SaleService

        unknown = set(changes) - set(PurchaseService.EDITABLE_FIELDS)
        if unknown:
            raise PurchasesServiceError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        with transaction.atomic():
            for field, value in changes.items():
                setattr(purchase, field, value)

            totals = PurchaseService.totals_for(purchase)
            PurchaseService.apply_totals(purchase, totals)
            purchase.save()

            for sale in purchase.sales.all():
                SaleService.recalculate(sale)

        logger.info(
            "Purchase %s updated: total %s incl. VAT",
            purchase.id, purchase.total_cost_incl_vat
        )
        return purchase

    @staticmethod
    def totals_for(purchase) -> PurchaseTotals:
        """
        Rebuild calculator totals from the raw fields of a stored purchase.

        This is the purchase reference passed to ``compute_sale_totals``.
        """
        return compute_purchase_totals(
            purchase.purchase_price,
            purchase.vat_type,
            bpm_amount=purchase.bpm_amount,
            transport_cost=purchase.transport_cost,
            maintenance_cost=purchase.maintenance_cost,
            cleaning_cost=purchase.cleaning_cost,
            guarantee_cost=purchase.guarantee_cost,
            other_costs=purchase.other_costs,
        )

    @staticmethod
    @transaction.atomic
    def delete_purchase(purchase):
        """
        Delete a purchase record.

        Raises:
            PurchaseInUseError: If a sale references this purchase.
        """
        if purchase.sales.exists():
            raise PurchaseInUseError(
                "Purchase is referenced by a sale and cannot be deleted"
            )

        purchase_id = purchase.id
        purchase.delete()
        logger.info("Purchase %s deleted", purchase_id)

    @staticmethod
    def get_for_vehicle(vehicle_id):
        """
        Get the purchase record of a vehicle.

        Raises:
            PurchaseNotFoundError: If the vehicle has no purchase.
        """
        purchase = PurchaseRecord.objects.select_related('vehicle').filter(
            vehicle_id=vehicle_id
        ).first()
        if purchase is None:
            raise PurchaseNotFoundError(
                f"No purchase recorded for vehicle {vehicle_id}"
            )
        return purchase

    @staticmethod
    def apply_totals(purchase, totals):
        """Copy calculator output onto a purchase without saving it."""
        purchase.vat_type = totals.vat_type.value
        for field in PurchaseService.AMOUNT_FIELDS:
            setattr(purchase, field, getattr(totals, field))
        purchase.vat_amount = totals.vat_amount
        purchase.total_cost_incl_vat = totals.total_cost_incl_vat
