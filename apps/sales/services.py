"""
Sale Services Module
=====================

Business logic for recording vehicle sales. The sale's VAT, gross price,
final price and profit come from the accounting calculator, using the
vehicle's purchase record as the purchase reference when there is one.

Classes:
    SaleService: Records, updates, recalculates and deletes sales.

Example:
    Margin-scheme sale of a vehicle with a recorded purchase::

        from apps.sales.services import SaleService
        from decimal import Decimal

        sale = SaleService.record_sale(
            vehicle=golf,
            sale_price=Decimal('30000.00'),
            discount=Decimal('500.00'),
            vat_type='marge',
            customer_name='J. de Vries',
        )
        print(sale.vat_amount)       # 2100.00
        print(sale.final_price)      # 31600.00
        print(sale.profit_incl_vat)  # 5295.00 for a 26305.00 purchase
"""

import logging
from django.db import transaction
from django.utils import timezone
from .models import SaleRecord, PaymentMethod
from .exceptions import (
    DuplicateSaleError,
    SaleNotFoundError,
    NegativeFinalPriceError,
    PurchaseMismatchError,
    SalesServiceError,
)
from apps.accounting.services import VatRegime, compute_sale_totals
from apps.purchases.services import PurchaseService
from apps.vehicles.models import Vehicle, VehicleStatus
from apps.vehicles.services import mark_vehicle_status

logger = logging.getLogger(__name__)


class SaleService:
    """
    Service for vehicle sale records.

    A vehicle has at most one sale. Recording a sale marks the vehicle as
    sold; deleting it puts the vehicle back on the catalog.

    Methods:
        record_sale: Create the sale record of a vehicle.
        update_sale: Change fields and recompute amounts.
        compute_totals: Calculator result for a stored sale.
        recalculate: Recompute and store the amounts of a sale.
        delete_sale: Delete a sale and make the vehicle available again.
        get_for_vehicle: Look up the sale of a vehicle.
    """

    # Fields update_sale accepts
    EDITABLE_FIELDS = (
        'sale_price',
        'vat_type',
        'discount',
        'purchase',
        'customer_name',
        'customer_email',
        'customer_phone',
        'customer_address',
        'payment_method',
        'sale_date',
        'delivery_date',
        'warranty_months',
        'invoice_number',
        'notes',
    )

    @staticmethod
    def record_sale(
        vehicle,
        sale_price,
        vat_type=None,
        discount=0,
        purchase=None,
        customer_name='',
        customer_email='',
        customer_phone='',
        customer_address='',
        payment_method=PaymentMethod.BANK,
        sale_date=None,
        delivery_date=None,
        warranty_months=12,
        invoice_number='',
        notes='',
    ):
        """
        Record the sale of a vehicle.

        Args:
            vehicle (Vehicle): The sold vehicle.
            sale_price (Decimal): Net sale price excl. VAT.
            vat_type (str, optional): VAT regime token. Defaults to the
                regime of the linked purchase, or '21%' without one.
            discount (Decimal, optional): Discount on the gross price.
            purchase (PurchaseRecord, optional): Purchase reference. When
                omitted, the vehicle's own purchase record is linked if it
                exists.
            customer_name, customer_email, customer_phone, customer_address
                (str): Buyer details.
            payment_method (str): 'bank', 'cash' or 'financing'.
            sale_date (date, optional): Defaults to today.
            delivery_date (date, optional): Planned delivery.
            warranty_months (int): Warranty period. Defaults to 12.
            invoice_number (str, optional): Sales invoice number.
            notes (str, optional): Free text.

        Returns:
            SaleRecord: The saved sale. ``profit_*`` fields are None when
            no purchase could be linked.

        Raises:
            DuplicateSaleError: If the vehicle already has a sale.
            PurchaseMismatchError: If ``purchase`` belongs to another vehicle.
            NegativeFinalPriceError: If the discount exceeds the gross price.
            InvalidAmountError: If an amount is negative or not a number.
            UnknownVatRegimeError: If the VAT regime is unknown.
        """
        with transaction.atomic():
            vehicle = Vehicle.objects.select_for_update().get(pk=vehicle.pk)

            if SaleRecord.objects.filter(vehicle=vehicle).exists():
                raise DuplicateSaleError(f"Vehicle {vehicle} is already sold")

            if purchase is None:
                purchase = vehicle.purchases.first()
            elif purchase.vehicle_id != vehicle.pk:
                raise PurchaseMismatchError(
                    "Purchase record belongs to a different vehicle"
                )

            if not vat_type:
                vat_type = purchase.vat_type if purchase else VatRegime.STANDARD_21

            sale = SaleRecord(
                vehicle=vehicle,
                purchase=purchase,
                sale_price=sale_price,
                vat_type=vat_type,
                discount=discount,
                customer_name=customer_name or '',
                customer_email=customer_email or '',
                customer_phone=customer_phone or '',
                customer_address=customer_address or '',
                payment_method=payment_method,
                sale_date=sale_date or timezone.localdate(),
                delivery_date=delivery_date,
                warranty_months=warranty_months,
                invoice_number=invoice_number or '',
                notes=notes or '',
            )
            SaleService.apply_totals(sale, SaleService.compute_totals(sale))
            sale.save()

            mark_vehicle_status(vehicle, VehicleStatus.SOLD)

        logger.info(
            "Sale %s recorded for vehicle %s: final price %s (%s), profit %s",
            sale.id, vehicle.id, sale.final_price, sale.vat_type,
            sale.profit_incl_vat if sale.profit_available else 'unavailable'
        )
        return sale

    @staticmethod
    def update_sale(sale, **changes):
        """
        Update a sale and recompute its amounts.

        Args:
            sale (SaleRecord): Record to update.
            **changes: New values for any of ``EDITABLE_FIELDS``.

        Returns:
            SaleRecord: The updated record.

        Raises:
            SalesServiceError: If a field is not editable.
            PurchaseMismatchError: If the new purchase belongs to another vehicle.
            NegativeFinalPriceError: If the discount exceeds the gross price.
        """
        unknown = set(changes) - set(SaleService.EDITABLE_FIELDS)
        if unknown:
            raise SalesServiceError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        purchase = changes.get('purchase')
        if purchase is not None and purchase.vehicle_id != sale.vehicle_id:
            raise PurchaseMismatchError(
                "Purchase record belongs to a different vehicle"
            )

        with transaction.atomic():
            for field, value in changes.items():
                setattr(sale, field, value)
            SaleService.apply_totals(sale, SaleService.compute_totals(sale))
            sale.save()

        logger.info("Sale %s updated: final price %s", sale.id, sale.final_price)
        return sale

    @staticmethod
    def compute_totals(sale):
        """
        Run the calculator on the raw fields of a sale.

        Raises:
            NegativeFinalPriceError: If the discount exceeds the gross price.
        """
        purchase_totals = None
        if sale.purchase is not None:
            purchase_totals = PurchaseService.totals_for(sale.purchase)

        totals = compute_sale_totals(
            sale.sale_price,
            sale.vat_type,
            discount=sale.discount,
            purchase_totals=purchase_totals,
        )
        if totals.final_price < 0:
            raise NegativeFinalPriceError(
                f"Discount {totals.discount} exceeds gross price "
                f"{totals.sale_price_incl_vat}"
            )
        return totals

    @staticmethod
    def recalculate(sale):
        """Recompute and store the derived amounts of a sale."""
        SaleService.apply_totals(sale, SaleService.compute_totals(sale))
        sale.save()
        return sale

    @staticmethod
    @transaction.atomic
    def delete_sale(sale):
        """Delete a sale and put its vehicle back on the catalog."""
        vehicle = sale.vehicle
        sale_id = sale.id
        sale.delete()

        mark_vehicle_status(vehicle, VehicleStatus.AVAILABLE)
        logger.info("Sale %s deleted, vehicle %s available again", sale_id, vehicle.id)

    @staticmethod
    def get_for_vehicle(vehicle_id):
        """
        Get the sale record of a vehicle.

        Raises:
            SaleNotFoundError: If the vehicle has no sale.
        """
        sale = SaleRecord.objects.select_related('vehicle', 'purchase').filter(
            vehicle_id=vehicle_id
        ).first()
        if sale is None:
            raise SaleNotFoundError(f"No sale recorded for vehicle {vehicle_id}")
        return sale

    @staticmethod
    def apply_totals(sale, totals):
        """Copy calculator output onto a sale without saving it."""
        sale.sale_price = totals.sale_price
        sale.vat_type = totals.vat_type.value
        sale.discount = totals.discount
        sale.vat_amount = totals.vat_amount
        sale.sale_price_incl_vat = totals.sale_price_incl_vat
        sale.final_price = totals.final_price
        sale.profit_excl_vat = totals.profit_excl_vat
        sale.profit_incl_vat = totals.profit_incl_vat
