import pytest
from datetime import date
from decimal import Decimal
from apps.accounting.services import InvalidAmountError, UnknownVatRegimeError
from apps.purchases.models import PurchaseRecord
from apps.purchases.services import PurchaseService
from apps.purchases.exceptions import (
    DuplicatePurchaseError,
    PurchaseInUseError,
    PurchaseNotFoundError,
    PurchasesServiceError,
)
from apps.sales.services import SaleService


@pytest.mark.django_db
class TestRecordPurchase:
    """Tests for PurchaseService.record_purchase"""

    def test_stores_calculator_totals(self, purchase):
        purchase.refresh_from_db()

        assert purchase.vat_amount == Decimal('4305.00')
        assert purchase.total_cost_incl_vat == Decimal('26305.00')
        assert purchase.additional_costs == Decimal('500.00')
        assert purchase.total_cost_excl_vat == Decimal('22000.00')

    def test_margin_purchase_only_taxes_costs(self, margin_purchase):
        assert margin_purchase.vat_amount == Decimal('21.00')
        assert margin_purchase.total_cost_incl_vat == Decimal('8121.00')

    def test_defaults(self, passat):
        purchase = PurchaseService.record_purchase(vehicle=passat, purchase_price='5000')

        assert purchase.vat_type == '21%'
        assert purchase.bpm_amount == Decimal('0.00')
        assert purchase.supplier == ''
        assert purchase.purchase_date is not None

    def test_explicit_date(self, passat):
        purchase = PurchaseService.record_purchase(
            vehicle=passat,
            purchase_price=Decimal('5000'),
            purchase_date=date(2024, 3, 15),
        )

        assert purchase.purchase_date == date(2024, 3, 15)

    def test_duplicate_rejected(self, purchase):
        with pytest.raises(DuplicatePurchaseError):
            PurchaseService.record_purchase(
                vehicle=purchase.vehicle,
                purchase_price=Decimal('1000'),
            )

        assert PurchaseRecord.objects.count() == 1

    def test_negative_amount_rejected(self, passat):
        with pytest.raises(InvalidAmountError):
            PurchaseService.record_purchase(
                vehicle=passat,
                purchase_price=Decimal('5000'),
                other_costs=Decimal('-1'),
            )

        assert not PurchaseRecord.objects.exists()

    def test_unknown_regime_rejected(self, passat):
        with pytest.raises(UnknownVatRegimeError):
            PurchaseService.record_purchase(
                vehicle=passat,
                purchase_price=Decimal('5000'),
                vat_type='6%',
            )


@pytest.mark.django_db
class TestUpdatePurchase:
    """Tests for PurchaseService.update_purchase"""

    def test_recomputes_totals(self, purchase):
        PurchaseService.update_purchase(purchase, vat_type='geen_btw')
        purchase.refresh_from_db()

        assert purchase.vat_amount == Decimal('105.00')
        assert purchase.total_cost_incl_vat == Decimal('22105.00')

    def test_recomputes_linked_sale(self, purchase):
        sale = SaleService.record_sale(
            vehicle=purchase.vehicle,
            sale_price=Decimal('30000.00'),
            vat_type='marge',
            discount=Decimal('500.00'),
            customer_name='J. de Vries',
        )
        assert sale.profit_incl_vat == Decimal('5295.00')

        PurchaseService.update_purchase(purchase, transport_cost=Decimal('1200.00'))
        sale.refresh_from_db()

        # 1000 extra transport plus 210 VAT
        assert sale.profit_incl_vat == Decimal('4085.00')
        assert sale.profit_excl_vat == Decimal('10000.00')

    def test_unknown_field_rejected(self, purchase):
        with pytest.raises(PurchasesServiceError):
            PurchaseService.update_purchase(purchase, vat_amount=Decimal('0'))


@pytest.mark.django_db
class TestDeleteAndLookup:

    def test_delete(self, purchase):
        PurchaseService.delete_purchase(purchase)

        assert not PurchaseRecord.objects.exists()

    def test_delete_in_use_rejected(self, purchase):
        SaleService.record_sale(
            vehicle=purchase.vehicle,
            sale_price=Decimal('25000.00'),
            customer_name='A. Smit',
        )

        with pytest.raises(PurchaseInUseError):
            PurchaseService.delete_purchase(purchase)

        assert PurchaseRecord.objects.filter(pk=purchase.pk).exists()

    def test_get_for_vehicle(self, purchase):
        assert PurchaseService.get_for_vehicle(purchase.vehicle_id) == purchase

    def test_get_for_vehicle_without_purchase(self, clio):
        with pytest.raises(PurchaseNotFoundError):
            PurchaseService.get_for_vehicle(clio.id)

    def test_totals_for_matches_stored(self, purchase):
        totals = PurchaseService.totals_for(purchase)

        assert totals.vat_amount == purchase.vat_amount
        assert totals.total_cost_incl_vat == purchase.total_cost_incl_vat
