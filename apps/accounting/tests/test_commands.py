import pytest
from decimal import Decimal
from io import StringIO
from django.core.management import call_command
from apps.purchases.models import PurchaseRecord
from apps.sales.models import SaleRecord


@pytest.mark.django_db
class TestRecalculateTotals:
    """Tests for the recalculate_totals management command."""

    def test_nothing_to_do(self, margin_sale):
        out = StringIO()
        call_command('recalculate_totals', stdout=out)

        assert 'Updated 0 purchase(s) and 0 sale(s).' in out.getvalue()

    def test_repairs_stored_purchase_totals(self, standard_purchase):
        PurchaseRecord.objects.filter(pk=standard_purchase.pk).update(
            vat_amount=Decimal('0.00'),
            total_cost_incl_vat=Decimal('1.00'),
        )

        out = StringIO()
        call_command('recalculate_totals', stdout=out)

        standard_purchase.refresh_from_db()
        assert standard_purchase.vat_amount == Decimal('4305.00')
        assert standard_purchase.total_cost_incl_vat == Decimal('26305.00')
        assert f'Purchase {standard_purchase.id}' in out.getvalue()
        assert 'Updated 1 purchase(s) and 0 sale(s).' in out.getvalue()

    def test_repairs_stored_sale_profit(self, margin_sale):
        SaleRecord.objects.filter(pk=margin_sale.pk).update(profit_incl_vat=Decimal('0.00'))

        out = StringIO()
        call_command('recalculate_totals', stdout=out)

        margin_sale.refresh_from_db()
        assert margin_sale.profit_incl_vat == Decimal('5295.00')
        assert 'Updated 0 purchase(s) and 1 sale(s).' in out.getvalue()

    def test_dry_run_changes_nothing(self, standard_purchase):
        PurchaseRecord.objects.filter(pk=standard_purchase.pk).update(vat_amount=Decimal('0.00'))

        out = StringIO()
        call_command('recalculate_totals', '--dry-run', stdout=out)

        standard_purchase.refresh_from_db()
        assert standard_purchase.vat_amount == Decimal('0.00')
        assert '1 purchase(s) and 0 sale(s) would change' in out.getvalue()

    def test_unfixable_sale_is_reported(self, unlinked_sale):
        SaleRecord.objects.filter(pk=unlinked_sale.pk).update(discount=Decimal('99999.00'))

        out = StringIO()
        err = StringIO()
        call_command('recalculate_totals', stdout=out, stderr=err)

        assert f'Sale {unlinked_sale.id}' in err.getvalue()
        assert '1 sale(s) could not be recalculated.' in out.getvalue()
