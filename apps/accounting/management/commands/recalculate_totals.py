"""
Management command to recompute stored purchase and sale totals.

Runs every purchase and sale through the VAT calculator again and rewrites
derived amounts that differ from the stored ones, e.g. after a rounding
fix or after importing records with hand-entered totals.

Usage:
    python manage.py recalculate_totals
    python manage.py recalculate_totals --dry-run
"""

import logging
from django.core.management.base import BaseCommand
from django.db import transaction
from apps.purchases.models import PurchaseRecord
from apps.purchases.services import PurchaseService
from apps.sales.models import SaleRecord
from apps.sales.services import SaleService
from apps.sales.exceptions import NegativeFinalPriceError
from apps.accounting.services import AccountingServiceError

logger = logging.getLogger(__name__)

PURCHASE_FIELDS = ('vat_amount', 'total_cost_incl_vat')
SALE_FIELDS = (
    'vat_amount',
    'sale_price_incl_vat',
    'final_price',
    'profit_excl_vat',
    'profit_incl_vat',
)


def _differences(record, totals, fields):
    return {
        field: (getattr(record, field), getattr(totals, field))
        for field in fields
        if getattr(record, field) != getattr(totals, field)
    }


class Command(BaseCommand):
    help = 'Recompute VAT, totals and profit of all purchases and sales'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        with transaction.atomic():
            purchases_changed = self._recalculate_purchases(dry_run)
            sales_changed, sales_failed = self._recalculate_sales(dry_run)

        if dry_run:
            self.stdout.write(
                self.style.WARNING(
                    f'\n--dry-run mode: {purchases_changed} purchase(s) and '
                    f'{sales_changed} sale(s) would change. No changes made.'
                )
            )
            return

        self.stdout.write(
            self.style.SUCCESS(
                f'\nUpdated {purchases_changed} purchase(s) and {sales_changed} sale(s).'
            )
        )
        if sales_failed:
            self.stdout.write(
                self.style.ERROR(f'{sales_failed} sale(s) could not be recalculated.')
            )

    def _recalculate_purchases(self, dry_run):
        changed = 0
        for purchase in PurchaseRecord.objects.select_for_update().select_related('vehicle'):
            totals = PurchaseService.totals_for(purchase)
            differences = _differences(purchase, totals, PURCHASE_FIELDS)
            if not differences:
                continue

            changed += 1
            self._report('Purchase', purchase, differences)
            if not dry_run:
                PurchaseService.apply_totals(purchase, totals)
                purchase.save()
                logger.info("Purchase %s recalculated: %s", purchase.id, differences)
        return changed

    def _recalculate_sales(self, dry_run):
        changed = 0
        failed = 0
        sales = SaleRecord.objects.select_for_update().select_related('vehicle', 'purchase')
        for sale in sales:
            try:
                totals = SaleService.compute_totals(sale)
            except (NegativeFinalPriceError, AccountingServiceError) as e:
                failed += 1
                self.stderr.write(f'  ! Sale {sale.id}: {e}')
                continue

            differences = _differences(sale, totals, SALE_FIELDS)
            if not differences:
                continue

            changed += 1
            self._report('Sale', sale, differences)
            if not dry_run:
                SaleService.apply_totals(sale, totals)
                sale.save()
                logger.info("Sale %s recalculated: %s", sale.id, differences)
        return changed, failed

    def _report(self, label, record, differences):
        changes = ', '.join(
            f'{field} {old} -> {new}' for field, (old, new) in differences.items()
        )
        self.stdout.write(f'  - {label} {record.id} ({record.vehicle}): {changes}')
