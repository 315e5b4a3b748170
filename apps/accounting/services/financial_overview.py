"""
Financial overview of the dealership for a year or a month.

Read-only aggregation over stored purchase and sale records. Amounts are
the totals persisted by the purchase and sale services, so the overview
matches the individual records exactly.
"""

from decimal import Decimal
from typing import Optional

from django.db.models import Count, DecimalField, F, Q, Sum
from django.db.models.functions import Coalesce

from apps.purchases.models import PurchaseRecord
from apps.sales.models import SaleRecord
from .money import to_money

MONEY_FIELD = DecimalField(max_digits=14, decimal_places=2)


def _period_filter(date_field: str, year: Optional[int], month: Optional[int]) -> Q:
    lookups = {}
    if year is not None:
        lookups[f'{date_field}__year'] = year
    if month is not None:
        lookups[f'{date_field}__month'] = month
    return Q(**lookups)


def _total(expression):
    return Coalesce(Sum(expression, output_field=MONEY_FIELD), Decimal('0.00'), output_field=MONEY_FIELD)


def financial_overview(year: Optional[int] = None, month: Optional[int] = None) -> dict:
    """
    Aggregate revenue, costs, profit and VAT for a period.

    Args:
        year: Calendar year, or None for all years.
        month: Month 1-12, or None for the whole year. A month without a
            year matches that month in every year.

    Returns:
        dict:
            - total_revenue (Decimal): Sum of net sale prices (excl. VAT).
            - total_purchase_costs (Decimal): Sum of purchase price, BPM
              and additional costs (excl. VAT).
            - total_profit (Decimal): Sum of ``profit_incl_vat`` over sales
              whose profit is known.
            - vat_collected (Decimal): Sum of VAT on sales.
            - vehicles_sold (int): Number of sales.
            - vehicles_purchased (int): Number of purchases.
            - sales_without_profit (int): Sales without a purchase
              reference, left out of ``total_profit``.
    """
    sales = SaleRecord.objects.filter(_period_filter('sale_date', year, month))
    purchases = PurchaseRecord.objects.filter(_period_filter('purchase_date', year, month))

    sale_totals = sales.aggregate(
        total_revenue=_total('sale_price'),
        total_profit=_total('profit_incl_vat'),
        vat_collected=_total('vat_amount'),
        vehicles_sold=Count('id'),
        sales_without_profit=Count('id', filter=Q(profit_incl_vat__isnull=True)),
    )
    purchase_totals = purchases.aggregate(
        total_purchase_costs=_total(
            F('purchase_price')
            + F('bpm_amount')
            + F('transport_cost')
            + F('maintenance_cost')
            + F('cleaning_cost')
            + F('guarantee_cost')
            + F('other_costs')
        ),
        vehicles_purchased=Count('id'),
    )

    return {
        'year': year,
        'month': month,
        'total_revenue': to_money(sale_totals['total_revenue']),
        'total_purchase_costs': to_money(purchase_totals['total_purchase_costs']),
        'total_profit': to_money(sale_totals['total_profit']),
        'vat_collected': to_money(sale_totals['vat_collected']),
        'vehicles_sold': sale_totals['vehicles_sold'],
        'vehicles_purchased': purchase_totals['vehicles_purchased'],
        'sales_without_profit': sale_totals['sales_without_profit'],
    }
