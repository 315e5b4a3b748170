"""
Serializers for accounting app.

Input Serializers:
    PurchasePreviewInputSerializer - Raw purchase fields for a preview
    SalePreviewInputSerializer - Raw sale fields plus a purchase reference
    OverviewQuerySerializer - Period of the financial overview

Response Serializers:
    PurchaseTotalsSerializer - Calculator output for a purchase
    SaleTotalsSerializer - Calculator output for a sale
    FinancialOverviewSerializer - Aggregated figures for a period
"""

from decimal import Decimal
from rest_framework import serializers
from .services import VatRegime


def money_field(**kwargs):
    kwargs.setdefault('min_value', Decimal('0'))
    return serializers.DecimalField(max_digits=12, decimal_places=2, **kwargs)


def optional_cost_field():
    return money_field(default=Decimal('0.00'))


# =============================================================================
# Input Serializers
# =============================================================================

class PurchasePreviewInputSerializer(serializers.Serializer):
    """Raw fields of a purchase, as entered on the purchase form."""

    purchase_price = money_field()
    vat_type = serializers.ChoiceField(choices=VatRegime.choices, default=VatRegime.STANDARD_21)
    bpm_amount = optional_cost_field()
    transport_cost = optional_cost_field()
    maintenance_cost = optional_cost_field()
    cleaning_cost = optional_cost_field()
    guarantee_cost = optional_cost_field()
    other_costs = optional_cost_field()


class SalePreviewInputSerializer(serializers.Serializer):
    """
    Raw fields of a sale plus an optional purchase reference.

    The reference is either ``purchase`` (ID of a stored purchase) or the
    inline pair ``purchase_price`` + ``purchase_total_cost_incl_vat``.
    Without ``vat_type`` the regime of the stored purchase is used, else 21%.
    """

    sale_price = money_field()
    vat_type = serializers.ChoiceField(choices=VatRegime.choices, required=False)
    discount = optional_cost_field()
    purchase = serializers.UUIDField(required=False, allow_null=True)
    purchase_price = money_field(required=False, allow_null=True)
    purchase_total_cost_incl_vat = money_field(required=False, allow_null=True)

    def validate(self, attrs):
        inline = [
            attrs.get('purchase_price'),
            attrs.get('purchase_total_cost_incl_vat'),
        ]
        has_inline = any(value is not None for value in inline)

        if has_inline and attrs.get('purchase'):
            raise serializers.ValidationError(
                'Send either a purchase ID or inline purchase figures, not both'
            )
        if has_inline and not all(value is not None for value in inline):
            raise serializers.ValidationError(
                'Inline purchase reference needs purchase_price and '
                'purchase_total_cost_incl_vat'
            )
        return attrs


class OverviewQuerySerializer(serializers.Serializer):
    """
    Validate period query parameters.

    Query Parameters:
        year (int): Calendar year (defaults to all years)
        month (int): Month 1-12 (requires year)
    """

    year = serializers.IntegerField(required=False, min_value=1900, max_value=2100)
    month = serializers.IntegerField(required=False, min_value=1, max_value=12)

    def validate(self, attrs):
        if 'month' in attrs and 'year' not in attrs:
            raise serializers.ValidationError({
                'month': 'Month filter requires a year'
            })
        return attrs


# =============================================================================
# Response Serializers
# =============================================================================

class PurchaseTotalsSerializer(serializers.Serializer):
    purchase_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    vat_type = serializers.CharField()
    bpm_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    transport_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    maintenance_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    cleaning_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    guarantee_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    other_costs = serializers.DecimalField(max_digits=12, decimal_places=2)
    additional_costs = serializers.DecimalField(max_digits=12, decimal_places=2)
    vat_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_cost_incl_vat = serializers.DecimalField(max_digits=12, decimal_places=2)


class SaleTotalsSerializer(serializers.Serializer):
    sale_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    vat_type = serializers.CharField()
    vat_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    sale_price_incl_vat = serializers.DecimalField(max_digits=12, decimal_places=2)
    discount = serializers.DecimalField(max_digits=12, decimal_places=2)
    final_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    profit_excl_vat = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    profit_incl_vat = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    profit_available = serializers.BooleanField()
    vat_calculated = serializers.BooleanField()


class FinancialOverviewSerializer(serializers.Serializer):
    year = serializers.IntegerField(allow_null=True)
    month = serializers.IntegerField(allow_null=True)
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_purchase_costs = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    vat_collected = serializers.DecimalField(max_digits=14, decimal_places=2)
    vehicles_sold = serializers.IntegerField()
    vehicles_purchased = serializers.IntegerField()
    sales_without_profit = serializers.IntegerField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
