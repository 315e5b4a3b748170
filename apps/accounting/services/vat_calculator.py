"""
VAT & Cost Calculator
=====================

Pure functions that turn the raw monetary fields of a purchase or a sale
into VAT amounts, totals and profit, following Dutch automotive rules:

- ``21%``: standard VAT on the net price.
- ``marge``: margin scheme. No VAT on the purchase price; at sale time VAT
  is due only on the dealer margin (sale price minus purchase price), and
  never below zero.
- ``geen_btw``: no VAT (private or export deals).

Additional acquisition costs (transport, maintenance, cleaning, warranty,
other) are third-party invoices and always carry 21% VAT, whatever the
regime of the vehicle itself. BPM registration tax carries no VAT.

The same functions back the live preview endpoints and the purchase/sale
services that persist the figures, so a previewed total is always the
saved total.

Example:
    Purchase followed by a margin-scheme sale::

        from decimal import Decimal
        from apps.accounting.services import (
            VatRegime, compute_purchase_totals, compute_sale_totals,
        )

        purchase = compute_purchase_totals(
            Decimal('20000'), VatRegime.STANDARD_21,
            bpm_amount=Decimal('1500'),
            transport_cost=Decimal('200'),
            maintenance_cost=Decimal('300'),
        )
        # purchase.vat_amount == Decimal('4305.00')
        # purchase.total_cost_incl_vat == Decimal('26305.00')

        sale = compute_sale_totals(
            Decimal('30000'), VatRegime.MARGIN,
            discount=Decimal('500'),
            purchase_totals=purchase,
        )
        # sale.vat_amount == Decimal('2100.00')
        # sale.profit_incl_vat == Decimal('5295.00')
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from django.db import models

from .exceptions import MissingPurchaseReferenceError, UnknownVatRegimeError
from .money import ZERO, to_decimal, to_money

logger = logging.getLogger(__name__)

VAT_RATE = Decimal('0.21')


class VatRegime(models.TextChoices):
    STANDARD_21 = '21%', '21% BTW'
    MARGIN = 'marge', 'Marge regeling'
    EXEMPT = 'geen_btw', 'Geen BTW'

    @classmethod
    def parse(cls, value):
        """
        Return the regime for a member or a wire token.

        Raises:
            UnknownVatRegimeError: For any other value. Unknown tokens are
                never mapped to a default regime.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ', '.join(repr(v) for v in cls.values)
            raise UnknownVatRegimeError(
                f"Unknown VAT regime: {value!r}. Valid options: {valid}"
            )


@dataclass(frozen=True)
class PurchaseTotals:
    """Inputs of a purchase plus the derived VAT amount and grand total."""

    purchase_price: Decimal
    vat_type: VatRegime
    bpm_amount: Decimal
    transport_cost: Decimal
    maintenance_cost: Decimal
    cleaning_cost: Decimal
    guarantee_cost: Decimal
    other_costs: Decimal
    vat_amount: Decimal
    total_cost_incl_vat: Decimal

    @property
    def additional_costs(self) -> Decimal:
        return (
            self.transport_cost
            + self.maintenance_cost
            + self.cleaning_cost
            + self.guarantee_cost
            + self.other_costs
        )


@dataclass(frozen=True)
class PurchaseReference:
    """
    A purchase known only by its net price and grand total.

    Enough for a sale computation when the full purchase is not at hand,
    e.g. a preview that sends the two figures inline.
    """

    purchase_price: Decimal
    total_cost_incl_vat: Decimal

    @classmethod
    def parse(cls, purchase_price, total_cost_incl_vat):
        return cls(
            purchase_price=to_money(to_decimal(purchase_price, 'purchase_price')),
            total_cost_incl_vat=to_money(
                to_decimal(total_cost_incl_vat, 'purchase_total_cost_incl_vat')
            ),
        )


@dataclass(frozen=True)
class SaleTotals:
    """
    Derived figures of a sale.

    ``profit_excl_vat`` and ``profit_incl_vat`` are ``None`` when the sale
    was computed without a purchase reference: "no data" is not zero profit.
    ``vat_calculated`` is False only for a margin-scheme sale without a
    purchase reference, where the margin VAT cannot be known.
    """

    sale_price: Decimal
    vat_type: VatRegime
    vat_amount: Decimal
    sale_price_incl_vat: Decimal
    discount: Decimal
    final_price: Decimal
    profit_excl_vat: Optional[Decimal] = None
    profit_incl_vat: Optional[Decimal] = None
    vat_calculated: bool = True

    @property
    def profit_available(self) -> bool:
        return self.profit_excl_vat is not None and self.profit_incl_vat is not None

    def require_profit(self):
        """
        Return ``(profit_excl_vat, profit_incl_vat)``.

        Raises:
            MissingPurchaseReferenceError: If the sale had no purchase.
        """
        if not self.profit_available:
            raise MissingPurchaseReferenceError(
                "Profit unavailable: sale has no linked purchase"
            )
        return self.profit_excl_vat, self.profit_incl_vat


def compute_purchase_totals(
    purchase_price,
    vat_type,
    bpm_amount=0,
    transport_cost=0,
    maintenance_cost=0,
    cleaning_cost=0,
    guarantee_cost=0,
    other_costs=0,
) -> PurchaseTotals:
    """
    Compute the VAT amount and grand total of a vehicle purchase.

    Formula::

        price_vat       = price * 0.21 if regime is '21%' else 0
        additional      = transport + maintenance + cleaning + guarantee + other
        additional_vat  = additional * 0.21                (any regime)
        vat_amount      = price_vat + additional_vat
        total           = price + price_vat + bpm + additional + additional_vat

    Args:
        purchase_price: Net purchase price (excl. VAT), >= 0.
        vat_type: ``VatRegime`` member or token ('21%', 'marge', 'geen_btw').
        bpm_amount: BPM registration tax, >= 0. Not subject to VAT.
        transport_cost, maintenance_cost, cleaning_cost, guarantee_cost,
        other_costs: Itemized acquisition costs excl. VAT, each >= 0.

    Returns:
        PurchaseTotals: Inputs rounded to cents, plus ``vat_amount`` and
        ``total_cost_incl_vat`` computed exactly and rounded half-up once.

    Raises:
        InvalidAmountError: If any amount is negative or not a finite number.
        UnknownVatRegimeError: If ``vat_type`` is not a known regime.
    """
    regime = VatRegime.parse(vat_type)
    price = to_decimal(purchase_price, 'purchase_price')
    bpm = to_decimal(bpm_amount, 'bpm_amount')
    costs = {
        'transport_cost': to_decimal(transport_cost, 'transport_cost'),
        'maintenance_cost': to_decimal(maintenance_cost, 'maintenance_cost'),
        'cleaning_cost': to_decimal(cleaning_cost, 'cleaning_cost'),
        'guarantee_cost': to_decimal(guarantee_cost, 'guarantee_cost'),
        'other_costs': to_decimal(other_costs, 'other_costs'),
    }

    price_vat = price * VAT_RATE if regime == VatRegime.STANDARD_21 else ZERO

    additional_costs = sum(costs.values(), ZERO)
    additional_costs_vat = additional_costs * VAT_RATE

    total = price + price_vat + bpm + additional_costs + additional_costs_vat

    return PurchaseTotals(
        purchase_price=to_money(price),
        vat_type=regime,
        bpm_amount=to_money(bpm),
        vat_amount=to_money(price_vat + additional_costs_vat),
        total_cost_incl_vat=to_money(total),
        **{name: to_money(amount) for name, amount in costs.items()},
    )


def compute_sale_totals(
    sale_price,
    vat_type,
    discount=0,
    purchase_totals: Optional[Union[PurchaseTotals, PurchaseReference]] = None,
) -> SaleTotals:
    """
    Compute VAT, gross and final price, and profit of a vehicle sale.

    VAT by regime:
        - '21%': ``price * 0.21``
        - 'marge': ``max(0, (price - purchase_price) * 0.21)``; zero and
          ``vat_calculated=False`` when no purchase reference is given
        - 'geen_btw': zero

    Then ``gross = price + vat`` and ``final = gross - discount``. The final
    price is not clamped; a discount above gross yields a negative final
    price which callers must reject themselves.

    Profit (only with a purchase reference)::

        profit_excl_vat = price - purchase.purchase_price
        profit_incl_vat = final - purchase.total_cost_incl_vat

    Both may be negative.

    Args:
        sale_price: Net sale price (excl. VAT), >= 0.
        vat_type: ``VatRegime`` member or token.
        discount: Discount on the gross price, >= 0.
        purchase_totals: Output of ``compute_purchase_totals`` for the
            linked purchase, a ``PurchaseReference``, or None.

    Returns:
        SaleTotals: All derived fields rounded half-up to cents; profit
        fields are ``None`` without a purchase reference.

    Raises:
        InvalidAmountError: If an amount is negative or not a finite number.
        UnknownVatRegimeError: If ``vat_type`` is not a known regime.
    """
    regime = VatRegime.parse(vat_type)
    price = to_decimal(sale_price, 'sale_price')
    discount = to_decimal(discount, 'discount')

    vat_calculated = True
    if regime == VatRegime.STANDARD_21:
        vat = price * VAT_RATE
    elif regime == VatRegime.MARGIN:
        if purchase_totals is not None:
            margin = price - purchase_totals.purchase_price
            vat = max(ZERO, margin * VAT_RATE)
        else:
            logger.warning(
                "Margin-scheme sale of %s computed without a purchase "
                "reference; margin VAT and profit are unavailable", price
            )
            vat = ZERO
            vat_calculated = False
    else:
        vat = ZERO

    gross = price + vat
    final = gross - discount

    profit_excl_vat = None
    profit_incl_vat = None
    if purchase_totals is not None:
        profit_excl_vat = to_money(price - purchase_totals.purchase_price)
        profit_incl_vat = to_money(final - purchase_totals.total_cost_incl_vat)

    return SaleTotals(
        sale_price=to_money(price),
        vat_type=regime,
        vat_amount=to_money(vat),
        sale_price_incl_vat=to_money(gross),
        discount=to_money(discount),
        final_price=to_money(final),
        profit_excl_vat=profit_excl_vat,
        profit_incl_vat=profit_incl_vat,
        vat_calculated=vat_calculated,
    )
