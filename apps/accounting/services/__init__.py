"""
Services for accounting business logic.

``financial_overview`` reads the purchase and sale models, which import
``VatRegime`` from here; import it from its own module.
"""

from .exceptions import (
    AccountingServiceError,
    InvalidAmountError,
    UnknownVatRegimeError,
    MissingPurchaseReferenceError,
)
from .money import (
    CENT,
    ZERO,
    to_decimal,
    to_money,
    format_currency,
)
from .vat_calculator import (
    VAT_RATE,
    VatRegime,
    PurchaseTotals,
    PurchaseReference,
    SaleTotals,
    compute_purchase_totals,
    compute_sale_totals,
)

__all__ = [
    # Exceptions
    'AccountingServiceError',
    'InvalidAmountError',
    'UnknownVatRegimeError',
    'MissingPurchaseReferenceError',
    # Money
    'CENT',
    'ZERO',
    'to_decimal',
    'to_money',
    'format_currency',
    # VAT Calculator
    'VAT_RATE',
    'VatRegime',
    'PurchaseTotals',
    'PurchaseReference',
    'SaleTotals',
    'compute_purchase_totals',
    'compute_sale_totals',
]
