"""
Domain exceptions for the accounting services.

These exceptions are raised by the VAT/cost calculator and the money
helpers. They carry no HTTP semantics; views catch them and turn them into
400 responses.

Exception Hierarchy:
    AccountingServiceError (base)
    ├── InvalidAmountError
    ├── UnknownVatRegimeError
    └── MissingPurchaseReferenceError
"""


class AccountingServiceError(Exception):
    """Base exception for all accounting service errors."""
    pass


class InvalidAmountError(AccountingServiceError):
    """
    Raised when a monetary input is negative, not finite, or not a number.

    Example:
        raise InvalidAmountError('transport_cost', 'Amount cannot be negative')
    """

    def __init__(self, field, message='Invalid amount'):
        self.field = field
        super().__init__(f"{field}: {message}")


class UnknownVatRegimeError(AccountingServiceError):
    """Raised when a VAT regime token is not one of '21%', 'marge', 'geen_btw'."""
    pass


class MissingPurchaseReferenceError(AccountingServiceError):
    """
    Raised when profit is requested for a sale computed without a purchase.

    The calculator itself never raises this; it reports profit as absent.
    Callers that need a number use ``SaleTotals.require_profit()``.
    """
    pass
