"""
Domain exceptions for sales app.

Exception Hierarchy:
    SalesServiceError (base)
    ├── DuplicateSaleError
    ├── SaleNotFoundError
    ├── NegativeFinalPriceError
    └── PurchaseMismatchError
"""


class SalesServiceError(Exception):
    """Base exception for sale service errors."""
    pass


class DuplicateSaleError(SalesServiceError):
    """Raised when a vehicle already has a sale record."""
    pass


class SaleNotFoundError(SalesServiceError):
    """Raised when a sale record is not found."""
    pass


class NegativeFinalPriceError(SalesServiceError):
    """Raised when the discount exceeds the gross sale price."""
    pass


class PurchaseMismatchError(SalesServiceError):
    """Raised when the linked purchase belongs to another vehicle."""
    pass
