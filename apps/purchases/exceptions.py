"""
Domain exceptions for purchases app.

Exception Hierarchy:
    PurchasesServiceError (base)
    ├── DuplicatePurchaseError
    ├── PurchaseNotFoundError
    └── PurchaseInUseError
"""


class PurchasesServiceError(Exception):
    """Base exception for purchase service errors."""
    pass


class DuplicatePurchaseError(PurchasesServiceError):
    """Raised when a vehicle already has a purchase record."""
    pass


class PurchaseNotFoundError(PurchasesServiceError):
    """Raised when a purchase record is not found."""
    pass


class PurchaseInUseError(PurchasesServiceError):
    """Raised when deleting a purchase that a sale still references."""
    pass
