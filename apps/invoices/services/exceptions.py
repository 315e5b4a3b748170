"""
Domain exceptions for the invoices services.

Exception Hierarchy:
    InvoiceServiceError (base)
    └── AmbiguousDocumentError
"""


class InvoiceServiceError(Exception):
    """Base exception for invoice service errors."""
    pass


class AmbiguousDocumentError(InvoiceServiceError):
    """Raised when an invoice gets both or neither of a purchase and a sale."""
    pass
