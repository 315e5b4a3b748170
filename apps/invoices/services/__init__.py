"""Services for invoice documents."""

from .exceptions import (
    InvoiceServiceError,
    AmbiguousDocumentError,
)
from .company import CompanyInfo
from .invoice_assembler import (
    InvoiceDocument,
    InvoiceParty,
    VehicleBlock,
    LineItem,
    build_invoice_document,
)

__all__ = [
    # Exceptions
    'InvoiceServiceError',
    'AmbiguousDocumentError',
    # Company
    'CompanyInfo',
    # Assembler
    'InvoiceDocument',
    'InvoiceParty',
    'VehicleBlock',
    'LineItem',
    'build_invoice_document',
]
