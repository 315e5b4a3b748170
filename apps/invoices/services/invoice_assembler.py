"""
Invoice Assembler
=================

Turns a vehicle plus its purchase *or* sale record into an immutable
``InvoiceDocument``: company block, counterparty, vehicle block, ordered
line items and subtotal / VAT / total. The document has no opinion on
layout or file format; ``to_dict()`` gives the JSON the client renders.

Totals are rebuilt from the record's stored fields, not by running the
VAT calculator again:

- Purchase: ``Inkoopprijs`` (21% VAT only under the '21%' regime), then
  ``BPM`` (no VAT) and each itemized cost (21% VAT) when non-zero.
- Sale: ``Verkoopprijs`` (21% VAT only under the '21%' regime), then
  ``Korting`` as a negative, VAT-free row when non-zero. Margin VAT is
  not a row figure: it only shows up in the document's ``vat_amount``.

``subtotal`` is the sum of line amounts, ``vat_amount`` the record's stored
VAT (or the sum of line VAT when the record has none) and ``total`` their
sum, so a document always agrees with the stored record.

Records and vehicles are read by attribute or mapping key, so model
instances, dicts and simple namespaces all work.

Example:
    Sale invoice for a stored sale::

        from apps.invoices.services import build_invoice_document

        document = build_invoice_document(sale.vehicle, sale=sale)
        document.total          # == sale.final_price
        document.to_dict()      # JSON-ready mapping
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from django.conf import settings
from django.utils import timezone

from apps.accounting.services import VAT_RATE, ZERO, VatRegime, to_decimal, to_money
from .company import CompanyInfo
from .exceptions import AmbiguousDocumentError

logger = logging.getLogger(__name__)

UNKNOWN = 'unknown'

KIND_PURCHASE = 'purchase'
KIND_SALE = 'sale'

VEHICLE_FIELDS = ('brand', 'model', 'year', 'mileage', 'fuel', 'transmission', 'color')

# (record field, line code, description)
PURCHASE_COST_LINES = (
    ('transport_cost', 'transport', 'Transportkosten'),
    ('maintenance_cost', 'maintenance', 'Onderhoudskosten'),
    ('cleaning_cost', 'cleaning', 'Schoonmaakkosten'),
    ('guarantee_cost', 'guarantee', 'Garantiekosten'),
    ('other_costs', 'other', 'Overige kosten'),
)

MARGIN_SCHEME_NOTE = 'Deze verkoop valt onder de margeregeling. BTW niet aftrekbaar.'


def _money(value) -> str:
    return f'{value:.2f}'


@dataclass(frozen=True)
class InvoiceParty:
    """Counterparty: the supplier of a purchase or the customer of a sale."""

    role: str
    name: str
    email: str = ''

    def to_dict(self):
        return {'role': self.role, 'name': self.name, 'email': self.email}


@dataclass(frozen=True)
class VehicleBlock:
    brand: str
    model: str
    year: str
    mileage: str
    fuel: str
    transmission: str
    color: str

    def to_dict(self):
        return {name: getattr(self, name) for name in VEHICLE_FIELDS}


@dataclass(frozen=True)
class LineItem:
    code: str
    description: str
    amount: Decimal
    vat_rate: Decimal
    vat_amount: Decimal

    def to_dict(self):
        return {
            'code': self.code,
            'description': self.description,
            'amount': _money(self.amount),
            'vat_rate': _money(self.vat_rate * 100),
            'vat_amount': _money(self.vat_amount),
        }


@dataclass(frozen=True)
class InvoiceDocument:
    kind: str
    invoice_number: str
    date: date
    vat_type: VatRegime
    vat_label: str
    company: CompanyInfo
    party: InvoiceParty
    vehicle: VehicleBlock
    line_items: Tuple[LineItem, ...]
    subtotal: Decimal
    vat_amount: Decimal
    total: Decimal
    notes: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self):
        return {
            'kind': self.kind,
            'invoice_number': self.invoice_number,
            'date': self.date.isoformat(),
            'vat_type': self.vat_type.value,
            'vat_label': self.vat_label,
            'company': self.company.to_dict(),
            'party': self.party.to_dict(),
            'vehicle': self.vehicle.to_dict(),
            'line_items': [item.to_dict() for item in self.line_items],
            'subtotal': _money(self.subtotal),
            'vat_amount': _money(self.vat_amount),
            'total': _money(self.total),
            'notes': list(self.notes),
        }


def _read(source, name, default=None):
    if isinstance(source, dict):
        return source.get(name, default)
    return getattr(source, name, default)


def _vehicle_block(vehicle) -> VehicleBlock:
    values = {}
    missing = []
    for name in VEHICLE_FIELDS:
        value = _read(vehicle, name)
        if value is None or value == '':
            missing.append(name)
            values[name] = UNKNOWN
        else:
            values[name] = str(value)

    if missing:
        logger.warning(
            "Invoice vehicle %s is missing %s; shown as '%s'",
            _read(vehicle, 'id', UNKNOWN), ', '.join(missing), UNKNOWN
        )
    return VehicleBlock(**values)


def _line(code, description, amount, vat_rate) -> LineItem:
    return LineItem(
        code=code,
        description=description,
        amount=amount,
        vat_rate=vat_rate,
        vat_amount=to_money(amount * vat_rate) if vat_rate else ZERO,
    )


def _invoice_number(record, prefix) -> str:
    number = _read(record, 'invoice_number')
    if number:
        return str(number)
    record_id = _read(record, 'id')
    if record_id is None:
        return f'{prefix}-{UNKNOWN.upper()}'
    return f'{prefix}-{str(record_id)[:8].upper()}'


def _amount(record, name, field_name=None) -> Decimal:
    return to_money(to_decimal(_read(record, name), field_name or name))


def _purchase_lines(purchase, regime):
    price_rate = VAT_RATE if regime == VatRegime.STANDARD_21 else ZERO
    lines = [_line('purchase_price', 'Inkoopprijs', _amount(purchase, 'purchase_price'), price_rate)]

    bpm = _amount(purchase, 'bpm_amount')
    if bpm:
        lines.append(_line('bpm', 'BPM', bpm, ZERO))

    for name, code, description in PURCHASE_COST_LINES:
        cost = _amount(purchase, name)
        if cost:
            lines.append(_line(code, description, cost, VAT_RATE))
    return lines


def _sale_lines(sale, regime):
    price = _amount(sale, 'sale_price')
    rate = VAT_RATE if regime == VatRegime.STANDARD_21 else ZERO
    lines = [_line('sale_price', 'Verkoopprijs', price, rate)]

    discount = _amount(sale, 'discount')
    if discount:
        lines.append(_line('discount', 'Korting', -discount, ZERO))
    return lines


def build_invoice_document(
    vehicle,
    purchase=None,
    sale=None,
    company: Optional[CompanyInfo] = None,
) -> InvoiceDocument:
    """
    Assemble the invoice of a purchase or a sale.

    Args:
        vehicle: Vehicle (model instance or mapping). Missing display
            fields are shown as ``"unknown"``.
        purchase: Purchase record, for a purchase invoice.
        sale: Sale record, for a sale invoice.
        company: Dealer identity; defaults to ``CompanyInfo.from_settings()``.

    Returns:
        InvoiceDocument: Immutable document description.

    Raises:
        AmbiguousDocumentError: If both or neither of ``purchase`` and
            ``sale`` are given.
        UnknownVatRegimeError: If the record's VAT regime is unknown.
        InvalidAmountError: If a stored amount is negative or not a number.
    """
    if (purchase is None) == (sale is None):
        raise AmbiguousDocumentError(
            "An invoice needs exactly one of a purchase or a sale record"
        )

    company = company or CompanyInfo.from_settings()
    record = purchase if purchase is not None else sale
    regime = VatRegime.parse(_read(record, 'vat_type'))
    notes = []

    if purchase is not None:
        kind = KIND_PURCHASE
        invoice_number = _invoice_number(purchase, 'INK')
        issued = _read(purchase, 'purchase_date')
        party = InvoiceParty(role='supplier', name=_read(purchase, 'supplier') or UNKNOWN)
        lines = _purchase_lines(purchase, regime)
    else:
        kind = KIND_SALE
        invoice_number = _invoice_number(sale, 'VRK')
        issued = _read(sale, 'sale_date')
        party = InvoiceParty(
            role='customer',
            name=_read(sale, 'customer_name') or UNKNOWN,
            email=_read(sale, 'customer_email') or '',
        )
        lines = _sale_lines(sale, regime)

    if regime == VatRegime.MARGIN:
        notes.append(MARGIN_SCHEME_NOTE)
    if kind == KIND_SALE:
        term_days = getattr(settings, 'INVOICE_PAYMENT_TERM_DAYS', 7)
        notes.append(f'Betaaltermijn: {term_days} dagen')
        notes.append(f'IBAN: {company.iban} t.n.v. {company.name}')
        warranty = _read(sale, 'warranty_months')
        if warranty:
            notes.append(f'Garantie: {warranty} maanden')

    subtotal = sum((line.amount for line in lines), ZERO)
    stored_vat = _read(record, 'vat_amount')
    if stored_vat is None:
        vat_amount = sum((line.vat_amount for line in lines), ZERO)
    else:
        vat_amount = to_money(to_decimal(stored_vat, 'vat_amount'))

    return InvoiceDocument(
        kind=kind,
        invoice_number=invoice_number,
        date=issued or timezone.localdate(),
        vat_type=regime,
        vat_label=regime.label,
        company=company,
        party=party,
        vehicle=_vehicle_block(vehicle),
        line_items=tuple(lines),
        subtotal=subtotal,
        vat_amount=vat_amount,
        total=subtotal + vat_amount,
        notes=tuple(notes),
    )
