import pytest
from datetime import date
from decimal import Decimal
from django.utils import timezone
from apps.accounting.services import UnknownVatRegimeError, VatRegime, to_money
from apps.invoices.services import AmbiguousDocumentError, build_invoice_document
from apps.invoices.services.invoice_assembler import MARGIN_SCHEME_NOTE, UNKNOWN


class TestDocumentKind:

    def test_needs_a_record(self, vehicle_info, company):
        with pytest.raises(AmbiguousDocumentError):
            build_invoice_document(vehicle_info, company=company)

    def test_rejects_both_records(self, vehicle_info, purchase_info, sale_info, company):
        with pytest.raises(AmbiguousDocumentError):
            build_invoice_document(
                vehicle_info, purchase=purchase_info, sale=sale_info, company=company
            )

    def test_unknown_regime(self, vehicle_info, purchase_info, company):
        purchase_info['vat_type'] = 'hoog'

        with pytest.raises(UnknownVatRegimeError):
            build_invoice_document(vehicle_info, purchase=purchase_info, company=company)


class TestPurchaseInvoice:

    def test_lines(self, vehicle_info, purchase_info, company):
        document = build_invoice_document(vehicle_info, purchase=purchase_info, company=company)

        assert [line.code for line in document.line_items] == [
            'purchase_price', 'bpm', 'transport', 'maintenance',
        ]
        price, bpm, transport, maintenance = document.line_items
        assert price.description == 'Inkoopprijs'
        assert price.vat_amount == Decimal('4200.00')
        assert bpm.vat_rate == Decimal('0')
        assert bpm.vat_amount == Decimal('0.00')
        assert transport.vat_amount == Decimal('42.00')
        assert maintenance.vat_amount == Decimal('63.00')

    def test_totals_match_stored_purchase(self, vehicle_info, purchase_info, company):
        document = build_invoice_document(vehicle_info, purchase=purchase_info, company=company)

        assert document.subtotal == Decimal('22000.00')
        assert document.vat_amount == Decimal('4305.00')
        assert document.total == Decimal('26305.00')

    def test_margin_purchase_price_has_no_vat(self, vehicle_info, purchase_info, company):
        purchase_info.update(vat_type='marge', vat_amount=Decimal('105.00'))
        document = build_invoice_document(vehicle_info, purchase=purchase_info, company=company)

        assert document.line_items[0].vat_rate == Decimal('0')
        assert document.line_items[0].vat_amount == Decimal('0.00')
        assert document.notes == (MARGIN_SCHEME_NOTE,)
        assert document.vat_label == 'Marge regeling'

    def test_vat_from_lines_without_stored_vat(self, vehicle_info, purchase_info, company):
        del purchase_info['vat_amount']
        document = build_invoice_document(vehicle_info, purchase=purchase_info, company=company)

        assert document.vat_amount == Decimal('4305.00')

    def test_party_and_number(self, vehicle_info, purchase_info, company):
        document = build_invoice_document(vehicle_info, purchase=purchase_info, company=company)

        assert document.kind == 'purchase'
        assert document.party.role == 'supplier'
        assert document.party.name == 'Autohandel Jansen'
        assert document.invoice_number == 'INK-A1B2C3D4'
        assert document.date == date(2024, 3, 15)

    def test_anonymous_supplier(self, vehicle_info, purchase_info, company):
        purchase_info['supplier'] = ''
        document = build_invoice_document(vehicle_info, purchase=purchase_info, company=company)

        assert document.party.name == UNKNOWN

    def test_purchase_has_no_payment_notes(self, vehicle_info, purchase_info, company):
        document = build_invoice_document(vehicle_info, purchase=purchase_info, company=company)

        assert document.notes == ()


class TestSaleInvoice:

    def test_lines_and_totals(self, vehicle_info, sale_info, company):
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        price, discount = document.line_items
        assert price.code == 'sale_price'
        assert price.vat_rate == Decimal('0')
        assert price.vat_amount == Decimal('0.00')
        assert discount.code == 'discount'
        assert discount.amount == Decimal('-500.00')
        assert discount.vat_amount == Decimal('0.00')
        assert document.vat_amount == Decimal('2100.00')
        assert document.subtotal == Decimal('29500.00')
        assert document.total == Decimal('31600.00')

    def test_no_discount_line_without_discount(self, vehicle_info, sale_info, company):
        sale_info['discount'] = Decimal('0.00')
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert [line.code for line in document.line_items] == ['sale_price']

    def test_exempt_sale_line_rate(self, vehicle_info, sale_info, company):
        sale_info.update(vat_type='geen_btw', vat_amount=Decimal('0.00'))
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert document.line_items[0].vat_rate == Decimal('0')
        assert document.vat_label == 'Geen BTW'

    @pytest.mark.parametrize('vat_type, vat_amount', [
        ('21%', '2100.00'),
        ('marge', '2100.00'),
        ('geen_btw', '0.00'),
    ])
    def test_line_vat_matches_line_rate(self, vehicle_info, sale_info, company, vat_type, vat_amount):
        sale_info.update(vat_type=vat_type, vat_amount=Decimal(vat_amount))
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        for line in document.line_items:
            assert line.vat_amount == to_money(line.amount * line.vat_rate)
        assert document.vat_amount == Decimal(vat_amount)

    def test_standard_sale_without_stored_vat(self, vehicle_info, sale_info, company):
        sale_info['vat_type'] = '21%'
        del sale_info['vat_amount']
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert document.line_items[0].vat_rate == Decimal('0.21')
        assert document.line_items[0].vat_amount == Decimal('6300.00')
        assert document.vat_amount == Decimal('6300.00')
        assert document.total == Decimal('35800.00')

    def test_notes(self, vehicle_info, sale_info, company, settings):
        settings.INVOICE_PAYMENT_TERM_DAYS = 14
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert document.notes == (
            MARGIN_SCHEME_NOTE,
            'Betaaltermijn: 14 dagen',
            'IBAN: NL91 ABNA 0417 1643 00 t.n.v. DD Cars',
            'Garantie: 12 maanden',
        )

    def test_no_warranty_note_without_warranty(self, vehicle_info, sale_info, company):
        sale_info.update(vat_type='21%', warranty_months=0)
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert not any(note.startswith('Garantie') for note in document.notes)
        assert MARGIN_SCHEME_NOTE not in document.notes

    def test_party_and_number(self, vehicle_info, sale_info, company):
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert document.party.role == 'customer'
        assert document.party.email == 'j.devries@example.com'
        assert document.invoice_number == 'VRK-2024-007'

    def test_number_fallback(self, vehicle_info, sale_info, company):
        sale_info['invoice_number'] = ''
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert document.invoice_number == 'VRK-B5C6D7E8'

    def test_missing_date_is_today(self, vehicle_info, sale_info, company):
        sale_info['sale_date'] = None
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert document.date == timezone.localdate()


class TestVehicleBlockAndSerialization:

    def test_missing_vehicle_fields_are_unknown(self, vehicle_info, sale_info, company):
        vehicle_info.color = ''
        vehicle_info.mileage = None
        document = build_invoice_document(vehicle_info, sale=sale_info, company=company)

        assert document.vehicle.color == UNKNOWN
        assert document.vehicle.mileage == UNKNOWN
        assert document.vehicle.brand == 'Volkswagen'
        assert document.vehicle.year == '2019'

    def test_vehicle_as_mapping(self, sale_info, company):
        document = build_invoice_document({'brand': 'Audi', 'model': 'A3'}, sale=sale_info, company=company)

        assert document.vehicle.model == 'A3'
        assert document.vehicle.fuel == UNKNOWN

    def test_to_dict(self, vehicle_info, sale_info, company):
        data = build_invoice_document(vehicle_info, sale=sale_info, company=company).to_dict()

        assert data['kind'] == 'sale'
        assert data['date'] == '2024-04-02'
        assert data['vat_type'] == VatRegime.MARGIN.value
        assert data['subtotal'] == '29500.00'
        assert data['vat_amount'] == '2100.00'
        assert data['total'] == '31600.00'
        assert data['line_items'][0]['vat_rate'] == '0.00'
        assert data['line_items'][1]['amount'] == '-500.00'
        assert data['company']['kvk'] == '12345678'
        assert data['party'] == {
            'role': 'customer',
            'name': 'J. de Vries',
            'email': 'j.devries@example.com',
        }
        assert data['vehicle']['mileage'] == '68500'
        assert isinstance(data['notes'], list)
