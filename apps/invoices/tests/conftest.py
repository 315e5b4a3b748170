import pytest
import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.invoices.services import CompanyInfo
from apps.vehicles.services import create_vehicle
from apps.purchases.services import PurchaseService
from apps.sales.services import SaleService


User = get_user_model()


# =============================================================================
# Plain inputs for the assembler
# =============================================================================

@pytest.fixture
def company():
    return CompanyInfo(
        name='DD Cars',
        address='Voorbeeldstraat 123',
        city='1234 AB Amsterdam',
        phone='+31 (0)20 123 4567',
        email='info@ddcars.nl',
        kvk='12345678',
        vat_number='NL123456789B01',
        iban='NL91 ABNA 0417 1643 00',
        website='www.ddcars.nl',
    )


@pytest.fixture
def vehicle_info():
    return SimpleNamespace(
        id=uuid.UUID('3f2b8c1e-0000-4000-8000-000000000001'),
        brand='Volkswagen',
        model='Golf GTI',
        year=2019,
        mileage=68500,
        fuel='benzine',
        transmission='automaat',
        color='Zwart',
    )


@pytest.fixture
def purchase_info():
    return {
        'id': uuid.UUID('a1b2c3d4-0000-4000-8000-000000000002'),
        'purchase_price': Decimal('20000.00'),
        'vat_type': '21%',
        'bpm_amount': Decimal('1500.00'),
        'transport_cost': Decimal('200.00'),
        'maintenance_cost': Decimal('300.00'),
        'vat_amount': Decimal('4305.00'),
        'supplier': 'Autohandel Jansen',
        'invoice_number': '',
        'purchase_date': date(2024, 3, 15),
    }


@pytest.fixture
def sale_info():
    return {
        'id': uuid.UUID('b5c6d7e8-0000-4000-8000-000000000003'),
        'sale_price': Decimal('30000.00'),
        'vat_type': 'marge',
        'discount': Decimal('500.00'),
        'vat_amount': Decimal('2100.00'),
        'customer_name': 'J. de Vries',
        'customer_email': 'j.devries@example.com',
        'warranty_months': 12,
        'invoice_number': 'VRK-2024-007',
        'sale_date': date(2024, 4, 2),
    }


# =============================================================================
# Stored records for the API
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def clerk(db):
    """Create and return a back-office user."""
    return User.objects.create_user(
        username='administratie',
        email='administratie@ddcars.nl',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def clerk_client(clerk):
    """Return API client authenticated as back-office user."""
    client = APIClient()
    refresh = RefreshToken.for_user(clerk)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def customer_client(db):
    """Return API client authenticated as non-staff user."""
    user = User.objects.create_user(
        username='klant',
        email='klant@example.com',
        password='TestPass123!',
    )
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def golf(db):
    return create_vehicle(
        brand='Volkswagen',
        model='Golf GTI',
        year=2019,
        price=Decimal('24950.00'),
        mileage=68500,
        fuel='benzine',
        transmission='automaat',
        color='Zwart',
    )


@pytest.fixture
def stored_purchase(golf):
    return PurchaseService.record_purchase(
        vehicle=golf,
        purchase_price=Decimal('20000.00'),
        vat_type='21%',
        bpm_amount=Decimal('1500.00'),
        transport_cost=Decimal('200.00'),
        maintenance_cost=Decimal('300.00'),
        supplier='Autohandel Jansen',
    )


@pytest.fixture
def stored_sale(stored_purchase):
    return SaleService.record_sale(
        vehicle=stored_purchase.vehicle,
        sale_price=Decimal('30000.00'),
        vat_type='marge',
        discount=Decimal('500.00'),
        customer_name='J. de Vries',
        customer_email='j.devries@example.com',
    )
