import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.vehicles.services import create_vehicle
from apps.purchases.services import PurchaseService


User = get_user_model()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def purchaser(db):
    """Create and return a back-office user who books purchases."""
    return User.objects.create_user(
        username='inkoop',
        email='inkoop@ddcars.nl',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def purchase_outsider(db):
    """Create and return a non-staff user."""
    return User.objects.create_user(
        username='outsider',
        email='outsider@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def purchaser_client(purchaser):
    """Return API client authenticated as purchaser."""
    client = APIClient()
    refresh = RefreshToken.for_user(purchaser)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def outsider_client(purchase_outsider):
    """Return API client authenticated as non-staff user."""
    client = APIClient()
    refresh = RefreshToken.for_user(purchase_outsider)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def passat(db):
    """Create and return a vehicle without a purchase."""
    return create_vehicle(
        brand='Volkswagen',
        model='Passat Variant',
        year=2018,
        price=Decimal('17950.00'),
        mileage=121000,
        fuel='diesel',
        transmission='automaat',
        color='Blauw',
    )


@pytest.fixture
def clio(db):
    """Create and return a second vehicle without a purchase."""
    return create_vehicle(
        brand='Renault',
        model='Clio',
        year=2020,
        price=Decimal('12950.00'),
        mileage=38000,
        fuel='benzine',
        transmission='handgeschakeld',
        color='Rood',
    )


@pytest.fixture
def purchase(passat):
    """21% purchase: vat 4305.00, total 26305.00."""
    return PurchaseService.record_purchase(
        vehicle=passat,
        purchase_price=Decimal('20000.00'),
        vat_type='21%',
        bpm_amount=Decimal('1500.00'),
        transport_cost=Decimal('200.00'),
        maintenance_cost=Decimal('300.00'),
        supplier='Autohandel Jansen',
        invoice_number='AJ-2024-118',
    )


@pytest.fixture
def margin_purchase(clio):
    """Margin-scheme purchase with a cleaning bill."""
    return PurchaseService.record_purchase(
        vehicle=clio,
        purchase_price=Decimal('8000.00'),
        vat_type='marge',
        cleaning_cost=Decimal('100.00'),
        supplier='Particulier',
    )
