import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.vehicles.services import create_vehicle
from apps.purchases.services import PurchaseService
from apps.sales.services import SaleService


User = get_user_model()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def accountant(db):
    """Create and return a back-office user."""
    return User.objects.create_user(
        username='boekhouding',
        email='boekhouding@ddcars.nl',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def visitor(db):
    """Create and return a non-staff user."""
    return User.objects.create_user(
        username='visitor',
        email='visitor@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def accountant_client(accountant):
    """Return API client authenticated as back-office user."""
    client = APIClient()
    refresh = RefreshToken.for_user(accountant)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def visitor_client(visitor):
    """Return API client authenticated as non-staff user."""
    client = APIClient()
    refresh = RefreshToken.for_user(visitor)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def make_vehicle(db):
    """Factory creating catalog vehicles."""
    def _make(brand='Volkswagen', model='Golf', year=2019, **extra):
        fields = {
            'price': Decimal('24950.00'),
            'mileage': 68500,
            'fuel': 'benzine',
            'transmission': 'automaat',
            'color': 'Zwart',
        }
        fields.update(extra)
        return create_vehicle(brand=brand, model=model, year=year, **fields)
    return _make


@pytest.fixture
def standard_purchase(make_vehicle):
    """21% purchase: vat 4305.00, total 26305.00."""
    return PurchaseService.record_purchase(
        vehicle=make_vehicle(),
        purchase_price=Decimal('20000.00'),
        vat_type='21%',
        bpm_amount=Decimal('1500.00'),
        transport_cost=Decimal('200.00'),
        maintenance_cost=Decimal('300.00'),
        supplier='Autohandel Jansen',
    )


@pytest.fixture
def margin_purchase(make_vehicle):
    """Margin-scheme purchase of 9000.00 without costs."""
    return PurchaseService.record_purchase(
        vehicle=make_vehicle(brand='Opel', model='Astra', year=2017),
        purchase_price=Decimal('9000.00'),
        vat_type='marge',
        supplier='Particulier',
    )


@pytest.fixture
def margin_sale(standard_purchase):
    """Margin sale of the standard purchase: profit incl. VAT 5295.00."""
    return SaleService.record_sale(
        vehicle=standard_purchase.vehicle,
        sale_price=Decimal('30000.00'),
        vat_type='marge',
        discount=Decimal('500.00'),
        customer_name='J. de Vries',
    )


@pytest.fixture
def unlinked_sale(make_vehicle):
    """21% sale of a vehicle that was never purchased through the system."""
    return SaleService.record_sale(
        vehicle=make_vehicle(brand='Toyota', model='Yaris', year=2016),
        sale_price=Decimal('10000.00'),
        customer_name='P. Bakker',
    )
