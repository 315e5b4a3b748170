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
def seller(db):
    """Create and return a back-office user who books sales."""
    return User.objects.create_user(
        username='verkoop',
        email='verkoop@ddcars.nl',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def sale_outsider(db):
    """Create and return a non-staff user."""
    return User.objects.create_user(
        username='outsider',
        email='outsider@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def seller_client(seller):
    """Return API client authenticated as seller."""
    client = APIClient()
    refresh = RefreshToken.for_user(seller)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def outsider_client(sale_outsider):
    """Return API client authenticated as non-staff user."""
    client = APIClient()
    refresh = RefreshToken.for_user(sale_outsider)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def octavia(db):
    """Create and return an available vehicle."""
    return create_vehicle(
        brand='Skoda',
        model='Octavia Combi',
        year=2019,
        price=Decimal('18950.00'),
        mileage=89000,
        fuel='diesel',
        transmission='automaat',
        color='Grijs',
    )


@pytest.fixture
def polo(db):
    """Create and return a vehicle the dealer has no purchase for."""
    return create_vehicle(
        brand='Volkswagen',
        model='Polo',
        year=2017,
        price=Decimal('9950.00'),
        mileage=110000,
        fuel='benzine',
        transmission='handgeschakeld',
        color='Wit',
    )


@pytest.fixture
def margin_purchase(octavia):
    """Margin-scheme purchase: vat 105.00, total 22105.00."""
    return PurchaseService.record_purchase(
        vehicle=octavia,
        purchase_price=Decimal('20000.00'),
        vat_type='marge',
        bpm_amount=Decimal('1500.00'),
        transport_cost=Decimal('200.00'),
        maintenance_cost=Decimal('300.00'),
        supplier='Autohandel Jansen',
    )


@pytest.fixture
def sale(margin_purchase):
    """Margin sale linked to the purchase: profit incl. VAT 9495.00."""
    return SaleService.record_sale(
        vehicle=margin_purchase.vehicle,
        sale_price=Decimal('30000.00'),
        discount=Decimal('500.00'),
        customer_name='J. de Vries',
        customer_email='j.devries@example.com',
    )
