import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.vehicles.models import VehicleStatus
from apps.vehicles.services import create_vehicle


User = get_user_model()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Create and return a back-office user."""
    return User.objects.create_user(
        username='backoffice',
        email='backoffice@ddcars.nl',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def regular_user(db):
    """Create and return a non-staff user."""
    return User.objects.create_user(
        username='visitor',
        email='visitor@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def staff_client(staff_user):
    """Return API client authenticated as back-office user."""
    client = APIClient()
    refresh = RefreshToken.for_user(staff_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def regular_client(regular_user):
    """Return API client authenticated as non-staff user."""
    client = APIClient()
    refresh = RefreshToken.for_user(regular_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def vehicle_data():
    """Raw vehicle fields as the back office submits them."""
    return {
        'brand': 'Volkswagen',
        'model': 'Golf GTI',
        'year': 2019,
        'price': Decimal('24950.00'),
        'mileage': 68500,
        'fuel': 'benzine',
        'transmission': 'automaat',
        'color': 'Zwart',
        'power': '245 pk',
    }


@pytest.fixture
def golf(db, vehicle_data):
    """Create and return an available vehicle."""
    return create_vehicle(**vehicle_data)


@pytest.fixture
def featured_vehicle(db):
    """Create and return a featured, available vehicle."""
    return create_vehicle(
        brand='Audi',
        model='A4 Avant',
        year=2020,
        price=Decimal('31500.00'),
        mileage=45000,
        fuel='diesel',
        transmission='automaat',
        color='Grijs',
        featured=True,
    )


@pytest.fixture
def sold_featured_vehicle(db):
    """Create and return a featured vehicle that is already sold."""
    return create_vehicle(
        brand='BMW',
        model='320i',
        year=2018,
        price=Decimal('19900.00'),
        mileage=98000,
        fuel='benzine',
        transmission='handgeschakeld',
        color='Wit',
        featured=True,
        status=VehicleStatus.SOLD,
    )
