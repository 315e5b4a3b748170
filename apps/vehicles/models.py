from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


class FuelType(models.TextChoices):
    PETROL = 'benzine', 'Benzine'
    DIESEL = 'diesel', 'Diesel'
    HYBRID = 'hybrid', 'Hybrid'
    ELECTRIC = 'elektrisch', 'Elektrisch'


class Transmission(models.TextChoices):
    MANUAL = 'handgeschakeld', 'Handgeschakeld'
    AUTOMATIC = 'automaat', 'Automaat'


class VehicleStatus(models.TextChoices):
    AVAILABLE = 'beschikbaar', 'Beschikbaar'
    RESERVED = 'gereserveerd', 'Gereserveerd'
    SOLD = 'verkocht', 'Verkocht'
    MAINTENANCE = 'in_onderhoud', 'In onderhoud'


class Vehicle(models.Model):
    """Vehicle in the dealership inventory."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Identity
    brand = models.CharField(max_length=100, db_index=True)
    model = models.CharField(max_length=100)
    year = models.PositiveIntegerField(
        validators=[MinValueValidator(1900), MaxValueValidator(2100)]
    )

    # Asking price on the public catalog (EUR)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Specifications
    mileage = models.PositiveIntegerField(help_text='Odometer reading in km')
    fuel = models.CharField(max_length=20, choices=FuelType.choices)
    transmission = models.CharField(max_length=20, choices=Transmission.choices)
    color = models.CharField(max_length=50)
    power = models.CharField(max_length=50, blank=True)
    chassis_number = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)

    # Catalog state
    status = models.CharField(
        max_length=20,
        choices=VehicleStatus.choices,
        default=VehicleStatus.AVAILABLE,
        db_index=True
    )
    featured = models.BooleanField(default=False)
    image_url = models.URLField(max_length=500, blank=True)

    # SEO
    slug = models.SlugField(max_length=200, unique=True)
    meta_title = models.CharField(max_length=200, blank=True)
    meta_description = models.CharField(max_length=500, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vehicles'
        indexes = [
            models.Index(fields=['status', 'featured'], name='vehicles_status_featured_idx'),
            models.Index(fields=['brand', 'model'], name='vehicles_brand_model_idx'),
            models.Index(fields=['created_at'], name='vehicles_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.brand} {self.model} ({self.year})"

    @property
    def is_available(self):
        return self.status == VehicleStatus.AVAILABLE
