"""Vehicle CRUD operations service."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from ..models import Vehicle, VehicleStatus
from .exceptions import VehicleNotFoundError
from .seo import (
    generate_unique_slug,
    generate_meta_title,
    generate_meta_description,
)

logger = logging.getLogger(__name__)

# Changing any of these regenerates slug and meta tags
NAMING_FIELDS = ('brand', 'model', 'year')
META_FIELDS = NAMING_FIELDS + ('price', 'mileage', 'fuel', 'transmission')


def _slug_exists(slug: str, exclude_id: Optional[UUID] = None) -> bool:
    queryset = Vehicle.objects.filter(slug=slug)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


def _apply_meta(vehicle: Vehicle) -> None:
    vehicle.meta_title = generate_meta_title(
        vehicle.brand, vehicle.model, vehicle.year, vehicle.price
    )
    vehicle.meta_description = generate_meta_description(
        vehicle.brand,
        vehicle.model,
        vehicle.year,
        vehicle.mileage,
        vehicle.get_fuel_display(),
        vehicle.get_transmission_display(),
    )


@transaction.atomic
def create_vehicle(**fields) -> Vehicle:
    """
    Create a vehicle with a unique slug and generated meta tags.

    Args:
        **fields: Vehicle model fields. ``slug``, ``meta_title`` and
            ``meta_description`` are generated when not supplied.

    Returns:
        Created Vehicle instance
    """
    vehicle = Vehicle(**fields)

    if not vehicle.slug:
        vehicle.slug = generate_unique_slug(
            vehicle.brand, vehicle.model, vehicle.year, _slug_exists
        )
    if not vehicle.meta_title or not vehicle.meta_description:
        _apply_meta(vehicle)

    vehicle.save()
    logger.info("Vehicle %s created with slug %s", vehicle.id, vehicle.slug)
    return vehicle


@transaction.atomic
def update_vehicle(vehicle: Vehicle, **changes) -> Vehicle:
    """
    Update vehicle fields.

    Slug is regenerated when brand, model or year change; meta tags are
    regenerated when any field they are built from changes.

    Args:
        vehicle: Vehicle to update
        **changes: Field values to set

    Returns:
        Updated Vehicle instance
    """
    for field, value in changes.items():
        setattr(vehicle, field, value)

    if 'slug' not in changes and any(f in changes for f in NAMING_FIELDS):
        vehicle.slug = generate_unique_slug(
            vehicle.brand,
            vehicle.model,
            vehicle.year,
            lambda slug: _slug_exists(slug, exclude_id=vehicle.id),
        )
    if any(f in changes for f in META_FIELDS):
        _apply_meta(vehicle)

    vehicle.save()
    return vehicle


def mark_vehicle_status(vehicle: Vehicle, status: str) -> Vehicle:
    """Set catalog status (used when sales are recorded or removed)."""
    if vehicle.status != status:
        vehicle.status = status
        vehicle.save(update_fields=['status', 'updated_at'])
        logger.info("Vehicle %s status changed to %s", vehicle.id, status)
    return vehicle


def get_vehicle_by_id(vehicle_id: UUID) -> Vehicle:
    """
    Get vehicle by ID.

    Raises:
        VehicleNotFoundError: If vehicle doesn't exist
    """
    try:
        return Vehicle.objects.get(id=vehicle_id)
    except Vehicle.DoesNotExist:
        raise VehicleNotFoundError(f"Vehicle with ID {vehicle_id} not found")


def get_vehicle_by_slug(slug: str) -> Vehicle:
    """
    Get vehicle by SEO slug.

    Raises:
        VehicleNotFoundError: If no vehicle has this slug
    """
    try:
        return Vehicle.objects.get(slug=slug)
    except Vehicle.DoesNotExist:
        raise VehicleNotFoundError(f"Vehicle with slug '{slug}' not found")


def search_vehicles(
    *,
    status: Optional[str] = None,
    featured: Optional[bool] = None,
    brand: Optional[str] = None,
) -> QuerySet:
    """Filter the inventory by status, featured flag and brand."""
    queryset = Vehicle.objects.all()
    if status:
        queryset = queryset.filter(status=status)
    if featured is not None:
        queryset = queryset.filter(featured=featured)
    if brand:
        queryset = queryset.filter(brand__iexact=brand)
    return queryset


def get_featured_vehicles() -> QuerySet:
    return Vehicle.objects.filter(featured=True, status=VehicleStatus.AVAILABLE)
