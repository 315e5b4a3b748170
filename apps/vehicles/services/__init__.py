"""Services for vehicles business logic."""

from .exceptions import (
    VehiclesServiceError,
    VehicleNotFoundError,
)
from .seo import (
    generate_slug,
    generate_unique_slug,
    generate_meta_title,
    generate_meta_description,
)
from .vehicle_management import (
    create_vehicle,
    update_vehicle,
    mark_vehicle_status,
    get_vehicle_by_id,
    get_vehicle_by_slug,
    search_vehicles,
    get_featured_vehicles,
)

__all__ = [
    # Exceptions
    'VehiclesServiceError',
    'VehicleNotFoundError',
    # SEO
    'generate_slug',
    'generate_unique_slug',
    'generate_meta_title',
    'generate_meta_description',
    # Vehicle Management
    'create_vehicle',
    'update_vehicle',
    'mark_vehicle_status',
    'get_vehicle_by_id',
    'get_vehicle_by_slug',
    'search_vehicles',
    'get_featured_vehicles',
]
