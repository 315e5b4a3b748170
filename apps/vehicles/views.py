from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.db.models import ProtectedError
from .models import Vehicle
from .serializers import (
    VehicleSerializer,
    VehicleListSerializer,
    VehicleFilterSerializer,
)
from .permissions import IsStaffOrReadOnly
from .services import (
    create_vehicle,
    update_vehicle,
    search_vehicles,
    get_featured_vehicles,
    get_vehicle_by_slug,
    VehicleNotFoundError,
)


class VehiclePagination(PageNumberPagination):
    """Custom pagination for the catalog."""
    page_size = 24
    page_size_query_param = 'page_size'
    max_page_size = 100


class VehicleViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Vehicle CRUD operations.

    list: Get all vehicles (filterable by status/featured/brand)
    create: Add a vehicle to the inventory (staff)
    retrieve: Get a specific vehicle
    update: Update a vehicle (staff)
    partial_update: Partially update a vehicle (staff)
    destroy: Remove a vehicle (staff)
    """

    queryset = Vehicle.objects.all()
    serializer_class = VehicleSerializer
    permission_classes = [IsStaffOrReadOnly]
    pagination_class = VehiclePagination

    def get_queryset(self):
        """Filter vehicles using input serializer validation."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = VehicleFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_vehicles(
            status=params.get('status'),
            featured=params.get('featured'),
            brand=params.get('brand'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action in ['list', 'featured']:
            return VehicleListSerializer
        return VehicleSerializer

    def perform_create(self, serializer):
        serializer.instance = create_vehicle(**serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = update_vehicle(
            serializer.instance, **serializer.validated_data
        )

    def destroy(self, request, *args, **kwargs):
        """Delete a vehicle unless bookkeeping records reference it."""
        vehicle = self.get_object()
        try:
            vehicle.delete()
        except ProtectedError:
            return Response(
                {'error': 'Vehicle has purchase or sale records and cannot be deleted'},
                status=status.HTTP_409_CONFLICT
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def featured(self, request):
        """
        Get featured, available vehicles for the home page.

        GET /api/vehicles/featured/
        """
        serializer = VehicleListSerializer(get_featured_vehicles(), many=True)
        return Response(serializer.data)

    @action(detail=False, methods=['get'], url_path=r'slug/(?P<slug>[-\w]+)')
    def by_slug(self, request, slug=None):
        """
        Get a vehicle by its SEO slug.

        GET /api/vehicles/slug/{slug}/
        """
        try:
            vehicle = get_vehicle_by_slug(slug)
        except VehicleNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(VehicleSerializer(vehicle).data)
