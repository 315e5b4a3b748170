from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiResponse
from .models import PurchaseRecord
from .serializers import (
    PurchaseRecordSerializer,
    PurchaseRecordCreateSerializer,
    PurchaseRecordUpdateSerializer,
    PurchaseRecordListSerializer,
    PurchaseFilterSerializer,
)
from .services import PurchaseService
from .exceptions import (
    DuplicatePurchaseError,
    PurchaseNotFoundError,
    PurchaseInUseError,
    PurchasesServiceError,
)
from apps.accounting.exports import csv_response
from apps.accounting.services import AccountingServiceError
from apps.sales.exceptions import SalesServiceError


EXPORT_COLUMNS = [
    ('ID', 'id'),
    ('Vehicle ID', 'vehicle_id'),
    ('Vehicle', 'vehicle'),
    ('Purchase Price', 'purchase_price'),
    ('VAT Type', 'vat_type'),
    ('BPM', 'bpm_amount'),
    ('Transport Cost', 'transport_cost'),
    ('Maintenance Cost', 'maintenance_cost'),
    ('Cleaning Cost', 'cleaning_cost'),
    ('Guarantee Cost', 'guarantee_cost'),
    ('Other Costs', 'other_costs'),
    ('VAT Amount', 'vat_amount'),
    ('Total Cost Incl VAT', 'total_cost_incl_vat'),
    ('Supplier', 'supplier'),
    ('Invoice Number', 'invoice_number'),
    ('Purchase Date', 'purchase_date'),
    ('Notes', 'notes'),
    ('Created At', 'created_at'),
]


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchases."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PurchaseRecordViewSet(viewsets.ModelViewSet):
    """
    ViewSet for vehicle purchase records (back office only).

    list: Get all purchases (filterable by VAT regime and date range)
    create: Record a vehicle purchase (totals computed server-side)
    retrieve: Get a specific purchase
    update: Update a purchase and recompute totals
    destroy: Delete a purchase that no sale references
    """

    queryset = PurchaseRecord.objects.select_related('vehicle')
    serializer_class = PurchaseRecordSerializer
    permission_classes = [IsAdminUser]
    pagination_class = PurchasePagination

    def get_queryset(self):
        """Filter purchases using input serializer validation."""
        queryset = super().get_queryset()
        if self.action not in ['list', 'export']:
            return queryset

        filter_serializer = PurchaseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'vat_type' in params:
            queryset = queryset.filter(vat_type=params['vat_type'])
        if 'date_from' in params:
            queryset = queryset.filter(purchase_date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(purchase_date__lte=params['date_to'])

        return queryset

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return PurchaseRecordListSerializer
        elif self.action == 'create':
            return PurchaseRecordCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return PurchaseRecordUpdateSerializer
        return PurchaseRecordSerializer

    @extend_schema(responses={201: PurchaseRecordSerializer})
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            purchase = PurchaseService.record_purchase(**serializer.validated_data)
        except (PurchasesServiceError, AccountingServiceError) as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            PurchaseRecordSerializer(purchase).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: PurchaseRecordSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        purchase = self.get_object()
        serializer = self.get_serializer(purchase, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            purchase = PurchaseService.update_purchase(purchase, **serializer.validated_data)
        except (PurchasesServiceError, AccountingServiceError, SalesServiceError) as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(PurchaseRecordSerializer(purchase).data)

    def destroy(self, request, *args, **kwargs):
        purchase = self.get_object()
        try:
            PurchaseService.delete_purchase(purchase)
        except PurchaseInUseError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_409_CONFLICT
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        responses={200: PurchaseRecordSerializer, 404: OpenApiResponse(description='No purchase')},
    )
    @action(detail=False, methods=['get'], url_path=r'vehicle/(?P<vehicle_id>[0-9a-f-]+)')
    def by_vehicle(self, request, vehicle_id=None):
        """
        Get the purchase record of a vehicle.

        GET /api/purchases/vehicle/{vehicle_id}/
        """
        try:
            purchase = PurchaseService.get_for_vehicle(vehicle_id)
        except PurchaseNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(PurchaseRecordSerializer(purchase).data)

    @extend_schema(responses={(200, 'text/csv'): OpenApiResponse(description='CSV file')})
    @action(detail=False, methods=['get'])
    def export(self, request):
        """
        Download purchases as CSV.

        GET /api/purchases/export/
        """
        header = [title for title, _ in EXPORT_COLUMNS]
        rows = (
            [getattr(purchase, attr) for _, attr in EXPORT_COLUMNS]
            for purchase in self.get_queryset()
        )
        return csv_response('purchases.csv', header, rows)
