from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiResponse
from .models import SaleRecord
from .serializers import (
    SaleRecordSerializer,
    SaleRecordCreateSerializer,
    SaleRecordUpdateSerializer,
    SaleRecordListSerializer,
    SaleFilterSerializer,
)
from .services import SaleService
from .exceptions import SaleNotFoundError, SalesServiceError
from apps.accounting.exports import csv_response
from apps.accounting.services import AccountingServiceError


EXPORT_COLUMNS = [
    ('ID', 'id'),
    ('Vehicle ID', 'vehicle_id'),
    ('Vehicle', 'vehicle'),
    ('Purchase ID', 'purchase_id'),
    ('Sale Price', 'sale_price'),
    ('VAT Type', 'vat_type'),
    ('Discount', 'discount'),
    ('VAT Amount', 'vat_amount'),
    ('Sale Price Incl VAT', 'sale_price_incl_vat'),
    ('Final Price', 'final_price'),
    ('Profit Excl VAT', 'profit_excl_vat'),
    ('Profit Incl VAT', 'profit_incl_vat'),
    ('Customer Name', 'customer_name'),
    ('Customer Email', 'customer_email'),
    ('Customer Phone', 'customer_phone'),
    ('Payment Method', 'payment_method'),
    ('Sale Date', 'sale_date'),
    ('Delivery Date', 'delivery_date'),
    ('Warranty Months', 'warranty_months'),
    ('Invoice Number', 'invoice_number'),
    ('Notes', 'notes'),
    ('Created At', 'created_at'),
]


class SalePagination(PageNumberPagination):
    """Custom pagination for sales."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class SaleRecordViewSet(viewsets.ModelViewSet):
    """
    ViewSet for vehicle sale records (back office only).

    list: Get all sales (filterable by VAT regime, payment method, dates)
    create: Record a sale (amounts and profit computed server-side)
    retrieve: Get a specific sale
    update: Update a sale and recompute amounts
    destroy: Delete a sale and make the vehicle available again
    """

    queryset = SaleRecord.objects.select_related('vehicle', 'purchase')
    serializer_class = SaleRecordSerializer
    permission_classes = [IsAdminUser]
    pagination_class = SalePagination

    def get_queryset(self):
        """Filter sales using input serializer validation."""
        queryset = super().get_queryset()
        if self.action not in ['list', 'export']:
            return queryset

        filter_serializer = SaleFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'vat_type' in params:
            queryset = queryset.filter(vat_type=params['vat_type'])
        if 'payment_method' in params:
            queryset = queryset.filter(payment_method=params['payment_method'])
        if 'date_from' in params:
            queryset = queryset.filter(sale_date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(sale_date__lte=params['date_to'])

        return queryset

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return SaleRecordListSerializer
        elif self.action == 'create':
            return SaleRecordCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return SaleRecordUpdateSerializer
        return SaleRecordSerializer

    @extend_schema(responses={201: SaleRecordSerializer})
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            sale = SaleService.record_sale(**serializer.validated_data)
        except (SalesServiceError, AccountingServiceError) as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            SaleRecordSerializer(sale).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: SaleRecordSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        sale = self.get_object()
        serializer = self.get_serializer(sale, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            sale = SaleService.update_sale(sale, **serializer.validated_data)
        except (SalesServiceError, AccountingServiceError) as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(SaleRecordSerializer(sale).data)

    def destroy(self, request, *args, **kwargs):
        SaleService.delete_sale(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        responses={200: SaleRecordSerializer, 404: OpenApiResponse(description='No sale')},
    )
    @action(detail=False, methods=['get'], url_path=r'vehicle/(?P<vehicle_id>[0-9a-f-]+)')
    def by_vehicle(self, request, vehicle_id=None):
        """
        Get the sale record of a vehicle.

        GET /api/sales/vehicle/{vehicle_id}/
        """
        try:
            sale = SaleService.get_for_vehicle(vehicle_id)
        except SaleNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(SaleRecordSerializer(sale).data)

    @extend_schema(responses={(200, 'text/csv'): OpenApiResponse(description='CSV file')})
    @action(detail=False, methods=['get'])
    def export(self, request):
        """
        Download sales as CSV.

        GET /api/sales/export/
        """
        header = [title for title, _ in EXPORT_COLUMNS]
        rows = (
            [getattr(sale, attr) for _, attr in EXPORT_COLUMNS]
            for sale in self.get_queryset()
        )
        return csv_response('sales.csv', header, rows)
