from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework import status
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiResponse
from drf_spectacular.types import OpenApiTypes
from apps.vehicles.models import Vehicle
from apps.purchases.services import PurchaseService
from apps.purchases.exceptions import PurchaseNotFoundError
from apps.sales.services import SaleService
from apps.sales.exceptions import SaleNotFoundError
from .services import build_invoice_document


@extend_schema(
    responses={
        200: OpenApiTypes.OBJECT,
        404: OpenApiResponse(description='Vehicle or purchase not found'),
    },
    description="Invoice document for the purchase of a vehicle.",
    tags=['invoices'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def purchase_invoice(request, vehicle_id):
    """Purchase invoice - thin HTTP handler."""
    vehicle = get_object_or_404(Vehicle, id=vehicle_id)

    try:
        purchase = PurchaseService.get_for_vehicle(vehicle.id)
    except PurchaseNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    document = build_invoice_document(vehicle, purchase=purchase)
    return Response(document.to_dict())


@extend_schema(
    responses={
        200: OpenApiTypes.OBJECT,
        404: OpenApiResponse(description='Vehicle or sale not found'),
    },
    description="Invoice document for the sale of a vehicle.",
    tags=['invoices'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def sale_invoice(request, vehicle_id):
    """Sale invoice - thin HTTP handler."""
    vehicle = get_object_or_404(Vehicle, id=vehicle_id)

    try:
        sale = SaleService.get_for_vehicle(vehicle.id)
    except SaleNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    document = build_invoice_document(vehicle, sale=sale)
    return Response(document.to_dict())
