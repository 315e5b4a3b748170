from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.purchases.models import PurchaseRecord
from apps.purchases.services import PurchaseService
from .services import (
    AccountingServiceError,
    PurchaseReference,
    VatRegime,
    compute_purchase_totals,
    compute_sale_totals,
)
from .services.financial_overview import financial_overview
from .serializers import (
    # Input serializers
    PurchasePreviewInputSerializer,
    SalePreviewInputSerializer,
    OverviewQuerySerializer,
    # Response serializers
    PurchaseTotalsSerializer,
    SaleTotalsSerializer,
    FinancialOverviewSerializer,
    ErrorSerializer,
)


@extend_schema(
    request=PurchasePreviewInputSerializer,
    responses={
        200: PurchaseTotalsSerializer,
        400: ErrorSerializer,
    },
    description="Compute VAT and total cost of a purchase without saving it.",
    tags=['accounting'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
def preview_purchase(request):
    """Live purchase totals for the purchase form - thin HTTP handler."""
    input_serializer = PurchasePreviewInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)

    try:
        totals = compute_purchase_totals(**input_serializer.validated_data)
    except AccountingServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(PurchaseTotalsSerializer(totals).data)


@extend_schema(
    request=SalePreviewInputSerializer,
    responses={
        200: SaleTotalsSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description=(
        "Compute VAT, final price and profit of a sale without saving it. "
        "Profit fields are null when no purchase reference is given."
    ),
    tags=['accounting'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
def preview_sale(request):
    """Live sale totals for the sale form - thin HTTP handler."""
    input_serializer = SalePreviewInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)
    params = input_serializer.validated_data

    vat_type = params.get('vat_type')
    reference = None

    try:
        if params.get('purchase'):
            purchase = PurchaseRecord.objects.filter(id=params['purchase']).first()
            if purchase is None:
                return Response(
                    {'error': f"Purchase {params['purchase']} not found"},
                    status=status.HTTP_404_NOT_FOUND
                )
            reference = PurchaseService.totals_for(purchase)
            vat_type = vat_type or purchase.vat_type
        elif params.get('purchase_price') is not None:
            reference = PurchaseReference.parse(
                params['purchase_price'],
                params['purchase_total_cost_incl_vat'],
            )

        totals = compute_sale_totals(
            params['sale_price'],
            vat_type or VatRegime.STANDARD_21,
            discount=params['discount'],
            purchase_totals=reference,
        )
    except AccountingServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(SaleTotalsSerializer(totals).data)


@extend_schema(
    parameters=[
        OpenApiParameter('year', OpenApiTypes.INT, description='Calendar year'),
        OpenApiParameter('month', OpenApiTypes.INT, description='Month 1-12 (requires year)'),
    ],
    responses={
        200: FinancialOverviewSerializer,
        400: ErrorSerializer,
    },
    description="Revenue, purchase costs, profit and collected VAT for a period.",
    tags=['accounting'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def overview(request):
    """Financial overview - thin HTTP handler."""
    query_serializer = OverviewQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = financial_overview(
        year=params.get('year'),
        month=params.get('month'),
    )
    return Response(FinancialOverviewSerializer(data).data)
