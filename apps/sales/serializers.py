from rest_framework import serializers
from .models import SaleRecord, PaymentMethod
from apps.accounting.services import VatRegime
from apps.purchases.models import PurchaseRecord
from apps.vehicles.models import Vehicle


# =============================================================================
# Input Serializers
# =============================================================================

class SaleFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for sale filtering.

    Query Parameters:
        vat_type (str): Filter by VAT regime
        payment_method (str): Filter by payment method
        date_from (date): Filter sales from this date
        date_to (date): Filter sales to this date
    """

    vat_type = serializers.ChoiceField(choices=VatRegime.choices, required=False)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs


class SaleRecordCreateSerializer(serializers.ModelSerializer):
    """
    Validate a new sale.

    ``vat_type`` may be omitted; the service then uses the purchase's
    regime. ``purchase`` may be omitted; the vehicle's purchase is linked.
    """

    vehicle = serializers.PrimaryKeyRelatedField(queryset=Vehicle.objects.all())
    purchase = serializers.PrimaryKeyRelatedField(
        queryset=PurchaseRecord.objects.all(),
        required=False,
        allow_null=True
    )
    vat_type = serializers.ChoiceField(choices=VatRegime.choices, required=False)

    class Meta:
        model = SaleRecord
        fields = [
            'vehicle',
            'purchase',
            'sale_price',
            'vat_type',
            'discount',
            'customer_name',
            'customer_email',
            'customer_phone',
            'customer_address',
            'payment_method',
            'sale_date',
            'delivery_date',
            'warranty_months',
            'invoice_number',
            'notes',
        ]


class SaleRecordUpdateSerializer(serializers.ModelSerializer):
    """Validate changes to an existing sale (vehicle is fixed)."""

    purchase = serializers.PrimaryKeyRelatedField(
        queryset=PurchaseRecord.objects.all(),
        required=False,
        allow_null=True
    )
    vat_type = serializers.ChoiceField(choices=VatRegime.choices, required=False)

    class Meta:
        model = SaleRecord
        fields = [
            'purchase',
            'sale_price',
            'vat_type',
            'discount',
            'customer_name',
            'customer_email',
            'customer_phone',
            'customer_address',
            'payment_method',
            'sale_date',
            'delivery_date',
            'warranty_months',
            'invoice_number',
            'notes',
        ]


# =============================================================================
# Output Serializers
# =============================================================================

class SaleRecordSerializer(serializers.ModelSerializer):
    """Full sale record serializer."""

    vehicle_name = serializers.CharField(source='vehicle.__str__', read_only=True)
    vat_type_display = serializers.CharField(source='get_vat_type_display', read_only=True)
    payment_method_display = serializers.CharField(source='get_payment_method_display', read_only=True)
    profit_available = serializers.BooleanField(read_only=True)

    class Meta:
        model = SaleRecord
        fields = [
            'id',
            'vehicle',
            'vehicle_name',
            'purchase',
            'sale_price',
            'vat_type',
            'vat_type_display',
            'discount',
            'vat_amount',
            'sale_price_incl_vat',
            'final_price',
            'profit_excl_vat',
            'profit_incl_vat',
            'profit_available',
            'customer_name',
            'customer_email',
            'customer_phone',
            'customer_address',
            'payment_method',
            'payment_method_display',
            'sale_date',
            'delivery_date',
            'warranty_months',
            'invoice_number',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SaleRecordListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for sale lists."""

    vehicle_name = serializers.CharField(source='vehicle.__str__', read_only=True)

    class Meta:
        model = SaleRecord
        fields = [
            'id',
            'vehicle',
            'vehicle_name',
            'customer_name',
            'sale_price',
            'vat_type',
            'final_price',
            'profit_incl_vat',
            'sale_date',
        ]
        read_only_fields = fields
