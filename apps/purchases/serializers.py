from rest_framework import serializers
from .models import PurchaseRecord
from apps.accounting.services import VatRegime
from apps.vehicles.models import Vehicle


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for purchase filtering.

    Query Parameters:
        vat_type (str): Filter by VAT regime
        date_from (date): Filter purchases from this date
        date_to (date): Filter purchases to this date
    """

    vat_type = serializers.ChoiceField(choices=VatRegime.choices, required=False)
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


class PurchaseRecordCreateSerializer(serializers.ModelSerializer):
    """
    Validate a new purchase.

    Derived totals are not accepted; they are computed by PurchaseService.
    """

    vehicle = serializers.PrimaryKeyRelatedField(queryset=Vehicle.objects.all())
    vat_type = serializers.ChoiceField(
        choices=VatRegime.choices,
        default=VatRegime.STANDARD_21
    )

    class Meta:
        model = PurchaseRecord
        fields = [
            'vehicle',
            'purchase_price',
            'vat_type',
            'bpm_amount',
            'transport_cost',
            'maintenance_cost',
            'cleaning_cost',
            'guarantee_cost',
            'other_costs',
            'supplier',
            'invoice_number',
            'purchase_date',
            'notes',
        ]


class PurchaseRecordUpdateSerializer(serializers.ModelSerializer):
    """Validate changes to an existing purchase (vehicle is fixed)."""

    vat_type = serializers.ChoiceField(choices=VatRegime.choices, required=False)

    class Meta:
        model = PurchaseRecord
        fields = [
            'purchase_price',
            'vat_type',
            'bpm_amount',
            'transport_cost',
            'maintenance_cost',
            'cleaning_cost',
            'guarantee_cost',
            'other_costs',
            'supplier',
            'invoice_number',
            'purchase_date',
            'notes',
        ]


# =============================================================================
# Output Serializers
# =============================================================================

class PurchaseRecordSerializer(serializers.ModelSerializer):
    """Full purchase record serializer."""

    vehicle_name = serializers.CharField(source='vehicle.__str__', read_only=True)
    vat_type_display = serializers.CharField(source='get_vat_type_display', read_only=True)
    additional_costs = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    total_cost_excl_vat = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    has_sale = serializers.SerializerMethodField()

    class Meta:
        model = PurchaseRecord
        fields = [
            'id',
            'vehicle',
            'vehicle_name',
            'purchase_price',
            'vat_type',
            'vat_type_display',
            'bpm_amount',
            'transport_cost',
            'maintenance_cost',
            'cleaning_cost',
            'guarantee_cost',
            'other_costs',
            'additional_costs',
            'vat_amount',
            'total_cost_excl_vat',
            'total_cost_incl_vat',
            'supplier',
            'invoice_number',
            'purchase_date',
            'notes',
            'has_sale',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_has_sale(self, obj):
        return obj.sales.exists()


class PurchaseRecordListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for purchase lists."""

    vehicle_name = serializers.CharField(source='vehicle.__str__', read_only=True)

    class Meta:
        model = PurchaseRecord
        fields = [
            'id',
            'vehicle',
            'vehicle_name',
            'purchase_price',
            'vat_type',
            'vat_amount',
            'total_cost_incl_vat',
            'supplier',
            'purchase_date',
        ]
        read_only_fields = fields
