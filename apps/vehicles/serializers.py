from rest_framework import serializers
from .models import Vehicle, VehicleStatus


# =============================================================================
# Input Serializers
# =============================================================================

class VehicleFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for vehicle filtering.

    Query Parameters:
        status (str): Filter by catalog status
        featured (bool): Only featured / non-featured vehicles
        brand (str): Filter by brand (case-insensitive)
    """

    status = serializers.ChoiceField(choices=VehicleStatus.choices, required=False)
    featured = serializers.BooleanField(required=False, allow_null=True, default=None)
    brand = serializers.CharField(max_length=100, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class VehicleSerializer(serializers.ModelSerializer):
    """Full vehicle serializer for detail views and back-office edits."""

    class Meta:
        model = Vehicle
        fields = [
            'id',
            'brand',
            'model',
            'year',
            'price',
            'mileage',
            'fuel',
            'transmission',
            'color',
            'power',
            'chassis_number',
            'description',
            'status',
            'featured',
            'image_url',
            'slug',
            'meta_title',
            'meta_description',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'slug',
            'meta_title',
            'meta_description',
            'created_at',
            'updated_at',
        ]


class VehicleListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for catalog listings."""

    title = serializers.SerializerMethodField()

    class Meta:
        model = Vehicle
        fields = [
            'id',
            'title',
            'brand',
            'model',
            'year',
            'price',
            'mileage',
            'fuel',
            'transmission',
            'status',
            'featured',
            'image_url',
            'slug',
        ]
        read_only_fields = fields

    def get_title(self, obj):
        return f"{obj.brand} {obj.model}"
