from django.contrib import admin
from .models import Vehicle


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = [
        'brand',
        'model',
        'year',
        'price',
        'mileage',
        'status',
        'featured',
        'created_at',
    ]
    list_filter = ['status', 'featured', 'fuel', 'transmission']
    search_fields = ['brand', 'model', 'chassis_number', 'slug']
    readonly_fields = ['id', 'created_at', 'updated_at']
    ordering = ['-created_at']

    fieldsets = (
        ('Vehicle', {
            'fields': ('id', 'brand', 'model', 'year', 'price', 'mileage')
        }),
        ('Specifications', {
            'fields': ('fuel', 'transmission', 'color', 'power', 'chassis_number', 'description')
        }),
        ('Catalog', {
            'fields': ('status', 'featured', 'image_url')
        }),
        ('SEO', {
            'fields': ('slug', 'meta_title', 'meta_description'),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
