from django.contrib import admin
from .models import SaleRecord
from .services import SaleService


@admin.register(SaleRecord)
class SaleRecordAdmin(admin.ModelAdmin):
    list_display = [
        'vehicle',
        'customer_name',
        'sale_price',
        'vat_type',
        'final_price',
        'profit_incl_vat',
        'sale_date',
    ]
    list_filter = ['vat_type', 'payment_method', 'sale_date']
    search_fields = [
        'vehicle__brand',
        'vehicle__model',
        'customer_name',
        'customer_email',
        'invoice_number',
    ]
    readonly_fields = [
        'id',
        'vat_amount',
        'sale_price_incl_vat',
        'final_price',
        'profit_excl_vat',
        'profit_incl_vat',
        'created_at',
        'updated_at',
    ]
    raw_id_fields = ['vehicle', 'purchase']
    date_hierarchy = 'sale_date'

    fieldsets = (
        ('Vehicle', {
            'fields': ('id', 'vehicle', 'purchase', 'invoice_number', 'sale_date', 'delivery_date')
        }),
        ('Amounts', {
            'fields': (
                'sale_price',
                'vat_type',
                'discount',
                'vat_amount',
                'sale_price_incl_vat',
                'final_price',
                'profit_excl_vat',
                'profit_incl_vat',
            )
        }),
        ('Customer', {
            'fields': (
                'customer_name',
                'customer_email',
                'customer_phone',
                'customer_address',
                'payment_method',
                'warranty_months',
            )
        }),
        ('Notes', {
            'fields': ('notes',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def save_model(self, request, obj, form, change):
        SaleService.apply_totals(obj, SaleService.compute_totals(obj))
        super().save_model(request, obj, form, change)
