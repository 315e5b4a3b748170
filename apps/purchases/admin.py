from django.contrib import admin
from .models import PurchaseRecord
from .services import PurchaseService


@admin.register(PurchaseRecord)
class PurchaseRecordAdmin(admin.ModelAdmin):
    """
    Admin for purchases.

    Derived totals are read-only; saving recomputes them from the amounts.
    Linked sales are only recomputed through the API.
    """

    list_display = [
        'vehicle',
        'purchase_price',
        'vat_type',
        'vat_amount',
        'total_cost_incl_vat',
        'supplier',
        'purchase_date',
    ]
    list_filter = ['vat_type', 'purchase_date']
    search_fields = ['vehicle__brand', 'vehicle__model', 'supplier', 'invoice_number']
    readonly_fields = [
        'id',
        'vat_amount',
        'total_cost_incl_vat',
        'created_at',
        'updated_at',
    ]
    raw_id_fields = ['vehicle']
    date_hierarchy = 'purchase_date'

    fieldsets = (
        ('Vehicle', {
            'fields': ('id', 'vehicle', 'supplier', 'invoice_number', 'purchase_date')
        }),
        ('Amounts (excl. VAT)', {
            'fields': (
                'purchase_price',
                'vat_type',
                'bpm_amount',
                'transport_cost',
                'maintenance_cost',
                'cleaning_cost',
                'guarantee_cost',
                'other_costs',
            )
        }),
        ('Totals', {
            'fields': ('vat_amount', 'total_cost_incl_vat')
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
        PurchaseService.apply_totals(obj, PurchaseService.totals_for(obj))
        super().save_model(request, obj, form, change)
