from django.urls import path
from . import views

app_name = 'invoices'

urlpatterns = [
    path('purchase/<uuid:vehicle_id>/', views.purchase_invoice, name='purchase-invoice'),
    path('sale/<uuid:vehicle_id>/', views.sale_invoice, name='sale-invoice'),
]
