from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'sales'

router = DefaultRouter()
router.register(r'', views.SaleRecordViewSet, basename='sale')

urlpatterns = [
    # Sale ViewSet routes (back office)
    # GET    /api/sales/                     - List sales
    # POST   /api/sales/                     - Record sale
    # GET    /api/sales/{id}/                - Sale details
    # PUT    /api/sales/{id}/                - Update sale
    # PATCH  /api/sales/{id}/                - Partial update
    # DELETE /api/sales/{id}/                - Delete sale

    # Custom actions
    # GET    /api/sales/vehicle/{vehicle_id}/ - Sale of a vehicle
    # GET    /api/sales/export/               - CSV export
    path('', include(router.urls)),
]
