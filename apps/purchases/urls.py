from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'purchases'

router = DefaultRouter()
router.register(r'', views.PurchaseRecordViewSet, basename='purchase')

urlpatterns = [
    # Purchase ViewSet routes (back office)
    # GET    /api/purchases/                     - List purchases
    # POST   /api/purchases/                     - Record purchase
    # GET    /api/purchases/{id}/                - Purchase details
    # PUT    /api/purchases/{id}/                - Update purchase
    # PATCH  /api/purchases/{id}/                - Partial update
    # DELETE /api/purchases/{id}/                - Delete purchase

    # Custom actions
    # GET    /api/purchases/vehicle/{vehicle_id}/ - Purchase of a vehicle
    # GET    /api/purchases/export/               - CSV export
    path('', include(router.urls)),
]
