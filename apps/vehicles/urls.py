from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'vehicles'

router = DefaultRouter()
router.register(r'', views.VehicleViewSet, basename='vehicle')

urlpatterns = [
    # GET    /api/vehicles/                - Catalog (public)
    # POST   /api/vehicles/                - Add vehicle (staff)
    # GET    /api/vehicles/{id}/           - Vehicle details (public)
    # PATCH  /api/vehicles/{id}/           - Update vehicle (staff)
    # DELETE /api/vehicles/{id}/           - Remove vehicle (staff)
    # GET    /api/vehicles/featured/       - Featured vehicles
    # GET    /api/vehicles/slug/{slug}/    - Vehicle by SEO slug
    path('', include(router.urls)),
]
