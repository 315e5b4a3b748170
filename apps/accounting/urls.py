from django.urls import path
from . import views

app_name = 'accounting'

urlpatterns = [
    # Live calculator previews
    path('preview/purchase/', views.preview_purchase, name='preview-purchase'),
    path('preview/sale/', views.preview_sale, name='preview-sale'),

    # Reporting
    path('overview/', views.overview, name='overview'),
]
