from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # Order ViewSet routes
    # GET    /api/orders/                 - List caller's orders (buyer)
    # POST   /api/orders/                 - Reserve a deal (buyer)
    # GET    /api/orders/{id}/            - Order detail (buyer or deal vendor)

    # Custom actions
    # GET    /api/orders/vendor/          - Orders on caller's deals (?status=)
    # PATCH  /api/orders/{id}/status/     - Collected / missed / expired
    # POST   /api/orders/{id}/collect/    - Mark collected
    # PATCH  /api/orders/{id}/tracking/   - Pickup window, tracking id, ETA
    # GET    /api/orders/{id}/history/    - Status and tracking history

    path('', include(router.urls)),
]
