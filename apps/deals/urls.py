from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'deals'

# Router for ViewSets
# Note: templates must be registered BEFORE empty prefix to avoid URL conflicts
router = DefaultRouter()
router.register(r'templates', views.DealTemplateViewSet, basename='template')
router.register(r'', views.DealViewSet, basename='deal')

urlpatterns = [
    # Deal ViewSet routes
    # GET    /api/deals/                  - List caller's deals (?status=)
    # POST   /api/deals/                  - Post a deal
    # GET    /api/deals/{id}/             - Get deal (?latitude=&longitude= adds distance)
    # DELETE /api/deals/{id}/             - Delete deal

    # Custom actions
    # PATCH  /api/deals/{id}/status/      - Mark sold / expired
    # PATCH  /api/deals/{id}/quantity/    - Set remaining quantity
    # GET    /api/deals/nearby/           - Deals near a point
    # GET    /api/deals/vendors/nearby/   - Vendors near a point

    # Template routes
    # GET    /api/deals/templates/                  - List templates
    # POST   /api/deals/templates/                  - Save template
    # GET    /api/deals/templates/{id}/             - Get template
    # DELETE /api/deals/templates/{id}/             - Delete template
    # POST   /api/deals/templates/{id}/create-deal/ - Post deal from template

    # Image storage
    path('images/', views.images, name='images'),

    # Include router URLs
    path('', include(router.urls)),
]
