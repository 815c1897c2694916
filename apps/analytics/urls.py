from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Vendor revenue (scoped to the calling vendor)
    path('vendor/revenue-summary/', views.revenue_summary, name='revenue-summary'),
    path('vendor/repeat-buyers/', views.repeat_buyers, name='repeat-buyers'),
    path('vendor/daily-revenue/', views.daily_revenue, name='daily-revenue'),
]
