from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

app_name = 'accounts'

urlpatterns = [
    # Registration (two steps)
    path('register/', views.register, name='register'),
    path('register/verify/', views.register_verify, name='register-verify'),

    # Phone verification
    path('otp/send/', views.otp_send, name='otp-send'),
    path('otp/verify/', views.otp_verify, name='otp-verify'),

    # Authentication
    path('login/', views.login, name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('user/', views.get_current_user, name='current-user'),

    # Profiles
    path('profile/vendor/', views.vendor_profile, name='vendor-profile'),
    path('profile/buyer/', views.buyer_profile, name='buyer-profile'),

    # Favorites
    path('favorites/', views.favorites, name='favorites'),
    path('favorites/followers/', views.followers, name='followers'),
    path('favorites/<uuid:vendor_id>/', views.favorite_remove, name='favorite-remove'),
]
