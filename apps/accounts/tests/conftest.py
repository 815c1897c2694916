import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole, VendorProfile, OneTimePassword


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def registration_data():
    """Valid payload for both registration steps (minus the OTP)."""
    return {
        'name': 'Ravi Kumar',
        'email': 'ravi@example.com',
        'phone': '9000000001',
        'password': 'SecurePass123!',
        'role': UserRole.BUYER,
    }


@pytest.fixture
def vendor(db):
    """Create and return a vendor account."""
    return User.objects.create_user(
        email='vendor@example.com',
        password='TestPass123!',
        name='Test Vendor',
        phone='9876543210',
        role=UserRole.VENDOR,
        phone_verified=True,
    )


@pytest.fixture
def vendor_profile(vendor):
    """Shop profile in central Hyderabad."""
    return VendorProfile.objects.create(
        user=vendor,
        full_name='Test Vendor',
        shop_name='Fresh Fruits',
        vendor_type='Grocery',
        phone_number=vendor.phone,
        latitude=Decimal('17.38500000'),
        longitude=Decimal('78.48670000'),
        location_name='Abids',
    )


@pytest.fixture
def buyer(db):
    """Create and return a buyer account."""
    return User.objects.create_user(
        email='buyer@example.com',
        password='TestPass123!',
        name='Test Buyer',
        phone='9123456780',
        role=UserRole.BUYER,
        phone_verified=True,
    )


@pytest.fixture
def inactive_buyer(db):
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        name='Inactive Buyer',
        phone='9111111111',
        role=UserRole.BUYER,
        is_active=False,
    )


@pytest.fixture
def vendor_client(vendor):
    """Return an API client authenticated as the vendor."""
    return _client_for(vendor)


@pytest.fixture
def buyer_client(buyer):
    """Return an API client authenticated as the buyer."""
    return _client_for(buyer)


@pytest.fixture
def issued_otp(db):
    """A fresh code for a phone number that has no account yet."""
    return OneTimePassword.objects.create(phone_number='9000000001', code='123456')


@pytest.fixture
def stale_otp(db):
    """A code issued ten minutes ago."""
    return OneTimePassword.objects.create(
        phone_number='9000000002',
        code='654321',
        created_at=timezone.now() - timedelta(minutes=10),
    )
