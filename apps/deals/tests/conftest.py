import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole, VendorProfile
from apps.deals.models import Deal, DealStatus, DealTemplate


# Central Hyderabad and a point ~2.185 km north-east of it
SHOP_LAT, SHOP_LON = Decimal('17.38500000'), Decimal('78.48670000')
NEAR_LAT, NEAR_LON = Decimal('17.40000000'), Decimal('78.50000000')
FAR_LAT, FAR_LON = Decimal('17.45000000'), Decimal('78.55000000')


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def vendor(db):
    return User.objects.create_user(
        email='deals_vendor@example.com',
        password='TestPass123!',
        name='Deals Vendor',
        phone='9876500001',
        role=UserRole.VENDOR,
        phone_verified=True,
    )


@pytest.fixture
def vendor_profile(vendor):
    return VendorProfile.objects.create(
        user=vendor,
        full_name='Deals Vendor',
        shop_name='Fresh Fruits',
        vendor_type='Grocery',
        phone_number=vendor.phone,
        latitude=SHOP_LAT,
        longitude=SHOP_LON,
        location_name='Abids',
    )


@pytest.fixture
def other_vendor(db):
    return User.objects.create_user(
        email='deals_other_vendor@example.com',
        password='TestPass123!',
        name='Other Vendor',
        phone='9876500002',
        role=UserRole.VENDOR,
        phone_verified=True,
    )


@pytest.fixture
def buyer(db):
    return User.objects.create_user(
        email='deals_buyer@example.com',
        password='TestPass123!',
        name='Deals Buyer',
        phone='9876500003',
        role=UserRole.BUYER,
        phone_verified=True,
    )


@pytest.fixture
def vendor_client(vendor):
    """Return API client authenticated as the vendor."""
    return _client_for(vendor)


@pytest.fixture
def other_vendor_client(other_vendor):
    return _client_for(other_vendor)


@pytest.fixture
def buyer_client(buyer):
    """Return API client authenticated as the buyer."""
    return _client_for(buyer)


# =============================================================================
# Deals
# =============================================================================

@pytest.fixture
def make_deal(db):
    """Factory creating deals directly through the ORM."""

    def _make(vendor, **overrides):
        data = {
            'vendor': vendor,
            'item_name': 'Mangoes',
            'original_price': Decimal('100.00'),
            'discount_percent': 20,
            'quantity': 10,
            'remaining_quantity': overrides.get('quantity', 10),
            'expiry_time': timezone.now() + timedelta(hours=3),
            'latitude': SHOP_LAT,
            'longitude': SHOP_LON,
            'location_name': 'Abids',
        }
        data.update(overrides)
        return Deal.objects.create(**data)

    return _make


@pytest.fixture
def active_deal(make_deal, vendor, vendor_profile):
    return make_deal(vendor)


@pytest.fixture
def overdue_deal(make_deal, vendor):
    """Stored as active but past its expiry time."""
    return make_deal(vendor, item_name='Bananas', expiry_time=timezone.now() - timedelta(minutes=5))


@pytest.fixture
def sold_deal(make_deal, vendor):
    return make_deal(vendor, item_name='Apples', remaining_quantity=0, status=DealStatus.SOLD)


@pytest.fixture
def template(vendor):
    return DealTemplate.objects.create(
        vendor=vendor,
        template_name='Evening mango sale',
        item_name='Mangoes',
        description='Ripe Banganapalli',
        discount_percent=30,
        original_price=Decimal('120.00'),
    )
