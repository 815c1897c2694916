import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.deals.models import Deal, DealStatus
from apps.orders.services import OrderService


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def _user(email, phone, name, role):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        name=name,
        phone=phone,
        role=role,
        phone_verified=True,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def vendor(db):
    return _user('orders_vendor@example.com', '9811100001', 'Corner Bakery', UserRole.VENDOR)


@pytest.fixture
def other_vendor(db):
    return _user('orders_other_vendor@example.com', '9811100002', 'Other Shop', UserRole.VENDOR)


@pytest.fixture
def buyer(db):
    return _user('orders_buyer@example.com', '9811100003', 'Asha Buyer', UserRole.BUYER)


@pytest.fixture
def other_buyer(db):
    return _user('orders_other_buyer@example.com', '9811100004', 'Ravi Buyer', UserRole.BUYER)


@pytest.fixture
def vendor_client(vendor):
    return _client_for(vendor)


@pytest.fixture
def other_vendor_client(other_vendor):
    return _client_for(other_vendor)


@pytest.fixture
def buyer_client(buyer):
    return _client_for(buyer)


@pytest.fixture
def other_buyer_client(other_buyer):
    return _client_for(other_buyer)


@pytest.fixture
def make_deal(db):
    """Factory creating deals directly through the ORM."""

    def _make(vendor, **overrides):
        data = {
            'vendor': vendor,
            'item_name': 'Croissants',
            'original_price': Decimal('60.00'),
            'discount_percent': 50,
            'quantity': 12,
            'remaining_quantity': 12,
            'expiry_time': timezone.now() + timedelta(hours=2),
            'latitude': Decimal('17.38500000'),
            'longitude': Decimal('78.48670000'),
        }
        data.update(overrides)
        return Deal.objects.create(**data)

    return _make


@pytest.fixture
def deal(make_deal, vendor):
    """Active deal with discounted price 30.00."""
    return make_deal(vendor)


@pytest.fixture
def expired_deal(make_deal, vendor):
    """Stored as active but already past expiry."""
    return make_deal(vendor, item_name='Muffins', expiry_time=timezone.now() - timedelta(minutes=1))


@pytest.fixture
def sold_deal(make_deal, vendor):
    return make_deal(vendor, item_name='Baguettes', remaining_quantity=0, status=DealStatus.SOLD)


@pytest.fixture
def order(buyer, deal):
    """Reserved order of the buyer on the vendor's deal."""
    return OrderService.reserve_deal(buyer=buyer, deal_id=deal.id)
