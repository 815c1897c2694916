import pytest
from decimal import Decimal
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.deals.models import Deal
from apps.orders.models import Order, OrderStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

def _create_user(email, phone, name, role):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        name=name,
        phone=phone,
        role=role,
        phone_verified=True,
    )


@pytest.fixture
def analytics_vendor(db):
    """Create the vendor whose revenue is analysed."""
    return _create_user('analytics_vendor@example.com', '9822200001', 'Analytics Vendor', UserRole.VENDOR)


@pytest.fixture
def analytics_other_vendor(db):
    return _create_user('analytics_other@example.com', '9822200002', 'Other Vendor', UserRole.VENDOR)


@pytest.fixture
def analytics_buyer1(db):
    return _create_user('analytics_buyer1@example.com', '9822200003', 'Buyer One', UserRole.BUYER)


@pytest.fixture
def analytics_buyer2(db):
    return _create_user('analytics_buyer2@example.com', '9822200004', 'Buyer Two', UserRole.BUYER)


@pytest.fixture
def analytics_vendor_client(api_client, analytics_vendor):
    """Return API client authenticated as the analytics vendor."""
    refresh = RefreshToken.for_user(analytics_vendor)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def analytics_buyer_client(api_client, analytics_buyer1):
    """Return API client authenticated as a buyer."""
    refresh = RefreshToken.for_user(analytics_buyer1)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


# =============================================================================
# Deals & orders
# =============================================================================

@pytest.fixture
def make_deal(db):
    def _make(vendor, price, **overrides):
        data = {
            'vendor': vendor,
            'item_name': 'Samosas',
            'original_price': Decimal(price),
            'discount_percent': 0,
            'quantity': 20,
            'remaining_quantity': 20,
            'expiry_time': timezone.now() + timedelta(hours=4),
            'latitude': Decimal('17.38500000'),
            'longitude': Decimal('78.48670000'),
        }
        data.update(overrides)
        return Deal.objects.create(**data)
    return _make


@pytest.fixture
def place_order(db):
    """
    Create an order directly, optionally backdated.

    ``created_at`` is auto-set on insert, so backdating is done with an
    update afterwards.
    """
    def _place(buyer, deal, status=OrderStatus.RESERVED, days_ago=0):
        order = Order.objects.create(buyer=buyer, deal=deal, status=status)
        if days_ago:
            Order.objects.filter(id=order.id).update(
                created_at=timezone.now() - timedelta(days=days_ago)
            )
            order.refresh_from_db()
        return order
    return _place


@pytest.fixture
def deal_30(make_deal, analytics_vendor):
    return make_deal(analytics_vendor, '30.00', item_name='Samosas')


@pytest.fixture
def deal_45(make_deal, analytics_vendor):
    return make_deal(analytics_vendor, '45.00', item_name='Jalebi')


@pytest.fixture
def deal_60(make_deal, analytics_vendor):
    return make_deal(analytics_vendor, '60.00', item_name='Biryani')


@pytest.fixture
def revenue_orders(place_order, analytics_buyer1, analytics_buyer2, deal_30, deal_45, deal_60):
    """
    Buyer one: collected 30.00 today, reserved 45.00 two days ago.
    Buyer two: reserved 60.00 today, missed 30.00 (does not count).
    """
    return [
        place_order(analytics_buyer1, deal_30, status=OrderStatus.COLLECTED),
        place_order(analytics_buyer1, deal_45, days_ago=2),
        place_order(analytics_buyer2, deal_60),
        place_order(analytics_buyer2, deal_30, status=OrderStatus.MISSED),
    ]
