import pytest
from datetime import timedelta
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.orders.models import Order, OrderStatus
from apps.orders.services import OrderService


@pytest.mark.django_db
class TestReserve:
    """Tests for POST /api/orders/"""

    def test_reserve_success(self, buyer_client, deal):
        url = reverse('orders:order-list')
        response = buyer_client.post(url, {'deal_id': str(deal.id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['message'] == 'Deal reserved successfully!'
        order = response.data['order']
        assert order['status'] == 'reserved'
        assert order['deal']['discounted_price'] == '30.00'
        assert order['vendor_name'] == 'Corner Bakery'

    def test_duplicate_reservation(self, buyer_client, order, deal):
        url = reverse('orders:order-list')
        response = buyer_client.post(url, {'deal_id': str(deal.id)}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data == {
            'success': False,
            'message': 'You have already reserved this deal',
        }

    def test_expired_deal(self, buyer_client, expired_deal):
        url = reverse('orders:order-list')
        response = buyer_client.post(url, {'deal_id': str(expired_deal.id)}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert not Order.objects.exists()

    def test_vendor_cannot_reserve(self, vendor_client, deal):
        url = reverse('orders:order-list')
        response = vendor_client.post(url, {'deal_id': str(deal.id)}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_missing_deal_id(self, buyer_client):
        response = buyer_client.post(reverse('orders:order-list'), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'deal_id' in response.data['errors']


@pytest.mark.django_db
class TestBuyerOrders:

    def test_list_own_orders(self, buyer_client, other_buyer, order, make_deal, vendor):
        OrderService.reserve_deal(buyer=other_buyer, deal_id=make_deal(vendor).id)

        response = buyer_client.get(reverse('orders:order-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['id'] == str(order.id)
        assert result['deal']['item_name'] == 'Croissants'

    def test_retrieve_as_buyer(self, buyer_client, order):
        url = reverse('orders:order-detail', kwargs={'pk': order.id})
        response = buyer_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['buyer_details']['phone'] == '9811100003'
        assert response.data['vendor_name'] == 'Corner Bakery'
        assert response.data['vendor_phone'] == '9811100001'

    def test_retrieve_as_vendor(self, vendor_client, order):
        url = reverse('orders:order-detail', kwargs={'pk': order.id})
        response = vendor_client.get(url)
        assert response.status_code == status.HTTP_200_OK

    def test_retrieve_as_stranger(self, other_buyer_client, order):
        url = reverse('orders:order-detail', kwargs={'pk': order.id})
        response = other_buyer_client.get(url)
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestVendorOrders:
    """Tests for GET /api/orders/vendor/"""

    def test_lists_orders_on_own_deals(self, vendor_client, order):
        response = vendor_client.get(reverse('orders:order-vendor'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['buyer_name'] == 'Asha Buyer'
        assert result['buyer_phone'] == '9811100003'

    def test_other_vendor_sees_nothing(self, other_vendor_client, order):
        response = other_vendor_client.get(reverse('orders:order-vendor'))
        assert response.data['count'] == 0

    def test_buyer_forbidden(self, buyer_client):
        response = buyer_client.get(reverse('orders:order-vendor'))
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestPickup:

    def test_collect(self, vendor_client, order):
        url = reverse('orders:order-collect', kwargs={'pk': order.id})
        response = vendor_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['order']['status'] == 'collected'
        assert response.data['order']['collected_at'] is not None

    def test_collect_twice(self, vendor_client, order):
        url = reverse('orders:order-collect', kwargs={'pk': order.id})
        vendor_client.post(url)
        response = vendor_client.post(url)
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_status_missed(self, vendor_client, order):
        url = reverse('orders:order-status', kwargs={'pk': order.id})
        response = vendor_client.patch(url, {'status': 'missed'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        order.refresh_from_db()
        assert order.status == OrderStatus.MISSED

    def test_other_vendor_cannot_update(self, other_vendor_client, order):
        url = reverse('orders:order-status', kwargs={'pk': order.id})
        response = other_vendor_client.patch(url, {'status': 'missed'}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_tracking_update(self, vendor_client, order):
        start = timezone.now() + timedelta(minutes=15)
        url = reverse('orders:order-tracking', kwargs={'pk': order.id})
        response = vendor_client.patch(url, {
            'tracking_id': 'QP-42',
            'pickup_window_start': start.isoformat(),
            'pickup_window_end': (start + timedelta(hours=1)).isoformat(),
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['order']['tracking_id'] == 'QP-42'

    def test_tracking_window_reversed(self, vendor_client, order):
        start = timezone.now() + timedelta(hours=1)
        url = reverse('orders:order-tracking', kwargs={'pk': order.id})
        response = vendor_client.patch(url, {
            'pickup_window_start': start.isoformat(),
            'pickup_window_end': (start - timedelta(minutes=10)).isoformat(),
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'pickup_window_end' in response.data['errors']

    def test_history(self, buyer_client, vendor_client, order):
        vendor_client.post(reverse('orders:order-collect', kwargs={'pk': order.id}))

        response = buyer_client.get(reverse('orders:order-history', kwargs={'pk': order.id}))

        assert response.status_code == status.HTTP_200_OK
        assert [entry['status'] for entry in response.data['history']] == ['reserved', 'collected']
        assert response.data['history'][1]['created_by_name'] == 'Corner Bakery'
