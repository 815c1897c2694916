import pytest
from datetime import timedelta
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.deals.models import Deal, DealStatus, DealTemplate
from .conftest import NEAR_LAT, NEAR_LON


# =============================================================================
# Deal ViewSet
# =============================================================================

@pytest.mark.django_db
class TestDealCreate:
    """Tests for POST /api/deals/"""

    def _payload(self, **overrides):
        data = {
            'deal_title': 'Evening sale',
            'item_name': 'Mangoes',
            'original_price': '100.00',
            'discount_percent': 20,
            'quantity': 10,
            'quantity_unit': 'kg',
            'expiry_time': (timezone.now() + timedelta(hours=3)).isoformat(),
        }
        data.update(overrides)
        return data

    def test_create_success(self, vendor_client, vendor_profile):
        url = reverse('deals:deal-list')
        response = vendor_client.post(url, self._payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        deal = response.data['deal']
        assert deal['discounted_price'] == '80.00'
        assert deal['remaining_quantity'] == 10
        assert deal['shop_name'] == 'Fresh Fruits'
        assert deal['status'] == 'active'

    def test_create_without_shop_location(self, vendor_client):
        url = reverse('deals:deal-list')
        response = vendor_client.post(url, self._payload(), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert 'shop location' in response.data['message']

    def test_buyer_cannot_create(self, buyer_client):
        url = reverse('deals:deal-list')
        response = buyer_client.post(url, self._payload(), format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_discount_out_of_range(self, vendor_client, vendor_profile):
        url = reverse('deals:deal-list')
        response = vendor_client.post(url, self._payload(discount_percent=150), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'discount_percent' in response.data['errors']

    def test_latitude_without_longitude(self, vendor_client, vendor_profile):
        url = reverse('deals:deal-list')
        response = vendor_client.post(url, self._payload(latitude='17.4'), format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestDealList:
    """Tests for GET /api/deals/"""

    def test_lists_only_own_deals_and_sweeps(self, vendor_client, active_deal, overdue_deal, make_deal, other_vendor):
        make_deal(other_vendor)
        url = reverse('deals:deal-list')
        response = vendor_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        statuses = {r['id']: r['status'] for r in response.data['results']}
        assert statuses[str(overdue_deal.id)] == 'expired'
        assert statuses[str(active_deal.id)] == 'active'

    def test_status_filter(self, vendor_client, active_deal, sold_deal):
        url = reverse('deals:deal-list')
        response = vendor_client.get(url, {'status': 'sold'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['id'] == str(sold_deal.id)

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('deals:deal-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestDealRetrieve:

    def test_buyer_views_available_deal(self, buyer_client, active_deal):
        url = reverse('deals:deal-detail', kwargs={'pk': active_deal.id})
        response = buyer_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['item_name'] == 'Mangoes'
        assert response.data['vendor_name'] == 'Deals Vendor'
        assert response.data['vendor_phone'] == '9876500001'
        assert set(response.data['time_remaining']) == {'hours', 'minutes', 'seconds', 'total_seconds'}
        assert 'distance_km' not in response.data

    def test_distance_from_query_point(self, buyer_client, active_deal):
        url = reverse('deals:deal-detail', kwargs={'pk': active_deal.id})
        response = buyer_client.get(url, {'latitude': str(NEAR_LAT), 'longitude': str(NEAR_LON)})

        assert response.data['distance_km'] == pytest.approx(2.185, abs=0.01)
        assert response.data['distance_display'] == '2.2km'
        assert response.data['vendor_phone'] == '9876500001'

    def test_distance_needs_both_coordinates(self, buyer_client, active_deal):
        url = reverse('deals:deal-detail', kwargs={'pk': active_deal.id})
        response = buyer_client.get(url, {'latitude': str(NEAR_LAT)})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False

    def test_buyer_cannot_view_sold_deal(self, buyer_client, sold_deal):
        url = reverse('deals:deal-detail', kwargs={'pk': sold_deal.id})
        response = buyer_client.get(url)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_views_sold_deal(self, vendor_client, sold_deal):
        url = reverse('deals:deal-detail', kwargs={'pk': sold_deal.id})
        response = vendor_client.get(url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data['effective_status'] == 'sold'

    def test_not_found(self, buyer_client):
        url = reverse('deals:deal-detail', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})
        response = buyer_client.get(url)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == 'Deal not found'


@pytest.mark.django_db
class TestDealDelete:

    def test_owner_deletes(self, vendor_client, active_deal):
        url = reverse('deals:deal-detail', kwargs={'pk': active_deal.id})
        response = vendor_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Deal.objects.filter(id=active_deal.id).exists()

    def test_other_vendor_forbidden(self, other_vendor_client, active_deal):
        url = reverse('deals:deal-detail', kwargs={'pk': active_deal.id})
        response = other_vendor_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Deal.objects.filter(id=active_deal.id).exists()


# =============================================================================
# Lifecycle actions
# =============================================================================

@pytest.mark.django_db
class TestDealQuantity:
    """Tests for PATCH /api/deals/{id}/quantity/"""

    def test_zero_marks_sold(self, vendor_client, make_deal, vendor):
        deal = make_deal(vendor, quantity=10, remaining_quantity=3)
        url = reverse('deals:deal-quantity', kwargs={'pk': deal.id})
        response = vendor_client.patch(url, {'remaining_quantity': 0}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['deal']['status'] == 'sold'
        assert response.data['deal']['remaining_quantity'] == 0

    def test_out_of_range_message(self, vendor_client, active_deal):
        url = reverse('deals:deal-quantity', kwargs={'pk': active_deal.id})
        response = vendor_client.patch(url, {'remaining_quantity': 11}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            'success': False,
            'message': 'Remaining quantity must be between 0 and 10',
        }

    def test_other_vendor_forbidden(self, other_vendor_client, active_deal):
        url = reverse('deals:deal-quantity', kwargs={'pk': active_deal.id})
        response = other_vendor_client.patch(url, {'remaining_quantity': 2}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['message'] == 'You can only update your own deals'


@pytest.mark.django_db
class TestDealStatus:
    """Tests for PATCH /api/deals/{id}/status/"""

    def test_mark_sold(self, vendor_client, active_deal):
        url = reverse('deals:deal-status', kwargs={'pk': active_deal.id})
        response = vendor_client.patch(url, {'status': 'sold'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        active_deal.refresh_from_db()
        assert active_deal.status == DealStatus.SOLD

    def test_cannot_reactivate(self, vendor_client, sold_deal):
        url = reverse('deals:deal-status', kwargs={'pk': sold_deal.id})
        response = vendor_client.patch(url, {'status': 'active'}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_invalid_choice(self, vendor_client, active_deal):
        url = reverse('deals:deal-status', kwargs={'pk': active_deal.id})
        response = vendor_client.patch(url, {'status': 'archived'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Discovery
# =============================================================================

@pytest.mark.django_db
class TestNearby:
    """Tests for GET /api/deals/nearby/ and /api/deals/vendors/nearby/"""

    def test_nearby_deals(self, buyer_client, active_deal, overdue_deal, make_deal, vendor):
        near = make_deal(vendor, item_name='Guavas', latitude=NEAR_LAT, longitude=NEAR_LON)
        url = reverse('deals:deal-nearby')
        response = buyer_client.get(url, {'latitude': 17.385, 'longitude': 78.4867, 'radius_km': 5})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        ids = [d['id'] for d in response.data['deals']]
        assert ids == [str(active_deal.id), str(near.id)]
        assert response.data['deals'][0]['distance_display'] == '0m'

    def test_missing_coordinates(self, buyer_client):
        response = buyer_client.get(reverse('deals:deal-nearby'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'latitude' in response.data['errors']

    def test_zero_radius(self, buyer_client):
        url = reverse('deals:deal-nearby')
        response = buyer_client.get(url, {'latitude': 17.385, 'longitude': 78.4867, 'radius_km': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Radius must be greater than 0'

    def test_nearby_vendors(self, buyer_client, vendor_profile, active_deal):
        url = reverse('deals:deal-nearby-vendors')
        response = buyer_client.get(url, {'latitude': 17.4, 'longitude': 78.5})

        assert response.status_code == status.HTTP_200_OK
        vendor = response.data['vendors'][0]
        assert vendor['shop_name'] == 'Fresh Fruits'
        assert vendor['active_deals'] == 1


# =============================================================================
# Templates & images
# =============================================================================

@pytest.mark.django_db
class TestTemplates:

    def test_create_and_list(self, vendor_client):
        url = reverse('deals:template-list')
        response = vendor_client.post(url, {
            'template_name': 'Bread clearance',
            'item_name': 'Bread',
            'discount_percent': 40,
            'original_price': '50.00',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        response = vendor_client.get(url)
        assert [t['template_name'] for t in response.data] == ['Bread clearance']

    def test_list_only_own(self, other_vendor_client, template):
        response = other_vendor_client.get(reverse('deals:template-list'))
        assert response.data == []

    def test_create_deal_from_template(self, vendor_client, template, vendor_profile):
        url = reverse('deals:template-create-deal', kwargs={'pk': template.id})
        response = vendor_client.post(url, {
            'quantity': 8,
            'expiry_time': (timezone.now() + timedelta(hours=2)).isoformat(),
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['deal']['discounted_price'] == '84.00'

    def test_other_vendor_cannot_delete(self, other_vendor_client, template):
        url = reverse('deals:template-detail', kwargs={'pk': template.id})
        response = other_vendor_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert DealTemplate.objects.filter(id=template.id).exists()


@pytest.mark.django_db
class TestImages:

    def test_upload(self, vendor_client, vendor, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        upload = SimpleUploadedFile('photo.jpg', b'\xff\xd8\xff fake jpeg', content_type='image/jpeg')
        response = vendor_client.post(reverse('deals:images'), {'image': upload}, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['key'].startswith(f"{vendor.id}/")
        assert response.data['key'].endswith('.jpg')

    def test_rejects_non_image(self, vendor_client, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        upload = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        response = vendor_client.post(reverse('deals:images'), {'image': upload}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
