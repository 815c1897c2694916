import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User, OneTimePassword, VendorProfile, CustomerFavorite


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/ and /api/auth/register/verify/"""

    def test_register_sends_otp(self, api_client, registration_data):
        url = reverse('accounts:register')
        response = api_client.post(url, registration_data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert 'otp' not in response.data
        assert OneTimePassword.objects.filter(phone_number=registration_data['phone']).exists()
        assert not User.objects.filter(email=registration_data['email']).exists()

    def test_register_echoes_otp_when_enabled(self, api_client, registration_data, settings):
        settings.OTP_ECHO_IN_RESPONSE = True
        url = reverse('accounts:register')
        response = api_client.post(url, registration_data)

        otp = OneTimePassword.objects.get(phone_number=registration_data['phone'])
        assert response.data['otp'] == otp.code

    def test_register_duplicate_email(self, api_client, registration_data, buyer):
        registration_data['email'] = buyer.email
        url = reverse('accounts:register')
        response = api_client.post(url, registration_data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['message'] == 'An account with this email already exists'

    def test_register_invalid_role(self, api_client, registration_data):
        registration_data['role'] = 'admin'
        url = reverse('accounts:register')
        response = api_client.post(url, registration_data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'role' in response.data['errors']

    def test_register_short_phone(self, api_client, registration_data):
        registration_data['phone'] = '12345'
        url = reverse('accounts:register')
        response = api_client.post(url, registration_data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Please enter a valid phone number'

    def test_verify_creates_account_and_returns_tokens(self, api_client, registration_data):
        api_client.post(reverse('accounts:register'), registration_data)
        code = OneTimePassword.objects.get(phone_number=registration_data['phone']).code

        url = reverse('accounts:register-verify')
        response = api_client.post(url, {**registration_data, 'otp': code})

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['phone_verified'] is True
        assert User.objects.filter(email=registration_data['email']).exists()

    def test_verify_wrong_code(self, api_client, registration_data, issued_otp):
        url = reverse('accounts:register-verify')
        response = api_client.post(url, {**registration_data, 'otp': '000000'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Invalid OTP. Please check and try again.'
        assert not User.objects.filter(email=registration_data['email']).exists()


# =============================================================================
# OTP Tests
# =============================================================================

@pytest.mark.django_db
class TestOTPEndpoints:

    def test_send_and_verify(self, api_client):
        response = api_client.post(reverse('accounts:otp-send'), {'phone': '9000000007'})
        assert response.status_code == status.HTTP_200_OK

        code = OneTimePassword.objects.get(phone_number='9000000007').code
        response = api_client.post(reverse('accounts:otp-verify'), {'phone': '9000000007', 'otp': code})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'OTP verified successfully'

    def test_verify_expired(self, api_client, stale_otp):
        url = reverse('accounts:otp-verify')
        response = api_client.post(url, {'phone': stale_otp.phone_number, 'otp': stale_otp.code})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'OTP has expired. Please request a new OTP.'


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, buyer):
        url = reverse('accounts:login')
        response = api_client.post(url, {'email': buyer.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['role'] == 'buyer'

    def test_login_wrong_password(self, api_client, buyer):
        url = reverse('accounts:login')
        response = api_client.post(url, {'email': buyer.email, 'password': 'WrongPass1!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data == {'success': False, 'message': 'Invalid email or password'}

    def test_login_inactive(self, api_client, inactive_buyer):
        url = reverse('accounts:login')
        response = api_client.post(url, {'email': inactive_buyer.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_token_refresh(self, api_client, buyer):
        login = api_client.post(reverse('accounts:login'), {'email': buyer.email, 'password': 'TestPass123!'})
        url = reverse('accounts:token-refresh')
        response = api_client.post(url, {'refresh': login.data['tokens']['refresh']})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data


@pytest.mark.django_db
class TestCurrentUser:

    def test_get_current_user(self, buyer_client, buyer):
        response = buyer_client.get(reverse('accounts:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == buyer.email

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('accounts:current-user'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestVendorProfileAPI:

    def test_put_creates_profile(self, vendor_client, vendor):
        url = reverse('accounts:vendor-profile')
        response = vendor_client.put(url, {
            'full_name': 'Test Vendor',
            'shop_name': 'Fresh Fruits',
            'vendor_type': 'Grocery',
            'latitude': '17.38500000',
            'longitude': '78.48670000',
            'location_name': 'Abids',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['profile']['shop_name'] == 'Fresh Fruits'
        assert VendorProfile.objects.filter(user=vendor).exists()

    def test_rejects_out_of_range_latitude(self, vendor_client):
        url = reverse('accounts:vendor-profile')
        response = vendor_client.put(url, {
            'full_name': 'Test Vendor',
            'shop_name': 'Fresh Fruits',
            'vendor_type': 'Grocery',
            'latitude': '91',
            'longitude': '78.4867',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'latitude' in response.data['errors']

    def test_get_missing_profile(self, vendor_client):
        response = vendor_client.get(reverse('accounts:vendor-profile'))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_profile(self, vendor_client, vendor_profile):
        response = vendor_client.get(reverse('accounts:vendor-profile'))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['location_name'] == 'Abids'

    def test_buyer_forbidden(self, buyer_client):
        response = buyer_client.get(reverse('accounts:vendor-profile'))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['message'] == 'Only vendors can perform this action.'


@pytest.mark.django_db
class TestBuyerProfileAPI:

    def test_put_and_get(self, buyer_client):
        url = reverse('accounts:buyer-profile')
        response = buyer_client.put(url, {
            'full_name': 'Test Buyer',
            'latitude': '17.4',
            'longitude': '78.5',
        }, format='json')
        assert response.status_code == status.HTTP_200_OK

        response = buyer_client.get(url)
        assert response.data['full_name'] == 'Test Buyer'


# =============================================================================
# Favorites Tests
# =============================================================================

@pytest.mark.django_db
class TestFavoritesAPI:

    def test_add_list_remove(self, buyer_client, vendor, vendor_profile):
        url = reverse('accounts:favorites')
        response = buyer_client.post(url, {'vendor_id': str(vendor.id)}, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        response = buyer_client.get(url)
        assert response.data[0]['shop_name'] == 'Fresh Fruits'

        response = buyer_client.delete(reverse('accounts:favorite-remove', kwargs={'vendor_id': vendor.id}))
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert CustomerFavorite.objects.count() == 0

    def test_duplicate(self, buyer_client, vendor):
        url = reverse('accounts:favorites')
        buyer_client.post(url, {'vendor_id': str(vendor.id)}, format='json')
        response = buyer_client.post(url, {'vendor_id': str(vendor.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_followers(self, buyer_client, vendor_client, vendor):
        buyer_client.post(reverse('accounts:favorites'), {'vendor_id': str(vendor.id)}, format='json')
        response = vendor_client.get(reverse('accounts:followers'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['buyer']['name'] == 'Test Buyer'
