from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, UserRole, VendorProfile, BuyerProfile, CustomerFavorite


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'phone',
            'role',
            'phone_verified',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (vendor names on deals, buyer names on orders)."""

    class Meta:
        model = User
        fields = ['id', 'name']
        read_only_fields = fields


# =============================================================================
# Registration & Login
# =============================================================================

class RegistrationStartSerializer(serializers.Serializer):
    """Account details submitted before phone verification."""

    name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=20)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=UserRole.choices)

    def validate_phone(self, value):
        return value.strip()


class RegistrationCompleteSerializer(RegistrationStartSerializer):
    """Same account details plus the code received by SMS."""

    otp = serializers.RegexField(regex=r'^\d{6}$', help_text='Six-digit verification code')


class SendOTPSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=20)


class VerifyOTPSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=20)
    otp = serializers.CharField(max_length=6)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


# =============================================================================
# Profiles
# =============================================================================

class VendorProfileSerializer(serializers.ModelSerializer):
    """Vendor shop profile. ``phone`` updates the account phone number."""

    phone = serializers.CharField(max_length=20, write_only=True, required=False)
    latitude = serializers.DecimalField(max_digits=10, decimal_places=8, min_value=-90, max_value=90)
    longitude = serializers.DecimalField(max_digits=11, decimal_places=8, min_value=-180, max_value=180)

    class Meta:
        model = VendorProfile
        fields = [
            'user',
            'full_name',
            'shop_name',
            'vendor_type',
            'phone',
            'phone_number',
            'latitude',
            'longitude',
            'location_name',
            'updated_at',
        ]
        read_only_fields = ['user', 'phone_number', 'updated_at']
        extra_kwargs = {
            'vendor_type': {'required': True, 'allow_blank': False},
        }


class BuyerProfileSerializer(serializers.ModelSerializer):
    """Buyer profile with saved search location."""

    latitude = serializers.DecimalField(max_digits=10, decimal_places=8, min_value=-90, max_value=90)
    longitude = serializers.DecimalField(max_digits=11, decimal_places=8, min_value=-180, max_value=180)

    class Meta:
        model = BuyerProfile
        fields = ['user', 'full_name', 'latitude', 'longitude', 'updated_at']
        read_only_fields = ['user', 'updated_at']


# =============================================================================
# Favorites
# =============================================================================

class FavoriteVendorSerializer(serializers.ModelSerializer):
    """A followed vendor with shop name."""

    vendor = UserPublicSerializer(read_only=True)
    shop_name = serializers.SerializerMethodField()

    class Meta:
        model = CustomerFavorite
        fields = ['id', 'vendor', 'shop_name', 'created_at']
        read_only_fields = fields

    def get_shop_name(self, obj):
        profile = getattr(obj.vendor, 'vendor_profile', None)
        return profile.shop_name if profile else None


class FollowerSerializer(serializers.ModelSerializer):
    """A buyer following the calling vendor."""

    buyer = UserPublicSerializer(read_only=True)

    class Meta:
        model = CustomerFavorite
        fields = ['id', 'buyer', 'created_at']
        read_only_fields = fields


class AddFavoriteSerializer(serializers.Serializer):
    vendor_id = serializers.UUIDField()
