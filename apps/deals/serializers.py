from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field
from apps.accounts.models import VendorProfile
from .geo import format_distance
from .models import Deal, DealStatus, DealTemplate


class TimeRemainingSerializer(serializers.Serializer):
    hours = serializers.IntegerField()
    minutes = serializers.IntegerField()
    seconds = serializers.IntegerField()
    total_seconds = serializers.IntegerField()


class DealSerializer(serializers.ModelSerializer):
    """Full deal representation with vendor info and countdown."""

    vendor_name = serializers.CharField(source='vendor.name', read_only=True)
    vendor_phone = serializers.CharField(source='vendor.phone', read_only=True)
    shop_name = serializers.SerializerMethodField()
    effective_status = serializers.CharField(read_only=True)
    time_remaining = serializers.SerializerMethodField()

    class Meta:
        model = Deal
        fields = [
            'id',
            'vendor',
            'vendor_name',
            'vendor_phone',
            'shop_name',
            'deal_title',
            'item_name',
            'description',
            'original_price',
            'discount_percent',
            'discounted_price',
            'quantity',
            'quantity_unit',
            'remaining_quantity',
            'start_date',
            'expiry_time',
            'latitude',
            'longitude',
            'location_name',
            'image_url',
            'promo_code',
            'notify_customers',
            'repeat_buyers_only',
            'status',
            'effective_status',
            'time_remaining',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_shop_name(self, obj):
        profile = getattr(obj.vendor, 'vendor_profile', None)
        return profile.shop_name if profile else None

    @extend_schema_field(TimeRemainingSerializer)
    def get_time_remaining(self, obj):
        return obj.time_remaining()


class DealListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the vendor's deal list."""

    effective_status = serializers.CharField(read_only=True)

    class Meta:
        model = Deal
        fields = [
            'id',
            'deal_title',
            'item_name',
            'discounted_price',
            'original_price',
            'discount_percent',
            'quantity',
            'quantity_unit',
            'remaining_quantity',
            'expiry_time',
            'image_url',
            'status',
            'effective_status',
            'created_at',
        ]
        read_only_fields = fields


class NearbyDealSerializer(DealSerializer):
    """Deal as seen by a buyer searching around a point."""

    distance_km = serializers.SerializerMethodField()
    distance_display = serializers.SerializerMethodField()

    class Meta(DealSerializer.Meta):
        fields = DealSerializer.Meta.fields + ['distance_km', 'distance_display']
        read_only_fields = fields

    def get_distance_km(self, obj) -> float:
        return round(obj.distance_km, 3)

    def get_distance_display(self, obj) -> str:
        return format_distance(obj.distance_km)


class NearbyVendorSerializer(serializers.ModelSerializer):
    vendor_id = serializers.UUIDField(source='user_id', read_only=True)
    name = serializers.CharField(source='user.name', read_only=True)
    active_deals = serializers.IntegerField(read_only=True)
    distance_km = serializers.SerializerMethodField()
    distance_display = serializers.SerializerMethodField()

    class Meta:
        model = VendorProfile
        fields = [
            'vendor_id',
            'name',
            'shop_name',
            'vendor_type',
            'latitude',
            'longitude',
            'location_name',
            'active_deals',
            'distance_km',
            'distance_display',
        ]
        read_only_fields = fields

    def get_distance_km(self, obj) -> float:
        return round(obj.distance_km, 3)

    def get_distance_display(self, obj) -> str:
        return format_distance(obj.distance_km)


# =============================================================================
# Input serializers
# =============================================================================

class DealCreateSerializer(serializers.Serializer):
    """Input for posting a deal. Location defaults to the shop location."""

    deal_title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    item_name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    original_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    discount_percent = serializers.IntegerField(min_value=0, max_value=100)
    quantity = serializers.IntegerField(min_value=1)
    quantity_unit = serializers.CharField(max_length=30, required=False, default='items')
    start_date = serializers.DateTimeField(required=False)
    expiry_time = serializers.DateTimeField()
    latitude = serializers.DecimalField(max_digits=10, decimal_places=8, min_value=-90, max_value=90, required=False)
    longitude = serializers.DecimalField(max_digits=11, decimal_places=8, min_value=-180, max_value=180, required=False)
    location_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True)
    promo_code = serializers.CharField(max_length=50, required=False, allow_blank=True)
    notify_customers = serializers.BooleanField(required=False, default=False)
    repeat_buyers_only = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if ('latitude' in attrs) != ('longitude' in attrs):
            raise serializers.ValidationError('Provide both latitude and longitude, or neither')
        start = attrs.get('start_date')
        if start and attrs['expiry_time'] <= start:
            raise serializers.ValidationError({'expiry_time': 'Expiry time must be after the start date'})
        return attrs


class DealStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DealStatus.choices)


class DealQuantitySerializer(serializers.Serializer):
    # Range is checked against the deal's own quantity in the service
    remaining_quantity = serializers.IntegerField()


class VendorDealFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DealStatus.choices, required=False)


class NearbyQuerySerializer(serializers.Serializer):
    """Query parameters for the nearby deals and nearby vendors searches."""

    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    radius_km = serializers.FloatField(required=False, help_text='Search radius in km (default 5)')


class DistanceQuerySerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False)

    def validate(self, attrs):
        if ('latitude' in attrs) != ('longitude' in attrs):
            raise serializers.ValidationError('Provide both latitude and longitude, or neither')
        return attrs


# =============================================================================
# Templates & images
# =============================================================================

class DealTemplateSerializer(serializers.ModelSerializer):
    discount_percent = serializers.IntegerField(min_value=0, max_value=100)

    class Meta:
        model = DealTemplate
        fields = [
            'id',
            'template_name',
            'item_name',
            'description',
            'discount_percent',
            'original_price',
            'image_url',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']


class DealFromTemplateSerializer(serializers.Serializer):
    deal_title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    quantity = serializers.IntegerField(min_value=1)
    quantity_unit = serializers.CharField(max_length=30, required=False, default='items')
    start_date = serializers.DateTimeField(required=False)
    expiry_time = serializers.DateTimeField()


class ImageUploadSerializer(serializers.Serializer):
    image = serializers.FileField()


class ImageDeleteSerializer(serializers.Serializer):
    key = serializers.CharField(max_length=255)


class ImageUploadResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    key = serializers.CharField()
    url = serializers.CharField()
