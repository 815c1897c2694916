from rest_framework import serializers
from apps.deals.models import Deal
from .models import Order, OrderStatus, OrderTracking


# =============================================================================
# Input Serializers
# =============================================================================

class OrderCreateSerializer(serializers.Serializer):
    """Reserve a deal."""

    deal_id = serializers.UUIDField()
    special_instructions = serializers.CharField(required=False, allow_blank=True, default='')


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class OrderTrackingUpdateSerializer(serializers.Serializer):
    """
    Validate a tracking update.

    All fields are optional; only the ones sent are changed. The window is
    checked here when both ends are sent and again in the service against
    the stored values.
    """

    tracking_id = serializers.CharField(max_length=50, required=False, allow_blank=True)
    pickup_window_start = serializers.DateTimeField(required=False, allow_null=True)
    pickup_window_end = serializers.DateTimeField(required=False, allow_null=True)
    special_instructions = serializers.CharField(required=False, allow_blank=True)
    delivery_eta = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, attrs):
        start = attrs.get('pickup_window_start')
        end = attrs.get('pickup_window_end')
        if start and end and start >= end:
            raise serializers.ValidationError({
                'pickup_window_end': 'Pickup window start must be before its end'
            })
        return attrs


class VendorOrderFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class OrderDealSerializer(serializers.ModelSerializer):
    """Deal summary embedded in orders."""

    class Meta:
        model = Deal
        fields = [
            'id',
            'deal_title',
            'item_name',
            'description',
            'discount_percent',
            'original_price',
            'discounted_price',
            'quantity_unit',
            'expiry_time',
            'image_url',
            'vendor_id',
        ]
        read_only_fields = fields


class BuyerDetailsSerializer(serializers.Serializer):
    name = serializers.CharField()
    phone = serializers.CharField()
    email = serializers.EmailField()


class OrderSerializer(serializers.ModelSerializer):
    """Full order detail, shown to both the buyer and the vendor."""

    deal = OrderDealSerializer(read_only=True)
    vendor_name = serializers.CharField(source='deal.vendor.name', read_only=True)
    vendor_phone = serializers.CharField(source='deal.vendor.phone', read_only=True)
    buyer_details = BuyerDetailsSerializer(source='buyer', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'deal',
            'vendor_name',
            'vendor_phone',
            'buyer_details',
            'status',
            'purchase_date',
            'tracking_id',
            'pickup_window_start',
            'pickup_window_end',
            'special_instructions',
            'delivery_eta',
            'collected_at',
            'created_at',
        ]
        read_only_fields = fields


class BuyerOrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the buyer's order list."""

    deal = OrderDealSerializer(read_only=True)
    vendor_name = serializers.CharField(source='deal.vendor.name', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'deal',
            'vendor_name',
            'status',
            'purchase_date',
            'pickup_window_start',
            'pickup_window_end',
            'collected_at',
            'created_at',
        ]
        read_only_fields = fields


class VendorOrderListSerializer(serializers.ModelSerializer):
    """Orders on the vendor's deals, with who to expect at the counter."""

    deal = OrderDealSerializer(read_only=True)
    buyer_name = serializers.CharField(source='buyer.name', read_only=True)
    buyer_phone = serializers.CharField(source='buyer.phone', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'deal',
            'buyer_name',
            'buyer_phone',
            'status',
            'purchase_date',
            'tracking_id',
            'pickup_window_start',
            'pickup_window_end',
            'collected_at',
            'created_at',
        ]
        read_only_fields = fields


class OrderTrackingSerializer(serializers.ModelSerializer):
    created_by_name = serializers.CharField(source='created_by.name', read_only=True, default=None)

    class Meta:
        model = OrderTracking
        fields = ['id', 'status', 'notes', 'created_by', 'created_by_name', 'created_at']
        read_only_fields = fields
