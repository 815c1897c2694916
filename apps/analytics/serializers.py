"""
Serializers for analytics app.

Input Serializers:
    RevenueSummaryQuerySerializer - Validates the summary window
    DailyRevenueQuerySerializer - Validates how many days the series covers

Response Serializers (API Documentation):
    RevenueSummarySerializer, RepeatBuyerSerializer, DailyRevenuePointSerializer
    and the response envelopes built from them.
"""
from rest_framework import serializers


# =============================================================================
# Input Serializers
# =============================================================================

class RevenueSummaryQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the revenue summary.

    Query Parameters:
        period_days (int): Trailing window in days (1-365, default 30)
    """

    period_days = serializers.IntegerField(
        min_value=1,
        max_value=365,
        default=30,
        help_text='Trailing window in days (1-365)'
    )


class DailyRevenueQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the daily revenue series.

    Query Parameters:
        days_back (int): Days before today to start from (0-365, default 30)
    """

    days_back = serializers.IntegerField(
        min_value=0,
        max_value=365,
        default=30,
        help_text='Days before today to start the series from (0-365)'
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class RevenueSummarySerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_orders = serializers.IntegerField()
    avg_order_value = serializers.DecimalField(max_digits=12, decimal_places=2)
    period_start = serializers.DateTimeField()
    period_end = serializers.DateTimeField()


class RevenueSummaryResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    summary = RevenueSummarySerializer()


class RepeatBuyerSerializer(serializers.Serializer):
    buyer_id = serializers.UUIDField()
    buyer_name = serializers.CharField()
    buyer_phone = serializers.CharField()
    total_orders = serializers.IntegerField()
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2)
    last_order_date = serializers.DateTimeField()


class RepeatBuyersResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    count = serializers.IntegerField()
    buyers = RepeatBuyerSerializer(many=True)


class DailyRevenuePointSerializer(serializers.Serializer):
    """Single day in the revenue series."""
    date = serializers.DateField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    order_count = serializers.IntegerField()


class DailyRevenueResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    days_back = serializers.IntegerField()
    series = DailyRevenuePointSerializer(many=True)
