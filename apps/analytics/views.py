from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from apps.accounts.permissions import IsVendor
from .analytics import VendorAnalytics
from .serializers import (
    # Input serializers
    RevenueSummaryQuerySerializer,
    DailyRevenueQuerySerializer,
    # Response serializers
    RevenueSummarySerializer,
    RevenueSummaryResponseSerializer,
    RepeatBuyerSerializer,
    RepeatBuyersResponseSerializer,
    DailyRevenuePointSerializer,
    DailyRevenueResponseSerializer,
)


@extend_schema(
    parameters=[RevenueSummaryQuerySerializer],
    responses={200: RevenueSummaryResponseSerializer},
    description="Revenue, order count and average order value over the last period_days days.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsVendor])
def revenue_summary(request):
    """Get the calling vendor's revenue summary - thin HTTP handler."""
    query_serializer = RevenueSummaryQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    data = VendorAnalytics.revenue_summary(
        vendor_id=request.user.id,
        period_days=query_serializer.validated_data['period_days'],
    )

    return Response({
        'success': True,
        'summary': RevenueSummarySerializer(data).data,
    })


@extend_schema(
    responses={200: RepeatBuyersResponseSerializer},
    description="Buyers with more than one order on the vendor's deals, most loyal first.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsVendor])
def repeat_buyers(request):
    """Get the calling vendor's repeat buyers - thin HTTP handler."""
    buyers = VendorAnalytics.repeat_buyers(vendor_id=request.user.id)

    return Response({
        'success': True,
        'count': len(buyers),
        'buyers': RepeatBuyerSerializer(buyers, many=True).data,
    })


@extend_schema(
    parameters=[DailyRevenueQuerySerializer],
    responses={200: DailyRevenueResponseSerializer},
    description="Zero-filled revenue per day from today - days_back to today.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsVendor])
def daily_revenue(request):
    """Get the calling vendor's daily revenue series - thin HTTP handler."""
    query_serializer = DailyRevenueQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    days_back = query_serializer.validated_data['days_back']

    series = VendorAnalytics.daily_revenue(vendor_id=request.user.id, days_back=days_back)

    return Response({
        'success': True,
        'days_back': days_back,
        'series': DailyRevenuePointSerializer(series, many=True).data,
    })
