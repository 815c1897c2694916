from rest_framework import viewsets, mixins, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from apps.accounts.permissions import IsBuyer, IsVendor
from .serializers import (
    OrderSerializer,
    BuyerOrderListSerializer,
    VendorOrderListSerializer,
    OrderTrackingSerializer,
    OrderCreateSerializer,
    OrderStatusSerializer,
    OrderTrackingUpdateSerializer,
    VendorOrderFilterSerializer,
)
from .services import OrderService


# Response serializers for API documentation
class OrderResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    message = drf_serializers.CharField()
    order = OrderSerializer()


class OrderHistoryResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    history = OrderTrackingSerializer(many=True)


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for orders (deal reservations).

    list: The calling buyer's orders, newest first
    create: Reserve a deal
    retrieve: Order detail for its buyer or the deal's vendor
    vendor: Orders placed on the calling vendor's deals
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = OrderPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

    def get_permissions(self):
        """Buyers reserve and list; vendors run pickup."""
        if self.action in ['list', 'create']:
            return [IsAuthenticated(), IsBuyer()]
        elif self.action in ['vendor', 'update_status', 'collect', 'tracking']:
            return [IsAuthenticated(), IsVendor()]
        return super().get_permissions()

    def get_queryset(self):
        return OrderService.list_buyer_orders(buyer=self.request.user)

    def get_serializer_class(self):
        if self.action == 'list':
            return BuyerOrderListSerializer
        elif self.action == 'create':
            return OrderCreateSerializer
        elif self.action == 'vendor':
            return VendorOrderListSerializer
        return OrderSerializer

    @extend_schema(
        request=OrderCreateSerializer,
        responses={201: OrderResponseSerializer},
        tags=['orders'],
    )
    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.reserve_deal(buyer=request.user, **serializer.validated_data)

        return Response({
            'success': True,
            'message': 'Deal reserved successfully!',
            'order': OrderSerializer(order).data,
        }, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: OrderSerializer}, tags=['orders'])
    def retrieve(self, request, *args, **kwargs):
        order = OrderService.get_order(user=request.user, order_id=kwargs['pk'])
        return Response(OrderSerializer(order).data)

    @extend_schema(
        parameters=[VendorOrderFilterSerializer],
        responses={200: VendorOrderListSerializer(many=True)},
        tags=['orders'],
    )
    @action(detail=False, methods=['get'])
    def vendor(self, request):
        """
        Orders on the vendor's deals.

        GET /api/orders/vendor/?status=reserved
        """
        filter_serializer = VendorOrderFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        queryset = OrderService.list_vendor_orders(
            vendor=request.user,
            status=filter_serializer.validated_data.get('status'),
        )

        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = VendorOrderListSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        return Response(VendorOrderListSerializer(queryset, many=True).data)

    @extend_schema(
        request=OrderStatusSerializer,
        responses={200: OrderResponseSerializer},
        description="Move a reserved order to collected, missed or expired.",
        tags=['orders'],
    )
    @action(detail=True, methods=['patch'], url_path='status', url_name='status')
    def update_status(self, request, pk=None):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_order_status(
            vendor=request.user,
            order_id=pk,
            **serializer.validated_data
        )

        return Response({
            'success': True,
            'message': 'Order status updated successfully',
            'order': OrderSerializer(order).data,
        })

    @extend_schema(
        request=None,
        responses={200: OrderResponseSerializer},
        tags=['orders'],
    )
    @action(detail=True, methods=['post'])
    def collect(self, request, pk=None):
        """
        Confirm the buyer picked the order up.

        POST /api/orders/{id}/collect/
        """
        order = OrderService.mark_collected(vendor=request.user, order_id=pk)

        return Response({
            'success': True,
            'message': 'Order marked as collected successfully',
            'order': OrderSerializer(order).data,
        })

    @extend_schema(
        request=OrderTrackingUpdateSerializer,
        responses={200: OrderResponseSerializer},
        tags=['orders'],
    )
    @action(detail=True, methods=['patch'])
    def tracking(self, request, pk=None):
        serializer = OrderTrackingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_order_tracking(
            vendor=request.user,
            order_id=pk,
            **serializer.validated_data
        )

        return Response({
            'success': True,
            'message': 'Tracking information updated successfully',
            'order': OrderSerializer(order).data,
        })

    @extend_schema(responses={200: OrderHistoryResponseSerializer}, tags=['orders'])
    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        entries = OrderService.order_history(user=request.user, order_id=pk)
        return Response({
            'success': True,
            'history': OrderTrackingSerializer(entries, many=True).data,
        })
