from rest_framework import viewsets, mixins, status, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from apps.accounts.permissions import IsVendor
from .geo import haversine_km
from .models import Deal, DealTemplate
from .permissions import CanViewDeal, IsDealOwner
from .serializers import (
    DealSerializer,
    DealListSerializer,
    NearbyDealSerializer,
    NearbyVendorSerializer,
    DealCreateSerializer,
    DealStatusSerializer,
    DealQuantitySerializer,
    VendorDealFilterSerializer,
    NearbyQuerySerializer,
    DistanceQuerySerializer,
    DealTemplateSerializer,
    DealFromTemplateSerializer,
    ImageUploadSerializer,
    ImageDeleteSerializer,
    ImageUploadResponseSerializer,
)
from .services import (
    create_deal,
    get_deal,
    delete_deal,
    list_vendor_deals,
    update_deal_status,
    update_deal_quantity,
    get_nearby_deals,
    get_nearby_vendors,
    create_template,
    list_templates,
    delete_template,
    create_deal_from_template,
    upload_image,
    delete_image,
)


# Response serializers for API documentation
class DealResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    message = drf_serializers.CharField()
    deal = DealSerializer()


class NearbyDealsResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    message = drf_serializers.CharField()
    count = drf_serializers.IntegerField()
    deals = NearbyDealSerializer(many=True)


class NearbyVendorsResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    count = drf_serializers.IntegerField()
    vendors = NearbyVendorSerializer(many=True)


class DealPagination(PageNumberPagination):
    """Custom pagination for deals."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class DealViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for deals.

    list: The calling vendor's deals (newest first, overdue ones swept to expired)
    create: Post a new deal
    retrieve: Get a deal (optionally with distance from ?latitude=&longitude=)
    destroy: Delete one of the caller's deals
    """

    queryset = Deal.objects.select_related('vendor', 'vendor__vendor_profile')
    serializer_class = DealSerializer
    permission_classes = [IsAuthenticated, IsVendor]
    pagination_class = DealPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

    def get_permissions(self):
        """Buyers may browse and view deals; everything else is vendor-only."""
        if self.action == 'retrieve':
            return [IsAuthenticated(), CanViewDeal()]
        if self.action in ['nearby', 'nearby_vendors']:
            return [IsAuthenticated()]
        return super().get_permissions()

    def get_serializer_class(self):
        if self.action == 'list':
            return DealListSerializer
        elif self.action == 'create':
            return DealCreateSerializer
        return DealSerializer

    @extend_schema(
        parameters=[VendorDealFilterSerializer],
        tags=['deals'],
    )
    def list(self, request, *args, **kwargs):
        filter_serializer = VendorDealFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        queryset = list_vendor_deals(
            vendor=request.user,
            status=filter_serializer.validated_data.get('status'),
        )

        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = DealListSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        return Response(DealListSerializer(queryset, many=True).data)

    @extend_schema(
        request=DealCreateSerializer,
        responses={201: DealResponseSerializer},
        tags=['deals'],
    )
    def create(self, request, *args, **kwargs):
        serializer = DealCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        deal = create_deal(vendor=request.user, **serializer.validated_data)

        return Response({
            'success': True,
            'message': 'Deal created successfully!',
            'deal': DealSerializer(deal).data,
        }, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[DistanceQuerySerializer],
        responses={200: NearbyDealSerializer},
        tags=['deals'],
    )
    def retrieve(self, request, *args, **kwargs):
        deal = get_deal(deal_id=kwargs['pk'])
        self.check_object_permissions(request, deal)

        params = DistanceQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        lat = params.validated_data.get('latitude')
        lon = params.validated_data.get('longitude')

        if lat is not None and lon is not None:
            deal.distance_km = haversine_km(lat, lon, deal.latitude, deal.longitude)
            return Response(NearbyDealSerializer(deal).data)
        return Response(DealSerializer(deal).data)

    @extend_schema(responses={204: None}, tags=['deals'])
    def destroy(self, request, *args, **kwargs):
        delete_deal(vendor=request.user, deal_id=kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=DealStatusSerializer,
        responses={200: DealResponseSerializer},
        description="Mark a deal sold or expired. Sold and expired deals cannot change again.",
        tags=['deals'],
    )
    @action(detail=True, methods=['patch'], url_path='status', url_name='status')
    def update_status(self, request, pk=None):
        serializer = DealStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        deal = update_deal_status(
            vendor=request.user,
            deal_id=pk,
            status=serializer.validated_data['status'],
        )

        return Response({
            'success': True,
            'message': 'Deal status updated successfully',
            'deal': DealSerializer(deal).data,
        })

    @extend_schema(
        request=DealQuantitySerializer,
        responses={200: DealResponseSerializer},
        description="Set remaining stock (0..quantity). Setting 0 marks the deal sold.",
        tags=['deals'],
    )
    @action(detail=True, methods=['patch'], url_path='quantity', url_name='quantity')
    def update_quantity(self, request, pk=None):
        serializer = DealQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        deal = update_deal_quantity(
            vendor=request.user,
            deal_id=pk,
            remaining_quantity=serializer.validated_data['remaining_quantity'],
        )

        return Response({
            'success': True,
            'message': 'Deal quantity updated successfully',
            'deal': DealSerializer(deal).data,
        })

    @extend_schema(
        parameters=[NearbyQuerySerializer],
        responses={200: NearbyDealsResponseSerializer},
        description="Active, unexpired deals within radius_km of a point, nearest first.",
        tags=['deals'],
    )
    @action(detail=False, methods=['get'])
    def nearby(self, request):
        params = NearbyQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        deals = get_nearby_deals(**params.validated_data)

        return Response({
            'success': True,
            'message': 'Nearby deals loaded successfully',
            'count': len(deals),
            'deals': NearbyDealSerializer(deals, many=True).data,
        })

    @extend_schema(
        parameters=[NearbyQuerySerializer],
        responses={200: NearbyVendorsResponseSerializer},
        description="Vendor shops within radius_km of a point, nearest first.",
        tags=['deals'],
    )
    @action(detail=False, methods=['get'], url_path='vendors/nearby', url_name='nearby-vendors')
    def nearby_vendors(self, request):
        params = NearbyQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        vendors = get_nearby_vendors(**params.validated_data)

        return Response({
            'success': True,
            'count': len(vendors),
            'vendors': NearbyVendorSerializer(vendors, many=True).data,
        })


class DealTemplateViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for the calling vendor's deal templates.

    create-deal: Post a new deal from a template
    """

    queryset = DealTemplate.objects.all()
    serializer_class = DealTemplateSerializer
    permission_classes = [IsAuthenticated, IsVendor, IsDealOwner]

    def get_queryset(self):
        if self.action == 'list':
            return list_templates(vendor=self.request.user)
        return super().get_queryset()

    def create(self, request, *args, **kwargs):
        serializer = DealTemplateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        template = create_template(vendor=request.user, **serializer.validated_data)

        return Response({
            'success': True,
            'message': 'Template saved successfully',
            'template': DealTemplateSerializer(template).data,
        }, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        delete_template(vendor=request.user, template_id=kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=DealFromTemplateSerializer,
        responses={201: DealResponseSerializer},
        tags=['deals'],
    )
    @action(detail=True, methods=['post'], url_path='create-deal', url_name='create-deal')
    def post_deal(self, request, pk=None):
        serializer = DealFromTemplateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        deal = create_deal_from_template(
            vendor=request.user,
            template_id=pk,
            **serializer.validated_data
        )

        return Response({
            'success': True,
            'message': 'Deal created successfully!',
            'deal': DealSerializer(deal).data,
        }, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['POST'],
    request={'multipart/form-data': ImageUploadSerializer},
    responses={201: ImageUploadResponseSerializer},
    description="Upload a deal image. Returns its storage key and public URL.",
    tags=['deals'],
)
@extend_schema(
    methods=['DELETE'],
    request=ImageDeleteSerializer,
    responses={204: None},
    parameters=[OpenApiParameter('key', str, description='Storage key returned by the upload')],
    description="Delete one of the caller's uploaded images.",
    tags=['deals'],
)
@api_view(['POST', 'DELETE'])
@permission_classes([IsAuthenticated, IsVendor])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def images(request):
    if request.method == 'DELETE':
        serializer = ImageDeleteSerializer(data=request.data or request.query_params)
        serializer.is_valid(raise_exception=True)
        delete_image(user=request.user, key=serializer.validated_data['key'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = ImageUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    stored = upload_image(user=request.user, file=serializer.validated_data['image'])

    return Response({
        'success': True,
        'message': 'Image uploaded successfully',
        **stored,
    }, status=status.HTTP_201_CREATED)
