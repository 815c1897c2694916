from django.conf import settings
from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .permissions import IsVendor, IsBuyer
from .serializers import (
    UserSerializer,
    RegistrationStartSerializer,
    RegistrationCompleteSerializer,
    SendOTPSerializer,
    VerifyOTPSerializer,
    UserLoginSerializer,
    VendorProfileSerializer,
    BuyerProfileSerializer,
    FavoriteVendorSerializer,
    FollowerSerializer,
    AddFavoriteSerializer,
)
from .services import (
    send_otp,
    verify_otp,
    start_registration,
    complete_registration,
    authenticate_user,
    upsert_vendor_profile,
    upsert_buyer_profile,
    add_favorite,
    remove_favorite,
    list_favorites,
    list_followers,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()


class OTPSentResponseSerializer(MessageResponseSerializer):
    otp = serializers.CharField(required=False, help_text="Only returned when OTP echo is enabled")


class ErrorResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=False)
    message = serializers.CharField()
    errors = serializers.DictField(required=False)


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def _otp_sent_response(otp):
    body = {
        'success': True,
        'message': 'OTP sent successfully',
    }
    # Development convenience only; never enabled in production
    if settings.OTP_ECHO_IN_RESPONSE:
        body['otp'] = otp.code
    return Response(body)


# =============================================================================
# Registration
# =============================================================================

@extend_schema(
    request=RegistrationStartSerializer,
    responses={
        200: OTPSentResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Start registration: check that email and phone are free and send an OTP to the phone.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Validate account details and send the verification code."""
    serializer = RegistrationStartSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    otp = start_registration(
        email=serializer.validated_data['email'],
        phone=serializer.validated_data['phone'],
    )
    return _otp_sent_response(otp)


@extend_schema(
    request=RegistrationCompleteSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Complete registration with the OTP and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register_verify(request):
    """Verify the phone code, create the account and log it in."""
    serializer = RegistrationCompleteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = complete_registration(**serializer.validated_data)

    return Response({
        'success': True,
        'message': 'Registration successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, status=status.HTTP_201_CREATED)


# =============================================================================
# OTP
# =============================================================================

@extend_schema(
    request=SendOTPSerializer,
    responses={
        200: OTPSentResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Send (or resend) a verification code to a phone number.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def otp_send(request):
    serializer = SendOTPSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    otp = send_otp(phone=serializer.validated_data['phone'])
    return _otp_sent_response(otp)


@extend_schema(
    request=VerifyOTPSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Verify a code previously sent to a phone number. A code verifies only once.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def otp_verify(request):
    serializer = VerifyOTPSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    verify_otp(
        phone=serializer.validated_data['phone'],
        code=serializer.validated_data['otp'],
    )
    return Response({
        'success': True,
        'message': 'OTP verified successfully',
    })


# =============================================================================
# Login & current user
# =============================================================================

@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = authenticate_user(
        email=serializer.validated_data['email'],
        password=serializer.validated_data['password'],
    )

    return Response({
        'success': True,
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    return Response(UserSerializer(request.user).data)


# =============================================================================
# Profiles
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: VendorProfileSerializer, 404: ErrorResponseSerializer},
    description="Get the caller's shop profile.",
    tags=['profiles'],
)
@extend_schema(
    methods=['PUT'],
    request=VendorProfileSerializer,
    responses={200: VendorProfileSerializer, 400: ErrorResponseSerializer},
    description="Create or update the caller's shop profile. New deals default to this location.",
    tags=['profiles'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsVendor])
def vendor_profile(request):
    """Get or upsert the vendor shop profile."""
    if request.method == 'GET':
        profile = getattr(request.user, 'vendor_profile', None)
        if profile is None:
            return Response(
                {'success': False, 'message': 'Vendor profile not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(VendorProfileSerializer(profile).data)

    serializer = VendorProfileSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    profile = upsert_vendor_profile(user=request.user, **serializer.validated_data)

    return Response({
        'success': True,
        'message': 'Profile saved successfully',
        'profile': VendorProfileSerializer(profile).data,
    })


@extend_schema(
    methods=['GET'],
    responses={200: BuyerProfileSerializer, 404: ErrorResponseSerializer},
    description="Get the caller's buyer profile.",
    tags=['profiles'],
)
@extend_schema(
    methods=['PUT'],
    request=BuyerProfileSerializer,
    responses={200: BuyerProfileSerializer, 400: ErrorResponseSerializer},
    description="Create or update the caller's buyer profile.",
    tags=['profiles'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsBuyer])
def buyer_profile(request):
    """Get or upsert the buyer profile."""
    if request.method == 'GET':
        profile = getattr(request.user, 'buyer_profile', None)
        if profile is None:
            return Response(
                {'success': False, 'message': 'Buyer profile not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(BuyerProfileSerializer(profile).data)

    serializer = BuyerProfileSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    profile = upsert_buyer_profile(user=request.user, **serializer.validated_data)

    return Response({
        'success': True,
        'message': 'Profile saved successfully',
        'profile': BuyerProfileSerializer(profile).data,
    })


# =============================================================================
# Favorites
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: FavoriteVendorSerializer(many=True)},
    description="List vendors followed by the caller.",
    tags=['favorites'],
)
@extend_schema(
    methods=['POST'],
    request=AddFavoriteSerializer,
    responses={201: FavoriteVendorSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Follow a vendor.",
    tags=['favorites'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsBuyer])
def favorites(request):
    if request.method == 'GET':
        qs = list_favorites(buyer=request.user)
        return Response(FavoriteVendorSerializer(qs, many=True).data)

    serializer = AddFavoriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    favorite = add_favorite(buyer=request.user, vendor_id=serializer.validated_data['vendor_id'])

    return Response({
        'success': True,
        'message': 'Vendor added to favorites',
        'favorite': FavoriteVendorSerializer(favorite).data,
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    parameters=[OpenApiParameter('vendor_id', OpenApiTypes.UUID, OpenApiParameter.PATH)],
    responses={204: None, 404: ErrorResponseSerializer},
    description="Stop following a vendor.",
    tags=['favorites'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsBuyer])
def favorite_remove(request, vendor_id):
    remove_favorite(buyer=request.user, vendor_id=vendor_id)
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: FollowerSerializer(many=True)},
    description="List buyers who follow the calling vendor.",
    tags=['favorites'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsVendor])
def followers(request):
    qs = list_followers(vendor=request.user)
    return Response(FollowerSerializer(qs, many=True).data)
