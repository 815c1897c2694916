"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidPhoneNumberError,
    OTPRequiredError,
    OTPNotFoundError,
    OTPExpiredError,
    InvalidOTPError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    WrongRoleError,
    UserNotFoundError,
    AlreadyFavoriteError,
    FavoriteNotFoundError,
)
from .otp import send_otp, verify_otp, cleanup_expired_otps, otp_validity
from .user_registration import start_registration, complete_registration
from .user_authentication import authenticate_user
from .profile_management import upsert_vendor_profile, upsert_buyer_profile
from .favorites import add_favorite, remove_favorite, list_favorites, list_followers

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidPhoneNumberError',
    'OTPRequiredError',
    'OTPNotFoundError',
    'OTPExpiredError',
    'InvalidOTPError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'WrongRoleError',
    'UserNotFoundError',
    'AlreadyFavoriteError',
    'FavoriteNotFoundError',
    # OTP
    'send_otp',
    'verify_otp',
    'cleanup_expired_otps',
    'otp_validity',
    # Registration & authentication
    'start_registration',
    'complete_registration',
    'authenticate_user',
    # Profiles
    'upsert_vendor_profile',
    'upsert_buyer_profile',
    # Favorites
    'add_favorite',
    'remove_favorite',
    'list_favorites',
    'list_followers',
]
