"""
Domain exceptions for accounts services.

Each exception is a DRF ``APIException`` so views can let it propagate and
the project exception handler renders it as ``{success: false, message}``
with the right status code.
"""
from rest_framework.exceptions import APIException


class AccountsServiceError(APIException):
    """Base exception for accounts services."""
    status_code = 400
    default_detail = 'Account operation failed.'
    default_code = 'accounts_error'


class InvalidPhoneNumberError(AccountsServiceError):
    default_detail = 'Please enter a valid phone number'
    default_code = 'invalid_phone_number'


class OTPRequiredError(AccountsServiceError):
    default_detail = 'Phone number and OTP are required'
    default_code = 'otp_required'


class OTPNotFoundError(AccountsServiceError):
    default_detail = 'No OTP found. Please request a new OTP.'
    default_code = 'otp_not_found'


class OTPExpiredError(AccountsServiceError):
    default_detail = 'OTP has expired. Please request a new OTP.'
    default_code = 'otp_expired'


class InvalidOTPError(AccountsServiceError):
    default_detail = 'Invalid OTP. Please check and try again.'
    default_code = 'invalid_otp'


class UserRegistrationError(AccountsServiceError):
    """Raised when the account cannot be created."""
    default_detail = 'Registration failed. Please try again.'
    default_code = 'registration_failed'


class InvalidCredentialsError(AccountsServiceError):
    status_code = 401
    default_detail = 'Invalid email or password'
    default_code = 'invalid_credentials'


class InactiveAccountError(AccountsServiceError):
    status_code = 403
    default_detail = 'Account is deactivated'
    default_code = 'inactive_account'


class WrongRoleError(AccountsServiceError):
    """Raised when a vendor-only or buyer-only operation gets the other role."""
    status_code = 403
    default_detail = 'This action is not available for your account type.'
    default_code = 'wrong_role'


class UserNotFoundError(AccountsServiceError):
    status_code = 404
    default_detail = 'User not found.'
    default_code = 'user_not_found'


class AlreadyFavoriteError(AccountsServiceError):
    default_detail = 'Vendor is already in your favorites.'
    default_code = 'already_favorite'


class FavoriteNotFoundError(AccountsServiceError):
    status_code = 404
    default_detail = 'Vendor is not in your favorites.'
    default_code = 'favorite_not_found'
