"""
Phone verification (OTP) service.

A phone number holds at most one live code. Codes are six digits, valid for
``OTP_VALIDITY_MINUTES`` and deleted as soon as they are used or found
expired, so each code verifies at most once.
"""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from ..models import OneTimePassword
from .exceptions import (
    InvalidPhoneNumberError,
    OTPRequiredError,
    OTPNotFoundError,
    OTPExpiredError,
    InvalidOTPError,
)

logger = logging.getLogger(__name__)

MIN_PHONE_LENGTH = 10


def otp_validity() -> timedelta:
    """Validity window of a phone verification code."""
    return timedelta(minutes=settings.OTP_VALIDITY_MINUTES)


def generate_code() -> str:
    """Return a random six-digit code (100000-999999)."""
    return str(100000 + secrets.randbelow(900000))


@transaction.atomic
def send_otp(*, phone: str) -> OneTimePassword:
    """
    Issue a fresh verification code for a phone number.

    Any earlier codes for the same phone are discarded first.

    Args:
        phone: Phone number to verify

    Returns:
        Created OneTimePassword instance

    Raises:
        InvalidPhoneNumberError: If phone is missing or too short
    """
    if not phone or len(phone) < MIN_PHONE_LENGTH:
        raise InvalidPhoneNumberError()

    OneTimePassword.objects.filter(phone_number=phone).delete()

    otp = OneTimePassword.objects.create(
        phone_number=phone,
        code=generate_code(),
    )

    if settings.OTP_ECHO_IN_RESPONSE:
        logger.info("OTP for %s: %s", phone, otp.code)
    else:
        logger.info("Issued OTP for %s", phone)

    return otp


def verify_otp(*, phone: str, code: str) -> None:
    """
    Verify the latest code issued for a phone number.

    Not wrapped in a transaction: an expired code must stay deleted even
    though verification fails.

    Args:
        phone: Phone number the code was sent to
        code: Code entered by the user

    Raises:
        OTPRequiredError: If phone or code is missing
        OTPNotFoundError: If no code was issued for the phone
        OTPExpiredError: If the code is older than the validity window
        InvalidOTPError: If the code does not match
    """
    if not phone or not code:
        raise OTPRequiredError()

    otp = (
        OneTimePassword.objects
        .filter(phone_number=phone)
        .order_by('-created_at')
        .first()
    )

    if otp is None:
        raise OTPNotFoundError()

    if otp.is_expired(otp_validity()):
        OneTimePassword.objects.filter(id=otp.id).delete()
        logger.warning("Expired OTP presented for %s", phone)
        raise OTPExpiredError()

    if otp.code != code:
        logger.warning("Invalid OTP presented for %s", phone)
        raise InvalidOTPError()

    # A concurrent verification may have consumed the code already
    deleted, _ = OneTimePassword.objects.filter(id=otp.id).delete()
    if not deleted:
        raise OTPNotFoundError()

    logger.info("Verified OTP for %s", phone)


def cleanup_expired_otps() -> int:
    """
    Delete every code older than the validity window.

    Returns:
        Number of deleted codes
    """
    cutoff = timezone.now() - otp_validity()
    deleted, _ = OneTimePassword.objects.filter(created_at__lt=cutoff).delete()
    if deleted:
        logger.info("Removed %d expired OTPs", deleted)
    return deleted
