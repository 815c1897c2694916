"""User registration service (two steps: send OTP, then verify and create)."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from ..models import OneTimePassword
from .exceptions import UserRegistrationError
from .otp import send_otp, verify_otp

User = get_user_model()
logger = logging.getLogger(__name__)


def _ensure_available(email: str, phone: str) -> None:
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("An account with this email already exists")
    if User.objects.filter(phone=phone).exists():
        raise UserRegistrationError("An account with this phone number already exists")


def start_registration(*, email: str, phone: str) -> OneTimePassword:
    """
    Begin registration by sending a verification code to the phone.

    Nothing is persisted for the account itself until the code is verified.

    Args:
        email: Email the account will use
        phone: Phone number to verify

    Returns:
        Issued OneTimePassword

    Raises:
        UserRegistrationError: If email or phone is already registered
        InvalidPhoneNumberError: If phone number is invalid
    """
    _ensure_available(email, phone)
    return send_otp(phone=phone)


def complete_registration(
    *,
    name: str,
    email: str,
    phone: str,
    password: str,
    role: str,
    otp: str
) -> User:
    """
    Verify the phone code and create the account.

    Args:
        name: Display name
        email: Login email
        phone: Verified phone number
        password: Raw password (will be hashed)
        role: 'vendor' or 'buyer'
        otp: Code sent by start_registration

    Returns:
        Created User instance

    Raises:
        OTP errors from verify_otp
        UserRegistrationError: If the account cannot be created
    """
    _ensure_available(email, phone)
    verify_otp(phone=phone, code=otp)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                phone=phone,
                role=role,
                phone_verified=True,
            )
    except IntegrityError as e:
        logger.warning("Registration failed for %s: %s", email, e)
        raise UserRegistrationError("Failed to create user account")

    logger.info("Registered %s account %s", role, user.id)
    return user
