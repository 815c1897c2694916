"""Vendor and buyer profile upserts."""

import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from ..models import VendorProfile, BuyerProfile
from .exceptions import WrongRoleError, UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def upsert_vendor_profile(
    *,
    user: User,
    full_name: str,
    shop_name: str,
    vendor_type: str,
    latitude: Decimal,
    longitude: Decimal,
    location_name: str = '',
    phone: Optional[str] = None
) -> VendorProfile:
    """
    Create or update the caller's vendor profile.

    The shop location stored here is the default location for new deals and
    the point used by the nearby-vendors query. When ``phone`` is given the
    account phone number is updated too and marked unverified.

    Raises:
        WrongRoleError: If the user is not a vendor
        UserRegistrationError: If the phone number belongs to another account
    """
    if not user.is_vendor:
        raise WrongRoleError("Only vendors have a shop profile")

    if phone and phone != user.phone:
        if User.objects.filter(phone=phone).exclude(id=user.id).exists():
            raise UserRegistrationError("An account with this phone number already exists")
        # A new number has not been through OTP verification
        user.phone = phone
        user.phone_verified = False
        try:
            with transaction.atomic():
                user.save(update_fields=['phone', 'phone_verified', 'updated_at'])
        except IntegrityError:
            raise UserRegistrationError("An account with this phone number already exists")

    profile, created = VendorProfile.objects.update_or_create(
        user=user,
        defaults={
            'full_name': full_name,
            'shop_name': shop_name,
            'vendor_type': vendor_type,
            'latitude': latitude,
            'longitude': longitude,
            'location_name': location_name,
            'phone_number': user.phone,
        }
    )

    logger.info("%s vendor profile for %s", "Created" if created else "Updated", user.id)
    return profile


@transaction.atomic
def upsert_buyer_profile(
    *,
    user: User,
    full_name: str,
    latitude: Decimal,
    longitude: Decimal
) -> BuyerProfile:
    """
    Create or update the caller's buyer profile.

    Raises:
        WrongRoleError: If the user is not a buyer
    """
    if not user.is_buyer:
        raise WrongRoleError("Only buyers have a buyer profile")

    profile, _ = BuyerProfile.objects.update_or_create(
        user=user,
        defaults={
            'full_name': full_name,
            'latitude': latitude,
            'longitude': longitude,
        }
    )
    return profile
