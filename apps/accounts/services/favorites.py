"""Buyer favorites (followed vendors)."""

from uuid import UUID

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model
from django.db.models import QuerySet

from ..models import CustomerFavorite, UserRole
from .exceptions import (
    WrongRoleError,
    UserNotFoundError,
    AlreadyFavoriteError,
    FavoriteNotFoundError,
)

User = get_user_model()


def add_favorite(*, buyer: User, vendor_id: UUID) -> CustomerFavorite:
    """
    Follow a vendor.

    Raises:
        WrongRoleError: If the caller is not a buyer
        UserNotFoundError: If vendor doesn't exist
        AlreadyFavoriteError: If the vendor is already followed
    """
    if not buyer.is_buyer:
        raise WrongRoleError("Only buyers can favorite vendors")

    try:
        vendor = User.objects.get(id=vendor_id, role=UserRole.VENDOR, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError("Vendor not found")

    try:
        with transaction.atomic():
            return CustomerFavorite.objects.create(buyer=buyer, vendor=vendor)
    except IntegrityError:
        raise AlreadyFavoriteError()


def remove_favorite(*, buyer: User, vendor_id: UUID) -> None:
    """
    Stop following a vendor.

    Raises:
        FavoriteNotFoundError: If the vendor was not followed
    """
    deleted, _ = CustomerFavorite.objects.filter(buyer=buyer, vendor_id=vendor_id).delete()
    if not deleted:
        raise FavoriteNotFoundError()


def list_favorites(*, buyer: User) -> QuerySet:
    """Vendors followed by a buyer, newest first."""
    return (
        CustomerFavorite.objects
        .filter(buyer=buyer)
        .select_related('vendor', 'vendor__vendor_profile')
    )


def list_followers(*, vendor: User) -> QuerySet:
    """Buyers following a vendor, newest first."""
    if not vendor.is_vendor:
        raise WrongRoleError("Only vendors have followers")
    return (
        CustomerFavorite.objects
        .filter(vendor=vendor)
        .select_related('buyer')
    )
