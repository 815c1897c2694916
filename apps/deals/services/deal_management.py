"""Deal CRUD and lifecycle (status and remaining-quantity) service."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.contrib.auth import get_user_model
from django.utils import timezone

from ..models import Deal, DealStatus, compute_discounted_price
from .exceptions import (
    DealNotFoundError,
    NotDealOwnerError,
    NotVendorError,
    InvalidDealError,
    MissingLocationError,
    InvalidStatusTransitionError,
    InvalidQuantityError,
    DealNotActiveError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

TERMINAL_STATUSES = {DealStatus.SOLD, DealStatus.EXPIRED}


def _validate_pricing(original_price: Decimal, discount_percent: int) -> Decimal:
    if original_price is None or Decimal(original_price) <= 0:
        raise InvalidDealError("Original price must be greater than 0")
    if discount_percent is None or not 0 <= discount_percent <= 100:
        raise InvalidDealError("Discount must be between 0 and 100 percent")

    discounted = compute_discounted_price(original_price, discount_percent)
    if discounted <= 0:
        raise InvalidDealError("Discounted price must be greater than 0")
    return discounted


def _get_owned_deal_for_update(vendor: User, deal_id: UUID) -> Deal:
    try:
        deal = Deal.objects.select_for_update().get(id=deal_id)
    except Deal.DoesNotExist:
        raise DealNotFoundError()

    if deal.vendor_id != vendor.id:
        logger.warning("Vendor %s tried to modify deal %s of vendor %s", vendor.id, deal.id, deal.vendor_id)
        raise NotDealOwnerError()
    return deal


@transaction.atomic
def create_deal(
    *,
    vendor: User,
    item_name: str,
    quantity: int,
    discount_percent: int,
    original_price: Decimal,
    expiry_time: datetime,
    deal_title: str = '',
    description: str = '',
    quantity_unit: str = 'items',
    start_date: Optional[datetime] = None,
    latitude: Optional[Decimal] = None,
    longitude: Optional[Decimal] = None,
    location_name: Optional[str] = None,
    image_url: str = '',
    promo_code: str = '',
    notify_customers: bool = False,
    repeat_buyers_only: bool = False
) -> Deal:
    """
    Post a new deal.

    The pickup location defaults to the shop location stored on the vendor
    profile. ``remaining_quantity`` starts equal to ``quantity`` and
    ``discounted_price`` is derived from the price and discount.

    Raises:
        NotVendorError: If the caller is not a vendor
        InvalidDealError: If pricing, stock or dates are invalid
        MissingLocationError: If no location is given and the profile has none
    """
    if not vendor.is_vendor:
        raise NotVendorError()

    _validate_pricing(original_price, discount_percent)

    if quantity is None or quantity <= 0:
        raise InvalidDealError("Quantity must be greater than 0")

    now = timezone.now()
    start_date = start_date or now
    if expiry_time <= start_date:
        raise InvalidDealError("Expiry time must be after the start date")
    if expiry_time <= now:
        raise InvalidDealError("Expiry time must be in the future")

    if latitude is None or longitude is None:
        profile = getattr(vendor, 'vendor_profile', None)
        if profile is None or not profile.has_location:
            raise MissingLocationError()
        latitude, longitude = profile.latitude, profile.longitude
        if location_name is None:
            location_name = profile.location_name

    deal = Deal.objects.create(
        vendor=vendor,
        deal_title=deal_title,
        item_name=item_name,
        description=description,
        original_price=original_price,
        discount_percent=discount_percent,
        quantity=quantity,
        quantity_unit=quantity_unit or 'items',
        remaining_quantity=quantity,
        start_date=start_date,
        expiry_time=expiry_time,
        latitude=latitude,
        longitude=longitude,
        location_name=location_name or '',
        image_url=image_url,
        promo_code=promo_code,
        notify_customers=notify_customers,
        repeat_buyers_only=repeat_buyers_only,
    )

    logger.info("Vendor %s created deal %s (%s x %s)", vendor.id, deal.id, quantity, item_name)
    return deal


def get_deal(*, deal_id: UUID) -> Deal:
    """
    Load a deal with its vendor and shop profile.

    Raises:
        DealNotFoundError: If deal doesn't exist
    """
    try:
        return (
            Deal.objects
            .select_related('vendor', 'vendor__vendor_profile')
            .get(id=deal_id)
        )
    except Deal.DoesNotExist:
        raise DealNotFoundError()


@transaction.atomic
def delete_deal(*, vendor: User, deal_id: UUID) -> None:
    """
    Delete one of the caller's deals. Orders against it go with it.

    Raises:
        DealNotFoundError: If deal doesn't exist
        NotDealOwnerError: If the deal belongs to another vendor
    """
    deal = _get_owned_deal_for_update(vendor, deal_id)
    deal.delete()
    logger.info("Vendor %s deleted deal %s", vendor.id, deal_id)


def expire_overdue_deals(*, vendor: Optional[User] = None, now: Optional[datetime] = None) -> int:
    """
    Flip stored status to expired for active deals past their expiry time.

    Args:
        vendor: Limit the sweep to one vendor's deals; all vendors when None
        now: Reference time (defaults to current time)

    Returns:
        Number of deals expired
    """
    now = now or timezone.now()
    overdue = Deal.objects.overdue(now)
    if vendor is not None:
        overdue = overdue.filter(vendor=vendor)

    count = overdue.update(status=DealStatus.EXPIRED, updated_at=now)
    if count:
        logger.info(
            "Expired %d overdue deal(s)%s",
            count,
            f" for vendor {vendor.id}" if vendor is not None else "",
        )
    return count


def list_vendor_deals(*, vendor: User, status: Optional[str] = None) -> QuerySet:
    """
    The caller's deals, newest first.

    Overdue active deals of this vendor are swept to expired first so the
    stored status matches what the vendor sees.
    """
    if not vendor.is_vendor:
        raise NotVendorError()

    expire_overdue_deals(vendor=vendor)

    queryset = Deal.objects.filter(vendor=vendor).select_related('vendor').order_by('-created_at')
    if status:
        queryset = queryset.filter(status=status)
    return queryset


@transaction.atomic
def update_deal_status(*, vendor: User, deal_id: UUID, status: str) -> Deal:
    """
    Move a deal along its lifecycle: active → sold | expired.

    Setting the status a deal already has is a no-op. Sold and expired are
    terminal.

    Raises:
        DealNotFoundError: If deal doesn't exist
        NotDealOwnerError: If the deal belongs to another vendor
        InvalidStatusTransitionError: If the deal is sold or expired already
    """
    deal = _get_owned_deal_for_update(vendor, deal_id)

    if deal.status == status:
        return deal

    if deal.status in TERMINAL_STATUSES:
        raise InvalidStatusTransitionError(
            f"Cannot change status of a {deal.status} deal"
        )

    if status not in TERMINAL_STATUSES:
        raise InvalidStatusTransitionError(f"Cannot change deal status to {status}")

    old_status = deal.status
    deal.status = status
    deal.save(update_fields=['status', 'updated_at'])

    logger.info("Deal %s status %s -> %s", deal.id, old_status, status)
    return deal


@transaction.atomic
def update_deal_quantity(*, vendor: User, deal_id: UUID, remaining_quantity: int) -> Deal:
    """
    Set the remaining stock of a deal.

    The new value must lie in [0, quantity]. Reaching 0 marks the deal sold
    in the same update.

    Raises:
        DealNotFoundError: If deal doesn't exist
        NotDealOwnerError: If the deal belongs to another vendor
        DealNotActiveError: If the deal is sold or expired
        InvalidQuantityError: If the value is out of range
    """
    deal = _get_owned_deal_for_update(vendor, deal_id)

    if deal.effective_status != DealStatus.ACTIVE:
        raise DealNotActiveError()

    if remaining_quantity is None or not 0 <= remaining_quantity <= deal.quantity:
        raise InvalidQuantityError(
            f"Remaining quantity must be between 0 and {deal.quantity}"
        )

    deal.remaining_quantity = remaining_quantity
    if remaining_quantity == 0:
        deal.status = DealStatus.SOLD

    deal.save(update_fields=['remaining_quantity', 'status', 'updated_at'])

    if deal.status == DealStatus.SOLD:
        logger.info("Deal %s sold out", deal.id)
    else:
        logger.info("Deal %s remaining quantity set to %d", deal.id, remaining_quantity)
    return deal
