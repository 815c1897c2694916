"""
Geolocation-filtered discovery of deals and vendors.

Distances are computed in Python with ``haversine_km`` over every candidate
row. There is no spatial index behind this, so cost grows linearly with the
number of live deals.
"""

from datetime import datetime
from typing import List, Optional

from django.conf import settings
from django.db.models import Count, Q
from django.utils import timezone

from apps.accounts.models import VendorProfile

from ..geo import haversine_km, is_valid_coordinate
from ..models import Deal, DealStatus
from .exceptions import InvalidRadiusError, InvalidCoordinatesError


def _check_query(latitude, longitude, radius_km) -> float:
    if not is_valid_coordinate(latitude, longitude):
        raise InvalidCoordinatesError()

    if radius_km is None:
        radius_km = settings.NEARBY_DEFAULT_RADIUS_KM
    radius_km = float(radius_km)
    if not radius_km > 0:
        raise InvalidRadiusError()
    return radius_km


def get_nearby_deals(
    *,
    latitude: float,
    longitude: float,
    radius_km: Optional[float] = None,
    now: Optional[datetime] = None
) -> List[Deal]:
    """
    Available deals within ``radius_km`` of a point, nearest first.

    Only deals that are active and not past their expiry time qualify.
    Equal distances keep the newest deal first. Every returned deal carries
    a ``distance_km`` attribute.

    Args:
        latitude: Buyer latitude in degrees
        longitude: Buyer longitude in degrees
        radius_km: Search radius (defaults to NEARBY_DEFAULT_RADIUS_KM)
        now: Reference time for expiry (defaults to current time)

    Raises:
        InvalidCoordinatesError: If coordinates are out of range
        InvalidRadiusError: If radius is not positive
    """
    radius_km = _check_query(latitude, longitude, radius_km)
    now = now or timezone.now()

    candidates = (
        Deal.objects
        .available(now)
        .select_related('vendor', 'vendor__vendor_profile')
        .order_by('-created_at')
    )

    nearby = []
    for deal in candidates:
        distance = haversine_km(latitude, longitude, deal.latitude, deal.longitude)
        if distance <= radius_km:
            deal.distance_km = distance
            nearby.append(deal)

    # Stable sort keeps the newest-first order among equal distances
    nearby.sort(key=lambda d: d.distance_km)
    return nearby


def get_nearby_vendors(
    *,
    latitude: float,
    longitude: float,
    radius_km: Optional[float] = None
) -> List[VendorProfile]:
    """
    Vendor shops within ``radius_km`` of a point, nearest first.

    Each profile carries ``distance_km`` and ``active_deals`` (number of
    deals the vendor currently offers).
    """
    radius_km = _check_query(latitude, longitude, radius_km)
    now = timezone.now()

    profiles = (
        VendorProfile.objects
        .filter(
            latitude__isnull=False,
            longitude__isnull=False,
            user__is_active=True,
        )
        .select_related('user')
        .annotate(
            active_deals=Count(
                'user__deals',
                filter=Q(user__deals__status=DealStatus.ACTIVE, user__deals__expiry_time__gt=now),
            )
        )
    )

    nearby = []
    for profile in profiles:
        distance = haversine_km(latitude, longitude, profile.latitude, profile.longitude)
        if distance <= radius_km:
            profile.distance_km = distance
            nearby.append(profile)

    nearby.sort(key=lambda p: p.distance_km)
    return nearby
