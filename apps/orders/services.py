"""
Order Services Module
=====================

Business logic for reservations: a buyer reserves an available deal, and the
deal's vendor moves the order through pickup.

Classes:
    OrderService: Reservation, listing, status and tracking updates.

Example:
    Reserving a deal and collecting it::

        from apps.orders.services import OrderService

        order = OrderService.reserve_deal(buyer=buyer, deal_id=deal.id)

        # Later, at the shop counter
        OrderService.mark_collected(vendor=deal.vendor, order_id=order.id)

Every status change and tracking update appends an ``OrderTracking`` row, so
``OrderService.order_history`` is the full audit trail of an order.
"""

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.deals.models import Deal
from apps.deals.services.exceptions import DealNotFoundError
from .exceptions import (
    NotBuyerError,
    AlreadyReservedError,
    DealUnavailableError,
    OrderNotFoundError,
    OrderAccessDeniedError,
    NotOrderVendorError,
    InvalidOrderTransitionError,
    InvalidPickupWindowError,
)
from .models import Order, OrderStatus, OrderTracking

logger = logging.getLogger(__name__)

TRACKING_FIELDS = (
    'tracking_id',
    'pickup_window_start',
    'pickup_window_end',
    'special_instructions',
    'delivery_eta',
)


class OrderService:
    """
    Service for reserving deals and managing the resulting orders.

    A buyer holds at most one order per deal. The rule is checked before the
    insert and backed by the ``(buyer, deal)`` unique constraint, so two
    racing requests both end in ``AlreadyReservedError`` rather than a
    database error.

    Reserving does not touch the deal's ``remaining_quantity``. Stock only
    changes when the vendor edits it.

    Only ``reserved`` orders may change status; ``collected``, ``missed`` and
    ``expired`` are final.
    """

    @staticmethod
    @transaction.atomic
    def reserve_deal(*, buyer, deal_id, special_instructions=''):
        """
        Reserve a deal for a buyer.

        Args:
            buyer (User): The reserving buyer.
            deal_id (UUID): The deal to reserve.
            special_instructions (str, optional): Note for the vendor.

        Returns:
            Order: The new order in ``reserved`` status.

        Raises:
            NotBuyerError: If the caller is not a buyer.
            DealNotFoundError: If the deal doesn't exist.
            DealUnavailableError: If the deal is sold, expired or past expiry.
            AlreadyReservedError: If the buyer already has an order for it.
        """
        if not buyer.is_buyer:
            raise NotBuyerError()

        try:
            deal = Deal.objects.get(id=deal_id)
        except Deal.DoesNotExist:
            raise DealNotFoundError()

        if not deal.is_available:
            raise DealUnavailableError()

        if Order.objects.filter(buyer=buyer, deal=deal).exists():
            logger.warning("Buyer %s tried to reserve deal %s twice", buyer.id, deal.id)
            raise AlreadyReservedError()

        try:
            with transaction.atomic():
                order = Order.objects.create(
                    buyer=buyer,
                    deal=deal,
                    special_instructions=special_instructions,
                )
        except IntegrityError:
            raise AlreadyReservedError()

        OrderTracking.objects.create(
            order=order,
            status=OrderStatus.RESERVED,
            notes='Deal reserved',
            created_by=buyer,
        )
        logger.info("Buyer %s reserved deal %s (order %s)", buyer.id, deal.id, order.id)
        return order

    @staticmethod
    def list_buyer_orders(*, buyer):
        """The buyer's orders, newest first, with deal and vendor loaded."""
        return (
            Order.objects.filter(buyer=buyer)
            .select_related('deal', 'deal__vendor')
            .order_by('-created_at')
        )

    @staticmethod
    def list_vendor_orders(*, vendor, status=None):
        """Orders placed against the vendor's deals, newest first."""
        queryset = (
            Order.objects.filter(deal__vendor=vendor)
            .select_related('deal', 'buyer')
            .order_by('-created_at')
        )
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    @staticmethod
    def get_order(*, user, order_id):
        """
        Fetch one order for its buyer or for the vendor of its deal.

        Raises:
            OrderNotFoundError: If the order doesn't exist.
            OrderAccessDeniedError: If the user is neither party.
        """
        try:
            order = Order.objects.select_related('deal', 'deal__vendor', 'buyer').get(id=order_id)
        except Order.DoesNotExist:
            raise OrderNotFoundError()

        if user.id not in (order.buyer_id, order.deal.vendor_id):
            raise OrderAccessDeniedError()
        return order

    @staticmethod
    def _get_order_for_vendor_update(vendor, order_id):
        try:
            order = Order.objects.select_for_update().select_related('deal').get(id=order_id)
        except Order.DoesNotExist:
            raise OrderNotFoundError()

        if order.deal.vendor_id != vendor.id:
            logger.warning("User %s tried to update order %s", vendor.id, order.id)
            raise NotOrderVendorError()
        return order

    @staticmethod
    @transaction.atomic
    def update_order_status(*, vendor, order_id, status, notes=''):
        """
        Move a reserved order to ``collected``, ``missed`` or ``expired``.

        Collecting stamps ``collected_at``.

        Raises:
            OrderNotFoundError: If the order doesn't exist.
            NotOrderVendorError: If the caller doesn't own the deal.
            InvalidOrderTransitionError: If the order is no longer reserved,
                or the target is ``reserved``.
        """
        order = OrderService._get_order_for_vendor_update(vendor, order_id)

        if not order.is_reserved or status == OrderStatus.RESERVED:
            raise InvalidOrderTransitionError(
                f"Cannot change order status from {order.status} to {status}"
            )

        old_status = order.status
        order.status = status
        update_fields = ['status', 'updated_at']
        if status == OrderStatus.COLLECTED:
            order.collected_at = timezone.now()
            update_fields.append('collected_at')
        order.save(update_fields=update_fields)

        OrderTracking.objects.create(
            order=order,
            status=status,
            notes=notes,
            created_by=vendor,
        )
        logger.info("Order %s status %s -> %s", order.id, old_status, status)
        return order

    @staticmethod
    def mark_collected(*, vendor, order_id):
        """Shortcut for ``update_order_status(status=collected)``."""
        return OrderService.update_order_status(
            vendor=vendor,
            order_id=order_id,
            status=OrderStatus.COLLECTED,
            notes='Collected by buyer',
        )

    @staticmethod
    @transaction.atomic
    def update_order_tracking(*, vendor, order_id, notes='', **tracking):
        """
        Update pickup tracking fields on an order.

        Only keys in ``TRACKING_FIELDS`` are applied. The pickup window is
        validated against the values the order ends up with, so a new end
        time is checked against an already stored start time.

        Raises:
            OrderNotFoundError: If the order doesn't exist.
            NotOrderVendorError: If the caller doesn't own the deal.
            InvalidPickupWindowError: If the window start is not before its end.
        """
        order = OrderService._get_order_for_vendor_update(vendor, order_id)

        changes = {key: value for key, value in tracking.items() if key in TRACKING_FIELDS}
        for key, value in changes.items():
            setattr(order, key, value)

        start, end = order.pickup_window_start, order.pickup_window_end
        if start and end and start >= end:
            raise InvalidPickupWindowError()

        order.save(update_fields=list(changes) + ['updated_at'])

        changed = ', '.join(sorted(changes))
        if not notes and changed:
            notes = f"Updated {changed}"

        OrderTracking.objects.create(
            order=order,
            status=order.status,
            notes=notes,
            created_by=vendor,
        )
        logger.info("Order %s tracking updated (%s)", order.id, changed or 'notes only')
        return order

    @staticmethod
    def order_history(*, user, order_id):
        """Tracking entries of an order, oldest first."""
        order = OrderService.get_order(user=user, order_id=order_id)
        return order.tracking_history.select_related('created_by').order_by('created_at')
