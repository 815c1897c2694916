"""
Domain exceptions for orders app.

Every error the order service raises is an APIException so views can let
them propagate to the project exception handler unchanged.
"""
from rest_framework.exceptions import APIException


class OrderServiceError(APIException):
    """Base exception for order service errors."""
    status_code = 400
    default_detail = 'Order operation failed.'
    default_code = 'order_error'


class OrderNotFoundError(OrderServiceError):
    status_code = 404
    default_detail = 'Order not found'
    default_code = 'order_not_found'


class NotBuyerError(OrderServiceError):
    status_code = 403
    default_detail = 'Only buyers can reserve deals'
    default_code = 'not_buyer'


class AlreadyReservedError(OrderServiceError):
    """Buyer already holds an order for this deal."""
    status_code = 409
    default_detail = 'You have already reserved this deal'
    default_code = 'already_reserved'


class DealUnavailableError(OrderServiceError):
    """Deal is sold, expired or past its expiry time."""
    status_code = 409
    default_detail = 'This deal is no longer available'
    default_code = 'deal_unavailable'


class OrderAccessDeniedError(OrderServiceError):
    status_code = 403
    default_detail = 'You do not have access to this order'
    default_code = 'order_access_denied'


class NotOrderVendorError(OrderServiceError):
    """Caller is not the vendor of the order's deal."""
    status_code = 403
    default_detail = 'Only the vendor of this deal can update the order'
    default_code = 'not_order_vendor'


class InvalidOrderTransitionError(OrderServiceError):
    status_code = 409
    default_detail = 'Only reserved orders can change status'
    default_code = 'invalid_order_transition'


class InvalidPickupWindowError(OrderServiceError):
    default_detail = 'Pickup window start must be before its end'
    default_code = 'invalid_pickup_window'
