"""Domain-specific exceptions for deals services."""
from rest_framework.exceptions import APIException


class DealsServiceError(APIException):
    """Base exception for deals services."""
    status_code = 400
    default_detail = 'Deal operation failed.'
    default_code = 'deals_error'


class DealNotFoundError(DealsServiceError):
    status_code = 404
    default_detail = 'Deal not found'
    default_code = 'deal_not_found'


class NotDealOwnerError(DealsServiceError):
    """Raised when a vendor touches another vendor's deal or template."""
    status_code = 403
    default_detail = 'You can only update your own deals'
    default_code = 'not_deal_owner'


class NotVendorError(DealsServiceError):
    status_code = 403
    default_detail = 'Only vendors can manage deals'
    default_code = 'not_vendor'


class InvalidDealError(DealsServiceError):
    """Raised when deal data breaks a pricing, stock or date rule."""
    default_detail = 'Invalid deal data'
    default_code = 'invalid_deal'


class MissingLocationError(DealsServiceError):
    default_detail = 'Please set your shop location in your profile before posting deals'
    default_code = 'missing_location'


class InvalidStatusTransitionError(DealsServiceError):
    status_code = 409
    default_detail = 'Deal status cannot be changed'
    default_code = 'invalid_status_transition'


class InvalidQuantityError(DealsServiceError):
    default_detail = 'Invalid remaining quantity'
    default_code = 'invalid_quantity'


class DealNotActiveError(DealsServiceError):
    status_code = 409
    default_detail = 'Only active deals can be updated'
    default_code = 'deal_not_active'


class InvalidRadiusError(DealsServiceError):
    default_detail = 'Radius must be greater than 0'
    default_code = 'invalid_radius'


class InvalidImageError(DealsServiceError):
    default_detail = 'Unsupported image type'
    default_code = 'invalid_image'


class ImageNotFoundError(DealsServiceError):
    status_code = 404
    default_detail = 'Image not found'
    default_code = 'image_not_found'


class TemplateNotFoundError(DealsServiceError):
    status_code = 404
    default_detail = 'Template not found'
    default_code = 'template_not_found'


class InvalidCoordinatesError(DealsServiceError):
    default_detail = 'Latitude must be between -90 and 90 and longitude between -180 and 180'
    default_code = 'invalid_coordinates'
