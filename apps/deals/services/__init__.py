"""Services for deals business logic."""

from .exceptions import (
    DealsServiceError,
    DealNotFoundError,
    NotDealOwnerError,
    NotVendorError,
    InvalidDealError,
    MissingLocationError,
    InvalidStatusTransitionError,
    InvalidQuantityError,
    DealNotActiveError,
    InvalidRadiusError,
    InvalidCoordinatesError,
    InvalidImageError,
    ImageNotFoundError,
    TemplateNotFoundError,
)
from .deal_management import (
    create_deal,
    get_deal,
    delete_deal,
    list_vendor_deals,
    expire_overdue_deals,
    update_deal_status,
    update_deal_quantity,
)
from .nearby import get_nearby_deals, get_nearby_vendors
from .templates import (
    create_template,
    list_templates,
    get_template,
    delete_template,
    create_deal_from_template,
)
from .image_storage import build_image_key, upload_image, delete_image

__all__ = [
    # Exceptions
    'DealsServiceError',
    'DealNotFoundError',
    'NotDealOwnerError',
    'NotVendorError',
    'InvalidDealError',
    'MissingLocationError',
    'InvalidStatusTransitionError',
    'InvalidQuantityError',
    'DealNotActiveError',
    'InvalidRadiusError',
    'InvalidCoordinatesError',
    'InvalidImageError',
    'ImageNotFoundError',
    'TemplateNotFoundError',
    # Deal lifecycle
    'create_deal',
    'get_deal',
    'delete_deal',
    'list_vendor_deals',
    'expire_overdue_deals',
    'update_deal_status',
    'update_deal_quantity',
    # Discovery
    'get_nearby_deals',
    'get_nearby_vendors',
    # Templates
    'create_template',
    'list_templates',
    'get_template',
    'delete_template',
    'create_deal_from_template',
    # Images
    'build_image_key',
    'upload_image',
    'delete_image',
]
