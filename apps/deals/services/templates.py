"""Deal templates: reusable blueprints a vendor can turn into deals."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.contrib.auth import get_user_model

from ..models import Deal, DealTemplate
from .deal_management import create_deal, _validate_pricing
from .exceptions import NotVendorError, NotDealOwnerError, TemplateNotFoundError

User = get_user_model()


def create_template(
    *,
    vendor: User,
    template_name: str,
    item_name: str,
    discount_percent: int,
    original_price: Decimal,
    description: str = '',
    image_url: str = ''
) -> DealTemplate:
    """
    Save a deal blueprint.

    Raises:
        NotVendorError: If the caller is not a vendor
        InvalidDealError: If price and discount would give an invalid deal
    """
    if not vendor.is_vendor:
        raise NotVendorError()

    _validate_pricing(original_price, discount_percent)

    return DealTemplate.objects.create(
        vendor=vendor,
        template_name=template_name,
        item_name=item_name,
        description=description,
        discount_percent=discount_percent,
        original_price=original_price,
        image_url=image_url,
    )


def list_templates(*, vendor: User) -> QuerySet:
    return DealTemplate.objects.filter(vendor=vendor).order_by('-created_at')


def get_template(*, vendor: User, template_id: UUID) -> DealTemplate:
    """
    Raises:
        TemplateNotFoundError: If template doesn't exist
        NotDealOwnerError: If the template belongs to another vendor
    """
    try:
        template = DealTemplate.objects.get(id=template_id)
    except DealTemplate.DoesNotExist:
        raise TemplateNotFoundError()

    if template.vendor_id != vendor.id:
        raise NotDealOwnerError("You can only use your own templates")
    return template


def delete_template(*, vendor: User, template_id: UUID) -> None:
    get_template(vendor=vendor, template_id=template_id).delete()


@transaction.atomic
def create_deal_from_template(
    *,
    vendor: User,
    template_id: UUID,
    quantity: int,
    expiry_time: datetime,
    quantity_unit: str = 'items',
    start_date: Optional[datetime] = None,
    deal_title: str = ''
) -> Deal:
    """
    Post a deal using a template's item, description, pricing and image.

    Location defaults to the shop location, as for any new deal.
    """
    template = get_template(vendor=vendor, template_id=template_id)

    return create_deal(
        vendor=vendor,
        deal_title=deal_title or template.template_name,
        item_name=template.item_name,
        description=template.description,
        original_price=template.original_price,
        discount_percent=template.discount_percent,
        quantity=quantity,
        quantity_unit=quantity_unit,
        start_date=start_date,
        expiry_time=expiry_time,
        image_url=template.image_url,
    )
