"""
Vendor image storage.

Images go through Django's default storage under ``{user_id}/{ms}.{ext}``,
``ms`` being the upload time in epoch milliseconds. Deals keep the public
URL returned here in ``image_url``.
"""

import logging
import os

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone

from .exceptions import InvalidImageError, ImageNotFoundError

logger = logging.getLogger(__name__)


def _extension(filename: str) -> str:
    return os.path.splitext(filename or '')[1].lstrip('.').lower()


def build_image_key(user_id, filename: str, now=None) -> str:
    """
    Storage key for an uploaded image.

    Raises:
        InvalidImageError: If the extension is not allowed
    """
    ext = _extension(filename)
    allowed = [e.lower() for e in settings.DEAL_IMAGE_ALLOWED_EXTENSIONS]
    if ext not in allowed:
        raise InvalidImageError(
            f"Unsupported image type. Allowed types: {', '.join(allowed)}"
        )

    now = now or timezone.now()
    return f"{user_id}/{int(now.timestamp() * 1000)}.{ext}"


def upload_image(*, user, file) -> dict:
    """
    Store an uploaded image for a vendor.

    Returns:
        dict with ``key`` (storage name) and ``url`` (public URL)
    """
    key = build_image_key(user.id, getattr(file, 'name', ''))
    name = default_storage.save(key, file)
    url = default_storage.url(name)

    logger.info("Stored image %s for %s", name, user.id)
    return {'key': name, 'url': url}


def delete_image(*, user, key: str) -> None:
    """
    Remove one of the caller's images.

    Keys outside the caller's own prefix are reported as missing.

    Raises:
        ImageNotFoundError: If the image doesn't exist or isn't the caller's
    """
    if not key or not key.startswith(f"{user.id}/") or '..' in key:
        raise ImageNotFoundError()
    if not default_storage.exists(key):
        raise ImageNotFoundError()

    default_storage.delete(key)
    logger.info("Deleted image %s for %s", key, user.id)
