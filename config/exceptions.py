"""
Project-wide DRF exception handler.

Every API error is rendered in one shape so the mobile client can show it
directly in an alert:

    {"success": false, "message": "<human readable>", "errors": {...}}

``errors`` is only present for validation failures and carries the
per-field details produced by serializers.
"""

import logging

from rest_framework import exceptions
from rest_framework.views import exception_handler

logger = logging.getLogger('apps.api')


def _first_message(detail):
    """Pull the first human-readable string out of nested DRF error details."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    body = {'success': False}

    if isinstance(exc, exceptions.ValidationError):
        body['message'] = _first_message(data) or 'Invalid input.'
        body['errors'] = data
    elif isinstance(data, dict) and 'detail' in data:
        body['message'] = str(data['detail'])
    else:
        body['message'] = _first_message(data)

    if response.status_code >= 500:
        logger.error("API error %s: %s", response.status_code, body['message'])
    else:
        view = context.get('view')
        logger.debug(
            "Rejected request in %s: %s",
            view.__class__.__name__ if view else 'unknown view',
            body['message'],
        )

    response.data = body
    return response
