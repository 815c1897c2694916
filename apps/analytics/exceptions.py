"""
Domain exceptions for analytics app.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidPeriodError

Usage:
    from apps.analytics.exceptions import InvalidPeriodError

    if period_days < 1:
        raise InvalidPeriodError()
"""
from rest_framework.exceptions import APIException


class AnalyticsServiceError(APIException):
    """Base exception for all analytics service errors."""
    status_code = 400
    default_detail = 'Analytics query failed.'
    default_code = 'analytics_error'


class InvalidPeriodError(AnalyticsServiceError):
    """
    Raised when a reporting window is invalid.

    Example:
        raise InvalidPeriodError("days_back cannot be negative")
    """
    default_detail = 'Period must be at least one day'
    default_code = 'invalid_period'
