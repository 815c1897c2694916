"""
Role-based permission classes.

Vendors and buyers share one User model; these classes gate endpoints that
only make sense for one of the two roles.

Usage:
    @permission_classes([IsAuthenticated, IsVendor])
    def vendor_only_view(request):
        ...
"""
from rest_framework.permissions import BasePermission


class IsVendor(BasePermission):
    """Allow access only to vendor accounts."""

    message = 'Only vendors can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_vendor)


class IsBuyer(BasePermission):
    """Allow access only to buyer accounts."""

    message = 'Only buyers can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_buyer)
