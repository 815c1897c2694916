from rest_framework.permissions import BasePermission


class CanViewDeal(BasePermission):
    """
    A deal is visible to its vendor, to buyers holding an order on it, and
    to everyone while it is still available.
    """

    message = 'This deal is no longer available.'

    def has_object_permission(self, request, view, obj):
        if obj.vendor_id == request.user.id:
            return True
        if obj.is_available:
            return True
        return obj.orders.filter(buyer=request.user).exists()


class IsDealOwner(BasePermission):
    """Object-level permission for a vendor's own deals and templates."""

    message = 'You can only update your own deals'

    def has_object_permission(self, request, view, obj):
        return obj.vendor_id == request.user.id
