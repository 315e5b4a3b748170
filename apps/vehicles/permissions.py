"""
Custom permission classes for vehicles app.

The public catalog is readable by anyone; inventory changes are reserved
for back-office (staff) users.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsStaffOrReadOnly(BasePermission):
    """
    Allow read-only access to everyone and write access to staff.

    Usage:
        class VehicleViewSet(viewsets.ModelViewSet):
            permission_classes = [IsStaffOrReadOnly]
    """

    message = 'Only back-office users can change the inventory.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)
