"""
Role-based permissions for farm staff.
"""

from rest_framework import permissions


class IsFarmAdmin(permissions.BasePermission):
    """
    Permission for administrator-only endpoints (shed management, corrections).
    """
    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        return (
            request.user and
            request.user.is_authenticated and
            request.user.is_farm_admin
        )


class IsFarmAdminOrReadOnly(permissions.BasePermission):
    """
    Any authenticated user may read; only administrators may write.
    """
    message = 'Only administrators can modify this resource.'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return request.user.is_farm_admin
