"""
Role-based permissions for the API
"""
from rest_framework import permissions


class CanWrite(permissions.BasePermission):
    """
    Authenticated users may read; only non-readonly users may change data.
    """
    message = 'Your account has read-only access.'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return request.user.can_write


class IsAdminRole(permissions.BasePermission):
    """
    Permission to allow the admin role (or the is_admin flag)
    """
    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        return request.user.has_admin_access
