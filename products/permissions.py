"""
Products — Permissions

Reads are open to any authenticated user; registering and deactivating
products requires staff.

@file products/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class CanManageProducts(BasePermission):
    """Read is open to authenticated users; write requires staff."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return user.is_staff or user.is_superuser
