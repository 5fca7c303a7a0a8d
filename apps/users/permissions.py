"""Permission classes shared by the API apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsBackOffice(permissions.BasePermission):
    """
    Only staff and admins (or Django superusers) may access.

    Back-office users manage agencies, the fleet and every booking.
    """

    message = "Back office access required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return hasattr(user, "is_back_office") and user.is_back_office()


class IsAdminRole(permissions.BasePermission):
    """Only ADMIN users (or Django superusers); staff are refused."""

    message = "Admin role required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_superuser or getattr(user, "role", None) == "ADMIN"
