# dental_core/iam/permissions.py
from __future__ import annotations

from rest_framework.permissions import BasePermission


class HasDemoSession(BasePermission):
    """Allows access only while the demo login marker is present."""

    message = "Login required."

    def has_permission(self, request, view) -> bool:
        return bool(request.user and getattr(request.user, "is_authenticated", False))
