# accounts/permissions.py
import logging

from django.conf import settings
from rest_framework.permissions import BasePermission

from .grants import has_role

logger = logging.getLogger(__name__)


class HasRole(BasePermission):
    """
    Usage:
        permission_classes = [IsAuthenticated, HasRole.with_role("administrator")]

    Superusers always pass. When ``required_role`` is None the
    ``NAVIGATION_ADMIN_ROLE`` setting is used.
    """

    required_role = None
    message = "Forbidden - Admin access required"

    def get_required_role(self):
        return self.required_role or settings.NAVIGATION_ADMIN_ROLE

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_superuser:
            return True

        allowed = has_role(user, self.get_required_role())
        if not allowed:
            logger.warning(
                "Role check failed for %s on %s %s",
                user,
                request.method,
                request.path,
            )
        return allowed

    @classmethod
    def with_role(cls, role: str):
        class _Perm(cls):
            required_role = role
        return _Perm
