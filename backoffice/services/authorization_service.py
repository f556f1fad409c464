"""Effective-permission resolution for users."""

import logging
from typing import Iterable, Set

from backoffice.models.user import User

logger = logging.getLogger(__name__)

WILDCARD = "*"


class AuthorizationService:
    """Resolves what a user may do.

    A user's effective set is either their custom override list or their
    role's list; the two are never merged.
    """

    @staticmethod
    def resolve_effective_permissions(user: User) -> Set[str]:
        if user.has_custom_permissions:
            return set(user.custom_permissions)

        if user.role is None:
            logger.warning(
                "User %s references missing role %s; granting no permissions",
                user.id, user.role_id,
            )
            return set()
        return set(user.role.permissions)

    @staticmethod
    def has_permission(user: User, permission: str) -> bool:
        granted = AuthorizationService.resolve_effective_permissions(user)
        return permission in granted or WILDCARD in granted

    @staticmethod
    def has_any_permission(user: User, permissions: Iterable[str]) -> bool:
        granted = AuthorizationService.resolve_effective_permissions(user)
        if WILDCARD in granted:
            return True
        return any(p in granted for p in permissions)


authorization_service = AuthorizationService()
