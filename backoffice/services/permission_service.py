"""Permission registry — catalog of capability tokens."""

import logging
import re
from collections import OrderedDict
from typing import Optional, Dict, Any, List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from backoffice.db.session import commit_or_flush
from backoffice.models.permission import Permission, PermissionCategory
from backoffice.models.role import Role
from backoffice.db.seeds.catalog import DEFAULT_PERMISSIONS
from backoffice.core.exceptions import (
    AuthorizationError, ResourceConflictError, ResourceNotFoundError, ValidationError,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("display_name", "description", "category", "is_active")

LIKE_ESCAPE = "\\"


def normalize_permission_name(name: str) -> str:
    """``"Edit  Products"`` -> ``"edit_products"``."""
    return re.sub(r"\s+", "_", name.strip().lower())


def like_pattern(text: str) -> str:
    """Substring pattern for ``ilike`` with ``%`` and ``_`` taken literally."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class PermissionService:
    """CRUD and bootstrap for the permission registry.

    Mutations take ``commit=False`` when the caller writes an audit entry
    and commits both together.
    """

    @staticmethod
    def list_permissions(
        db: Session,
        search: Optional[str] = None,
        category: Optional[PermissionCategory] = None,
        is_active: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """List permissions sorted by category then name, grouped by category."""
        query = db.query(Permission)

        if search:
            pattern = like_pattern(search)
            query = query.filter(or_(
                Permission.name.ilike(pattern, escape=LIKE_ESCAPE),
                Permission.display_name.ilike(pattern, escape=LIKE_ESCAPE),
                Permission.description.ilike(pattern, escape=LIKE_ESCAPE),
            ))
        if category:
            query = query.filter(Permission.category == category)
        if is_active is not None:
            query = query.filter(Permission.is_active == is_active)

        permissions = query.all()
        permissions.sort(key=lambda p: (p.category.value, p.name))

        grouped: Dict[str, List[Permission]] = OrderedDict()
        for permission in permissions:
            grouped.setdefault(permission.category.value, []).append(permission)

        return {"permissions": permissions, "grouped": grouped, "count": len(permissions)}

    @staticmethod
    def get_permission(db: Session, permission_id: int) -> Permission:
        permission = db.query(Permission).filter(Permission.id == permission_id).first()
        if not permission:
            raise ResourceNotFoundError("Permission not found")
        return permission

    @staticmethod
    def count_roles_citing(db: Session, name: str) -> int:
        """Number of roles whose permission list contains ``name`` exactly."""
        return sum(1 for role in db.query(Role).all() if name in role.permissions)

    @staticmethod
    def create_permission(
        db: Session,
        name: str,
        display_name: str,
        description: str,
        category: PermissionCategory,
        commit: bool = True,
    ) -> Permission:
        """Create a user-defined permission. Never system-protected."""
        normalized = normalize_permission_name(name)
        if not normalized:
            raise ValidationError("Permission name is required")
        existing = db.query(Permission).filter(Permission.name == normalized).first()
        if existing:
            raise ResourceConflictError("Permission with this name already exists")

        permission = Permission(
            name=normalized,
            display_name=display_name,
            description=description,
            category=category,
            is_system=False,
            is_active=True,
        )
        db.add(permission)
        commit_or_flush(db, commit)
        db.refresh(permission)
        logger.info("Created permission %s", permission.name)
        return permission

    @staticmethod
    def update_permission(
        db: Session,
        permission_id: int,
        fields: Dict[str, Any],
        commit: bool = True,
    ) -> Permission:
        """Partially update a non-system permission; absent fields keep their values."""
        permission = PermissionService.get_permission(db, permission_id)
        if permission.is_system:
            raise AuthorizationError("System permissions cannot be modified")

        for field in UPDATABLE_FIELDS:
            if fields.get(field) is not None:
                setattr(permission, field, fields[field])
        commit_or_flush(db, commit)
        db.refresh(permission)
        logger.info("Updated permission %s", permission.name)
        return permission

    @staticmethod
    def delete_permission(db: Session, permission_id: int, commit: bool = True) -> str:
        """Delete a non-system permission no role refers to. Returns its name."""
        permission = PermissionService.get_permission(db, permission_id)
        if permission.is_system:
            raise AuthorizationError("System permissions cannot be deleted")

        role_count = PermissionService.count_roles_citing(db, permission.name)
        if role_count > 0:
            raise ResourceConflictError(
                f"Cannot delete permission. {role_count} role(s) use this permission."
            )

        name = permission.name
        db.delete(permission)
        commit_or_flush(db, commit)
        logger.info("Deleted permission %s", name)
        return name

    @staticmethod
    def seed_permissions(db: Session, commit: bool = True) -> List[Permission]:
        """Insert the default catalog. Refuses to run on a non-empty registry."""
        if db.query(Permission).count() > 0:
            raise ResourceConflictError("Permissions already exist. Cannot seed.")

        permissions = [
            Permission(
                name=name,
                display_name=display_name,
                description=description,
                category=PermissionCategory(category),
                is_system=True,
                is_active=True,
            )
            for name, display_name, description, category in DEFAULT_PERMISSIONS
        ]
        db.add_all(permissions)
        commit_or_flush(db, commit)
        for permission in permissions:
            db.refresh(permission)
        logger.info("Seeded %d default permissions", len(permissions))
        return permissions


permission_service = PermissionService()
