"""Role registry — priority-ordered bundles of permission names."""

import logging
import math
import re
from typing import Optional, Dict, Any, List, Tuple

from sqlalchemy import or_, func
from sqlalchemy.orm import Session

from backoffice.db.session import commit_or_flush
from backoffice.models.permission import Permission
from backoffice.models.role import Role
from backoffice.models.user import User
from backoffice.db.seeds.catalog import default_roles
from backoffice.services.permission_service import LIKE_ESCAPE, like_pattern
from backoffice.core.exceptions import (
    AuthorizationError, ResourceConflictError, ResourceNotFoundError, ValidationError,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("display_name", "description", "color", "priority", "is_active")


def normalize_role_name(name: str) -> str:
    """``"store manager"`` -> ``"STORE_MANAGER"``."""
    return re.sub(r"\s+", "_", name.strip().upper())


class RoleService:
    """CRUD, user listing and bootstrap for roles.

    Mutations take ``commit=False`` when the caller audits in the same transaction.
    """

    @staticmethod
    def count_users(db: Session, role_id: int) -> int:
        return db.query(User).filter(User.role_id == role_id).count()

    @staticmethod
    def validate_permissions(db: Session, names: List[str]) -> List[str]:
        """Return ``names`` de-duplicated, or raise if any is not registered.

        The whole list is rejected on a single unknown name.
        """
        requested = list(dict.fromkeys(names))
        if not requested:
            return requested
        known = {
            row.name
            for row in db.query(Permission.name).filter(Permission.name.in_(requested)).all()
        }
        unknown = [n for n in requested if n not in known]
        if unknown:
            raise ValidationError(f"Some permissions are invalid: {', '.join(unknown)}")
        return requested

    @staticmethod
    def list_roles(
        db: Session,
        search: Optional[str] = None,
        is_system: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> List[Tuple[Role, int]]:
        """Roles by priority desc, name asc, each paired with its live user count."""
        query = db.query(Role)

        if search:
            pattern = like_pattern(search)
            query = query.filter(or_(
                Role.name.ilike(pattern, escape=LIKE_ESCAPE),
                Role.display_name.ilike(pattern, escape=LIKE_ESCAPE),
                Role.description.ilike(pattern, escape=LIKE_ESCAPE),
            ))
        if is_system is not None:
            query = query.filter(Role.is_system == is_system)
        if is_active is not None:
            query = query.filter(Role.is_active == is_active)

        roles = query.order_by(Role.priority.desc(), Role.name.asc()).all()

        counts = dict(
            db.query(User.role_id, func.count(User.id))
            .filter(User.role_id.in_([r.id for r in roles]))
            .group_by(User.role_id)
            .all()
        ) if roles else {}
        return [(role, counts.get(role.id, 0)) for role in roles]

    @staticmethod
    def get_role(db: Session, role_id: int) -> Role:
        role = db.query(Role).filter(Role.id == role_id).first()
        if not role:
            raise ResourceNotFoundError("Role not found")
        return role

    @staticmethod
    def create_role(
        db: Session,
        name: str,
        display_name: str,
        description: str,
        permissions: List[str],
        color: Optional[str] = None,
        priority: Optional[int] = None,
        actor_id: Optional[int] = None,
        commit: bool = True,
    ) -> Role:
        """Create a user-defined role after validating every permission name."""
        normalized = normalize_role_name(name)
        if not normalized:
            raise ValidationError("Role name is required")
        existing = db.query(Role).filter(Role.name == normalized).first()
        if existing:
            raise ResourceConflictError("Role with this name already exists")

        valid = RoleService.validate_permissions(db, permissions)

        role = Role(
            name=normalized,
            display_name=display_name,
            description=description,
            color=color or "#6B7280",
            priority=priority if priority is not None else 0,
            is_system=False,
            is_active=True,
            created_by=actor_id,
        )
        role.permissions = valid
        db.add(role)
        commit_or_flush(db, commit)
        db.refresh(role)
        logger.info("Created role %s with %d permissions", role.name, len(valid))
        return role

    @staticmethod
    def update_role(
        db: Session,
        role_id: int,
        fields: Dict[str, Any],
        actor_id: Optional[int] = None,
        commit: bool = True,
    ) -> Role:
        """Partially update a non-system role.

        A supplied ``permissions`` list replaces the current one only after the
        full replacement set validates.
        """
        role = RoleService.get_role(db, role_id)
        if role.is_system:
            raise AuthorizationError("System roles cannot be modified")

        if fields.get("permissions") is not None:
            role.permissions = RoleService.validate_permissions(db, fields["permissions"])
        for field in UPDATABLE_FIELDS:
            if fields.get(field) is not None:
                setattr(role, field, fields[field])
        role.updated_by = actor_id
        commit_or_flush(db, commit)
        db.refresh(role)
        logger.info("Updated role %s", role.name)
        return role

    @staticmethod
    def delete_role(db: Session, role_id: int, commit: bool = True) -> str:
        """Delete a non-system role no user is assigned to. Returns its name."""
        role = RoleService.get_role(db, role_id)
        if role.is_system:
            raise AuthorizationError("System roles cannot be deleted")

        user_count = RoleService.count_users(db, role.id)
        if user_count > 0:
            raise ResourceConflictError(
                f"Cannot delete role. {user_count} user(s) are assigned to this role."
            )

        name = role.name
        db.delete(role)
        commit_or_flush(db, commit)
        logger.info("Deleted role %s", name)
        return name

    @staticmethod
    def list_role_users(db: Session, role_id: int, page: int = 1, page_size: int = 10):
        """Users holding a role, newest first."""
        role = RoleService.get_role(db, role_id)
        query = db.query(User).filter(User.role_id == role.id)
        total = query.count()
        users = (
            query.order_by(User.created_at.desc(), User.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return {
            "users": users,
            "count": len(users),
            "total": total,
            "total_pages": math.ceil(total / page_size),
            "current_page": page,
        }

    @staticmethod
    def seed_roles(
        db: Session, actor_id: Optional[int] = None, commit: bool = True,
    ) -> List[Role]:
        """Insert the six system roles. Refuses to run on a non-empty registry.

        Runs against whatever permissions are registered; seeded before the
        permission catalog, every role comes out empty.
        """
        if db.query(Role).count() > 0:
            raise ResourceConflictError("Roles already exist. Cannot seed.")

        active_names = [
            row.name
            for row in db.query(Permission.name)
            .filter(Permission.is_active.is_(True))
            .order_by(Permission.id)
            .all()
        ]
        if not active_names:
            logger.warning("Seeding roles with an empty permission registry")

        roles = []
        for data in default_roles(active_names):
            permissions = data.pop("permissions")
            role = Role(**data, is_system=True, is_active=True, created_by=actor_id)
            role.permissions = permissions
            roles.append(role)
        db.add_all(roles)
        commit_or_flush(db, commit)
        for role in roles:
            db.refresh(role)
        logger.info("Seeded %d system roles", len(roles))
        return roles


role_service = RoleService()
