"""Roles API router."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.db.session import get_db
from backoffice.models.role import Role
from backoffice.models.user import User
from backoffice.schemas.schemas import RoleCreate, RoleUpdate, RoleOut, UserOut
from backoffice.services.role_service import role_service
from backoffice.services.audit_service import audit_service
from backoffice.core.security import require_role_manager, require_role_admin

router = APIRouter(prefix="/roles", tags=["roles"])


def _role_out(role: Role, user_count: Optional[int] = None) -> RoleOut:
    out = RoleOut.model_validate(role)
    out.user_count = user_count
    return out


@router.get("/")
async def list_roles(
    search: Optional[str] = Query(None),
    is_system: Optional[bool] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
    user: User = Depends(require_role_manager),
):
    """List roles by priority, each with its user count."""
    roles = role_service.list_roles(db, search, is_system, is_active)
    return {
        "success": True,
        "count": len(roles),
        "roles": [_role_out(role, count) for role, count in roles],
    }


@router.post("/seed", status_code=status.HTTP_201_CREATED)
async def seed_roles(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_role_admin),
):
    """Insert the six system roles into an empty registry."""
    roles = role_service.seed_roles(db, actor_id=user.id, commit=False)
    audit_service.log_from_request(
        db, request, user,
        action="roles.seeded",
        resource_type="role",
        new_value={"roles": [r.name for r in roles]},
    )
    return {
        "success": True,
        "message": "Default roles seeded successfully",
        "count": len(roles),
        "roles": [_role_out(r) for r in roles],
    }


@router.get("/{role_id}")
async def get_role(
    role_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_role_manager),
):
    role = role_service.get_role(db, role_id)
    return {"success": True, "role": _role_out(role, role_service.count_users(db, role.id))}


@router.get("/{role_id}/users")
async def list_role_users(
    role_id: int,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db),
    user: User = Depends(require_role_manager),
):
    """Users assigned to a role, newest first."""
    result = role_service.list_role_users(db, role_id, page, page_size)
    return {
        "success": True,
        "count": result["count"],
        "total": result["total"],
        "total_pages": result["total_pages"],
        "current_page": result["current_page"],
        "users": [UserOut.model_validate(u) for u in result["users"]],
    }


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_role(
    body: RoleCreate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_role_manager),
):
    """Create a custom role."""
    role = role_service.create_role(
        db,
        name=body.name,
        display_name=body.display_name,
        description=body.description,
        permissions=body.permissions,
        color=body.color,
        priority=body.priority,
        actor_id=user.id,
        commit=False,
    )
    out = _role_out(role, 0)
    audit_service.log_from_request(
        db, request, user,
        action="role.created",
        resource_type="role",
        resource_id=out.id,
        new_value=out.model_dump(),
    )
    return {"success": True, "message": "Role created successfully", "role": out}


@router.put("/{role_id}")
async def update_role(
    role_id: int,
    body: RoleUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_role_manager),
):
    """Update a custom role; system roles are immutable."""
    before = _role_out(role_service.get_role(db, role_id))
    role = role_service.update_role(
        db, role_id, body.model_dump(exclude_unset=True, exclude_none=True), actor_id=user.id,
        commit=False,
    )
    out = _role_out(role, role_service.count_users(db, role.id))
    audit_service.log_from_request(
        db, request, user,
        action="role.updated",
        resource_type="role",
        resource_id=out.id,
        old_value=before.model_dump(),
        new_value=out.model_dump(),
    )
    return {"success": True, "message": "Role updated successfully", "role": out}


@router.delete("/{role_id}")
async def delete_role(
    role_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_role_admin),
):
    name = role_service.delete_role(db, role_id, commit=False)
    audit_service.log_from_request(
        db, request, user,
        action="role.deleted",
        resource_type="role",
        resource_id=role_id,
        old_value={"name": name},
    )
    return {"success": True, "message": "Role deleted successfully"}
