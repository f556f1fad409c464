"""Permissions API router."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from backoffice.db.session import get_db
from backoffice.models.permission import PermissionCategory
from backoffice.models.user import User
from backoffice.schemas.schemas import PermissionCreate, PermissionUpdate, PermissionOut
from backoffice.services.permission_service import permission_service
from backoffice.services.audit_service import audit_service
from backoffice.core.security import require_permission_read, require_permission_admin

router = APIRouter(prefix="/permissions", tags=["permissions"])


@router.get("/")
async def list_permissions(
    search: Optional[str] = Query(None),
    category: Optional[PermissionCategory] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
    user: User = Depends(require_permission_read),
):
    """List permissions, also grouped by category."""
    result = permission_service.list_permissions(db, search, category, is_active)
    return {
        "success": True,
        "count": result["count"],
        "permissions": [PermissionOut.model_validate(p) for p in result["permissions"]],
        "grouped_permissions": {
            cat: [PermissionOut.model_validate(p) for p in perms]
            for cat, perms in result["grouped"].items()
        },
    }


@router.post("/seed", status_code=status.HTTP_201_CREATED)
async def seed_permissions(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission_admin),
):
    """Insert the default permission catalog into an empty registry."""
    permissions = permission_service.seed_permissions(db, commit=False)
    audit_service.log_from_request(
        db, request, user,
        action="permissions.seeded",
        resource_type="permission",
        new_value={"count": len(permissions)},
    )
    return {
        "success": True,
        "message": "Default permissions seeded successfully",
        "count": len(permissions),
        "permissions": [PermissionOut.model_validate(p) for p in permissions],
    }


@router.get("/{permission_id}")
async def get_permission(
    permission_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission_read),
):
    """Get one permission with the number of roles citing it."""
    permission = permission_service.get_permission(db, permission_id)
    out = PermissionOut.model_validate(permission)
    out.role_count = permission_service.count_roles_citing(db, permission.name)
    return {"success": True, "permission": out}


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_permission(
    body: PermissionCreate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission_admin),
):
    """Create a user-defined permission."""
    permission = permission_service.create_permission(
        db, body.name, body.display_name, body.description, body.category, commit=False,
    )
    out = PermissionOut.model_validate(permission)
    audit_service.log_from_request(
        db, request, user,
        action="permission.created",
        resource_type="permission",
        resource_id=permission.id,
        new_value=out.model_dump(),
    )
    return {"success": True, "message": "Permission created successfully", "permission": out}


@router.put("/{permission_id}")
async def update_permission(
    permission_id: int,
    body: PermissionUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission_admin),
):
    """Update a non-system permission."""
    before = PermissionOut.model_validate(permission_service.get_permission(db, permission_id))
    permission = permission_service.update_permission(
        db, permission_id, body.model_dump(exclude_unset=True, exclude_none=True), commit=False,
    )
    out = PermissionOut.model_validate(permission)
    audit_service.log_from_request(
        db, request, user,
        action="permission.updated",
        resource_type="permission",
        resource_id=permission.id,
        old_value=before.model_dump(),
        new_value=out.model_dump(),
    )
    return {"success": True, "message": "Permission updated successfully", "permission": out}


@router.delete("/{permission_id}")
async def delete_permission(
    permission_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission_admin),
):
    """Delete a non-system permission that no role uses."""
    name = permission_service.delete_permission(db, permission_id, commit=False)
    audit_service.log_from_request(
        db, request, user,
        action="permission.deleted",
        resource_type="permission",
        resource_id=permission_id,
        old_value={"name": name},
    )
    return {"success": True, "message": "Permission deleted successfully"}
