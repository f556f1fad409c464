"""Site settings API router."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from backoffice.db.session import get_db
from backoffice.models.user import User
from backoffice.schemas.schemas import SiteSettingsOut, SiteSettingsUpdate
from backoffice.services.settings_service import settings_service
from backoffice.services.audit_service import audit_service
from backoffice.core.security import require_site_settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/site")
async def get_site_settings(db: Session = Depends(get_db)):
    """Public storefront settings."""
    row = settings_service.get_site_settings(db)
    return {"success": True, "settings": SiteSettingsOut.model_validate(row)}


@router.put("/site")
async def update_site_settings(
    body: SiteSettingsUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_site_settings),
):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    row = settings_service.update_site_settings(db, changes, actor_id=user.id, commit=False)
    out = SiteSettingsOut.model_validate(row)
    audit_service.log_from_request(
        db, request, user,
        action="site_settings.updated",
        resource_type="site_settings",
        new_value=changes,
    )
    return {"success": True, "message": "Settings updated successfully", "settings": out}
