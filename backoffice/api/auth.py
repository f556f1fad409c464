"""Auth API router — login and current-user profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.db.session import get_db
from backoffice.models.user import User
from backoffice.schemas.schemas import LoginRequest, UserOut
from backoffice.services.auth_service import auth_service
from backoffice.services.authorization_service import authorization_service
from backoffice.core.security import get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate and return a JWT access token."""
    result = auth_service.authenticate(db, body.email, body.password)
    return {"success": True, **result}


@router.get("/me")
async def get_me(user: User = Depends(get_current_user)):
    """Current user profile with the permissions actually in effect."""
    return {
        "success": True,
        "user": UserOut.model_validate(user),
        "role": user.role.name if user.role else None,
        "permissions": sorted(authorization_service.resolve_effective_permissions(user)),
    }
