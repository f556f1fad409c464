"""JWT authentication and permission-based authorization helpers."""

import logging
import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.exceptions import forbidden, unauthorized
from backoffice.db.session import get_db
from backoffice.models.user import User
from backoffice.services.authorization_service import authorization_service

logger = logging.getLogger(__name__)

# JWT bearer scheme
security_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pwd_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    return bcrypt.checkpw(pwd_bytes, hashed_bytes)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRY_MINUTES)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise unauthorized("Invalid or expired token")


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> int:
    """Extract user_id from the JWT Bearer token."""
    if credentials is None:
        raise unauthorized("Not authorized to access this route")
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if user_id is None:
        raise unauthorized("Invalid token payload")
    try:
        return int(user_id)
    except ValueError:
        raise unauthorized("Invalid token payload")


async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """Load the authenticated, active user."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise unauthorized("User not found")
    if not user.is_active:
        raise unauthorized("Account is deactivated")
    return user


class RequirePermission:
    """Dependency that admits users holding any of the given permissions.

    No credential, an invalid one, or an unknown user yields 401; an
    identified user without a matching permission (or ``*``) yields 403.
    """

    def __init__(self, *permissions: str):
        self.permissions = permissions

    async def __call__(self, user: User = Depends(get_current_user)) -> User:
        if not authorization_service.has_any_permission(user, self.permissions):
            logger.warning(
                "Denied user %s: requires one of %s",
                user.email, ", ".join(self.permissions),
            )
            raise forbidden(
                f"Requires permission: {' or '.join(self.permissions)}"
            )
        return user


# Route gates
require_permission_read = RequirePermission("manage_permissions", "manage_roles")
require_permission_admin = RequirePermission("manage_system_permissions")
require_role_manager = RequirePermission("manage_roles")
require_role_admin = RequirePermission("manage_system_roles")
require_site_settings = RequirePermission("manage_site_settings")
