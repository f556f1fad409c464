"""Auth service — login and user creation."""

from datetime import datetime, timezone
from typing import Dict, Any, Optional, List

from sqlalchemy.orm import Session

from backoffice.models.user import User
from backoffice.models.role import Role
from backoffice.core.security import hash_password, verify_password, create_access_token
from backoffice.core.exceptions import (
    AuthenticationError, ResourceConflictError, ResourceNotFoundError,
)


class AuthService:
    """Handles authentication and user management."""

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Dict[str, Any]:
        """Authenticate user and return a JWT access token.

        Raises:
            AuthenticationError: If credentials are invalid or the account is deactivated.
        """
        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if not user or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        role_name = user.role.name if user.role else None
        access_token = create_access_token({
            "sub": str(user.id),
            "email": user.email,
            "role": role_name,
        })

        user.last_login_at = datetime.now(timezone.utc)
        db.commit()

        return {
            "access_token": access_token,
            "token_type": "bearer",
            "user": {
                "id": user.id,
                "email": user.email,
                "full_name": user.full_name,
                "role": role_name,
            },
        }

    @staticmethod
    def create_user(
        db: Session,
        email: str,
        password: str,
        full_name: str,
        role_name: str = "CUSTOMER",
        custom_permissions: Optional[List[str]] = None,
    ) -> User:
        """Create a new user; a custom permission list switches on the override."""
        email = email.strip().lower()
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            raise ResourceConflictError(f"User with email {email} already exists")

        role = db.query(Role).filter(Role.name == role_name).first()
        if not role:
            raise ResourceNotFoundError(f"Role '{role_name}' not found")

        user = User(
            email=email,
            hashed_password=hash_password(password),
            full_name=full_name,
            role_id=role.id,
            is_active=True,
            has_custom_permissions=custom_permissions is not None,
        )
        user.custom_permissions = custom_permissions or []
        db.add(user)
        db.commit()
        db.refresh(user)
        return user


auth_service = AuthService()
