"""Seed the super-admin user from env vars."""

from sqlalchemy.orm import Session
from backoffice.models.user import User
from backoffice.models.role import Role
from backoffice.services.auth_service import auth_service
from backoffice.core.config import settings


def seed_super_admin(db: Session) -> None:
    """Create the super-admin user if not already present."""
    super_admin_role = db.query(Role).filter(Role.name == "SUPER_ADMIN").first()
    if not super_admin_role:
        print("⚠️  SUPER_ADMIN role not found. Run seed_roles first.")
        return

    existing = db.query(User).filter(User.email == settings.SUPER_ADMIN_EMAIL.lower()).first()
    if existing:
        print(f"ℹ️  Super admin '{settings.SUPER_ADMIN_EMAIL}' already exists, skipping.")
        return

    auth_service.create_user(
        db,
        email=settings.SUPER_ADMIN_EMAIL,
        password=settings.SUPER_ADMIN_PASSWORD,
        full_name="Super Admin",
        role_name="SUPER_ADMIN",
    )
    print(f"✅ Created super admin: {settings.SUPER_ADMIN_EMAIL}")
