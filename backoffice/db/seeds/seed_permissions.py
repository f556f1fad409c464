"""Seed the default permission catalog."""

from sqlalchemy.orm import Session
from backoffice.core.exceptions import ResourceConflictError
from backoffice.services.permission_service import permission_service


def seed_permissions(db: Session) -> None:
    """Insert the catalog unless the registry already has entries."""
    try:
        permissions = permission_service.seed_permissions(db)
    except ResourceConflictError as e:
        print(f"ℹ️  {e.message} Skipping.")
        return
    print(f"✅ Seeded {len(permissions)} permissions")
