"""Seed default roles into the database."""

from sqlalchemy.orm import Session
from backoffice.core.exceptions import ResourceConflictError
from backoffice.models.permission import Permission
from backoffice.services.role_service import role_service


def seed_roles(db: Session) -> None:
    """Insert the system roles unless the registry already has entries."""
    if db.query(Permission).count() == 0:
        print("⚠️  No permissions registered. Roles will be seeded without permissions.")
    try:
        roles = role_service.seed_roles(db)
    except ResourceConflictError as e:
        print(f"ℹ️  {e.message} Skipping.")
        return
    print(f"✅ Seeded {len(roles)} roles")
