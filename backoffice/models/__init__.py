"""Models package — import all models so metadata is complete."""

from backoffice.models.permission import Permission, PermissionCategory
from backoffice.models.role import Role
from backoffice.models.user import User
from backoffice.models.audit_log import AuditLog
from backoffice.models.site_settings import SiteSettings

__all__ = [
    "Permission", "PermissionCategory", "Role", "User",
    "AuditLog", "SiteSettings",
]
