"""Role model for RBAC."""

import json

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from backoffice.db.base import Base


class Role(Base):
    """Named bundle of permission names, ordered by priority."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=False)
    description = Column(String(500), nullable=False)
    permissions_json = Column(Text, nullable=True)  # JSON list of permission names
    is_system = Column(Boolean, default=False, nullable=False, index=True)
    color = Column(String(20), default="#6B7280", nullable=False)
    priority = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_by = Column(
        Integer, ForeignKey("users.id", use_alter=True, name="fk_roles_created_by"), nullable=True
    )
    updated_by = Column(
        Integer, ForeignKey("users.id", use_alter=True, name="fk_roles_updated_by"), nullable=True
    )
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def permissions(self) -> list[str]:
        return json.loads(self.permissions_json) if self.permissions_json else []

    @permissions.setter
    def permissions(self, names: list[str]) -> None:
        self.permissions_json = json.dumps(list(names))
