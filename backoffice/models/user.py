"""User model."""

import json

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from backoffice.db.base import Base


class User(Base):
    """Back-office user with exactly one role and optional permission override."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    custom_permissions_json = Column(Text, nullable=True)  # JSON list of permission names
    has_custom_permissions = Column(Boolean, default=False, nullable=False)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    role = relationship("Role", foreign_keys=[role_id], lazy="joined")

    @property
    def custom_permissions(self) -> list[str]:
        return json.loads(self.custom_permissions_json) if self.custom_permissions_json else []

    @custom_permissions.setter
    def custom_permissions(self, names: list[str]) -> None:
        self.custom_permissions_json = json.dumps(list(names))
