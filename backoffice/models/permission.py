"""Permission model."""

import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, func
from backoffice.db.base import Base


class PermissionCategory(str, enum.Enum):
    Dashboard = "Dashboard"
    Products = "Products"
    Orders = "Orders"
    Users = "Users"
    Inventory = "Inventory"
    POS = "POS"
    Reports = "Reports"
    Settings = "Settings"
    System = "System"
    Content = "Content"


class Permission(Base):
    """Named capability token, grouped by category."""
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=False)
    description = Column(String(500), nullable=False)
    category = Column(Enum(PermissionCategory), nullable=False, index=True)
    is_system = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
