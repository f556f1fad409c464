"""Pydantic schemas for API request/response serialization."""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime

from backoffice.models.permission import PermissionCategory


# ---- Auth ----
class LoginRequest(BaseModel):
    email: str = Field(..., min_length=4)
    password: str = Field(..., min_length=4)


# ---- User ----
class UserOut(BaseModel):
    id: int
    email: str
    full_name: str
    phone: Optional[str] = None
    role_id: int
    is_active: bool = True
    has_custom_permissions: bool = False
    custom_permissions: List[str] = []
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---- Permission ----
class PermissionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    display_name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: PermissionCategory


class PermissionUpdate(BaseModel):
    display_name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[PermissionCategory] = None
    is_active: Optional[bool] = None


class PermissionOut(BaseModel):
    id: int
    name: str
    display_name: str
    description: str
    category: PermissionCategory
    is_system: bool
    is_active: bool
    role_count: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---- Role ----
class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    display_name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    permissions: List[str] = []
    color: Optional[str] = None
    priority: Optional[int] = None


class RoleUpdate(BaseModel):
    display_name: Optional[str] = None
    description: Optional[str] = None
    permissions: Optional[List[str]] = None
    color: Optional[str] = None
    priority: Optional[int] = None
    is_active: Optional[bool] = None


class RoleOut(BaseModel):
    id: int
    name: str
    display_name: str
    description: str
    permissions: List[str] = []
    is_system: bool
    color: str
    priority: int
    is_active: bool
    created_by: Optional[int] = None
    updated_by: Optional[int] = None
    user_count: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---- Site settings ----
class SiteSettingsOut(BaseModel):
    site_name: str
    logo: str
    favicon: str
    primary_color: str
    secondary_color: str
    contact_email: str
    contact_phone: str
    contact_address: str
    meta_title: str
    meta_description: str
    meta_keywords: str
    social_links: Dict[str, str] = {}
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SiteSettingsUpdate(BaseModel):
    site_name: Optional[str] = None
    logo: Optional[str] = None
    favicon: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_address: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None
