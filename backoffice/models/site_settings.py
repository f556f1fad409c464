"""Site settings model — a single row keyed by ``singleton_key``."""

import json

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from backoffice.db.base import Base

SINGLETON_KEY = "default"


class SiteSettings(Base):
    """Storefront branding and contact configuration.

    At most one row exists; the unique ``singleton_key`` column rejects a
    second insert.
    """
    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    singleton_key = Column(String(20), unique=True, nullable=False, default=SINGLETON_KEY)
    site_name = Column(String(255), nullable=False, default="E-Shop")
    logo = Column(String(500), nullable=False, default="")
    favicon = Column(String(500), nullable=False, default="")
    primary_color = Column(String(20), nullable=False, default="#3b82f6")
    secondary_color = Column(String(20), nullable=False, default="#10b981")
    contact_email = Column(String(255), nullable=False, default="")
    contact_phone = Column(String(50), nullable=False, default="")
    contact_address = Column(String(500), nullable=False, default="")
    meta_title = Column(String(255), nullable=False, default="")
    meta_description = Column(String(500), nullable=False, default="")
    meta_keywords = Column(String(500), nullable=False, default="")
    social_links_json = Column(Text, nullable=True)  # {"facebook": url, ...}
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def social_links(self) -> dict:
        return json.loads(self.social_links_json) if self.social_links_json else {}

    @social_links.setter
    def social_links(self, links: dict) -> None:
        self.social_links_json = json.dumps(links)
