"""Site settings — one lazily created configuration row."""

import logging
from typing import Dict, Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backoffice.models.site_settings import SiteSettings, SINGLETON_KEY
from backoffice.db.session import commit_or_flush

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "site_name", "logo", "favicon", "primary_color", "secondary_color",
    "contact_email", "contact_phone", "contact_address",
    "meta_title", "meta_description", "meta_keywords",
)


class SettingsService:
    """Read and update the site settings row."""

    @staticmethod
    def get_site_settings(db: Session) -> SiteSettings:
        """Return the settings row, creating it with defaults on first access."""
        row = db.query(SiteSettings).filter(SiteSettings.singleton_key == SINGLETON_KEY).first()
        if row:
            return row

        row = SiteSettings(singleton_key=SINGLETON_KEY)
        row.social_links = {"facebook": "", "twitter": "", "instagram": "", "youtube": ""}
        db.add(row)
        try:
            db.commit()
        except IntegrityError:
            # Another request created it first.
            db.rollback()
            return db.query(SiteSettings).filter(SiteSettings.singleton_key == SINGLETON_KEY).one()
        db.refresh(row)
        logger.info("Initialized site settings")
        return row

    @staticmethod
    def update_site_settings(
        db: Session,
        fields: Dict[str, Any],
        actor_id: Optional[int] = None,
        commit: bool = True,
    ) -> SiteSettings:
        row = SettingsService.get_site_settings(db)
        for field in UPDATABLE_FIELDS:
            if fields.get(field) is not None:
                setattr(row, field, fields[field])
        if fields.get("social_links") is not None:
            row.social_links = {**row.social_links, **fields["social_links"]}
        row.updated_by = actor_id
        commit_or_flush(db, commit)
        db.refresh(row)
        return row


settings_service = SettingsService()
