"""Audit service — append-only trail of registry and settings mutations."""

import json
from typing import Optional, Any
from sqlalchemy.orm import Session
from fastapi import Request

from backoffice.models.audit_log import AuditLog
from backoffice.models.user import User


class AuditService:
    """Records immutable audit log entries for back-office mutations."""

    @staticmethod
    def log(
        db: Session,
        actor: Optional[User],
        action: str,
        resource_type: str,
        resource_id: Optional[Any] = None,
        old_value: Optional[Any] = None,
        new_value: Optional[Any] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        """Write a single audit log record.

        Args:
            action: e.g. "role.created", "permission.deleted", "permissions.seeded"
            resource_type: role, permission, site_settings

        Commits immediately, together with any change the caller has only
        flushed, so a mutation and its audit entry land or fail as one.
        """
        entry = AuditLog(
            actor_id=actor.id if actor else None,
            actor_email=actor.email if actor else None,
            action=action,
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
            old_value_json=json.dumps(old_value, default=str) if old_value else None,
            new_value_json=json.dumps(new_value, default=str) if new_value else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        db.add(entry)
        db.commit()
        return entry

    @staticmethod
    def log_from_request(
        db: Session,
        request: Request,
        actor: Optional[User],
        action: str,
        resource_type: str,
        resource_id: Optional[Any] = None,
        old_value: Optional[Any] = None,
        new_value: Optional[Any] = None,
    ) -> AuditLog:
        """Write audit log extracting IP and user-agent from the request."""
        ip = request.client.host if request.client else None
        ua = request.headers.get("user-agent", "")[:500]
        return AuditService.log(
            db=db,
            actor=actor,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            old_value=old_value,
            new_value=new_value,
            ip_address=ip,
            user_agent=ua,
        )


audit_service = AuditService()
