"""Express the legacy admin/super_admin name gates as wildcard grants."""

import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from backoffice.models.role import Role
from backoffice.services.authorization_service import WILDCARD

logger = logging.getLogger(__name__)


def grant_legacy_wildcard(db: Session, role_names: List[str]) -> List[str]:
    """Append ``*`` to every role whose name matches ``role_names`` case-insensitively.

    Bypasses system-role protection and permission validation; ``*`` is not a
    registered permission. Returns the names of the roles that changed.
    """
    wanted = [n.upper() for n in role_names]
    roles = db.query(Role).filter(func.upper(Role.name).in_(wanted)).all()

    changed = []
    for role in roles:
        if WILDCARD in role.permissions:
            continue
        role.permissions = role.permissions + [WILDCARD]
        changed.append(role.name)
    db.commit()
    if changed:
        logger.info("Granted wildcard to legacy roles: %s", ", ".join(changed))
    return changed
