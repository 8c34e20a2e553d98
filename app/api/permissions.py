# app/api/permissions.py
import logging
from typing import Callable

from fastapi import Depends

from app.api.deps import get_current_principal
from app.core.exceptions import AuthorizationError
from app.core.rbac import Principal, ROLE_ADMIN, ROLE_STUDENT

logger = logging.getLogger(__name__)

ROLE_LABELS = {
    ROLE_ADMIN: "Faculty",
    ROLE_STUDENT: "Student",
}

def require_roles(*roles: str) -> Callable[[Principal], Principal]:
    """
    Use: Depends(require_roles(ROLE_ADMIN))
    Bloqueia quem não tiver uma das roles permitidas.
    """
    allowed = set(roles)

    def _checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            logger.warning("role check failed", extra={"actor_id": principal.id, "role": principal.role})
            raise AuthorizationError(
                f"Access denied for role '{ROLE_LABELS.get(principal.role, 'Unknown')}'.",
                details={"required": sorted(allowed)},
            )
        return principal

    return _checker

require_admin = require_roles(ROLE_ADMIN)
