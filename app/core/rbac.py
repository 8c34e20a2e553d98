# app/core/rbac.py
"""
Role gate.

A ``Principal`` is resolved once per request (see ``app.api.deps``) and passed
explicitly into the services; nothing here reads ambient state.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

ROLE_ADMIN = "admin"      # faculty
ROLE_STUDENT = "student"

_PRECEDENCE = [ROLE_ADMIN, ROLE_STUDENT]


class VisibilityScope(str, Enum):
    OWNER_FULL = "owner_full"
    ADMIN_FULL = "admin_full"
    PUBLIC_VERIFIED_ONLY = "public_verified_only"

    @property
    def includes_unverified(self) -> bool:
        return self is not VisibilityScope.PUBLIC_VERIFIED_ONLY


@dataclass(frozen=True)
class Principal:
    id: str
    role: str = ROLE_STUDENT
    name: str = ""
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def can_verify(self) -> bool:
        return self.is_admin


def primary_role(role_names: Iterable[str]) -> str:
    names = {str(n).lower() for n in role_names if n}
    return next((p for p in _PRECEDENCE if p in names), ROLE_STUDENT)


def principal_for(user) -> Principal:
    role = primary_role(r.name for r in (getattr(user, "roles", None) or []))
    return Principal(id=user.id, role=role, name=user.name, email=user.email)


def can_verify(principal: Optional[Principal]) -> bool:
    return principal is not None and principal.can_verify()


def visibility_scope(viewer: Optional[Principal], owner_id: str) -> VisibilityScope:
    if viewer is None:
        return VisibilityScope.PUBLIC_VERIFIED_ONLY
    if viewer.id == owner_id:
        return VisibilityScope.OWNER_FULL
    if viewer.is_admin:
        return VisibilityScope.ADMIN_FULL
    return VisibilityScope.PUBLIC_VERIFIED_ONLY
