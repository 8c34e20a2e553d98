# app/services/verification.py
"""
Verification state machine for certificates and projects.

    Unverified --verify--> Verified --unverify--> Unverified

Both record kinds go through the same transition code; the kind only picks
the store and whether a reviewer note may be recorded. Only principals that
``can_verify()`` may move a record, every transition is applied with a
single commit together with its audit row, and ``review_comments`` is never
cleared by unverify unless the caller sends an explicit empty note.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, ValidationError
from app.core.rbac import Principal, can_verify
from app.crud.base import OwnedRecordStore
from app.crud.certificate import certificate_crud
from app.crud.project import project_crud
from app.models.audit import AuditLog

logger = logging.getLogger(__name__)


class RecordKind(str, Enum):
    certificate = "certificate"
    project = "project"

    @property
    def store(self) -> OwnedRecordStore:
        return _STORES[self]

    @property
    def supports_review_comments(self) -> bool:
        return self is RecordKind.project


_STORES: Dict[RecordKind, OwnedRecordStore] = {
    RecordKind.certificate: certificate_crud,
    RecordKind.project: project_crud,
}


def _snapshot(record) -> Dict[str, Any]:
    at = record.verified_at
    return {
        "is_verified": bool(record.is_verified),
        "verified_by": record.verified_by,
        "verified_at": at.isoformat() if at else None,
    }


def _transition(
    db: Session,
    kind: RecordKind,
    record_id: str,
    principal: Optional[Principal],
    *,
    verified: bool,
    review_comments: Optional[str],
    now: Optional[datetime],
):
    action = "verify" if verified else "unverify"
    if not can_verify(principal):
        logger.warning(
            "verification denied",
            extra={"kind": kind.value, "record_id": record_id, "actor_id": getattr(principal, "id", None), "action": action},
        )
        raise AuthorizationError(
            "Only faculty accounts can change verification status",
            details={"kind": kind.value, "id": record_id},
        )
    if review_comments is not None and not kind.supports_review_comments:
        raise ValidationError(
            "Review comments can only be recorded for projects",
            details={"field": "review_comments", "kind": kind.value},
        )

    store = kind.store
    record = store.get_or_404(db, record_id)
    before = _snapshot(record)

    if verified:
        fields: Dict[str, Any] = {
            "is_verified": True,
            "verified_by": principal.id,
            "verified_at": now or datetime.now(timezone.utc),
        }
    else:
        fields = {"is_verified": False, "verified_by": None, "verified_at": None}
    if review_comments is not None:
        fields["review_comments"] = review_comments.strip() or None

    audit = AuditLog(
        user_id=principal.id,
        entity=kind.value,
        entity_id=record.id,
        action=action,
        diff_json={
            "before": before,
            "after": {
                "is_verified": fields["is_verified"],
                "verified_by": fields["verified_by"],
                "verified_at": fields["verified_at"].isoformat() if fields["verified_at"] else None,
            },
        },
    )
    record = store.apply_verification(db, record, fields, audit=audit)
    logger.info(
        "verification changed",
        extra={"kind": kind.value, "record_id": record.id, "actor_id": principal.id, "action": action},
    )
    return record


def verify(db: Session, kind: RecordKind, record_id: str, principal: Optional[Principal],
           review_comments: Optional[str] = None, now: Optional[datetime] = None):
    """Marca como verificado; em registro já verificado apenas renova verified_by/verified_at."""
    return _transition(db, kind, record_id, principal, verified=True, review_comments=review_comments, now=now)


def unverify(db: Session, kind: RecordKind, record_id: str, principal: Optional[Principal],
             review_comments: Optional[str] = None):
    return _transition(db, kind, record_id, principal, verified=False, review_comments=review_comments, now=None)
