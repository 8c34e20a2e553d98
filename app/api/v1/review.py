# app/api/v1/review.py
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal, get_db
from app.core.rbac import Principal
from app.schemas.certificate import CertificateOut
from app.schemas.project import ProjectOut
from app.schemas.review import VerificationIn
from app.services.verification import RecordKind, unverify, verify

router = APIRouter()

class KindPath(str, Enum):
    certificates = "certificates"
    projects = "projects"

_KINDS = {KindPath.certificates: RecordKind.certificate, KindPath.projects: RecordKind.project}

def _out(kind: RecordKind, record) -> Union[CertificateOut, ProjectOut]:
    if kind is RecordKind.project:
        return ProjectOut.from_record(record)
    return CertificateOut.from_record(record)

# a checagem de papel fica na máquina de estados (AuthorizationError -> 403)
@router.post("/{kind}/{record_id}/verify", response_model=Union[ProjectOut, CertificateOut])
def verify_record(
    kind: KindPath,
    record_id: str = Path(..., min_length=1),
    body: Optional[VerificationIn] = Body(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rk = _KINDS[kind]
    record = verify(db, rk, record_id, principal, review_comments=body.review_comments if body else None)
    return _out(rk, record)

@router.post("/{kind}/{record_id}/unverify", response_model=Union[ProjectOut, CertificateOut])
def unverify_record(
    kind: KindPath,
    record_id: str = Path(..., min_length=1),
    body: Optional[VerificationIn] = Body(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rk = _KINDS[kind]
    record = unverify(db, rk, record_id, principal, review_comments=body.review_comments if body else None)
    return _out(rk, record)
