# app/api/v1/certificates.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal, get_db, get_optional_principal
from app.core.exceptions import NotFoundError
from app.core.rbac import Principal, visibility_scope
from app.crud.certificate import certificate_crud
from app.schemas.certificate import CertificateCreate, CertificateOut, CertificateUpdate

router = APIRouter()

@router.post("/", response_model=CertificateOut, status_code=status.HTTP_201_CREATED)
def create_certificate(
    body: CertificateCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return CertificateOut.from_record(certificate_crud.create_for(db, principal, body))

@router.get("/", response_model=List[CertificateOut])
def list_my_certificates(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return [CertificateOut.from_record(c) for c in certificate_crud.list_by_owner(db, principal.id)]

@router.get("/{certificate_id}", response_model=CertificateOut)
def get_certificate(
    certificate_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    viewer: Optional[Principal] = Depends(get_optional_principal),
):
    c = certificate_crud.get_or_404(db, certificate_id)
    # pendente de outro dono é invisível para o público
    if not c.is_verified and not visibility_scope(viewer, c.user_id).includes_unverified:
        raise NotFoundError("Certificate", certificate_id)
    return CertificateOut.from_record(c)

@router.patch("/{certificate_id}", response_model=CertificateOut)
def update_certificate(
    body: CertificateUpdate,
    certificate_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return CertificateOut.from_record(certificate_crud.update_content(db, principal, certificate_id, body))

@router.delete("/{certificate_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_certificate(
    certificate_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    certificate_crud.delete_for(db, principal, certificate_id)
