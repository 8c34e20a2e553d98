# app/api/v1/admin.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.api.permissions import require_admin
from app.core.rbac import ROLE_ADMIN, ROLE_STUDENT
from app.crud.base import store_call
from app.crud.certificate import certificate_crud
from app.crud.project import project_crud
from app.crud.user import user_crud
from app.models.analytics import AnalyticsMetric
from app.models.certificate import Certificate
from app.models.project import Project, ProjectStatus
from app.schemas.certificate import CertificateOut
from app.schemas.project import ProjectOut
from app.schemas.review import AdminStats

router = APIRouter(dependencies=[Depends(require_admin)])

# ------------------------- filas de revisão -------------------------

@router.get("/certificates", response_model=List[CertificateOut])
def review_certificates(
    verified: Optional[bool] = Query(None, description="Omit for all; false = pending queue"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    rows = certificate_crud.list_all(db, verified=verified, skip=(page - 1) * page_size, limit=page_size)
    return [CertificateOut.from_record(c) for c in rows]

@router.get("/projects", response_model=List[ProjectOut])
def review_projects(
    verified: Optional[bool] = Query(None, description="Omit for all; false = pending queue"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    rows = project_crud.list_all(db, verified=verified, skip=(page - 1) * page_size, limit=page_size)
    return [ProjectOut.from_record(p) for p in rows]

# ---------------------------- dashboard -----------------------------

def _count(db: Session, model, *where) -> int:
    return db.scalar(select(func.count()).select_from(model).where(*where)) or 0

@router.get("/stats", response_model=AdminStats)
def admin_stats(db: Session = Depends(get_db)):
    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    with store_call(db, "stats:admin"):
        return AdminStats(
            total_students=user_crud.count_with_role(db, ROLE_STUDENT),
            total_admins=user_crud.count_with_role(db, ROLE_ADMIN),
            total_projects=_count(db, Project),
            active_projects=_count(db, Project, Project.status == ProjectStatus.in_progress),
            recent_projects=_count(db, Project, Project.created_at >= week_ago),
            total_analytics=_count(db, AnalyticsMetric),
            total_certificates=_count(db, Certificate),
            pending_certificates=_count(db, Certificate, Certificate.is_verified.is_(False)),
            pending_projects=_count(db, Project, Project.is_verified.is_(False)),
        )
