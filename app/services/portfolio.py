# app/services/portfolio.py
"""Portfolio aggregation: one snapshot of a user's achievements for a given viewer."""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.core.rbac import Principal, visibility_scope
from app.crud.analytics import analytics_crud
from app.crud.certificate import certificate_crud
from app.crud.project import project_crud
from app.crud.user import user_crud
from app.models.project import ProjectStatus
from app.models.user import User
from app.schemas.certificate import CertificateOut
from app.schemas.portfolio import PortfolioOut, PortfolioStats
from app.schemas.profile import ProfileOut
from app.schemas.project import ProjectOut


def profile_for(user: User) -> ProfileOut:
    if user.profile is not None:
        return ProfileOut.model_validate(user.profile)
    # sem perfil cadastrado: nome da conta ou prefixo do e-mail
    name = (user.name or "").strip() or user.email.split("@")[0]
    return ProfileOut(user_id=user.id, full_name=name, created_at=user.created_at)


def get_portfolio(db: Session, target_user_id: str, viewer: Optional[Principal]) -> PortfolioOut:
    user = user_crud.get(db, target_user_id)
    if user is None:
        raise NotFoundError("User", target_user_id)

    scope = visibility_scope(viewer, target_user_id)
    verified_only = not scope.includes_unverified

    certificates = certificate_crud.list_by_owner(db, target_user_id, verified_only=verified_only)
    projects = project_crud.list_by_owner(db, target_user_id, verified_only=verified_only)

    stats = PortfolioStats(
        total_projects=len(projects),
        completed_projects=sum(1 for p in projects if p.status == ProjectStatus.completed),
        total_certificates=len(certificates),
        total_study_hours=analytics_crud.total(db, target_user_id),
    )
    return PortfolioOut(
        scope=scope,
        user_profile=profile_for(user),
        certificates=[CertificateOut.from_record(c) for c in certificates],
        portfolios=[ProjectOut.from_record(p) for p in projects],
        stats=stats,
    )
