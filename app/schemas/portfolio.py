from typing import List

from pydantic import BaseModel

from app.core.rbac import VisibilityScope
from app.schemas.certificate import CertificateOut
from app.schemas.profile import ProfileOut
from app.schemas.project import ProjectOut


class PortfolioStats(BaseModel):
    total_projects: int = 0
    completed_projects: int = 0
    total_certificates: int = 0
    total_study_hours: float = 0.0


class PortfolioOut(BaseModel):
    scope: VisibilityScope
    user_profile: ProfileOut
    certificates: List[CertificateOut]
    portfolios: List[ProjectOut]
    stats: PortfolioStats


class ShareLinkOut(BaseModel):
    url: str
