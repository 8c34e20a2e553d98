from typing import Optional

from pydantic import BaseModel, Field

from app.core.config import settings


class VerificationIn(BaseModel):
    # None = mantém o comentário atual; "" = limpa
    review_comments: Optional[str] = Field(default=None, max_length=settings.REVIEW_COMMENTS_MAX_LENGTH)


class AdminStats(BaseModel):
    total_students: int
    total_admins: int
    total_projects: int
    active_projects: int
    recent_projects: int
    total_analytics: int
    total_certificates: int
    pending_certificates: int
    pending_projects: int
