from enum import Enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import CheckConstraint, ForeignKey, String, Text, DateTime, Boolean, JSON, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, new_id, utcnow


class ProjectStatus(str, Enum):
    completed = "completed"
    in_progress = "in_progress"
    planned = "planned"


class Project(Base):
    """Portfolio entry."""

    __tablename__ = "portfolios"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    project_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    technologies: Mapped[List[str]] = mapped_column(JSON, default=list)
    status: Mapped[ProjectStatus] = mapped_column(default=ProjectStatus.in_progress)

    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    verified_by: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    # sobrevive a verify/unverify (trilha de auditoria)
    review_comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "(is_verified AND verified_by IS NOT NULL AND verified_at IS NOT NULL) OR "
            "(NOT is_verified AND verified_by IS NULL AND verified_at IS NULL)",
            name="verification_provenance",
        ),
    )
