from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.project import ProjectStatus
from app.schemas.fields import TITLE_MAX_LENGTH, URL_MAX_LENGTH, clean_optional, clean_required, normalize_url, unique_in_order


class ProjectBase(BaseModel):
    description: Optional[str] = None
    project_url: Optional[str] = Field(default=None, max_length=URL_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, v):
        return clean_optional(v)

    @field_validator("project_url", mode="before")
    @classmethod
    def _url(cls, v):
        return normalize_url(v)


class ProjectCreate(ProjectBase):
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    technologies: List[str] = Field(default_factory=list)
    status: ProjectStatus = ProjectStatus.in_progress

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v):
        return clean_required(v, "title")

    @field_validator("technologies", mode="before")
    @classmethod
    def _technologies(cls, v):
        # duplicadas são descartadas na entrada, ordem preservada
        return unique_in_order(v or [])


class ProjectUpdate(ProjectBase):
    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH)
    technologies: Optional[List[str]] = None
    status: Optional[ProjectStatus] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v):
        return clean_required(v, "title")

    @field_validator("technologies", mode="before")
    @classmethod
    def _technologies(cls, v):
        if v is None:
            raise ValueError("technologies cannot be null.")
        return unique_in_order(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v):
        if v is None:
            raise ValueError("status cannot be null.")
        return v


class ProjectOut(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    project_url: Optional[str] = None
    technologies: List[str] = []
    status: ProjectStatus
    is_verified: bool
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    review_comments: Optional[str] = None
    created_at: Optional[datetime] = None
    pending: bool = True

    model_config = {"from_attributes": True}

    @classmethod
    def from_record(cls, record):
        out = cls.model_validate(record)
        out.pending = not record.is_verified
        return out
