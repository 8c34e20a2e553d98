from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.fields import clean_optional, normalize_url, unique_in_order


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=160)
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    university: Optional[str] = Field(default=None, max_length=200)
    degree: Optional[str] = Field(default=None, max_length=200)
    graduation_year: Optional[int] = Field(default=None, ge=1900, le=2200)
    skills: Optional[List[str]] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    website_url: Optional[str] = None

    @field_validator("full_name", "bio", "university", "degree", mode="before")
    @classmethod
    def _text(cls, v):
        return clean_optional(v)

    @field_validator("avatar_url", "linkedin_url", "github_url", "website_url", mode="before")
    @classmethod
    def _urls(cls, v):
        return normalize_url(v)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, v):
        return unique_in_order(v or [])


class ProfileOut(BaseModel):
    user_id: str
    full_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    university: Optional[str] = None
    degree: Optional[str] = None
    graduation_year: Optional[int] = None
    skills: List[str] = []
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    website_url: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
