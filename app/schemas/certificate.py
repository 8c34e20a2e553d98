from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.certificate import CertificateCategory
from app.schemas.fields import TITLE_MAX_LENGTH, URL_MAX_LENGTH, clean_optional, clean_required, normalize_url


class CertificateBase(BaseModel):
    description: Optional[str] = None
    issue_date: Optional[date] = None
    certificate_url: Optional[str] = Field(default=None, max_length=URL_MAX_LENGTH)
    image_url: Optional[str] = Field(default=None, max_length=URL_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, v):
        return clean_optional(v)

    @field_validator("issue_date", mode="before")
    @classmethod
    def _issue_date(cls, v):
        return v or None

    @field_validator("certificate_url", "image_url", mode="before")
    @classmethod
    def _urls(cls, v):
        return normalize_url(v)


class CertificateCreate(CertificateBase):
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    issuer: str = Field(max_length=TITLE_MAX_LENGTH)
    category: CertificateCategory = CertificateCategory.other

    @field_validator("title", "issuer", mode="before")
    @classmethod
    def _required(cls, v, info):
        return clean_required(v, info.field_name)


class CertificateUpdate(CertificateBase):
    """Somente campos de conteúdo; verificação nunca passa por aqui."""

    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH)
    issuer: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH)
    category: Optional[CertificateCategory] = None

    @field_validator("title", "issuer", "category", mode="before")
    @classmethod
    def _not_null(cls, v, info):
        if info.field_name == "category":
            if v is None:
                raise ValueError("category cannot be null.")
            return v
        return clean_required(v, info.field_name)


class CertificateOut(BaseModel):
    id: str
    user_id: str
    title: str
    issuer: str
    description: Optional[str] = None
    issue_date: Optional[date] = None
    certificate_url: Optional[str] = None
    image_url: Optional[str] = None
    category: CertificateCategory
    is_verified: bool
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    pending: bool = True

    model_config = {"from_attributes": True}

    @classmethod
    def from_record(cls, record):
        out = cls.model_validate(record)
        out.pending = not record.is_verified
        return out
