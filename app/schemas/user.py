# app/schemas/user.py
from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.security_password import PASSWORD_MAX_LENGTH, PASSWORD_MIN_LENGTH

class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email", mode="after")
    @classmethod
    def _lower(cls, v):
        return str(v).strip().lower()

class UserOut(BaseModel):
    id: str
    name: str
    email: str
    status: Optional[str] = None
    roles: List[str] = []
    role: Optional[str] = None

    model_config = {"from_attributes": True}
