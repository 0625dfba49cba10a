# backend/modules/auth/schemas/auth_schemas.py

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from core.mixins import as_utc


class SignupRequest(BaseModel):
    """Administrator registration"""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class AdminUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v):
        return as_utc(v)


class AdminUserEnvelope(BaseModel):
    user: AdminUserResponse


class Token(BaseModel):
    """Access token issued at sign-in"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: AdminUserResponse
