"""
Request / response schemas for the auth and users routes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from auth.password import password_problem


def _check_password(value: Optional[str]) -> Optional[str]:
    if value is not None:
        problem = password_problem(value)
        if problem:
            raise ValueError(problem)
    return value


# ── Requests ───────────────────────────────────────────────────────────


class SignUpRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    password: str
    confirm_password: str = Field(..., alias="confirmPassword", min_length=1)
    image_id: Optional[str] = Field(None, max_length=255)
    introduction: Optional[str] = None

    @field_validator("password")
    @classmethod
    def check_password(cls, value):
        return _check_password(value)

    @model_validator(mode="after")
    def _passwords_match(self) -> "SignUpRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateMeRequest(BaseModel):
    """Every field is optional; only the ones sent are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=128)
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    image_id: Optional[str] = Field(None, max_length=255)
    introduction: Optional[str] = None

    @field_validator("password")
    @classmethod
    def check_password(cls, value):
        return _check_password(value)

    def changes(self) -> dict:
        # only the nullable columns may be cleared with null
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key in ("image_id", "introduction")
        }


# ── Responses ──────────────────────────────────────────────────────────


class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    introduction: Optional[str] = None


class UserResponse(UserProfile):
    image_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    message: str


# ── Token payload ──────────────────────────────────────────────────────


class SessionClaims(BaseModel):
    """Claims carried inside a session token. Never persisted."""

    sub: int
    email: str
    exp: Optional[int] = None
