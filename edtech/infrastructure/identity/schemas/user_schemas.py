"""Pydantic schemas for User API request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class UserCreateRequest(BaseModel):
    """Schema for creating a user. Field rules are enforced by the domain."""

    email: str = Field(..., description="Email address, stored lower-cased")
    first_name: str = Field(..., description="Given name")
    last_name: str = Field(..., description="Family name")
    role: str | None = Field(None, description="Initial role, STUDENT when omitted")
    bio: str | None = Field(None, description="Free-text biography")
    skills: list[str] | None = Field(None, description="List of skills")


class UserUpdateRequest(BaseModel):
    """Partial profile update; omitted or null fields are left unchanged."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    bio: str | None = None
    skills: list[str] | None = None


class StatusChangeRequest(BaseModel):
    status: str = Field(..., description="Target status")


class RoleChangeRequest(BaseModel):
    role: str = Field(..., description="Target role")


class LoginAttemptRequest(BaseModel):
    successful: bool = Field(..., description="Whether the credentials were accepted")


class UserResponse(BaseModel):
    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: str
    status: str
    bio: str | None
    skills: list[str]
    failed_login_attempts: int
    last_login_at: datetime | None
    email_changed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class LoginAttemptResponse(BaseModel):
    user: UserResponse
    failed_attempts: int
    locked: bool


class TutorEligibilityResponse(BaseModel):
    user_id: UUID
    eligible: bool
    account_age_days: int
    profile_complete: bool
    reasons: list[str]
