"""Pydantic schemas for MatchingRequest API request/response validation."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class MatchingRequestCreateRequest(BaseModel):
    student_id: str
    subject: str
    preferred_experience_level: str | None = None
    max_hourly_rate: Decimal | None = Field(None, description="Budget per hour")
    preferred_languages: list[str] | None = None
    description: str | None = None


class MatchingRequestUpdateRequest(BaseModel):
    """Partial update of a pending request."""

    subject: str | None = None
    preferred_experience_level: str | None = None
    max_hourly_rate: Decimal | None = None
    preferred_languages: list[str] | None = None
    description: str | None = None


class MatchRequest(BaseModel):
    tutor_id: str = Field(..., description="Tutor to pair with the request")


class CancelRequest(BaseModel):
    reason: str | None = Field(None, description="Why the request was cancelled")


class MatchingRequestResponse(BaseModel):
    id: UUID
    student_id: UUID
    subject: str
    preferred_experience_level: str | None
    max_hourly_rate: Decimal | None
    preferred_languages: list[str]
    description: str | None
    status: str
    matched_tutor_id: UUID | None
    created_at: datetime
    updated_at: datetime
    expires_at: datetime


class ExpireOverdueResponse(BaseModel):
    expired: list[UUID]
    count: int
