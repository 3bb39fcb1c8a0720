"""Pydantic schemas for Tutor API request/response validation."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class TutorCreateRequest(BaseModel):
    user_id: str = Field(..., description="Owning user; must have a teaching role")
    bio: str
    subjects: list[str] = Field(..., description="Subjects taught, at least one")
    experience_level: str
    hourly_rate: Decimal = Field(..., description="Hourly rate, greater than zero")
    languages: list[str] = Field(..., description="Languages spoken, at least one")
    education: str
    currency: str = Field("USD", description="ISO 4217 currency code")


class TutorUpdateRequest(BaseModel):
    """Partial profile update; omitted or null fields are left unchanged."""

    bio: str | None = None
    subjects: list[str] | None = None
    experience_level: str | None = None
    hourly_rate: Decimal | None = None
    languages: list[str] | None = None
    education: str | None = None


class TutorRatingRequest(BaseModel):
    rating: Decimal = Field(..., description="Average rating between 0 and 5")
    total_reviews: int = Field(..., description="Number of reviews behind the rating")


class TutorSessionRequest(BaseModel):
    completed: bool = Field(..., description="False when the session was cancelled")


class TutorResponse(BaseModel):
    id: UUID
    user_id: UUID
    bio: str
    subjects: list[str]
    experience_level: str
    hourly_rate: Decimal
    currency: str
    languages: list[str]
    education: str
    status: str
    rating: Decimal
    total_reviews: int
    completed_sessions: int
    cancelled_sessions: int
    created_at: datetime
    updated_at: datetime


class TutorStandingResponse(BaseModel):
    tutor_id: UUID
    tier: str
    reputation_score: float
    cancellation_rate: float
    completed_sessions: int
    premium_access: bool
