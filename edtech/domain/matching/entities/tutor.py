"""Tutor aggregate: a user's teaching profile."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from edtech.domain.common.domain_event import DomainEvent
from edtech.domain.common.entity import Entity
from edtech.domain.common.event_queue import EventQueue
from edtech.domain.common.exceptions import ValidationError
from edtech.domain.common.status_transitions import StatusTransitions
from edtech.domain.common.validation import FieldErrors, clean_labels, require_text
from edtech.domain.common.value_objects import TutorId, UserId
from edtech.domain.matching.events import (
    TutorCreated,
    TutorProfileUpdated,
    TutorRatingUpdated,
    TutorSessionRecorded,
    TutorStatusChanged,
)
from edtech.domain.matching.value_objects import (
    ExperienceLevel,
    Subject,
    TutorStatus,
    parse_currency,
    parse_rate,
)

MAX_BIO_LENGTH = 2000
MAX_EDUCATION_LENGTH = 500
MAX_RATING = Decimal("5")
DEFAULT_CURRENCY = "USD"
UPDATABLE_FIELDS = (
    "bio",
    "subjects",
    "experience_level",
    "hourly_rate",
    "languages",
    "education",
)

TUTOR_STATUS_TRANSITIONS = StatusTransitions[TutorStatus](
    "Tutor",
    {
        TutorStatus.PENDING_APPROVAL: {TutorStatus.ACTIVE, TutorStatus.INACTIVE},
        TutorStatus.ACTIVE: {TutorStatus.SUSPENDED, TutorStatus.INACTIVE},
        TutorStatus.SUSPENDED: {TutorStatus.ACTIVE, TutorStatus.INACTIVE},
        TutorStatus.INACTIVE: {TutorStatus.ACTIVE},
    },
)


def _parse_subjects(errors: FieldErrors, raw: object) -> tuple[Subject, ...]:
    if isinstance(raw, list | tuple) and not raw:
        errors.add("subjects", "subjects cannot be empty")
        return ()
    labels = clean_labels(errors, "subjects", raw)
    subjects: list[Subject] = []
    for label in labels:
        subject = errors.capture("subjects", Subject.parse, label, "subjects")
        if subject is not None and subject not in subjects:
            subjects.append(subject)
    return tuple(subjects)


def _parse_languages(errors: FieldErrors, raw: object) -> tuple[str, ...]:
    if isinstance(raw, list | tuple) and not raw:
        errors.add("languages", "languages cannot be empty")
        return ()
    return clean_labels(errors, "languages", raw)


@dataclass(eq=False)
class Tutor(Entity[TutorId]):
    """
    Tutor profile attached to a user.

    Business Rules:
    - One tutor profile per user (enforced at repository level)
    - Subjects and languages cannot be empty; hourly rate must be positive
    - New tutors wait in PENDING_APPROVAL until approved
    - Rating is between 0 and 5
    """

    id: TutorId
    user_id: UserId
    bio: str
    subjects: tuple[Subject, ...]
    experience_level: ExperienceLevel
    hourly_rate: Decimal
    currency: str
    languages: tuple[str, ...]
    education: str
    status: TutorStatus
    created_at: datetime
    updated_at: datetime
    rating: Decimal = Decimal("0")
    total_reviews: int = 0
    completed_sessions: int = 0
    cancelled_sessions: int = 0
    _events: EventQueue = field(default_factory=EventQueue, init=False, repr=False)

    @property
    def is_active(self) -> bool:
        return self.status is TutorStatus.ACTIVE

    @property
    def reputation_score(self) -> float:
        """Rating scaled to a 0-100 score."""
        return float(self.rating / MAX_RATING * 100)

    @property
    def cancellation_rate(self) -> float:
        total = self.completed_sessions + self.cancelled_sessions
        if total == 0:
            return 0.0
        return self.cancelled_sessions / total

    @property
    def pending_events(self) -> list[DomainEvent]:
        return self._events.snapshot()

    def drain_events(self) -> list[DomainEvent]:
        return self._events.drain()

    def teaches(self, subject: Subject) -> bool:
        return subject in self.subjects

    def update(
        self,
        changes: Mapping[str, object],
        actor_id: str,
        now: datetime | None = None,
    ) -> tuple[str, ...]:
        """
        Apply a partial profile update.

        All provided fields are validated first; nothing is applied if any
        is invalid. Returns the names of the fields that changed.

        Raises:
            ValidationError: Listing every invalid or unknown field
        """
        errors = FieldErrors()
        provided = {key: value for key, value in changes.items() if value is not None}
        for key in provided:
            errors.check(key in UPDATABLE_FIELDS, key, f"{key} cannot be updated")

        candidate: dict[str, object] = {}
        if "bio" in provided:
            candidate["bio"] = require_text(errors, "bio", str(provided["bio"]), MAX_BIO_LENGTH)
        if "education" in provided:
            candidate["education"] = require_text(
                errors, "education", str(provided["education"]), MAX_EDUCATION_LENGTH
            )
        if "subjects" in provided:
            candidate["subjects"] = _parse_subjects(errors, provided["subjects"])
        if "languages" in provided:
            candidate["languages"] = _parse_languages(errors, provided["languages"])
        if "experience_level" in provided:
            candidate["experience_level"] = errors.capture(
                "experience_level",
                ExperienceLevel.parse,
                provided["experience_level"],
                "experience_level",
            )
        if "hourly_rate" in provided:
            candidate["hourly_rate"] = errors.capture(
                "hourly_rate", parse_rate, provided["hourly_rate"], "hourly_rate"
            )
        errors.raise_if_any()

        changed = tuple(
            name
            for name in UPDATABLE_FIELDS
            if name in candidate and candidate[name] != getattr(self, name)
        )
        if not changed:
            return ()

        for name in changed:
            setattr(self, name, candidate[name])
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            TutorProfileUpdated(tutor_id=self.id, changed_fields=changed, actor_id=actor_id)
        )
        return changed

    def transition(
        self,
        target: TutorStatus | str,
        actor_id: str,
        now: datetime | None = None,
    ) -> None:
        """
        Move the tutor to ``target`` status.

        Raises:
            ValidationError: If target is not a known status
            InvalidTransitionError: If the edge is not in TUTOR_STATUS_TRANSITIONS
        """
        target_status = TutorStatus.parse(target, "status")
        TUTOR_STATUS_TRANSITIONS.require(self.status, target_status)

        previous = self.status
        self.status = target_status
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            TutorStatusChanged(
                tutor_id=self.id,
                from_status=previous,
                to_status=target_status,
                actor_id=actor_id,
            )
        )

    def approve(self, actor_id: str) -> None:
        self.transition(TutorStatus.ACTIVE, actor_id)

    def suspend(self, actor_id: str) -> None:
        self.transition(TutorStatus.SUSPENDED, actor_id)

    def update_rating(
        self, rating: Decimal | float | str, total_reviews: int, now: datetime | None = None
    ) -> bool:
        """
        Replace the aggregated review rating.

        Returns:
            False when nothing changed (no event recorded)

        Raises:
            ValidationError: If rating is outside 0-5 or total_reviews is negative
        """
        errors = FieldErrors()
        new_rating = self.rating
        try:
            parsed = Decimal(str(rating))
        except ArithmeticError:
            errors.add("rating", "rating must be a number")
        else:
            if parsed.is_finite() and Decimal("0") <= parsed <= MAX_RATING:
                new_rating = parsed.quantize(Decimal("0.01"))
            else:
                errors.add("rating", "rating must be between 0 and 5")
        errors.check(total_reviews >= 0, "total_reviews", "total_reviews cannot be negative")
        errors.raise_if_any()

        if new_rating == self.rating and total_reviews == self.total_reviews:
            return False
        self.rating = new_rating
        self.total_reviews = total_reviews
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            TutorRatingUpdated(tutor_id=self.id, rating=new_rating, total_reviews=total_reviews)
        )
        return True

    def record_session(self, completed: bool, now: datetime | None = None) -> None:
        """Count a finished session as completed or cancelled."""
        if completed:
            self.completed_sessions += 1
        else:
            self.cancelled_sessions += 1
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            TutorSessionRecorded(
                tutor_id=self.id,
                completed=completed,
                completed_sessions=self.completed_sessions,
                cancelled_sessions=self.cancelled_sessions,
            )
        )

    @classmethod
    def create(
        cls,
        user_id: UserId,
        bio: str,
        subjects: list[str] | tuple[str, ...],
        experience_level: ExperienceLevel | str,
        hourly_rate: Decimal | float | str,
        languages: list[str] | tuple[str, ...],
        education: str,
        currency: str = DEFAULT_CURRENCY,
        now: datetime | None = None,
    ) -> "Tutor":
        """
        Create a new tutor profile in PENDING_APPROVAL.

        Raises:
            ValidationError: Listing every invalid field
        """
        errors = FieldErrors()
        if not isinstance(user_id, UserId):
            errors.add("user_id", "user_id must be a UserId")
        valid_bio = require_text(errors, "bio", bio, MAX_BIO_LENGTH)
        valid_subjects = _parse_subjects(errors, subjects)
        level = errors.capture(
            "experience_level", ExperienceLevel.parse, experience_level, "experience_level"
        )
        rate = errors.capture("hourly_rate", parse_rate, hourly_rate, "hourly_rate")
        valid_currency = errors.capture("currency", parse_currency, currency)
        valid_languages = _parse_languages(errors, languages)
        valid_education = require_text(errors, "education", education, MAX_EDUCATION_LENGTH)
        errors.raise_if_any()
        if level is None or rate is None or valid_currency is None:
            raise ValidationError("Invalid tutor profile")

        timestamp = now or datetime.now(UTC)
        tutor = cls(
            id=TutorId.generate(),
            user_id=user_id,
            bio=valid_bio,
            subjects=valid_subjects,
            experience_level=level,
            hourly_rate=rate,
            currency=valid_currency,
            languages=valid_languages,
            education=valid_education,
            status=TutorStatus.PENDING_APPROVAL,
            created_at=timestamp,
            updated_at=timestamp,
        )
        tutor._events.append(
            TutorCreated(tutor_id=tutor.id, user_id=user_id, subjects=valid_subjects)
        )
        return tutor

    @classmethod
    def create_with_id(
        cls,
        id: TutorId,
        user_id: UserId,
        bio: str,
        subjects: tuple[Subject, ...],
        experience_level: ExperienceLevel,
        hourly_rate: Decimal,
        currency: str,
        languages: tuple[str, ...],
        education: str,
        status: TutorStatus,
        created_at: datetime,
        updated_at: datetime,
        rating: Decimal = Decimal("0"),
        total_reviews: int = 0,
        completed_sessions: int = 0,
        cancelled_sessions: int = 0,
    ) -> "Tutor":
        """Reconstitute a tutor from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            bio=bio,
            subjects=tuple(subjects),
            experience_level=experience_level,
            hourly_rate=hourly_rate,
            currency=currency,
            languages=tuple(languages),
            education=education,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            rating=rating,
            total_reviews=total_reviews,
            completed_sessions=completed_sessions,
            cancelled_sessions=cancelled_sessions,
        )
