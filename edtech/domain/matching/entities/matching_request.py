"""MatchingRequest aggregate: a student asking to be paired with a tutor."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from edtech.domain.common.domain_event import DomainEvent
from edtech.domain.common.entity import Entity
from edtech.domain.common.event_queue import EventQueue
from edtech.domain.common.exceptions import InvariantViolationError, ValidationError
from edtech.domain.common.status_transitions import StatusTransitions
from edtech.domain.common.validation import FieldErrors, clean_labels, optional_text
from edtech.domain.common.value_objects import MatchingRequestId, TutorId, UserId
from edtech.domain.matching.events import (
    MatchingRequestCancelled,
    MatchingRequestCreated,
    MatchingRequestMatched,
    MatchingRequestStatusChanged,
    MatchingRequestUpdated,
)
from edtech.domain.matching.value_objects import (
    ExperienceLevel,
    MatchingRequestStatus,
    Subject,
    parse_rate,
)

MAX_DESCRIPTION_LENGTH = 2000
MAX_REASON_LENGTH = 500
DEFAULT_TTL_DAYS = 7
UPDATABLE_FIELDS = (
    "subject",
    "preferred_experience_level",
    "max_hourly_rate",
    "preferred_languages",
    "description",
)

MATCHING_REQUEST_STATUS_TRANSITIONS = StatusTransitions[MatchingRequestStatus](
    "MatchingRequest",
    {
        MatchingRequestStatus.PENDING: {
            MatchingRequestStatus.MATCHED,
            MatchingRequestStatus.CANCELLED,
            MatchingRequestStatus.EXPIRED,
        },
    },
)

# Moves available through ``transition``; matching needs a tutor and only
# happens through ``match_with_tutor``.
MATCHING_REQUEST_DIRECT_TRANSITIONS = StatusTransitions[MatchingRequestStatus](
    "MatchingRequest",
    {
        MatchingRequestStatus.PENDING: {
            MatchingRequestStatus.CANCELLED,
            MatchingRequestStatus.EXPIRED,
        },
    },
)


@dataclass(eq=False)
class MatchingRequest(Entity[MatchingRequestId]):
    """
    A student's open request for a tutor.

    Business Rules:
    - Only PENDING requests can be edited, matched, cancelled or expired
    - MATCHED, CANCELLED and EXPIRED are terminal
    - A request expires ``ttl_days`` after creation
    """

    id: MatchingRequestId
    student_id: UserId
    subject: Subject
    status: MatchingRequestStatus
    created_at: datetime
    updated_at: datetime
    expires_at: datetime
    preferred_experience_level: ExperienceLevel | None = None
    max_hourly_rate: Decimal | None = None
    preferred_languages: tuple[str, ...] = ()
    description: str | None = None
    matched_tutor_id: TutorId | None = None
    _events: EventQueue = field(default_factory=EventQueue, init=False, repr=False)

    @property
    def is_pending(self) -> bool:
        return self.status is MatchingRequestStatus.PENDING

    @property
    def pending_events(self) -> list[DomainEvent]:
        return self._events.snapshot()

    def drain_events(self) -> list[DomainEvent]:
        return self._events.drain()

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once ``expires_at`` has passed, whatever the status."""
        return (now or datetime.now(UTC)) > self.expires_at

    def _require_pending(self, action: str) -> None:
        if not self.is_pending:
            raise InvariantViolationError(
                "MatchingRequest", f"cannot {action} a request in status {self.status.value}"
            )

    def update(
        self,
        changes: Mapping[str, object],
        actor_id: str,
        now: datetime | None = None,
    ) -> tuple[str, ...]:
        """
        Apply a partial update while the request is still pending.

        Raises:
            InvariantViolationError: If the request is no longer pending
            ValidationError: Listing every invalid or unknown field
        """
        self._require_pending("update")
        errors = FieldErrors()
        provided = {key: value for key, value in changes.items() if value is not None}
        for key in provided:
            errors.check(key in UPDATABLE_FIELDS, key, f"{key} cannot be updated")

        candidate: dict[str, object] = {}
        if "subject" in provided:
            candidate["subject"] = errors.capture(
                "subject", Subject.parse, provided["subject"], "subject"
            )
        if "preferred_experience_level" in provided:
            candidate["preferred_experience_level"] = errors.capture(
                "preferred_experience_level",
                ExperienceLevel.parse,
                provided["preferred_experience_level"],
                "preferred_experience_level",
            )
        if "max_hourly_rate" in provided:
            candidate["max_hourly_rate"] = errors.capture(
                "max_hourly_rate", parse_rate, provided["max_hourly_rate"], "max_hourly_rate"
            )
        if "preferred_languages" in provided:
            candidate["preferred_languages"] = clean_labels(
                errors, "preferred_languages", provided["preferred_languages"]
            )
        if "description" in provided:
            candidate["description"] = optional_text(
                errors, "description", str(provided["description"]), MAX_DESCRIPTION_LENGTH
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
            MatchingRequestUpdated(request_id=self.id, changed_fields=changed, actor_id=actor_id)
        )
        return changed

    def transition(
        self,
        target: MatchingRequestStatus | str,
        actor_id: str,
        now: datetime | None = None,
    ) -> None:
        """
        Move the request to ``target`` status.

        Matching is not reachable from here; use ``match_with_tutor`` so the
        tutor is recorded. Cancelling goes through ``cancel``.

        Raises:
            ValidationError: If target is not a known status
            InvalidTransitionError: If the edge does not exist, including
                any move to MATCHED
        """
        target_status = MatchingRequestStatus.parse(target, "status")
        MATCHING_REQUEST_DIRECT_TRANSITIONS.require(self.status, target_status)
        if target_status is MatchingRequestStatus.CANCELLED:
            self.cancel(None, actor_id, now)
            return

        previous = self.status
        self.status = target_status
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            MatchingRequestStatusChanged(
                request_id=self.id,
                from_status=previous,
                to_status=target_status,
                actor_id=actor_id,
            )
        )

    def match_with_tutor(
        self, tutor_id: TutorId, actor_id: str, now: datetime | None = None
    ) -> None:
        """
        Pair the request with a tutor.

        Raises:
            InvalidTransitionError: If the request is not pending
        """
        MATCHING_REQUEST_STATUS_TRANSITIONS.require(self.status, MatchingRequestStatus.MATCHED)

        previous = self.status
        self.status = MatchingRequestStatus.MATCHED
        self.matched_tutor_id = tutor_id
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            MatchingRequestMatched(
                request_id=self.id,
                from_status=previous,
                to_status=self.status,
                actor_id=actor_id,
                student_id=self.student_id,
                tutor_id=tutor_id,
            )
        )

    def cancel(self, reason: str | None, actor_id: str, now: datetime | None = None) -> None:
        """
        Cancel a pending request.

        Raises:
            InvalidTransitionError: If the request is not pending
            ValidationError: If the reason is too long
        """
        MATCHING_REQUEST_STATUS_TRANSITIONS.require(self.status, MatchingRequestStatus.CANCELLED)
        errors = FieldErrors()
        clean_reason = optional_text(errors, "reason", reason, MAX_REASON_LENGTH)
        errors.raise_if_any()

        previous = self.status
        self.status = MatchingRequestStatus.CANCELLED
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            MatchingRequestCancelled(
                request_id=self.id,
                from_status=previous,
                to_status=self.status,
                actor_id=actor_id,
                reason=clean_reason,
            )
        )

    def expire(self, now: datetime | None = None, actor_id: str = "system") -> bool:
        """
        Expire the request if it is pending and past its deadline.

        Returns:
            True if the request was expired, False if nothing changed
        """
        current = now or datetime.now(UTC)
        if not self.is_pending or not self.is_expired(current):
            return False
        self.transition(MatchingRequestStatus.EXPIRED, actor_id, current)
        return True

    @classmethod
    def create(
        cls,
        student_id: UserId,
        subject: Subject | str,
        preferred_experience_level: ExperienceLevel | str | None = None,
        max_hourly_rate: Decimal | float | str | None = None,
        preferred_languages: list[str] | tuple[str, ...] | None = None,
        description: str | None = None,
        ttl_days: int = DEFAULT_TTL_DAYS,
        now: datetime | None = None,
    ) -> "MatchingRequest":
        """
        Open a new PENDING request expiring ``ttl_days`` from now.

        Raises:
            ValidationError: Listing every invalid field
        """
        errors = FieldErrors()
        if not isinstance(student_id, UserId):
            errors.add("student_id", "student_id must be a UserId")
        valid_subject = errors.capture("subject", Subject.parse, subject, "subject")
        level = None
        if preferred_experience_level is not None:
            level = errors.capture(
                "preferred_experience_level",
                ExperienceLevel.parse,
                preferred_experience_level,
                "preferred_experience_level",
            )
        rate = None
        if max_hourly_rate is not None:
            rate = errors.capture(
                "max_hourly_rate", parse_rate, max_hourly_rate, "max_hourly_rate"
            )
        languages = clean_labels(
            errors,
            "preferred_languages",
            preferred_languages if preferred_languages is not None else (),
        )
        valid_description = optional_text(
            errors, "description", description, MAX_DESCRIPTION_LENGTH
        )
        errors.check(ttl_days > 0, "ttl_days", "ttl_days must be positive")
        errors.raise_if_any()
        if valid_subject is None:
            raise ValidationError("Invalid matching request")

        timestamp = now or datetime.now(UTC)
        request = cls(
            id=MatchingRequestId.generate(),
            student_id=student_id,
            subject=valid_subject,
            status=MatchingRequestStatus.PENDING,
            created_at=timestamp,
            updated_at=timestamp,
            expires_at=timestamp + timedelta(days=ttl_days),
            preferred_experience_level=level,
            max_hourly_rate=rate,
            preferred_languages=languages,
            description=valid_description,
        )
        request._events.append(
            MatchingRequestCreated(
                request_id=request.id, student_id=student_id, subject=valid_subject
            )
        )
        return request

    @classmethod
    def create_with_id(
        cls,
        id: MatchingRequestId,
        student_id: UserId,
        subject: Subject,
        status: MatchingRequestStatus,
        created_at: datetime,
        updated_at: datetime,
        expires_at: datetime,
        preferred_experience_level: ExperienceLevel | None = None,
        max_hourly_rate: Decimal | None = None,
        preferred_languages: tuple[str, ...] = (),
        description: str | None = None,
        matched_tutor_id: TutorId | None = None,
    ) -> "MatchingRequest":
        """Reconstitute a matching request from persistence."""
        return cls(
            id=id,
            student_id=student_id,
            subject=subject,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            expires_at=expires_at,
            preferred_experience_level=preferred_experience_level,
            max_hourly_rate=max_hourly_rate,
            preferred_languages=tuple(preferred_languages),
            description=description,
            matched_tutor_id=matched_tutor_id,
        )
