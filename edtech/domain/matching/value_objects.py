"""Matching value objects."""

from decimal import Decimal, InvalidOperation

from edtech.domain.common.exceptions import ValidationError
from edtech.domain.common.value_objects import ParsableEnum

MAX_HOURLY_RATE = Decimal("10000")


class Subject(ParsableEnum):
    MATHEMATICS = "MATHEMATICS"
    PHYSICS = "PHYSICS"
    CHEMISTRY = "CHEMISTRY"
    BIOLOGY = "BIOLOGY"
    ENGLISH = "ENGLISH"
    COMPUTER_SCIENCE = "COMPUTER_SCIENCE"
    PROGRAMMING = "PROGRAMMING"
    OTHER = "OTHER"


class ExperienceLevel(ParsableEnum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"

    @property
    def rank(self) -> int:
        return list(ExperienceLevel).index(self)

    def meets(self, required: "ExperienceLevel") -> bool:
        return self.rank >= required.rank


class TutorStatus(ParsableEnum):
    PENDING_APPROVAL = "PENDING_APPROVAL"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    INACTIVE = "INACTIVE"


class MatchingRequestStatus(ParsableEnum):
    PENDING = "PENDING"
    MATCHED = "MATCHED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


def parse_rate(raw: object, field: str) -> Decimal:
    """
    Parse a positive hourly rate rounded to cents.

    Raises:
        ValidationError: If the value is not a positive number within limits
    """
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a number", field=field, value=raw)
    try:
        rate = Decimal(str(raw))
    except (InvalidOperation, ValueError) as err:
        raise ValidationError(f"{field} must be a number", field=field, value=raw) from err
    if not rate.is_finite() or rate <= 0:
        raise ValidationError(f"{field} must be greater than zero", field=field, value=raw)
    if rate > MAX_HOURLY_RATE:
        raise ValidationError(f"{field} cannot exceed {MAX_HOURLY_RATE}", field=field, value=raw)
    return rate.quantize(Decimal("0.01"))


def parse_currency(raw: object) -> str:
    if not isinstance(raw, str) or len(raw.strip()) != 3 or not raw.strip().isalpha():
        raise ValidationError(
            "currency must be a three-letter ISO 4217 code", field="currency", value=raw
        )
    return raw.strip().upper()
