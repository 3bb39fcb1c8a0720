"""
Email value object.

Emails are the unique identifying attribute of users, so they are
normalised (trimmed and lower-cased) before validation. Uniqueness
itself is enforced by the repository.
"""

import re
from dataclasses import dataclass

from ..exceptions import ValidationError
from ..value_object import ValueObject

MAX_EMAIL_LENGTH = 254
_EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")


@dataclass(frozen=True, eq=False)
class Email(ValueObject):
    """Normalised, validated email address."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Email cannot be empty", field="email", value=self.value)

        normalized = self.value.strip().lower()
        if len(normalized) > MAX_EMAIL_LENGTH:
            raise ValidationError(
                f"Email cannot exceed {MAX_EMAIL_LENGTH} characters",
                field="email",
                value=self.value,
            )
        if not _EMAIL_PATTERN.match(normalized):
            raise ValidationError("Invalid email format", field="email", value=self.value)

        # Frozen dataclass: bypass __setattr__ to store the normalised form
        object.__setattr__(self, "value", normalized)

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    @property
    def local_part(self) -> str:
        return self.value.split("@", 1)[0]

    def __str__(self) -> str:
        return self.value
