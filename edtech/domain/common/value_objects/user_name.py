"""UserName value object (first and last name)."""

import re
from dataclasses import dataclass

from ..exceptions import FieldError, ValidationError
from ..value_object import ValueObject

MAX_NAME_LENGTH = 50
_NAME_PATTERN = re.compile(r"^[^\W\d_]+(?:[\s'-][^\W\d_]*)*$")


def _normalize(raw: object, field: str, errors: list[FieldError]) -> str:
    if not isinstance(raw, str) or not raw.strip():
        errors.append(FieldError(field, f"{field} cannot be empty"))
        return ""
    name = " ".join(raw.split())
    if len(name) > MAX_NAME_LENGTH:
        errors.append(FieldError(field, f"{field} cannot exceed {MAX_NAME_LENGTH} characters"))
        return name
    if not _NAME_PATTERN.match(name):
        errors.append(
            FieldError(
                field,
                f"{field} may only contain letters, spaces, hyphens and apostrophes",
            )
        )
        return name
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))


@dataclass(frozen=True, eq=False)
class UserName(ValueObject):
    """
    A person's first and last name.

    Both parts are validated together so a bad first and last name are
    reported in one error. Each word is capitalised.
    """

    first_name: str
    last_name: str

    def __post_init__(self) -> None:
        errors: list[FieldError] = []
        first = _normalize(self.first_name, "first_name", errors)
        last = _normalize(self.last_name, "last_name", errors)
        if errors:
            raise ValidationError.from_errors(errors)
        object.__setattr__(self, "first_name", first)
        object.__setattr__(self, "last_name", last)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    def __str__(self) -> str:
        return self.full_name
