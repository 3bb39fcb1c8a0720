from enum import StrEnum
from typing import Self

from ..exceptions import ValidationError


class ParsableEnum(StrEnum):
    """String enum that validates raw input the way value objects do."""

    @classmethod
    def parse(cls, raw: object, field: str) -> Self:
        """
        Look up a member by value, case-insensitively.

        Raises:
            ValidationError: If ``raw`` is not one of the members
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().upper())
            except ValueError:
                pass
        allowed = ", ".join(member.value for member in cls)
        raise ValidationError(f"{field} must be one of: {allowed}", field=field, value=raw)
