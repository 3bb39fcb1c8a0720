"""Helpers for collecting every field error before failing."""

from collections.abc import Callable
from typing import TypeVar

from .exceptions import FieldError, ValidationError

T = TypeVar("T")


class FieldErrors:
    """
    Accumulates field errors so a factory can report all of them at once.

    Example:
        errors = FieldErrors()
        email = errors.capture("email", Email, raw_email)
        name = errors.capture("name", UserName, first, last)
        errors.raise_if_any()
    """

    def __init__(self) -> None:
        self._errors: list[FieldError] = []

    def add(self, field: str, message: str) -> None:
        self._errors.append(FieldError(field, message))

    def check(self, condition: bool, field: str, message: str) -> None:
        """Record an error for ``field`` unless ``condition`` holds."""
        if not condition:
            self.add(field, message)

    def capture(self, field: str, factory: Callable[..., T], *args: object) -> T | None:
        """
        Call ``factory`` and record its ValidationError under ``field``.

        Field errors raised by the factory keep their own field names when
        they carry several of them.
        """
        try:
            return factory(*args)
        except ValidationError as err:
            if len(err.errors) > 1:
                self._errors.extend(err.errors)
            else:
                self.add(err.field or field, err.message)
            return None

    def __bool__(self) -> bool:
        return bool(self._errors)

    def raise_if_any(self) -> None:
        if self._errors:
            raise ValidationError.from_errors(self._errors)


def require_text(errors: FieldErrors, field: str, value: str | None, max_length: int) -> str:
    """Strip ``value`` and record an error if it is empty or too long."""
    text = (value or "").strip()
    if not text:
        errors.add(field, f"{field} cannot be empty")
    elif len(text) > max_length:
        errors.add(field, f"{field} cannot exceed {max_length} characters")
    return text


def optional_text(
    errors: FieldErrors, field: str, value: str | None, max_length: int
) -> str | None:
    """Strip ``value``; blank becomes None. Records an error if too long."""
    if value is None:
        return None
    text = value.strip()
    if len(text) > max_length:
        errors.add(field, f"{field} cannot exceed {max_length} characters")
    return text or None


def clean_labels(errors: FieldErrors, field: str, values: object) -> tuple[str, ...]:
    """Strip, drop duplicates while keeping order, reject blank entries."""
    if isinstance(values, str) or not isinstance(values, list | tuple):
        errors.add(field, f"{field} must be a list of strings")
        return ()
    cleaned: list[str] = []
    for value in values:
        if not isinstance(value, str) or not value.strip():
            errors.add(field, f"{field} cannot contain empty values")
            return ()
        text = value.strip()
        if text not in cleaned:
            cleaned.append(text)
    return tuple(cleaned)
