"""Common infrastructure schemas."""

from edtech.infrastructure.common.schemas.response_wrappers import (
    ErrorResponse,
    FieldErrorResponse,
    PaginatedResponse,
    SuccessResponse,
)

__all__ = [
    "ErrorResponse",
    "FieldErrorResponse",
    "PaginatedResponse",
    "SuccessResponse",
]
