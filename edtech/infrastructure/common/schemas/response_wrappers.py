"""Common response wrapper schemas for API responses."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from edtech.application.common.pagination import PaginatedResult

T = TypeVar("T")


class SuccessResponse(BaseModel):
    """Generic success response wrapper."""

    success: bool
    message: str


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic pagination wrapper."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, result: PaginatedResult[object], items: list[T]) -> "PaginatedResponse[T]":
        return cls(
            items=items,
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
        )


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response produced by the exception handlers."""

    detail: str
    errors: list[FieldErrorResponse] = []
