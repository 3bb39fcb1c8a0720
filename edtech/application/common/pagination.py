"""
Pagination types for list queries.

Repositories take a raw ``offset``/``limit`` pair and return a ``Page``;
use cases accept a ``Pagination`` and wrap the page into a
``PaginatedResult`` carrying the page metadata.

Example:
    class UserQueryUseCase:
        def list_users(self, pagination: Pagination) -> PaginatedResult[User]:
            page = self.user_repository.find_all(pagination.offset, pagination.limit)
            return PaginatedResult.from_page(page, pagination)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from edtech.domain.common.exceptions import ValidationError

T = TypeVar("T")

# Maximum allowed page size
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a repository listing plus the total row count."""

    items: list[T]
    total: int


@dataclass(frozen=True)
class Pagination:
    """
    Pagination parameters for list queries.

    Attributes:
        page: Current page number (1-indexed)
        page_size: Number of items per page
    """

    page: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page must be at least 1", field="page", value=self.page)
        if self.page_size < 1:
            raise ValidationError(
                "page_size must be at least 1", field="page_size", value=self.page_size
            )
        if self.page_size > MAX_PAGE_SIZE:
            raise ValidationError(
                f"page_size cannot exceed {MAX_PAGE_SIZE}",
                field="page_size",
                value=self.page_size,
            )

    @property
    def offset(self) -> int:
        """Calculate the offset for database queries."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    Paginated result containing items and metadata.

    Attributes:
        items: List of items for the current page
        total: Total number of items across all pages
        pagination: The pagination parameters used
    """

    items: list[T]
    total: int
    pagination: Pagination

    @classmethod
    def from_page(cls, page: Page[T], pagination: Pagination) -> "PaginatedResult[T]":
        return cls(items=list(page.items), total=page.total, pagination=pagination)

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def page_size(self) -> int:
        return self.pagination.page_size

    @property
    def total_pages(self) -> int:
        """Total number of pages."""
        if self.total == 0:
            return 0
        return (self.total + self.pagination.page_size - 1) // self.pagination.page_size

    @property
    def has_next(self) -> bool:
        return self.pagination.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.pagination.page > 1
