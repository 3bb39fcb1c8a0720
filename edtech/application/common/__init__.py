"""
Application common module.

Contains shared building blocks for the application layer:
- Pagination / PaginatedResult / Page: list query parameters and results
- EventDispatcher: publishes drained events with retry and dead-lettering
- PublishError: raised by event sinks
"""

from .event_dispatcher import (
    DeadLetterStoreProtocol,
    DispatchReport,
    EventDispatcher,
    EventSinkProtocol,
    RetryPolicy,
    publish_with_retry,
)
from .exceptions import PublishError
from .pagination import Page, PaginatedResult, Pagination

__all__ = [
    "DeadLetterStoreProtocol",
    "DispatchReport",
    "EventDispatcher",
    "EventSinkProtocol",
    "Page",
    "PaginatedResult",
    "Pagination",
    "PublishError",
    "RetryPolicy",
    "publish_with_retry",
]
