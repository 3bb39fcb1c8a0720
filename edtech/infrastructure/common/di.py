import threading
from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from edtech.core import container
from edtech.database import DatabaseSession

T = TypeVar("T")

# container.db is shared by every request; builds must not interleave.
_container_lock = threading.Lock()


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    The request-scoped session is bound to ``container.db`` only while the
    use case is being built; repositories and sinks keep their own reference.
    Sync dependencies run in FastAPI's threadpool, so the override, build and
    reset happen under one lock.
    """

    def dependency(db: DatabaseSession) -> T:
        with _container_lock:
            container.db.override(db)
            try:
                return provider()
            finally:
                container.db.reset_override()

    return dependency
