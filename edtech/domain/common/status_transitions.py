"""
Fixed status graphs for aggregates.

Each aggregate declares its legal status changes once, as a mapping from a
status to the statuses it may move to. Anything not listed is illegal.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Generic, TypeVar

from .exceptions import InvalidTransitionError

S = TypeVar("S", bound=Enum)


class StatusTransitions(Generic[S]):
    """Directed graph of allowed status changes."""

    def __init__(self, aggregate: str, edges: Mapping[S, Iterable[S]]) -> None:
        self.aggregate = aggregate
        self._edges: dict[S, frozenset[S]] = {
            source: frozenset(targets) for source, targets in edges.items()
        }

    def allows(self, current: S, target: S) -> bool:
        return target in self._edges.get(current, frozenset())

    def targets(self, current: S) -> frozenset[S]:
        """Statuses reachable in one step from ``current``."""
        return self._edges.get(current, frozenset())

    def require(self, current: S, target: S) -> None:
        """
        Check that ``current -> target`` is an edge.

        Raises:
            InvalidTransitionError: If the edge does not exist
        """
        if not self.allows(current, target):
            raise InvalidTransitionError(self.aggregate, current, target)

    def is_terminal(self, status: S) -> bool:
        return not self._edges.get(status)
