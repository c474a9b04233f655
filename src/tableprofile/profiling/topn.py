"""Bounded top-N frequency tracking.

A :class:`TopNTracker` keeps at most ``capacity`` distinct values with their
occurrence counts. Once full, a new value only gets in by outcounting the
current minimum, so a value that arrives with a low count in one partition
may be dropped for good even if its total count across partitions would have
qualified. Merged results are therefore approximate once any eviction has
happened.

Ordering is deterministic everywhere: count descending, then value ascending.
"""

from __future__ import annotations

import heapq
import logging
import numbers
from collections.abc import Hashable, Iterable, Iterator
from datetime import UTC, date, datetime, time
from typing import Any

from tableprofile.exceptions import InvalidArgumentError, SchemaMismatchError
from tableprofile.models.profile import TopNEntry

logger = logging.getLogger(__name__)


def validate_count(count: Any) -> int:
    """Return ``count`` as an int, or raise if it is not a non-negative integer.

    Raises
    ------
        InvalidArgumentError: If count is negative, boolean or not integral

    """
    if isinstance(count, bool) or not isinstance(count, numbers.Integral):
        msg = f"Occurrence count must be an integer, got {type(count).__name__}"
        raise InvalidArgumentError(msg)
    if count < 0:
        msg = f"Occurrence count must be non-negative, got {count}"
        raise InvalidArgumentError(msg)
    return int(count)


def timestamp_key(value: datetime | date) -> datetime:
    """Return a naive UTC datetime that orders dates and datetimes together."""
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def value_sort_key(value: Any) -> tuple:
    """Total ordering key for tracked values.

    None sorts first, then numbers compared numerically (NaN after all other
    numbers), then dates and datetimes on a naive UTC timeline, then strings
    and bytes, then tuples element by element. Anything else is grouped by
    type name and ordered by its repr.
    """
    if value is None:
        return (0, "", 0)
    if isinstance(value, numbers.Number) and not isinstance(value, complex):
        if value != value:  # NaN
            return (1, 1, 0)
        return (1, 0, value)
    if isinstance(value, date):
        return (2, timestamp_key(value), type(value).__name__, repr(value))
    if isinstance(value, (str, bytes)):
        return (3, type(value).__name__, value)
    if isinstance(value, tuple):
        return (4, "", tuple(value_sort_key(item) for item in value))
    return (5, type(value).__name__, repr(value))


def _presentation_key(item: tuple[Any, int]) -> tuple:
    value, count = item
    return (-count, value_sort_key(value))


def _eviction_key(item: tuple[Any, int]) -> tuple:
    value, count = item
    return (count, value_sort_key(value))


class TopNTracker:
    """Keeps the ``capacity`` most frequent values seen so far."""

    def __init__(self, capacity: int) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, numbers.Integral):
            msg = f"Top-N capacity must be an integer, got {type(capacity).__name__}"
            raise InvalidArgumentError(msg)
        if capacity < 1:
            msg = f"Top-N capacity must be positive, got {capacity}"
            raise InvalidArgumentError(msg)
        self._capacity = int(capacity)
        self._counts: dict[Hashable, int] = {}

    @property
    def capacity(self) -> int:
        """Maximum number of entries held."""
        return self._capacity

    def add(self, value: Hashable, count: int) -> None:
        """Fold ``count`` occurrences of ``value`` into the tracker.

        Args:
        ----
            value: Observed value, None for nulls
            count: Number of occurrences; zero is accepted and ignored

        Raises:
        ------
            InvalidArgumentError: If count is negative or not an integer

        """
        count = validate_count(count)
        if count == 0:
            return

        if value in self._counts:
            self._counts[value] += count
            return

        if len(self._counts) < self._capacity:
            self._counts[value] = count
            return

        min_value, min_count = min(self._counts.items(), key=_eviction_key)
        if count > min_count:
            del self._counts[min_value]
            self._counts[value] = count
            logger.debug(
                f"Evicted {min_value!r} ({min_count}) in favour of {value!r} ({count})"
            )

    def combine(self, other: TopNTracker) -> TopNTracker:
        """Return a new tracker holding the top values of both trackers.

        Counts of values held by both are summed before the top ``capacity``
        entries are reselected, so the result does not depend on operand order.
        Values already evicted from either operand cannot be recovered.

        Raises
        ------
            SchemaMismatchError: If the capacities differ

        """
        if other.capacity != self._capacity:
            msg = (
                f"Cannot combine top-N trackers with different capacities: "
                f"{self._capacity} vs {other.capacity}"
            )
            raise SchemaMismatchError(msg, self._capacity, other.capacity)

        merged = dict(self._counts)
        for value, count in other._counts.items():
            merged[value] = merged.get(value, 0) + count

        result = TopNTracker(self._capacity)
        result._counts = dict(
            heapq.nsmallest(self._capacity, merged.items(), key=_presentation_key)
        )
        if len(merged) > self._capacity:
            logger.debug(
                f"Top-N combine dropped {len(merged) - self._capacity} values "
                f"beyond capacity {self._capacity}"
            )
        return result

    def copy(self) -> TopNTracker:
        """Return an independent copy of this tracker."""
        clone = TopNTracker(self._capacity)
        clone._counts = dict(self._counts)
        return clone

    def count_of(self, value: Hashable) -> int:
        """Return the tracked count of ``value``, 0 if it is not held."""
        return self._counts.get(value, 0)

    def items(self) -> list[tuple[Any, int]]:
        """Return ``(value, count)`` pairs in presentation order."""
        return sorted(self._counts.items(), key=_presentation_key)

    def entries(self) -> list[TopNEntry]:
        """Return held entries in presentation order."""
        return [TopNEntry(value=value, count=count) for value, count in self.items()]

    @classmethod
    def from_items(
        cls, capacity: int, items: Iterable[tuple[Hashable, int]]
    ) -> TopNTracker:
        """Build a tracker by adding each ``(value, count)`` pair in order."""
        tracker = cls(capacity)
        for value, count in items:
            tracker.add(value, count)
        return tracker

    def __contains__(self, value: object) -> bool:
        return value in self._counts

    def __iter__(self) -> Iterator[tuple[Any, int]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"TopNTracker(capacity={self._capacity}, items={self.items()!r})"


__all__ = ["TopNTracker", "timestamp_key", "validate_count", "value_sort_key"]
