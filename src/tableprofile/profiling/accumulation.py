"""Common per-column running statistics.

An :class:`AccumulationState` is created once per column per partition,
mutated through :meth:`~AccumulationState.accommodate`, merged with the states
of other partitions through :meth:`~AccumulationState.combine`, and finally
exported as a read-only :class:`ColumnProfileRecord`.

``unique_count`` counts accommodation events, not distinct values: each call to
``accommodate`` is taken to present one value that is distinct within the
caller's batch. Upstream grouping (e.g. ``reduceByKey`` over
``(column, value)``) is what makes the count meaningful.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any

from tableprofile.exceptions import (
    FrozenStateError,
    InvalidArgumentError,
    SchemaMismatchError,
)
from tableprofile.models.profile import ColumnDescriptor, ColumnProfileRecord
from tableprofile.profiling.topn import TopNTracker, validate_count

logger = logging.getLogger(__name__)


def percentage(part: int | float, whole: int | float) -> float:
    """Return ``part`` as a percentage of ``whole``; 0.0 when ``whole`` is 0."""
    if not whole:
        return 0.0
    return (part / whole) * 100


def is_null_value(value: Any) -> bool:
    """Return True for values counted as nulls."""
    return value is None


class AccumulationState:
    """Null, total and unique counts plus top-N values for one column."""

    def __init__(self, descriptor: ColumnDescriptor, top_n_capacity: int) -> None:
        self.descriptor = descriptor
        self.null_count = 0
        self.total_count = 0
        self.unique_count = 0
        self.perc_null = 0.0
        self.perc_unique = 0.0
        self.perc_duplicate = 0.0
        self.top_n = TopNTracker(top_n_capacity)
        self._exported = False

    @property
    def column_name(self) -> str:
        return self.descriptor.name

    @property
    def is_exported(self) -> bool:
        """True once the state has been exported and became read-only."""
        return self._exported

    def accommodate(self, value: Hashable, count: int) -> None:
        """Fold ``count`` occurrences of ``value`` into the running totals.

        Args:
        ----
            value: Observed value, None for nulls
            count: Number of occurrences of value within the caller's batch

        Raises:
        ------
            FrozenStateError: If the state was already exported
            InvalidArgumentError: If count is negative or not an integer

        """
        self.ensure_mutable()
        count = validate_count(count)

        self.total_count += count
        self.unique_count += 1
        if is_null_value(value):
            self.null_count += count

        self._recompute_percentages()
        self.top_n.add(value, count)

    def check_combinable(self, other: AccumulationState) -> None:
        """Raise if ``other`` cannot be combined into this state."""
        if other is self:
            msg = f"Cannot combine state for column '{self.column_name}' with itself"
            raise InvalidArgumentError(msg)
        self.ensure_mutable()
        other.ensure_mutable()
        if other.descriptor != self.descriptor:
            msg = (
                f"Cannot combine statistics of different columns: "
                f"{self.descriptor!r} vs {other.descriptor!r}"
            )
            raise SchemaMismatchError(msg, self.descriptor, other.descriptor)
        if other.top_n.capacity != self.top_n.capacity:
            msg = (
                f"Cannot combine statistics for column '{self.column_name}' with "
                f"top-N capacities {self.top_n.capacity} and {other.top_n.capacity}"
            )
            raise SchemaMismatchError(msg, self.top_n.capacity, other.top_n.capacity)

    def combine(self, other: AccumulationState) -> AccumulationState:
        """Merge ``other`` into this state and return this state.

        ``other`` must not be used afterwards. Neither operand is modified when
        a precondition fails.

        Raises
        ------
            FrozenStateError: If either state was already exported
            SchemaMismatchError: If the states describe different columns
            InvalidArgumentError: If ``other`` is this very state

        """
        self.check_combinable(other)

        self.total_count += other.total_count
        self.unique_count += other.unique_count
        self.null_count += other.null_count
        self._recompute_percentages()
        self.top_n = self.top_n.combine(other.top_n)

        logger.debug(
            f"Combined statistics for column '{self.column_name}': "
            f"total={self.total_count}, unique={self.unique_count}, null={self.null_count}"
        )
        return self

    def ensure_mutable(self) -> None:
        """Raise FrozenStateError if the state was exported."""
        if self._exported:
            msg = f"Statistics for column '{self.column_name}' were exported and are read-only"
            raise FrozenStateError(msg)

    def freeze(self) -> None:
        """Mark the state read-only."""
        self._exported = True

    def export(self) -> ColumnProfileRecord:
        """Freeze the state and return its read-only profile record."""
        self.freeze()
        return self.to_record()

    def to_record(self, **overrides: Any) -> ColumnProfileRecord:
        """Build the profile record for the current totals."""
        fields: dict[str, Any] = {
            "column_name": self.descriptor.name,
            "data_type": self.descriptor.data_type,
            "nullable": self.descriptor.nullable,
            "metadata": self.descriptor.metadata,
            "null_count": self.null_count,
            "total_count": self.total_count,
            "unique_count": self.unique_count,
            "perc_null": self.perc_null,
            "perc_unique": self.perc_unique,
            "perc_duplicate": self.perc_duplicate,
            "top_n": tuple(self.top_n.entries()),
            "top_n_capacity": self.top_n.capacity,
        }
        fields.update(overrides)
        return ColumnProfileRecord(**fields)

    def _recompute_percentages(self) -> None:
        self.perc_null = percentage(self.null_count, self.total_count)
        self.perc_unique = percentage(self.unique_count, self.total_count)
        self.perc_duplicate = 100.0 - self.perc_unique if self.total_count else 0.0

    def __repr__(self) -> str:
        return (
            f"AccumulationState(column={self.column_name!r}, total={self.total_count}, "
            f"unique={self.unique_count}, null={self.null_count}, "
            f"exported={self._exported})"
        )


__all__ = ["AccumulationState", "is_null_value", "percentage"]
