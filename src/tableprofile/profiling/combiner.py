"""The combine contract shared by all per-column accumulators."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, Self, TypeVar, runtime_checkable

from tableprofile.exceptions import InvalidArgumentError

CombinerT = TypeVar("CombinerT", bound="StatisticsCombiner")
KeyT = TypeVar("KeyT")


@runtime_checkable
class StatisticsCombiner(Protocol):
    """Anything that can absorb another partial state of the same column.

    ``combine`` returns the state the caller owns from then on; the argument
    must not be reused afterwards.
    """

    def combine(self, other: Self) -> Self: ...


def reduce_states(states: Sequence[CombinerT]) -> CombinerT:
    """Combine partial states pairwise in a balanced reduction tree.

    Args:
    ----
        states: Non-empty sequence of states for the same column

    Returns:
    -------
        The single combined state

    Raises:
    ------
        InvalidArgumentError: If states is empty

    """
    if not states:
        msg = "Cannot reduce an empty sequence of states"
        raise InvalidArgumentError(msg)

    level = list(states)
    while len(level) > 1:
        next_level = [
            level[i].combine(level[i + 1]) for i in range(0, len(level) - 1, 2)
        ]
        if len(level) % 2:
            next_level.append(level[-1])
        level = next_level
    return level[0]


def merge_partition_states(
    left: Mapping[KeyT, CombinerT], right: Mapping[KeyT, CombinerT]
) -> dict[KeyT, CombinerT]:
    """Merge two per-column state mappings from different partitions.

    Columns present on one side only are carried over unchanged.
    """
    merged = dict(left)
    for key, state in right.items():
        merged[key] = merged[key].combine(state) if key in merged else state
    return merged


__all__ = ["StatisticsCombiner", "merge_partition_states", "reduce_states"]
