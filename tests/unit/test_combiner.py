"""Unit tests for partition reduction helpers and merge properties."""

from __future__ import annotations

from typing import Self, get_type_hints

import pytest

from tableprofile.exceptions import InvalidArgumentError
from tableprofile.models import ColumnDescriptor
from tableprofile.profiling import (
    AccumulationState,
    ColumnProfileVariant,
    StatisticsCombiner,
    merge_partition_states,
    reduce_states,
)


def _build_state(descriptor, observations, capacity):
    state = AccumulationState(descriptor, top_n_capacity=capacity)
    for value, count in observations:
        state.accommodate(value, count)
    return state


def _counters(state):
    return (state.total_count, state.null_count, state.unique_count)


class TestStatisticsCombinerProtocol:
    """Test both accumulators satisfy the combine protocol."""

    def test_accumulation_state_is_combiner(self, string_column):
        assert isinstance(AccumulationState(string_column, 2), StatisticsCombiner)

    def test_variant_is_combiner(self, numeric_column):
        assert isinstance(ColumnProfileVariant(numeric_column, 2), StatisticsCombiner)

    def test_combine_returns_own_type(self):
        """Test the protocol declares combine as taking and returning Self."""
        hints = get_type_hints(StatisticsCombiner.combine)
        assert hints == {"other": Self, "return": Self}


class TestReduceStates:
    """Test tree reduction of partial states."""

    def test_rejects_empty_input(self):
        with pytest.raises(InvalidArgumentError):
            reduce_states([])

    def test_single_state_returned_as_is(self, string_column):
        state = _build_state(string_column, [("a", 1)], 2)
        assert reduce_states([state]) is state

    @pytest.mark.parametrize("partitions", [1, 2, 3, 7, 16])
    def test_partitioned_counters_match_single_pass(
        self, string_column, rng, observations, partitioner, partitions
    ):
        """Test counters do not depend on how the data was partitioned."""
        data = observations(rng, distinct=60, null_share=0.5)
        single = _build_state(string_column, data, 5)

        states = [
            _build_state(string_column, chunk, 5)
            for chunk in partitioner(rng, data, partitions)
        ]
        reduced = reduce_states(states)

        assert _counters(reduced) == _counters(single)
        assert reduced.perc_null == pytest.approx(single.perc_null)
        assert reduced.perc_unique == pytest.approx(single.perc_unique)
        assert reduced.perc_duplicate == pytest.approx(single.perc_duplicate)

    def test_reduction_order_does_not_change_counters(
        self, string_column, rng, observations, partitioner
    ):
        """Test shuffling partitions before reducing gives the same counters."""
        data = observations(rng, distinct=40)
        chunks = partitioner(rng, data, 6)

        forward = reduce_states([_build_state(string_column, c, 3) for c in chunks])
        shuffled_chunks = list(chunks)
        rng.shuffle(shuffled_chunks)
        shuffled = reduce_states(
            [_build_state(string_column, c, 3) for c in shuffled_chunks]
        )

        assert _counters(forward) == _counters(shuffled)

    def test_top_values_exact_when_capacity_suffices(
        self, string_column, rng, observations, partitioner
    ):
        """Test top-N merges are exact when no partition ever evicts."""
        data = observations(rng, distinct=12, null_share=1.0)
        single = _build_state(string_column, data, 20)
        reduced = reduce_states(
            [_build_state(string_column, c, 20) for c in partitioner(rng, data, 4)]
        )
        assert reduced.top_n.items() == single.top_n.items()

    def test_combine_is_commutative(self, string_column, rng, observations, partitioner):
        """Test A+B and B+A agree on counters and top values."""
        first, second = partitioner(rng, observations(rng, distinct=30), 2)

        ab = _build_state(string_column, first, 4).combine(
            _build_state(string_column, second, 4)
        )
        ba = _build_state(string_column, second, 4).combine(
            _build_state(string_column, first, 4)
        )

        assert _counters(ab) == _counters(ba)
        assert ab.top_n.items() == ba.top_n.items()


class TestMergePartitionStates:
    """Test merging per-column state mappings."""

    def test_merges_shared_columns_and_carries_others(self, string_column, numeric_column):
        left = {
            "status": _build_state(string_column, [("a", 1)], 2),
            "amount": _build_state(numeric_column, [(1.0, 2)], 2),
        }
        right = {"status": _build_state(string_column, [("b", 3)], 2)}

        merged = merge_partition_states(left, right)

        assert set(merged) == {"status", "amount"}
        assert merged["status"].total_count == 4
        assert merged["amount"].total_count == 2

    def test_empty_mappings(self, string_column):
        state = _build_state(string_column, [("a", 1)], 2)
        assert merge_partition_states({}, {}) == {}
        assert merge_partition_states({}, {"status": state}) == {"status": state}

    def test_merge_across_columns_by_key(self):
        """Test mappings keyed by column index merge column by column."""
        columns = [
            ColumnDescriptor(name="id", data_type="int"),
            ColumnDescriptor(name="name", data_type="string"),
        ]
        left = {i: ColumnProfileVariant(c, 3) for i, c in enumerate(columns)}
        right = {i: ColumnProfileVariant(c, 3) for i, c in enumerate(columns)}
        left[0].accommodate(1, 1)
        right[0].accommodate(2, 1)
        right[1].accommodate("x", 2)

        merged = merge_partition_states(left, right)

        assert merged[0].state.total_count == 2
        assert merged[1].state.total_count == 2
