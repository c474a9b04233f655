"""Pytest configuration for tableprofile tests."""

from __future__ import annotations

import random

import pytest

from tableprofile.models import ColumnDescriptor


@pytest.fixture
def string_column():
    """Descriptor for a nullable string column."""
    return ColumnDescriptor(name="status", data_type="string")


@pytest.fixture
def numeric_column():
    """Descriptor for a nullable numeric column."""
    return ColumnDescriptor(name="amount", data_type="double")


@pytest.fixture
def rng():
    """Seeded random generator so property-style tests are reproducible."""
    return random.Random(20240501)


def make_observations(rng: random.Random, distinct: int, null_share: float = 0.1):
    """Build pre-grouped ``(value, count)`` observations, one per distinct value."""
    observations = [(f"v{i:03d}", rng.randint(1, 50)) for i in range(distinct)]
    if rng.random() < null_share or distinct == 0:
        observations.append((None, rng.randint(1, 20)))
    rng.shuffle(observations)
    return observations


def split_into_partitions(rng: random.Random, observations, partitions: int):
    """Scatter observations over ``partitions`` lists, some possibly empty."""
    buckets = [[] for _ in range(partitions)]
    for observation in observations:
        buckets[rng.randrange(partitions)].append(observation)
    return buckets


@pytest.fixture
def observations():
    """Factory for pre-grouped observations."""
    return make_observations


@pytest.fixture
def partitioner():
    """Factory that scatters observations over partitions."""
    return split_into_partitions
