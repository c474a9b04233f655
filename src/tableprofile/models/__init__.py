"""Data models for tableprofile."""

from tableprofile.models.config import (
    DEFAULT_DECIMAL_DIGITS,
    DEFAULT_TOP_N_CAPACITY,
    ProfilerConfig,
    load_config_from_yaml,
)
from tableprofile.models.profile import (
    BooleanMetrics,
    ColumnDescriptor,
    ColumnProfileRecord,
    NumericMetrics,
    StringMetrics,
    TimestampMetrics,
    TopNEntry,
    VariantTag,
)

__all__ = [
    "DEFAULT_DECIMAL_DIGITS",
    "DEFAULT_TOP_N_CAPACITY",
    "BooleanMetrics",
    "ColumnDescriptor",
    "ColumnProfileRecord",
    "NumericMetrics",
    "ProfilerConfig",
    "StringMetrics",
    "TimestampMetrics",
    "TopNEntry",
    "VariantTag",
    "load_config_from_yaml",
]
