"""Mergeable column profiling for partitioned tabular data."""

from tableprofile.exceptions import (
    FrozenStateError,
    InvalidArgumentError,
    ProfilingError,
    SchemaMismatchError,
)
from tableprofile.models import (
    BooleanMetrics,
    ColumnDescriptor,
    ColumnProfileRecord,
    NumericMetrics,
    ProfilerConfig,
    StringMetrics,
    TimestampMetrics,
    TopNEntry,
    VariantTag,
    load_config_from_yaml,
)
from tableprofile.output import (
    MetricType,
    OutputRow,
    OutputWriter,
    format_verbose,
    profile_to_rows,
)
from tableprofile.profiling import (
    AccumulationState,
    ColumnProfileVariant,
    StatisticsCombiner,
    TopNTracker,
    create_variant,
    create_variants,
    merge_partition_states,
    reduce_states,
)
from tableprofile.type_mappings import map_to_variant_tag

__version__ = "0.1.0"

__all__ = [
    "AccumulationState",
    "BooleanMetrics",
    "ColumnDescriptor",
    "ColumnProfileRecord",
    "ColumnProfileVariant",
    "FrozenStateError",
    "InvalidArgumentError",
    "MetricType",
    "NumericMetrics",
    "OutputRow",
    "OutputWriter",
    "ProfilerConfig",
    "ProfilingError",
    "SchemaMismatchError",
    "StatisticsCombiner",
    "StringMetrics",
    "TimestampMetrics",
    "TopNEntry",
    "TopNTracker",
    "VariantTag",
    "create_variant",
    "create_variants",
    "format_verbose",
    "load_config_from_yaml",
    "map_to_variant_tag",
    "merge_partition_states",
    "profile_to_rows",
    "reduce_states",
]

# SparkProfiler is available only if pyspark is installed (via tableprofile[spark])
try:
    from tableprofile.profiling import SparkProfiler, profile_dataframe  # noqa: F401

    __all__.extend(["SparkProfiler", "profile_dataframe"])
except ImportError:
    # pyspark not available - Spark-dependent classes won't be exported
    pass
