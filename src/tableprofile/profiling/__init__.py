"""Per-column accumulation and merge of profiling statistics.

Spark-dependent components (SparkProfiler) require installing tableprofile[spark]:
    pip install tableprofile[spark]
"""

from tableprofile.profiling.accumulation import AccumulationState
from tableprofile.profiling.combiner import (
    StatisticsCombiner,
    merge_partition_states,
    reduce_states,
)
from tableprofile.profiling.topn import TopNTracker
from tableprofile.profiling.variants import (
    BooleanExtras,
    ColumnProfileVariant,
    NumericExtras,
    StringExtras,
    TimestampExtras,
    create_variant,
    create_variants,
)

__all__ = [
    "AccumulationState",
    "BooleanExtras",
    "ColumnProfileVariant",
    "NumericExtras",
    "StatisticsCombiner",
    "StringExtras",
    "TimestampExtras",
    "TopNTracker",
    "create_variant",
    "create_variants",
    "merge_partition_states",
    "reduce_states",
]

# SparkProfiler is available only if pyspark is installed
try:
    from tableprofile.profiling.spark_profiler import (  # noqa: F401
        SparkProfiler,
        profile_dataframe,
    )

    __all__.extend(["SparkProfiler", "profile_dataframe"])
except ImportError:
    # pyspark not available - SparkProfiler won't be exported
    pass
