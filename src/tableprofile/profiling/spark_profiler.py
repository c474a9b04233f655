"""Profile Spark DataFrames column by column.

Values are first grouped per ``(column_index, value)`` with ``reduceByKey``, so
every pair a partition sees is distinct within the dataset. Each partition then
accumulates one :class:`ColumnProfileVariant` per column, and the partition
results are merged into one variant per column.

Note: This module requires pyspark. Install with: pip install tableprofile[spark]
"""

from __future__ import annotations

import json
import logging
import operator
from collections.abc import Iterable, Iterator, Sequence
from functools import partial
from typing import TYPE_CHECKING, Any

from pyspark.sql.types import StructField, StructType

from tableprofile.models.config import ProfilerConfig
from tableprofile.models.profile import ColumnDescriptor, ColumnProfileRecord
from tableprofile.profiling.combiner import merge_partition_states
from tableprofile.profiling.variants import ColumnProfileVariant

if TYPE_CHECKING:
    from pyspark.sql import DataFrame

    from tableprofile.output.writer import OutputWriter

logger = logging.getLogger(__name__)


def hashable_value(value: Any) -> Any:
    """Convert Spark collection values into hashable equivalents."""
    if isinstance(value, list):
        return tuple(hashable_value(item) for item in value)
    if isinstance(value, dict):
        return tuple(
            sorted(
                ((hashable_value(k), hashable_value(v)) for k, v in value.items()),
                key=repr,
            )
        )
    if isinstance(value, bytearray):
        return bytes(value)
    return value


def explode_row(row: Sequence[Any], width: int) -> Iterator[tuple[tuple[int, Any], int]]:
    """Yield ``((column_index, value), 1)`` for every column of a row."""
    for index in range(width):
        yield (index, hashable_value(row[index])), 1


def accumulate_partition(
    pairs: Iterable[tuple[tuple[int, Any], int]],
    descriptors: Sequence[ColumnDescriptor],
    top_n_capacity: int,
) -> Iterator[dict[int, ColumnProfileVariant]]:
    """Accumulate one partition of grouped pairs into per-column variants.

    Args:
    ----
        pairs: ``((column_index, value), count)`` pairs, each distinct
        descriptors: Column descriptors indexed by column position
        top_n_capacity: Number of most frequent values kept per column

    Returns:
    -------
        Iterator yielding a single ``{column_index: variant}`` mapping

    """
    variants: dict[int, ColumnProfileVariant] = {}
    for (index, value), count in pairs:
        variant = variants.get(index)
        if variant is None:
            variant = ColumnProfileVariant(descriptors[index], top_n_capacity)
            variants[index] = variant
        variant.accommodate(value, count)
    yield variants


class SparkProfiler:
    """Profiles every column of a Spark DataFrame."""

    def __init__(self, config: ProfilerConfig | None = None) -> None:
        self.config = config or ProfilerConfig()

    def descriptors_from_schema(self, schema: StructType) -> list[ColumnDescriptor]:
        """Build one column descriptor per schema field, in schema order."""
        return [self._descriptor_for_field(field) for field in schema.fields]

    def _descriptor_for_field(self, field: StructField) -> ColumnDescriptor:
        """Map a Spark StructField to a column descriptor.

        Args:
        ----
            field: Spark StructField

        Returns:
        -------
            ColumnDescriptor carrying the field's simple type string and metadata

        """
        return ColumnDescriptor(
            name=field.name,
            data_type=field.dataType.simpleString(),
            nullable=field.nullable,
            metadata=json.dumps(field.metadata or {}, sort_keys=True),
        )

    def profile_dataframe(
        self, df: DataFrame, writer: OutputWriter | None = None
    ) -> dict[str, ColumnProfileRecord]:
        """Profile all columns of ``df``.

        Args:
        ----
            df: Spark DataFrame
            writer: Optional output writer that receives metric rows

        Returns:
        -------
            Exported profile records keyed by column name, in schema order

        """
        descriptors = self.descriptors_from_schema(df.schema)
        if not descriptors:
            logger.info("DataFrame has no columns, nothing to profile")
            return {}

        top_n_capacity = self.config.top_n_capacity
        logger.info(
            f"Profiling {len(descriptors)} columns (top_n_capacity={top_n_capacity})"
        )

        grouped = df.rdd.flatMap(partial(explode_row, width=len(descriptors))).reduceByKey(
            operator.add
        )
        merged = grouped.mapPartitions(
            partial(
                accumulate_partition,
                descriptors=descriptors,
                top_n_capacity=top_n_capacity,
            )
        ).fold({}, merge_partition_states)

        records: dict[str, ColumnProfileRecord] = {}
        for index, descriptor in enumerate(descriptors):
            variant = merged.get(index) or ColumnProfileVariant(descriptor, top_n_capacity)
            records[descriptor.name] = variant.export(
                writer=writer, decimal_digits=self.config.decimal_digits
            )

        logger.info(f"Profiled {len(records)} columns")
        return records


def profile_dataframe(
    df: DataFrame,
    config: ProfilerConfig | None = None,
    writer: OutputWriter | None = None,
) -> dict[str, ColumnProfileRecord]:
    """Profile all columns of ``df`` with a default :class:`SparkProfiler`."""
    return SparkProfiler(config).profile_dataframe(df, writer=writer)


__all__ = [
    "SparkProfiler",
    "accumulate_partition",
    "explode_row",
    "hashable_value",
    "profile_dataframe",
]
