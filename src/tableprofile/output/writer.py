"""Collect metric rows and render console summaries for profile records.

The writer is an explicit handle owned by the caller and passed into
:meth:`ColumnProfileVariant.export`; there is no process-wide writer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from tableprofile.models.config import DEFAULT_DECIMAL_DIGITS
from tableprofile.models.profile import (
    BooleanMetrics,
    ColumnProfileRecord,
    NumericMetrics,
    StringMetrics,
    TimestampMetrics,
    TopNEntry,
)
from tableprofile.output.types import MetricType, OutputRow

logger = logging.getLogger(__name__)

TOP_N_FIELD_SEPARATOR = "^A"
TOP_N_ENTRY_SEPARATOR = "^B"
NULL_DISPLAY = "null"


class OutputWriter:
    """Accumulates metric rows for one profiling run."""

    def __init__(self) -> None:
        self._rows: list[OutputRow] = []

    def add_rows(self, rows: Iterable[OutputRow]) -> None:
        """Append rows in order."""
        rows = list(rows)
        self._rows.extend(rows)
        logger.debug(f"Added {len(rows)} metric rows")

    @property
    def rows(self) -> list[OutputRow]:
        """Return a copy of the collected rows."""
        return list(self._rows)

    def clear(self) -> None:
        self._rows.clear()

    def __len__(self) -> int:
        return len(self._rows)


def format_decimal(value: float, decimal_digits: int = DEFAULT_DECIMAL_DIGITS) -> str:
    """Format a float with at most ``decimal_digits`` digits, no trailing zeros."""
    text = f"{value:.{decimal_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _display(value: Any, decimal_digits: int) -> str:
    if value is None:
        return NULL_DISPLAY
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        return format_decimal(value, decimal_digits)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def format_top_n(entries: Iterable[TopNEntry]) -> str:
    """Render top-N entries as ``rank^Avalue^Acount^B`` segments."""
    return "".join(
        f"{rank}{TOP_N_FIELD_SEPARATOR}"
        f"{NULL_DISPLAY if entry.value is None else entry.value}"
        f"{TOP_N_FIELD_SEPARATOR}{entry.count}{TOP_N_ENTRY_SEPARATOR}"
        for rank, entry in enumerate(entries, start=1)
    )


def _extras_metrics(record: ColumnProfileRecord) -> list[tuple[MetricType, Any]]:
    extras = record.extras
    if isinstance(extras, NumericMetrics):
        return [
            (MetricType.MIN, extras.min),
            (MetricType.MAX, extras.max),
            (MetricType.SUM, extras.sum),
            (MetricType.MEAN, extras.mean),
            (MetricType.VARIANCE, extras.variance),
            (MetricType.STDDEV, extras.stddev),
            (MetricType.PARSE_FAILURES, extras.parse_failures),
        ]
    if isinstance(extras, StringMetrics):
        return [
            (MetricType.MIN_LENGTH, extras.min_length),
            (MetricType.MAX_LENGTH, extras.max_length),
            (MetricType.AVG_LENGTH, extras.avg_length),
            (MetricType.SHORTEST_STRING, extras.shortest),
            (MetricType.LONGEST_STRING, extras.longest),
            (MetricType.EMPTY_COUNT, extras.empty_count),
            (MetricType.PERC_EMPTY_VALUES, extras.perc_empty),
        ]
    if isinstance(extras, BooleanMetrics):
        return [
            (MetricType.TRUE_COUNT, extras.true_count),
            (MetricType.FALSE_COUNT, extras.false_count),
            (MetricType.PARSE_FAILURES, extras.parse_failures),
        ]
    if isinstance(extras, TimestampMetrics):
        return [
            (MetricType.MIN_TIMESTAMP, extras.min),
            (MetricType.MAX_TIMESTAMP, extras.max),
            (MetricType.PARSE_FAILURES, extras.parse_failures),
        ]
    return []


def profile_to_rows(
    record: ColumnProfileRecord, decimal_digits: int = DEFAULT_DECIMAL_DIGITS
) -> list[OutputRow]:
    """Build the metric rows for one exported column profile.

    Args:
    ----
        record: Exported column profile
        decimal_digits: Maximum decimal digits for float metrics

    Returns:
    -------
        Schema rows, common metric rows, the top-N row, then type-specific rows

    """
    metrics: list[tuple[MetricType, Any]] = [
        (MetricType.COLUMN_DATATYPE, record.data_type),
        (MetricType.COLUMN_NULLABLE, record.nullable),
        (MetricType.COLUMN_METADATA, record.metadata),
        (MetricType.NULL_COUNT, record.null_count),
        (MetricType.TOTAL_COUNT, record.total_count),
        (MetricType.UNIQUE_COUNT, record.unique_count),
        (MetricType.PERC_NULL_VALUES, record.perc_null),
        (MetricType.PERC_UNIQUE_VALUES, record.perc_unique),
        (MetricType.PERC_DUPLICATE_VALUES, record.perc_duplicate),
    ]
    rows = [
        OutputRow(record.column_name, metric_type, _display(value, decimal_digits))
        for metric_type, value in metrics
    ]
    rows.append(
        OutputRow(record.column_name, MetricType.TOP_N_VALUES, format_top_n(record.top_n))
    )
    rows.extend(
        OutputRow(record.column_name, metric_type, _display(value, decimal_digits))
        for metric_type, value in _extras_metrics(record)
    )
    return rows


def format_verbose(
    record: ColumnProfileRecord, decimal_digits: int = DEFAULT_DECIMAL_DIGITS
) -> str:
    """Render a multi-line console summary of a column profile."""
    lines = [
        f"ColumnInfo [name={record.column_name}, datatype={record.data_type}, "
        f"nullable={_display(record.nullable, decimal_digits)}]",
        f"CommonStatistics [nullCount={record.null_count}, "
        f"totalCount={record.total_count}, uniqueCount={record.unique_count}, "
        f"percNullValues={format_decimal(record.perc_null, decimal_digits)}, "
        f"percUniqueValues={format_decimal(record.perc_unique, decimal_digits)}, "
        f"percDuplicateValues={format_decimal(record.perc_duplicate, decimal_digits)}]",
        f"Top {record.top_n_capacity} values [",
    ]
    lines.extend(
        f"{rank}. {_display(entry.value, decimal_digits)} ({entry.count})"
        for rank, entry in enumerate(record.top_n, start=1)
    )
    lines.append("]")

    extras = _extras_metrics(record)
    if extras:
        body = ", ".join(
            f"{metric_type.value.lower()}={_display(value, decimal_digits)}"
            for metric_type, value in extras
        )
        lines.append(f"{record.variant.value.capitalize()}Statistics [{body}]")
    return "\n".join(lines)


__all__ = [
    "NULL_DISPLAY",
    "TOP_N_ENTRY_SEPARATOR",
    "TOP_N_FIELD_SEPARATOR",
    "OutputWriter",
    "format_decimal",
    "format_top_n",
    "format_verbose",
    "profile_to_rows",
]
