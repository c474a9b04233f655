"""Metric row types written for exported profiles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MetricType(str, Enum):
    """Kinds of metric rows emitted per column."""

    COLUMN_DATATYPE = "COLUMN_DATATYPE"
    COLUMN_NULLABLE = "COLUMN_NULLABLE"
    COLUMN_METADATA = "COLUMN_METADATA"
    NULL_COUNT = "NULL_COUNT"
    TOTAL_COUNT = "TOTAL_COUNT"
    UNIQUE_COUNT = "UNIQUE_COUNT"
    PERC_NULL_VALUES = "PERC_NULL_VALUES"
    PERC_UNIQUE_VALUES = "PERC_UNIQUE_VALUES"
    PERC_DUPLICATE_VALUES = "PERC_DUPLICATE_VALUES"
    TOP_N_VALUES = "TOP_N_VALUES"
    # numeric
    MIN = "MIN"
    MAX = "MAX"
    SUM = "SUM"
    MEAN = "MEAN"
    VARIANCE = "VARIANCE"
    STDDEV = "STDDEV"
    # string
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    AVG_LENGTH = "AVG_LENGTH"
    SHORTEST_STRING = "SHORTEST_STRING"
    LONGEST_STRING = "LONGEST_STRING"
    EMPTY_COUNT = "EMPTY_COUNT"
    PERC_EMPTY_VALUES = "PERC_EMPTY_VALUES"
    # boolean
    TRUE_COUNT = "TRUE_COUNT"
    FALSE_COUNT = "FALSE_COUNT"
    # timestamp
    MIN_TIMESTAMP = "MIN_TIMESTAMP"
    MAX_TIMESTAMP = "MAX_TIMESTAMP"
    PARSE_FAILURES = "PARSE_FAILURES"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, text: str | None) -> MetricType:
        """Return the metric type named by ``text``, UNKNOWN if none matches."""
        if not text:
            return cls.UNKNOWN
        return cls.__members__.get(text.strip().upper(), cls.UNKNOWN)


@dataclass(frozen=True)
class OutputRow:
    """One metric of one column, as written to the result table."""

    column_name: str
    metric_type: MetricType
    metric_value: str

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.column_name, self.metric_type.value, self.metric_value)
