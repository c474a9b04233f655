"""Unit tests for metric rows and console rendering."""

from __future__ import annotations

from datetime import date

import pytest

from tableprofile.models import ColumnDescriptor, TopNEntry
from tableprofile.output import (
    MetricType,
    OutputRow,
    OutputWriter,
    format_decimal,
    format_top_n,
    format_verbose,
    profile_to_rows,
)
from tableprofile.profiling import ColumnProfileVariant

COMMON_METRICS = [
    MetricType.COLUMN_DATATYPE,
    MetricType.COLUMN_NULLABLE,
    MetricType.COLUMN_METADATA,
    MetricType.NULL_COUNT,
    MetricType.TOTAL_COUNT,
    MetricType.UNIQUE_COUNT,
    MetricType.PERC_NULL_VALUES,
    MetricType.PERC_UNIQUE_VALUES,
    MetricType.PERC_DUPLICATE_VALUES,
    MetricType.TOP_N_VALUES,
]


@pytest.fixture
def quantity_record():
    """Exported numeric profile: values 1 and 3 twice each, one null."""
    variant = ColumnProfileVariant(ColumnDescriptor(name="qty", data_type="int"), 3)
    variant.accommodate(1, 2)
    variant.accommodate(3, 2)
    variant.accommodate(None, 1)
    return variant.export()


def _record(data_type, observations, name="col"):
    variant = ColumnProfileVariant(ColumnDescriptor(name=name, data_type=data_type), 3)
    for value, count in observations:
        variant.accommodate(value, count)
    return variant.export()


class TestMetricType:
    """Test metric type parsing."""

    def test_parse_known_names(self):
        assert MetricType.parse("NULL_COUNT") is MetricType.NULL_COUNT
        assert MetricType.parse("top_n_values") is MetricType.TOP_N_VALUES
        assert MetricType.parse(" mean ") is MetricType.MEAN

    @pytest.mark.parametrize("text", ["", None, "NOT_A_METRIC", "null count"])
    def test_unrecognised_text_is_unknown(self, text):
        """Test parsing never raises for unknown names."""
        assert MetricType.parse(text) is MetricType.UNKNOWN


class TestFormatDecimal:
    """Test float rendering."""

    @pytest.mark.parametrize(
        ("value", "digits", "expected"),
        [
            (12.5, 4, "12.5"),
            (100.0, 4, "100"),
            (1 / 3, 2, "0.33"),
            (2 / 3, 4, "0.6667"),
            (2.0, 0, "2"),
            (-0.00001, 4, "0"),
            (39.99999999999999, 4, "40"),
        ],
    )
    def test_format_decimal(self, value, digits, expected):
        assert format_decimal(value, digits) == expected


class TestFormatTopN:
    """Test top-N row rendering."""

    def test_segments_carry_rank_value_and_count(self):
        entries = [TopNEntry(value="a", count=5), TopNEntry(value=None, count=2)]
        assert format_top_n(entries) == "1^Aa^A5^B2^Anull^A2^B"

    def test_empty(self):
        assert format_top_n([]) == ""


class TestProfileToRows:
    """Test metric row generation."""

    def test_numeric_rows(self, quantity_record):
        """Test schema, common, top-N and numeric rows in order."""
        rows = profile_to_rows(quantity_record)
        by_type = {row.metric_type: row.metric_value for row in rows}

        assert [row.metric_type for row in rows[: len(COMMON_METRICS)]] == COMMON_METRICS
        assert len(rows) == len(COMMON_METRICS) + 7
        assert {row.column_name for row in rows} == {"qty"}
        assert by_type[MetricType.COLUMN_DATATYPE] == "int"
        assert by_type[MetricType.COLUMN_NULLABLE] == "true"
        assert by_type[MetricType.COLUMN_METADATA] == "{}"
        assert by_type[MetricType.NULL_COUNT] == "1"
        assert by_type[MetricType.TOTAL_COUNT] == "5"
        assert by_type[MetricType.UNIQUE_COUNT] == "3"
        assert by_type[MetricType.PERC_NULL_VALUES] == "20"
        assert by_type[MetricType.PERC_UNIQUE_VALUES] == "60"
        assert by_type[MetricType.PERC_DUPLICATE_VALUES] == "40"
        assert by_type[MetricType.TOP_N_VALUES] == "1^A1^A2^B2^A3^A2^B3^Anull^A1^B"
        assert by_type[MetricType.MIN] == "1"
        assert by_type[MetricType.MAX] == "3"
        assert by_type[MetricType.MEAN] == "2"
        assert by_type[MetricType.VARIANCE] == "1"
        assert by_type[MetricType.PARSE_FAILURES] == "0"

    @pytest.mark.parametrize(
        ("data_type", "observations", "extra_rows"),
        [
            ("string", [("a", 1), ("", 1)], 7),
            ("boolean", [(True, 2)], 3),
            ("timestamp", [(date(2024, 1, 1), 1)], 3),
            ("binary", [(b"x", 1)], 0),
        ],
    )
    def test_row_counts_per_variant(self, data_type, observations, extra_rows):
        rows = profile_to_rows(_record(data_type, observations))
        assert len(rows) == len(COMMON_METRICS) + extra_rows

    def test_missing_values_render_as_null(self):
        """Test unset extras such as min of an all-null column render as null."""
        rows = profile_to_rows(_record("double", [(None, 2)]))
        by_type = {row.metric_type: row.metric_value for row in rows}
        assert by_type[MetricType.MIN] == "null"
        assert by_type[MetricType.TOP_N_VALUES] == "1^Anull^A2^B"

    def test_timestamps_render_iso(self):
        rows = profile_to_rows(_record("date", [(date(2024, 3, 1), 1)]))
        by_type = {row.metric_type: row.metric_value for row in rows}
        assert by_type[MetricType.MIN_TIMESTAMP] == "2024-03-01"

    def test_decimal_digits_respected(self):
        record = _record("string", [("a", 1), ("b", 1), (None, 1)])
        rows = profile_to_rows(record, decimal_digits=2)
        by_type = {row.metric_type: row.metric_value for row in rows}
        assert by_type[MetricType.PERC_NULL_VALUES] == "33.33"


class TestOutputWriter:
    """Test the explicit output handle."""

    def test_collects_rows_in_order(self):
        writer = OutputWriter()
        first = OutputRow("a", MetricType.NULL_COUNT, "0")
        second = OutputRow("a", MetricType.TOTAL_COUNT, "3")

        writer.add_rows([first])
        writer.add_rows(iter([second]))

        assert writer.rows == [first, second]
        assert len(writer) == 2
        assert second.as_tuple() == ("a", "TOTAL_COUNT", "3")

    def test_rows_returns_copy(self):
        writer = OutputWriter()
        writer.add_rows([OutputRow("a", MetricType.NULL_COUNT, "0")])
        writer.rows.clear()
        assert len(writer) == 1

    def test_clear(self):
        writer = OutputWriter()
        writer.add_rows([OutputRow("a", MetricType.NULL_COUNT, "0")])
        writer.clear()
        assert writer.rows == []

    def test_writers_are_independent(self, quantity_record):
        """Test exporting into one writer leaves another untouched."""
        used, unused = OutputWriter(), OutputWriter()
        used.add_rows(profile_to_rows(quantity_record))
        assert len(used) > 0
        assert len(unused) == 0


class TestFormatVerbose:
    """Test multi-line console rendering."""

    def test_numeric_summary(self, quantity_record):
        assert format_verbose(quantity_record).splitlines() == [
            "ColumnInfo [name=qty, datatype=int, nullable=true]",
            "CommonStatistics [nullCount=1, totalCount=5, uniqueCount=3, "
            "percNullValues=20, percUniqueValues=60, percDuplicateValues=40]",
            "Top 3 values [",
            "1. 1 (2)",
            "2. 3 (2)",
            "3. null (1)",
            "]",
            "NumericStatistics [min=1, max=3, sum=8, mean=2, variance=1, "
            "stddev=1, parse_failures=0]",
        ]

    def test_generic_summary_has_no_extras_line(self):
        text = format_verbose(_record("binary", []))
        assert text.splitlines()[-2:] == ["Top 3 values [", "]"]

    def test_header_shows_configured_capacity(self):
        """Test the header names the configured N, not the number of held values."""
        variant = ColumnProfileVariant(ColumnDescriptor(name="code", data_type="string"), 5)
        variant.accommodate("x", 2)

        lines = format_verbose(variant.export()).splitlines()

        assert lines[2:5] == ["Top 5 values [", "1. x (2)", "]"]


class TestColumnMetadataRow:
    """Test the schema metadata row."""

    def test_metadata_row_follows_nullable(self):
        column = ColumnDescriptor(
            name="price", data_type="double", metadata='{"comment": "unit price"}'
        )
        rows = profile_to_rows(ColumnProfileVariant(column, 3).export())

        assert rows[2].as_tuple() == (
            "price",
            "COLUMN_METADATA",
            '{"comment": "unit price"}',
        )
