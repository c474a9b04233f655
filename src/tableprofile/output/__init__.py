"""Metric rows and console rendering for exported column profiles."""

from tableprofile.output.types import MetricType, OutputRow
from tableprofile.output.writer import (
    OutputWriter,
    format_decimal,
    format_top_n,
    format_verbose,
    profile_to_rows,
)

__all__ = [
    "MetricType",
    "OutputRow",
    "OutputWriter",
    "format_decimal",
    "format_top_n",
    "format_verbose",
    "profile_to_rows",
]
