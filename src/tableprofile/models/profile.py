"""Profile Pydantic Models

Type-safe models for column descriptors and exported column profiles.
Exported records are frozen: once a state is exported its record is read-only.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tableprofile.models.config import DEFAULT_TOP_N_CAPACITY


class VariantTag(str, Enum):
    """Type family a column is profiled as."""

    NUMERIC = "numeric"
    STRING = "string"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    GENERIC = "generic"


class ColumnDescriptor(BaseModel):
    """Identity and declared type of a profiled column."""

    name: str = Field(min_length=1, description="Column name, unique within a schema")
    data_type: str = Field(
        description="Declared column type (Spark simple string, Spark class name or SQL type)"
    )
    nullable: bool = Field(default=True, description="Whether the column allows nulls")
    metadata: str = Field(
        default="{}", description="Column metadata as JSON text, as Spark renders it"
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("data_type")
    @classmethod
    def data_type_not_blank(cls, v: str) -> str:
        """Reject blank type tags."""
        if not v.strip():
            msg = "data_type must not be blank"
            raise ValueError(msg)
        return v.strip()


class TopNEntry(BaseModel):
    """A value and how often it occurred."""

    value: Any = Field(description="Observed value; None for nulls")
    count: int = Field(ge=0, description="Number of occurrences")

    model_config = ConfigDict(frozen=True)


class NumericMetrics(BaseModel):
    """Extra metrics for numeric columns."""

    min: float | None = Field(default=None, description="Smallest parsed value")
    max: float | None = Field(default=None, description="Largest parsed value")
    sum: float = Field(default=0.0, description="Sum of parsed values")
    mean: float = Field(default=0.0, description="Mean of parsed values")
    variance: float = Field(default=0.0, ge=0.0, description="Population variance")
    stddev: float = Field(default=0.0, ge=0.0, description="Population standard deviation")
    parse_failures: int = Field(default=0, ge=0, description="Occurrences that failed to parse")

    model_config = ConfigDict(frozen=True)


class StringMetrics(BaseModel):
    """Extra metrics for string columns."""

    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    avg_length: float = Field(default=0.0, ge=0.0)
    shortest: str | None = Field(default=None, description="Shortest non-null string")
    longest: str | None = Field(default=None, description="Longest non-null string")
    empty_count: int = Field(default=0, ge=0, description="Occurrences of the empty string")
    perc_empty: float = Field(default=0.0, ge=0.0, le=100.0)

    model_config = ConfigDict(frozen=True)


class BooleanMetrics(BaseModel):
    """Extra metrics for boolean columns."""

    true_count: int = Field(default=0, ge=0)
    false_count: int = Field(default=0, ge=0)
    parse_failures: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class TimestampMetrics(BaseModel):
    """Extra metrics for timestamp and date columns."""

    min: datetime | date | None = Field(default=None)
    max: datetime | date | None = Field(default=None)
    parse_failures: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class ColumnProfileRecord(BaseModel):
    """Read-only profile of one column after the final combine."""

    column_name: str
    data_type: str
    nullable: bool = True
    metadata: str = "{}"
    variant: VariantTag = VariantTag.GENERIC
    null_count: int = Field(ge=0)
    total_count: int = Field(ge=0)
    unique_count: int = Field(ge=0)
    perc_null: float = Field(ge=0.0, le=100.0)
    # Zero-count accommodations raise unique_count without total_count, so
    # perc_unique is not capped at 100.
    perc_unique: float = Field(
        ge=0.0, description="Unique occurrences as a percentage of total"
    )
    perc_duplicate: float = Field(description="100 minus perc_unique")
    top_n: tuple[TopNEntry, ...] = Field(
        default=(), description="Most frequent values, count descending"
    )
    top_n_capacity: int = Field(
        default=DEFAULT_TOP_N_CAPACITY, ge=1, description="Configured number of top values"
    )
    extras: NumericMetrics | StringMetrics | BooleanMetrics | TimestampMetrics | None = (
        Field(default=None, description="Type-specific metrics")
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def nulls_within_total(self) -> "ColumnProfileRecord":
        """Validate that null_count never exceeds total_count."""
        if self.null_count > self.total_count:
            msg = (
                f"null_count ({self.null_count}) exceeds "
                f"total_count ({self.total_count})"
            )
            raise ValueError(msg)
        return self


__all__ = [
    "BooleanMetrics",
    "ColumnDescriptor",
    "ColumnProfileRecord",
    "NumericMetrics",
    "StringMetrics",
    "TimestampMetrics",
    "TopNEntry",
    "VariantTag",
]
