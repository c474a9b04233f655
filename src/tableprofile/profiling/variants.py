"""Type-specific column profiles.

A :class:`ColumnProfileVariant` pairs the common :class:`AccumulationState` with
the extra accumulator for its declared type family:

- numeric: min, max, sum, running mean and squared deviations (variance, stddev)
- string: length range, average length, shortest/longest value, empty strings
- boolean: true and false counts
- timestamp: earliest and latest value (dates included)
- generic: no extras

Extras never raise on bad input. Values that cannot be read as the expected
type are tallied as parse failures, left out of the extras, and still counted
in the common totals.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Hashable, Iterable
from datetime import date, datetime
from typing import Any, ClassVar

from tableprofile.exceptions import SchemaMismatchError
from tableprofile.models.config import DEFAULT_DECIMAL_DIGITS, ProfilerConfig
from tableprofile.models.profile import (
    BooleanMetrics,
    ColumnDescriptor,
    ColumnProfileRecord,
    NumericMetrics,
    StringMetrics,
    TimestampMetrics,
    VariantTag,
)
from tableprofile.output.writer import OutputWriter, profile_to_rows
from tableprofile.profiling.accumulation import AccumulationState, percentage
from tableprofile.profiling.topn import timestamp_key
from tableprofile.type_mappings import map_to_variant_tag

logger = logging.getLogger(__name__)


def _pairwise(func, left, right):
    if left is None:
        return right
    if right is None:
        return left
    return func(left, right)


# ---------------------------------------------------------------------------
# Numeric
# ---------------------------------------------------------------------------


def parse_number(value: Any) -> float | None:
    """Return value as a finite float, or None if it cannot be read as one."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


class NumericExtras:
    """Running min, max, sum, mean and squared deviations over parsed values.

    Mean and squared deviations from the mean are merged with the pairwise
    update of Chan et al.; single observations merge in as one-value partials.
    """

    tag: ClassVar[VariantTag] = VariantTag.NUMERIC

    def __init__(self) -> None:
        self.min: float | None = None
        self.max: float | None = None
        self.sum = 0.0
        self.count = 0
        self.mean = 0.0
        self.m2 = 0.0
        self.parse_failures = 0

    def accommodate(self, value: Any, count: int) -> None:
        if value is None or count == 0:
            return
        number = parse_number(value)
        if number is None:
            self.parse_failures += count
            logger.debug(f"Numeric parse failure for {value!r} ({count} occurrences)")
            return
        self.sum += number * count
        self._merge_moments(count, number, 0.0)
        self.min = _pairwise(min, self.min, number)
        self.max = _pairwise(max, self.max, number)

    def _merge_moments(self, count: int, mean: float, m2: float) -> None:
        if count == 0:
            return
        if self.count == 0:
            self.count, self.mean, self.m2 = count, mean, m2
            return
        total = self.count + count
        delta = mean - self.mean
        self.m2 += m2 + (delta * (self.count / total)) * (delta * count)
        self.mean += delta * (count / total)
        self.count = total

    def combine(self, other: NumericExtras) -> NumericExtras:
        self.sum += other.sum
        self._merge_moments(other.count, other.mean, other.m2)
        self.parse_failures += other.parse_failures
        self.min = _pairwise(min, self.min, other.min)
        self.max = _pairwise(max, self.max, other.max)
        return self

    def metrics(self, state: AccumulationState) -> NumericMetrics:
        if self.count > 0:
            mean = self.mean
            variance = self.m2 / self.count
            # overflowed deviations report an infinite variance
            variance = max(variance, 0.0) if math.isfinite(variance) else math.inf
        else:
            mean = 0.0
            variance = 0.0
        return NumericMetrics(
            min=self.min,
            max=self.max,
            sum=self.sum,
            mean=mean,
            variance=variance,
            stddev=math.sqrt(variance),
            parse_failures=self.parse_failures,
        )


# ---------------------------------------------------------------------------
# String
# ---------------------------------------------------------------------------


class StringExtras:
    """Length statistics, extreme values and empty-string count."""

    tag: ClassVar[VariantTag] = VariantTag.STRING

    def __init__(self) -> None:
        self.min_length: int | None = None
        self.max_length: int | None = None
        self.total_length = 0
        self.non_null_count = 0
        self.empty_count = 0
        self.shortest: str | None = None
        self.longest: str | None = None

    def accommodate(self, value: Any, count: int) -> None:
        if value is None or count == 0:
            return
        text = value if isinstance(value, str) else str(value)
        length = len(text)
        self.total_length += length * count
        self.non_null_count += count
        if length == 0:
            self.empty_count += count
        self._observe(text)

    def _observe(self, text: str) -> None:
        length = len(text)
        self.min_length = _pairwise(min, self.min_length, length)
        self.max_length = _pairwise(max, self.max_length, length)
        # Equal lengths resolve to the lexicographically smaller string
        if self.shortest is None or (length, text) < (len(self.shortest), self.shortest):
            self.shortest = text
        if self.longest is None or (-length, text) < (-len(self.longest), self.longest):
            self.longest = text

    def combine(self, other: StringExtras) -> StringExtras:
        self.total_length += other.total_length
        self.non_null_count += other.non_null_count
        self.empty_count += other.empty_count
        for text in (other.shortest, other.longest):
            if text is not None:
                self._observe(text)
        return self

    def metrics(self, state: AccumulationState) -> StringMetrics:
        avg_length = self.total_length / self.non_null_count if self.non_null_count else 0.0
        return StringMetrics(
            min_length=self.min_length,
            max_length=self.max_length,
            avg_length=avg_length,
            shortest=self.shortest,
            longest=self.longest,
            empty_count=self.empty_count,
            perc_empty=percentage(self.empty_count, state.total_count),
        )


# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------

_TRUE_STRINGS = frozenset({"true", "t", "yes", "y", "1"})
_FALSE_STRINGS = frozenset({"false", "f", "no", "n", "0"})


def parse_boolean(value: Any) -> bool | None:
    """Return value as a bool, or None if it cannot be read as one."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


class BooleanExtras:
    """True and false counts."""

    tag: ClassVar[VariantTag] = VariantTag.BOOLEAN

    def __init__(self) -> None:
        self.true_count = 0
        self.false_count = 0
        self.parse_failures = 0

    def accommodate(self, value: Any, count: int) -> None:
        if value is None or count == 0:
            return
        flag = parse_boolean(value)
        if flag is None:
            self.parse_failures += count
            logger.debug(f"Boolean parse failure for {value!r} ({count} occurrences)")
        elif flag:
            self.true_count += count
        else:
            self.false_count += count

    def combine(self, other: BooleanExtras) -> BooleanExtras:
        self.true_count += other.true_count
        self.false_count += other.false_count
        self.parse_failures += other.parse_failures
        return self

    def metrics(self, state: AccumulationState) -> BooleanMetrics:
        return BooleanMetrics(
            true_count=self.true_count,
            false_count=self.false_count,
            parse_failures=self.parse_failures,
        )


# ---------------------------------------------------------------------------
# Timestamp
# ---------------------------------------------------------------------------


def parse_timestamp(value: Any) -> datetime | date | None:
    """Return value as a datetime or date, or None if it cannot be read as one."""
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


class TimestampExtras:
    """Earliest and latest timestamp."""

    tag: ClassVar[VariantTag] = VariantTag.TIMESTAMP

    def __init__(self) -> None:
        self.min: datetime | date | None = None
        self.max: datetime | date | None = None
        self.parse_failures = 0

    def accommodate(self, value: Any, count: int) -> None:
        if value is None or count == 0:
            return
        moment = parse_timestamp(value)
        if moment is None:
            self.parse_failures += count
            logger.debug(f"Timestamp parse failure for {value!r} ({count} occurrences)")
            return
        self._observe(moment)

    def _observe(self, moment: datetime | date) -> None:
        if self.min is None or timestamp_key(moment) < timestamp_key(self.min):
            self.min = moment
        if self.max is None or timestamp_key(moment) > timestamp_key(self.max):
            self.max = moment

    def combine(self, other: TimestampExtras) -> TimestampExtras:
        self.parse_failures += other.parse_failures
        for moment in (other.min, other.max):
            if moment is not None:
                self._observe(moment)
        return self

    def metrics(self, state: AccumulationState) -> TimestampMetrics:
        return TimestampMetrics(
            min=self.min, max=self.max, parse_failures=self.parse_failures
        )


EXTRAS_BY_TAG: dict[VariantTag, type] = {
    VariantTag.NUMERIC: NumericExtras,
    VariantTag.STRING: StringExtras,
    VariantTag.BOOLEAN: BooleanExtras,
    VariantTag.TIMESTAMP: TimestampExtras,
}


# ---------------------------------------------------------------------------
# Variant
# ---------------------------------------------------------------------------


class ColumnProfileVariant:
    """Common column statistics plus the extras of the column's type family.

    The variant tag is resolved from the descriptor's declared type when the
    variant is created and never changes.
    """

    def __init__(self, descriptor: ColumnDescriptor, top_n_capacity: int) -> None:
        self.tag = map_to_variant_tag(descriptor.data_type)
        self.state = AccumulationState(descriptor, top_n_capacity)
        extras_cls = EXTRAS_BY_TAG.get(self.tag)
        self.extras = extras_cls() if extras_cls is not None else None

    @property
    def descriptor(self) -> ColumnDescriptor:
        return self.state.descriptor

    @property
    def column_name(self) -> str:
        return self.state.column_name

    @property
    def is_exported(self) -> bool:
        return self.state.is_exported

    def accommodate(self, value: Hashable, count: int) -> None:
        """Fold ``count`` occurrences of ``value`` into common and type statistics.

        Raises
        ------
            FrozenStateError: If the variant was already exported
            InvalidArgumentError: If count is negative or not an integer

        """
        self.state.accommodate(value, count)
        if self.extras is not None:
            self.extras.accommodate(value, int(count))

    def combine(self, other: ColumnProfileVariant) -> ColumnProfileVariant:
        """Merge ``other`` into this variant and return this variant.

        Raises
        ------
            SchemaMismatchError: If the variants have different tags or columns
            FrozenStateError: If either variant was already exported
            InvalidArgumentError: If ``other`` is this very variant

        """
        if not isinstance(other, ColumnProfileVariant) or other.tag is not self.tag:
            other_tag = getattr(other, "tag", type(other).__name__)
            msg = (
                f"Cannot combine {self.tag.value} profile of column "
                f"'{self.column_name}' with {other_tag} profile"
            )
            raise SchemaMismatchError(msg, self.tag, other_tag)
        self.state.check_combinable(other.state)

        self.state.combine(other.state)
        if self.extras is not None:
            self.extras.combine(other.extras)
        return self

    def to_record(self) -> ColumnProfileRecord:
        extras = self.extras.metrics(self.state) if self.extras is not None else None
        return self.state.to_record(variant=self.tag, extras=extras)

    def export(
        self,
        writer: OutputWriter | None = None,
        decimal_digits: int = DEFAULT_DECIMAL_DIGITS,
    ) -> ColumnProfileRecord:
        """Freeze the variant and return its read-only profile record.

        Args:
        ----
            writer: Optional output writer that receives the record's metric rows
            decimal_digits: Decimal digits used when formatting metric rows

        """
        self.state.freeze()
        record = self.to_record()
        if writer is not None:
            writer.add_rows(profile_to_rows(record, decimal_digits))
        logger.info(
            f"Exported {self.tag.value} profile for column '{self.column_name}' "
            f"({record.total_count} values)"
        )
        return record

    def __repr__(self) -> str:
        return f"ColumnProfileVariant(tag={self.tag.value!r}, state={self.state!r})"


def create_variant(
    descriptor: ColumnDescriptor, config: ProfilerConfig | None = None
) -> ColumnProfileVariant:
    """Create an empty variant for ``descriptor`` using ``config`` tunables."""
    config = config or ProfilerConfig()
    return ColumnProfileVariant(descriptor, config.top_n_capacity)


def create_variants(
    descriptors: Iterable[ColumnDescriptor], config: ProfilerConfig | None = None
) -> dict[str, ColumnProfileVariant]:
    """Create one empty variant per descriptor, keyed by column name."""
    config = config or ProfilerConfig()
    return {
        descriptor.name: ColumnProfileVariant(descriptor, config.top_n_capacity)
        for descriptor in descriptors
    }


__all__ = [
    "EXTRAS_BY_TAG",
    "BooleanExtras",
    "ColumnProfileVariant",
    "NumericExtras",
    "StringExtras",
    "TimestampExtras",
    "create_variant",
    "create_variants",
    "parse_boolean",
    "parse_number",
    "parse_timestamp",
]
