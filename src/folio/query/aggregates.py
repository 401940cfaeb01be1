"""Aggregates over record collections.

Every aggregate accepts an empty collection and returns its documented
no-data result (``{}``, ``0``, ``0.0`` or ``None``) rather than raising.
Non-numeric values are skipped by numeric aggregates.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from types import MappingProxyType
from typing import Generic, TypeVar

from folio.catalog.config import StatisticsConfig
from folio.catalog.convert import to_datetime
from folio.catalog.models import Absent, FieldValue, Number, Record, Text, TextList, display
from folio.catalog.schema import CatalogSchema
from folio.core.exceptions import QueryError
from folio.core.utils.text import collation_key

from .grouping import group_by_field, group_by_list_field

# Absent values are counted under None, a key no displayed value can take.
ABSENT_KEY = None
ABSENT_LABEL = "(none)"

T = TypeVar("T")


@dataclass(frozen=True)
class Range(Generic[T]):
    """Inclusive low/high pair."""

    low: T
    high: T


class AggregateOp(StrEnum):
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    COUNT = "count"


# ── Counting ─────────────────────────────────────────────────────────


def _count_key(value: FieldValue) -> str | None:
    match value:
        case Absent():
            return ABSENT_KEY
        case _:
            return display(value)


def count_label(key: str | None) -> str:
    """Printable label for a count key: ``ABSENT_LABEL`` for the absent bucket."""
    return ABSENT_LABEL if key is ABSENT_KEY else key


def count_by_field(records: Iterable[Record], key: str) -> dict[str | None, int]:
    """Occurrences of each displayed value of *key*; absent under ``ABSENT_KEY``."""
    counts: dict[str | None, int] = {}
    for record in records:
        bucket = _count_key(record.get(key))
        counts[bucket] = counts.get(bucket, 0) + 1
    return counts


def count_by_list_field(records: Iterable[Record], key: str) -> dict[str, int]:
    """Fan-out counts: one per list element."""
    return {element: len(bucket) for element, bucket in group_by_list_field(records, key).items()}


def count_by_status(records: Iterable[Record], schema: CatalogSchema) -> dict[str | None, int]:
    if not schema.status_field:
        return {}
    return count_by_field(records, schema.status_field)


# ── Numbers and dates ────────────────────────────────────────────────


def _numbers(records: Iterable[Record], key: str) -> list[float]:
    values = []
    for record in records:
        match record.get(key):
            case Number(number):
                values.append(number)
    return values


def sum_field(records: Iterable[Record], key: str) -> float:
    """Sum of numeric values of *key*; 0 when there are none."""
    return float(sum(_numbers(records, key)))


def average_field(records: Iterable[Record], key: str) -> float:
    """Mean over the records that hold a number for *key*; 0.0 when none do."""
    values = _numbers(records, key)
    if not values:
        return 0.0
    return sum(values) / len(values)


def numeric_range(records: Iterable[Record], key: str) -> Range[float] | None:
    values = _numbers(records, key)
    if not values:
        return None
    return Range(min(values), max(values))


def date_range(records: Iterable[Record], key: str) -> Range[datetime] | None:
    """Earliest and latest dates of *key*. Unparsable dates are skipped."""
    moments = [m for m in (to_datetime(r.get(key)) for r in records) if m is not None]
    if not moments:
        return None
    return Range(min(moments), max(moments))


# ── Value summaries ──────────────────────────────────────────────────


def most_common(records: Iterable[Record], key: str) -> FieldValue | None:
    """
    The most frequent value of *key*, absent included.

    Ties go to the value encountered first. ``None`` for no records.
    """
    counts = Counter(record.get(key) for record in records)
    if not counts:
        return None
    # Counter keeps insertion order and max() returns the first maximum
    return max(counts, key=counts.__getitem__)


def unique_values(records: Iterable[Record], key: str) -> list[str]:
    """Distinct present values of *key*, list elements flattened, in collation order."""
    seen: dict[str, None] = {}
    for record in records:
        match record.get(key):
            case Absent():
                continue
            case TextList(items):
                for item in items:
                    seen.setdefault(item, None)
            case Text(text):
                seen.setdefault(text, None)
            case value:
                seen.setdefault(display(value), None)
    return sorted(seen, key=collation_key)


def aggregate_by_field(
    records: Iterable[Record],
    group_key: str,
    value_key: str,
    op: AggregateOp | str,
) -> dict[str | None, float]:
    """
    Group by *group_key* and reduce *value_key* within each group.

    Group keys are displayed values (``ABSENT_KEY`` for absent). ``count``
    counts records; the other ops use numeric values only, and ``min`` /
    ``max`` omit groups without any.

    Raises:
        QueryError: For an unknown op.
    """
    try:
        op = AggregateOp(op)
    except ValueError:
        raise QueryError(f"Unknown aggregate op '{op}'") from None

    result: dict[str | None, float] = {}
    for value, bucket in group_by_field(records, group_key).items():
        name = _count_key(value)
        match op:
            case AggregateOp.COUNT:
                result[name] = float(len(bucket))
            case AggregateOp.SUM:
                result[name] = sum_field(bucket, value_key)
            case AggregateOp.AVG:
                result[name] = average_field(bucket, value_key)
            case AggregateOp.MIN | AggregateOp.MAX:
                span = numeric_range(bucket, value_key)
                if span is not None:
                    result[name] = span.low if op is AggregateOp.MIN else span.high
    return result


# ── Snapshot ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CatalogStatistics:
    """Frozen statistics snapshot for a record collection."""

    count: int = 0
    total: float = 0.0
    average: float = 0.0
    distinct_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    value_range: Range[float] | None = None
    status_counts: Mapping[str | None, int] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> dict:
        """JSON-ready form; the absent status bucket is labeled ``ABSENT_LABEL``."""
        return {
            "count": self.count,
            "total": self.total,
            "average": self.average,
            "distinct_counts": dict(self.distinct_counts),
            "value_range": None if self.value_range is None else [self.value_range.low, self.value_range.high],
            "status_counts": {count_label(key): n for key, n in self.status_counts.items()},
        }


def catalog_statistics(
    records: Iterable[Record],
    schema: CatalogSchema,
    config: StatisticsConfig | None = None,
) -> CatalogStatistics:
    """
    Summarize a collection in one pass over the configured fields.

    Args:
        records: Records to summarize.
        schema: Supplies the status field.
        config: Which fields to total, count distinct values of, and range.

    Example::

        stats = catalog_statistics(records, DEFAULT_SCHEMA)
        stats.distinct_counts["authors"]  # number of distinct authors
    """
    config = config or StatisticsConfig()
    records = list(records)

    total = sum_field(records, config.total_field) if config.total_field else 0.0
    average = average_field(records, config.total_field) if config.total_field else 0.0
    distinct = {key: len(count_by_list_field(records, key)) for key in config.distinct_fields}
    value_range = numeric_range(records, config.range_field) if config.range_field else None

    return CatalogStatistics(
        count=len(records),
        total=total,
        average=average,
        distinct_counts=MappingProxyType(distinct),
        value_range=value_range,
        status_counts=MappingProxyType(count_by_status(records, schema)),
    )


# ── Paging ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    per_page: int
    total_items: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def paginate(items: Sequence[T], page: int = 1, per_page: int = 50) -> Page[T]:
    """
    Slice *items* into a 1-based page.

    *page* is clamped to ``[1, total_pages]``; an empty input is a single
    empty page.

    Raises:
        QueryError: If *per_page* is not positive.
    """
    if per_page < 1:
        raise QueryError(f"per_page must be positive, got {per_page}")
    total_items = len(items)
    total_pages = max(1, -(-total_items // per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return Page(
        items=list(items[start : start + per_page]),
        page=page,
        per_page=per_page,
        total_items=total_items,
        total_pages=total_pages,
    )
