"""Record filters.

Every filter returns a new list and keeps the input order. Inputs are never
modified. Absent values never match a positive filter.

Filters compose either by chaining (``apply_filters``) or declaratively with
``Clause`` objects, which is what the CLI's ``--where`` flag builds:

    clauses = [Clause("year", FilterOp.RANGE, (1920, 1930)), Clause("authors", FilterOp.INCLUDES, "Lovecraft")]
    hits = filter_compound(records, clauses)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from folio.catalog.convert import to_datetime
from folio.catalog.models import Absent, FieldValue, Number, Record, Text, TextList, display, wrap
from folio.catalog.schema import CatalogSchema
from folio.core.exceptions import QueryError
from folio.core.types import RecordFilter

Predicate = Callable[[Record], bool]


class FilterOp(StrEnum):
    EQUALS = "equals"
    INCLUDES = "includes"
    RANGE = "range"
    DATE_RANGE = "date_range"
    TEXT = "text"


@dataclass(frozen=True)
class Clause:
    """One filter condition.

    ``value`` depends on ``op``: a plain or tagged value for ``equals``,
    a string for ``includes`` and ``text``, a ``(low, high)`` pair for the
    range operations.
    """

    key: str
    op: FilterOp | str
    value: Any = None


# ── Predicates ───────────────────────────────────────────────────────


def _equals(value: FieldValue, expected: FieldValue) -> bool:
    return value == expected


def _includes(value: FieldValue, needle: str) -> bool:
    needle = needle.casefold()
    match value:
        case Absent():
            return False
        case TextList(items):
            return any(item.casefold() == needle for item in items)
        case _:
            return needle in display(value).casefold()


def _in_range(value: FieldValue, low: float, high: float) -> bool:
    match value:
        case Number(number):
            return low <= number <= high
    return False


def _as_datetime(bound: Any) -> datetime | None:
    if isinstance(bound, datetime | date):
        return to_datetime(wrap(bound))
    if isinstance(bound, str):
        return to_datetime(Text(bound))
    return to_datetime(bound)


def _in_date_range(value: FieldValue, start: datetime, end: datetime) -> bool:
    moment = to_datetime(value)
    if moment is None:
        return False
    return start <= moment <= end


def _text_matches(value: FieldValue, needle: str) -> bool:
    match value:
        case Text(text):
            return needle.casefold() in text.casefold()
        case Number():
            return needle.casefold() in display(value).casefold()
    return False


def _range_bounds(value: Any, op: FilterOp) -> tuple[Any, Any]:
    try:
        low, high = value
    except (TypeError, ValueError):
        raise QueryError(f"'{op}' needs a (low, high) pair, got {value!r}") from None
    return low, high


def clause_predicate(clause: Clause) -> Predicate:
    """Build a record predicate for a single clause.

    Raises:
        QueryError: For an unrecognized op or malformed operands.
    """
    try:
        op = FilterOp(clause.op)
    except ValueError:
        raise QueryError(f"Unknown filter op '{clause.op}'") from None

    key = clause.key
    match op:
        case FilterOp.EQUALS:
            expected = wrap(clause.value)
            return lambda record: _equals(record.get(key), expected)
        case FilterOp.INCLUDES:
            needle = str(clause.value)
            return lambda record: _includes(record.get(key), needle)
        case FilterOp.TEXT:
            needle = str(clause.value)
            return lambda record: _text_matches(record.get(key), needle)
        case FilterOp.RANGE:
            low, high = _range_bounds(clause.value, op)
            return lambda record: _in_range(record.get(key), float(low), float(high))
        case FilterOp.DATE_RANGE:
            low, high = _range_bounds(clause.value, op)
            start, end = _as_datetime(low), _as_datetime(high)
            if start is None or end is None:
                raise QueryError(f"Invalid date range {clause.value!r}")
            return lambda record: _in_date_range(record.get(key), start, end)
    raise QueryError(f"Unknown filter op '{clause.op}'")


def compound_predicate(clauses: Iterable[Clause]) -> Predicate:
    """AND of all clauses. An empty clause list matches everything."""
    predicates = [clause_predicate(c) for c in clauses]
    return lambda record: all(p(record) for p in predicates)


def negate(predicate: Predicate) -> Predicate:
    return lambda record: not predicate(record)


# ── Filters ──────────────────────────────────────────────────────────


def filter_where(records: Iterable[Record], predicate: Predicate) -> list[Record]:
    return [r for r in records if predicate(r)]


def exclude_where(records: Iterable[Record], predicate: Predicate) -> list[Record]:
    return [r for r in records if not predicate(r)]


def filter_equals(records: Iterable[Record], key: str, value: Any) -> list[Record]:
    """Records whose *key* equals *value* exactly, tag included.

    ``Text("1928")`` never equals ``Number(1928)``; plain Python values are
    wrapped first, so ``1928`` matches the number.
    """
    return filter_where(records, clause_predicate(Clause(key, FilterOp.EQUALS, value)))


def filter_includes(records: Iterable[Record], key: str, needle: str) -> list[Record]:
    """Case-insensitive membership for lists, substring match for other values."""
    return filter_where(records, clause_predicate(Clause(key, FilterOp.INCLUDES, needle)))


def filter_range(records: Iterable[Record], key: str, low: float, high: float) -> list[Record]:
    """Numeric values within ``[low, high]``. Non-numbers are excluded."""
    return filter_where(records, clause_predicate(Clause(key, FilterOp.RANGE, (low, high))))


def filter_date_range(
    records: Iterable[Record],
    key: str,
    start: datetime | date | str,
    end: datetime | date | str,
) -> list[Record]:
    """Dates within ``[start, end]``.

    Stored values go through ``to_datetime``, so ISO text and epoch
    milliseconds count; unparsable values are excluded like absent ones.
    """
    return filter_where(records, clause_predicate(Clause(key, FilterOp.DATE_RANGE, (start, end))))


def filter_text(records: Iterable[Record], key: str, needle: str) -> list[Record]:
    """Case-insensitive substring search over text and number values."""
    return filter_where(records, clause_predicate(Clause(key, FilterOp.TEXT, needle)))


def filter_compound(records: Iterable[Record], clauses: Iterable[Clause]) -> list[Record]:
    return filter_where(records, compound_predicate(clauses))


def apply_filters(records: Iterable[Record], filters: Sequence[RecordFilter]) -> list[Record]:
    """Run *filters* one after another, each on the previous result."""
    result = list(records)
    for step in filters:
        result = step(result)
    return result


def filter_by_status(records: Iterable[Record], status: str, schema: CatalogSchema) -> list[Record]:
    """Records whose status field equals *status*. ``[]`` without a status field."""
    if not schema.status_field:
        return []
    return filter_equals(records, schema.status_field, Text(status))


def has_value(key: str) -> Predicate:
    """Predicate true when *key* holds a present value."""
    return lambda record: record.has(key)