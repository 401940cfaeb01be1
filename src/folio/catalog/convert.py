"""Schema-driven conversion of parsed values into declared field kinds.

``convert_value`` never raises for bad data. It returns ``NOT_CONVERTIBLE``
when a value is present but cannot become the declared kind. That is
distinct from ``ABSENT``, which means the value is legitimately missing.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime

from .frontmatter import FALSE_TOKENS, TRUE_TOKENS
from .models import (
    ABSENT,
    Absent,
    Boolean,
    FieldValue,
    Number,
    Structured,
    Text,
    TextList,
    Timestamp,
    display,
)
from .schema import FieldKind, SchemaField


class NotConvertible:
    """Marker for a present value that cannot take the declared kind."""

    _instance: NotConvertible | None = None

    def __new__(cls) -> NotConvertible:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_CONVERTIBLE"


NOT_CONVERTIBLE = NotConvertible()


def parse_datetime(text: str) -> datetime | None:
    """Parse an ISO 8601 date or date-time. Naive results are taken as UTC."""
    text = text.strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def from_epoch_millis(millis: float) -> datetime | None:
    if not math.isfinite(millis):
        return None
    try:
        return datetime.fromtimestamp(millis / 1000, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def to_datetime(value: FieldValue) -> datetime | None:
    """
    Coerce a field value to an aware datetime, or None.

    Accepts a Timestamp, ISO text, or a number of epoch milliseconds. This
    is the single date coercion shared by conversion, filtering, sorting,
    grouping and aggregation, so an unparsable date is treated the same
    way as an absent one everywhere.
    """
    match value:
        case Timestamp(moment):
            return moment
        case Text(text):
            return parse_datetime(text)
        case Number(number):
            return from_epoch_millis(number)
    return None


def _to_text(raw: FieldValue) -> FieldValue | NotConvertible:
    match raw:
        case Text():
            return raw
        case _:
            return Text(display(raw))


def _to_number(raw: FieldValue) -> FieldValue | NotConvertible:
    match raw:
        case Number(number):
            return raw if math.isfinite(number) else NOT_CONVERTIBLE
        case Text(text):
            try:
                number = float(text.strip())
            except ValueError:
                return NOT_CONVERTIBLE
            return Number(number) if math.isfinite(number) else NOT_CONVERTIBLE
    return NOT_CONVERTIBLE


def _to_boolean(raw: FieldValue) -> FieldValue | NotConvertible:
    match raw:
        case Boolean():
            return raw
        case Text(text):
            lowered = text.strip().lower()
            if lowered in TRUE_TOKENS:
                return Boolean(True)
            if lowered in FALSE_TOKENS:
                return Boolean(False)
    return NOT_CONVERTIBLE


def _to_date(raw: FieldValue) -> FieldValue | NotConvertible:
    match raw:
        case Timestamp():
            return raw
        case Text() | Number():
            moment = to_datetime(raw)
            return Timestamp(moment) if moment is not None else NOT_CONVERTIBLE
    return NOT_CONVERTIBLE


def _to_list(raw: FieldValue) -> FieldValue | NotConvertible:
    match raw:
        case TextList(items):
            return TextList(items)
        case Text() | Number() | Boolean() | Timestamp():
            return TextList((display(raw),))
    return NOT_CONVERTIBLE


def _to_structured(raw: FieldValue) -> FieldValue | NotConvertible:
    match raw:
        case Structured():
            return raw
    return NOT_CONVERTIBLE


_CONVERTERS = {
    FieldKind.TEXT: _to_text,
    FieldKind.NUMBER: _to_number,
    FieldKind.BOOLEAN: _to_boolean,
    FieldKind.DATE: _to_date,
    FieldKind.LIST: _to_list,
    FieldKind.STRUCTURED: _to_structured,
}


def convert_value(raw: FieldValue, field: SchemaField) -> FieldValue | NotConvertible:
    """
    Convert a parsed value to the kind *field* declares.

    Args:
        raw: A tagged value, typically from ``parse_block``.
        field: The schema descriptor for the key.

    Returns:
        A value of the declared kind, ``ABSENT`` when *raw* is absent, or
        ``NOT_CONVERTIBLE``.

    Example::

        convert_value(Text("5000"), SchemaField("word-count", kind=FieldKind.NUMBER))
        # Number(5000.0)
    """
    if isinstance(raw, Absent):
        return ABSENT
    return _CONVERTERS[field.kind](raw)
