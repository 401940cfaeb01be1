"""Record sorting.

Sorts are stable and return new lists. Values are compared under a
*comparison kind*: the explicit ``kind`` argument, else the kind the schema
declares for the key. An undeclared key takes the kind of its values when
they all share one tag (numbers, dates or booleans), else text.

Absent values, and values that cannot be compared under the kind (an
unparsable date, text under a numeric sort), always come after every
comparable value and keep their input order, whichever direction the sort
runs in.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from folio.catalog.convert import to_datetime
from folio.catalog.models import Absent, Boolean, FieldValue, Number, Record, Text, Timestamp, display
from folio.catalog.schema import CatalogSchema, FieldKind
from folio.core.exceptions import QueryError
from folio.core.utils.text import collation_key


@dataclass(frozen=True)
class SortSpec:
    """One sort criterion for ``sort_by_multiple``."""

    key: str
    descending: bool = False
    kind: FieldKind | str | None = None


_TAG_KINDS: dict[type, FieldKind] = {
    Number: FieldKind.NUMBER,
    Timestamp: FieldKind.DATE,
    Boolean: FieldKind.BOOLEAN,
}


def _infer_kind(values: Iterable[FieldValue]) -> FieldKind:
    tags = {type(value) for value in values if not isinstance(value, Absent)}
    if len(tags) == 1:
        return _TAG_KINDS.get(tags.pop(), FieldKind.TEXT)
    return FieldKind.TEXT


def _resolve_kind(
    key: str,
    schema: CatalogSchema | None,
    kind: FieldKind | str | None,
    records: Sequence[Record],
) -> FieldKind:
    if kind is not None:
        try:
            return FieldKind(kind)
        except ValueError:
            raise QueryError(f"Unknown sort kind '{kind}'") from None
    if schema is not None:
        declared = schema.kind_of(key)
        if declared is not None:
            return declared
    return _infer_kind(record.get(key) for record in records)


def _number_key(value: FieldValue) -> float | None:
    match value:
        case Number(number):
            return number
    return None


def _boolean_key(value: FieldValue) -> bool | None:
    match value:
        case Boolean(flag):
            return flag
    return None


def _text_key(value: FieldValue) -> str | None:
    match value:
        case Absent():
            return None
        case Text(text):
            return collation_key(text)
        case _:
            return collation_key(display(value))


def _date_key(value: FieldValue) -> float | None:
    moment = to_datetime(value)
    return moment.timestamp() if moment is not None else None


_KEY_FUNCTIONS: dict[FieldKind, Callable[[FieldValue], Any]] = {
    FieldKind.NUMBER: _number_key,
    FieldKind.DATE: _date_key,
    FieldKind.BOOLEAN: _boolean_key,
    FieldKind.TEXT: _text_key,
    FieldKind.LIST: _text_key,
    FieldKind.STRUCTURED: _text_key,
}


def comparison_key(value: FieldValue, kind: FieldKind) -> Any:
    """Sort key for *value* under *kind*, or None when it is not comparable."""
    return _KEY_FUNCTIONS[kind](value)


def sort_by_field(
    records: Iterable[Record],
    key: str,
    *,
    descending: bool = False,
    schema: CatalogSchema | None = None,
    kind: FieldKind | str | None = None,
) -> list[Record]:
    """
    Sort records by one field.

    Args:
        records: Records to sort (not modified).
        key: Field to sort by.
        descending: Reverse the order of comparable values.
        schema: Used to look up the comparison kind for *key*; without a
            declaration the kind is inferred from the values.
        kind: Explicit comparison kind; overrides the schema.

    Returns:
        A new list: comparable values in order, then the rest in input order.

    Raises:
        QueryError: If *kind* is not a known field kind.
    """
    records = list(records)
    resolved = _resolve_kind(key, schema, kind, records)
    comparable: list[tuple[Any, Record]] = []
    trailing: list[Record] = []

    for record in records:
        sort_key = comparison_key(record.get(key), resolved)
        if sort_key is None:
            trailing.append(record)
        else:
            comparable.append((sort_key, record))

    # reverse=True keeps equal keys in input order
    comparable.sort(key=lambda pair: pair[0], reverse=descending)
    return [record for _, record in comparable] + trailing


def sort_by_multiple(
    records: Iterable[Record],
    specs: Sequence[SortSpec],
    schema: CatalogSchema | None = None,
) -> list[Record]:
    """Sort by several fields; the first spec has the highest precedence."""
    result = list(records)
    for spec in reversed(specs):
        result = sort_by_field(result, spec.key, descending=spec.descending, schema=schema, kind=spec.kind)
    return result


def parse_sort_spec(text: str) -> SortSpec:
    """Parse ``key`` or ``key:desc`` / ``key:asc`` as used on the command line."""
    key, _, direction = text.partition(":")
    key = key.strip()
    direction = direction.strip().lower()
    if not key:
        raise QueryError(f"Invalid sort '{text}'")
    if direction not in ("", "asc", "desc"):
        raise QueryError(f"Invalid sort direction '{direction}' in '{text}'")
    return SortSpec(key=key, descending=direction == "desc")
