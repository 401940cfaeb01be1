"""Record grouping.

Two families of grouping:

- **Partition** (``group_by_field``, ``group_by_year``, ``group_by_status``,
  ``group_by_month``, ``group_by_custom``): every record lands in exactly
  one bucket, absent values included.
- **Fan-out** (``group_by_list_field``): a record appears once per list
  element, so the bucket sizes add up to the total number of elements.

Buckets are plain dicts. Unless a function documents another order, keys
appear in the order they were first seen.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import TypeVar

from folio.catalog.convert import to_datetime
from folio.catalog.models import ABSENT, Absent, FieldValue, Number, Record, Text, TextList, display
from folio.catalog.schema import CatalogSchema, FieldKind
from folio.core.exceptions import SchemaError
from folio.core.utils.text import collation_key

K = TypeVar("K", bound=Hashable)


def group_by_custom(records: Iterable[Record], key_fn: Callable[[Record], K]) -> dict[K, list[Record]]:
    """Partition records by the value *key_fn* returns for each."""
    groups: dict[K, list[Record]] = {}
    for record in records:
        groups.setdefault(key_fn(record), []).append(record)
    return groups


def group_by_field(records: Iterable[Record], key: str) -> dict[FieldValue, list[Record]]:
    """Partition records by the value of *key*. Absent values share the ``ABSENT`` bucket."""
    return group_by_custom(records, lambda record: record.get(key))


def _list_elements(value: FieldValue) -> tuple[str, ...]:
    match value:
        case TextList(items):
            return items
        case Absent():
            return ()
        case Text(text):
            return (text,)
        case _:
            return (display(value),)


def group_by_list_field(
    records: Iterable[Record],
    key: str,
    schema: CatalogSchema | None = None,
) -> dict[str, list[Record]]:
    """
    Fan records out by the elements of a list field.

    A record with ``authors: [A, B]`` appears under both ``A`` and ``B``.
    Repeated elements give repeated memberships. Absent values and empty
    lists contribute to no bucket; a lone scalar counts as a one-element
    list.

    Raises:
        SchemaError: If *schema* declares *key* with a non-list kind.
    """
    if schema is not None:
        declared = schema.kind_of(key)
        if declared is not None and declared is not FieldKind.LIST:
            raise SchemaError(f"Cannot fan out over '{key}': declared as {declared.value}, not list")

    groups: dict[str, list[Record]] = {}
    for record in records:
        for element in _list_elements(record.get(key)):
            groups.setdefault(element, []).append(record)
    return groups


def group_by_year(records: Iterable[Record], key: str = "year") -> dict[FieldValue, list[Record]]:
    """
    Partition by a year field, newest year first.

    Numeric keys come first in descending order, then any other present
    values in first-seen order, then the ``ABSENT`` bucket.
    """
    groups = group_by_field(records, key)
    numeric = sorted((k for k in groups if isinstance(k, Number)), key=lambda k: k.value, reverse=True)
    other = [k for k in groups if not isinstance(k, Number) and k is not ABSENT]
    ordered = numeric + other
    if ABSENT in groups:
        ordered.append(ABSENT)
    return {k: groups[k] for k in ordered}


def group_by_status(records: Iterable[Record], schema: CatalogSchema) -> dict[FieldValue, list[Record]]:
    """
    Partition by the schema's status field.

    Buckets are ordered by case-folded label, ``ABSENT`` last. Returns
    ``{}`` when the schema has no status field.
    """
    if not schema.status_field:
        return {}
    groups = group_by_field(records, schema.status_field)
    present = sorted((k for k in groups if k is not ABSENT), key=lambda k: collation_key(display(k)))
    if ABSENT in groups:
        present.append(ABSENT)
    return {k: groups[k] for k in present}


def _month_key(value: FieldValue) -> str | None:
    moment = to_datetime(value)
    if moment is None:
        return None
    return f"{moment.year:04d}-{moment.month:02d}"


def group_by_month(records: Iterable[Record], key: str) -> dict[str | None, list[Record]]:
    """
    Partition by the ``YYYY-MM`` of a date field, newest month first.

    Absent and unparsable dates share the ``None`` bucket, which comes last.
    """
    groups = group_by_custom(records, lambda record: _month_key(record.get(key)))
    ordered: list[str | None] = sorted((k for k in groups if k is not None), reverse=True)
    if None in groups:
        ordered.append(None)
    return {k: groups[k] for k in ordered}


def flatten_groups(groups: Mapping[K, list[Record]]) -> list[Record]:
    """Concatenate buckets in key order.

    For a partition this is a permutation of the input; after a fan-out a
    record may appear more than once.
    """
    flat: list[Record] = []
    for bucket in groups.values():
        flat.extend(bucket)
    return flat


def group_keys(groups: Mapping[K, list[Record]], descending: bool = False) -> list[K]:
    """Group keys in bucket order, or reversed."""
    keys = list(groups)
    return keys[::-1] if descending else keys
