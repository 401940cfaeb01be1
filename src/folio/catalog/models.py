"""Core data models for frontmatter catalogs.

Field values are a closed set of frozen, hashable tags. A record stores an
open string-keyed mapping of those tags; every consumer matches on the tag
rather than guessing at a loose Python type.

    Text("The Call")        Number(1928.0)        Boolean(True)
    Timestamp(datetime)     TextList(("a", "b"))  Structured({...})
    ABSENT                  (explicit "no value"; never-set keys read as ABSENT)
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time
from types import MappingProxyType
from typing import Any

# ── Field values ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Timestamp:
    """A point in time. Naive datetimes are taken as UTC."""

    value: datetime

    def __post_init__(self):
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=UTC))


@dataclass(frozen=True)
class TextList:
    value: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "value", tuple(self.value))

    def __len__(self) -> int:
        return len(self.value)

    def __iter__(self):
        return iter(self.value)


@dataclass(frozen=True, eq=False)
class Structured:
    """An opaque nested object. Stored read-only, never interpreted."""

    value: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "value", MappingProxyType(dict(self.value)))

    def _canonical(self) -> str:
        return json.dumps(dict(self.value), sort_keys=True, default=str)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Structured):
            return NotImplemented
        return self._canonical() == other._canonical()

    def __hash__(self) -> int:
        return hash(self._canonical())


class Absent:
    """The explicit absence marker. Use the ``ABSENT`` singleton."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self):
        return (Absent, ())


ABSENT = Absent()

FieldValue = Text | Number | Boolean | Timestamp | TextList | Structured | Absent


def is_absent(value: FieldValue) -> bool:
    return value is ABSENT


def wrap(value: Any) -> FieldValue:
    """Turn a plain Python value into a tagged field value.

    Tagged values pass through unchanged. ``bool`` is checked before
    ``int`` since it is a subclass.

    Raises:
        TypeError: For values outside the supported set.
    """
    match value:
        case Text() | Number() | Boolean() | Timestamp() | TextList() | Structured() | Absent():
            return value
        case None:
            return ABSENT
        case bool():
            return Boolean(value)
        case int() | float():
            return Number(value)
        case str():
            return Text(value)
        case datetime():
            return Timestamp(value)
        case date():
            return Timestamp(datetime.combine(value, time.min))
        case Mapping():
            return Structured(value)
        case Sequence():
            return TextList(tuple(str(item) for item in value))
    raise TypeError(f"Cannot use {type(value).__name__} as a field value")


def unwrap(value: FieldValue) -> Any:
    """Return the plain Python payload (``None`` for absent, ``list`` for lists)."""
    match value:
        case Absent():
            return None
        case TextList(items):
            return list(items)
        case Structured(mapping):
            return dict(mapping)
        case Text(v) | Number(v) | Boolean(v) | Timestamp(v):
            return v
    raise TypeError(f"Not a field value: {value!r}")


def format_number(number: float) -> str:
    """Render integral floats without a trailing ``.0``."""
    if math.isfinite(number) and number == int(number):
        return str(int(number))
    return repr(number)


def display(value: FieldValue) -> str:
    """Stable string rendering of a field value."""
    match value:
        case Absent():
            return ""
        case Text(text):
            return text
        case Number(number):
            return format_number(number)
        case Boolean(flag):
            return "true" if flag else "false"
        case Timestamp(moment):
            return moment.isoformat()
        case TextList(items):
            return ", ".join(items)
        case Structured():
            return value._canonical()
    raise TypeError(f"Not a field value: {value!r}")


# ── Records ──────────────────────────────────────────────────────────


class Record:
    """A single catalogued document.

    Attributes:
        id: Stable identifier, fixed at construction.
        provenance: Where the document came from (usually a path). Only
            ever used as a fallback value, never interpreted.

    Fields are read with ``get`` (``ABSENT`` when never set) and updated
    with ``set``. Query primitives never call ``set``.
    """

    __slots__ = ("_id", "_provenance", "_fields")

    def __init__(self, id: str, provenance: str, fields: Mapping[str, Any] | None = None) -> None:
        self._id = id
        self._provenance = provenance
        self._fields: dict[str, FieldValue] = {}
        for key, value in (fields or {}).items():
            self.set(key, value)

    @property
    def id(self) -> str:
        return self._id

    @property
    def provenance(self) -> str:
        return self._provenance

    @property
    def fields(self) -> Mapping[str, FieldValue]:
        """Read-only view of the stored fields."""
        return MappingProxyType(self._fields)

    def get(self, key: str) -> FieldValue:
        return self._fields.get(key, ABSENT)

    def has(self, key: str) -> bool:
        """True when *key* holds a value other than ``ABSENT``."""
        return self.get(key) is not ABSENT

    def set(self, key: str, value: Any) -> None:
        self._fields[key] = wrap(value)

    def clone(self) -> Record:
        return Record(self._id, self._provenance, self._fields)

    def to_dict(self) -> dict[str, Any]:
        """Plain-Python snapshot including ``id`` and ``provenance``."""
        data: dict[str, Any] = {"id": self._id, "provenance": self._provenance}
        for key, value in self._fields.items():
            data[key] = unwrap(value)
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return (self._id, self._provenance, self._fields) == (other._id, other._provenance, other._fields)

    __hash__ = None  # mutable via set()

    def __repr__(self) -> str:
        return f"Record(id='{self._id}', provenance='{self._provenance}', fields={len(self._fields)})"
