"""
Record builder.

Turns parsed frontmatter into Records using a CatalogSchema:

    document text -> parse_document() -> raw fields -> build_record() -> Record

Declared fields are converted to their kind; undeclared fields are kept as
parsed so documents can carry ad hoc metadata. Building is deterministic:
the same raw fields, schema and provenance always produce an equal record.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from loguru import logger

from folio.core.utils.text import slugify

from .convert import NOT_CONVERTIBLE, convert_value
from .frontmatter import parse_document
from .models import ABSENT, FieldValue, Record, Text, display
from .schema import CatalogSchema


def derive_record_id(raw: Mapping[str, FieldValue], schema: CatalogSchema, provenance: str) -> str:
    """
    Derive a stable identifier for a document.

    Uses the schema's id field when the document has a value for it, else
    the title field, else the provenance string, and slugs the result.
    """
    candidates = [schema.id_field, schema.title_field]
    for key in candidates:
        if not key:
            continue
        text = display(raw.get(key, ABSENT)).strip()
        if text:
            return slugify(text)
    return slugify(provenance)


def _title_missing(value: FieldValue) -> bool:
    return not display(value).strip()


def build_record(raw: Mapping[str, FieldValue], schema: CatalogSchema, provenance: str) -> Record:
    """
    Build a Record from parsed fields.

    Args:
        raw: Parsed frontmatter (see ``parse_document``).
        schema: Schema declaring field kinds and core roles.
        provenance: Origin of the document, e.g. a vault-relative path.

    Returns:
        A Record whose declared fields hold their declared kind, with a
        title guaranteed (falls back to the provenance string). Values that
        cannot be converted are stored as ABSENT and logged.
    """
    record = Record(derive_record_id(raw, schema, provenance), provenance)

    for key, value in raw.items():
        field = schema.field(key)
        if field is None:
            record.set(key, value)
            continue

        converted = convert_value(value, field)
        if converted is NOT_CONVERTIBLE:
            logger.warning(f"{provenance}: field '{key}' is not a valid {field.kind.value}: {display(value)!r}")
            record.set(key, ABSENT)
        else:
            record.set(key, converted)

    if _title_missing(record.get(schema.title_field)):
        record.set(schema.title_field, Text(provenance))

    return record


def build_record_from_text(text: str, provenance: str, schema: CatalogSchema) -> Record:
    """Parse a document's frontmatter and build its Record in one step."""
    return build_record(parse_document(text), schema, provenance)


def build_records(documents: Iterable[tuple[str, str]], schema: CatalogSchema) -> list[Record]:
    """
    Build Records for a batch of ``(provenance, text)`` pairs.

    Identifiers are kept unique within the batch: a later document whose id
    collides with an earlier one gets ``-2``, ``-3``, ... appended.
    """
    records: list[Record] = []
    seen: set[str] = set()

    for provenance, text in documents:
        record = build_record_from_text(text, provenance, schema)
        record_id = record.id
        suffix = 2
        while record_id in seen:
            record_id = f"{record.id}-{suffix}"
            suffix += 1
        if record_id != record.id:
            logger.warning(f"{provenance}: id '{record.id}' already used, assigned '{record_id}'")
            record = Record(record_id, record.provenance, record.fields)
        seen.add(record_id)
        records.append(record)

    return records


def conversion_failures(raw: Mapping[str, FieldValue], schema: CatalogSchema) -> list[str]:
    """Keys of declared fields whose raw values are not convertible."""
    failures = []
    for key, value in raw.items():
        field = schema.field(key)
        if field is not None and convert_value(value, field) is NOT_CONVERTIBLE:
            failures.append(key)
    return failures


def merge_records(*records: Record) -> Record | None:
    """
    Merge records field by field.

    Starts from a copy of the first record (keeping its id and provenance);
    each later record's present values override. The inputs are not
    modified.
    """
    if not records:
        return None

    merged = records[0].clone()
    for record in records[1:]:
        for key, value in record.fields.items():
            if value is not ABSENT:
                merged.set(key, value)
    return merged
