"""Frontmatter catalogs.

Provides the tagged field-value model, schemas, the frontmatter
extractor and parser, schema-driven conversion, the record builder and a
DocumentSource protocol for pluggable backends.
"""

from .builder import (
    build_record,
    build_record_from_text,
    build_records,
    conversion_failures,
    derive_record_id,
    merge_records,
)
from .config import SourceConfig, StatisticsConfig
from .convert import NOT_CONVERTIBLE, NotConvertible, convert_value, to_datetime
from .frontmatter import extract_frontmatter, parse_block, parse_document, split_frontmatter
from .models import (
    ABSENT,
    Absent,
    Boolean,
    FieldValue,
    Number,
    Record,
    Structured,
    Text,
    TextList,
    Timestamp,
    display,
    is_absent,
    unwrap,
    wrap,
)
from .presets import DEFAULT_SCHEMA, MANUSCRIPT_SCHEMA, PRESETS, get_preset
from .schema import CatalogSchema, CoreFields, ElementKind, FieldCategory, FieldKind, SchemaField
from .settings import SchemaSettings
from .store import DirectorySource, DocumentSource, load_catalog

__all__ = [
    "ABSENT",
    "Absent",
    "Boolean",
    "CatalogSchema",
    "CoreFields",
    "DEFAULT_SCHEMA",
    "DirectorySource",
    "DocumentSource",
    "ElementKind",
    "FieldCategory",
    "FieldKind",
    "FieldValue",
    "MANUSCRIPT_SCHEMA",
    "NOT_CONVERTIBLE",
    "NotConvertible",
    "Number",
    "PRESETS",
    "Record",
    "SchemaField",
    "SchemaSettings",
    "SourceConfig",
    "StatisticsConfig",
    "Structured",
    "Text",
    "TextList",
    "Timestamp",
    "build_record",
    "build_record_from_text",
    "build_records",
    "conversion_failures",
    "convert_value",
    "derive_record_id",
    "display",
    "extract_frontmatter",
    "get_preset",
    "is_absent",
    "load_catalog",
    "merge_records",
    "parse_block",
    "parse_document",
    "split_frontmatter",
    "to_datetime",
    "unwrap",
    "wrap",
]
