"""Catalog schema: field descriptors and core field roles.

A schema is advisory for typing. Records may carry keys it does not
declare; those are stored exactly as parsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from folio.core.exceptions import SchemaError


class FieldKind(StrEnum):
    """Declared kind of a schema field."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    LIST = "list"
    STRUCTURED = "structured"  # nested object, stored but never interpreted


class ElementKind(StrEnum):
    """Element kind for list fields."""

    TEXT = "text"
    LINK = "link"  # [[wiki-style]] references, kept verbatim


class FieldCategory(StrEnum):
    """Category tag used to organize fields."""

    METADATA = "metadata"
    STATUS = "status"
    WORKFLOW = "workflow"
    CONTENT = "content"
    CUSTOM = "custom"


@dataclass(frozen=True)
class SchemaField:
    """Descriptor for one field.

    Attributes:
        key: Frontmatter key, unique within a schema.
        label: Display label.
        kind: Declared kind; drives conversion and comparison.
        category: Organizational tag.
        visible: Shown by default.
        filterable: Usable in filters.
        sortable: Usable in sorts.
        sort_order: Precedence in field listings (lower first).
        element_kind: Element kind, list fields only.
        description: Free text for settings screens.
    """

    key: str
    label: str = ""
    kind: FieldKind = FieldKind.TEXT
    category: FieldCategory = FieldCategory.METADATA
    visible: bool = True
    filterable: bool = True
    sortable: bool = True
    sort_order: int = 0
    element_kind: ElementKind | None = None
    description: str | None = None

    def __post_init__(self):
        if not self.key or not self.key.strip():
            raise SchemaError("Field key cannot be empty")
        object.__setattr__(self, "kind", FieldKind(self.kind))
        object.__setattr__(self, "category", FieldCategory(self.category))
        if not self.label:
            object.__setattr__(self, "label", self.key)
        if self.element_kind is not None:
            if self.kind is not FieldKind.LIST:
                raise SchemaError(f"Field '{self.key}' declares an element kind but is not a list field")
            object.__setattr__(self, "element_kind", ElementKind(self.element_kind))

    @property
    def is_list(self) -> bool:
        return self.kind is FieldKind.LIST


@dataclass(frozen=True)
class CoreFields:
    """Which fields play the title, identifier and status roles."""

    title_field: str = "title"
    id_field: str | None = None
    status_field: str | None = None


@dataclass(frozen=True)
class CatalogSchema:
    """Ordered field descriptors plus core field roles."""

    name: str
    fields: tuple[SchemaField, ...] = ()
    core: CoreFields = CoreFields()

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))
        seen: set[str] = set()
        for schema_field in self.fields:
            if schema_field.key in seen:
                raise SchemaError(f"Duplicate field key '{schema_field.key}' in schema '{self.name}'")
            seen.add(schema_field.key)

    @property
    def title_field(self) -> str:
        return self.core.title_field

    @property
    def id_field(self) -> str | None:
        return self.core.id_field

    @property
    def status_field(self) -> str | None:
        return self.core.status_field

    def field(self, key: str) -> SchemaField | None:
        """Descriptor for *key*, or None if the schema does not declare it."""
        for schema_field in self.fields:
            if schema_field.key == key:
                return schema_field
        return None

    def kind_of(self, key: str) -> FieldKind | None:
        schema_field = self.field(key)
        return schema_field.kind if schema_field else None

    def keys(self) -> list[str]:
        return [f.key for f in self.fields]

    def visible_fields(self) -> list[SchemaField]:
        return [f for f in self.fields if f.visible]

    def filterable_fields(self) -> list[SchemaField]:
        return [f for f in self.fields if f.filterable]

    def sortable_fields(self) -> list[SchemaField]:
        """Sortable fields ordered by ``sort_order`` (ties keep schema order)."""
        return sorted((f for f in self.fields if f.sortable), key=lambda f: f.sort_order)

    def fields_by_category(self, category: FieldCategory | str) -> list[SchemaField]:
        category = FieldCategory(category)
        return [f for f in self.fields if f.category is category]
