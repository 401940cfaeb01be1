"""Ready-made schemas.

``DEFAULT_SCHEMA`` describes a library of short fiction (works with
authors, publications, a cataloging status and reading dates).
``MANUSCRIPT_SCHEMA`` tracks a writer's own manuscripts through querying
and submission. Consumers copy and adapt these rather than editing them.
"""

from __future__ import annotations

from .schema import CatalogSchema, CoreFields, ElementKind, FieldCategory, FieldKind, SchemaField

_W = FieldCategory.WORKFLOW


def _f(key: str, label: str, kind: FieldKind, order: int, **kwargs) -> SchemaField:
    return SchemaField(key=key, label=label, kind=kind, sort_order=order, **kwargs)


DEFAULT_SCHEMA = CatalogSchema(
    name="Default Library",
    core=CoreFields(title_field="title", status_field="catalog-status"),
    fields=(
        _f("class", "Class", FieldKind.TEXT, 0),
        _f("category", "Category", FieldKind.TEXT, 1),
        _f("title", "Title", FieldKind.TEXT, 2, filterable=False),
        _f("authors", "Authors", FieldKind.LIST, 3, sortable=False, element_kind=ElementKind.LINK),
        _f("year", "Year", FieldKind.NUMBER, 4),
        _f("volume", "Volume", FieldKind.NUMBER, 5),
        _f("issue", "Issue", FieldKind.NUMBER, 6),
        _f("publications", "Publications", FieldKind.LIST, 7, sortable=False, element_kind=ElementKind.LINK),
        _f("citation", "Citation", FieldKind.TEXT, 8, visible=False, filterable=False, sortable=False),
        _f("wikisource", "Wikisource", FieldKind.TEXT, 9, visible=False, filterable=False, sortable=False),
        _f(
            "synopsis",
            "Synopsis",
            FieldKind.TEXT,
            10,
            category=FieldCategory.CONTENT,
            visible=False,
            filterable=False,
            sortable=False,
        ),
        _f("catalog-status", "Status", FieldKind.TEXT, 11, category=FieldCategory.STATUS),
        _f("date-read", "Date Read", FieldKind.DATE, 12, category=_W, visible=False),
        _f("date-cataloged", "Date Cataloged", FieldKind.DATE, 13, category=_W, visible=False),
        _f("created", "Created", FieldKind.DATE, 14, visible=False, filterable=False),
        _f("updated", "Updated", FieldKind.DATE, 15, visible=False, filterable=False),
        _f("word-count", "Word Count", FieldKind.NUMBER, 16),
        _f("keywords", "Keywords", FieldKind.LIST, 17, visible=False, sortable=False),
        _f("tags", "Tags", FieldKind.LIST, 18, visible=False, sortable=False),
        _f(
            "content-metadata",
            "Content Metadata",
            FieldKind.STRUCTURED,
            19,
            visible=False,
            filterable=False,
            sortable=False,
        ),
    ),
)

MANUSCRIPT_SCHEMA = CatalogSchema(
    name="Manuscripts",
    core=CoreFields(title_field="title", status_field="status"),
    fields=(
        _f("title", "Title", FieldKind.TEXT, 0, filterable=False),
        _f("author", "Author", FieldKind.TEXT, 1),
        _f("genre", "Genre", FieldKind.TEXT, 2),
        _f("status", "Status", FieldKind.TEXT, 3, category=FieldCategory.STATUS),
        _f("word-count", "Word Count", FieldKind.NUMBER, 4),
        _f("draft-date", "Draft Date", FieldKind.DATE, 5, category=_W),
        _f("query-date", "Query Date", FieldKind.DATE, 6, category=_W),
        _f("agent", "Agent", FieldKind.TEXT, 7, category=_W),
        _f("publisher", "Publisher", FieldKind.TEXT, 8, category=_W),
        _f("tags", "Tags", FieldKind.LIST, 9, visible=False, sortable=False),
    ),
)

PRESETS: dict[str, CatalogSchema] = {
    "default": DEFAULT_SCHEMA,
    "manuscripts": MANUSCRIPT_SCHEMA,
}


def get_preset(name: str) -> CatalogSchema:
    """Look up a preset schema by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"No preset named '{name}'. Available: {sorted(PRESETS)}") from None
