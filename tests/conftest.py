"""Shared test fixtures for folio."""

import os
import tempfile

import pytest

from folio.catalog.models import Record
from folio.catalog.schema import CatalogSchema, CoreFields, ElementKind, FieldKind, SchemaField


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def library_schema():
    """A small schema covering every field kind."""
    return CatalogSchema(
        name="Test Library",
        core=CoreFields(title_field="title", status_field="status"),
        fields=(
            SchemaField("title", kind=FieldKind.TEXT),
            SchemaField("authors", kind=FieldKind.LIST, element_kind=ElementKind.LINK),
            SchemaField("year", kind=FieldKind.NUMBER),
            SchemaField("word-count", kind=FieldKind.NUMBER),
            SchemaField("read", kind=FieldKind.BOOLEAN),
            SchemaField("date-read", kind=FieldKind.DATE),
            SchemaField("status", kind=FieldKind.TEXT),
            SchemaField("tags", kind=FieldKind.LIST),
            SchemaField("extra", kind=FieldKind.STRUCTURED),
        ),
    )


@pytest.fixture
def library_records():
    """Four records with a mix of present, absent and list values."""
    return [
        Record(
            "the-call-of-cthulhu",
            "works/cthulhu.md",
            {
                "title": "The Call of Cthulhu",
                "authors": ["H. P. Lovecraft"],
                "year": 1928,
                "word-count": 12000,
                "status": "cataloged",
            },
        ),
        Record(
            "the-shadow-out-of-time",
            "works/shadow.md",
            {
                "title": "The Shadow Out of Time",
                "authors": ["H. P. Lovecraft"],
                "year": 1936,
                "word-count": 7000,
                "status": "reading",
            },
        ),
        Record(
            "the-yellow-sign",
            "works/yellow.md",
            {
                "title": "The Yellow Sign",
                "authors": ["Robert W. Chambers"],
                "year": 1895,
                "word-count": 3000,
                "status": "cataloged",
            },
        ),
        Record(
            "untitled",
            "works/untitled.md",
            {
                "title": "Untitled",
                "authors": ["H. P. Lovecraft", "Robert W. Chambers"],
            },
        ),
    ]


@pytest.fixture
def library_dir(tmp_dir):
    """A directory of markdown documents with frontmatter."""
    documents = {
        "cthulhu.md": (
            "---\n"
            'title: "The Call of Cthulhu"\n'
            "authors:\n"
            '  - "[[H. P. Lovecraft]]"\n'
            "year: 1928\n"
            "word-count: 12000\n"
            "catalog-status: cataloged\n"
            "---\n"
            "Of such great powers or beings...\n"
        ),
        "shadow.md": (
            "---\n"
            "title: The Shadow Out of Time\n"
            "authors: [\"[[H. P. Lovecraft]]\"]\n"
            "year: 1936\n"
            "word-count: 7000\n"
            "catalog-status: reading\n"
            "---\n"
        ),
        "nested/yellow.md": (
            "---\n"
            "title: The Yellow Sign\n"
            "authors:\n"
            "- \"[[Robert W. Chambers]]\"\n"
            "year: 1895\n"
            "word-count: 3000\n"
            "catalog-status: cataloged\n"
            "---\n"
        ),
        "notes.md": "No frontmatter here.\n",
        ".obsidian/workspace.md": "---\ntitle: hidden\n---\n",
        "readme.txt": "---\ntitle: not markdown\n---\n",
    }
    for name, text in documents.items():
        path = os.path.join(tmp_dir, name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    return tmp_dir
