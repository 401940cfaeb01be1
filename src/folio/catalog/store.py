"""DocumentSource protocol: the contract for document backends.

Any system that holds frontmatter documents (an Obsidian vault, a plain
directory of markdown files, an export bundle) can implement this protocol
and feed folio's record builder.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger

from folio.core.exceptions import DocumentSourceError
from folio.core.types import PathLike

from .builder import build_records
from .config import SourceConfig
from .models import Record
from .schema import CatalogSchema


@runtime_checkable
class DocumentSource(Protocol):
    """Protocol for enumerating and reading documents.

    Provenance strings are opaque to folio; they only need to be accepted
    back by ``read_document``.
    """

    def list_documents(self) -> list[str]:
        """Return the provenance of every document, in a stable order."""
        ...

    def read_document(self, provenance: str) -> str:
        """Read the full text of a document.

        Args:
            provenance: A value returned by ``list_documents``.
        """
        ...


class DirectorySource:
    """Documents stored as files under a root directory.

    Provenance is the root-relative POSIX path, e.g. ``works/the-call.md``.

    Example::

        source = DirectorySource("~/vault/library")
        records = load_catalog(source, schema)
    """

    def __init__(self, root: PathLike, config: SourceConfig | None = None) -> None:
        self.root = Path(root).expanduser()
        self.config = config or SourceConfig()

    def list_documents(self) -> list[str]:
        if not self.root.is_dir():
            raise DocumentSourceError(f"Not a directory: {self.root}")

        extensions = tuple(ext.lower() for ext in self.config.file_extensions)
        skip = set(self.config.skip_directories)
        found: list[str] = []

        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(d for d in dirnames if d not in skip)
            for fname in filenames:
                if fname.lower().endswith(extensions):
                    found.append((Path(dirpath) / fname).relative_to(self.root).as_posix())

        return sorted(found)

    def read_document(self, provenance: str) -> str:
        return (self.root / provenance).read_text(encoding=self.config.encoding)


def load_catalog(source: DocumentSource, schema: CatalogSchema) -> list[Record]:
    """Read every document from *source* and build its Record.

    Documents that cannot be read are skipped with a warning.
    """
    documents: list[tuple[str, str]] = []
    for provenance in source.list_documents():
        try:
            documents.append((provenance, source.read_document(provenance)))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable document {provenance}: {e}")

    records = build_records(documents, schema)
    logger.debug(f"Loaded {len(records)} records using schema '{schema.name}'")
    return records
