"""
Frontmatter extraction and parsing.

A document's metadata block sits between two ``---`` lines at the very
start of the text. The block is read with a small line-oriented parser
covering the subset of YAML that frontmatter uses in practice:

    title: "The Call"          quoted scalars stay text
    year: 1928                 unquoted scalars infer boolean, number, text
    draft: no
    authors:                   key followed by "- item" lines is a list
      - "H. P. Lovecraft"
    tags: [horror, weird]      inline lists
    rating:                    blank or null/~ is ABSENT

Nested mappings, anchors, multi-line strings and the rest of YAML are out
of scope. A line the parser cannot read is skipped, never fatal.
"""

from __future__ import annotations

import re
from enum import Enum, auto

from loguru import logger

from folio.core.utils.text import is_quoted, strip_quotes

from .models import ABSENT, Boolean, FieldValue, Number, Text, TextList

DELIMITER = "---"

TRUE_TOKENS = frozenset({"true", "yes"})
FALSE_TOKENS = frozenset({"false", "no"})
NULL_TOKENS = frozenset({"", "null", "~"})

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_KEY_RE = re.compile(r"^([^:]+):(.*)$")


def _is_delimiter(line: str) -> bool:
    return line.rstrip(" \t\r") == DELIMITER


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """
    Split a document into its frontmatter block and body.

    Only the first two delimiter lines counted from offset zero are
    considered, so ``---`` lines later in the body (horizontal rules, code
    samples) are never mistaken for the block boundary. Lines end at
    ``\\n`` only; other Unicode line separators stay inside their line.

    Returns:
        (block, body). ``block`` is None when the document does not open
        with a delimiter line or the opening line is never closed, and
        ``""`` for an empty block. ``body`` is everything after the closing
        delimiter line, or the whole text when no block is found.
    """
    if not text:
        return None, text or ""

    lines = text.removeprefix("\ufeff").split("\n")
    if not _is_delimiter(lines[0]):
        return None, text

    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            block = "\n".join(line.removesuffix("\r") for line in lines[1:index])
            body = "\n".join(lines[index + 1 :])
            return block.rstrip("\n"), body

    return None, text


def extract_frontmatter(text: str) -> str | None:
    """Return the frontmatter block, ``""`` if empty, or None if not found."""
    block, _body = split_frontmatter(text)
    return block


def parse_scalar(token: str) -> FieldValue:
    """
    Infer the value of a scalar token (the right-hand side of ``key: value``).

    Quoting forces text. Unquoted tokens are tried as null, boolean and
    number in that order, falling back to text.
    """
    token = token.strip()
    if is_quoted(token):
        return Text(strip_quotes(token))

    lowered = token.lower()
    if lowered in NULL_TOKENS:
        return ABSENT
    if lowered in TRUE_TOKENS:
        return Boolean(True)
    if lowered in FALSE_TOKENS:
        return Boolean(False)
    if _NUMBER_RE.match(token):
        return Number(float(token))
    return Text(token)


def _split_inline(inner: str) -> list[str]:
    """Split on commas outside quoted elements."""
    items: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for ch in inner:
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "\"'" and not "".join(current).strip():
            quote = ch
        elif ch == ",":
            items.append("".join(current))
            current = []
            continue
        current.append(ch)
    items.append("".join(current))
    return items


def _parse_inline_list(token: str) -> TextList:
    inner = token.strip()[1:-1].strip()
    if not inner:
        return TextList(())
    items = [strip_quotes(item.strip()) for item in _split_inline(inner)]
    return TextList(tuple(item for item in items if item))


def _list_item(stripped: str) -> str | None:
    """The item text of a ``- item`` line, or None if the line is not one."""
    if stripped.startswith("- "):
        return strip_quotes(stripped[2:].strip())
    if stripped == "-":
        return ""
    return None


class _State(Enum):
    EXPECT_KEY = auto()
    IN_LIST = auto()


def parse_block(block: str) -> dict[str, FieldValue]:
    """
    Parse an extracted frontmatter block into tagged field values.

    Scans lines in two states: expecting a new key, or collecting ``- item``
    lines for the most recent ``key:``. The pending list is flushed when the
    next non-indented key line arrives or the input ends; a ``key:`` that
    collected no items is ABSENT. Indented lines that are not list items
    (nested mappings) are skipped.

    Args:
        block: Text between the delimiters (as returned by ``extract_frontmatter``).

    Returns:
        Mapping of key to Text, Number, Boolean, TextList or ABSENT.
    """
    fields: dict[str, FieldValue] = {}
    state = _State.EXPECT_KEY
    pending_key: str | None = None
    pending_items: list[str] = []

    def flush() -> None:
        if pending_key is not None:
            fields[pending_key] = TextList(tuple(pending_items)) if pending_items else ABSENT

    for line_number, line in enumerate(block.split("\n"), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        item = _list_item(stripped)
        if item is not None:
            if state is _State.IN_LIST:
                if item:
                    pending_items.append(item)
            else:
                logger.debug(f"Frontmatter line {line_number}: list item without an open list, skipped")
            continue

        if line[0] in " \t":
            # nested content under a key, never a top-level key of its own
            logger.debug(f"Frontmatter line {line_number}: indented line outside a list, skipped: {stripped!r}")
            continue

        match = _KEY_RE.match(stripped)
        key = match.group(1).strip() if match else ""
        if not key:
            logger.debug(f"Frontmatter line {line_number}: no 'key: value' pair, skipped: {stripped!r}")
            continue

        if state is _State.IN_LIST:
            flush()
            state, pending_key, pending_items = _State.EXPECT_KEY, None, []

        value = match.group(2).strip()
        if not value:
            state, pending_key, pending_items = _State.IN_LIST, key, []
        elif value.startswith("[") and value.endswith("]") and not value.startswith("[["):
            fields[key] = _parse_inline_list(value)
        else:
            fields[key] = parse_scalar(value)

    if state is _State.IN_LIST:
        flush()

    return fields


def parse_document(text: str) -> dict[str, FieldValue]:
    """Extract and parse a document's frontmatter. ``{}`` when there is none."""
    block = extract_frontmatter(text)
    if not block:
        return {}
    return parse_block(block)
