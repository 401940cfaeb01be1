"""Text utilities: slugs, quote stripping, collation keys."""

import re
import unicodedata


def slugify(text: str) -> str:
    """Lowercase, trim, and collapse whitespace runs to single hyphens."""
    if not text or not isinstance(text, str):
        return ""
    return re.sub(r"\s+", "-", text.strip().lower())


def strip_quotes(text: str) -> str:
    """Remove one pair of matching surrounding quotes, if present.

    Mismatched quotes are left alone: ``'a"`` stays ``'a"``.
    """
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


def is_quoted(text: str) -> bool:
    """Whether *text* is wrapped in a matching pair of single or double quotes."""
    return len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"')


def collation_key(text: str) -> str:
    """Case- and accent-insensitive sort key.

    ``"Émile"`` and ``"emile"`` produce the same key, so they compare equal
    and keep their input order under a stable sort.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()
