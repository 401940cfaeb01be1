"""Tests for folio.core.utils.text."""

import pytest

from folio.core.utils.text import collation_key, is_quoted, slugify, strip_quotes


@pytest.mark.parametrize(
    "text,expected",
    [
        ("The Call of Cthulhu", "the-call-of-cthulhu"),
        ("  padded  ", "padded"),
        ("tabs\tand\n\nnewlines", "tabs-and-newlines"),
        ("Already-Slugged", "already-slugged"),
        ("", ""),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_slugify_non_string():
    assert slugify(None) == ""


def test_strip_quotes():
    assert strip_quotes('"quoted"') == "quoted"
    assert strip_quotes("'single'") == "single"
    assert strip_quotes("'mismatched\"") == "'mismatched\""
    assert strip_quotes('"') == '"'
    assert strip_quotes("bare") == "bare"


def test_is_quoted():
    assert is_quoted('""')
    assert not is_quoted('"open')


def test_collation_key_ignores_case_and_accents():
    assert collation_key("Émile") == collation_key("emile")
    assert collation_key("STRASSE") == collation_key("straße")


def test_collation_key_orders_alphabetically():
    words = ["banana", "Apple", "cherry", "Ápple"]
    assert sorted(words, key=collation_key) == ["Apple", "Ápple", "banana", "cherry"]
