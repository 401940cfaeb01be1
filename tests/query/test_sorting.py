"""Tests for folio.query.sorting."""

from datetime import datetime

import pytest

from folio.catalog.models import Record
from folio.catalog.schema import FieldKind
from folio.core.exceptions import QueryError
from folio.query.sorting import SortSpec, parse_sort_spec, sort_by_field, sort_by_multiple

pytestmark = pytest.mark.smoke


def ids(records):
    return [r.id for r in records]


@pytest.fixture
def years():
    return [
        Record("missing", "m.md"),
        Record("call", "c.md", {"year": 1928}),
        Record("shadow", "s.md", {"year": 1935}),
    ]


class TestNumericSort:
    def test_ascending_absent_last(self, years, library_schema):
        assert ids(sort_by_field(years, "year", schema=library_schema)) == ["call", "shadow", "missing"]

    def test_descending_absent_still_last(self, years, library_schema):
        result = sort_by_field(years, "year", descending=True, schema=library_schema)
        assert ids(result) == ["shadow", "call", "missing"]

    def test_numbers_compare_numerically(self):
        records = [Record(str(n), "x.md", {"n": n}) for n in (10, 9, 100)]
        assert ids(sort_by_field(records, "n", kind="number")) == ["9", "10", "100"]

    def test_text_under_numeric_kind_is_trailing(self):
        records = [
            Record("text", "t.md", {"n": "seven"}),
            Record("two", "2.md", {"n": 2}),
            Record("one", "1.md", {"n": 1}),
        ]
        assert ids(sort_by_field(records, "n", kind=FieldKind.NUMBER)) == ["one", "two", "text"]

    def test_input_not_modified(self, years, library_schema):
        before = ids(years)
        sort_by_field(years, "year", schema=library_schema)
        assert ids(years) == before


class TestStability:
    def test_equal_keys_keep_input_order(self):
        records = [Record(f"r{i}", "x.md", {"group": g}) for i, g in enumerate("babab")]
        assert ids(sort_by_field(records, "group")) == ["r1", "r3", "r0", "r2", "r4"]

    def test_equal_keys_keep_input_order_descending(self):
        records = [Record(f"r{i}", "x.md", {"group": g}) for i, g in enumerate("babab")]
        assert ids(sort_by_field(records, "group", descending=True)) == ["r0", "r2", "r4", "r1", "r3"]

    def test_trailing_values_keep_input_order(self):
        records = [Record("a", "a.md"), Record("b", "b.md", {"d": "junk"}), Record("c", "c.md")]
        assert ids(sort_by_field(records, "d", kind="date", descending=True)) == ["a", "b", "c"]


class TestKinds:
    def test_text_is_case_and_accent_insensitive(self):
        records = [
            Record("b", "b.md", {"name": "banana"}),
            Record("E", "e.md", {"name": "Émile"}),
            Record("a", "a.md", {"name": "Apple"}),
            Record("e", "e2.md", {"name": "emile"}),
        ]
        assert ids(sort_by_field(records, "name")) == ["a", "b", "E", "e"]

    def test_dates_mix_timestamps_and_text(self):
        records = [
            Record("text", "t.md", {"d": "2024-05-01"}),
            Record("ts", "s.md", {"d": datetime(2023, 1, 1)}),
            Record("bad", "b.md", {"d": "whenever"}),
        ]
        assert ids(sort_by_field(records, "d", kind="date")) == ["ts", "text", "bad"]

    def test_boolean_false_first(self):
        records = [Record("t", "t.md", {"read": True}), Record("f", "f.md", {"read": False})]
        assert ids(sort_by_field(records, "read", kind="boolean")) == ["f", "t"]

    def test_lists_sort_by_display(self, library_records, library_schema):
        result = sort_by_field(library_records, "authors", schema=library_schema)
        assert ids(result) == ["the-call-of-cthulhu", "the-shadow-out-of-time", "untitled", "the-yellow-sign"]

    def test_defaults_to_text_without_schema(self):
        records = [Record("ten", "x.md", {"n": "10"}), Record("nine", "y.md", {"n": "9"})]
        assert ids(sort_by_field(records, "n")) == ["ten", "nine"]

    def test_undeclared_numbers_sort_numerically(self, library_schema):
        records = [Record(f"r{n}", "x.md", {"rating": n}) for n in (10, 9, 100)]
        assert ids(sort_by_field(records, "rating", schema=library_schema)) == ["r9", "r10", "r100"]
        assert ids(sort_by_field(records, "rating")) == ["r9", "r10", "r100"]

    def test_undeclared_dates_sort_by_time(self):
        records = [
            Record("late", "l.md", {"seen": datetime(2024, 1, 1)}),
            Record("none", "n.md"),
            Record("early", "e.md", {"seen": datetime(2019, 6, 1)}),
        ]
        assert ids(sort_by_field(records, "seen")) == ["early", "late", "none"]

    def test_undeclared_mixed_tags_fall_back_to_text(self):
        records = [Record("num", "n.md", {"v": 10}), Record("txt", "t.md", {"v": "9"})]
        assert ids(sort_by_field(records, "v")) == ["num", "txt"]

    def test_explicit_kind_overrides_schema(self, library_schema):
        records = [Record("b", "b.md", {"year": 2}), Record("a", "a.md", {"year": 10})]
        assert ids(sort_by_field(records, "year", schema=library_schema, kind="text")) == ["a", "b"]

    def test_unknown_kind_raises(self, years):
        with pytest.raises(QueryError, match="Unknown sort kind"):
            sort_by_field(years, "year", kind="colour")


class TestMultiSort:
    @pytest.fixture
    def works(self):
        return [
            Record("a", "a.md", {"author": "Lovecraft", "year": 1936}),
            Record("b", "b.md", {"author": "Chambers", "year": 1895}),
            Record("c", "c.md", {"author": "Lovecraft", "year": 1928}),
            Record("d", "d.md", {"author": "Chambers", "year": 1897}),
            Record("e", "e.md", {"year": 1900}),
        ]

    def test_first_spec_has_precedence(self, works):
        specs = [SortSpec("author"), SortSpec("year", descending=True, kind="number")]
        assert ids(sort_by_multiple(works, specs)) == ["d", "b", "a", "c", "e"]

    def test_reversed_precedence(self, works):
        specs = [SortSpec("year", kind="number"), SortSpec("author")]
        assert ids(sort_by_multiple(works, specs)) == ["b", "d", "e", "c", "a"]

    def test_no_specs_keeps_order(self, works):
        assert sort_by_multiple(works, []) == works


class TestParseSortSpec:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("year", SortSpec("year")),
            ("year:desc", SortSpec("year", descending=True)),
            ("year:ASC", SortSpec("year")),
            (" date-read : desc ", SortSpec("date-read", descending=True)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_sort_spec(text) == expected

    @pytest.mark.parametrize("text", ["", ":desc", "year:up"])
    def test_invalid(self, text):
        with pytest.raises(QueryError):
            parse_sort_spec(text)
