"""Tests for folio.catalog.models."""

import pickle
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from folio.catalog.models import (
    ABSENT,
    Absent,
    Boolean,
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

pytestmark = pytest.mark.smoke


class TestFieldValues:
    def test_number_is_stored_as_float(self):
        assert Number(1928).value == 1928.0
        assert isinstance(Number(1928).value, float)
        assert Number(1928) == Number(1928.0)

    def test_tags_distinguish_equal_payloads(self):
        assert Text("1928") != Number(1928)
        assert Boolean(True) != Number(1)

    def test_naive_timestamp_becomes_utc(self):
        ts = Timestamp(datetime(2024, 1, 2, 3, 4))
        assert ts.value.tzinfo is UTC

    def test_aware_timestamp_kept(self):
        tz = timezone(timedelta(hours=2))
        ts = Timestamp(datetime(2024, 1, 2, tzinfo=tz))
        assert ts.value.tzinfo is tz

    def test_text_list_is_tuple(self):
        items = TextList(["a", "b"])
        assert items.value == ("a", "b")
        assert len(items) == 2
        assert list(items) == ["a", "b"]

    def test_values_are_hashable(self):
        values = {Text("a"), Number(1), Boolean(False), TextList(("x",)), Structured({"k": 1}), ABSENT}
        assert len(values) == 6

    def test_structured_is_read_only(self):
        structured = Structured({"pages": 12})
        with pytest.raises(TypeError):
            structured.value["pages"] = 13

    def test_structured_equality_ignores_key_order(self):
        assert Structured({"a": 1, "b": 2}) == Structured({"b": 2, "a": 1})
        assert hash(Structured({"a": 1, "b": 2})) == hash(Structured({"b": 2, "a": 1}))


class TestAbsent:
    def test_singleton(self):
        assert Absent() is ABSENT

    def test_falsy(self):
        assert not ABSENT

    def test_repr(self):
        assert repr(ABSENT) == "ABSENT"

    def test_survives_pickle(self):
        assert pickle.loads(pickle.dumps(ABSENT)) is ABSENT

    def test_is_absent(self):
        assert is_absent(ABSENT)
        assert not is_absent(Text(""))


class TestWrap:
    @pytest.mark.parametrize(
        "plain,expected",
        [
            (None, ABSENT),
            ("x", Text("x")),
            (True, Boolean(True)),
            (3, Number(3)),
            (2.5, Number(2.5)),
            (["a", "b"], TextList(("a", "b"))),
            (("a",), TextList(("a",))),
            ({"k": "v"}, Structured({"k": "v"})),
        ],
    )
    def test_plain_values(self, plain, expected):
        assert wrap(plain) == expected

    def test_bool_is_not_a_number(self):
        assert isinstance(wrap(False), Boolean)

    def test_date_becomes_midnight_utc(self):
        assert wrap(date(2024, 5, 6)) == Timestamp(datetime(2024, 5, 6, tzinfo=UTC))

    def test_tagged_value_passes_through(self):
        value = Text("already")
        assert wrap(value) is value

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError, match="object"):
            wrap(object())

    def test_unwrap(self):
        assert unwrap(ABSENT) is None
        assert unwrap(TextList(("a",))) == ["a"]
        assert unwrap(Structured({"k": 1})) == {"k": 1}
        assert unwrap(Number(2)) == 2.0


class TestDisplay:
    def test_integral_number_has_no_decimal(self):
        assert display(Number(1928)) == "1928"

    def test_fractional_number(self):
        assert display(Number(2.5)) == "2.5"

    def test_boolean(self):
        assert display(Boolean(True)) == "true"
        assert display(Boolean(False)) == "false"

    def test_timestamp_is_iso(self):
        assert display(Timestamp(datetime(2024, 1, 2))) == "2024-01-02T00:00:00+00:00"

    def test_list_joined(self):
        assert display(TextList(("a", "b"))) == "a, b"

    def test_absent_is_empty(self):
        assert display(ABSENT) == ""


class TestRecord:
    def test_never_set_reads_absent(self):
        record = Record("r", "r.md")
        assert record.get("missing") is ABSENT
        assert not record.has("missing")

    def test_explicit_absent_reads_like_never_set(self):
        record = Record("r", "r.md", {"rating": None})
        assert record.get("rating") is ABSENT
        assert not record.has("rating")

    def test_set_wraps_plain_values(self):
        record = Record("r", "r.md")
        record.set("year", 1928)
        assert record.get("year") == Number(1928)

    def test_id_and_provenance_are_read_only(self):
        record = Record("r", "r.md")
        with pytest.raises(AttributeError):
            record.id = "other"
        with pytest.raises(AttributeError):
            record.provenance = "other.md"

    def test_fields_view_is_read_only(self):
        record = Record("r", "r.md", {"title": "T"})
        with pytest.raises(TypeError):
            record.fields["title"] = Text("X")

    def test_clone_is_independent(self):
        record = Record("r", "r.md", {"title": "T"})
        copy = record.clone()
        copy.set("title", "Changed")
        assert record.get("title") == Text("T")
        assert copy == Record("r", "r.md", {"title": "Changed"})

    def test_equality(self):
        assert Record("r", "r.md", {"a": 1}) == Record("r", "r.md", {"a": 1.0})
        assert Record("r", "r.md", {"a": 1}) != Record("r", "s.md", {"a": 1})

    def test_to_dict(self):
        record = Record("r", "r.md", {"title": "T", "authors": ["A"]})
        assert record.to_dict() == {"id": "r", "provenance": "r.md", "title": "T", "authors": ["A"]}

    def test_repr(self):
        assert "r.md" in repr(Record("r", "r.md"))
