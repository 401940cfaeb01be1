"""Tests for folio.core.exceptions."""

import pytest

from folio.core.exceptions import (
    ConfigurationError,
    DocumentSourceError,
    FolioError,
    QueryError,
    SchemaError,
)


def test_hierarchy():
    """All exceptions should inherit from FolioError."""
    for exc_cls in [ConfigurationError, SchemaError, QueryError, DocumentSourceError]:
        assert issubclass(exc_cls, FolioError)


def test_exception_message():
    err = QueryError("Unknown sort kind 'colour'")
    assert "colour" in str(err)


def test_catch_base():
    with pytest.raises(FolioError):
        raise SchemaError("duplicate key")
