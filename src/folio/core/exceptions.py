"""
Folio exception hierarchy.

All folio exceptions inherit from FolioError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.

Bad document data never raises: parsing skips what it cannot read and
conversion reports ``NOT_CONVERTIBLE``. These exceptions cover programmer
and configuration errors.
"""


class FolioError(Exception):
    """Base exception class for all folio errors."""


class ConfigurationError(FolioError):
    """Raised for configuration errors (missing keys, invalid values)."""


class SchemaError(FolioError):
    """Raised for invalid schemas or operations a schema forbids."""


class QueryError(FolioError):
    """Raised for unrecognized filter operations or sort kinds."""


class DocumentSourceError(FolioError):
    """Raised when a document source cannot be enumerated."""
