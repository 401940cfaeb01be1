"""Shared type aliases used across folio."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

# Config value types
ConfigDict = dict[str, Any]

# Path types
PathLike = str | Path

# A filter step that maps one record list to another
RecordFilter = Callable[[list], list]
