"""Configuration dataclasses for catalog loading and statistics.

These are pure data containers with sensible defaults.
Override them from YAML config, env vars, or constructor args.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SourceConfig:
    """Settings for enumerating documents on disk.

    Attributes:
        file_extensions: Which file types to catalog.
        skip_directories: Directory names to skip during recursive walks.
        encoding: Text encoding used to read documents.
    """

    file_extensions: list[str] = field(default_factory=lambda: [".md"])
    skip_directories: list[str] = field(default_factory=lambda: [".obsidian", ".git", ".trash"])
    encoding: str = "utf-8"


@dataclass
class StatisticsConfig:
    """Which fields feed the catalog statistics snapshot.

    Attributes:
        total_field: Numeric field summed and averaged (e.g. word count).
        distinct_fields: List fields whose distinct values are counted
            (e.g. contributors, publications).
        range_field: Numeric field whose min/max is reported (e.g. year).
    """

    total_field: str | None = "word-count"
    distinct_fields: list[str] = field(default_factory=lambda: ["authors", "publications"])
    range_field: str | None = "year"
