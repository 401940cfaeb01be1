"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``. Call
``Config.validated()`` to obtain a typed, validated ``FolioConfig``
instance. Existing dict-based access continues to work unchanged.

The ``schema`` section describes a catalog schema in plain data, so a
catalog's fields can live in the same YAML file as the rest of the
settings::

    schema:
      name: Reading list
      core: {title_field: title, status_field: status}
      fields:
        - {key: title, kind: text}
        - {key: authors, kind: list, element_kind: link}
        - {key: year, kind: number}
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from folio.catalog.config import SourceConfig, StatisticsConfig
from folio.catalog.presets import PRESETS, get_preset
from folio.catalog.schema import CatalogSchema, CoreFields, ElementKind, FieldCategory, FieldKind, SchemaField

from .config import Config
from .exceptions import ConfigurationError

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class FieldConfig(BaseModel):
    """One schema field as written in a config file."""

    key: str
    label: str = ""
    kind: FieldKind = FieldKind.TEXT
    category: FieldCategory = FieldCategory.METADATA
    visible: bool = True
    filterable: bool = True
    sortable: bool = True
    sort_order: int | None = None
    element_kind: ElementKind | None = None
    description: str | None = None

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("field key cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def _element_kind_on_lists(self) -> FieldConfig:
        if self.element_kind is not None and self.kind is not FieldKind.LIST:
            raise ValueError(f"field {self.key!r} declares element_kind but its kind is {self.kind.value}")
        return self


class CoreFieldsConfig(BaseModel):
    title_field: str = "title"
    id_field: str | None = None
    status_field: str | None = None


class SchemaConfig(BaseModel):
    """A catalog schema in config form.

    ``fields``, when given, define the schema. Otherwise ``preset`` names
    a built-in schema to use as is.
    """

    name: str = "Custom"
    preset: str | None = None
    fields: list[FieldConfig] = []
    core: CoreFieldsConfig = CoreFieldsConfig()

    @field_validator("preset")
    @classmethod
    def _known_preset(cls, v: str | None) -> str | None:
        if v is not None and v not in PRESETS:
            raise ValueError(f"unknown preset {v!r}; available: {sorted(PRESETS)}")
        return v

    @model_validator(mode="after")
    def _unique_keys(self) -> SchemaConfig:
        seen: set[str] = set()
        for field_config in self.fields:
            if field_config.key in seen:
                raise ValueError(f"duplicate field key {field_config.key!r}")
            seen.add(field_config.key)
        return self

    def to_schema(self) -> CatalogSchema:
        """Build the immutable ``CatalogSchema`` this config describes."""
        if not self.fields and self.preset:
            return get_preset(self.preset)

        fields = tuple(
            SchemaField(
                key=f.key,
                label=f.label,
                kind=f.kind,
                category=f.category,
                visible=f.visible,
                filterable=f.filterable,
                sortable=f.sortable,
                sort_order=index if f.sort_order is None else f.sort_order,
                element_kind=f.element_kind,
                description=f.description,
            )
            for index, f in enumerate(self.fields)
        )
        core = CoreFields(
            title_field=self.core.title_field,
            id_field=self.core.id_field,
            status_field=self.core.status_field,
        )
        return CatalogSchema(name=self.name, fields=fields, core=core)


class CatalogConfig(BaseModel):
    """Where documents live and how to read them."""

    documents_dir: Path | None = None
    file_extensions: list[str] = [".md"]
    skip_directories: list[str] = [".obsidian", ".git", ".trash"]
    encoding: str = "utf-8"

    @field_validator("documents_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v

    @field_validator("file_extensions")
    @classmethod
    def _dotted(cls, v: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in v]

    def to_source_config(self) -> SourceConfig:
        return SourceConfig(
            file_extensions=list(self.file_extensions),
            skip_directories=list(self.skip_directories),
            encoding=self.encoding,
        )


class StatisticsSection(BaseModel):
    total_field: str | None = "word-count"
    distinct_fields: list[str] = ["authors", "publications"]
    range_field: str | None = "year"

    def to_statistics_config(self) -> StatisticsConfig:
        return StatisticsConfig(
            total_field=self.total_field,
            distinct_fields=list(self.distinct_fields),
            range_field=self.range_field,
        )


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    file: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level


class FolioConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema. The schema section is read from the
    ``schema`` key.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    catalog: CatalogConfig = CatalogConfig()
    catalog_schema: SchemaConfig = Field(default_factory=lambda: SchemaConfig(preset="default"), alias="schema")
    statistics: StatisticsSection = StatisticsSection()
    logging: LoggingConfig = LoggingConfig()


def load_schema(path: str | os.PathLike) -> CatalogSchema:
    """
    Read a catalog schema from a YAML or JSON file.

    The file holds either the schema mapping itself or a full config with
    a ``schema`` section.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    path = os.fspath(path)
    if not os.path.exists(path):
        raise ConfigurationError(f"Schema file not found: {path}")
    if os.path.splitext(path)[1].lower() not in (".yaml", ".yml", ".json"):
        raise ConfigurationError(f"Schema file must be YAML or JSON: {path}")

    data = Config._load_file(path)
    if "schema" in data and isinstance(data["schema"], dict):
        data = data["schema"]

    try:
        schema = SchemaConfig.model_validate(data).to_schema()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid schema in {path}: {e}") from e

    logger.debug(f"Loaded schema '{schema.name}' with {len(schema.fields)} fields from {path}")
    return schema
