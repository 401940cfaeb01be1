"""Shared setup logic for CLI commands."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from folio.catalog.convert import NOT_CONVERTIBLE, convert_value
from folio.catalog.frontmatter import parse_scalar
from folio.catalog.models import Record
from folio.catalog.presets import PRESETS, get_preset
from folio.catalog.schema import CatalogSchema
from folio.catalog.store import DirectorySource, load_catalog
from folio.core.config import Config
from folio.core.config_schema import FolioConfig, load_schema
from folio.core.exceptions import ConfigurationError, DocumentSourceError
from folio.core.utils.logging import setup_logging
from folio.query.filters import Clause, FilterOp

# Reused by every command that reads a catalog
schema_option = click.option(
    "--schema",
    "schema_file",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML or JSON schema file.",
)
preset_option = click.option(
    "--preset",
    type=click.Choice(sorted(PRESETS)),
    help="Built-in schema to use instead of a schema file.",
)
directory_argument = click.argument(
    "directory",
    required=False,
    type=click.Path(exists=True, file_okay=False),
)


def load_config(config_file: str | None) -> Config:
    if config_file and not Path(config_file).exists():
        raise click.BadParameter(f"No such file: {config_file}", param_hint="--config")
    try:
        return Config(config_file=config_file)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def configure_logging(config: Config, verbose: bool) -> None:
    level = "DEBUG" if verbose else config.get("logging.level", "WARNING")
    setup_logging(level=level, log_file=config.get("logging.file"))


def validated(config: Config) -> FolioConfig:
    try:
        return config.validated()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


def resolve_schema(config: Config, schema_file: str | None, preset: str | None) -> CatalogSchema:
    """Schema from ``--schema``, else ``--preset``, else the config's schema section."""
    try:
        if schema_file:
            return load_schema(schema_file)
        if preset:
            return get_preset(preset)
        return validated(config).catalog_schema.to_schema()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def load_records(config: Config, directory: str | None, schema: CatalogSchema) -> list[Record]:
    """Build records for every document under *directory* (or the configured one)."""
    settings = validated(config).catalog
    root = directory or settings.documents_dir
    if root is None:
        raise click.UsageError("No directory given and catalog.documents_dir is not configured.")
    try:
        return load_catalog(DirectorySource(root, settings.to_source_config()), schema)
    except DocumentSourceError as e:
        raise click.ClickException(str(e)) from e


def where_clause(text: str, schema: CatalogSchema) -> Clause:
    """
    Turn ``key=value`` into a filter clause.

    List fields match by element; declared fields compare against the value
    converted to their kind; undeclared fields use the value as parsed from
    frontmatter (so ``year=1928`` is a number).
    """
    key, sep, raw = text.partition("=")
    key = key.strip()
    if not sep or not key:
        raise click.BadParameter(f"Expected key=value, got '{text}'", param_hint="--where")

    field = schema.field(key)
    if field is not None and field.is_list:
        return Clause(key, FilterOp.INCLUDES, raw.strip())

    value = parse_scalar(raw)
    if field is not None:
        value = convert_value(value, field)
        if value is NOT_CONVERTIBLE:
            raise click.BadParameter(f"'{raw}' is not a valid {field.kind.value} for '{key}'", param_hint="--where")
    return Clause(key, FilterOp.EQUALS, value)
