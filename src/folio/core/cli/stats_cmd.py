"""folio stats: catalog statistics snapshot."""

from __future__ import annotations

import json

import click

from folio.query.aggregates import catalog_statistics

from .common import directory_argument, load_records, preset_option, resolve_schema, schema_option, validated


@click.command()
@directory_argument
@schema_option
@preset_option
@click.pass_obj
def stats(config, directory: str | None, schema_file: str | None, preset: str | None) -> None:
    """Print statistics for the documents in DIRECTORY as JSON."""
    schema = resolve_schema(config, schema_file, preset)
    records = load_records(config, directory, schema)
    settings = validated(config).statistics.to_statistics_config()

    snapshot = catalog_statistics(records, schema, settings)
    click.echo(json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False))
