"""folio list: filter and sort a catalog."""

from __future__ import annotations

import click

from folio.catalog.models import display
from folio.core.exceptions import QueryError
from folio.query.filters import filter_compound
from folio.query.sorting import parse_sort_spec, sort_by_multiple

from .common import directory_argument, load_records, preset_option, resolve_schema, schema_option, where_clause


@click.command("list")
@directory_argument
@schema_option
@preset_option
@click.option("--where", "wheres", multiple=True, metavar="KEY=VALUE", help="Keep records matching; repeatable.")
@click.option("--sort", "sorts", multiple=True, metavar="KEY[:desc]", help="Sort key; the first has precedence.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show at most N records.")
@click.pass_obj
def list_records(
    config,
    directory: str | None,
    schema_file: str | None,
    preset: str | None,
    wheres: tuple[str, ...],
    sorts: tuple[str, ...],
    limit: int | None,
) -> None:
    """List record ids and titles for the documents in DIRECTORY."""
    schema = resolve_schema(config, schema_file, preset)
    records = load_records(config, directory, schema)

    clauses = [where_clause(text, schema) for text in wheres]
    try:
        specs = [parse_sort_spec(text) for text in sorts]
    except QueryError as e:
        raise click.BadParameter(str(e), param_hint="--sort") from e

    records = sort_by_multiple(filter_compound(records, clauses), specs, schema)
    if limit is not None:
        records = records[:limit]

    for record in records:
        click.echo(f"{record.id}\t{display(record.get(schema.title_field))}")
