"""folio group: bucket sizes for one field."""

from __future__ import annotations

import click

from folio.query.aggregates import count_by_field, count_by_list_field, count_label

from .common import directory_argument, load_records, preset_option, resolve_schema, schema_option


@click.command()
@directory_argument
@click.option("--by", "key", required=True, help="Field to group by.")
@schema_option
@preset_option
@click.pass_obj
def group(config, directory: str | None, key: str, schema_file: str | None, preset: str | None) -> None:
    """Count the records in DIRECTORY per value of a field.

    List fields count once per element.
    """
    schema = resolve_schema(config, schema_file, preset)
    records = load_records(config, directory, schema)

    field = schema.field(key)
    if field is not None and field.is_list:
        counts = count_by_list_field(records, key)
    else:
        counts = count_by_field(records, key)

    rows = sorted(((count, count_label(value)) for value, count in counts.items()), key=lambda row: (-row[0], row[1]))
    for count, label in rows:
        click.echo(f"{count}\t{label}")
