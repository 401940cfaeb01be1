"""folio parse: show the frontmatter of one document."""

from __future__ import annotations

import json

import click

from folio.catalog.builder import build_record
from folio.catalog.frontmatter import parse_document
from folio.catalog.models import unwrap

from .common import preset_option, resolve_schema, schema_option


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--record", "as_record", is_flag=True, help="Convert with the schema and show the built record.")
@schema_option
@preset_option
@click.pass_obj
def parse(config, file: str, as_record: bool, schema_file: str | None, preset: str | None) -> None:
    """Print the parsed frontmatter of FILE as JSON."""
    with open(file, encoding="utf-8") as f:
        raw = parse_document(f.read())

    if as_record:
        schema = resolve_schema(config, schema_file, preset)
        data = build_record(raw, schema, file).to_dict()
    else:
        data = {key: unwrap(value) for key, value in raw.items()}

    click.echo(json.dumps(data, indent=2, default=str, ensure_ascii=False))
