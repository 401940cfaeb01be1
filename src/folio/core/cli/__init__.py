"""Folio CLI: inspect frontmatter catalogs from the shell."""

import click

from folio import __version__

from .common import configure_logging, load_config


@click.group()
@click.version_option(version=__version__, package_name="folio")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML or JSON config file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: bool) -> None:
    """Folio: query the frontmatter of a folder of documents."""
    config = load_config(config_file)
    configure_logging(config, verbose)
    ctx.obj = config


# Register subcommands
from .group_cmd import group  # noqa: E402
from .list_cmd import list_records  # noqa: E402
from .parse_cmd import parse  # noqa: E402
from .stats_cmd import stats  # noqa: E402

main.add_command(parse)
main.add_command(list_records)
main.add_command(group)
main.add_command(stats)
