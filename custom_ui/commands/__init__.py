"""CLI command definitions for custom-ui."""

import click

from custom_ui import __version__
from custom_ui.commands.add import add
from custom_ui.commands.docs import docs
from custom_ui.commands.init import init
from custom_ui.commands.list import list_components as list_command


@click.group()
@click.version_option(__version__, prog_name="custom-ui")
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.option(
    "--registry",
    help="Registry file path or http(s) URL (default: bundled registry)",
)
@click.pass_context
def cli(ctx, debug, registry):
    """Add React UI components and their dependencies to your project."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["registry"] = registry


cli.add_command(init)
cli.add_command(add)
cli.add_command(list_command, name="list")
cli.add_command(docs)

__all__ = ["cli"]


if __name__ == "__main__":
    cli()
