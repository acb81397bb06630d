"""Add command implementation."""

import asyncio

import click

from custom_ui import setup_logging
from custom_ui.commands.utils import build_registry_client, exit_with_error
from custom_ui.config import ConfigStore
from custom_ui.errors import CLIError
from custom_ui.feedback import ConsoleFeedback
from custom_ui.installer import AddOptions, ComponentInstaller, WriteOutcome
from custom_ui.paths import get_project_root
from custom_ui.registry import RegistryClient
from custom_ui.tui import conflict_prompt_for_session


@click.command()
@click.argument("components", nargs=-1)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing files")
@click.option(
    "--backup", "-b", is_flag=True, help="Back up existing files before overwriting"
)
@click.option("--skip-deps", is_flag=True, help="Do not install npm dependencies")
@click.option("--silent", "-s", is_flag=True, help="Only print warnings and errors")
@click.option(
    "--components-dir",
    type=click.Path(file_okay=False),
    help="Install into this directory instead of the configured one",
)
@click.pass_context
def add(
    ctx,
    components: tuple[str, ...],
    force: bool,
    backup: bool,
    skip_deps: bool,
    silent: bool,
    components_dir: str | None,
):
    """Add one or more components to the project.

    Component dependencies are installed first. Without --force or --backup,
    existing files are prompted for (or skipped when not on a terminal).
    """
    setup_logging(ctx.obj.get("debug", False))
    options = AddOptions(
        force=force,
        backup=backup,
        skip_deps=skip_deps,
        silent=silent,
        components_dir=components_dir,
    )
    try:
        asyncio.run(run_add(build_registry_client(ctx), list(components), options))
    except CLIError as e:
        exit_with_error(e)


async def run_add(registry: RegistryClient, components: list[str], options: AddOptions):
    project_root = get_project_root()
    feedback = ConsoleFeedback(quiet=options.silent)
    installer = ComponentInstaller(
        registry,
        ConfigStore(project_root),
        feedback,
        project_root,
        prompt=conflict_prompt_for_session(options.silent),
    )

    results = await installer.add_components(components, options)

    skipped = [path for r in results for path in r.files_with(WriteOutcome.SKIPPED)]
    if skipped:
        feedback.warning(
            f"{len(skipped)} existing file(s) were left unchanged; "
            "use --force or --backup to replace them"
        )
    return results
