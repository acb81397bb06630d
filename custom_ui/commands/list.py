"""List command implementation."""

import asyncio

import click

from custom_ui import setup_logging
from custom_ui.commands.utils import build_registry_client
from custom_ui.feedback import ConsoleFeedback, Feedback
from custom_ui.registry import ComponentRecord, RegistryClient


@click.command()
@click.option("--verbose", "-v", is_flag=True, help="Show dependencies and files")
@click.option("--search", "-s", help="Only show components matching this term")
@click.pass_context
def list_components(ctx, verbose: bool, search: str | None):
    """List the components available in the registry."""
    setup_logging(ctx.obj.get("debug", False))
    asyncio.run(
        run_list(build_registry_client(ctx), ConsoleFeedback(), verbose, search)
    )


def filter_components(
    components: dict[str, ComponentRecord], search: str | None
) -> dict[str, ComponentRecord]:
    """Case-insensitive match on component name or description."""
    if not search:
        return dict(components)
    term = search.lower()
    return {
        name: component
        for name, component in components.items()
        if term in name.lower() or term in component.description.lower()
    }


def format_compact(name: str, component: ComponentRecord) -> str:
    return f"  {name:<15} - {component.description}"


def format_verbose(name: str, component: ComponentRecord) -> list[str]:
    lines = [f"📦 {name}", f"   Description: {component.description}"]
    if component.dependencies:
        lines.append(f"   Dependencies: {', '.join(component.dependencies)}")
    if component.npm_dependencies:
        lines.append(f"   NPM Dependencies: {', '.join(component.npm_dependencies)}")
    lines.append(f"   Files: {len(component.files)} file(s)")
    lines.append("")
    return lines


async def run_list(
    registry: RegistryClient,
    feedback: Feedback,
    verbose: bool = False,
    search: str | None = None,
):
    components = await registry.get_all_components_or_empty(feedback)
    if not components:
        feedback.warning("No components found in registry")
        return

    matches = filter_components(components, search)
    if not matches:
        feedback.warning("No components match the specified criteria")
        return

    click.echo("\nAvailable Components:\n")
    for name, component in matches.items():
        if verbose:
            for line in format_verbose(name, component):
                click.echo(line)
        else:
            click.echo(format_compact(name, component))

    click.echo(f"\nFound {len(matches)} component(s)")
    click.echo('Use "custom-ui add <component>" to install a component')
    click.echo('Use "custom-ui docs <component>" to see documentation')
