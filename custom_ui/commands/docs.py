"""Docs command implementation."""

import asyncio
import json
import re

import click

from custom_ui import setup_logging
from custom_ui.commands.utils import build_registry_client, exit_with_error
from custom_ui.errors import CLIError, format_error
from custom_ui.feedback import ConsoleFeedback, Feedback
from custom_ui.registry import ComponentRecord, RegistryClient

_PROPS_PATTERNS = [
    re.compile(r"interface\s+\w*Props[^{]*\{[^}]*\}"),
    re.compile(r"type\s+\w*Props[^=]*=\s*[^;]+;"),
]


@click.command()
@click.argument("component", required=False)
@click.option("--examples", is_flag=True, help="Show usage examples")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.pass_context
def docs(ctx, component: str | None, examples: bool, output_format: str):
    """Show documentation for a component."""
    setup_logging(ctx.obj.get("debug", False))
    feedback = ConsoleFeedback()
    registry = build_registry_client(ctx)
    try:
        if component is None:
            asyncio.run(run_general_help(registry, feedback))
        else:
            asyncio.run(
                run_docs(registry, feedback, component, examples, output_format)
            )
    except CLIError as e:
        feedback.error(format_error(e))
        exit_with_error(e)


def extract_props(content: str) -> str | None:
    """Return the first ``*Props`` interface or type alias in ``content``."""
    for pattern in _PROPS_PATTERNS:
        match = pattern.search(content)
        if match:
            return match.group(0)
    return None


def basic_example(name: str) -> str:
    title = name[:1].upper() + name[1:]
    return (
        f'import {{ {title} }} from "@/components/ui/{name}"\n'
        "\n"
        "export function Example() {\n"
        f"  return <{title} />\n"
        "}"
    )


def docs_as_dict(name: str, component: ComponentRecord) -> dict:
    return {
        "name": name,
        "description": component.description,
        "dependencies": list(component.dependencies),
        "npmDependencies": list(component.npm_dependencies),
        "files": [{"path": f.path, "type": f.type.value} for f in component.files],
        "examples": list(component.examples),
        "installation": f"custom-ui add {name}",
    }


def format_text_docs(name: str, component: ComponentRecord, examples: bool) -> list[str]:
    lines = [f"\n📖 {name.upper()} COMPONENT\n", f"Description: {component.description}\n"]

    if component.dependencies:
        lines.append("Component Dependencies:")
        lines.extend(f"  - {dep}" for dep in component.dependencies)
        lines.append("")

    if component.npm_dependencies:
        lines.append("NPM Dependencies:")
        lines.extend(f"  - {dep}" for dep in component.npm_dependencies)
        lines.append("")

    lines.append("Files:")
    lines.extend(f"  - {f.path} ({f.type.value})" for f in component.files)
    lines.append("")

    lines.append("Installation:")
    lines.append(f"  custom-ui add {name}\n")

    if examples or component.examples:
        lines.append("Usage Examples:\n")
        for index, example in enumerate(component.examples or [basic_example(name)], 1):
            lines.append(f"Example {index}:")
            lines.extend(["```tsx", example, "```\n"])

    primary = component.primary_file
    props = extract_props(primary.content) if primary else None
    if props:
        lines.extend(["Props:", "```typescript", props, "```\n"])

    return lines


async def run_docs(
    registry: RegistryClient,
    feedback: Feedback,
    name: str,
    examples: bool = False,
    output_format: str = "text",
):
    if output_format != "json":
        feedback.info(f"Loading documentation for {name}...")
    component = await registry.get_component(name)

    if output_format == "json":
        click.echo(json.dumps(docs_as_dict(name, component), indent=2))
        return

    for line in format_text_docs(name, component, examples):
        click.echo(line)


async def run_general_help(registry: RegistryClient, feedback: Feedback):
    click.echo("Usage: custom-ui docs <component-name> [--examples] [--format text|json]\n")

    components = await registry.get_all_components_or_empty(feedback)
    if not components:
        feedback.warning("No components available in registry")
        return

    click.echo("Available components:")
    for name in components:
        click.echo(f"  {name}")
    click.echo("\nExample: custom-ui docs button")
