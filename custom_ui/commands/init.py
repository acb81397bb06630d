"""Init command implementation."""

import asyncio

import click

from custom_ui import setup_logging
from custom_ui.commands.utils import exit_with_error
from custom_ui.config import ConfigStore, CssFramework, ProjectConfig, ProjectType
from custom_ui.errors import CLIError, format_error
from custom_ui.feedback import ConsoleFeedback, Feedback
from custom_ui.installer import DependencyManager, WriteOutcome, WritePolicy, write_managed
from custom_ui.paths import get_package_json_path, get_project_root

UTILS_FILENAME = "utils.ts"

_CN_TAILWIND = """import { type ClassValue, clsx } from "clsx"
import { twMerge } from "tailwind-merge"

export function cn(...inputs: ClassValue[]) {
  return twMerge(clsx(inputs))
}
"""

_CN_PLAIN = """import { type ClassValue, clsx } from "clsx"

export function cn(...inputs: ClassValue[]) {
  return clsx(inputs)
}
"""

_DEFAULTS = ProjectConfig()


@click.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration")
@click.option(
    "--components-dir",
    default=_DEFAULTS.components_dir,
    show_default=True,
    help="Directory for component files",
)
@click.option(
    "--utils-dir",
    default=_DEFAULTS.utils_dir,
    show_default=True,
    help="Directory for utility files",
)
@click.option(
    "--css-framework",
    type=click.Choice([f.value for f in CssFramework]),
    default=_DEFAULTS.css_framework.value,
    show_default=True,
)
@click.option(
    "--typescript/--no-typescript",
    default=_DEFAULTS.typescript,
    show_default=True,
)
@click.option(
    "--project-type",
    type=click.Choice([t.value for t in ProjectType]),
    default=_DEFAULTS.project_type.value,
    show_default=True,
)
@click.option("--skip-deps", is_flag=True, help="Do not install base npm dependencies")
@click.pass_context
def init(
    ctx,
    force: bool,
    components_dir: str,
    utils_dir: str,
    css_framework: str,
    typescript: bool,
    project_type: str,
    skip_deps: bool,
):
    """Create custom-ui.json and the component directories."""
    setup_logging(ctx.obj.get("debug", False))
    feedback = ConsoleFeedback()
    try:
        config = ProjectConfig(
            components_dir=components_dir,
            utils_dir=utils_dir,
            css_framework=CssFramework(css_framework),
            typescript=typescript,
            project_type=ProjectType(project_type),
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        asyncio.run(run_init(config, feedback, force=force, skip_deps=skip_deps))
    except CLIError as e:
        feedback.error(format_error(e))
        exit_with_error(e)


def base_dependencies(config: ProjectConfig) -> list[str]:
    """npm packages the generated utility file and components rely on."""
    packages = ["class-variance-authority", "clsx"]
    if config.css_framework == CssFramework.TAILWIND:
        packages.append("tailwind-merge")
    return packages


def utils_file_content(config: ProjectConfig) -> str:
    if config.css_framework == CssFramework.TAILWIND:
        return _CN_TAILWIND
    return _CN_PLAIN


async def run_init(
    config: ProjectConfig,
    feedback: Feedback,
    force: bool = False,
    skip_deps: bool = False,
):
    project_root = get_project_root()
    store = ConfigStore(project_root)

    store.write(config, overwrite=force)
    feedback.success(f"Created {store.config_path.name}")

    store.create_directories()
    feedback.info(f"Components directory: {config.components_dir}")
    feedback.info(f"Utils directory: {config.utils_dir}")

    utils_path = store.utils_path() / UTILS_FILENAME
    result = await write_managed(
        utils_path, utils_file_content(config), WritePolicy(force=force)
    )
    if result.outcome == WriteOutcome.SKIPPED:
        feedback.warning(f"{config.utils_dir}/{UTILS_FILENAME} already exists, skipping")
    else:
        feedback.success(f"Created {config.utils_dir}/{UTILS_FILENAME}")

    if not get_package_json_path(project_root).exists():
        feedback.warning(
            "package.json not found; run 'npm init' before adding components"
        )
    elif not skip_deps:
        manager = DependencyManager(project_root)
        check = manager.check_dependencies(base_dependencies(config))
        if check.missing:
            feedback.info(f"Installing base dependencies: {', '.join(check.missing)}")
            await manager.install_dependencies(check.missing, dev=True)
            feedback.success(f"Installed {len(check.missing)} npm dependencies")

    feedback.success("Project initialized. Run 'custom-ui add <component>' to add components")
    return config
