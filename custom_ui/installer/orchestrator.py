"""Component installation workflow.

``ComponentInstaller.add_components`` processes requested components one at a
time. For each one it fetches the record, resolves the dependency closure,
writes every dependency's files in order, writes the component's own files,
reconciles and installs npm packages, and finally writes utility files.

A failure stops the batch. Files already written for earlier components (or
earlier steps of the failing one) are left in place.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from custom_ui.config import ConfigStore, ProjectConfig
from custom_ui.errors import (
    CLIError,
    ConfigError,
    ErrorCode,
    create_error,
    format_error,
    handle_component_error,
    handle_dependency_error,
    handle_file_system_error,
)
from custom_ui.feedback import Feedback
from custom_ui.paths import get_package_json_path
from custom_ui.registry.client import RegistryClient
from custom_ui.registry.models import ComponentFile, ComponentRecord, FileType

from .files import (
    FileWriteResult,
    PromptCallback,
    WriteOutcome,
    WritePolicy,
    check_file_conflict,
    ensure_directory,
    validate_path,
    write_managed,
)
from .npm import DependencyConflict, DependencyManager
from .resolver import dependency_lookup, resolve_dependencies

_logging = logging.getLogger(__name__)

COMPONENTS_PREFIX = "components/ui"
UTILS_PREFIX = "lib"


@dataclass(frozen=True)
class AddOptions:
    force: bool = False
    backup: bool = False
    skip_deps: bool = False
    silent: bool = False
    components_dir: str | None = None

    @property
    def policy(self) -> WritePolicy:
        return WritePolicy(force=self.force, backup=self.backup)


@dataclass
class ComponentInstallResult:
    name: str
    dependencies: list[str] = field(default_factory=list)
    files: list[FileWriteResult] = field(default_factory=list)
    npm_installed: list[str] = field(default_factory=list)
    npm_conflicts: list[DependencyConflict] = field(default_factory=list)

    def files_with(self, outcome: WriteOutcome) -> list[Path]:
        return [f.path for f in self.files if f.outcome == outcome]


def resolve_file_path(file: ComponentFile, config: ProjectConfig) -> str:
    """Map a registry file path onto the project's configured directories."""
    if file.type == FileType.COMPONENT:
        return file.path.replace(COMPONENTS_PREFIX, config.components_dir, 1)
    if file.type == FileType.UTILITY:
        return file.path.replace(UTILS_PREFIX, config.utils_dir, 1)
    if file.type == FileType.OTHER:
        return file.path
    raise ValueError(f"Unhandled file type: {file.type}")


class ComponentInstaller:
    def __init__(
        self,
        registry: RegistryClient,
        config_store: ConfigStore,
        feedback: Feedback,
        project_root: Path | str,
        prompt: PromptCallback | None = None,
        dependency_manager: DependencyManager | None = None,
    ):
        self.registry = registry
        self.config_store = config_store
        self.feedback = feedback
        self.project_root = Path(project_root)
        self.prompt = prompt
        self.dependency_manager = dependency_manager or DependencyManager(
            self.project_root
        )

    def load_project_config(self, options: AddOptions) -> ProjectConfig:
        try:
            config = self.config_store.read()
        except ConfigError as e:
            raise create_error(
                ErrorCode.CONFIG_ERROR,
                "Project not initialized or configuration is invalid",
                {
                    "configPath": str(self.config_store.config_path),
                    "originalError": e.message,
                },
            ) from e
        return config.with_overrides(components_dir=options.components_dir)

    def validate_project(self, config: ProjectConfig) -> None:
        package_json = get_package_json_path(self.project_root)
        if not check_file_conflict(package_json).exists:
            raise create_error(
                ErrorCode.INVALID_PROJECT,
                "package.json not found in current directory",
                {
                    "projectRoot": str(self.project_root),
                    "packageJsonPath": str(package_json),
                },
            )

        ensure_directory(self.project_root / config.components_dir)
        ensure_directory(self.project_root / config.utils_dir)

    async def add_components(
        self, names: list[str], options: AddOptions
    ) -> list[ComponentInstallResult]:
        """Install each requested component in order; stop at the first failure."""
        try:
            if not names:
                raise create_error(
                    ErrorCode.INVALID_COMMAND,
                    "No component specified",
                    {"args": names},
                )

            config = self.load_project_config(options)
            self.validate_project(config)

            results = []
            for index, name in enumerate(names, 1):
                self.feedback.step(index, len(names), f"Installing component: {name}")
                results.append(await self.add_component(name, config, options))

            self.feedback.success(
                f"Successfully added {len(names)} component(s): {', '.join(names)}"
            )
            return results
        except CLIError as e:
            self.feedback.error(format_error(e))
            raise
        except Exception as e:
            error = create_error(
                ErrorCode.REGISTRY_ERROR,
                f"Unexpected error during component installation: {e}",
                {"originalError": repr(e)},
            )
            self.feedback.error(format_error(error))
            raise error from e

    async def add_component(
        self, name: str, config: ProjectConfig, options: AddOptions
    ) -> ComponentInstallResult:
        try:
            self.feedback.info(f"Adding component: {name}")
            component = await self.registry.get_component(name)
            catalog = await self.registry.get_all_components()

            order = resolve_dependencies(
                [name, *component.dependencies], dependency_lookup(catalog)
            )
            dependencies = [dep for dep in order if dep != name]
            if dependencies:
                self.feedback.info(f"Resolved dependencies: {', '.join(dependencies)}")

            result = ComponentInstallResult(name=name, dependencies=dependencies)

            for dep_name in dependencies:
                self.feedback.info(f"Installing dependency: {dep_name}")
                dep_component = await self.registry.get_component(dep_name)
                result.files.extend(
                    await self.install_component_files(dep_component, config, options)
                )

            result.files.extend(await self.install_component_files(component, config, options))

            if not options.skip_deps and component.npm_dependencies:
                installed, conflicts = await self.install_npm_dependencies(
                    component.npm_dependencies, options
                )
                result.npm_installed = installed
                result.npm_conflicts = conflicts

            if component.utils:
                result.files.extend(
                    await self.install_utilities(component.utils, config, options)
                )

            self.feedback.success(f"Component {name} installed successfully")
            return result
        except CLIError:
            raise
        except Exception as e:
            raise handle_component_error(name, e) from e

    async def install_component_files(
        self,
        component: ComponentRecord,
        config: ProjectConfig,
        options: AddOptions,
    ) -> list[FileWriteResult]:
        primary = component.primary_file
        ordered = ([primary] if primary else []) + component.auxiliary_files

        results = []
        for file in ordered:
            label = f"{component.name} {file.type.value}"
            results.append(await self._write(file, config, options, label))
        return results

    async def install_utilities(
        self,
        utils: list[ComponentFile],
        config: ProjectConfig,
        options: AddOptions,
    ) -> list[FileWriteResult]:
        results = []
        for util in utils:
            target = self._target_path(util, config)
            if check_file_conflict(target).exists and not options.force:
                self.feedback.warning(f"Utility {util.path} already exists, skipping...")
                results.append(FileWriteResult(target, WriteOutcome.SKIPPED))
                continue
            results.append(
                await self._write(util, config, options, f"utility {Path(util.path).name}")
            )
        return results

    async def install_npm_dependencies(
        self, specifiers: list[str], options: AddOptions
    ) -> tuple[list[str], list[DependencyConflict]]:
        try:
            self.feedback.info(f"Checking npm dependencies: {', '.join(specifiers)}")
            check = self.dependency_manager.check_dependencies(specifiers)

            if check.conflicts:
                self.feedback.warning("Dependency version conflicts detected:")
                for conflict in check.conflicts:
                    self.feedback.warning(
                        f"  {conflict.name}: installed {conflict.installed}, "
                        f"required {conflict.required}"
                    )
                if not options.force:
                    raise create_error(
                        ErrorCode.DEPENDENCY_CONFLICT,
                        "Dependency version conflicts detected",
                        {
                            "conflicts": ", ".join(
                                f"{c.name} ({c.installed} != {c.required})"
                                for c in check.conflicts
                            )
                        },
                    )
                self.feedback.warning("Proceeding with installation due to --force flag")

            if check.missing:
                await self.dependency_manager.install_dependencies(
                    check.missing, silent=options.silent
                )
                self.feedback.success(f"Installed {len(check.missing)} npm dependencies")
            else:
                self.feedback.info("All dependencies already installed")

            return check.missing, check.conflicts
        except CLIError:
            raise
        except Exception as e:
            raise handle_dependency_error(", ".join(specifiers), e) from e

    def _target_path(self, file: ComponentFile, config: ProjectConfig) -> Path:
        relative = resolve_file_path(file, config)
        if not validate_path(relative, self.project_root):
            raise CLIError(
                f"Refusing to write outside the project: {relative}",
                ErrorCode.PERMISSION_DENIED,
                ["Check the registry entry for this file"],
                {"filePath": relative, "projectRoot": str(self.project_root)},
            )
        return self.project_root / relative

    async def _write(
        self,
        file: ComponentFile,
        config: ProjectConfig,
        options: AddOptions,
        label: str,
    ) -> FileWriteResult:
        target = self._target_path(file, config)
        try:
            result = await write_managed(target, file.content, options.policy, self.prompt)
        except OSError as e:
            raise handle_file_system_error(e, str(target)) from e

        shown = target.relative_to(self.project_root)
        if result.outcome == WriteOutcome.SKIPPED:
            self.feedback.warning(f"Skipped {label}: {shown}")
        elif result.outcome == WriteOutcome.BACKED_UP:
            self.feedback.info(f"Created backup: {result.backup_path}")
            self.feedback.success(f"Installed {label}: {shown}")
        elif result.outcome == WriteOutcome.OVERWRITTEN:
            self.feedback.warning(f"Overwrote {label}: {shown}")
        else:
            self.feedback.success(f"Installed {label}: {shown}")
        return result


__all__ = [
    "AddOptions",
    "ComponentInstallResult",
    "ComponentInstaller",
    "resolve_file_path",
]
