"""npm dependency reconciliation and installation."""

import json
import logging
import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from custom_ui.errors import CLIError, ErrorCode
from custom_ui.execution import run_command_async
from custom_ui.paths import get_package_json_path

LATEST = "latest"
DEFAULT_RANGE = "^1.0.0"
MANIFEST_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")

_logging = logging.getLogger(__name__)


class PackageManager(Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


@dataclass(frozen=True)
class DependencyConflict:
    name: str
    installed: str
    required: str


@dataclass
class DependencyCheck:
    missing: list[str] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)
    conflicts: list[DependencyConflict] = field(default_factory=list)


def parse_specifier(specifier: str) -> tuple[str, str]:
    """Split an npm specifier into ``(name, version)``.

    Examples:
        >>> parse_specifier("react@18.2.0")
        ('react', '18.2.0')
        >>> parse_specifier("@types/node")
        ('@types/node', 'latest')
        >>> parse_specifier("@radix-ui/react-slot@1.0.0")
        ('@radix-ui/react-slot', '1.0.0')
    """
    if specifier.startswith("@"):
        name, sep, version = specifier.rpartition("@")
        if sep and name and "/" in name and version:
            return name, version
        return specifier, LATEST

    if "@" in specifier:
        name, _, version = specifier.partition("@")
        return name, version or LATEST

    return specifier, LATEST


class DependencyManager:
    """Reads package.json and drives the package manager for one project."""

    def __init__(self, project_root: Path | str):
        self.project_root = Path(project_root)
        self.package_json_path = get_package_json_path(self.project_root)

    def read_package_json(self) -> dict:
        if not self.package_json_path.exists():
            raise CLIError(
                "package.json not found in project root",
                ErrorCode.INVALID_PROJECT,
                ["Ensure you are in a valid Node.js project directory"],
                {"packageJsonPath": str(self.package_json_path)},
            )

        try:
            data = json.loads(self.package_json_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CLIError(
                f"Failed to parse package.json: {e}",
                ErrorCode.INVALID_PROJECT,
                ["Check package.json for syntax errors"],
            ) from e

        if not isinstance(data, dict):
            raise CLIError(
                "package.json must contain a JSON object",
                ErrorCode.INVALID_PROJECT,
                ["Check package.json for syntax errors"],
            )
        return data

    def write_package_json(self, data: dict) -> None:
        try:
            self.package_json_path.write_text(
                json.dumps(data, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as e:
            raise CLIError(
                f"Failed to write package.json: {e}",
                ErrorCode.INVALID_PROJECT,
            ) from e

    def installed_packages(self) -> dict[str, str]:
        """Merged view of all manifest sections; later sections win."""
        manifest = self.read_package_json()
        merged: dict[str, str] = {}
        for section in MANIFEST_SECTIONS:
            entries = manifest.get(section) or {}
            if isinstance(entries, dict):
                merged.update(entries)
        return merged

    def check_dependencies(self, specifiers: list[str]) -> DependencyCheck:
        """Classify specifiers as missing, existing, or version-conflicting.

        package.json is read on every call.
        """
        installed = self.installed_packages()
        result = DependencyCheck()

        for spec in specifiers:
            name, version = parse_specifier(spec)
            current = installed.get(name)

            if not current:
                result.missing.append(spec)
                continue

            result.existing.append(name)
            if version != LATEST and current != version:
                result.conflicts.append(
                    DependencyConflict(name=name, installed=current, required=version)
                )

        _logging.debug(
            f"Dependency check: missing={result.missing} existing={result.existing} "
            f"conflicts={[c.name for c in result.conflicts]}"
        )
        return result

    def build_install_command(
        self,
        packages: list[str],
        dev: bool = False,
        exact: bool = False,
        silent: bool = False,
    ) -> str:
        parts = ["npm", "install"]
        if dev:
            parts.append("--save-dev")
        if exact:
            parts.append("--save-exact")
        if silent:
            parts.append("--silent")
        parts.extend(shlex.quote(p) for p in packages)
        return " ".join(parts)

    async def install_dependencies(
        self,
        packages: list[str],
        dev: bool = False,
        exact: bool = False,
        silent: bool = False,
    ) -> None:
        if not packages:
            return

        command = self.build_install_command(packages, dev=dev, exact=exact, silent=silent)
        output, returncode = await run_command_async(command, cwd=self.project_root)

        if returncode != 0:
            raise CLIError(
                f"Failed to install dependencies: {output}",
                ErrorCode.NETWORK_ERROR,
                [
                    "Check your internet connection",
                    "Verify npm is installed and configured",
                    "Try running npm install manually",
                ],
                {"command": command, "exitCode": returncode},
            )
        _logging.debug(f"Installed npm packages: {', '.join(packages)}")

    def add_dependencies_to_package_json(
        self, specifiers: list[str], dev: bool = False
    ) -> None:
        """Record dependencies in package.json without installing them."""
        manifest = self.read_package_json()
        section = "devDependencies" if dev else "dependencies"
        entries = manifest.setdefault(section, {})

        for spec in specifiers:
            name, version = parse_specifier(spec)
            entries[name] = DEFAULT_RANGE if version == LATEST else version

        self.write_package_json(manifest)

    def detect_package_manager(self) -> PackageManager:
        if (self.project_root / "yarn.lock").exists():
            return PackageManager.YARN
        if (self.project_root / "pnpm-lock.yaml").exists():
            return PackageManager.PNPM
        return PackageManager.NPM

    async def run_install(self, silent: bool = False) -> None:
        manager = self.detect_package_manager()
        command = f"{manager.value} install"
        if silent:
            command += " --silent"

        output, returncode = await run_command_async(command, cwd=self.project_root)
        if returncode != 0:
            raise CLIError(
                f"Failed to run {manager.value} install: {output}",
                ErrorCode.NETWORK_ERROR,
                [
                    "Check your internet connection",
                    f"Verify {manager.value} is installed and configured",
                    f"Try running {command} manually",
                ],
                {"command": command, "exitCode": returncode},
            )


__all__ = [
    "LATEST",
    "PackageManager",
    "DependencyConflict",
    "DependencyCheck",
    "DependencyManager",
    "parse_specifier",
]
