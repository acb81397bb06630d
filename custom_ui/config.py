"""Project configuration loading, validation and persistence."""

import json
import logging
import shutil
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from custom_ui.errors import CLIError, ConfigError, ErrorCode
from custom_ui.paths import get_backup_path, get_config_path

_logging = logging.getLogger(__name__)


class CssFramework(Enum):
    TAILWIND = "tailwind"
    CSS_MODULES = "css-modules"
    STYLED_COMPONENTS = "styled-components"


class ProjectType(Enum):
    NEXTJS = "nextjs"
    VITE = "vite"
    CRA = "cra"
    GENERIC = "generic"


REQUIRED_FIELDS = [
    "componentsDir",
    "utilsDir",
    "cssFramework",
    "typescript",
    "projectType",
]


@dataclass(frozen=True)
class ProjectConfig:
    """Target directories and project traits stored in custom-ui.json."""
    components_dir: str = "src/components/ui"
    utils_dir: str = "src/lib"
    css_framework: CssFramework = CssFramework.TAILWIND
    typescript: bool = True
    project_type: ProjectType = ProjectType.GENERIC

    def __post_init__(self):
        if not self.components_dir or not isinstance(self.components_dir, str):
            raise ValueError("componentsDir must be a non-empty string")
        if not self.utils_dir or not isinstance(self.utils_dir, str):
            raise ValueError("utilsDir must be a non-empty string")

    def with_overrides(self, components_dir: str | None = None) -> "ProjectConfig":
        if components_dir:
            return replace(self, components_dir=components_dir)
        return self

    def to_dict(self) -> dict:
        return {
            "componentsDir": self.components_dir,
            "utilsDir": self.utils_dir,
            "cssFramework": self.css_framework.value,
            "typescript": self.typescript,
            "projectType": self.project_type.value,
        }


def validate_config(data: dict) -> ProjectConfig:
    """Validate and convert raw dict to ProjectConfig.

    Args:
        data: Raw dict from json.loads() containing config data

    Returns:
        ProjectConfig with enum fields converted

    Raises:
        ConfigError: If validation fails with the offending field named
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a JSON object, got {type(data).__name__}")

    for field_name in REQUIRED_FIELDS:
        if field_name not in data:
            raise ConfigError(f"Missing required field: {field_name}")

    for field_name in ("componentsDir", "utilsDir"):
        if not isinstance(data[field_name], str):
            raise ConfigError(
                f"{field_name} must be a string, got {type(data[field_name]).__name__}"
            )

    try:
        css_framework = CssFramework(data["cssFramework"])
    except ValueError:
        valid = ", ".join(f.value for f in CssFramework)
        raise ConfigError(f"cssFramework must be one of: {valid}")

    if not isinstance(data["typescript"], bool):
        raise ConfigError("typescript must be a boolean")

    try:
        project_type = ProjectType(data["projectType"])
    except ValueError:
        valid = ", ".join(t.value for t in ProjectType)
        raise ConfigError(f"projectType must be one of: {valid}")

    try:
        return ProjectConfig(
            components_dir=data["componentsDir"],
            utils_dir=data["utilsDir"],
            css_framework=css_framework,
            typescript=data["typescript"],
            project_type=project_type,
        )
    except ValueError as e:
        raise ConfigError(str(e))


def _format_syntax_error(original_text: str, error: json.JSONDecodeError) -> str:
    """Format a JSON syntax error with line, caret, and context."""
    lines = original_text.split("\n")
    msg_parts = [
        f"Config syntax error at line {error.lineno}, col {error.colno}: {error.msg}"
    ]
    if 1 <= error.lineno <= len(lines):
        msg_parts.append(lines[error.lineno - 1])
        msg_parts.append(" " * (error.colno - 1) + "^")
    return "\n".join(msg_parts)


class ConfigStore:
    """Reads and writes custom-ui.json for a project root."""

    def __init__(self, project_root: Path | str):
        self.project_root = Path(project_root)
        self.config_path = get_config_path(self.project_root)

    def exists(self) -> bool:
        return self.config_path.is_file()

    def read(self) -> ProjectConfig:
        """Read and validate the configuration file.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        if not self.exists():
            raise ConfigError(
                f"Configuration file not found at {self.config_path}",
                ["Run 'custom-ui init' to initialize the project configuration"],
                {"configPath": str(self.config_path)},
            )

        try:
            text = self.config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read configuration file: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(
                _format_syntax_error(text, e),
                ["Check if the configuration file is valid JSON"],
                {"configPath": str(self.config_path)},
            ) from e

        config = validate_config(data)
        _logging.debug(f"Loaded configuration from {self.config_path}")
        return config

    def write(self, config: ProjectConfig, overwrite: bool = False) -> None:
        if self.exists() and not overwrite:
            raise CLIError(
                f"Configuration file already exists at {self.config_path}",
                ErrorCode.FILE_EXISTS,
                ["Use --force flag to overwrite existing configuration"],
                {"configPath": str(self.config_path)},
            )

        content = json.dumps(config.to_dict(), indent=2) + "\n"
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to write configuration file: {e}") from e

    def update(self, **changes) -> ProjectConfig:
        updated = replace(self.read(), **changes)
        self.write(updated, overwrite=True)
        return updated

    def components_path(self) -> Path:
        return (self.project_root / self.read().components_dir).resolve()

    def utils_path(self) -> Path:
        return (self.project_root / self.read().utils_dir).resolve()

    def create_directories(self) -> None:
        self.components_path().mkdir(parents=True, exist_ok=True)
        self.utils_path().mkdir(parents=True, exist_ok=True)

    def backup(self) -> Path:
        if not self.exists():
            raise ConfigError("No configuration file to backup")
        backup_path = get_backup_path(self.config_path)
        shutil.copyfile(self.config_path, backup_path)
        return backup_path

    def restore(self, backup_path: Path | str) -> None:
        backup_path = Path(backup_path)
        if not backup_path.is_file():
            raise ConfigError(f"Backup file not found: {backup_path}")
        shutil.copyfile(backup_path, self.config_path)


__all__ = [
    "CssFramework",
    "ProjectType",
    "ProjectConfig",
    "ConfigStore",
    "validate_config",
]
