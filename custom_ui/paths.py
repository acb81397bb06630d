"""Path helpers for project files and the component registry."""

import os
from datetime import datetime, timezone
from pathlib import Path

CONFIG_FILENAME = "custom-ui.json"
PACKAGE_JSON = "package.json"
REGISTRY_ENV_VAR = "CUSTOM_UI_REGISTRY"
CONFIG_ENV_VAR = "CUSTOM_UI_CONFIG"


def get_project_root() -> Path:
    """Return the project root, which is the current working directory."""
    return Path.cwd()


def get_config_path(project_root: Path) -> Path:
    """Return path to the project configuration file.

    Priority:
    1. CUSTOM_UI_CONFIG environment variable (if set)
    2. <project_root>/custom-ui.json
    """
    if CONFIG_ENV_VAR in os.environ:
        return Path(os.environ[CONFIG_ENV_VAR])
    return project_root / CONFIG_FILENAME


def get_package_json_path(project_root: Path) -> Path:
    return project_root / PACKAGE_JSON


def get_bundled_registry_path() -> Path:
    """Return path to the registry shipped with the package (read-only)."""
    return Path(__file__).parent / "registry" / "data" / "registry.json"


def get_registry_source(override: str | None = None) -> str:
    """Return the registry location: a file path or an http(s) URL.

    Priority:
    1. explicit override (the --registry option)
    2. CUSTOM_UI_REGISTRY environment variable
    3. bundled registry.json
    """
    if override:
        return override
    if os.environ.get(REGISTRY_ENV_VAR):
        return os.environ[REGISTRY_ENV_VAR]
    return str(get_bundled_registry_path())


def backup_timestamp(now: datetime | None = None) -> str:
    """Return a UTC ISO-8601 timestamp with ':' and '.' replaced by '-'.

    Examples:
        >>> backup_timestamp(datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
        '2024-01-02T03-04-05-678Z'
    """
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    stamp = stamp.replace("+00:00", "Z")
    return stamp.replace(":", "-").replace(".", "-")


def get_backup_path(path: Path, now: datetime | None = None) -> Path:
    """Return ``<path>.backup.<timestamp>`` next to the original file."""
    return path.with_name(f"{path.name}.backup.{backup_timestamp(now)}")
