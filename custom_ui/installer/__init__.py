"""Installer engine: dependency resolution, npm reconciliation, file writes."""

from .files import (
    ConflictAction,
    ConflictResolution,
    FileConflict,
    FileWriteResult,
    PromptCallback,
    WriteOutcome,
    WritePolicy,
    check_file_conflict,
    create_backup,
    ensure_directory,
    resolve_conflict,
    validate_path,
    write_file,
    write_managed,
)
from .npm import (
    LATEST,
    DependencyCheck,
    DependencyConflict,
    DependencyManager,
    PackageManager,
    parse_specifier,
)
from .orchestrator import (
    AddOptions,
    ComponentInstaller,
    ComponentInstallResult,
    resolve_file_path,
)
from .resolver import dependency_lookup, resolve_dependencies

__all__ = [
    "ConflictAction",
    "ConflictResolution",
    "FileConflict",
    "FileWriteResult",
    "PromptCallback",
    "WriteOutcome",
    "WritePolicy",
    "check_file_conflict",
    "create_backup",
    "ensure_directory",
    "resolve_conflict",
    "validate_path",
    "write_file",
    "write_managed",
    "LATEST",
    "DependencyCheck",
    "DependencyConflict",
    "DependencyManager",
    "PackageManager",
    "parse_specifier",
    "AddOptions",
    "ComponentInstaller",
    "ComponentInstallResult",
    "resolve_file_path",
    "dependency_lookup",
    "resolve_dependencies",
]
