"""Conflict-aware file operations.

Low-level gateway functions (``check_file_conflict``, ``write_file``,
``create_backup``, ``ensure_directory``) plus ``write_managed``, which applies
the force/backup policy to one target and reports exactly what it did.
"""

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable

from custom_ui.errors import CLIError, ErrorCode, handle_file_system_error
from custom_ui.paths import get_backup_path

_logging = logging.getLogger(__name__)

# (message, choices) -> chosen action
PromptCallback = Callable[[str, list[str]], Awaitable[str]]


class ConflictAction(Enum):
    OVERWRITE = "overwrite"
    SKIP = "skip"
    BACKUP = "backup"


class WriteOutcome(Enum):
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    BACKED_UP = "backed-up"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class FileConflict:
    exists: bool
    is_directory: bool = False
    size: int | None = None
    modified: datetime | None = None


@dataclass(frozen=True)
class ConflictResolution:
    action: ConflictAction
    backup_path: Path | None = None


@dataclass(frozen=True)
class WritePolicy:
    force: bool = False
    backup: bool = False


@dataclass(frozen=True)
class FileWriteResult:
    path: Path
    outcome: WriteOutcome
    backup_path: Path | None = None

    @property
    def written(self) -> bool:
        return self.outcome != WriteOutcome.SKIPPED


def check_file_conflict(path: Path | str) -> FileConflict:
    path = Path(path)
    try:
        stats = path.stat()
    except FileNotFoundError:
        return FileConflict(exists=False)

    return FileConflict(
        exists=True,
        is_directory=path.is_dir(),
        size=stats.st_size,
        modified=datetime.fromtimestamp(stats.st_mtime),
    )


def ensure_directory(path: Path | str) -> None:
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise handle_file_system_error(e, str(path)) from e


def create_backup(path: Path | str) -> Path:
    """Copy ``path`` to ``<path>.backup.<timestamp>`` and return the copy."""
    path = Path(path)
    if not path.is_file():
        raise CLIError(
            f"File not found for backup: {path}",
            ErrorCode.INVALID_PROJECT,
            context={"filePath": str(path)},
        )

    backup_path = get_backup_path(path)
    try:
        shutil.copy2(path, backup_path)
    except OSError as e:
        raise handle_file_system_error(e, str(path)) from e

    _logging.debug(f"Backed up {path} -> {backup_path}")
    return backup_path


def write_file(
    path: Path | str,
    content: str,
    overwrite: bool = False,
    create_backup_first: bool = False,
) -> Path | None:
    """Write ``content`` to ``path``, creating parent directories.

    Returns:
        The backup path when one was taken, otherwise None

    Raises:
        CLIError: FILE_EXISTS when the target exists and ``overwrite`` is off,
            or a classified file-system error.
    """
    path = Path(path)
    exists = path.exists()

    if exists and not overwrite:
        raise CLIError(
            f"File already exists: {path}",
            ErrorCode.FILE_EXISTS,
            [
                "Use --force flag to overwrite",
                "Use --backup flag to create a backup before overwriting",
            ],
            {"filePath": str(path)},
        )

    backup_path = None
    if exists and create_backup_first:
        backup_path = create_backup(path)

    ensure_directory(path.parent)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise handle_file_system_error(e, str(path)) from e

    return backup_path


async def resolve_conflict(
    path: Path | str, prompt: PromptCallback | None = None
) -> ConflictResolution:
    """Ask how to handle an existing file. Without a prompt the answer is skip."""
    path = Path(path)
    if not check_file_conflict(path).exists:
        return ConflictResolution(ConflictAction.OVERWRITE)

    if prompt is None:
        return ConflictResolution(ConflictAction.SKIP)

    choices = [a.value for a in ConflictAction]
    answer = await prompt(f"File {path} already exists. What would you like to do?", choices)

    if answer == ConflictAction.BACKUP.value:
        return ConflictResolution(ConflictAction.BACKUP, create_backup(path))
    if answer == ConflictAction.OVERWRITE.value:
        return ConflictResolution(ConflictAction.OVERWRITE)
    return ConflictResolution(ConflictAction.SKIP)


async def write_managed(
    path: Path | str,
    content: str,
    policy: WritePolicy,
    prompt: PromptCallback | None = None,
) -> FileWriteResult:
    """Write one file under the force/backup policy.

    1. no existing file: create it
    2. existing file and force: overwrite (backing up first if backup is set)
    3. existing file and backup: back up, then overwrite
    4. otherwise: ask ``prompt``; with no prompt the file is skipped
    """
    path = Path(path)
    try:
        conflict = check_file_conflict(path)

        if not conflict.exists:
            write_file(path, content)
            return FileWriteResult(path, WriteOutcome.CREATED)

        if policy.force or policy.backup:
            backup_path = write_file(
                path, content, overwrite=True, create_backup_first=policy.backup
            )
            if backup_path is not None:
                return FileWriteResult(path, WriteOutcome.BACKED_UP, backup_path)
            return FileWriteResult(path, WriteOutcome.OVERWRITTEN)

        resolution = await resolve_conflict(path, prompt)
        if resolution.action == ConflictAction.SKIP:
            return FileWriteResult(path, WriteOutcome.SKIPPED)

        write_file(path, content, overwrite=True)
        if resolution.action == ConflictAction.BACKUP:
            return FileWriteResult(path, WriteOutcome.BACKED_UP, resolution.backup_path)
        return FileWriteResult(path, WriteOutcome.OVERWRITTEN)
    except CLIError:
        raise
    except OSError as e:
        raise handle_file_system_error(e, str(path)) from e


def validate_path(path: Path | str, base: Path | str) -> bool:
    """Return True when ``path`` resolves inside ``base``."""
    resolved = (Path(base) / path).resolve()
    return resolved.is_relative_to(Path(base).resolve())


__all__ = [
    "PromptCallback",
    "ConflictAction",
    "WriteOutcome",
    "FileConflict",
    "ConflictResolution",
    "WritePolicy",
    "FileWriteResult",
    "check_file_conflict",
    "ensure_directory",
    "create_backup",
    "write_file",
    "resolve_conflict",
    "write_managed",
    "validate_path",
]
