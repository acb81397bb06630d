"""Tests for conflict-aware file writes."""

import re
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from custom_ui.errors import CLIError, ErrorCode
from custom_ui.installer import (
    ConflictAction,
    WriteOutcome,
    WritePolicy,
    check_file_conflict,
    create_backup,
    resolve_conflict,
    validate_path,
    write_file,
    write_managed,
)
from custom_ui.paths import backup_timestamp, get_backup_path

BACKUP_NAME = re.compile(r"^button\.tsx\.backup\.\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{3}Z$")


def backups_of(path):
    return sorted(path.parent.glob(f"{path.name}.backup.*"))


class TestBackupNaming:
    def test_timestamp_format(self):
        moment = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
        assert backup_timestamp(moment) == "2024-01-02T03-04-05-678Z"

    def test_backup_path_is_sibling(self, temp_dir):
        moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        target = temp_dir / "button.tsx"
        assert get_backup_path(target, moment) == (
            temp_dir / "button.tsx.backup.2024-01-02T03-04-05-000Z"
        )

    def test_create_backup_copies_content(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("original")

        backup = create_backup(target)

        assert BACKUP_NAME.match(backup.name)
        assert backup.read_text() == "original"
        assert target.read_text() == "original"

    def test_create_backup_of_missing_file(self, temp_dir):
        with pytest.raises(CLIError):
            create_backup(temp_dir / "nope.tsx")


class TestGateway:
    def test_check_file_conflict(self, temp_dir):
        target = temp_dir / "a.txt"
        assert not check_file_conflict(target).exists

        target.write_text("hello")
        conflict = check_file_conflict(target)
        assert conflict.exists
        assert not conflict.is_directory
        assert conflict.size == 5
        assert conflict.modified is not None

    def test_write_file_creates_parents(self, temp_dir):
        target = temp_dir / "src" / "components" / "ui" / "button.tsx"
        assert write_file(target, "content") is None
        assert target.read_text() == "content"

    def test_write_file_refuses_existing(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("old")
        with pytest.raises(CLIError) as exc_info:
            write_file(target, "new")
        assert exc_info.value.code == ErrorCode.FILE_EXISTS
        assert target.read_text() == "old"

    def test_write_file_overwrite_with_backup(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("old")
        backup = write_file(target, "new", overwrite=True, create_backup_first=True)
        assert target.read_text() == "new"
        assert backup.read_text() == "old"

    def test_validate_path(self, temp_dir):
        assert validate_path("src/components/ui/button.tsx", temp_dir)
        assert not validate_path("../outside.tsx", temp_dir)
        assert not validate_path("src/../../outside.tsx", temp_dir)


def answering(choice):
    async def prompt(message, choices):
        return choice

    return prompt


class TestResolveConflict:
    @pytest.mark.asyncio
    async def test_no_conflict_means_overwrite(self, temp_dir):
        resolution = await resolve_conflict(temp_dir / "new.tsx")
        assert resolution.action == ConflictAction.OVERWRITE

    @pytest.mark.asyncio
    async def test_no_prompt_means_skip(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("old")
        assert (await resolve_conflict(target)).action == ConflictAction.SKIP

    @pytest.mark.asyncio
    async def test_prompt_receives_choices(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("old")
        prompt = AsyncMock(return_value="overwrite")

        resolution = await resolve_conflict(target, prompt)

        assert resolution.action == ConflictAction.OVERWRITE
        message, choices = prompt.await_args[0]
        assert str(target) in message
        assert choices == ["overwrite", "skip", "backup"]

    @pytest.mark.asyncio
    async def test_backup_choice_backs_up_immediately(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("old")

        resolution = await resolve_conflict(target, answering("backup"))

        assert resolution.action == ConflictAction.BACKUP
        assert resolution.backup_path.read_text() == "old"


class TestWriteManaged:
    @pytest.mark.asyncio
    async def test_creates_new_file(self, temp_dir):
        target = temp_dir / "ui" / "button.tsx"
        result = await write_managed(target, "new", WritePolicy())
        assert result.outcome == WriteOutcome.CREATED
        assert result.written
        assert target.read_text() == "new"

    @pytest.mark.asyncio
    async def test_existing_file_skipped_without_prompt(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("mine")

        result = await write_managed(target, "theirs", WritePolicy())

        assert result.outcome == WriteOutcome.SKIPPED
        assert not result.written
        assert target.read_text() == "mine"
        assert backups_of(target) == []

    @pytest.mark.asyncio
    async def test_force_overwrites(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("mine")

        result = await write_managed(target, "theirs", WritePolicy(force=True))

        assert result.outcome == WriteOutcome.OVERWRITTEN
        assert target.read_text() == "theirs"
        assert backups_of(target) == []

    @pytest.mark.asyncio
    async def test_backup_takes_single_backup(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("mine")

        result = await write_managed(target, "theirs", WritePolicy(backup=True))

        assert result.outcome == WriteOutcome.BACKED_UP
        assert target.read_text() == "theirs"
        assert backups_of(target) == [result.backup_path]
        assert result.backup_path.read_text() == "mine"

    @pytest.mark.asyncio
    async def test_force_with_backup_still_backs_up(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("mine")

        result = await write_managed(target, "theirs", WritePolicy(force=True, backup=True))

        assert result.outcome == WriteOutcome.BACKED_UP
        assert result.backup_path.read_text() == "mine"

    @pytest.mark.asyncio
    async def test_force_is_idempotent(self, temp_dir):
        target = temp_dir / "button.tsx"
        policy = WritePolicy(force=True)

        await write_managed(target, "content", policy)
        await write_managed(target, "content", policy)

        assert target.read_text() == "content"
        assert [p.name for p in temp_dir.iterdir()] == ["button.tsx"]

    @pytest.mark.asyncio
    async def test_prompt_decides_when_no_flags(self, temp_dir):
        target = temp_dir / "button.tsx"
        target.write_text("mine")

        result = await write_managed(target, "theirs", WritePolicy(), prompt=answering("skip"))
        assert result.outcome == WriteOutcome.SKIPPED

        result = await write_managed(target, "theirs", WritePolicy(), prompt=answering("backup"))
        assert result.outcome == WriteOutcome.BACKED_UP
        assert target.read_text() == "theirs"
        assert result.backup_path.read_text() == "mine"

    @pytest.mark.asyncio
    async def test_prompt_not_used_for_new_files(self, temp_dir):
        prompt = AsyncMock()
        await write_managed(temp_dir / "new.tsx", "x", WritePolicy(), prompt)
        prompt.assert_not_awaited()
