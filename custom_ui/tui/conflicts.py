"""File conflict resolution prompt."""

import sys

import click
import questionary
from prompt_toolkit.styles import Style

from custom_ui.installer.files import ConflictAction, PromptCallback

_CHOICE_LABELS = {
    ConflictAction.OVERWRITE.value: "Overwrite the existing file",
    ConflictAction.SKIP.value: "Skip (keep the existing file)",
    ConflictAction.BACKUP.value: "Back up the existing file, then overwrite",
}

_STYLE = Style(
    [
        ("qmark", "fg:ansiyellow bold"),
        ("question", "bold"),
        ("pointer", "fg:ansicyan bold"),
    ]
)


def is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


async def ask_conflict_resolution(message: str, choices: list[str]) -> str:
    """Ask the user what to do with an existing file.

    Returns:
        One of ``choices``; ``"skip"`` if the prompt is cancelled.
    """
    if not is_interactive():
        raise RuntimeError("Interactive conflict resolution requires a TTY")

    options = [
        questionary.Choice(title=_CHOICE_LABELS.get(choice, choice), value=choice)
        for choice in choices
    ]

    try:
        selection = await questionary.select(
            message,
            choices=options,
            default=ConflictAction.SKIP.value if ConflictAction.SKIP.value in choices else None,
            style=_STYLE,
        ).ask_async()
    except KeyboardInterrupt:
        click.echo("Cancelled, skipping file.")
        return ConflictAction.SKIP.value

    if selection is None:
        return ConflictAction.SKIP.value
    return selection


def conflict_prompt_for_session(silent: bool = False) -> PromptCallback | None:
    """Return the prompt to use for this invocation, or None when headless."""
    if silent or not is_interactive():
        return None
    return ask_conflict_resolution
