"""Interactive prompts.

Prompts use questionary when both stdin and stdout are terminals. Without a
TTY no prompt is offered and callers fall back to their safe defaults.
"""

from .conflicts import (
    ask_conflict_resolution,
    conflict_prompt_for_session,
    is_interactive,
)

__all__ = [
    "ask_conflict_resolution",
    "conflict_prompt_for_session",
    "is_interactive",
]
