"""User feedback channel passed explicitly through commands and the installer.

One ``Feedback`` instance is created per command invocation and handed to
everything that reports progress. ``ConsoleFeedback`` prints with click;
``RecordingFeedback`` keeps messages in memory for tests and for callers
that want to inspect what happened.
"""

from dataclasses import dataclass, field

import click


class Feedback:
    """Reporting interface. The base implementation discards everything."""

    def success(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def step(self, current: int, total: int, message: str) -> None:
        pass


class ConsoleFeedback(Feedback):
    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def success(self, message: str) -> None:
        if not self.quiet:
            click.secho(f"✅ {message}", fg="green")

    def error(self, message: str) -> None:
        click.secho(f"❌ {message}", fg="red", err=True)

    def warning(self, message: str) -> None:
        click.secho(f"⚠️  {message}", fg="yellow", err=True)

    def info(self, message: str) -> None:
        if not self.quiet:
            click.secho(f"ℹ️  {message}", fg="blue")

    def step(self, current: int, total: int, message: str) -> None:
        if not self.quiet:
            click.echo(f"[{current}/{total}] {message}")


@dataclass
class RecordingFeedback(Feedback):
    messages: list[tuple[str, str]] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def step(self, current: int, total: int, message: str) -> None:
        self.messages.append(("step", f"[{current}/{total}] {message}"))

    def of_kind(self, kind: str) -> list[str]:
        return [msg for k, msg in self.messages if k == kind]


__all__ = [
    "Feedback",
    "ConsoleFeedback",
    "RecordingFeedback",
]
