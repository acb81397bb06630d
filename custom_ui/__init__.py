"""custom-ui: copy React UI components and their dependencies into a project."""

import logging

from custom_ui.errors import (
    CLIError,
    CircularDependencyError,
    ConfigError,
    ErrorCode,
    RegistryError,
    create_error,
    format_error,
)
from custom_ui.execution import run_command_async

__version__ = "1.0.0"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_logging_configured = False


def setup_logging(debug: bool = False) -> None:
    """Configure root logging once per invocation.

    ``--debug`` shows DEBUG records on stderr; otherwise only warnings.
    """
    global _logging_configured
    level = logging.DEBUG if debug else logging.WARNING
    if _logging_configured:
        logging.getLogger().setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)
    _logging_configured = True


__all__ = [
    "__version__",
    "setup_logging",
    "run_command_async",
    "CLIError",
    "CircularDependencyError",
    "ConfigError",
    "ErrorCode",
    "RegistryError",
    "create_error",
    "format_error",
]
