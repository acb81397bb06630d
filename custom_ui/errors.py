"""Typed errors and formatting utilities for consistent error messages.

Every error raised by the installer core is a ``CLIError`` carrying an
``ErrorCode``, a short list of remediation suggestions and an optional
context dict. Lower layers raise narrowly-typed errors; the command layer
formats them with ``format_error`` and maps them to exit codes.

Error Style Guide:
- Messages are short sentences without a trailing period
- Suggestions are imperative ("Check...", "Run...")
- Context keys are camelCase and never contain secrets
- ``originalError`` is kept in context for debugging but never displayed
"""

import errno
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    NETWORK_ERROR = "NETWORK_ERROR"
    FILE_EXISTS = "FILE_EXISTS"
    INVALID_PROJECT = "INVALID_PROJECT"
    MISSING_DEPENDENCY = "MISSING_DEPENDENCY"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    INVALID_COMMAND = "INVALID_COMMAND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    REGISTRY_ERROR = "REGISTRY_ERROR"
    DEPENDENCY_CONFLICT = "DEPENDENCY_CONFLICT"
    CONFIG_ERROR = "CONFIG_ERROR"
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"


EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1

EXIT_CODES = {
    ErrorCode.NETWORK_ERROR: 2,
    ErrorCode.FILE_EXISTS: 3,
    ErrorCode.INVALID_PROJECT: 4,
    ErrorCode.MISSING_DEPENDENCY: 5,
    ErrorCode.COMPONENT_NOT_FOUND: 6,
    ErrorCode.INVALID_COMMAND: 7,
    ErrorCode.PERMISSION_DENIED: 8,
    ErrorCode.REGISTRY_ERROR: 9,
    ErrorCode.DEPENDENCY_CONFLICT: 10,
    ErrorCode.CONFIG_ERROR: 11,
    ErrorCode.CIRCULAR_DEPENDENCY: 12,
}

_RECOVERABLE = {
    ErrorCode.NETWORK_ERROR,
    ErrorCode.FILE_EXISTS,
    ErrorCode.DEPENDENCY_CONFLICT,
}


class CLIError(Exception):
    """Base error for everything the CLI reports to the user."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestions = suggestions or []
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code.value,
            "suggestions": list(self.suggestions),
            "context": dict(self.context),
        }


class CircularDependencyError(CLIError):
    """Raised by the resolver when a component depends on itself."""

    def __init__(self, component_name: str, path: list[str] | None = None):
        context: dict[str, Any] = {"componentName": component_name}
        if path:
            context["path"] = " -> ".join(path)
        super().__init__(
            f"Circular dependency detected: {component_name}",
            ErrorCode.CIRCULAR_DEPENDENCY,
            ["Check component dependencies for circular references"],
            context,
        )
        self.component_name = component_name


class ConfigError(CLIError):
    """Raised when the project configuration is missing or malformed."""

    def __init__(
        self,
        message: str,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.CONFIG_ERROR, suggestions, context)


class RegistryError(CLIError):
    """Raised when the component registry cannot be read or is malformed."""

    def __init__(
        self,
        message: str,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.REGISTRY_ERROR, suggestions, context)


def get_suggestions(code: ErrorCode) -> list[str]:
    """Return the default remediation hints for an error code."""
    if code == ErrorCode.NETWORK_ERROR:
        return [
            "Check your internet connection",
            "Try again in a few moments",
            "Use cached components if available",
        ]
    if code == ErrorCode.FILE_EXISTS:
        return [
            "Use --force flag to overwrite",
            "Choose a different location",
            "Remove existing file first",
        ]
    if code == ErrorCode.INVALID_PROJECT:
        return [
            "Run 'custom-ui init' to set up the project",
            "Ensure you're in a React project directory",
            "Check package.json for React dependencies",
        ]
    if code == ErrorCode.MISSING_DEPENDENCY:
        return [
            "Run npm install or yarn install",
            "Check your package manager configuration",
            "Ensure internet connectivity",
        ]
    if code == ErrorCode.COMPONENT_NOT_FOUND:
        return [
            "Run 'custom-ui list' to see available components",
            "Check component name spelling",
            "Update component registry",
        ]
    if code == ErrorCode.INVALID_COMMAND:
        return [
            "Run 'custom-ui --help' for available commands",
            "Check command syntax",
            "Use 'custom-ui docs' for examples",
        ]
    if code == ErrorCode.REGISTRY_ERROR:
        return [
            "Check internet connection",
            "Try updating the registry",
            "Contact support if issue persists",
        ]
    if code == ErrorCode.DEPENDENCY_CONFLICT:
        return [
            "Review conflicting dependencies",
            "Update package.json manually",
            "Use --force flag to override conflicts",
        ]
    if code == ErrorCode.CONFIG_ERROR:
        return [
            "Check configuration file syntax",
            "Run 'custom-ui init' to reset configuration",
            "Verify all required fields are present",
        ]
    if code == ErrorCode.CIRCULAR_DEPENDENCY:
        return ["Check component dependencies for circular references"]
    return [
        "Check the command syntax",
        "Run with --help for more information",
        "Contact support if the issue persists",
    ]


def create_error(
    code: ErrorCode, message: str, context: dict[str, Any] | None = None
) -> CLIError:
    """Create a CLIError with the default suggestions for its code.

    Examples:
        >>> err = create_error(ErrorCode.INVALID_COMMAND, "No component specified")
        >>> err.code
        <ErrorCode.INVALID_COMMAND: 'INVALID_COMMAND'>
    """
    return CLIError(message, code, get_suggestions(code), context)


def handle_network_error(
    error: BaseException, context: dict[str, Any] | None = None
) -> CLIError:
    return CLIError(
        "Failed to connect to component registry. Please check your internet connection.",
        ErrorCode.NETWORK_ERROR,
        [
            "Check your internet connection",
            "Try again in a few moments",
            "Use cached components if available",
            "Contact support if the issue persists",
        ],
        {"originalError": str(error), **(context or {})},
    )


def _error_kind(error: BaseException) -> str | None:
    if isinstance(error, FileNotFoundError):
        return "not_found"
    if isinstance(error, PermissionError):
        return "access_denied"
    if isinstance(error, FileExistsError):
        return "exists"
    code = getattr(error, "errno", None)
    if code == errno.ENOENT:
        return "not_found"
    if code in (errno.EACCES, errno.EPERM, errno.EROFS):
        return "access_denied"
    if code == errno.EEXIST:
        return "exists"

    text = str(error)
    if "ENOENT" in text:
        return "not_found"
    if "EACCES" in text or "EPERM" in text:
        return "access_denied"
    if "EEXIST" in text:
        return "exists"
    return None


def handle_file_system_error(
    error: BaseException, file_path: str | None = None
) -> CLIError:
    """Classify an I/O failure into a typed error with actionable hints.

    Errors that are already ``CLIError`` are returned unchanged.
    """
    if isinstance(error, CLIError):
        return error

    kind = _error_kind(error)
    code = ErrorCode.PERMISSION_DENIED

    if kind == "not_found":
        message = f"File or directory not found: {file_path or 'unknown'}"
        suggestions = [
            "Check if the file path is correct",
            "Ensure the directory exists",
            "Run the init command first if this is a new project",
        ]
    elif kind == "access_denied":
        message = f"Permission denied accessing: {file_path or 'file'}"
        suggestions = [
            "Run the command with appropriate permissions",
            "Check file/directory ownership",
            "Ensure the file is not locked by another process",
        ]
    elif kind == "exists":
        message = f"File already exists: {file_path or 'unknown'}"
        code = ErrorCode.FILE_EXISTS
        suggestions = [
            "Use --force flag to overwrite existing files",
            "Choose a different file name",
            "Remove the existing file first",
        ]
    else:
        message = "File system operation failed."
        suggestions = []

    return CLIError(
        message,
        code,
        suggestions,
        {"originalError": str(error), "filePath": file_path},
    )


def handle_component_error(component_name: str, error: BaseException) -> CLIError:
    message = f"Failed to process component '{component_name}': {error}"
    return CLIError(
        message,
        ErrorCode.COMPONENT_NOT_FOUND,
        [
            "Check if the component name is correct",
            "Run 'custom-ui list' to see available components",
            "Try updating the component registry",
            "Check component dependencies",
        ],
        {"componentName": component_name, "originalError": str(error)},
    )


def handle_dependency_error(dependency: str, error: BaseException) -> CLIError:
    message = f"Failed to install dependency '{dependency}': {error}"
    return CLIError(
        message,
        ErrorCode.MISSING_DEPENDENCY,
        [
            "Check your npm/yarn configuration",
            "Ensure you have internet connectivity",
            "Try clearing npm cache: npm cache clean --force",
            "Check if the dependency name is correct",
        ],
        {"dependency": dependency, "originalError": str(error)},
    )


def format_error(error: CLIError) -> str:
    """Format an error for display: message, numbered suggestions, context.

    Examples:
        >>> print(format_error(CLIError("boom", ErrorCode.REGISTRY_ERROR, ["Retry"])))
        <BLANKLINE>
        Error: boom
        <BLANKLINE>
        Suggestions:
           1. Retry
        <BLANKLINE>
    """
    lines = ["", f"Error: {error.message}"]

    if error.suggestions:
        lines.append("")
        lines.append("Suggestions:")
        for index, suggestion in enumerate(error.suggestions, 1):
            lines.append(f"   {index}. {suggestion}")

    visible = {k: v for k, v in error.context.items() if k != "originalError"}
    if visible:
        lines.append("")
        lines.append("Context:")
        for key, value in visible.items():
            lines.append(f"   {key}: {value}")

    return "\n".join(lines) + "\n"


def is_recoverable(error: CLIError) -> bool:
    return error.code in _RECOVERABLE


def exit_code_for(error: BaseException) -> int:
    if isinstance(error, CLIError):
        return EXIT_CODES.get(error.code, EXIT_GENERAL_ERROR)
    return EXIT_GENERAL_ERROR


__all__ = [
    "ErrorCode",
    "CLIError",
    "CircularDependencyError",
    "ConfigError",
    "RegistryError",
    "EXIT_SUCCESS",
    "EXIT_GENERAL_ERROR",
    "EXIT_CODES",
    "get_suggestions",
    "create_error",
    "handle_network_error",
    "handle_file_system_error",
    "handle_component_error",
    "handle_dependency_error",
    "format_error",
    "is_recoverable",
    "exit_code_for",
]
