"""Tests for error taxonomy, classification and formatting."""

import errno

import pytest

from custom_ui.errors import (
    EXIT_CODES,
    EXIT_GENERAL_ERROR,
    CircularDependencyError,
    CLIError,
    ConfigError,
    ErrorCode,
    create_error,
    exit_code_for,
    format_error,
    get_suggestions,
    handle_component_error,
    handle_dependency_error,
    handle_file_system_error,
    handle_network_error,
    is_recoverable,
)


class TestCLIError:
    def test_to_dict(self):
        error = CLIError("boom", ErrorCode.REGISTRY_ERROR, ["Retry"], {"k": "v"})
        assert error.to_dict() == {
            "name": "CLIError",
            "message": "boom",
            "code": "REGISTRY_ERROR",
            "suggestions": ["Retry"],
            "context": {"k": "v"},
        }

    def test_subclasses_carry_their_codes(self):
        assert ConfigError("bad").code == ErrorCode.CONFIG_ERROR
        error = CircularDependencyError("a", ["a", "b", "a"])
        assert error.code == ErrorCode.CIRCULAR_DEPENDENCY
        assert error.context == {"componentName": "a", "path": "a -> b -> a"}

    def test_create_error_uses_code_suggestions(self):
        error = create_error(ErrorCode.COMPONENT_NOT_FOUND, "nope", {"componentName": "x"})
        assert error.suggestions == get_suggestions(ErrorCode.COMPONENT_NOT_FOUND)
        assert error.context == {"componentName": "x"}

    def test_every_code_has_suggestions(self):
        for code in ErrorCode:
            assert get_suggestions(code)


class TestHandlers:
    def test_network_error(self):
        error = handle_network_error(TimeoutError("slow"), {"attempts": 3})
        assert error.code == ErrorCode.NETWORK_ERROR
        assert error.context == {"originalError": "slow", "attempts": 3}

    def test_cli_error_passes_through_file_system_handler(self):
        original = CLIError("x", ErrorCode.FILE_EXISTS)
        assert handle_file_system_error(original, "a.txt") is original

    @pytest.mark.parametrize(
        "error, code, fragment",
        [
            (FileNotFoundError(errno.ENOENT, "No such file"), ErrorCode.PERMISSION_DENIED, "not found"),
            (PermissionError(errno.EACCES, "Denied"), ErrorCode.PERMISSION_DENIED, "Permission denied"),
            (FileExistsError(errno.EEXIST, "Exists"), ErrorCode.FILE_EXISTS, "already exists"),
            (OSError(errno.EROFS, "Read-only file system"), ErrorCode.PERMISSION_DENIED, "Permission denied"),
            (RuntimeError("EACCES: permission denied"), ErrorCode.PERMISSION_DENIED, "Permission denied"),
        ],
    )
    def test_file_system_classification(self, error, code, fragment):
        classified = handle_file_system_error(error, "src/button.tsx")
        assert classified.code == code
        assert fragment in classified.message
        assert classified.context["filePath"] == "src/button.tsx"

    def test_unclassified_file_system_error(self):
        classified = handle_file_system_error(OSError("disk on fire"), "a.txt")
        assert classified.code == ErrorCode.PERMISSION_DENIED
        assert classified.message == "File system operation failed."

    def test_component_and_dependency_errors(self):
        assert handle_component_error("button", ValueError("x")).code == (
            ErrorCode.COMPONENT_NOT_FOUND
        )
        error = handle_dependency_error("clsx", ValueError("x"))
        assert error.code == ErrorCode.MISSING_DEPENDENCY
        assert error.context["dependency"] == "clsx"


class TestFormatting:
    def test_format_error_hides_original_error(self):
        error = CLIError(
            "Something broke",
            ErrorCode.REGISTRY_ERROR,
            ["First", "Second"],
            {"componentName": "button", "originalError": "secret stack"},
        )
        text = format_error(error)

        assert "Error: Something broke" in text
        assert "   1. First" in text
        assert "   2. Second" in text
        assert "componentName: button" in text
        assert "secret stack" not in text

    def test_is_recoverable(self):
        assert is_recoverable(CLIError("x", ErrorCode.NETWORK_ERROR))
        assert is_recoverable(CLIError("x", ErrorCode.DEPENDENCY_CONFLICT))
        assert not is_recoverable(CLIError("x", ErrorCode.CONFIG_ERROR))


class TestExitCodes:
    def test_codes_are_distinct_and_nonzero(self):
        values = list(EXIT_CODES.values())
        assert len(values) == len(set(values)) == len(ErrorCode)
        assert 0 not in values

    def test_exit_code_for(self):
        assert exit_code_for(CLIError("x", ErrorCode.NETWORK_ERROR)) == 2
        assert exit_code_for(CLIError("x", ErrorCode.COMPONENT_NOT_FOUND)) == 6
        assert exit_code_for(CLIError("x", ErrorCode.DEPENDENCY_CONFLICT)) == 10
        assert exit_code_for(CircularDependencyError("a")) == 12
        assert exit_code_for(ValueError("x")) == EXIT_GENERAL_ERROR
