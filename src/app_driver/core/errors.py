"""Custom exception hierarchy and CLI exit codes."""

from __future__ import annotations

# Exit codes
EXIT_OK = 0
EXIT_GENERAL_ERROR = 1
EXIT_SERIALIZATION_ERROR = 2
EXIT_TIMEOUT = 6

_EXIT_DESCRIPTIONS = {
    EXIT_OK: "Success",
    EXIT_GENERAL_ERROR: "General error",
    EXIT_SERIALIZATION_ERROR: "Malformed or unsupported wait condition payload",
    EXIT_TIMEOUT: "Timed out waiting for the condition",
}


def exit_description(code: int) -> str:
    """Return a human-readable description for *code*."""
    return _EXIT_DESCRIPTIONS.get(code, f"Unknown error (code {code})")


class AppDriverError(Exception):
    """Base exception for app-driver."""

    exit_code = EXIT_GENERAL_ERROR


class SerializationException(AppDriverError):
    """Thrown to indicate a wire serialization error.

    The message is optional; ``str()`` of an exception without one is empty.
    """

    exit_code = EXIT_SERIALIZATION_ERROR

    def __init__(self, message: str | None = None):
        self.message = message
        super().__init__(*(() if message is None else (message,)))

    def __repr__(self) -> str:
        return f"SerializationException({self.message})"


class BindingError(AppDriverError):
    """No scheduler binding is installed in this process."""


class WaitTimeoutError(AppDriverError):
    """A wait command did not complete within its timeout."""

    exit_code = EXIT_TIMEOUT

    def __init__(self, description: str, timeout_ms: int):
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Timeout after {timeout_ms}ms waiting for {description}"
        )
