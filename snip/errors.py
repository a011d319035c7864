"""Error types shared by snip commands."""

from __future__ import annotations


class SnipError(RuntimeError):
    """Base class for failures that end the current command."""

    exit_code = 1


class ConfigError(SnipError):
    """Raised when the local configuration file cannot be read or written."""


class UnauthenticatedError(SnipError):
    """Raised when a command needs a token and none is stored."""

    def __init__(self, message: str = "You are not logged in. Run: snip login <token>") -> None:
        super().__init__(message)


class EmptyClipboardError(SnipError):
    """Raised when clipboard contents are required but blank."""

    def __init__(self, message: str = "Your clipboard is empty.") -> None:
        super().__init__(message)


class MissingInputError(SnipError):
    """Raised when a command is invoked without a required value."""


class ClipboardError(SnipError):
    """Raised when the system clipboard cannot be accessed."""


class TransportError(SnipError):
    """Raised when a request to the snippet service fails."""

    def __init__(self, operation: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.reason = message
        self.status_code = status_code


class SelectionCancelledError(SnipError):
    """Raised when the interactive selection is aborted."""

    def __init__(self, message: str = "No snippet selected.") -> None:
        super().__init__(message)


__all__ = [
    "ClipboardError",
    "ConfigError",
    "EmptyClipboardError",
    "MissingInputError",
    "SelectionCancelledError",
    "SnipError",
    "TransportError",
    "UnauthenticatedError",
]
