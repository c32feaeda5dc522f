"""
Exception hierarchy for aicommand.

Every failure the pipeline can hit is terminal for the current
invocation.  The CLI catches `AICommandError`, reports the message and
exits with status 1; nothing is retried.
"""

from __future__ import annotations

from typing import Optional


class AICommandError(Exception):
    """Base class for all errors raised by aicommand."""


class InvalidLanguageError(AICommandError, ValueError):
    """Raised when a language selector is not one of the supported codes."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid language {value!r}. Please select either 'en' for English or 'ja' for Japanese."
        )
        self.value = value


class StdinReadError(AICommandError, OSError):
    """Raised when standard input cannot be read to end-of-stream."""


class CommandExecutionError(AICommandError):
    """Raised when the child process cannot start or exits non-zero.

    Attributes
    ----------
    command: str
        The command line handed to the shell.

    returncode: Optional[int]
        Exit status of the child, or None if it never started.

    stderr: str
        Captured standard error, empty when nothing was captured.
    """

    def __init__(self, command: str, returncode: Optional[int], stderr: str = "", reason: str = "") -> None:
        if returncode is None:
            message = f"Error executing command: {reason or 'process could not be started'}"
        else:
            message = f"Error executing command: exit status {returncode}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class MissingCredentialError(AICommandError):
    """Raised before any network call when no API key is available."""


class CompletionRequestError(AICommandError):
    """Raised when the chat-completion request fails or returns no usable text."""
