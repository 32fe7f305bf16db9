"""CLI error handling with actionable hints.

Provides consistent error formatting and common error factory functions
for all hostfs CLI commands.
"""

from typing import NoReturn

import click

from hostfs.domain.errors import (
    DecodeError,
    FsError,
    HostfsError,
)


class HostfsCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.

    Example:
        raise HostfsCliError(
            "Failed to read 'notes.txt': not found",
            hint="Check the path with 'hostfs ls'",
        )
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present."""
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


_KIND_HINTS = {
    "not_found": "Check that the path exists with 'hostfs stat'",
    "permission_denied": "Check the permissions of the path and its parent directory",
    "already_exists": "Choose another name or remove the existing entry first",
    "not_a_directory": "A component of the path is a file, not a directory",
}


def fs_error_to_cli(error: HostfsError) -> HostfsCliError:
    """Convert a classified filesystem error into a CLI error with a hint."""
    if isinstance(error, DecodeError):
        return HostfsCliError(
            error.describe(),
            hint="Use --bytes to print the raw content",
        )
    if isinstance(error, FsError):
        return HostfsCliError(error.describe(), hint=_KIND_HINTS.get(error.kind.value))
    return HostfsCliError(error.message)


def invalid_extension_error(ext: str) -> NoReturn:
    """Raise error when an extension argument contains a separator.

    Raises:
        HostfsCliError: Always raises with extension hint.
    """
    raise HostfsCliError(
        f"Invalid extension '{ext}'",
        hint="Give the extension without directory separators, e.g. 'txt'",
    )
