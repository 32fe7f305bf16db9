"""Host operations port interface.

Defines the native filesystem primitives hostfs delegates to. Paths are raw
bytes; failures are raised as HostError carrying a tag from HostErrorTag.
Enables substituting an in-memory filesystem for the operating system.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class HostErrorTag(str, Enum):
    """Documented vocabulary of host error tags."""

    NOT_FOUND = "not found"
    PERMISSION_DENIED = "permission denied"
    ALREADY_EXISTS = "already exists"
    NOT_A_DIRECTORY = "not a directory"
    DIRECTORY_NOT_EMPTY = "directory not empty"
    IS_A_DIRECTORY = "is a directory"
    READ_ONLY_FILESYSTEM = "read-only filesystem"
    INVALID_INPUT = "invalid input"
    BAD_HANDLE = "bad file descriptor"
    INTERRUPTED = "interrupted"
    UNEXPECTED_EOF = "unexpected eof"
    OTHER = "other"


class HostError(Exception):
    """Failure reported by a host operation.

    Attributes:
        tag: Error tag. Usually a HostErrorTag value, but hosts may report
             undocumented strings.
        message: Diagnostic text from the host.
    """

    def __init__(self, tag: str, message: str | None = None) -> None:
        self.tag = tag.value if isinstance(tag, HostErrorTag) else tag
        self.message = message or self.tag
        super().__init__(self.message)


@dataclass(frozen=True)
class HostPathType:
    """Result of querying a path entry without following symlinks."""

    is_dir: bool
    is_symlink: bool


@dataclass(frozen=True)
class HostMetadata:
    """Raw metadata for a path entry without following symlinks."""

    is_dir: bool
    is_symlink: bool
    size: int
    modified: datetime
    readonly: bool


class HostOperations(Protocol):
    """Protocol for native filesystem operations."""

    def open_stream(self, path: bytes) -> int:
        """Open a file for line-oriented reading.

        Args:
            path: Path bytes (no NUL).

        Returns:
            Handle id, positioned at the start of the file.

        Raises:
            HostError: If the file cannot be opened.
        """
        ...

    def read_line(self, handle: int) -> bytes:
        """Read the next line, including its terminator.

        Returns:
            Line bytes, or b"" at end of stream.

        Raises:
            HostError: On I/O failure or an unknown handle.
        """
        ...

    def close(self, handle: int) -> None:
        """Release a handle.

        Raises:
            HostError: If the handle is unknown.
        """
        ...

    def read_all(self, path: bytes) -> bytes:
        """Read an entire file."""
        ...

    def write_bytes(self, path: bytes, data: bytes) -> None:
        """Create or truncate a file and write ``data`` to it."""
        ...

    def write_text(self, path: bytes, text: str) -> None:
        """Create or truncate a file and write ``text`` as UTF-8."""
        ...

    def delete_file(self, path: bytes) -> None:
        """Remove a single file."""
        ...

    def rename(self, src: bytes, dst: bytes) -> None:
        """Move a file or directory, replacing a destination file."""
        ...

    def list_dir(self, path: bytes) -> list[bytes]:
        """List a directory.

        Returns:
            Full entry paths (``path`` joined with each entry name) in
            host order.
        """
        ...

    def create_dir(self, path: bytes) -> None:
        """Create a directory whose parent exists."""
        ...

    def create_dir_all(self, path: bytes) -> None:
        """Create a directory and all missing ancestors.

        Raises:
            HostError: "already exists" if ``path`` itself exists.
        """
        ...

    def delete_empty_dir(self, path: bytes) -> None:
        """Remove an empty directory."""
        ...

    def delete_dir_all(self, path: bytes) -> None:
        """Remove a directory and everything below it."""
        ...

    def query_path_type(self, path: bytes) -> HostPathType:
        """Classify a path entry without following symlinks."""
        ...

    def query_metadata(self, path: bytes) -> HostMetadata:
        """Stat a path entry without following symlinks."""
        ...
