"""Domain entities returned by filesystem operations.

Pure dataclasses with no dependencies on a host implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from hostfs.domain.errors import HostfsError
from hostfs.domain.path import PathValue

T = TypeVar("T")
E = TypeVar("E", bound=HostfsError)


@dataclass(frozen=True)
class FsResult(Generic[T, E]):
    """Outcome of a fallible filesystem operation.

    Operations return results rather than raising, so callers check
    ``result.success`` instead of catching several exception types.

    Attributes:
        value: The operation's value on success, None otherwise.
        error: The classified failure, None on success.
    """

    value: T | None = None
    error: E | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def create_success(cls, value: T | None = None) -> FsResult[T, E]:
        return cls(value=value)

    @classmethod
    def create_error(cls, error: E) -> FsResult[T, E]:
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, or raise the error if the operation failed."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class PathType(str, Enum):
    """What a path entry itself is (symlinks are not followed)."""

    IS_FILE = "file"
    IS_DIRECTORY = "directory"
    IS_SYMLINK = "symlink"


class EntryKind(str, Enum):
    """Kind of a directory entry."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"

    @classmethod
    def from_path_type(cls, path_type: PathType) -> EntryKind:
        return {
            PathType.IS_FILE: cls.FILE,
            PathType.IS_DIRECTORY: cls.DIRECTORY,
            PathType.IS_SYMLINK: cls.SYMLINK,
        }[path_type]


@dataclass(frozen=True)
class Metadata:
    """Snapshot of a path's metadata.

    Attributes:
        kind: File, directory or symlink (the link itself, not its target).
        size: Size in bytes.
        modified: Last modification time (timezone-aware, UTC).
        readonly: True when the entry cannot be written by its owner.
    """

    kind: EntryKind
    size: int
    modified: datetime
    readonly: bool = False

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"size cannot be negative, got {self.size}")


@dataclass(frozen=True)
class DirEntry:
    """A directory listing entry, immutable as of listing time."""

    path: PathValue
    kind: EntryKind
    metadata: Metadata


@dataclass(frozen=True)
class FileHandle:
    """Opaque identifier of an open read stream.

    Owned by the caller until passed to close(); never tracked by hostfs.
    """

    id: int
