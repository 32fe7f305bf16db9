"""Error taxonomy for filesystem operations.

Each operation family has a closed set of failure kinds with an OTHER escape
for host categories that are not modeled. Errors carry the original host
message and the path that failed so callers can report precisely without
unwinding a stack.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from hostfs.domain.path import PathValue


class HostfsError(Exception):
    """Base exception for all hostfs errors.

    Attributes:
        message: User-friendly error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class HostfsDomainError(HostfsError):
    """Caller-facing validation error with an optional actionable hint."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ErrorCategory(str, Enum):
    """Failure categories shared across the taxonomies.

    A taxonomy's kinds are named after the categories it models; host
    failures in a category a taxonomy does not model become OTHER.
    """

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    NOT_A_DIRECTORY = "not_a_directory"


class MetadataErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    OTHER = "other"


class ReadErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    OTHER = "other"


class WriteErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    OTHER = "other"


class DirErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    NOT_A_DIRECTORY = "not_a_directory"
    OTHER = "other"


class FsError(HostfsError):
    """A classified host failure.

    Attributes:
        kind: Member of the subclass's ``Kind`` enumeration.
        message: Original host message, kept verbatim for OTHER.
        path: The path the failing operation was called with, if any.
    """

    Kind: ClassVar[type[Enum]]
    operation: ClassVar[str] = "access"

    def __init__(
        self,
        kind: Enum,
        message: str,
        path: PathValue | None = None,
    ) -> None:
        if not isinstance(kind, self.Kind):
            raise TypeError(f"{type(self).__name__} cannot carry kind {kind!r}")
        super().__init__(message)
        self.kind = kind
        self.path = path

    @classmethod
    def kind_for(cls, category: ErrorCategory | None) -> Enum:
        """Return the kind modeling ``category``, or OTHER."""
        if category is None:
            return cls.Kind.OTHER
        return cls.Kind.__members__.get(category.name, cls.Kind.OTHER)

    @property
    def is_other(self) -> bool:
        return self.kind is self.Kind.OTHER

    def describe(self) -> str:
        """Format the error for display, including the failing path."""
        where = f" '{self.path.display()}'" if self.path is not None else ""
        if self.is_other:
            return f"Failed to {self.operation}{where}: {self.message}"
        reason = self.kind.value.replace("_", " ")
        return f"Failed to {self.operation}{where}: {reason}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.name}, "
            f"message={self.message!r}, path={self.path!r})"
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self.kind, self.message, self.path) == (
            other.kind,
            other.message,
            other.path,
        )

    __hash__ = HostfsError.__hash__


class MetadataError(FsError):
    """Failure to stat a path."""

    Kind = MetadataErrorKind
    operation = "query"


class ReadError(FsError):
    """Failure to read a file."""

    Kind = ReadErrorKind
    operation = "read"


class WriteError(FsError):
    """Failure to write, rename or delete a file."""

    Kind = WriteErrorKind
    operation = "write"


class DirError(FsError):
    """Failure of a directory operation."""

    Kind = DirErrorKind
    operation = "access directory"


class DecodeError(HostfsError):
    """A file was read successfully but its content is not valid UTF-8.

    Not a ReadError: callers tell "file unreadable" apart from "file
    readable but not text" by type.

    Attributes:
        path: The file that was read.
        position: Byte offset of the first invalid sequence.
    """

    def __init__(self, message: str, path: PathValue, position: int) -> None:
        super().__init__(message)
        self.path = path
        self.position = position

    def describe(self) -> str:
        return (
            f"'{self.path.display()}' is not valid UTF-8 text "
            f"(invalid byte at offset {self.position})"
        )
