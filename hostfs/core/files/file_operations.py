"""Whole-file operations and path metadata queries.

Every method resolves its path, makes one host call and returns an FsResult;
host failures are classified by the error mapper and never raised.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from hostfs.core.error_mapper import map_host_error, resolve
from hostfs.domain.entities import EntryKind, FsResult, Metadata, PathType
from hostfs.domain.errors import (
    DecodeError,
    MetadataError,
    MetadataErrorKind,
    ReadError,
    WriteError,
)
from hostfs.domain.path import PathValue, encode_text
from hostfs.ports.host import HostError, HostMetadata, HostOperations, HostPathType

logger = logging.getLogger(__name__)


def path_type_from_host(info: HostPathType | HostMetadata) -> PathType:
    """Classify a host stat result. A symlink wins over its target's kind."""
    if info.is_symlink:
        return PathType.IS_SYMLINK
    if info.is_dir:
        return PathType.IS_DIRECTORY
    return PathType.IS_FILE


def metadata_from_host(info: HostMetadata) -> Metadata:
    modified = info.modified
    if modified.tzinfo is None:
        modified = modified.replace(tzinfo=UTC)
    return Metadata(
        kind=EntryKind.from_path_type(path_type_from_host(info)),
        size=info.size,
        modified=modified,
        readonly=info.readonly,
    )


class FileOperations:
    """File reads, writes and deletes on top of a host.

    Args:
        host: Host implementation receiving the resolved path bytes.
    """

    def __init__(self, host: HostOperations) -> None:
        self._host = host

    def write_bytes(self, data: bytes, path: PathValue) -> FsResult[None, WriteError]:
        """Create or truncate ``path`` and write ``data`` to it."""
        try:
            self._host.write_bytes(resolve(path), bytes(data))
        except HostError as e:
            logger.debug("write_bytes failed for %s: %s", path, e)
            return FsResult.create_error(map_host_error(e, WriteError, path))
        return FsResult.create_success()

    def write_text(self, text: str, path: PathValue) -> FsResult[None, WriteError]:
        """Write ``text`` to ``path`` as UTF-8."""
        return self.write_bytes(encode_text(text), path)

    def read_bytes(self, path: PathValue) -> FsResult[bytes, ReadError]:
        """Read the entire file into memory."""
        try:
            data = self._host.read_all(resolve(path))
        except HostError as e:
            logger.debug("read_bytes failed for %s: %s", path, e)
            return FsResult.create_error(map_host_error(e, ReadError, path))
        return FsResult.create_success(data)

    def read_text(self, path: PathValue) -> FsResult[str, ReadError | DecodeError]:
        """Read the entire file and decode it as UTF-8.

        Returns:
            The text, a ReadError when the file could not be read, or a
            DecodeError when it was read but is not valid UTF-8.
        """
        result = self.read_bytes(path)
        if not result.success:
            return FsResult.create_error(result.error)
        try:
            return FsResult.create_success(result.value.decode("utf-8"))
        except UnicodeDecodeError as e:
            return FsResult.create_error(
                DecodeError(f"Invalid UTF-8: {e.reason}", path, e.start)
            )

    def delete(self, path: PathValue) -> FsResult[None, WriteError]:
        """Remove a single file.

        On hosts where a read-only attribute blocks deletion the failure is
        reported as PERMISSION_DENIED.
        """
        try:
            self._host.delete_file(resolve(path))
        except HostError as e:
            return FsResult.create_error(map_host_error(e, WriteError, path))
        return FsResult.create_success()

    def rename(self, src: PathValue, dst: PathValue) -> FsResult[None, WriteError]:
        """Move ``src`` to ``dst``. Errors are tagged with ``src``."""
        try:
            self._host.rename(resolve(src), resolve(dst))
        except HostError as e:
            return FsResult.create_error(map_host_error(e, WriteError, src))
        return FsResult.create_success()

    def query_type(self, path: PathValue) -> FsResult[PathType, MetadataError]:
        """Classify the path entry itself; symlinks are not followed."""
        try:
            info = self._host.query_path_type(resolve(path))
        except HostError as e:
            return FsResult.create_error(map_host_error(e, MetadataError, path))
        return FsResult.create_success(path_type_from_host(info))

    def metadata(self, path: PathValue) -> FsResult[Metadata, MetadataError]:
        """Stat the path entry itself."""
        try:
            info = self._host.query_metadata(resolve(path))
        except HostError as e:
            return FsResult.create_error(map_host_error(e, MetadataError, path))
        return FsResult.create_success(metadata_from_host(info))

    def is_file(self, path: PathValue) -> FsResult[bool, MetadataError]:
        return self._is_type(path, PathType.IS_FILE)

    def is_directory(self, path: PathValue) -> FsResult[bool, MetadataError]:
        return self._is_type(path, PathType.IS_DIRECTORY)

    def is_symlink(self, path: PathValue) -> FsResult[bool, MetadataError]:
        return self._is_type(path, PathType.IS_SYMLINK)

    def exists(self, path: PathValue) -> FsResult[bool, MetadataError]:
        """Check whether the path entry exists (a dangling symlink does)."""
        result = self.query_type(path)
        if result.success:
            return FsResult.create_success(True)
        if result.error.kind is MetadataErrorKind.NOT_FOUND:
            return FsResult.create_success(False)
        return FsResult.create_error(result.error)

    def _is_type(
        self, path: PathValue, expected: PathType
    ) -> FsResult[bool, MetadataError]:
        result = self.query_type(path)
        if not result.success:
            return FsResult.create_error(result.error)
        return FsResult.create_success(result.value is expected)
