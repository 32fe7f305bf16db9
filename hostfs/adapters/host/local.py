"""Local host adapter.

Implements the HostOperations port with the os module. This is the default
host. OSError failures are reported as HostError with a tag derived from
errno.
"""

from __future__ import annotations

import errno
import itertools
import logging
import os
import shutil
import stat
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import BinaryIO

from hostfs.domain.path import encode_text
from hostfs.ports.host import HostError, HostErrorTag, HostMetadata, HostPathType

logger = logging.getLogger(__name__)

ERRNO_TAGS: dict[int, HostErrorTag] = {
    errno.ENOENT: HostErrorTag.NOT_FOUND,
    errno.EACCES: HostErrorTag.PERMISSION_DENIED,
    errno.EPERM: HostErrorTag.PERMISSION_DENIED,
    errno.EEXIST: HostErrorTag.ALREADY_EXISTS,
    errno.ENOTDIR: HostErrorTag.NOT_A_DIRECTORY,
    errno.ENOTEMPTY: HostErrorTag.DIRECTORY_NOT_EMPTY,
    errno.EISDIR: HostErrorTag.IS_A_DIRECTORY,
    errno.EROFS: HostErrorTag.READ_ONLY_FILESYSTEM,
    errno.EINVAL: HostErrorTag.INVALID_INPUT,
    errno.EBADF: HostErrorTag.BAD_HANDLE,
    errno.EINTR: HostErrorTag.INTERRUPTED,
}


def tag_for_os_error(error: OSError) -> HostErrorTag:
    """Classify an OSError by errno, falling back to OTHER."""
    if isinstance(error, PermissionError):
        return HostErrorTag.PERMISSION_DENIED
    if error.errno is None:
        return HostErrorTag.OTHER
    return ERRNO_TAGS.get(error.errno, HostErrorTag.OTHER)


@contextmanager
def host_errors() -> Iterator[None]:
    """Re-raise OSError (and NUL-in-path ValueError) as HostError."""
    try:
        yield
    except OSError as e:
        raise HostError(tag_for_os_error(e), e.strerror or str(e)) from e
    except ValueError as e:
        # os functions reject paths containing NUL with ValueError
        raise HostError(HostErrorTag.INVALID_INPUT, str(e)) from e


class LocalHost:
    """Operating system host.

    Open read streams are kept in a handle table owned by this adapter;
    a handle that is never closed keeps its file descriptor open.
    """

    def __init__(self) -> None:
        self._streams: dict[int, BinaryIO] = {}
        self._ids = itertools.count(1)

    def open_stream(self, path: bytes) -> int:
        with host_errors():
            if os.path.isdir(path):
                raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR))
            stream = open(path, "rb")
        handle = next(self._ids)
        self._streams[handle] = stream
        return handle

    def read_line(self, handle: int) -> bytes:
        stream = self._stream(handle)
        with host_errors():
            return stream.readline()

    def close(self, handle: int) -> None:
        stream = self._streams.pop(handle, None)
        if stream is None:
            raise HostError(HostErrorTag.BAD_HANDLE, f"Unknown stream handle {handle}")
        with host_errors():
            stream.close()

    def read_all(self, path: bytes) -> bytes:
        with host_errors():
            with open(path, "rb") as f:
                return f.read()

    def write_bytes(self, path: bytes, data: bytes) -> None:
        with host_errors():
            with open(path, "wb") as f:
                f.write(data)

    def write_text(self, path: bytes, text: str) -> None:
        self.write_bytes(path, encode_text(text))

    def delete_file(self, path: bytes) -> None:
        with host_errors():
            if os.path.isdir(path) and not os.path.islink(path):
                raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR))
            os.unlink(path)

    def rename(self, src: bytes, dst: bytes) -> None:
        with host_errors():
            os.replace(src, dst)

    def list_dir(self, path: bytes) -> list[bytes]:
        with host_errors():
            names = os.listdir(path)
        return [os.path.join(path, name) for name in names]

    def create_dir(self, path: bytes) -> None:
        with host_errors():
            os.mkdir(path)

    def create_dir_all(self, path: bytes) -> None:
        with host_errors():
            os.makedirs(path)

    def delete_empty_dir(self, path: bytes) -> None:
        with host_errors():
            os.rmdir(path)

    def delete_dir_all(self, path: bytes) -> None:
        with host_errors():
            if os.path.islink(path) or not os.path.isdir(path):
                # rmtree's own error for these cases carries no errno
                os.lstat(path)
                raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR))
            shutil.rmtree(path)

    def query_path_type(self, path: bytes) -> HostPathType:
        with host_errors():
            st = os.lstat(path)
        return HostPathType(
            is_dir=stat.S_ISDIR(st.st_mode),
            is_symlink=stat.S_ISLNK(st.st_mode),
        )

    def query_metadata(self, path: bytes) -> HostMetadata:
        with host_errors():
            st = os.lstat(path)
        return HostMetadata(
            is_dir=stat.S_ISDIR(st.st_mode),
            is_symlink=stat.S_ISLNK(st.st_mode),
            size=st.st_size,
            modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
            readonly=not st.st_mode & stat.S_IWUSR,
        )

    def _stream(self, handle: int) -> BinaryIO:
        stream = self._streams.get(handle)
        if stream is None:
            raise HostError(HostErrorTag.BAD_HANDLE, f"Unknown stream handle {handle}")
        return stream
