"""Handle-based, line-oriented file reading.

A handle moves Closed -(open)-> Open -(read_line)*-> Open -(close)-> Closed.
hostfs keeps no handle table: whoever receives a FileHandle from open()
must pass it to close() exactly once. Use StreamingReader.opened() to get
that guarantee on every exit path:

    with reader.opened(path) as stream:
        for line in stream:
            ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from hostfs.core.error_mapper import map_host_error, resolve
from hostfs.domain.entities import FileHandle, FsResult
from hostfs.domain.errors import ReadError
from hostfs.domain.path import PathValue
from hostfs.ports.host import HostError, HostOperations

logger = logging.getLogger(__name__)


def strip_terminator(line: bytes) -> bytes:
    """Remove a trailing "\\n" or "\\r\\n"."""
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


class StreamingReader:
    """Open/read_line/close over a host's stream primitives.

    Args:
        host: Host implementation that owns the native stream resources.
    """

    def __init__(self, host: HostOperations) -> None:
        self._host = host

    def open(self, path: PathValue) -> FsResult[FileHandle, ReadError]:
        """Open ``path`` for reading, positioned at the start of the file."""
        try:
            handle_id = self._host.open_stream(resolve(path))
        except HostError as e:
            return FsResult.create_error(map_host_error(e, ReadError, path))
        logger.debug("Opened stream %d for %s", handle_id, path)
        return FsResult.create_success(FileHandle(handle_id))

    def read_line(self, handle: FileHandle) -> FsResult[bytes, ReadError]:
        """Read the next line without its terminator.

        End of stream is not an error: it yields b"" on this and every later
        call. A blank line also yields b""; iterate with iter_lines() when
        blank lines must be told apart from the end of the stream.
        """
        try:
            line = self._host.read_line(handle.id)
        except HostError as e:
            return FsResult.create_error(map_host_error(e, ReadError))
        return FsResult.create_success(strip_terminator(line))

    def iter_lines(self, handle: FileHandle) -> Iterator[bytes]:
        """Yield lines without terminators until end of stream.

        Raises:
            ReadError: If the host fails mid-stream.
        """
        while True:
            try:
                line = self._host.read_line(handle.id)
            except HostError as e:
                raise map_host_error(e, ReadError) from e
            if not line:
                return
            yield strip_terminator(line)

    def close(self, handle: FileHandle) -> None:
        """Release the handle. Never raises."""
        try:
            self._host.close(handle.id)
        except HostError as e:
            logger.debug("Ignoring failure closing stream %d: %s", handle.id, e)

    @contextmanager
    def opened(self, path: PathValue) -> Iterator[LineStream]:
        """Open ``path`` and close it when the block exits, however it exits.

        Raises:
            ReadError: If the file cannot be opened.
        """
        handle = self.open(path).unwrap()
        try:
            yield LineStream(self, handle, path)
        finally:
            self.close(handle)


class LineStream:
    """An open stream bound to its reader, yielded by StreamingReader.opened()."""

    def __init__(self, reader: StreamingReader, handle: FileHandle, path: PathValue) -> None:
        self._reader = reader
        self.handle = handle
        self.path = path

    def read_line(self) -> FsResult[bytes, ReadError]:
        result = self._reader.read_line(self.handle)
        if not result.success:
            result.error.path = self.path
        return result

    def __iter__(self) -> Iterator[bytes]:
        try:
            yield from self._reader.iter_lines(self.handle)
        except ReadError as e:
            e.path = self.path
            raise
