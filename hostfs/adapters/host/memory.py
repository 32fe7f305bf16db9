"""In-memory host adapter.

A fake filesystem implementing the HostOperations port, for tests and for
dry runs of the CLI. Paths are '/'-separated bytes; relative paths live
under the root entry ".". Supports symlinks, read-only files and denied
paths so every error category can be produced without touching disk.
"""

from __future__ import annotations

import io
import itertools
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from hostfs.domain.path import encode_text
from hostfs.ports.host import HostError, HostErrorTag, HostMetadata, HostPathType

logger = logging.getLogger(__name__)

_ROOTS = (b"/", b".")
_MAX_SYMLINK_DEPTH = 40


def normalize(path: bytes) -> bytes:
    """Canonical key for a path: no trailing or duplicate '/', no './' prefix."""
    if b"\x00" in path:
        raise HostError(HostErrorTag.INVALID_INPUT, "path contains a NUL byte")
    absolute = path.startswith(b"/")
    parts = [p for p in path.split(b"/") if p and p != b"."]
    if absolute:
        return b"/" + b"/".join(parts)
    return b"/".join(parts) or b"."


def parent_of(path: bytes) -> bytes:
    head, sep, _ = path.rpartition(b"/")
    if not sep:
        return b"."
    return head or b"/"


def join(directory: bytes, name: bytes) -> bytes:
    if directory == b"/":
        return b"/" + name
    return directory + b"/" + name


def _child(key: bytes, name: bytes) -> bytes:
    """Key of ``name`` inside the directory stored under ``key``."""
    if key == b".":
        return name
    return join(key, name)


@dataclass
class _Node:
    is_dir: bool = False
    data: bytes = b""
    target: bytes | None = None
    readonly: bool = False
    modified: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_symlink(self) -> bool:
        return self.target is not None


class InMemoryHost:
    """Fake host holding the whole filesystem in a dict keyed by path bytes."""

    def __init__(self) -> None:
        self._nodes: dict[bytes, _Node] = {root: _Node(is_dir=True) for root in _ROOTS}
        self._denied: set[bytes] = set()
        self._streams: dict[int, io.BytesIO] = {}
        self._ids = itertools.count(1)

    # Fixture helpers (not part of the HostOperations port)

    def add_file(self, path: bytes, data: bytes = b"", readonly: bool = False) -> None:
        """Create a file, creating missing parent directories."""
        key = self._key(path)
        self._ensure_parents(key)
        self._nodes[key] = _Node(data=data, readonly=readonly)

    def add_symlink(self, path: bytes, target: bytes) -> None:
        """Create a symlink; ``target`` is resolved relative to the link's directory."""
        key = self._key(path)
        self._ensure_parents(key)
        self._nodes[key] = _Node(target=target)

    def deny(self, path: bytes) -> None:
        """Make every operation on ``path`` or below it fail with permission denied."""
        self._denied.add(self._key(path))

    @property
    def open_handles(self) -> int:
        return len(self._streams)

    # HostOperations

    def open_stream(self, path: bytes) -> int:
        node = self._file_node(self._follow(self._key(path)))
        handle = next(self._ids)
        self._streams[handle] = io.BytesIO(node.data)
        return handle

    def read_line(self, handle: int) -> bytes:
        return self._stream(handle).readline()

    def close(self, handle: int) -> None:
        self._stream(handle)
        del self._streams[handle]

    def read_all(self, path: bytes) -> bytes:
        return self._file_node(self._follow(self._key(path))).data

    def write_bytes(self, path: bytes, data: bytes) -> None:
        key = self._follow(self._key(path))
        self._check_access(key)
        node = self._nodes.get(key)
        if node is not None:
            if node.is_dir:
                raise HostError(HostErrorTag.IS_A_DIRECTORY, "Is a directory")
            if node.readonly:
                raise HostError(HostErrorTag.PERMISSION_DENIED, "File is read-only")
            node.data = bytes(data)
            node.modified = datetime.now(UTC)
            return
        self._require_parent_dir(key)
        self._nodes[key] = _Node(data=bytes(data))

    def write_text(self, path: bytes, text: str) -> None:
        self.write_bytes(path, encode_text(text))

    def delete_file(self, path: bytes) -> None:
        key = self._key(path)
        node = self._lookup(key)
        if node.is_dir:
            raise HostError(HostErrorTag.IS_A_DIRECTORY, "Is a directory")
        if node.readonly:
            raise HostError(HostErrorTag.PERMISSION_DENIED, "File is read-only")
        del self._nodes[key]

    def rename(self, src: bytes, dst: bytes) -> None:
        src_key = self._key(src)
        dst_key = self._key(dst)
        node = self._lookup(src_key)
        if self._is_below(dst_key, src_key):
            raise HostError(HostErrorTag.INVALID_INPUT, "Cannot move a directory into itself")
        if dst_key == src_key:
            return
        self._check_access(dst_key)
        self._require_parent_dir(dst_key)
        existing = self._nodes.get(dst_key)
        if existing is not None and existing.is_dir:
            raise HostError(HostErrorTag.IS_A_DIRECTORY, "Destination is a directory")
        moved = {
            key: n for key, n in self._nodes.items() if self._is_below(key, src_key)
        }
        for key in moved:
            del self._nodes[key]
        del self._nodes[src_key]
        self._nodes[dst_key] = node
        for key, n in moved.items():
            self._nodes[dst_key + key[len(src_key):]] = n

    def list_dir(self, path: bytes) -> list[bytes]:
        key = self._follow(self._key(path))
        self._dir_node(key)
        return [
            join(path.rstrip(b"/") or b"/", child.rpartition(b"/")[2])
            for child in self._nodes
            if child not in _ROOTS and parent_of(child) == key
        ]

    def create_dir(self, path: bytes) -> None:
        key = self._key(path)
        self._check_access(key)
        if key in self._nodes:
            raise HostError(HostErrorTag.ALREADY_EXISTS, "File exists")
        self._require_parent_dir(key)
        self._nodes[key] = _Node(is_dir=True)

    def create_dir_all(self, path: bytes) -> None:
        key = self._key(path)
        if key in self._nodes:
            raise HostError(HostErrorTag.ALREADY_EXISTS, "File exists")
        normalized = normalize(path)
        current = b"/" if normalized.startswith(b"/") else b"."
        for part in normalized.lstrip(b"/").split(b"/"):
            child = _child(current, part)
            if child not in self._nodes:
                self._check_access(child)
                self._nodes[child] = _Node(is_dir=True)
                current = child
                continue
            current = self._follow(child)
            node = self._nodes.get(current)
            if node is None:
                raise HostError(HostErrorTag.NOT_FOUND, "No such file or directory")
            if not node.is_dir:
                raise HostError(HostErrorTag.NOT_A_DIRECTORY, "Not a directory")

    def delete_empty_dir(self, path: bytes) -> None:
        key = self._key(path)
        self._dir_node(key, follow=False)
        if key in _ROOTS:
            raise HostError(HostErrorTag.PERMISSION_DENIED, "Cannot remove root")
        if any(parent_of(child) == key for child in self._nodes if child not in _ROOTS):
            raise HostError(HostErrorTag.DIRECTORY_NOT_EMPTY, "Directory not empty")
        del self._nodes[key]

    def delete_dir_all(self, path: bytes) -> None:
        key = self._key(path)
        self._dir_node(key, follow=False)
        if key in _ROOTS:
            raise HostError(HostErrorTag.PERMISSION_DENIED, "Cannot remove root")
        for child in sorted(
            (k for k in self._nodes if self._is_below(k, key)), reverse=True
        ):
            self._check_access(child)
            del self._nodes[child]
        del self._nodes[key]

    def query_path_type(self, path: bytes) -> HostPathType:
        node = self._lookup(self._key(path))
        return HostPathType(is_dir=node.is_dir, is_symlink=node.is_symlink)

    def query_metadata(self, path: bytes) -> HostMetadata:
        node = self._lookup(self._key(path))
        size = len(node.target) if node.is_symlink else len(node.data)
        return HostMetadata(
            is_dir=node.is_dir,
            is_symlink=node.is_symlink,
            size=size,
            modified=node.modified,
            readonly=node.readonly,
        )

    # Internals

    def _check_access(self, key: bytes) -> None:
        for denied in self._denied:
            if key == denied or self._is_below(key, denied):
                raise HostError(HostErrorTag.PERMISSION_DENIED, "Permission denied")

    @staticmethod
    def _is_below(key: bytes, directory: bytes) -> bool:
        if directory == b"/":
            return key.startswith(b"/") and key != b"/"
        if directory == b".":
            return not key.startswith(b"/") and key != b"."
        return key.startswith(directory + b"/")

    def _lookup(self, key: bytes) -> _Node:
        self._check_access(key)
        node = self._nodes.get(key)
        if node is None:
            if parent_of(key) in self._nodes and not self._nodes[parent_of(key)].is_dir:
                raise HostError(HostErrorTag.NOT_A_DIRECTORY, "Not a directory")
            raise HostError(HostErrorTag.NOT_FOUND, "No such file or directory")
        return node

    def _key(self, path: bytes, depth: int = 0) -> bytes:
        """Node key for ``path`` with every symlink before the final component resolved."""
        key = normalize(path)
        if key in _ROOTS:
            return key
        parts = key.lstrip(b"/").split(b"/")
        current = b"/" if key.startswith(b"/") else b"."
        for part in parts[:-1]:
            current = self._follow(_child(current, part), depth)
        return _child(current, parts[-1])

    def _follow(self, key: bytes, depth: int = 0) -> bytes:
        """Resolve ``key`` while it names a symlink. The result may not exist."""
        while True:
            node = self._nodes.get(key)
            if node is None or not node.is_symlink:
                return key
            depth += 1
            if depth > _MAX_SYMLINK_DEPTH:
                raise HostError(HostErrorTag.OTHER, "Too many levels of symbolic links")
            target = node.target
            key = self._key(
                target if target.startswith(b"/") else join(parent_of(key), target), depth
            )

    def _file_node(self, key: bytes) -> _Node:
        node = self._lookup(key)
        if node.is_dir:
            raise HostError(HostErrorTag.IS_A_DIRECTORY, "Is a directory")
        return node

    def _dir_node(self, key: bytes, follow: bool = True) -> _Node:
        node = self._lookup(key)
        if node.is_symlink and follow:
            node = self._lookup(self._follow(key))
        if not node.is_dir:
            raise HostError(HostErrorTag.NOT_A_DIRECTORY, "Not a directory")
        return node

    def _require_parent_dir(self, key: bytes) -> None:
        parent = self._follow(parent_of(key))
        node = self._nodes.get(parent)
        if node is None:
            raise HostError(HostErrorTag.NOT_FOUND, "No such file or directory")
        if not node.is_dir:
            raise HostError(HostErrorTag.NOT_A_DIRECTORY, "Not a directory")

    def _ensure_parents(self, key: bytes) -> None:
        current = parent_of(key)
        while current not in self._nodes:
            self._nodes[current] = _Node(is_dir=True)
            current = parent_of(current)

    def _stream(self, handle: int) -> io.BytesIO:
        stream = self._streams.get(handle)
        if stream is None:
            raise HostError(HostErrorTag.BAD_HANDLE, f"Unknown stream handle {handle}")
        return stream
