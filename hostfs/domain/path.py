"""Path value model.

A filesystem path is not guaranteed to be valid text, so a path is one of
three variants that all resolve to the raw bytes handed to the host:

- TextPath: text supplied by the caller, encoded as UTF-8 on resolution.
- NativePath: bytes returned by the host (e.g. from a directory listing).
- RawPath: bytes supplied by the caller, never validated.

Equality, hashing and ordering compare the resolved bytes, never the variant.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import total_ordering


class EmbeddedNulError(ValueError):
    """Raised when a path resolves to bytes containing a NUL byte."""

    def __init__(self, raw: bytes) -> None:
        super().__init__(f"Path contains an embedded NUL byte: {raw!r}")
        self.raw = raw


def encode_text(text: str) -> bytes:
    """Encode text as UTF-8 without ever failing.

    Surrogate escapes produced by os.fsdecode() go back to their original
    bytes; any other lone surrogate is encoded as-is.
    """
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


def _separators_text() -> tuple[str, ...]:
    seps = {"/", os.sep}
    if os.altsep:
        seps.add(os.altsep)
    return tuple(seps)


def _separators_bytes() -> tuple[bytes, ...]:
    return tuple(s.encode("ascii") for s in _separators_text())


@total_ordering
class PathValue:
    """Base class for the three path variants."""

    __slots__ = ()

    def _unchecked_bytes(self) -> bytes:
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        """Resolve this path to the bytes passed to the host.

        Raises:
            EmbeddedNulError: If the path contains a NUL byte.
        """
        raw = self._unchecked_bytes()
        if b"\x00" in raw:
            raise EmbeddedNulError(raw)
        return raw

    def display(self) -> str:
        """Human-readable form; invalid sequences become U+FFFD."""
        return self._unchecked_bytes().decode("utf-8", errors="replace")

    def with_extension(self, ext: str | bytes) -> PathValue:
        raise NotImplementedError

    def join(self, *parts: str | bytes) -> PathValue:
        raise NotImplementedError

    @property
    def name(self) -> str | bytes:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathValue):
            return NotImplemented
        return self._unchecked_bytes() == other._unchecked_bytes()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PathValue):
            return NotImplemented
        return self._unchecked_bytes() < other._unchecked_bytes()

    def __hash__(self) -> int:
        return hash(self._unchecked_bytes())

    def __str__(self) -> str:
        return self.display()


@dataclass(frozen=True, eq=False)
class TextPath(PathValue):
    """Path supplied as text.

    Attributes:
        text: The path text. Assumed, not guaranteed, to match the OS encoding.
    """

    text: str

    def _unchecked_bytes(self) -> bytes:
        return encode_text(self.text)

    def with_extension(self, ext: str | bytes) -> TextPath:
        if isinstance(ext, bytes):
            ext = ext.decode("utf-8", errors="surrogateescape")
        seps = _separators_text()
        text = self.text.rstrip("".join(seps)) or self.text
        start = max(text.rfind(sep) for sep in seps) + 1
        dot = text.rfind(".", start)
        stem = text if dot == -1 else text[:dot]
        return TextPath(f"{stem}.{ext}")

    def join(self, *parts: str | bytes) -> TextPath:
        text = self.text
        for part in parts:
            if isinstance(part, bytes):
                part = part.decode("utf-8", errors="surrogateescape")
            text = part if not text else f"{text.rstrip('/')}/{part}"
        return TextPath(text)

    @property
    def name(self) -> str:
        start = max(self.text.rfind(sep) for sep in _separators_text()) + 1
        return self.text[start:]

    def __fspath__(self) -> str:
        return self.text


@dataclass(frozen=True, eq=False)
class _BytesPath(PathValue):
    raw: bytes

    def _unchecked_bytes(self) -> bytes:
        return self.raw

    def with_extension(self, ext: str | bytes) -> PathValue:
        if isinstance(ext, str):
            ext = encode_text(ext)
        seps = _separators_bytes()
        raw = self.raw.rstrip(b"".join(seps)) or self.raw
        start = max(raw.rfind(sep) for sep in seps) + 1
        dot = raw.rfind(b".", start)
        stem = raw if dot == -1 else raw[:dot]
        return type(self)(stem + b"." + ext)

    def join(self, *parts: str | bytes) -> PathValue:
        raw = self.raw
        for part in parts:
            if isinstance(part, str):
                part = encode_text(part)
            raw = part if not raw else raw.rstrip(b"/") + b"/" + part
        return type(self)(raw)

    @property
    def name(self) -> bytes:
        start = max(self.raw.rfind(sep) for sep in _separators_bytes()) + 1
        return self.raw[start:]

    def __fspath__(self) -> bytes:
        return self.raw


@dataclass(frozen=True, eq=False)
class NativePath(_BytesPath):
    """Path bytes as returned by the host. Not necessarily valid text."""


@dataclass(frozen=True, eq=False)
class RawPath(_BytesPath):
    """Path bytes supplied by the caller, bypassing text validation."""


def from_text(text: str) -> PathValue:
    """Wrap text as a path. Always succeeds."""
    return TextPath(text)


def from_bytes(raw: bytes) -> PathValue:
    """Wrap caller-supplied bytes as a path. Always succeeds."""
    return RawPath(bytes(raw))


def display(path: PathValue) -> str:
    return path.display()


def with_extension(path: PathValue, ext: str | bytes) -> PathValue:
    """Replace or append the extension of the path's final component.

    Everything from the last '.' of the final component onward is replaced
    by '.' + ext; when the component has no '.', '.' + ext is appended.
    Trailing separators are dropped first, so "foo/" becomes "foo.ext".
    The variant of ``path`` is preserved.
    """
    return path.with_extension(ext)
