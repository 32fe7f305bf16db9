"""Translation of host error tags into the error taxonomy.

HOST_TAG_CATEGORIES is the only place host tags are interpreted. Every
documented tag has an entry; tags mapped to None are known but unmodeled and
always become OTHER. Tags a host reports outside the vocabulary also become
OTHER, keeping the host's message.
"""

import logging
from typing import TypeVar

from hostfs.domain.errors import ErrorCategory, FsError
from hostfs.domain.path import EmbeddedNulError, PathValue
from hostfs.ports.host import HostError, HostErrorTag

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=FsError)

HOST_TAG_CATEGORIES: dict[HostErrorTag, ErrorCategory | None] = {
    HostErrorTag.NOT_FOUND: ErrorCategory.NOT_FOUND,
    HostErrorTag.PERMISSION_DENIED: ErrorCategory.PERMISSION_DENIED,
    HostErrorTag.ALREADY_EXISTS: ErrorCategory.ALREADY_EXISTS,
    HostErrorTag.NOT_A_DIRECTORY: ErrorCategory.NOT_A_DIRECTORY,
    HostErrorTag.DIRECTORY_NOT_EMPTY: None,
    HostErrorTag.IS_A_DIRECTORY: None,
    HostErrorTag.READ_ONLY_FILESYSTEM: None,
    HostErrorTag.INVALID_INPUT: None,
    HostErrorTag.BAD_HANDLE: None,
    HostErrorTag.INTERRUPTED: None,
    HostErrorTag.UNEXPECTED_EOF: None,
    HostErrorTag.OTHER: None,
}

_KNOWN_TAGS = {tag.value: tag for tag in HostErrorTag}


def category_for_tag(tag: str) -> ErrorCategory | None:
    """Look up the category of a host tag. Unknown tags have none."""
    known = _KNOWN_TAGS.get(tag.strip().lower())
    if known is None:
        logger.debug("Unrecognized host error tag: %r", tag)
        return None
    return HOST_TAG_CATEGORIES[known]


def map_host_error(
    error: HostError,
    error_cls: type[F],
    path: PathValue | None = None,
) -> F:
    """Classify a host failure for the calling operation family.

    Args:
        error: The failure raised by the host.
        error_cls: MetadataError, ReadError, WriteError or DirError.
        path: The path the operation was called with.

    Returns:
        An instance of ``error_cls``; OTHER keeps the host's message.
    """
    kind = error_cls.kind_for(category_for_tag(error.tag))
    return error_cls(kind, error.message, path)


def resolve(path: PathValue) -> bytes:
    """Resolve a path for a host call.

    Raises:
        HostError: Tagged "invalid input" when the path contains NUL, so the
                   failure is classified like any host-reported one.
    """
    try:
        return path.to_bytes()
    except EmbeddedNulError as e:
        raise HostError(HostErrorTag.INVALID_INPUT, str(e)) from e
