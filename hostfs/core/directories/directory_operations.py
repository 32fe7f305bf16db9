"""Directory listing, creation and deletion."""

from __future__ import annotations

import logging

from hostfs.core.error_mapper import map_host_error, resolve
from hostfs.core.files.file_operations import metadata_from_host
from hostfs.domain.entities import DirEntry, FsResult
from hostfs.domain.errors import DirError
from hostfs.domain.path import NativePath, PathValue
from hostfs.ports.host import HostError, HostOperations

logger = logging.getLogger(__name__)


class DirectoryOperations:
    """Directory operations on top of a host.

    create_all() and delete_all() are not transactional: a failure partway
    through leaves whatever was already created or removed in place.

    Args:
        host: Host implementation receiving the resolved path bytes.
    """

    def __init__(self, host: HostOperations) -> None:
        self._host = host

    def list(self, path: PathValue) -> FsResult[list[PathValue], DirError]:
        """List ``path`` in host order.

        Returns:
            NativePath values, each the listed directory joined with an
            entry name.
        """
        try:
            raw_entries = self._host.list_dir(resolve(path))
        except HostError as e:
            return FsResult.create_error(map_host_error(e, DirError, path))
        return FsResult.create_success([NativePath(raw) for raw in raw_entries])

    def list_entries(self, path: PathValue) -> FsResult[list[DirEntry], DirError]:
        """List ``path`` with a metadata snapshot of every entry.

        Entries removed between listing and stat are skipped.
        """
        listing = self.list(path)
        if not listing.success:
            return FsResult.create_error(listing.error)

        entries: list[DirEntry] = []
        for entry_path in listing.value:
            try:
                info = self._host.query_metadata(resolve(entry_path))
            except HostError as e:
                error = map_host_error(e, DirError, entry_path)
                if error.kind is DirError.Kind.NOT_FOUND:
                    logger.debug("Entry vanished during listing: %s", entry_path)
                    continue
                return FsResult.create_error(error)
            metadata = metadata_from_host(info)
            entries.append(DirEntry(path=entry_path, kind=metadata.kind, metadata=metadata))
        return FsResult.create_success(entries)

    def create(self, path: PathValue) -> FsResult[None, DirError]:
        """Create one directory. The parent must exist and the path must not."""
        return self._call("create_dir", path)

    def create_all(self, path: PathValue) -> FsResult[None, DirError]:
        """Create ``path`` and any missing ancestors.

        Fails with ALREADY_EXISTS when ``path`` itself exists.
        """
        return self._call("create_dir_all", path)

    def delete_empty(self, path: PathValue) -> FsResult[None, DirError]:
        """Remove an empty directory. A non-empty directory fails as OTHER."""
        return self._call("delete_empty_dir", path)

    def delete_all(self, path: PathValue) -> FsResult[None, DirError]:
        """Remove ``path`` and everything below it."""
        return self._call("delete_dir_all", path)

    def _call(self, operation: str, path: PathValue) -> FsResult[None, DirError]:
        try:
            getattr(self._host, operation)(resolve(path))
        except HostError as e:
            logger.debug("%s failed for %s: %s", operation, path, e)
            return FsResult.create_error(map_host_error(e, DirError, path))
        return FsResult.create_success()
