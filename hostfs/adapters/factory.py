"""Factory classes for host and operation instantiation.

This module centralizes the creation of hosts and the operation facades
built on them, keeping the CLI layer free from direct adapter imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hostfs.core.directories import DirectoryOperations
from hostfs.core.files import FileOperations, StreamingReader

if TYPE_CHECKING:
    from hostfs.domain.config import HostfsConfig
    from hostfs.ports.config import ConfigProvider
    from hostfs.ports.host import HostOperations


@dataclass(frozen=True)
class Filesystem:
    """The three operation facades sharing one host."""

    host: HostOperations
    files: FileOperations
    streams: StreamingReader
    dirs: DirectoryOperations

    @classmethod
    def on(cls, host: HostOperations) -> Filesystem:
        """Build all facades on ``host``."""
        return cls(
            host=host,
            files=FileOperations(host),
            streams=StreamingReader(host),
            dirs=DirectoryOperations(host),
        )


class HostFactory:
    """Factory for creating host instances from configuration.

    Args:
        config: HostfsConfig with host settings.
    """

    def __init__(self, config: HostfsConfig) -> None:
        self._config = config

    def create_host(self) -> HostOperations:
        """Create the configured host.

        Raises:
            ValueError: If the backend name is not recognized.
        """
        backend = self._config.host.backend
        if backend == "local":
            from hostfs.adapters.host.local import LocalHost

            return LocalHost()
        if backend == "memory":
            from hostfs.adapters.host.memory import InMemoryHost

            return InMemoryHost()
        raise ValueError(f"Unknown host backend: {backend}")

    def create_filesystem(self) -> Filesystem:
        return Filesystem.on(self.create_host())


class ConfigFactory:
    """Factory for creating configuration providers."""

    def create_config_provider(self) -> ConfigProvider:
        from hostfs.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()
