"""Configuration provider port.

Defines the interface for loading and accessing application configuration.
"""

from pathlib import Path
from typing import Protocol

from hostfs.domain.config import HostfsConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, config_dir: Path) -> HostfsConfig:
        """Load configuration from the local config directory.

        Args:
            config_dir: Path to .hostfs directory containing config.toml

        Returns:
            HostfsConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config file is missing or invalid.
        """
        ...
