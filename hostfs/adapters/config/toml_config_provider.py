"""TOML-based configuration provider.

Each existing config file is a layer applied on top of the previous one:

    built-in defaults < global (~/.config/hostfs/config.toml) < local (.hostfs/config.toml)

A layer only overrides the keys it sets. A layer that cannot be parsed or
fails validation is skipped with a warning, so a broken file never stops a
command from running.
"""

import logging
from pathlib import Path

from hostfs.domain.config import HostfsConfig
from hostfs.shared.config_io import get_global_config_path, load_config_data

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider reading the global and local TOML layers."""

    def load(self, config_dir: Path) -> HostfsConfig:
        """Merge the config layers visible from ``config_dir``.

        Args:
            config_dir: The .hostfs directory that may hold a local config.toml

        Returns:
            Defaults with every valid layer applied in order
        """
        config = HostfsConfig.default()
        for scope, path in self.layers(config_dir):
            config = self._apply_layer(config, scope, path)
        return config

    @staticmethod
    def layers(config_dir: Path) -> list[tuple[str, Path]]:
        """Config files in the order they are applied, lowest priority first."""
        return [
            ("global", get_global_config_path()),
            ("local", config_dir / "config.toml"),
        ]

    @staticmethod
    def _apply_layer(config: HostfsConfig, scope: str, path: Path) -> HostfsConfig:
        if not path.exists():
            return config
        try:
            merged = HostfsConfig.from_partial(config, load_config_data(path))
        except (FileNotFoundError, ValueError) as e:
            logger.warning("Ignoring %s config %s: %s", scope, path, e)
            return config
        logger.debug("Applied %s config from %s", scope, path)
        return merged
