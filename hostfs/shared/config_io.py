"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of HostfsConfig to/from TOML format.
"""

import os
import platform
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from hostfs.domain.config import HostfsConfig

LOCAL_CONFIG_DIR = ".hostfs"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/hostfs/config.toml or ~/.config/hostfs/config.toml
    - Windows: %APPDATA%/hostfs/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "hostfs" / "config.toml"
        return Path.home() / ".config" / "hostfs" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "hostfs" / "config.toml"
        return Path.home() / ".config" / "hostfs" / "config.toml"


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to config.toml file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def config_to_data(config: HostfsConfig) -> dict[str, Any]:
    """Convert a HostfsConfig into TOML-serializable sections."""
    return {
        "host": {"backend": config.host.backend},
        "listing": {
            "sort": config.listing.sort,
            "show_kind": config.listing.show_kind,
        },
        "logging": {"level": config.logging.level},
    }


def load_config(path: Path) -> HostfsConfig:
    """Load configuration from a TOML file on top of the defaults.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed or has invalid values
    """
    return HostfsConfig.from_partial(HostfsConfig.default(), load_config_data(path))


def save_config(config: HostfsConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: HostfsConfig to save
        path: Destination path for config.toml
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as f:
        tomli_w.dump(config_to_data(config), f)
