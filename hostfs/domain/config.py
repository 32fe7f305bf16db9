"""Config domain models for hostfs.

Configuration is stored in .hostfs/config.toml (and a global config file)
and selects the host backend, listing behavior and log verbosity.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Literal

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class HostConfig:
    """Configuration for the host backend.

    Attributes:
        backend: "local" for the operating system, "memory" for an
                 in-process fake filesystem (useful for dry runs and tests).

    Raises:
        ValueError: If backend is not a known backend name.
    """

    backend: Literal["local", "memory"] = "local"

    def __post_init__(self) -> None:
        """Validate host config after initialization."""
        if self.backend not in ("local", "memory"):
            raise ValueError(
                f"backend must be 'local' or 'memory', got '{self.backend}'"
            )


@dataclass(frozen=True)
class ListingConfig:
    """Configuration for directory listing output.

    Attributes:
        sort: Sort entries by their bytes (hosts list in arbitrary order)
        show_kind: Append '/' to directories and '@' to symlinks in short listings

    Raises:
        ValueError: If a field is not a boolean.
    """

    sort: bool = True
    show_kind: bool = False

    def __post_init__(self) -> None:
        """Validate listing config after initialization."""
        for name in ("sort", "show_kind"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for log output.

    Attributes:
        level: Log level name used when --verbose is not given

    Raises:
        ValueError: If level is not a known level name.
    """

    level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate logging config after initialization."""
        if not isinstance(self.level, str):
            raise ValueError(f"level must be a string, got {self.level!r}")
        if self.level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"level must be one of {', '.join(LOG_LEVELS)}, got '{self.level}'"
            )


@dataclass(frozen=True)
class HostfsConfig:
    """Complete hostfs configuration.

    Attributes:
        host: Host backend configuration
        listing: Directory listing configuration
        logging: Logging configuration
    """

    host: HostConfig = field(default_factory=HostConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def default() -> "HostfsConfig":
        """Create a config with all default values."""
        return HostfsConfig(
            host=HostConfig(),
            listing=ListingConfig(),
            logging=LoggingConfig(),
        )

    @staticmethod
    def from_partial(base: "HostfsConfig", data: dict[str, Any]) -> "HostfsConfig":
        """Apply a partial config dictionary on top of ``base``.

        Sections missing from ``data`` keep their base values; keys within a
        present section override the matching base fields. Each section is
        validated as it is rebuilt.

        Args:
            base: Config to start from
            data: Raw config sections (e.g. parsed TOML)

        Returns:
            New HostfsConfig with overrides applied

        Raises:
            ValueError: If a section is malformed or a value is invalid
        """
        sections = {}
        for name in ("host", "listing", "logging"):
            section = data.get(name)
            if section is None:
                continue
            if not isinstance(section, dict):
                raise ValueError(f"[{name}] must be a table, got {type(section).__name__}")
            try:
                sections[name] = replace(getattr(base, name), **section)
            except TypeError as e:
                raise ValueError(f"Invalid key in [{name}]: {e}") from e
        return replace(base, **sections)
