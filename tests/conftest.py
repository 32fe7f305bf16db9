"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest

from hostfs.adapters.factory import Filesystem
from hostfs.adapters.host.local import LocalHost
from hostfs.adapters.host.memory import InMemoryHost

# ============================================================================
# Config Isolation
# ============================================================================
# Point the global config lookup at an empty directory so a developer's
# ~/.config/hostfs/config.toml never changes test outcomes.


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch):
    """Redirect XDG_CONFIG_HOME (and APPDATA) to an empty temporary directory."""
    config_home = tmp_path_factory.mktemp("config_home")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("APPDATA", str(config_home))
    return config_home


# ============================================================================
# Hosts
# ============================================================================


@pytest.fixture
def memory_host() -> InMemoryHost:
    """Empty in-memory host with a /work directory."""
    host = InMemoryHost()
    host.create_dir(b"/work")
    return host


@pytest.fixture
def local_host() -> LocalHost:
    return LocalHost()


@pytest.fixture
def mem_fs(memory_host: InMemoryHost) -> Filesystem:
    """Operation facades on the in-memory host."""
    return Filesystem.on(memory_host)


@pytest.fixture
def local_fs(local_host: LocalHost) -> Filesystem:
    """Operation facades on the operating system."""
    return Filesystem.on(local_host)


@pytest.fixture
def tmp_root(tmp_path: Path) -> bytes:
    """tmp_path as host path bytes."""
    return os.fsencode(tmp_path)
