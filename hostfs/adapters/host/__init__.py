"""Host adapters implementing the HostOperations port."""

from hostfs.adapters.host.local import LocalHost
from hostfs.adapters.host.memory import InMemoryHost

__all__ = ["InMemoryHost", "LocalHost"]
