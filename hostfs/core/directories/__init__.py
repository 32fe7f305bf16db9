"""Directory operations."""

from hostfs.core.directories.directory_operations import DirectoryOperations

__all__ = ["DirectoryOperations"]
