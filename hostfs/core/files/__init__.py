"""File operations: whole-file access and streaming reads."""

from hostfs.core.files.file_operations import FileOperations
from hostfs.core.files.streaming import LineStream, StreamingReader

__all__ = ["FileOperations", "LineStream", "StreamingReader"]
