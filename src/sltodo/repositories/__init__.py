"""Repository layer for data access."""

from .filesystem import FilesystemStorage
from .memory import MemoryStorage
from .protocol import StorageProtocol

__all__ = [
    "FilesystemStorage",
    "MemoryStorage",
    "StorageProtocol",
]
