"""Key-value store backends for the offline cache."""
from .interface import KeyValueStore
from .filesystem import FilesystemKeyValueStore
from .memory import MemoryKeyValueStore

__all__ = [
    "KeyValueStore",
    "FilesystemKeyValueStore",
    "MemoryKeyValueStore",
]
