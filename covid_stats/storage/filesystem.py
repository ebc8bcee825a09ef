import os
import tempfile
from typing import Optional
from urllib.parse import quote, unquote

from covid_stats.domain.errors import StorageError
from covid_stats.storage.interface import KeyValueStore

SUFFIX = ".json"

class FilesystemKeyValueStore(KeyValueStore):
    """
    Implements the key-value store using one file per key on the local filesystem.
    """
    
    def __init__(self, base_dir: str = None):
        """
        Initialize filesystem storage.
        
        Args:
            base_dir: Directory holding one file per key.
                      If None, uses 'cache' in the current working directory.
        """
        if base_dir is None:
            base_dir = os.path.join(os.getcwd(), "cache")
        
        self.base_dir = base_dir
        os.makedirs(self.base_dir, exist_ok=True)
    
    def _path_for(self, key: str) -> str:
        # Keys carry '@', spaces and arbitrary country names
        return os.path.join(self.base_dir, quote(key, safe="") + SUFFIX)
    
    def keys(self) -> list[str]:
        """List stored keys, decoded back from their file names."""
        return sorted(
            unquote(name[: -len(SUFFIX)])
            for name in os.listdir(self.base_dir)
            if name.endswith(SUFFIX)
        )
    
    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise StorageError(f"Failed to read key {key!r}: {e}") from e
    
    def set(self, key: str, value: str) -> bool:
        """
        Write a value atomically.
        
        The value lands in a temporary file in the same directory first and is
        then renamed over the target, so concurrent readers see either the old
        value or the new one, never a partial write.
        """
        path = self._path_for(key)
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.base_dir, prefix=".tmp-", suffix=SUFFIX + ".part")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(f"Failed to write key {key!r}: {e}") from e
        return True
    
    def remove(self, key: str) -> bool:
        path = self._path_for(key)
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            raise StorageError(f"Failed to remove key {key!r}: {e}") from e
        return True
    
    def clear(self) -> bool:
        try:
            for name in os.listdir(self.base_dir):
                if name.endswith(SUFFIX):
                    os.remove(os.path.join(self.base_dir, name))
        except OSError as e:
            raise StorageError(f"Failed to clear {self.base_dir}: {e}") from e
        return True 
