from abc import ABC, abstractmethod
from typing import Optional

class KeyValueStore(ABC):
    """
    Abstract interface for the durable key-value store backing the cache.
    Keys and values are plain strings; JSON encoding happens one layer up.
    """
    
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.
        
        Args:
            key: Opaque string key
            
        Returns:
            Stored string value, or None when the key is absent
        """
        pass
    
    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """
        Store a value under a key, replacing any previous value.
        
        Args:
            key: Opaque string key
            value: String value to store
            
        Returns:
            True once the value is durable
        """
        pass
    
    @abstractmethod
    def remove(self, key: str) -> bool:
        """
        Delete a key. Removing a missing key is not an error.
        
        Args:
            key: Opaque string key
            
        Returns:
            True if the key is gone afterwards
        """
        pass
    
    @abstractmethod
    def clear(self) -> bool:
        """
        Delete every key owned by this store.
        
        Returns:
            True if the store is empty afterwards
        """
        pass 
