"""
Inventory caching package.

Short-lived, in-process caching of backend reads. Entries expire lazily on
lookup and are invalidated explicitly after successful writes.
"""

from .store import CacheStore, CacheEntry, key_family
from .cached_reader import CachedReader

__all__ = ["CacheStore", "CacheEntry", "CachedReader", "key_family"]
