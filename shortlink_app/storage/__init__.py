"""
URL store module.

Implements the Strategy Pattern for pluggable persistence of
code -> URL mappings behind a narrow put/get interface.
"""

from .strategies import UrlStore, InMemoryUrlStore, SQLUrlStore, RedisUrlStore
from .factory import UrlStoreFactory, StoreBackend

__all__ = [
    "UrlStore",
    "InMemoryUrlStore",
    "SQLUrlStore",
    "RedisUrlStore",
    "UrlStoreFactory",
    "StoreBackend",
]
