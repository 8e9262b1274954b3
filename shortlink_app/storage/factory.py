"""
Factory for creating URL store instances.

Returns a new store on every call: the application builds one
store at startup and owns it (see main.create_app).
"""

import logging
from enum import Enum
from typing import Optional

import redis

from .strategies import UrlStore, InMemoryUrlStore, SQLUrlStore, RedisUrlStore
from shortlink_app.config import Settings, settings as default_settings
from shortlink_app.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class StoreBackend(Enum):
    """Available URL store backends"""
    MEMORY = "memory"
    SQL = "sql"
    REDIS = "redis"


class UrlStoreFactory:
    """Factory for creating URL stores from settings"""
    
    @classmethod
    def create(
        cls,
        backend: Optional[StoreBackend] = None,
        settings: Optional[Settings] = None
    ) -> UrlStore:
        """
        Create a URL store.
        
        Args:
            backend: Type of store backend (from settings if None)
            settings: Settings to read connection details from
            
        Returns:
            New UrlStore instance
            
        Raises:
            PersistenceError: durable backend is unreachable
            ValueError: unknown backend
        """
        settings = settings or default_settings
        if backend is None:
            backend = StoreBackend(settings.store_backend)
        
        if backend == StoreBackend.MEMORY:
            store = InMemoryUrlStore(shards=settings.lock_shards)
            logger.info("In-memory URL store initialized (not durable)")
            
        elif backend == StoreBackend.SQL:
            store = SQLUrlStore(database_url=settings.database_url)
            logger.info("SQL URL store initialized")
            
        elif backend == StoreBackend.REDIS:
            redis_client = redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            
            # Test connection immediately; no silent fallback to memory
            try:
                redis_client.ping()
            except redis.exceptions.RedisError as e:
                raise PersistenceError(f"Redis connection failed: {e}") from e
            
            store = RedisUrlStore(redis_client, prefix=settings.redis_key_prefix)
            logger.info("Redis URL store initialized")
            
        else:
            raise ValueError(f"Unknown store backend: {backend}")
        
        return store
