"""
URL store strategies using Strategy Pattern.

Allows switching between storage backends without touching the service:
- InMemory: Development/testing (lost on restart)
- SQL: Durable, any SQLAlchemy database (SQLite file by default)
- Redis: Durable, networked key-value store

Every backend makes check-then-insert a single atomic step, so two
puts racing on one code yield exactly one success and one CollisionError.
"""

import logging
import threading
import zlib
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from shortlink_app.database.connection import Base, create_db_engine, create_session_factory
from shortlink_app.exceptions import CollisionError, NotFoundError, PersistenceError
from shortlink_app.models.url import UrlRecord
from shortlink_app.schemas.url import UrlMapping
from shortlink_app.storage.helpers import handle_redis_errors, handle_sql_errors

logger = logging.getLogger(__name__)


class UrlStore(ABC):
    """
    Abstract base class for URL stores.
    
    The store exclusively owns the set of mappings. Mappings are
    inserted once and never overwritten.
    
    All methods are async because most backends do I/O.
    """
    
    @abstractmethod
    async def put(self, code: str, target_url: str) -> UrlMapping:
        """
        Insert a new mapping.
        
        Args:
            code: Short code (key)
            target_url: Original URL (value)
            
        Returns:
            The stored mapping
            
        Raises:
            CollisionError: code is already mapped (existing mapping is kept)
            PersistenceError: backend failure
        """
        pass
    
    @abstractmethod
    async def get_mapping(self, code: str) -> UrlMapping:
        """
        Fetch the full mapping for a code.
        
        Raises:
            NotFoundError: code is not mapped
            PersistenceError: backend failure
        """
        pass
    
    async def get(self, code: str) -> str:
        """Return the target URL for a code (same errors as get_mapping)"""
        mapping = await self.get_mapping(code)
        return mapping.target_url
    
    async def close(self) -> None:
        """Release backend resources"""
        pass


class InMemoryUrlStore(UrlStore):
    """
    In-process store: a dict guarded by a sharded lock map.
    
    Each code hashes to one of `shards` locks. Puts on the same code
    always take the same lock, so the existence check and the insert
    happen together. Codes on different shards never wait on each other.
    
    Not durable: use for development and tests only.
    """
    
    def __init__(self, shards: int = 64):
        if shards < 1:
            raise ValueError(f"Lock shard count must be positive, got {shards}")
        self._mappings: Dict[str, UrlMapping] = {}
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(shards)]
    
    def _lock_for(self, code: str) -> threading.Lock:
        # crc32 rather than hash(): stable across processes and PYTHONHASHSEED
        return self._locks[zlib.crc32(code.encode("utf-8")) % len(self._locks)]
    
    async def put(self, code: str, target_url: str) -> UrlMapping:
        with self._lock_for(code):
            if code in self._mappings:
                raise CollisionError(code)
            mapping = UrlMapping(code=code, target_url=target_url)
            self._mappings[code] = mapping
        return mapping
    
    async def get_mapping(self, code: str) -> UrlMapping:
        with self._lock_for(code):
            mapping = self._mappings.get(code)
        if mapping is None:
            raise NotFoundError(code)
        return mapping
    
    def __len__(self) -> int:
        return len(self._mappings)


class SQLUrlStore(UrlStore):
    """
    SQLAlchemy-backed store.
    
    Uniqueness is enforced by the primary key on `url_mappings.code`:
    a colliding INSERT fails with IntegrityError inside the database,
    which makes check-and-insert atomic across processes too.
    
    SQLAlchemy sessions are blocking, so each operation runs in the
    threadpool and a slow database never stalls the event loop.
    """
    
    def __init__(self, database_url: str = "sqlite:///./shortlinks.db"):
        self.database_url = database_url
        self.engine = create_db_engine(database_url)
        self._session_factory = create_session_factory(self.engine)
        self._init_database()
    
    def _init_database(self):
        """Create the mappings table if it doesn't exist"""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not initialize database: {e}") from e
        logger.info("SQL store ready (%s)", self.engine.url.render_as_string(hide_password=True))
    
    @staticmethod
    def _to_mapping(record: UrlRecord) -> UrlMapping:
        # SQLite hands DateTime(timezone=True) back naive; values are stored as UTC
        created_at = record.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return UrlMapping(code=record.code, target_url=record.target_url, created_at=created_at)
    
    def _insert(self, code: str, target_url: str) -> UrlMapping:
        record = UrlRecord(
            code=code,
            target_url=target_url,
            created_at=datetime.now(timezone.utc)
        )
        with self._session_factory() as session:
            session.add(record)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise CollisionError(code) from e
            return self._to_mapping(record)
    
    def _select(self, code: str) -> UrlMapping:
        with self._session_factory() as session:
            record = session.get(UrlRecord, code)
            if record is None:
                raise NotFoundError(code)
            return self._to_mapping(record)
    
    @handle_sql_errors
    async def put(self, code: str, target_url: str) -> UrlMapping:
        return await run_in_threadpool(self._insert, code, target_url)
    
    @handle_sql_errors
    async def get_mapping(self, code: str) -> UrlMapping:
        return await run_in_threadpool(self._select, code)
    
    async def close(self) -> None:
        await run_in_threadpool(self.engine.dispose)


class RedisUrlStore(UrlStore):
    """
    Redis-backed store.
    
    Each mapping is one key, `<prefix>:url:<code>`, holding the JSON
    mapping document. Inserts use SET NX, so Redis itself rejects a
    second writer for the same code.
    
    The client is the blocking redis.Redis; commands run in the threadpool.
    """
    
    def __init__(self, redis_client, prefix: str = "shortlink"):
        """
        Initialize Redis store.
        
        Args:
            redis_client: Redis client instance (redis.Redis)
            prefix: Key namespace
        """
        self.redis = redis_client
        self.prefix = prefix
    
    def _key(self, code: str) -> str:
        return f"{self.prefix}:url:{code}"
    
    @handle_redis_errors
    async def put(self, code: str, target_url: str) -> UrlMapping:
        mapping = UrlMapping(code=code, target_url=target_url)
        created = await run_in_threadpool(
            self.redis.set, self._key(code), mapping.model_dump_json(), nx=True
        )
        if not created:
            raise CollisionError(code)
        return mapping
    
    @handle_redis_errors
    async def get_mapping(self, code: str) -> UrlMapping:
        raw = await run_in_threadpool(self.redis.get, self._key(code))
        if raw is None:
            raise NotFoundError(code)
        return UrlMapping.model_validate_json(raw)
    
    @handle_redis_errors
    async def close(self) -> None:
        await run_in_threadpool(self.redis.close)
