"""
Tests for URLService: generate + put with regenerate-and-retry.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from shortlink_app.exceptions import (
    CodeGenerationError,
    InvalidTargetURLError,
    NotFoundError,
    PersistenceError,
)
from shortlink_app.services.short_code_strategies import (
    HashedUUIDShortCodeStrategy,
    ShortCodeStrategy,
)
from shortlink_app.services.url_service import URLService
from shortlink_app.storage.strategies import UrlStore


class SequenceStrategy(ShortCodeStrategy):
    """Hands out predetermined codes"""

    def __init__(self, *codes):
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


class TestURLService:

    def test_shorten_round_trip(self, store):
        """resolve(shorten(u).code) == u"""
        service = URLService(store, HashedUUIDShortCodeStrategy())
        target = "https://example.com/a/b?x=1"

        mapping = asyncio.run(service.shorten(target))

        assert mapping.target_url == target
        assert asyncio.run(service.resolve(mapping.code)) == target

    def test_new_code_per_request(self, memory_store):
        """The same URL shortened twice gets two codes"""
        service = URLService(memory_store, HashedUUIDShortCodeStrategy())

        first = asyncio.run(service.shorten("https://www.test.com/"))
        second = asyncio.run(service.shorten("https://www.test.com/"))

        assert first.code != second.code

    def test_retries_on_collision(self, memory_store):
        """A colliding code is replaced by a fresh one"""
        asyncio.run(memory_store.put("TAKEN", "https://old.example/"))
        generator = SequenceStrategy("TAKEN", "TAKEN", "FREE")
        service = URLService(memory_store, generator, max_retries=3)

        mapping = asyncio.run(service.shorten("https://new.example/"))

        assert mapping.code == "FREE"
        assert generator.calls == 3
        assert asyncio.run(memory_store.get("TAKEN")) == "https://old.example/"

    def test_gives_up_after_max_retries(self, memory_store):
        asyncio.run(memory_store.put("TAKEN", "https://old.example/"))
        generator = SequenceStrategy("TAKEN")
        service = URLService(memory_store, generator, max_retries=4)

        with pytest.raises(CodeGenerationError) as exc_info:
            asyncio.run(service.shorten("https://new.example/"))

        assert exc_info.value.attempts == 4
        assert generator.calls == 4

    def test_persistence_error_not_retried(self):
        store = AsyncMock(spec=UrlStore)
        store.put.side_effect = PersistenceError("down")
        service = URLService(store, SequenceStrategy("A", "B"), max_retries=5)

        with pytest.raises(PersistenceError):
            asyncio.run(service.shorten("https://example.com/"))

        assert store.put.await_count == 1

    def test_empty_target(self, memory_store):
        service = URLService(memory_store, HashedUUIDShortCodeStrategy())

        with pytest.raises(InvalidTargetURLError):
            asyncio.run(service.shorten(""))

        assert len(memory_store) == 0

    def test_resolve_unknown(self, memory_store):
        service = URLService(memory_store, HashedUUIDShortCodeStrategy())

        with pytest.raises(NotFoundError):
            asyncio.run(service.resolve("nope"))

    def test_describe(self, memory_store):
        service = URLService(memory_store, SequenceStrategy("INFO"))
        asyncio.run(service.shorten("https://example.com/"))

        mapping = asyncio.run(service.describe("INFO"))

        assert mapping.code == "INFO"
        assert mapping.target_url == "https://example.com/"

    def test_requires_at_least_one_attempt(self, memory_store):
        with pytest.raises(ValueError):
            URLService(memory_store, HashedUUIDShortCodeStrategy(), max_retries=0)
