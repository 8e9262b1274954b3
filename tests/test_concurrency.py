"""
Concurrent puts against a shared store.

Each worker thread drives the async store API with its own event loop,
so the store's own locking (or the database constraint) is the only
thing keeping racing writers apart.
"""

import asyncio
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from fastapi.testclient import TestClient

from main import create_app
from shortlink_app.exceptions import CollisionError
from shortlink_app.storage.strategies import SQLUrlStore


WORKERS = 10


def _put(store, code, target_url):
    """Returns "ok" or "collision" instead of raising, for easy counting"""
    try:
        asyncio.run(store.put(code, target_url))
        return "ok"
    except CollisionError:
        return "collision"


class TestConcurrentPuts:

    def test_same_code_exactly_one_winner(self, store):
        """Racing puts on one code: one success, every other a collision"""
        targets = [f"https://example.com/{i}" for i in range(WORKERS)]

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            results = list(pool.map(lambda url: _put(store, "RACE", url), targets))

        assert results.count("ok") == 1
        assert results.count("collision") == WORKERS - 1

        # The stored URL is the winner's, untouched by the losers
        winner = targets[results.index("ok")]
        assert asyncio.run(store.get("RACE")) == winner

    def test_distinct_codes_all_succeed(self, store):
        """Puts with distinct codes never interfere"""
        codes = [f"CODE{i}" for i in range(50)]

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            results = list(pool.map(
                lambda code: _put(store, code, "https://same.example/"), codes
            ))

        assert results == ["ok"] * len(codes)
        for code in codes:
            assert asyncio.run(store.get(code)) == "https://same.example/"

    def test_read_after_write_across_threads(self, memory_store):
        """A put in one thread is visible to a get in another"""
        with ThreadPoolExecutor(max_workers=2) as pool:
            pool.submit(asyncio.run, memory_store.put("RAW", "https://raw.example/")).result()
            seen = pool.submit(asyncio.run, memory_store.get("RAW")).result()

        assert seen == "https://raw.example/"


class HeldSQLUrlStore(SQLUrlStore):
    """SQL store whose inserts wait until the test releases them"""

    def __init__(self, database_url):
        super().__init__(database_url=database_url)
        self.entered = threading.Event()
        self.release = threading.Event()

    def _insert(self, code, target_url):
        self.entered.set()
        self.release.wait(timeout=10)
        return super()._insert(code, target_url)


class TestEventLoopNotBlocked:

    def test_other_requests_served_during_slow_insert(self, test_settings, tmp_path):
        """GET / answers while a /shorten insert is stuck in the database"""
        store = HeldSQLUrlStore(database_url=f"sqlite:///{tmp_path / 'held.db'}")

        with TestClient(create_app(settings=test_settings, store=store)) as client:
            with ThreadPoolExecutor(max_workers=1) as pool:
                pending = pool.submit(client.get, "/shorten/https://slow.example/")
                try:
                    assert store.entered.wait(timeout=5)

                    started = time.monotonic()
                    response = client.get("/")
                    elapsed = time.monotonic() - started

                    assert not store.release.is_set()
                finally:
                    store.release.set()

                shortened = pending.result(timeout=10)

        assert response.text == "Hello World!"
        assert elapsed < 2
        assert shortened.status_code == 200
