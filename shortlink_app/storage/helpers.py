"""
Decorators translating backend driver errors into PersistenceError.

Only connectivity/driver failures are translated. CollisionError and
NotFoundError raised inside the wrapped method pass through untouched.
"""

import functools
from typing import Any, Callable, TypeVar

import redis
from sqlalchemy.exc import SQLAlchemyError

from shortlink_app.exceptions import PersistenceError

F = TypeVar("F", bound=Callable[..., Any])


def handle_redis_errors(method: F) -> F:
    """Wrap an async Redis store method so RedisError becomes PersistenceError"""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except redis.exceptions.RedisError as e:
            raise PersistenceError(f"Redis {method.__name__} failed: {e}") from e

    return wrapper


def handle_sql_errors(method: F) -> F:
    """Wrap an async SQL store method so SQLAlchemyError becomes PersistenceError"""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database {method.__name__} failed: {e}") from e

    return wrapper
