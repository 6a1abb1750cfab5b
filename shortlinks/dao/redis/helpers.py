import functools
import redis
from collections.abc import Callable
from typing import TypeVar

from shortlinks.dao.exceptions import DataStoreError


__all__ = []


def describe_connection(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' for the given Redis client."""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


F = TypeVar('F', bound=Callable)


def handle_redis_connection_error(method: F) -> F:
    """Wrap Redis-interacting backend methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            Backend method performing Redis operations which may raise
            redis.exceptions.ConnectionError or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def read(self):
        ...     return self.redis.get(self.key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)}.") from e

    return wrapper
