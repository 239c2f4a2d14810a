import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from clickshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.ConnectionError or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def all(self):
        ...     return self.redis.zrevrange(self.keys.created_key(), 0, -1)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            raise DataStoreError(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e

    return wrapper


def pairs_to_dict(flat: list[Any]) -> dict[str, Any]:
    """Fold a flat [field, value, field, value, ...] Lua HGETALL reply into a dict

    Example:
        >>> pairs_to_dict(['code', 'aB3xY9', 'click_count', '2'])
        {'code': 'aB3xY9', 'click_count': '2'}
    """
    return dict(zip(flat[::2], flat[1::2]))
