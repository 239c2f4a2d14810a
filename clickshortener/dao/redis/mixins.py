"""Connection handling shared by the Redis record store

The mixin owns the `redis.Redis` client and the key schema of one deployment
(`<app>:<env>`). It PINGs the server once on construction, so a misconfigured
Lambda fails fast with DataStoreError instead of on its first request, and
exposes the same PING as a non-raising reachability check for health reports.

Example:
    >>> import redis
    >>> from clickshortener.dao.redis import UrlRecordRedisDAO
    >>> client = redis.Redis(host='localhost', decode_responses=True)
    >>> dao = UrlRecordRedisDAO(redis_client=client, prefix='clickshortener:dev')
    >>> dao.keys.link_key('aB3xY9')
    'clickshortener:dev:links:aB3xY9'
    >>> dao.healthcheck()
    True
"""

from typing import Optional

import redis

from clickshortener.dao.redis.redis_key_schema import RedisKeySchema
from clickshortener.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Redis client and key schema for record stores backed by Redis.

    Connection settings map one to one to the `redis` section of a Lambda's
    AppConfig entry, each key prefixed with `redis_` (see dao.factory).

    Attributes:
        redis (redis.Redis):
            Client shared by every operation of the store.
        keys (RedisKeySchema):
            Key names under the deployment's namespace.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = 5.0,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Connect to Redis, or adopt `redis_client` when one is given

        Args:
            redis_host, redis_port, redis_db:
                Server address. Ignored with `redis_client`.
            redis_decode_responses (Optional[bool]):
                Must stay True for record parsing; replies are read as `str`.
            redis_username, redis_password:
                ACL credentials, if the server requires them.
            redis_socket_timeout (Optional[float]):
                Seconds before a stalled command fails. Defaults to 5.
            redis_client (Optional[redis.Redis]):
                Existing client, e.g. one kept warm across Lambda invocations.
            prefix (Optional[str]):
                Key namespace such as 'clickshortener:prod'.

        Raises:
            DataStoreError:
                If the server doesn't answer the initial PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING the server

        Returns False on connection failures and timeouts when `raise_error`
        is off; otherwise those raise DataStoreError naming the server.
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            kwargs = self.redis.connection_pool.connection_kwargs
            address = f"{kwargs.get('host')}:{kwargs.get('port')}/{kwargs.get('db')}"
            raise DataStoreError(f"Can't connect to Redis at {address}. Check the record store configuration.") from e
        return True
