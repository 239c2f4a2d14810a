"""Data Access Object (DAO) implementation for managing short URL records in Redis

This module provides a Redis-based implementation of UrlRecordBaseDAO for CRUD-like
operations with UrlRecordModel instances.

Responsibilities:
    - Insert, retrieve and delete short URL records in Redis;
    - Maintain the target -> code index and the creation-time index;
    - Count clicks and stamp last access times atomically;
    - Provide defensive error handling and raise appropriate DAO exceptions.

NOTE: The client must be created with `decode_responses=True` (the default of
      RedisClientMixin); records are parsed from `str` replies.

Classes:
    UrlRecordRedisDAO:
        DAO for storing and retrieving UrlRecordModel in a Redis datastore.

Example:
    >>> from datetime import datetime, UTC
    >>> from clickshortener.models import UrlRecordModel
    >>> from clickshortener.dao.redis import UrlRecordRedisDAO

    >>> dao = UrlRecordRedisDAO(prefix="app:dev")

    >>> record = UrlRecordModel(
    ...     code="aB3xY9",
    ...     target="https://example.com/page",
    ...     created_at=datetime.now(UTC),
    ... )
    >>> dao.insert(record).code
    'aB3xY9'

    >>> dao.hit("aB3xY9").click_count
    1
"""

from datetime import datetime, UTC

from beartype import beartype

from clickshortener.models import UrlRecordModel, record_from_dict
from clickshortener.types import RecordHash
from clickshortener.dao.base import UrlRecordBaseDAO, target_index
from clickshortener.dao.redis import scripts
from clickshortener.dao.redis.mixins import RedisClientMixin
from clickshortener.dao.redis.helpers import handle_redis_connection_error, pairs_to_dict
from clickshortener.dao.exceptions import UrlRecordAlreadyExistsError, UrlRecordNotFoundError


class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL records

    This class implements the UrlRecordBaseDAO interface using Redis as a data store.
    Every mutation touching more than one key runs as a Lua script (see scripts.py),
    so concurrent Lambda instances never observe or produce partial records.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._insert_script = self.redis.register_script(scripts.INSERT_RECORD)
        self._hit_script = self.redis.register_script(scripts.HIT_RECORD)
        self._delete_script = self.redis.register_script(scripts.DELETE_RECORD)

    @handle_redis_connection_error
    @beartype
    def insert(self, record: UrlRecordModel) -> UrlRecordModel:
        """Insert a short URL record into Redis

        The target lookup, the shortcode collision check and the writes to the
        record hash, target index and creation index all run in one Lua script.

        Raises:
            UrlRecordAlreadyExistsError:
                If a record with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> dao.insert(record)
            UrlRecordModel(code='aB3xY9', target='https://example.com', ...)
        """
        status, payload = self._insert_script(
            keys=[
                self.keys.link_key(record.code),
                self.keys.targets_key(),
                self.keys.created_key(),
            ],
            args=[
                record.code,
                record.target,
                record.created_at.isoformat(),
                record.created_at.timestamp(),
                self.keys.link_key(''),
            ],
        )

        if int(status) == scripts.TARGET_EXISTS:
            # Existing record is read atomically with the target index
            return record_from_dict(pairs_to_dict(payload))
        if int(status) == scripts.CODE_TAKEN:
            raise UrlRecordAlreadyExistsError(f"Short URL with code '{record.code}' already exists.")
        return record

    @handle_redis_connection_error
    @beartype
    def get(self, code: str) -> UrlRecordModel:
        data = self.redis.hgetall(self.keys.link_key(code))
        if not data:
            raise UrlRecordNotFoundError(f"Short URL with code '{code}' not found.")
        return record_from_dict(data)

    @handle_redis_connection_error
    @beartype
    def find(self, target: str) -> UrlRecordModel | None:
        code = self.redis.hget(self.keys.targets_key(), target)
        if code is None:
            return None

        try:
            return self.get(code)
        except UrlRecordNotFoundError:
            # Deleted between the two round trips
            return None

    @handle_redis_connection_error
    @beartype
    def hit(self, code: str) -> UrlRecordModel:
        """Count a click on a short URL

        HINCRBY and the last access HSET run in one Lua script, so concurrent
        redirects never lose increments.

        Raises:
            UrlRecordNotFoundError:
                If no record with the given shortcode exists.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.hit('aB3xY9').click_count
            1
        """
        reply = self._hit_script(
            keys=[self.keys.link_key(code)],
            args=[datetime.now(UTC).isoformat()],
        )
        if not reply:
            raise UrlRecordNotFoundError(f"Short URL with code '{code}' not found.")
        return record_from_dict(pairs_to_dict(reply))

    @handle_redis_connection_error
    @beartype
    def delete(self, code: str) -> None:
        deleted = self._delete_script(
            keys=[
                self.keys.link_key(code),
                self.keys.targets_key(),
                self.keys.created_key(),
            ],
            args=[code],
        )
        if not int(deleted):
            raise UrlRecordNotFoundError(f"Short URL with code '{code}' not found.")

    @handle_redis_connection_error
    def all(self) -> list[UrlRecordModel]:
        codes = self.redis.zrevrange(self.keys.created_key(), 0, -1)
        if not codes:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for code in codes:
                pipe.hgetall(self.keys.link_key(code))
            replies = pipe.execute()

        # Records deleted after ZREVRANGE come back as empty hashes
        return [record_from_dict(data) for data in replies if data]

    def snapshot(self) -> dict[str, UrlRecordModel]:
        return {record.code: record for record in self.all()}

    @handle_redis_connection_error
    @beartype
    def load(self, records: dict[str, UrlRecordModel]) -> None:
        """Replace every stored record with `records` in a single MULTI/EXEC transaction

        Raises:
            DataStoreError:
                If `records` breaks the record invariants, or on Redis connectivity issues.
        """
        targets = target_index(records)
        stale_codes = self.redis.zrange(self.keys.created_key(), 0, -1)

        with self.redis.pipeline(transaction=True) as pipe:
            for code in stale_codes:
                pipe.delete(self.keys.link_key(code))
            pipe.delete(self.keys.targets_key(), self.keys.created_key())

            for record in records.values():
                pipe.hset(self.keys.link_key(record.code), mapping=self._to_hash(record))
                pipe.zadd(self.keys.created_key(), {record.code: record.created_at.timestamp()})
            if targets:
                pipe.hset(self.keys.targets_key(), mapping=targets)
            pipe.execute()

    def healthcheck(self) -> bool:
        return self._healthcheck(raise_error=False)

    @staticmethod
    def _to_hash(record: UrlRecordModel) -> RecordHash:
        mapping = {
            'code': record.code,
            'target': record.target,
            'created_at': record.created_at.isoformat(),
            'click_count': record.click_count,
        }
        # Redis hashes can't hold nulls, so a missing field means "never accessed"
        if record.last_accessed_at is not None:
            mapping['last_accessed_at'] = record.last_accessed_at.isoformat()
        return mapping
