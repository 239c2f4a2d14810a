"""Build the record store selected by a Lambda's configuration

Functions:
    url_record_dao(app_config: dict, prefix: str | None = None) -> UrlRecordBaseDAO
        Instantiate the DAO of the active backend.

Example:
    >>> dao = url_record_dao({'redis': {'host': 'localhost', 'port': 6379, 'db': 0}}, prefix='clickshortener:dev')
    >>> type(dao).__name__
    'UrlRecordRedisDAO'
"""

import logging

from clickshortener.constants import Backend
from clickshortener.exceptions import BadConfigurationError
from clickshortener.types import LambdaConfiguration
from clickshortener.dao.base import UrlRecordBaseDAO


logger = logging.getLogger(__name__)

# Memory stores only live as long as the Lambda execution environment
_memory_dao: UrlRecordBaseDAO | None = None


def url_record_dao(app_config: LambdaConfiguration, prefix: str | None = None) -> UrlRecordBaseDAO:
    """Instantiate the record store for a config returned by `load_config()`

    Args:
        app_config (dict):
            Single-backend config, e.g. `{"redis": {"host": ..., "port": ..., "db": ...}}`.
        prefix (str | None):
            Redis key namespace, usually `app_prefix()`.

    Raises:
        BadConfigurationError:
            If the backend is unknown or its settings are incomplete.
        DataStoreError:
            If the Redis backend is unreachable.
    """
    global _memory_dao

    if len(app_config) != 1:
        raise BadConfigurationError(f'Expected exactly one backend config (given: {sorted(app_config)}).')
    [(backend, settings)] = app_config.items()
    settings = settings or {}

    if backend == Backend.REDIS:
        from clickshortener.dao.redis import UrlRecordRedisDAO

        logger.debug('Using Redis record store.')
        redis_config = {f'redis_{k}': v for k, v in settings.items()}
        return UrlRecordRedisDAO(**redis_config, prefix=prefix)

    if backend == Backend.FILE:
        from clickshortener.dao.file import UrlRecordFileDAO

        if not settings.get('path'):
            raise BadConfigurationError("File backend requires a 'path' setting.")
        logger.debug('Using JSON file record store.', extra={'path': settings['path']})
        return UrlRecordFileDAO(settings['path'])

    if backend == Backend.MEMORY:
        from clickshortener.dao.memory import UrlRecordMemoryDAO

        if _memory_dao is None:
            _memory_dao = UrlRecordMemoryDAO()
        logger.debug('Using in-memory record store.')
        return _memory_dao

    raise BadConfigurationError(f"Unknown record store backend '{backend}'.")
