from unittest.mock import MagicMock

import pytest
import redis

from clickshortener.dao.redis import scripts


@pytest.fixture
def app_prefix():
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def lua_scripts():
    """Registered Lua script callables, keyed by script source."""
    return {
        scripts.INSERT_RECORD: MagicMock(name='insert_script'),
        scripts.HIT_RECORD: MagicMock(name='hit_script'),
        scripts.DELETE_RECORD: MagicMock(name='delete_script'),
    }


@pytest.fixture
def redis_client(lua_scripts):
    """Mock a Redis pipeline-compatible client."""
    _redis_client = MagicMock(spec=redis.client.Pipeline)
    _redis_client.ping.return_value = True
    _redis_client.pipeline.return_value = _redis_client
    _redis_client.__enter__.return_value = _redis_client
    _redis_client.__exit__.return_value = None
    _redis_client.register_script.side_effect = lambda source: lua_scripts[source]
    _redis_client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    return _redis_client
