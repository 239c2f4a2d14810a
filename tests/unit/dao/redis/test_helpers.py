"""Unit tests for the Redis DAO helpers.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Connection error handling
       - Ensures Redis connection and timeout errors become DataStoreError.
       - Ensures other Redis errors propagate untouched.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
    4. Lua reply folding
       - Ensures flat HGETALL replies become dictionaries.
"""

import pytest
import redis
from unittest.mock import MagicMock

from clickshortener.dao.redis.helpers import handle_redis_connection_error, pairs_to_dict
from clickshortener.dao.exceptions import DataStoreError


class DummyDAO:
    def __init__(self, error=None):
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        }
        self.error = error

    @handle_redis_connection_error
    def ping(self):
        """Ping Redis."""
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    assert DummyDAO().ping() == 'OK'


# -------------------------------
# 2. Connection error handling
# -------------------------------


@pytest.mark.parametrize('error', [redis.exceptions.ConnectionError('down'), redis.exceptions.TimeoutError('slow')])
def test_decorator_transforms_connectivity_errors(error):
    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        DummyDAO(error).ping()

    assert exc_info.value.__cause__ is error


def test_decorator_propagates_other_errors():
    with pytest.raises(redis.exceptions.ResponseError):
        DummyDAO(redis.exceptions.ResponseError('WRONGTYPE')).ping()


# -------------------------------
# 3. Metadata preservation
# -------------------------------


def test_decorator_preserves_metadata():
    assert DummyDAO.ping.__name__ == 'ping'
    assert DummyDAO.ping.__doc__ == 'Ping Redis.'


# -------------------------------
# 4. Lua reply folding
# -------------------------------


def test_pairs_to_dict():
    assert pairs_to_dict(['code', 'aB3xY9', 'click_count', '2']) == {'code': 'aB3xY9', 'click_count': '2'}


def test_pairs_to_dict_empty():
    assert pairs_to_dict([]) == {}
