"""Unit tests for Redis-based mixins.

Test coverage includes:
    1. Initialization and configuration
       - Ensures correct initialization with or without a Redis client.
       - Confirms unreachable Redis raises DataStoreError.
    2. Healthcheck behavior
       - Healthcheck pings Redis.
       - Missed pong returns False when errors are not raised.
"""

from unittest.mock import patch

import pytest
import redis

from shortlinks.dao.exceptions import DataStoreError
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_without_redis_client():
    """Ensure the mixin creates a Redis client when none is provided."""
    redis_config = {
        'redis_host': 'redis',
        'redis_port': 6379,
        'redis_db': 0,
        'redis_decode_responses': True,
        'redis_username': 'default',
        'redis_password': 'password',
    }

    with patch('shortlinks.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        mixin = RedisClientMixin(**redis_config, prefix='testapp:test')

        redis_mock.assert_called_once_with(host='redis', port=6379, db=0, decode_responses=True, username='default', password='password')
        assert mixin.redis is redis_mock.return_value
        assert isinstance(mixin.keys, RedisKeySchema)
        assert mixin.keys.prefix == 'testapp:test'


def test_initialize_with_redis_client(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
    assert mixin.redis is redis_client
    redis_client.ping.assert_called_once_with()


def test_initialize_with_unreachable_redis(redis_client):
    """Ensure an unreachable Redis raises DataStoreError."""
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        RedisClientMixin(redis_client=redis_client)


# -------------------------------
# 2. Healthcheck behavior
# -------------------------------


def test_healthcheck(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)
    assert mixin._healthcheck() is True
    assert redis_client.ping.call_count == 2


def test_healthcheck_without_raising(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
    assert mixin._healthcheck(raise_error=False) is False
