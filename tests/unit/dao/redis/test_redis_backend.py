"""Unit tests for the RedisBackend

Test coverage includes:

1. Key selection
   - Ensures each slot maps to its own namespaced key.

2. Read / write / clear
   - Ensures GET, SET and DEL are issued against the slot key.
   - Ensures bytes responses are decoded.
   - Ensures invalid value types raise.

3. Connectivity errors
   - Confirms Redis connection errors raise DataStoreError.

4. Store integration
   - Ensures ShortLinkStore absorbs Redis failures.
"""

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from shortlinks.constants import Slot
from shortlinks.dao import ShortLinkStore
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.dao.redis import RedisBackend
from shortlinks.models import ReadStatus


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def backend(redis_client, app_prefix):
    return RedisBackend(slot=Slot.STORE, redis_client=redis_client, prefix=app_prefix)


# -------------------------------
# 1. Key selection
# -------------------------------


@pytest.mark.parametrize(
    'slot, expected_key',
    [
        (Slot.STORE, 'testapp:test:links:store'),
        (Slot.LOGS, 'testapp:test:logs:diagnostics'),
    ],
)
def test_slot_key(redis_client, app_prefix, slot, expected_key):
    assert RedisBackend(slot=slot, redis_client=redis_client, prefix=app_prefix).key == expected_key


# -------------------------------
# 2. Read / write / clear
# -------------------------------


def test_read(backend, redis_client):
    redis_client.get.return_value = '{"links": {}}'
    assert backend.read() == '{"links": {}}'
    redis_client.get.assert_called_once_with('testapp:test:links:store')


def test_read_decodes_bytes(backend, redis_client):
    redis_client.get.return_value = b'{"links": {}}'
    assert backend.read() == '{"links": {}}'


def test_read_empty_slot(backend, redis_client):
    redis_client.get.return_value = None
    assert backend.read() is None


def test_write(backend, redis_client):
    backend.write('{"links": {}}')
    redis_client.set.assert_called_once_with('testapp:test:links:store', '{"links": {}}')


def test_write_with_invalid_type(backend):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        backend.write({'links': {}})


def test_clear(backend, redis_client):
    backend.clear()
    redis_client.delete.assert_called_once_with('testapp:test:links:store')


# -------------------------------
# 3. Connectivity errors
# -------------------------------


@pytest.mark.parametrize('operation', ['get', 'set', 'delete'])
def test_connection_errors(backend, redis_client, operation):
    getattr(redis_client, operation).side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        match operation:
            case 'get':
                backend.read()
            case 'set':
                backend.write('{}')
            case 'delete':
                backend.clear()


# -------------------------------
# 4. Store integration
# -------------------------------


def test_store_absorbs_redis_failures(backend, redis_client, short_link):
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection error')
    redis_client.set.side_effect = redis.exceptions.ConnectionError('Connection error')
    store = ShortLinkStore(backend)

    assert store.read_store().status == ReadStatus.FAILED
    assert store.write_store(store.read_store().snapshot) is False
    store.create(short_link)
    assert store.lookup('abcd') is None
