"""Redis-based persistence backend for a single key-value slot

The slot maps to one Redis string key. The key carries no TTL: expired links
stay in the store and are only treated as inactive by readers.

Classes:
    RedisBackend:
        Single-slot backend storing its value under one namespaced Redis key.

Example:
    >>> from shortlinks.constants import Slot
    >>> backend = RedisBackend(slot=Slot.STORE, prefix='shortlinks:dev')
    >>> backend.key
    'shortlinks:dev:links:store'
    >>> backend.write('{"links": {}}')
    >>> backend.read()
    '{"links": {}}'
"""

from beartype import beartype

from shortlinks.constants import Slot
from shortlinks.dao.base import KeyValueBaseBackend
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error


class RedisBackend(RedisClientMixin, KeyValueBaseBackend):
    """Redis-backed slot

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        slot (Slot):
            Which slot this backend holds.

    Methods:
        read() -> str | None:
            GET the slot key. Raises DataStoreError on connectivity issues.
        write(value: str) -> None:
            SET the slot key. Raises DataStoreError on connectivity issues.
        clear() -> None:
            DEL the slot key. Raises DataStoreError on connectivity issues.
    """

    def __init__(self, slot: Slot | str = Slot.STORE, **kwargs):
        self.slot = Slot(slot)
        super().__init__(**kwargs)

    @property
    def key(self) -> str:
        return self.keys.slot_key(self.slot)

    @handle_redis_connection_error
    def read(self) -> str | None:
        value = self.redis.get(self.key)
        if isinstance(value, bytes):
            value = value.decode('utf-8')
        return value

    @handle_redis_connection_error
    @beartype
    def write(self, value: str) -> None:
        self.redis.set(self.key, value)

    @handle_redis_connection_error
    def clear(self) -> None:
        self.redis.delete(self.key)

    def __repr__(self) -> str:
        return f'<RedisBackend key={self.key!r}>'
