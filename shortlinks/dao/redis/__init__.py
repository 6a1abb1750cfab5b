from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.redis_backend import RedisBackend


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'RedisBackend',
]
