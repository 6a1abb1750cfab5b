from shortlinks.dao.base import KeyValueBaseBackend
from shortlinks.dao.memory import InMemoryBackend
from shortlinks.dao.file import FileBackend
from shortlinks.dao.redis import RedisBackend
from shortlinks.dao.short_link_store import ShortLinkStore


__all__ = [
    'KeyValueBaseBackend',
    'InMemoryBackend',
    'FileBackend',
    'RedisBackend',
    'ShortLinkStore',
]
