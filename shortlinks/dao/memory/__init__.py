from shortlinks.dao.memory.memory_backend import InMemoryBackend


__all__ = ['InMemoryBackend']
