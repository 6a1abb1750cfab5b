import functools
from collections.abc import Callable

from shortlinks.constants import Slot


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for the persisted slots.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "shortlinks:prod" or "shortlinks:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def store_key(self) -> str:
        return 'links:store'

    @prefix_key
    def logs_key(self) -> str:
        return 'logs:diagnostics'

    def slot_key(self, slot: Slot | str) -> str:
        match Slot(slot):
            case Slot.STORE:
                return self.store_key()
            case Slot.LOGS:
                return self.logs_key()
