from beartype import beartype

from shortlinks.dao.base import KeyValueBaseBackend


class InMemoryBackend(KeyValueBaseBackend):
    """Process-local slot. State is lost when the process exits.

    Useful as a fake in tests and for throwaway sessions.
    """

    def __init__(self, value: str | None = None):
        self._value = value

    def read(self) -> str | None:
        return self._value

    @beartype
    def write(self, value: str) -> None:
        self._value = value

    def clear(self) -> None:
        self._value = None

    def __repr__(self) -> str:
        size = 0 if self._value is None else len(self._value)
        return f'<InMemoryBackend size={size}>'
