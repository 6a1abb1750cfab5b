"""Abstract base class for persistence backends of a single key-value slot.

A backend owns exactly one slot holding one string value (the JSON document of
the store, or the diagnostic log buffer). Every write fully replaces the value;
there are no partial writes and no transactions.

Responsibilities:
    - Read the raw value of the slot (None when nothing was stored yet).
    - Replace the raw value of the slot.
    - Clear the slot.
    - Standardize error handling across storage mechanisms by raising
      DataStoreError on any I/O failure.

Example:
    Typical usage with a concrete implementation:

        >>> from shortlinks.dao.memory import InMemoryBackend

        >>> backend = InMemoryBackend()
        >>> backend.read() is None
        True
        >>> backend.write('{"links": {}}')
        >>> backend.read()
        '{"links": {}}'
"""

from abc import ABC, abstractmethod


class KeyValueBaseBackend(ABC):
    """Interface for single-slot persistence backends.

    Methods:
        read() -> str | None:
            Return the stored value, or None if the slot is empty.
            Raises DataStoreError on read failure.

        write(value: str) -> None:
            Replace the stored value.
            Raises DataStoreError on write failure.

        clear() -> None:
            Remove the stored value. Clearing an empty slot is a no-op.
            Raises DataStoreError on failure.

    Subclassing:
        Storage-specific implementations (e.g., InMemoryBackend, FileBackend,
        RedisBackend) must extend this class and implement all abstract methods.
    """

    @abstractmethod
    def read(self) -> str | None:
        """Return the raw value held by the slot.

        Returns:
            str | None: The stored value, or None if nothing was stored yet.

        Raises:
            DataStoreError:
                If the underlying storage cannot be read.
        """
        pass

    @abstractmethod
    def write(self, value: str) -> None:
        """Replace the raw value held by the slot.

        Args:
            value (str):
                The new value. Replaces any previous value entirely.

        Raises:
            DataStoreError:
                If the underlying storage cannot be written.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the value held by the slot.

        Raises:
            DataStoreError:
                If the underlying storage cannot be cleared.
        """
        pass
