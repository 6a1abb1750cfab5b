import functools
from collections.abc import Callable
from typing import TypeVar

from shortlinks.dao.exceptions import DataStoreError


__all__ = []


F = TypeVar('F', bound=Callable)


def handle_file_io_error(method: F) -> F:
    """Wrap file-interacting backend methods to handle I/O errors

    Undecodable file contents count as an I/O failure: the slot can't be read.

    Args:
        method (Callable[..., Any]):
            Backend method performing file operations which may raise OSError
            or UnicodeError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on I/O failures.

    Example:
        >>> @handle_file_io_error
        ... def read(self):
        ...     return self.path.read_text()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (OSError, UnicodeError) as e:
            raise DataStoreError(f"Can't access storage file at {self.path}.") from e

    return wrapper
