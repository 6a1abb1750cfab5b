"""File-based persistence backend

The slot is a single UTF-8 file on local disk. A missing file reads as an empty
slot. Writes go to a temporary sibling file which then replaces the target, so a
reader never observes a half-written document.

Classes:
    FileBackend:
        Single-slot backend storing its value in one file.

Example:
    >>> backend = FileBackend('~/.shortlinks/links.json')
    >>> backend.write('{"links": {}}')
    >>> backend.read()
    '{"links": {}}'
"""

import os
from pathlib import Path

from beartype import beartype

from shortlinks.dao.base import KeyValueBaseBackend
from shortlinks.dao.file.helpers import handle_file_io_error


class FileBackend(KeyValueBaseBackend):
    """Single-slot backend persisted to a file.

    Attributes:
        path (Path):
            Location of the slot file. Parent directories are created on write.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path).expanduser()

    @handle_file_io_error
    def read(self) -> str | None:
        try:
            return self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None

    @handle_file_io_error
    @beartype
    def write(self, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f'.{self.path.name}.tmp')
        tmp_path.write_text(value, encoding='utf-8')
        os.replace(tmp_path, self.path)

    @handle_file_io_error
    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f'<FileBackend path={str(self.path)!r}>'
