"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at process start, before any other
logging is done. `shortlinks.utils.config.initialize_app()` does so with the
configured log slot.

Two destinations are configured:

1. stdout, one JSON object per line:
{
    "timestamp": "2025-10-15T12:00:00.000Z",
    "level": "INFO",
    "logger": "shortlinks.dao.short_link_store",
    "message": "Short link added.",
    "shortcode": "abcd"
}

2. (optional) the diagnostic log sink, a bounded buffer of structured entries
persisted in its own key-value slot, independent of the link data:
{
    "stack": "backend",
    "level": "info",
    "package": "shortlinks.dao.short_link_store",
    "message": "Short link added.",
    "meta": {"shortcode": "abcd"},
    "timestamp": "2025-10-15T12:00:00.000Z",
    "id": "k3j9x0a1b"
}
Only the most recent 1000 entries are kept.
"""

import os
import json
import secrets
import string
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from shortlinks.constants import ENV, Defaults


STANDARD_ATTRS = frozenset(
    {
        'args',
        'asctime',
        'created',
        'exc_info',
        'exc_text',
        'filename',
        'funcName',
        'levelname',
        'levelno',
        'lineno',
        'module',
        'msecs',
        'message',
        'msg',
        'name',
        'pathname',
        'process',
        'processName',
        'relativeCreated',
        'stack_info',
        'thread',
        'threadName',
        'taskName',
    }
)

SINK_LEVELS = {
    'DEBUG': 'debug',
    'INFO': 'info',
    'WARNING': 'warn',
    'ERROR': 'error',
    'CRITICAL': 'error',
}

ENTRY_ID_ALPHABET = string.ascii_lowercase + string.digits


def record_timestamp(record: logging.LogRecord) -> str:
    # fmt: off
    return datetime.fromtimestamp(record.created, tz=UTC) \
                   .isoformat(timespec='milliseconds') \
                   .replace('+00:00', 'Z')
    # fmt: on


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the `extra` fields attached to a LogRecord."""
    return {key: value for key, value in record.__dict__.items() if key not in STANDARD_ATTRS}


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': record_timestamp(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update(record_extras(record))
        if record.exc_info:
            log['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


class KeyValueLogHandler(logging.Handler):
    """Diagnostic log sink persisting a bounded list of entries in a key-value slot

    Attributes:
        backend (KeyValueBaseBackend):
            Slot holding the JSON list of entries.
        max_entries (int):
            Number of most recent entries kept. Defaults to 1000.
        stack (str):
            Value of the "stack" field of every entry.

    NOTE:
        - Failures of the sink never reach the caller; they go through
          logging.Handler.handleError like any other handler failure.
    """

    def __init__(self, backend, max_entries: int = Defaults.MAX_LOG_ENTRIES, stack: str = Defaults.LOG_STACK, level=logging.NOTSET):
        super().__init__(level=level)
        self.backend = backend
        self.max_entries = max_entries
        self.stack = stack

    def to_entry(self, record: logging.LogRecord) -> dict[str, Any]:
        entry = {
            'stack': self.stack,
            'level': SINK_LEVELS.get(record.levelname, record.levelname.lower()),
            'package': record.name,
            'message': record.getMessage(),
        }
        meta = record_extras(record)
        if meta:
            entry['meta'] = meta
        entry['timestamp'] = record_timestamp(record)
        entry['id'] = ''.join(secrets.choice(ENTRY_ID_ALPHABET) for _ in range(9))
        return entry

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entries = self.get_logs()
            entries.append(self.to_entry(record))
            del entries[: -self.max_entries]
            self.backend.write(json.dumps(entries, default=str))
        except Exception:
            self.handleError(record)

    def get_logs(self) -> list[dict[str, Any]]:
        """Return persisted entries, oldest first. Unreadable buffers read as empty."""
        try:
            entries = json.loads(self.backend.read() or '[]')
        except Exception:
            return []
        return entries if isinstance(entries, list) else []

    def clear_logs(self) -> None:
        self.backend.clear()


def initialize_logging(log_backend=None) -> None:
    """Configure the root logger

    Args:
        log_backend (KeyValueBaseBackend | None):
            Slot for the diagnostic log sink. The sink is disabled when None.
    """
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()

    handlers = {
        'stdout': {
            'class': 'logging.StreamHandler',
            'formatter': 'json',
            'stream': 'ext://sys.stdout',
        }
    }
    if log_backend is not None:
        handlers['diagnostics'] = {
            '()': KeyValueLogHandler,
            'backend': log_backend,
        }

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': handlers,
            'root': {
                'level': log_level,
                'handlers': list(handlers),
            },
        }
    )
