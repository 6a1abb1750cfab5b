"""Helper utilities shared by the store and the handlers.

Functions:
    utcnow() -> datetime
        Current moment as an aware UTC datetime
    to_iso8601(dt: datetime) -> str
        Serialize a datetime as ISO 8601 UTC with millisecond precision
    from_iso8601(value: str) -> datetime
        Parse an ISO 8601 string into an aware UTC datetime
    is_expired(expiry_at: datetime, now: datetime | None = None) -> bool
        Check whether an expiry moment has passed
    get_short_url(shortcode: str, base_url: str) -> str
        Get string representation of short URL for a given shortcode
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler: Callable) -> Callable
        Decorator: Turn unexpected handler errors into a 500 response

Example:
    >>> from shortlinks.utils.helpers import to_iso8601, from_iso8601
    >>> to_iso8601(from_iso8601('2025-10-15T12:00:00Z'))
    '2025-10-15T12:00:00.000Z'
"""

import os
import json
import logging
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from shortlinks.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from shortlinks.exceptions import MissingEnvironmentVariableError


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Return the current UTC moment truncated to millisecond precision (the persisted precision)."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_iso8601(dt: datetime) -> str:
    """Serialize a datetime as '<YYYY-MM-DD>T<HH:MM:SS.mmm>Z'

    Naive datetimes are assumed to be in UTC.

    Example:
        >>> to_iso8601(datetime(2025, 10, 15, 12, 0, tzinfo=UTC))
        '2025-10-15T12:00:00.000Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    # fmt: off
    return dt.astimezone(UTC) \
             .isoformat(timespec='milliseconds') \
             .replace('+00:00', 'Z')
    # fmt: on


def from_iso8601(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime

    Raises:
        TypeError: If value is not a string.
        ValueError: If value is not a valid ISO 8601 timestamp.
    """
    if not isinstance(value, str):
        raise TypeError(f'Timestamp must be of type string (given type: {type(value)}).')

    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def is_expired(expiry_at: datetime, now: datetime | None = None) -> bool:
    """Return True if `now` is strictly past `expiry_at`

    The exact expiry moment still counts as active. Evaluated fresh on every
    call; nothing is cached and nothing is deleted.

    Example:
        >>> moment = datetime(2025, 10, 15, tzinfo=UTC)
        >>> is_expired(moment, now=moment)
        False
    """
    now = utcnow() if now is None else now
    return now > expiry_at


def get_short_url(shortcode: str, base_url: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base_url (str): public base URL of the shortener

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('REDIS_HOST')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'REDIS_HOST'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: answer with HTTP 500 instead of letting a handler raise

    Errors are logged with their traceback and never propagate to the caller.
    """

    @functools.wraps(handler)
    def wrapper(*args, **kwargs) -> dict:
        try:
            return handler(*args, **kwargs)
        except Exception:
            logger.exception(
                'Unhandled error in handler. Responding with 500.',
                extra={'handler': handler.__module__, 'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
