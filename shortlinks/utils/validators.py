"""Input validation for shorten requests

The store never validates; these checks run before anything reaches it.

Functions:
    is_http_or_https_url(url) -> bool
    is_valid_shortcode(shortcode) -> bool
    is_valid_minute_integer(value) -> bool
    parse_validity_minutes(value, default=30) -> int
    validate_link_request(long_url, validity_minutes, custom_shortcode, is_available) -> dict[str, str]

Example:
    >>> is_valid_shortcode('ab')
    False
    >>> validate_link_request('ftp://example.com', '30', '', is_available=lambda code: True)
    {'longUrl': 'Must be a valid http:// or https:// URL'}
"""

import re
from urllib.parse import urlsplit
from typing import Any
from collections.abc import Callable

from shortlinks.constants import Shortcode, Defaults


SHORTCODE_PATTERN = re.compile(r'[A-Za-z0-9]+')
LEADING_INTEGER_PATTERN = re.compile(r'\s*([+-]?\d+)')

# Field-level error messages
URL_REQUIRED = 'URL is required'
URL_INVALID = 'Must be a valid http:// or https:// URL'
MINUTES_INVALID = 'Must be a positive integer'
MINUTES_TOO_LARGE = f'Must be at most {Defaults.MAX_VALIDITY_MINUTES} minutes'
SHORTCODE_INVALID = f'Must be {Shortcode.MIN_LENGTH}-{Shortcode.MAX_LENGTH} alphanumeric characters'
SHORTCODE_TAKEN = 'Shortcode already exists'


def is_http_or_https_url(url: Any) -> bool:
    """Return True if url is an absolute http(s) URL with a host."""
    if not isinstance(url, str):
        return False
    try:
        components = urlsplit(url.strip())
        hostname = components.hostname
    except ValueError:
        return False
    return components.scheme in {'http', 'https'} and bool(hostname)


def is_valid_shortcode(shortcode: Any) -> bool:
    if not isinstance(shortcode, str):
        return False
    return Shortcode.MIN_LENGTH <= len(shortcode) <= Shortcode.MAX_LENGTH and SHORTCODE_PATTERN.fullmatch(shortcode) is not None


def _parse_leading_integer(value: Any) -> int | None:
    # Integers pass through; strings are read up to the first non-digit ('15min' -> 15)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    match = LEADING_INTEGER_PATTERN.match(value)
    return int(match.group(1)) if match else None


def is_valid_minute_integer(value: Any) -> bool:
    """True for a positive whole number of minutes no larger than MAX_VALIDITY_MINUTES."""
    minutes = _parse_leading_integer(value)
    return minutes is not None and 0 < minutes <= Defaults.MAX_VALIDITY_MINUTES


def parse_validity_minutes(value: Any, default: int = Defaults.VALIDITY_MINUTES) -> int:
    """Coerce a validity field into minutes

    Blank, unparsable or zero values silently fall back to `default`. Negative
    values are returned as parsed, so run is_valid_minute_integer() first.

    Example:
        >>> parse_validity_minutes('')
        30
        >>> parse_validity_minutes('45')
        45
    """
    return _parse_leading_integer(value) or default


def validate_link_request(
    long_url: Any,
    validity_minutes: Any,
    custom_shortcode: Any,
    is_available: Callable[[str], bool],
) -> dict[str, str]:
    """Validate one shorten request row

    Args:
        long_url: URL to shorten (required).
        validity_minutes: Optional validity period in minutes.
        custom_shortcode: Optional custom shortcode.
        is_available (Callable[[str], bool]):
            Availability check, usually ShortLinkStore.is_available.

    Returns:
        dict[str, str]:
            Field name -> error message. Empty if the row is valid.
    """
    errors = {}

    if not isinstance(long_url, str) or not long_url.strip():
        errors['longUrl'] = URL_REQUIRED
    elif not is_http_or_https_url(long_url):
        errors['longUrl'] = URL_INVALID

    if validity_minutes not in (None, '') and not is_valid_minute_integer(validity_minutes):
        minutes = _parse_leading_integer(validity_minutes)
        too_large = minutes is not None and minutes > Defaults.MAX_VALIDITY_MINUTES
        errors['validityMinutes'] = MINUTES_TOO_LARGE if too_large else MINUTES_INVALID

    if custom_shortcode:
        if not is_valid_shortcode(custom_shortcode):
            errors['customShortcode'] = SHORTCODE_INVALID
        elif not is_available(custom_shortcode):
            errors['customShortcode'] = SHORTCODE_TAKEN

    return errors
