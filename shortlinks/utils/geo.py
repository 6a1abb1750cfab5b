"""Best-effort coarse geolocation

A locator is any callable returning `(latitude, longitude)` or None (permission
denied, no position). The lookup is bounded by a timeout and never raises:
every failure resolves to None, and click recording proceeds without location.

Functions:
    format_coarse_location(latitude, longitude) -> str
    fetch_coarse_location(locator, timeout=5.0) -> str | None
    static_locator(latitude, longitude) -> Locator

Example:
    >>> fetch_coarse_location(static_locator(48.85661, 2.35222))
    '48.86,2.35'
    >>> fetch_coarse_location(lambda: None) is None
    True
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError

from shortlinks.constants import Defaults
from shortlinks.types import Locator


logger = logging.getLogger(__name__)


def format_coarse_location(latitude: float, longitude: float) -> str:
    return f'{float(latitude):.2f},{float(longitude):.2f}'


def static_locator(latitude: float, longitude: float) -> Locator:
    """Build a locator that always reports the given position."""

    def locator() -> tuple[float, float]:
        return latitude, longitude

    return locator


def fetch_coarse_location(locator: Locator | None, timeout: float = Defaults.GEO_TIMEOUT_SECONDS) -> str | None:
    """Run a locator with a timeout and format its result as "lat,lon"

    Args:
        locator (Locator | None):
            Position provider. None means geolocation is unsupported.
        timeout (float):
            Seconds to wait for the locator. Defaults to 5.

    Returns:
        str | None: Coarse location rounded to 2 decimals, or None if unavailable.
    """
    if locator is None:
        return None

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='geolocation')
    try:
        position = executor.submit(locator).result(timeout=timeout)
        if position is None:
            logger.debug('Coarse location unavailable.')
            return None
        latitude, longitude = position
        return format_coarse_location(latitude, longitude)
    except FutureTimeoutError:
        logger.warning('Coarse location lookup timed out.', extra={'timeout': timeout})
        return None
    except Exception as e:
        logger.warning('Failed to get coarse location.', extra={'error': str(e)})
        return None
    finally:
        # Don't wait for a locator that is still running past the timeout
        executor.shutdown(wait=False, cancel_futures=True)
