"""Shortcode generation utility

Generated shortcodes are drawn uniformly at random from the Base62 alphabet
(A-Z, a-z, 0-9). With 62^8 possible 8-character codes a collision is unlikely,
but callers still retry against the store until they find a free one.

Functions:
    generate_shortcode(length=8):
        Generate a random Base62 shortcode.
    generate_unique_shortcode(is_available, max_attempts=100, length=8):
        Generate shortcodes until one passes the availability check.

Example:
    >>> from shortlinks.utils import generate_shortcode
    >>> len(generate_shortcode())
    8
"""

import logging
import secrets
import string
from collections.abc import Callable

from shortlinks.constants import Shortcode
from shortlinks.exceptions import ShortcodeGenerationError


logger = logging.getLogger(__name__)

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_shortcode(length: int = Shortcode.LENGTH) -> str:
    """Generate a random Base62 shortcode of the given length.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def generate_unique_shortcode(
    is_available: Callable[[str], bool],
    max_attempts: int = Shortcode.MAX_GENERATION_ATTEMPTS,
    length: int = Shortcode.LENGTH,
) -> str:
    """Generate a shortcode that is not taken yet.

    Args:
        is_available (Callable[[str], bool]):
            Availability check, usually ShortLinkStore.is_available.
        max_attempts (int):
            Upper bound on generation attempts. Defaults to 100.
        length (int):
            Length of the generated shortcode. Defaults to 8.

    Returns:
        str: A shortcode for which is_available() returned True.

    Raises:
        ShortcodeGenerationError:
            If every attempt produced a taken shortcode.

    NOTE:
        - The availability check is not atomic with the subsequent create().
    """
    if max_attempts < 1:
        raise ValueError(f'Max attempts must be a positive integer (given value: {max_attempts}).')

    for attempt in range(1, max_attempts + 1):
        shortcode = generate_shortcode(length)
        if is_available(shortcode):
            return shortcode
        logger.debug('Generated shortcode is taken. Retrying.', extra={'shortcode': shortcode, 'attempt': attempt})

    raise ShortcodeGenerationError(f'No free shortcode found after {max_attempts} attempts.')
