from shortlinks.utils.helpers import (
    utcnow,
    to_iso8601,
    from_iso8601,
    is_expired,
    get_short_url,
    require_environment,
    guarantee_500_response,
)
from shortlinks.utils.validators import (
    is_http_or_https_url,
    is_valid_shortcode,
    is_valid_minute_integer,
    parse_validity_minutes,
    validate_link_request,
)
from shortlinks.utils.shortener import generate_shortcode, generate_unique_shortcode
from shortlinks.utils.geo import fetch_coarse_location, static_locator
from shortlinks.utils.logging import initialize_logging


__all__ = [
    'utcnow',
    'to_iso8601',
    'from_iso8601',
    'is_expired',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'is_http_or_https_url',
    'is_valid_shortcode',
    'is_valid_minute_integer',
    'parse_validity_minutes',
    'validate_link_request',
    'generate_shortcode',
    'generate_unique_shortcode',
    'fetch_coarse_location',
    'static_locator',
    'initialize_logging',
]
