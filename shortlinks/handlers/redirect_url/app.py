import logging

from shortlinks.constants import Defaults
from shortlinks.dao import ShortLinkStore
from shortlinks.types import HandlerEvent, HandlerContext, HandlerResponse, Locator
from shortlinks.utils import fetch_coarse_location, static_locator, get_short_url, guarantee_500_response
from shortlinks.utils.config import base_url, build_store
from shortlinks.handlers.responses import response_302, response_400, response_404, response_410, get_header
from shortlinks.handlers.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_EXPIRED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def locator_from_event(event: HandlerEvent) -> Locator | None:
    """Build a locator from client-reported coordinates, if the request carries any

    Expected shape: {"geolocation": {"latitude": 48.8566, "longitude": 2.3522}}
    """
    position = event.get('geolocation')
    if not isinstance(position, dict):
        return None
    try:
        return static_locator(float(position['latitude']), float(position['longitude']))
    except (KeyError, TypeError, ValueError):
        logger.debug('Ignoring malformed geolocation in request.', extra={'geolocation': position})
        return None


@guarantee_500_response
def handler(
    event: HandlerEvent,
    context: HandlerContext = None,
    store: ShortLinkStore | None = None,
    locator: Locator | None = None,
) -> HandlerResponse:
    """Resolve a shortcode, record the click and redirect to the long URL

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Look up the short link
    - Step 3: Check expiry
    - Step 4: Look up the visitor's coarse location (bounded, best-effort)
    - Step 5: Record the click together with its location
    - Step 6: Redirect client to the long URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: long URL
        400: Bad client request
            message: missing shortcode in path parameters
        404: Unknown shortcode
        410: Short link expired
        500: Internal server error

    Args:
        event (dict):
            Request event containing the shortcode path parameter, optional
            headers (Referer) and optional client geolocation.
        context (Any):
            Runtime context object (not used directly).
        store (ShortLinkStore | None):
            Store to use. Built from the environment configuration if None.
        locator (Locator | None):
            Position provider. Falls back to coordinates carried by the event.

    Returns:
        dict: Response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'abcd'}}
        >>> response = handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com'
    """
    store = build_store() if store is None else store

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.warning('No shortcode provided. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.info('Processing redirect request.', extra={'shortcode': shortcode})

    # 2- Look up the short link
    short_link = store.lookup(shortcode)
    if short_link is None:
        logger.warning('Shortcode not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message=f"short url {get_short_url(shortcode, base_url())} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    # 3- Check expiry (evaluated now, expired links stay in the store)
    if short_link.is_expired():
        logger.warning(
            'Shortcode expired. Responding with 410.',
            extra={'shortcode': shortcode, 'expiryAt': short_link.expiry_at.isoformat(), 'event': SHORT_URL_EXPIRED},
        )
        return response_410(
            message=f'short url {get_short_url(shortcode, base_url())} has expired',
            error_code=SHORT_URL_EXPIRED,
            expiryAt=short_link.to_dict()['expiryAt'],
        )

    # 4- Coarse location, resolved before the click is written so both land in one write
    geo = fetch_coarse_location(locator or locator_from_event(event), timeout=Defaults.GEO_TIMEOUT_SECONDS)

    # 5- Record the click
    referrer = get_header(event, 'Referer') or Defaults.REFERRER
    store.append_click(shortcode, referrer=referrer, geo=geo)

    # 6- Redirect client to long URL
    logger.info(
        'Redirecting to long URL. Responding with 302.',
        extra={'shortcode': shortcode, 'longUrl': short_link.long_url, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=short_link.long_url)
