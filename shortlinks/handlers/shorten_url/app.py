import json
import logging
from typing import Any

from shortlinks.constants import Defaults
from shortlinks.dao import ShortLinkStore
from shortlinks.types import HandlerEvent, HandlerContext, HandlerResponse
from shortlinks.exceptions import ShortcodeGenerationError
from shortlinks.models import ShortLinkModel
from shortlinks.utils import (
    validate_link_request,
    parse_validity_minutes,
    generate_unique_shortcode,
    get_short_url,
    guarantee_500_response,
)
from shortlinks.utils.config import base_url, build_store
from shortlinks.handlers.responses import json_response, response_400
from shortlinks.handlers.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_URLS,
    TOO_MANY_URLS,
    VALIDATION_FAILED,
    SHORTCODE_GENERATION_FAILED,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def shorten_row(row: dict[str, Any], store: ShortLinkStore, public_base_url: str) -> dict[str, Any]:
    """Validate and shorten a single request row

    Returns:
        dict: Either the created link ('shortcode', 'shortUrl', 'longUrl',
              'expiryAt', 'validityMinutes') or field-level 'errors'.
    """
    long_url = row.get('longUrl')
    validity_minutes = row.get('validityMinutes')
    custom_shortcode = row.get('customShortcode')

    errors = validate_link_request(long_url, validity_minutes, custom_shortcode, is_available=store.is_available)
    if errors:
        logger.warning('Validation failed for URL row.', extra={'errors': errors, 'event': VALIDATION_FAILED})
        return {'errors': errors}

    if custom_shortcode:
        shortcode = custom_shortcode
    else:
        try:
            shortcode = generate_unique_shortcode(store.is_available)
        except ShortcodeGenerationError as e:
            logger.error('Failed to generate a free shortcode.', extra={'error': str(e), 'event': SHORTCODE_GENERATION_FAILED})
            return {'errors': {'shortcode': 'Could not generate a unique shortcode'}, 'errorCode': SHORTCODE_GENERATION_FAILED}

    # NOTE: blank validity falls back to the default
    minutes = parse_validity_minutes(validity_minutes, default=Defaults.VALIDITY_MINUTES)
    short_link = ShortLinkModel.new(shortcode=shortcode, long_url=long_url, validity_minutes=minutes)
    store.create(short_link)

    logger.info(
        'URL shortened successfully.',
        extra={'shortcode': shortcode, 'longUrl': long_url, 'validityMinutes': minutes, 'event': SHORTEN_SUCCESS},
    )
    serialized = short_link.to_dict()
    return {
        'shortcode': shortcode,
        'shortUrl': get_short_url(shortcode, public_base_url),
        'longUrl': long_url,
        'createdAt': serialized['createdAt'],
        'expiryAt': serialized['expiryAt'],
        'validityMinutes': minutes,
    }


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext = None, store: ShortLinkStore | None = None) -> HandlerResponse:
    """Handle requests to shorten up to 5 URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Extract URL rows from request body
    - Step 2: Validate each row (URL, validity minutes, custom shortcode)
    - Step 3: Pick the custom shortcode or generate a free one
    - Step 4: Store the short link (via ShortLinkStore)
    - Step 5: Respond with per-row results

    Rows are processed in order and independently: a row failing validation
    does not stop the others, and a custom shortcode used by an earlier row is
    reported as taken.

    HTTP responses:
        200: At least one row was shortened
            results: per-row result (created link or field errors)
        400: Bad client request
            message: invalid JSON, missing/too many rows, or every row failed
        500: Internal server error

    Args:
        event (dict):
            Request event whose JSON body is
            {"urls": [{"longUrl": ..., "validityMinutes": ..., "customShortcode": ...}]}.
        context (Any):
            Runtime context object (not used directly).
        store (ShortLinkStore | None):
            Store to use. Built from the environment configuration if None.

    Returns:
        dict: Response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"urls": [{"longUrl": "https://example.com"}]}'}
        >>> response = handler(event, None)
        >>> response['statusCode']
        200
    """
    store = build_store() if store is None else store

    # 1- Extract URL rows from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    rows = request_body.get('urls') if isinstance(request_body, dict) else None
    if not isinstance(rows, list) or not rows or not all(isinstance(row, dict) for row in rows):
        return response_400(message="missing 'urls' in JSON body", error_code=MISSING_URLS)
    if len(rows) > Defaults.MAX_URLS_PER_REQUEST:
        logger.warning('Attempted to shorten too many URLs.', extra={'totalRows': len(rows), 'event': TOO_MANY_URLS})
        return response_400(message=f'maximum {Defaults.MAX_URLS_PER_REQUEST} URLs allowed', error_code=TOO_MANY_URLS)

    # 2-4- Validate and shorten each row
    public_base_url = base_url()
    results = [shorten_row(row, store, public_base_url) for row in rows]
    succeeded = sum(1 for result in results if 'errors' not in result)

    # 5- Respond with per-row results
    if not succeeded:
        return response_400(message='no URL could be shortened', error_code=VALIDATION_FAILED, results=results)

    return json_response(
        200,
        {
            'message': f'Successfully shortened {succeeded} of {len(results)} URLs',
            'results': results,
        },
    )
