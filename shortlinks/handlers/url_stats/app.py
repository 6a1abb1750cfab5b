import logging
from datetime import datetime
from typing import Any

from shortlinks.dao import ShortLinkStore
from shortlinks.types import HandlerEvent, HandlerContext, HandlerResponse
from shortlinks.models import ShortLinkModel
from shortlinks.utils import get_short_url, guarantee_500_response, utcnow
from shortlinks.utils.config import base_url, build_store
from shortlinks.handlers.responses import json_response, response_404
from shortlinks.handlers.url_stats.constants import SHORT_URL_NOT_FOUND, STATS_SUCCESS, ACTIVE, EXPIRED


logger = logging.getLogger(__name__)


def link_stats(short_link: ShortLinkModel, now: datetime, public_base_url: str) -> dict[str, Any]:
    """Summarize a link: status evaluated at `now`, clicks newest first."""
    serialized = short_link.to_dict()
    clicks = sorted(short_link.clicks, key=lambda click: click.timestamp, reverse=True)
    return {
        'shortcode': short_link.shortcode,
        'shortUrl': get_short_url(short_link.shortcode, public_base_url),
        'longUrl': short_link.long_url,
        'createdAt': serialized['createdAt'],
        'expiryAt': serialized['expiryAt'],
        'status': EXPIRED if short_link.is_expired(now=now) else ACTIVE,
        'clickCount': len(short_link.clicks),
        'clicks': [click.to_dict() for click in clicks],
    }


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext = None, store: ShortLinkStore | None = None) -> HandlerResponse:
    """Report click statistics for all short links, or for one shortcode

    HTTP responses:
        200: Statistics
            links: links newest first, with status and clicks newest first
            totalLinks, totalClicks, activeLinks: totals over the listed links
        404: Unknown shortcode (when one is given in the path)
        500: Internal server error

    Args:
        event (dict):
            Request event. An optional 'shortcode' path parameter narrows the
            report to one link.
        context (Any):
            Runtime context object (not used directly).
        store (ShortLinkStore | None):
            Store to use. Built from the environment configuration if None.

    Returns:
        dict: Response including statusCode, headers, and body.
    """
    store = build_store() if store is None else store
    logger.info('Loading statistics.')

    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode:
        short_link = store.lookup(shortcode)
        if short_link is None:
            return response_404(message=f"short url {get_short_url(shortcode, base_url())} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
        short_links = [short_link]
    else:
        short_links = sorted(store.list_all(), key=lambda link: link.created_at, reverse=True)

    now = utcnow()
    public_base_url = base_url()
    links = [link_stats(short_link, now, public_base_url) for short_link in short_links]

    logger.info('Statistics loaded successfully.', extra={'totalLinks': len(links), 'event': STATS_SUCCESS})
    return json_response(
        200,
        {
            'links': links,
            'totalLinks': len(links),
            'totalClicks': sum(link['clickCount'] for link in links),
            'activeLinks': sum(1 for link in links if link['status'] == ACTIVE),
        },
    )
