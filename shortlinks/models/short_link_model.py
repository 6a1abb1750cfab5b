from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Optional

from shortlinks.constants import Defaults
from shortlinks.types import LinkDocument
from shortlinks.utils.helpers import utcnow, to_iso8601, from_iso8601, is_expired


@dataclass(frozen=True)
class ClickRecordModel:
    """Represent a single visit of a short link.

    Attributes:
        timestamp (datetime):
            Moment the click was recorded (UTC).
        referrer (str):
            Referring page, or "direct" when no referrer was available.
        geo (Optional[str]):
            Coarse location as "lat,lon" rounded to 2 decimals, None if unavailable.

    Example:
        >>> click = ClickRecordModel(timestamp=utcnow(), referrer='https://news.ycombinator.com')
        >>> click.geo is None
        True
    """

    timestamp: datetime
    referrer: str = Defaults.REFERRER
    geo: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'timestamp': to_iso8601(self.timestamp),
            'referrer': self.referrer,
            'geo': self.geo,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ClickRecordModel':
        referrer = data['referrer']
        geo = data.get('geo')
        if not isinstance(referrer, str):
            raise TypeError(f'Referrer must be of type string (given type: {type(referrer)}).')
        if geo is not None and not isinstance(geo, str):
            raise TypeError(f'Geo must be of type string or null (given type: {type(geo)}).')
        return cls(timestamp=from_iso8601(data['timestamp']), referrer=referrer, geo=geo)


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a shortened URL mapping and its click history.

    Attributes:
        shortcode (str):
            The unique short identifier representing the shortened URL.
        long_url (str):
            The original long URL that the shortcode redirects to.
            Validated once at creation time, never afterwards.
        created_at (datetime):
            Creation moment (UTC).
        expiry_at (datetime):
            Moment after which the link is inactive. Always created_at + validity.
        clicks (tuple[ClickRecordModel, ...]):
            Recorded visits in insertion order. Only ever grows.

    Example:
        >>> link = ShortLinkModel.new('abcd', 'https://example.com', validity_minutes=1)
        >>> link.expiry_at - link.created_at
        datetime.timedelta(seconds=60)
        >>> link.is_expired(now=link.expiry_at)
        False
    """

    shortcode: str
    long_url: str
    created_at: datetime
    expiry_at: datetime
    clicks: tuple[ClickRecordModel, ...] = field(default_factory=tuple)

    @classmethod
    def new(cls, shortcode: str, long_url: str, validity_minutes: int, now: datetime | None = None) -> 'ShortLinkModel':
        """Build a fresh link that expires `validity_minutes` after its creation."""
        created_at = utcnow() if now is None else now
        return cls(
            shortcode=shortcode,
            long_url=long_url,
            created_at=created_at,
            expiry_at=created_at + timedelta(minutes=validity_minutes),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return is_expired(self.expiry_at, now=now)

    def with_click(self, click: ClickRecordModel) -> 'ShortLinkModel':
        return replace(self, clicks=(*self.clicks, click))

    def to_dict(self) -> LinkDocument:
        return {
            'shortcode': self.shortcode,
            'longUrl': self.long_url,
            'createdAt': to_iso8601(self.created_at),
            'expiryAt': to_iso8601(self.expiry_at),
            'clicks': [click.to_dict() for click in self.clicks],
        }

    @classmethod
    def from_dict(cls, data: LinkDocument) -> 'ShortLinkModel':
        """Rebuild a link from its persisted JSON shape

        Raises:
            KeyError: If a required field is missing.
            TypeError, ValueError: If a field has the wrong shape.
        """
        shortcode = data['shortcode']
        long_url = data['longUrl']
        clicks = data['clicks']
        if not isinstance(shortcode, str) or not isinstance(long_url, str):
            raise TypeError('Shortcode and long URL must be strings.')
        if not isinstance(clicks, list):
            raise TypeError(f'Clicks must be a list (given type: {type(clicks)}).')

        return cls(
            shortcode=shortcode,
            long_url=long_url,
            created_at=from_iso8601(data['createdAt']),
            expiry_at=from_iso8601(data['expiryAt']),
            clicks=tuple(ClickRecordModel.from_dict(click) for click in clicks),
        )
