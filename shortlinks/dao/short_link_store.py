"""Shortlink store: durable mapping of shortcode -> ShortLinkModel

The whole mapping lives in one key-value slot as a JSON document:

    {"links": {"<shortcode>": {"shortcode": ..., "longUrl": ..., "createdAt": ...,
                               "expiryAt": ..., "clicks": [...]}}}

Every operation reads the slot afresh. Every mutation rewrites the whole
document (last writer wins, no transactions, no partial writes).

Responsibilities:
    - Create (insert or overwrite), look up and enumerate short links;
    - Report whether a shortcode is still free;
    - Append click records;
    - Absorb persistence failures at the read/write boundary: reads fall back to an
      empty mapping, writes are dropped. Both are logged, neither is raised.

The store performs no validation. Callers validate URLs, shortcodes and
validity periods and check availability before calling create().

Classes:
    ShortLinkStore:
        Store operating on an injected KeyValueBaseBackend.

Example:
    >>> from shortlinks.dao.memory import InMemoryBackend
    >>> from shortlinks.models import ShortLinkModel

    >>> store = ShortLinkStore(InMemoryBackend())
    >>> store.is_available('abcd')
    True
    >>> store.create(ShortLinkModel.new('abcd', 'https://example.com', validity_minutes=30))
    >>> store.lookup('abcd').long_url
    'https://example.com'
    >>> len(store.append_click('abcd').clicks)
    1
"""

import json
import logging
from dataclasses import replace
from datetime import datetime

from beartype import beartype

from shortlinks.constants import Defaults
from shortlinks.dao.base import KeyValueBaseBackend
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.models import ShortLinkModel, ClickRecordModel, StoreSnapshot, StoreReadResult, ReadStatus
from shortlinks.utils.helpers import utcnow


logger = logging.getLogger(__name__)


class ShortLinkStore:
    """Store of short links persisted in a single key-value slot

    Attributes:
        backend (KeyValueBaseBackend):
            Slot holding the JSON document of the whole mapping.

    Methods:
        read_store() -> StoreReadResult:
            Load the mapping. Never raises; failures yield an empty snapshot.
        write_store(snapshot: StoreSnapshot) -> bool:
            Persist the mapping. Never raises; returns False if the write was dropped.
        create(short_link: ShortLinkModel) -> None:
            Insert or silently overwrite the record at short_link.shortcode.
        lookup(shortcode: str) -> ShortLinkModel | None:
            Return the record, or None if it does not exist.
        is_available(shortcode: str) -> bool:
            True iff no record exists for the shortcode.
        list_all() -> list[ShortLinkModel]:
            All records, unspecified order.
        append_click(shortcode: str, referrer: str = 'direct', geo: str | None = None) -> ShortLinkModel | None:
            Record a visit. Unknown shortcodes are logged and ignored.
        set_click_geo(shortcode: str, timestamp: datetime, referrer: str, geo: str) -> bool:
            Attach a coarse location to an already recorded click.
        clear() -> None:
            Remove every persisted link.

    NOTE:
        - create() overwrites existing records including their clicks. Checking
          is_available() first is the caller's job and is not atomic with create().
    """

    def __init__(self, backend: KeyValueBaseBackend):
        self.backend = backend

    def read_store(self) -> StoreReadResult:
        """Load the persisted mapping

        Returns:
            StoreReadResult:
                The snapshot and a status telling LOADED / EMPTY / MALFORMED / FAILED
                apart. MALFORMED and FAILED carry an empty snapshot.
        """
        try:
            raw = self.backend.read()
        except DataStoreError as e:
            logger.error('Failed to get stored data.', extra={'error': str(e)})
            return StoreReadResult(snapshot=StoreSnapshot(), status=ReadStatus.FAILED)

        if not raw:
            return StoreReadResult(snapshot=StoreSnapshot(), status=ReadStatus.EMPTY)

        try:
            snapshot = StoreSnapshot.from_dict(json.loads(raw))
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error('Stored data has an unknown shape. Treating store as empty.', extra={'error': str(e)})
            return StoreReadResult(snapshot=StoreSnapshot(), status=ReadStatus.MALFORMED)

        return StoreReadResult(snapshot=snapshot, status=ReadStatus.LOADED)

    @beartype
    def write_store(self, snapshot: StoreSnapshot) -> bool:
        """Persist the whole mapping, replacing the previous document

        Returns:
            bool: True if persisted, False if the write was dropped.
        """
        try:
            raw = json.dumps(snapshot.to_dict(), separators=(',', ':'))
            self.backend.write(raw)
        except (DataStoreError, TypeError, ValueError) as e:
            logger.error('Failed to save data.', extra={'error': str(e)})
            return False
        return True

    @beartype
    def create(self, short_link: ShortLinkModel) -> None:
        snapshot = self.read_store().snapshot
        snapshot.links[short_link.shortcode] = short_link
        self.write_store(snapshot)
        logger.info('Short link added.', extra={'shortcode': short_link.shortcode})

    @beartype
    def lookup(self, shortcode: str) -> ShortLinkModel | None:
        return self.read_store().snapshot.links.get(shortcode)

    @beartype
    def is_available(self, shortcode: str) -> bool:
        return shortcode not in self.read_store().snapshot.links

    def list_all(self) -> list[ShortLinkModel]:
        return list(self.read_store().snapshot.links.values())

    @beartype
    def append_click(self, shortcode: str, referrer: str = Defaults.REFERRER, geo: str | None = None) -> ShortLinkModel | None:
        """Append a click record to an existing short link

        The click carries the current timestamp and is persisted together with
        its coarse location (if known) in a single write.

        Args:
            shortcode (str):
                Shortcode of the visited link.
            referrer (str):
                Referring page. Blank values are recorded as "direct".
            geo (str | None):
                Coarse location as "lat,lon", or None if unavailable.

        Returns:
            ShortLinkModel | None:
                The updated record, or None if the shortcode does not exist
                (nothing is written in that case).
        """
        snapshot = self.read_store().snapshot
        short_link = snapshot.links.get(shortcode)
        if short_link is None:
            logger.warning('Attempted to record click for non-existent shortcode.', extra={'shortcode': shortcode})
            return None

        click = ClickRecordModel(timestamp=utcnow(), referrer=referrer or Defaults.REFERRER, geo=geo)
        short_link = short_link.with_click(click)
        snapshot.links[shortcode] = short_link
        self.write_store(snapshot)

        logger.info('Click recorded.', extra={'shortcode': shortcode, 'totalClicks': len(short_link.clicks)})
        return short_link

    @beartype
    def set_click_geo(self, shortcode: str, timestamp: datetime, referrer: str, geo: str) -> bool:
        """Attach a coarse location to a previously recorded click

        The record is re-read and the click is matched by timestamp and referrer,
        so concurrent appends to the same link can't redirect the location to a
        different click. The latest matching click wins.

        Returns:
            bool: True if a click was updated and persisted, False otherwise.
        """
        snapshot = self.read_store().snapshot
        short_link = snapshot.links.get(shortcode)
        if short_link is None:
            logger.warning('Attempted to set click location for non-existent shortcode.', extra={'shortcode': shortcode})
            return False

        clicks = list(short_link.clicks)
        for index in range(len(clicks) - 1, -1, -1):
            if clicks[index].timestamp == timestamp and clicks[index].referrer == referrer:
                clicks[index] = replace(clicks[index], geo=geo)
                break
        else:
            logger.warning('No matching click found to attach location to.', extra={'shortcode': shortcode})
            return False

        snapshot.links[shortcode] = replace(short_link, clicks=tuple(clicks))
        return self.write_store(snapshot)

    def clear(self) -> None:
        try:
            self.backend.clear()
        except DataStoreError as e:
            logger.error('Failed to clear stored data.', extra={'error': str(e)})
        else:
            logger.info('Store cleared.')

    def __repr__(self) -> str:
        return f'<ShortLinkStore backend={self.backend!r}>'
