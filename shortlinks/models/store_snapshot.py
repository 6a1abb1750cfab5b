from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from shortlinks.models.short_link_model import ShortLinkModel


class ReadStatus(StrEnum):
    """Outcome of reading the persisted slot."""

    LOADED = 'loaded'  # Slot held a well-formed document
    EMPTY = 'empty'  # Slot held no data yet
    MALFORMED = 'malformed'  # Slot held data of an unknown shape; treated as empty
    FAILED = 'failed'  # Backend could not be read; treated as empty


@dataclass
class StoreSnapshot:
    """Whole persisted state: shortcode -> ShortLinkModel (no ordering guarantee)."""

    links: dict[str, ShortLinkModel] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {'links': {shortcode: link.to_dict() for shortcode, link in self.links.items()}}

    @classmethod
    def from_dict(cls, data: Any) -> 'StoreSnapshot':
        """Rebuild a snapshot from `{"links": {<shortcode>: ShortLink}}`

        Raises:
            KeyError, TypeError, ValueError:
                On any shape mismatch, including a key that differs from its
                record's shortcode.
        """
        if not isinstance(data, dict) or not isinstance(data.get('links'), dict):
            raise TypeError("Store document must be an object with a 'links' object.")

        links = {}
        for shortcode, raw_link in data['links'].items():
            link = ShortLinkModel.from_dict(raw_link)
            if link.shortcode != shortcode:
                raise ValueError(f"Key '{shortcode}' does not match record shortcode '{link.shortcode}'.")
            links[shortcode] = link
        return cls(links=links)


@dataclass(frozen=True)
class StoreReadResult:
    """Snapshot read from the slot together with how it was obtained.

    Callers that only care about data use `snapshot`; tests and diagnostics can
    tell "nothing stored yet" apart from "read failed" through `status`.
    """

    snapshot: StoreSnapshot
    status: ReadStatus

    @property
    def ok(self) -> bool:
        return self.status in (ReadStatus.LOADED, ReadStatus.EMPTY)
