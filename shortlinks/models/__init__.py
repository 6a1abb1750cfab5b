from shortlinks.models.short_link_model import ShortLinkModel, ClickRecordModel
from shortlinks.models.store_snapshot import StoreSnapshot, StoreReadResult, ReadStatus


__all__ = [
    'ShortLinkModel',
    'ClickRecordModel',
    'StoreSnapshot',
    'StoreReadResult',
    'ReadStatus',
]
