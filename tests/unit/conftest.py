from datetime import datetime, UTC

import pytest

from shortlinks.dao import InMemoryBackend, ShortLinkStore
from shortlinks.models import ShortLinkModel


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(backend) -> ShortLinkStore:
    return ShortLinkStore(backend)


@pytest.fixture
def created_at() -> datetime:
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def short_link(created_at) -> ShortLinkModel:
    return ShortLinkModel.new('abcd', 'https://example.com', validity_minutes=30, now=created_at)
