"""Unit tests for StoreSnapshot and StoreReadResult.

Test coverage includes:

1. Serialization
   - Ensures the {"links": {...}} document shape.

2. Shape validation
   - Ensures missing 'links', non-object documents and key/shortcode mismatches raise.

3. Read result
   - Ensures only LOADED and EMPTY reads count as ok.
"""

import pytest

from shortlinks.models import StoreSnapshot, StoreReadResult, ReadStatus


# -------------------------------
# 1. Serialization
# -------------------------------


def test_snapshot_round_trip(short_link):
    snapshot = StoreSnapshot(links={'abcd': short_link})
    document = snapshot.to_dict()

    assert list(document) == ['links']
    assert document['links']['abcd']['longUrl'] == 'https://example.com'
    assert StoreSnapshot.from_dict(document) == snapshot


def test_empty_snapshot():
    assert StoreSnapshot().to_dict() == {'links': {}}
    assert StoreSnapshot.from_dict({'links': {}}).links == {}


# -------------------------------
# 2. Shape validation
# -------------------------------


@pytest.mark.parametrize('document', [None, [], 'links', {}, {'links': []}, {'data': {}}])
def test_from_dict_rejects_unknown_shapes(document):
    with pytest.raises(TypeError):
        StoreSnapshot.from_dict(document)


def test_from_dict_rejects_key_mismatch(short_link):
    """Every key must equal its record's shortcode."""
    document = {'links': {'wxyz': short_link.to_dict()}}
    with pytest.raises(ValueError, match="Key 'wxyz' does not match record shortcode 'abcd'"):
        StoreSnapshot.from_dict(document)


# -------------------------------
# 3. Read result
# -------------------------------


@pytest.mark.parametrize(
    'status, ok',
    [
        (ReadStatus.LOADED, True),
        (ReadStatus.EMPTY, True),
        (ReadStatus.MALFORMED, False),
        (ReadStatus.FAILED, False),
    ],
)
def test_read_result_ok(status, ok):
    assert StoreReadResult(snapshot=StoreSnapshot(), status=status).ok is ok
