"""Unit tests for the ShortLinkRedisDAO

Test coverage includes:

1. Insertion behavior
   - Validates inserting a short link WATCHes the key and writes one hash.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.
   - Confirms duplicate shortcodes raise ShortLinkAlreadyExistsError.
   - Confirms Redis connection errors raise DataStoreError.

2. Retrieval behavior
   - Ensures fetching valid shortcodes returns a populated ShortLinkModel.
   - Confirms missing keys raise ShortLinkNotFoundError.

3. Click counting (hit)
   - Ensures hit() increments clicks and sets last_accessed_at in one transaction.
   - Confirms missing links raise ShortLinkNotFoundError and nothing is written.

4. Deletion behavior
   - Ensures delete() reads and removes the hash atomically.
   - Confirms missing links raise ShortLinkNotFoundError.
"""

import re
from datetime import datetime, UTC
from unittest.mock import call

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from shortlinks.models import ShortLinkModel
from shortlinks.dao.exceptions import DataStoreError, ShortLinkAlreadyExistsError, ShortLinkNotFoundError
from shortlinks.dao.redis import ShortLinkRedisDAO


LINK_KEY = 'testapp:test:links:abc123'
CREATED_AT = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(redis_client, app_prefix) -> ShortLinkRedisDAO:
    return ShortLinkRedisDAO(redis_client=redis_client, prefix=app_prefix)


@pytest.fixture
def link() -> ShortLinkModel:
    return ShortLinkModel(original_url='https://example.com/test', shortcode='abc123', created_at=CREATED_AT)


@pytest.fixture
def stored_hash() -> dict[str, str]:
    return {
        'original_url': 'https://example.com/test',
        'custom_alias': '0',
        'clicks': '7',
        'created_at': '2025-10-15T12:00:00+00:00',
        'last_accessed_at': '2025-10-16T08:30:00+00:00',
    }


# -------------------------------
# 1. Insertion behavior
# -------------------------------


def test_insert_short_link(dao, redis_client, link):
    """Ensure a valid short link is written as one hash inside a WATCHed transaction."""
    assert dao.insert(link) is dao

    redis_client.transaction.assert_called_once()
    assert redis_client.transaction.call_args.args[1:] == (LINK_KEY,)
    redis_client.exists.assert_called_once_with(LINK_KEY)
    redis_client.multi.assert_called_once()
    redis_client.hset.assert_called_once_with(
        LINK_KEY,
        mapping={
            'original_url': 'https://example.com/test',
            'custom_alias': 0,
            'clicks': 0,
            'created_at': '2025-10-15T12:00:00+00:00',
        },
    )


def test_insert_short_link_with_expiry_and_custom_alias(dao, redis_client):
    link = ShortLinkModel(
        original_url='https://example.com/test',
        shortcode='abc123',
        custom_alias=True,
        created_at=CREATED_AT,
        expires_at=datetime(2026, 1, 1, tzinfo=UTC),
    )

    dao.insert(link)

    mapping = redis_client.hset.call_args.kwargs['mapping']
    assert mapping['custom_alias'] == 1
    assert mapping['expires_at'] == '2026-01-01T00:00:00+00:00'
    assert 'last_accessed_at' not in mapping


def test_insert_short_link_with_invalid_type(dao):
    """Ensure inserting invalid types raises TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notamodel')


def test_insert_short_link_which_already_exists(dao, redis_client, link):
    """Ensure duplicate shortcodes raise ShortLinkAlreadyExistsError and nothing is written."""
    redis_client.exists.return_value = True

    with pytest.raises(ShortLinkAlreadyExistsError, match=re.escape("Short link with code 'abc123' already exists.")):
        dao.insert(link)

    redis_client.multi.assert_not_called()
    redis_client.hset.assert_not_called()


def test_insert_short_link_with_redis_connection_error(dao, redis_client, link):
    """Ensure Redis connection errors during insert raise DataStoreError."""
    redis_client.hset.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        dao.insert(link)


def test_insert_short_link_with_redis_timeout(dao, redis_client, link):
    redis_client.exists.side_effect = redis.exceptions.TimeoutError('Timeout')

    with pytest.raises(DataStoreError):
        dao.insert(link)


# -------------------------------
# 2. Retrieval behavior
# -------------------------------


def test_get_short_link(dao, redis_client, stored_hash):
    redis_client.hgetall.return_value = stored_hash

    link = dao.get('abc123')

    redis_client.hgetall.assert_called_once_with(LINK_KEY)
    assert isinstance(link, ShortLinkModel)
    assert link.original_url == 'https://example.com/test'
    assert link.shortcode == 'abc123'
    assert link.custom_alias is False
    assert link.clicks == 7
    assert link.created_at == CREATED_AT
    assert link.expires_at is None
    assert link.last_accessed_at == datetime(2025, 10, 16, 8, 30, 0, tzinfo=UTC)


def test_get_short_link_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(12345)


def test_get_short_link_which_does_not_exist(dao, redis_client):
    redis_client.hgetall.return_value = {}
    with pytest.raises(ShortLinkNotFoundError, match="Short link with code 'abc123' not found"):
        dao.get('abc123')


def test_get_short_link_with_redis_connection_error(dao, redis_client):
    redis_client.hgetall.side_effect = redis.exceptions.ConnectionError('Connection Error')
    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        dao.get('abc123')


@pytest.mark.parametrize('exists, expected', [(1, True), (0, False)])
def test_exists(dao, redis_client, exists, expected):
    redis_client.exists.return_value = exists
    assert dao.exists('abc123') is expected
    redis_client.exists.assert_called_once_with(LINK_KEY)


# -------------------------------
# 3. Click counting
# -------------------------------


def test_hit_increments_clicks_and_touches_last_access(dao, redis_client):
    redis_client.exists.return_value = True
    # fmt: off
    redis_client.execute.return_value = [
        8,      # HINCRBY <app>:links:<shortcode> clicks 1
        0,      # HSET    <app>:links:<shortcode> last_accessed_at <timestamp>
    ]
    # fmt: on
    accessed_at = datetime(2025, 10, 16, 8, 30, 0, tzinfo=UTC)

    assert dao.hit('abc123', accessed_at=accessed_at) == 8

    assert redis_client.transaction.call_args.args[1:] == (LINK_KEY,)
    redis_client.multi.assert_called_once()
    redis_client.hincrby.assert_called_once_with(LINK_KEY, 'clicks', 1)
    redis_client.hset.assert_called_once_with(LINK_KEY, 'last_accessed_at', '2025-10-16T08:30:00+00:00')


def test_hit_missing_link_raises_and_writes_nothing(dao, redis_client):
    redis_client.exists.return_value = False

    with pytest.raises(ShortLinkNotFoundError, match="Short link with code 'abc123' not found"):
        dao.hit('abc123', accessed_at=datetime.now(UTC))

    redis_client.multi.assert_not_called()
    redis_client.hincrby.assert_not_called()


def test_hit_with_invalid_timestamp_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.hit('abc123', accessed_at='2025-10-16')


def test_hit_with_redis_connection_error(dao, redis_client):
    redis_client.transaction.side_effect = redis.exceptions.ConnectionError('Connection Error')
    with pytest.raises(DataStoreError):
        dao.hit('abc123', accessed_at=datetime.now(UTC))


# -------------------------------
# 4. Deletion behavior
# -------------------------------


def test_delete_short_link(dao, redis_client, stored_hash):
    redis_client.execute.return_value = [stored_hash, 1]

    link = dao.delete('abc123')

    assert link.shortcode == 'abc123'
    assert link.clicks == 7
    redis_client.pipeline.assert_called_once_with(transaction=True)
    redis_client.hgetall.assert_called_once_with(LINK_KEY)
    redis_client.delete.assert_called_once_with(LINK_KEY)
    assert redis_client.method_calls.index(call.hgetall(LINK_KEY)) < redis_client.method_calls.index(call.delete(LINK_KEY))


def test_delete_short_link_which_does_not_exist(dao, redis_client):
    redis_client.execute.return_value = [{}, 0]
    with pytest.raises(ShortLinkNotFoundError):
        dao.delete('abc123')
