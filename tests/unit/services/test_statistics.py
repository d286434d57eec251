"""Unit tests for StatisticsService in statistics.py."""

from datetime import datetime, timedelta, UTC

import pytest
from freezegun import freeze_time

from shortlinks.exceptions import LinkNotFoundError
from shortlinks.models import ShortLinkModel
from shortlinks.services import StatisticsService, ResolutionService


@freeze_time('2025-10-15 12:00:00')
def test_get_stats_projects_record(memory_dao):
    created_at = datetime(2025, 10, 1, tzinfo=UTC)
    memory_dao.insert(
        ShortLinkModel(
            original_url='https://example.com/a/b',
            shortcode='docs-1',
            custom_alias=True,
            created_at=created_at,
            expires_at=datetime(2025, 12, 1, tzinfo=UTC),
        )
    )

    stats = StatisticsService(memory_dao).get_stats('docs-1')

    assert stats.original_url == 'https://example.com/a/b'
    assert stats.shortcode == 'docs-1'
    assert stats.custom_alias is True
    assert stats.clicks == 0
    assert stats.created_at == created_at
    assert stats.last_accessed_at is None
    assert stats.expires_at == datetime(2025, 12, 1, tzinfo=UTC)
    assert stats.is_expired is False


def test_get_stats_is_read_only(memory_dao):
    memory_dao.insert(ShortLinkModel(original_url='https://example.com', shortcode='abc123'))
    ResolutionService(memory_dao).resolve('abc123')
    service = StatisticsService(memory_dao)

    first = service.get_stats('abc123')
    second = service.get_stats('abc123')

    assert first.clicks == second.clicks == 1
    assert first.last_accessed_at == second.last_accessed_at
    assert memory_dao.get('abc123').clicks == 1


@freeze_time('2025-10-15 12:00:00')
def test_get_stats_reports_expired_link(memory_dao):
    memory_dao.insert(
        ShortLinkModel(
            original_url='https://example.com',
            shortcode='old123',
            expires_at=datetime.now(UTC) - timedelta(seconds=1),
        )
    )

    assert StatisticsService(memory_dao).get_stats('old123').is_expired is True


def test_get_stats_unknown_code_raises_not_found(memory_dao):
    with pytest.raises(LinkNotFoundError):
        StatisticsService(memory_dao).get_stats('nope12')
