import json
from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from shortlinks.types import LambdaConfiguration, LambdaContext, LambdaEvent
from shortlinks.lambdas.link_stats import app
from shortlinks.models import ShortLinkModel
from shortlinks.dao.memory import ShortLinkMemoryDAO
from shortlinks.exceptions import BadConfigurationError


class TestLinkStatsHandler:

    @pytest.fixture(autouse=True)
    def setup(
        self,
        monkeypatch: MonkeyPatch,
        context: LambdaContext,
        lambda_config: LambdaConfiguration,
        memory_dao: ShortLinkMemoryDAO,
        event_factory,
    ) -> None:
        # Patch Lambda dependencies
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: lambda_config)
        monkeypatch.setattr(app, 'ShortLinkRedisDAO', lambda *a, **kw: memory_dao)

        memory_dao.insert(
            ShortLinkModel(
                original_url='https://example.com/a/b',
                shortcode='docs-1',
                custom_alias=True,
                clicks=42,
                created_at=datetime(2025, 10, 1, tzinfo=UTC),
                expires_at=datetime(2025, 11, 1, tzinfo=UTC),
                last_accessed_at=datetime(2025, 10, 14, 9, 30, tzinfo=UTC),
            )
        )

        self.monkeypatch = monkeypatch
        self.context = context
        self.dao = memory_dao
        self.make_event = event_factory

    def event(self, shortcode: str | None) -> LambdaEvent:
        path_parameters = None if shortcode is None else {'shortCode': shortcode}
        return self.make_event(path=f'/api/stats/{shortcode}', path_parameters=path_parameters)

    @freeze_time('2025-10-15 12:00:00')
    def test_lambda_handler(self) -> None:
        response = app.lambda_handler(self.event('docs-1'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body == {
            'success': True,
            'data': {
                'originalUrl': 'https://example.com/a/b',
                'shortCode': 'docs-1',
                'customAlias': True,
                'clicks': 42,
                'createdAt': '2025-10-01T00:00:00.000Z',
                'lastAccessedAt': '2025-10-14T09:30:00.000Z',
                'expiresAt': '2025-11-01T00:00:00.000Z',
                'isExpired': False,
            },
        }

    def test_lambda_handler_does_not_count_clicks(self) -> None:
        app.lambda_handler(self.event('docs-1'), self.context)
        app.lambda_handler(self.event('docs-1'), self.context)

        assert self.dao.get('docs-1').clicks == 42

    @freeze_time('2025-12-01 00:00:00')
    def test_lambda_handler_with_expired_link(self) -> None:
        response = app.lambda_handler(self.event('docs-1'), self.context)
        body = json.loads(response['body'])

        # Expired links keep their statistics
        assert response['statusCode'] == 200
        assert body['data']['isExpired'] is True
        assert body['data']['clicks'] == 42

    def test_lambda_handler_with_unknown_shortcode(self) -> None:
        response = app.lambda_handler(self.event('zzz999'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert body['message'] == 'The requested short URL does not exist'
        assert body['errorCode'] == 'SHORT_LINK_NOT_FOUND'

    def test_lambda_handler_with_missing_path_parameters(self) -> None:
        response = app.lambda_handler(self.event(None), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'MISSING_SHORTCODE'

    def test_lambda_handler_with_malformed_shortcode(self) -> None:
        response = app.lambda_handler(self.event('a/b'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'VALIDATION_FAILED'

    def test_lambda_handler_with_invalid_configuration(self) -> None:
        self.monkeypatch.setattr(app, 'load_config', MagicMock(side_effect=BadConfigurationError('Something goes wrong')))

        response = app.lambda_handler(self.event('docs-1'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'CONFIGURATION_ERROR'
