import json
from typing import Any, cast
from unittest.mock import MagicMock

import pytest
import redis
from pytest import MonkeyPatch

from shortlinks.constants import ENV
from shortlinks.dao.memory import ShortLinkMemoryDAO
from shortlinks.types import LambdaConfiguration, LambdaContext, LambdaEvent


@pytest.fixture(autouse=True)
def clean_runtime_environment(monkeypatch: MonkeyPatch) -> None:
    """Make sure tests never run in 'local' mode (which re-raises handler errors)."""
    monkeypatch.delenv(ENV.App.APP_ENV, raising=False)
    monkeypatch.delenv(ENV.App.AWS_SAM_LOCAL, raising=False)
    monkeypatch.delenv(ENV.App.APP_NAME, raising=False)


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client.

    `transaction()` runs the given callable against the mock itself and then
    returns the result of `execute()`, as redis-py does on a successful EXEC.
    """
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.exists.return_value = False
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None

    def transaction(func, *watches, **kwargs):
        func(client)
        return client.execute()

    client.transaction.side_effect = transaction
    return client


@pytest.fixture
def memory_dao() -> ShortLinkMemoryDAO:
    return ShortLinkMemoryDAO()


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'pytest'})


@pytest.fixture
def lambda_config() -> LambdaConfiguration:
    return cast(
        LambdaConfiguration,
        {
            'redis': {'host': 'redis.test', 'port': 6379, 'db': 0},
            'policy': {'code_length': 6, 'alias_min_length': 4, 'alias_max_length': 10, 'max_attempts': 5},
        },
    )


def make_event(
    *,
    method: str = 'GET',
    path: str = '/',
    body: Any = None,
    path_parameters: dict[str, str] | None = None,
    domain: str = 'sho.rt',
    stage: str = 'test',
) -> LambdaEvent:
    """Build an API Gateway (Lambda proxy) event."""
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return cast(
        LambdaEvent,
        {
            'body': body,
            'resource': path,
            'headers': {'User-Agent': 'pytest', 'Content-Type': 'application/json'},
            'httpMethod': method,
            'path': path,
            'pathParameters': path_parameters,
            'requestContext': {
                'resourcePath': path,
                'httpMethod': method,
                'domainName': domain,
                'stage': stage,
            },
        },
    )


@pytest.fixture
def event_factory():
    return make_event
