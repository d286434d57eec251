"""Redis connection settings and the client mixin shared by Redis-backed DAOs.

Settings come from the `redis` block of a Lambda's AppConfig section:

    "redis": {
        "host": "redis-15501.host.docker.internal",
        "port": 15501,
        "db": 0,
        "username": "default",
        "password": "...",
        "socket_timeout": 2.5,
        "ssl": true
    }

Only `host` is usually needed; everything else has a default. A key that
RedisSettings does not know is a configuration error, so a typo such as
"sokcet_timeout" is reported instead of silently falling back.
"""

from dataclasses import dataclass, fields
from typing import Any, Self

import redis

from shortlinks.exceptions import BadConfigurationError
from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.helpers import handle_redis_connection_error


# fmt: off
@dataclass(frozen=True)
class RedisSettings:
    host: str = 'localhost'
    port: int = 6379
    db: int = 0
    username: str | None = None
    password: str | None = None
    socket_timeout: float = 5.0     # Seconds; also bounds connection setup
    ssl: bool = False
# fmt: on

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> Self:
        """Build settings from the AppConfig `redis` block.

        Raises:
            BadConfigurationError:
                If the block is missing, has unknown keys, or holds values of the wrong type.
        """
        if not isinstance(config, dict):
            raise BadConfigurationError('Redis configuration is missing for this function.')

        unknown = sorted(set(config) - {f.name for f in fields(cls)})
        if unknown:
            raise BadConfigurationError(f'Unknown Redis configuration keys: {", ".join(unknown)}.')

        settings = {**vars(cls()), **config}
        try:
            timeout = float(settings['socket_timeout'])
            port = int(settings['port'])
            db = int(settings['db'])
        except (TypeError, ValueError) as e:
            raise BadConfigurationError(f'Invalid Redis configuration value: {e}.') from e
        if timeout <= 0:
            raise BadConfigurationError(f'Redis socket_timeout must be positive (given value: {timeout}).')

        return cls(
            host=str(settings['host']),
            port=port,
            db=db,
            username=settings['username'],
            password=settings['password'],
            socket_timeout=timeout,
            ssl=bool(settings['ssl']),
        )

    def client(self) -> redis.Redis:
        return redis.Redis(
            host=self.host,
            port=self.port,
            db=self.db,
            username=self.username,
            password=self.password,
            socket_timeout=self.socket_timeout,
            socket_connect_timeout=self.socket_timeout,
            ssl=self.ssl,
            decode_responses=True,
        )


class RedisClientMixin:
    """Give a DAO a Redis client and a namespaced key schema.

    The client is PINGed once on construction, so an unreachable Redis fails
    the request before any business logic runs.

    Args:
        settings (RedisSettings | None):
            Connection settings. Defaults to a local Redis.
        redis_client (redis.Redis | None):
            Pre-built client; takes precedence over `settings`.
        prefix (str | None):
            Key namespace, e.g. 'shortlinks:prod'.

    Raises:
        DataStoreError:
            If Redis does not answer the PING.
    """

    def __init__(
        self,
        settings: RedisSettings | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        self.redis = redis_client if redis_client is not None else (settings or RedisSettings()).client()
        self.keys = RedisKeySchema(prefix=prefix)
        self._ping()

    @handle_redis_connection_error
    def _ping(self) -> None:
        self.redis.ping()
