import functools
from datetime import datetime
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from shortlinks.models import ShortLinkModel
from shortlinks.dao.exceptions import DataStoreError


__all__ = ['handle_redis_connection_error', 'to_redis_hash', 'from_redis_hash']

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def exists(self, shortcode):
        ...     return self.redis.exists(self.keys.link_key(shortcode))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            raise DataStoreError(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e

    return wrapper


def to_redis_hash(link: ShortLinkModel) -> dict[str, str | int]:
    """Serialize a ShortLinkModel into a Redis hash mapping.

    Optional timestamps are left out of the mapping when unset, since Redis
    hashes cannot hold None.
    """
    mapping = {
        'original_url': link.original_url,
        'custom_alias': int(link.custom_alias),
        'clicks': link.clicks,
        'created_at': link.created_at.isoformat(),
    }
    if link.expires_at is not None:
        mapping['expires_at'] = link.expires_at.isoformat()
    if link.last_accessed_at is not None:
        mapping['last_accessed_at'] = link.last_accessed_at.isoformat()
    return mapping


def from_redis_hash(shortcode: str, mapping: dict) -> ShortLinkModel:
    """Deserialize a Redis hash mapping (as returned by HGETALL) into a ShortLinkModel."""
    # Normalize responses of clients created without decode_responses
    data = {_decode(k): _decode(v) for k, v in mapping.items()}

    def timestamp(name: str) -> datetime | None:
        value = data.get(name)
        return datetime.fromisoformat(value) if value else None

    return ShortLinkModel(
        original_url=data['original_url'],
        shortcode=shortcode,
        custom_alias=data.get('custom_alias') == '1',
        clicks=int(data.get('clicks', 0)),
        created_at=timestamp('created_at'),
        expires_at=timestamp('expires_at'),
        last_accessed_at=timestamp('last_accessed_at'),
    )


def _decode(value: str | bytes) -> str:
    return value.decode('utf-8') if isinstance(value, bytes) else str(value)
