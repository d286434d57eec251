"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO for CRUD-like
operations with ShortLinkModel instances. Each link is stored as one Redis hash:

    <prefix>:links:<shortcode> -> {
        original_url, custom_alias, clicks, created_at,
        expires_at (optional), last_accessed_at (optional)
    }

Responsibilities:
    - Insert short links with create-if-absent semantics;
    - Retrieve and delete short links;
    - Atomically count link resolutions (clicks + last access time);
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    ShortLinkRedisDAO:
        DAO for storing and retrieving ShortLinkModel in a Redis datastore.

Example:
    >>> from shortlinks.models import ShortLinkModel
    >>> from shortlinks.dao.redis import ShortLinkRedisDAO

    >>> dao = ShortLinkRedisDAO(prefix="shortlinks:dev")

    >>> link = ShortLinkModel(original_url="https://example.com/page", shortcode="abc123")
    >>> dao.insert(link)
    <ShortLinkRedisDAO>

    >>> dao.hit("abc123", accessed_at=datetime.now(UTC))
    1
    >>> dao.get("abc123").clicks
    1
"""

from datetime import datetime

import redis
from beartype import beartype

from shortlinks.models import ShortLinkModel
from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error, to_redis_hash, from_redis_hash
from shortlinks.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short links

    This class implements the ShortLinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(link: ShortLinkModel, **kwargs) -> ShortLinkRedisDAO:
            Insert a short link unless the shortcode is taken (WATCH/MULTI/EXEC).
        get(shortcode: str, **kwargs) -> ShortLinkModel:
            Retrieve a short link by shortcode.
        exists(shortcode: str, **kwargs) -> bool:
            Check whether a shortcode is taken.
        hit(shortcode: str, accessed_at: datetime, **kwargs) -> int:
            Atomically increment clicks and set last_accessed_at.
        delete(shortcode: str, **kwargs) -> ShortLinkModel:
            Atomically read and remove a short link.

    All methods raise DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, link: ShortLinkModel, **kwargs) -> 'ShortLinkRedisDAO':
        """Insert a short link into Redis

        The existence check and the HSET run in one optimistic transaction:
        the link key is WATCHed, so a concurrent writer creating the same
        shortcode aborts EXEC and the check is re-run (and then fails).

        Args:
            link (ShortLinkModel):
                ShortLinkModel instance representing the short link.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkRedisDAO: self (for method chaining)

        Raises:
            ShortLinkAlreadyExistsError:
                If a short link with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        link_key = self.keys.link_key(link.shortcode)

        def _insert(pipe: redis.client.Pipeline) -> None:
            if pipe.exists(link_key):
                raise ShortLinkAlreadyExistsError(f"Short link with code '{link.shortcode}' already exists.")
            pipe.multi()
            pipe.hset(link_key, mapping=to_redis_hash(link))

        self.redis.transaction(_insert, link_key)
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored short link by shortcode

        Raises:
            ShortLinkNotFoundError:
                If the short link does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('abc123')
            ShortLinkModel(original_url='https://example.com', shortcode='abc123', ...)
        """
        mapping = self.redis.hgetall(self.keys.link_key(shortcode))
        if not mapping:
            raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.")
        return from_redis_hash(shortcode, mapping)

    @handle_redis_connection_error
    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.link_key(shortcode)))

    @handle_redis_connection_error
    @beartype
    def hit(self, shortcode: str, accessed_at: datetime, **kwargs) -> int:
        """Count one resolution of a short link.

        NOTE: HINCRBY alone would silently create a fresh hash for a deleted
              link, so the key is WATCHed and checked first:

              (lambda 1): ShortLinkRedisDAO.hit():
                          -> WATCH <app>:links:<shortcode>
                          -> EXISTS <app>:links:<shortcode>  => 1
                          ... interruption
              (lambda 2): ShortLinkRedisDAO.delete():
                          -> DEL <app>:links:<shortcode>
              (lambda 1): ShortLinkRedisDAO.hit() continued...:
                          -> MULTI / HINCRBY / HSET / EXEC  => aborted (WatchError)
                          -> retry: EXISTS => 0 => ShortLinkNotFoundError

              Concurrent hits on the same link abort each other's EXEC the
              same way and are retried, so no increment is lost.

        Args:
            shortcode (str):
                The shortcode of the link being resolved.
            accessed_at (datetime):
                Timestamp stored as last_accessed_at.

        Returns:
            int:
                Click count after the increment.

        Raises:
            ShortLinkNotFoundError:
                If no short link with the given shortcode exists.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.hit('abc123', accessed_at=datetime.now(UTC))
            42
        """
        link_key = self.keys.link_key(shortcode)

        def _hit(pipe: redis.client.Pipeline) -> None:
            if not pipe.exists(link_key):
                raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.")
            pipe.multi()
            pipe.hincrby(link_key, 'clicks', 1)
            pipe.hset(link_key, 'last_accessed_at', accessed_at.isoformat())

        clicks, _ = self.redis.transaction(_hit, link_key)
        return int(clicks)

    @handle_redis_connection_error
    @beartype
    def delete(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Atomically read and remove a short link

        HGETALL and DEL run in a single MULTI/EXEC block, so the returned
        record is exactly the one that was removed.

        Raises:
            ShortLinkNotFoundError:
                If the short link does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        link_key = self.keys.link_key(shortcode)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hgetall(link_key)
            pipe.delete(link_key)
            mapping, _ = pipe.execute()

        if not mapping:
            raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.")
        return from_redis_hash(shortcode, mapping)
