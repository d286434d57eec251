"""Abstract base class for ShortLink data access objects (DAOs).

This class establishes a consistent contract for all ShortLink DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-memory).

Responsibilities:
    - Provide an interface for inserting, retrieving and deleting ShortLinkModel objects.
    - Enforce shortcode uniqueness at insert time (create-if-absent).
    - Provide an atomic click increment for link resolution.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinks.models import ShortLinkModel
        >>> from shortlinks.dao import ShortLinkRedisDAO

        >>> dao = ShortLinkRedisDAO(...)

        >>> link = ShortLinkModel(
        ...     original_url="https://example.com/blog/article-123",
        ...     shortcode="a1b2c3",
        ... )
        >>> dao.insert(link)

        >>> dao.hit("a1b2c3", accessed_at=datetime.now(UTC))
        1

        >>> dao.get("a1b2c3").clicks
        1
"""

from abc import ABC, abstractmethod
from datetime import datetime

from shortlinks.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for ShortLink data access objects (DAOs).

    Methods:
        insert(link: ShortLinkModel, **kwargs) -> ShortLinkBaseDAO:
            Insert a new ShortLinkModel into the data store.
            Raises ShortLinkAlreadyExistsError if the shortcode already exists.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortLinkModel:
            Retrieve a ShortLinkModel by shortcode.
            Raises ShortLinkNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a shortcode is taken.

        hit(shortcode: str, accessed_at: datetime, **kwargs) -> int:
            Atomically increment clicks and set last_accessed_at.
            Returns the new click count.
            Raises ShortLinkNotFoundError if the entry does not exist.

        delete(shortcode: str, **kwargs) -> ShortLinkModel:
            Atomically remove the entry and return it.
            Raises ShortLinkNotFoundError if the entry does not exist.

    Subclassing:
        Datastore-specific implementations (e.g., ShortLinkRedisDAO or
        ShortLinkMemoryDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def insert(self, link: ShortLinkModel, **kwargs) -> 'ShortLinkBaseDAO':
        """Insert a new ShortLinkModel into the data store.

        The data store is the final arbiter of shortcode uniqueness: the
        insert must fail if the shortcode exists, even if a concurrent writer
        created it after the caller's own existence check.

        Args:
            link (ShortLinkModel):
                The ShortLinkModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)

        Raises:
            ShortLinkAlreadyExistsError:
                If a ShortLinkModel with the same shortcode already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Retrieve a ShortLinkModel from the data store by its shortcode.

        Raises:
            ShortLinkNotFoundError:
                If no ShortLinkModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        """Return True if the shortcode is taken."""
        pass

    @abstractmethod
    def hit(self, shortcode: str, accessed_at: datetime, **kwargs) -> int:
        """Atomically increment the click counter and touch last_accessed_at.

        Two concurrent hits on the same shortcode must both be counted.

        Args:
            shortcode (str):
                The shortcode of the link being resolved.

            accessed_at (datetime):
                Resolution timestamp stored as last_accessed_at.

        Returns:
            int: click count after the increment.

        Raises:
            ShortLinkNotFoundError:
                If no ShortLinkModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Atomically remove a ShortLinkModel and return its last state.

        Raises:
            ShortLinkNotFoundError:
                If no ShortLinkModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
