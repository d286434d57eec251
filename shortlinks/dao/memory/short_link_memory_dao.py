"""In-memory implementation of ShortLinkBaseDAO.

Thread-safe: every operation holds a single lock, which gives the same
per-record atomicity guarantees as the Redis implementation. Intended for
local runs and tests. Records live only as long as the DAO instance.

Example:
    >>> dao = ShortLinkMemoryDAO()
    >>> dao.insert(ShortLinkModel(original_url='https://example.com', shortcode='abc123'))
    <ShortLinkMemoryDAO>
    >>> dao.hit('abc123', accessed_at=datetime.now(UTC))
    1
"""

import threading
from dataclasses import replace
from datetime import datetime

from beartype import beartype

from shortlinks.models import ShortLinkModel
from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError


class ShortLinkMemoryDAO(ShortLinkBaseDAO):
    def __init__(self):
        self._lock = threading.Lock()
        self._links: dict[str, ShortLinkModel] = {}

    @beartype
    def insert(self, link: ShortLinkModel, **kwargs) -> 'ShortLinkMemoryDAO':
        with self._lock:
            if link.shortcode in self._links:
                raise ShortLinkAlreadyExistsError(f"Short link with code '{link.shortcode}' already exists.")
            self._links[link.shortcode] = link
        return self

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel:
        with self._lock:
            try:
                return self._links[shortcode]
            except KeyError:
                raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.") from None

    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        with self._lock:
            return shortcode in self._links

    @beartype
    def hit(self, shortcode: str, accessed_at: datetime, **kwargs) -> int:
        with self._lock:
            link = self._links.get(shortcode)
            if link is None:
                raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.")
            link = replace(link, clicks=link.clicks + 1, last_accessed_at=accessed_at)
            self._links[shortcode] = link
            return link.clicks

    @beartype
    def delete(self, shortcode: str, **kwargs) -> ShortLinkModel:
        with self._lock:
            try:
                return self._links.pop(shortcode)
            except KeyError:
                raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.") from None

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)
