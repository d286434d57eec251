from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.memory import ShortLinkMemoryDAO
from shortlinks.dao.redis import ShortLinkRedisDAO


__all__ = [
    'ShortLinkBaseDAO',
    'ShortLinkMemoryDAO',
    'ShortLinkRedisDAO',
]
