import logging
from datetime import datetime, UTC

from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.exceptions import ShortLinkNotFoundError
from shortlinks.exceptions import LinkExpiredError, LinkNotFoundError


logger = logging.getLogger(__name__)


class ResolutionService:
    """Resolve shortcodes to their redirect target, counting each successful resolution."""

    def __init__(self, dao: ShortLinkBaseDAO):
        self.dao = dao

    def resolve(self, shortcode: str) -> str:
        """Return the original URL for a shortcode and record the click.

        Expired links are reported without being counted. The click counter
        and last access time are updated by one atomic DAO call.

        Raises:
            LinkNotFoundError:
                If the shortcode is unknown (or was deleted concurrently).
            LinkExpiredError:
                If the link exists but its expiry has passed.
            DataStoreError:
                If the data store is unreachable.
        """
        try:
            link = self.dao.get(shortcode)
        except ShortLinkNotFoundError:
            raise LinkNotFoundError(shortcode) from None

        now = datetime.now(UTC)
        if link.is_expired(now):
            raise LinkExpiredError(shortcode)

        try:
            clicks = self.dao.hit(shortcode, accessed_at=now)
        except ShortLinkNotFoundError:
            logger.info('Short link disappeared between lookup and hit.', extra={'shortcode': shortcode})
            raise LinkNotFoundError(shortcode) from None

        logger.debug('Short link resolved.', extra={'shortcode': shortcode, 'clicks': clicks})
        return link.original_url
