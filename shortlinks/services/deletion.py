import logging

from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.exceptions import ShortLinkNotFoundError
from shortlinks.exceptions import LinkNotFoundError
from shortlinks.models import ShortLinkModel


logger = logging.getLogger(__name__)


class DeletionService:
    def __init__(self, dao: ShortLinkBaseDAO):
        self.dao = dao

    def delete(self, shortcode: str) -> ShortLinkModel:
        """Remove a short link for good and return its last stored state.

        The shortcode becomes free for new links immediately.

        Raises:
            LinkNotFoundError:
                If the shortcode is unknown.
        """
        try:
            link = self.dao.delete(shortcode)
        except ShortLinkNotFoundError:
            raise LinkNotFoundError(shortcode) from None

        logger.debug('Short link deleted.', extra={'shortcode': shortcode, 'clicks': link.clicks})
        return link
