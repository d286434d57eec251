from datetime import datetime, UTC

from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.exceptions import ShortLinkNotFoundError
from shortlinks.exceptions import LinkNotFoundError
from shortlinks.models import ShortLinkStats


class StatisticsService:
    """Read-only analytics for short links. Never counts as a click."""

    def __init__(self, dao: ShortLinkBaseDAO):
        self.dao = dao

    def get_stats(self, shortcode: str) -> ShortLinkStats:
        """Project a stored link into its statistics view.

        Raises:
            LinkNotFoundError:
                If the shortcode is unknown.
            DataStoreError:
                If the data store is unreachable.
        """
        try:
            link = self.dao.get(shortcode)
        except ShortLinkNotFoundError:
            raise LinkNotFoundError(shortcode) from None

        return ShortLinkStats.from_model(link, now=datetime.now(UTC))
