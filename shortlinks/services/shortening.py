"""Shortening service: turn a long URL into a stored short link.

Procedure for a single create() call:
    - Step 1: Reserve a shortcode (custom alias takes precedence over generation)
    - Step 2: Build the ShortLinkModel (clicks=0, created_at=now)
    - Step 3: Insert it; the data store rejects taken shortcodes
    - Step 4: On rejection, retry with a fresh code (generated codes only)

Example:
    >>> service = ShorteningService(dao, base_url='https://sho.rt')
    >>> created = service.create('https://example.com/a/b', custom_alias='docs-1')
    >>> created.short_url
    'https://sho.rt/docs-1'
"""

import logging
from dataclasses import dataclass
from datetime import datetime, UTC

from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.exceptions import ShortLinkAlreadyExistsError
from shortlinks.exceptions import AliasConflictError, GenerationExhaustedError
from shortlinks.models import ShortLinkModel, ShortenerPolicy
from shortlinks.services.resolver import UniquenessResolver


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedShortLink:
    link: ShortLinkModel
    short_url: str  # Fully qualified short URL (scheme + host + shortcode)


class ShorteningService:
    def __init__(
        self,
        dao: ShortLinkBaseDAO,
        base_url: str,
        policy: ShortenerPolicy | None = None,
        resolver: UniquenessResolver | None = None,
    ):
        self.dao = dao
        self.base_url = base_url.rstrip('/')
        self.policy = policy or ShortenerPolicy()
        self.resolver = resolver or UniquenessResolver(dao, self.policy)

    def short_url(self, shortcode: str) -> str:
        return f'{self.base_url}/{shortcode}'

    def create(
        self,
        original_url: str,
        custom_alias: str | None = None,
        expires_at: datetime | None = None,
    ) -> CreatedShortLink:
        """Create and persist a new short link.

        Inputs are expected to be validated by the caller (URL scheme, alias
        length/charset, expiry in the future).

        Args:
            original_url (str):
                Redirect target.
            custom_alias (str | None):
                Caller-chosen shortcode. Generated when None.
            expires_at (datetime | None):
                Expiry timestamp. The link never expires when None. Naive values
                are taken as UTC.

        Returns:
            CreatedShortLink: the stored link and its short URL.

        Raises:
            AliasConflictError:
                If the custom alias is already taken.
            GenerationExhaustedError:
                If no free shortcode could be inserted within policy.max_attempts.
            DataStoreError:
                If the data store is unreachable.
        """
        if expires_at is not None and expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)

        is_custom = custom_alias is not None
        attempts = 1 if is_custom else self.policy.max_attempts

        for attempt in range(1, attempts + 1):
            shortcode = self.resolver.reserve(custom_alias)
            link = ShortLinkModel(
                original_url=original_url,
                shortcode=shortcode,
                custom_alias=is_custom,
                clicks=0,
                created_at=datetime.now(UTC),
                expires_at=expires_at,
            )

            try:
                self.dao.insert(link)
            except ShortLinkAlreadyExistsError:
                if is_custom:
                    raise AliasConflictError(shortcode) from None
                # Lost the race against a concurrent writer between reserve() and insert()
                logger.warning('Shortcode was taken before insert. Retrying.', extra={'shortcode': shortcode, 'attempt': attempt})
                continue

            logger.debug('Short link stored.', extra={'shortcode': shortcode, 'customAlias': is_custom})
            return CreatedShortLink(link=link, short_url=self.short_url(shortcode))

        raise GenerationExhaustedError(message=f'No free shortcode could be stored after {attempts} attempts.')
