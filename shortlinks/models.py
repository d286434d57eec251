"""Data models for short links.

Classes:
    ShortLinkModel:
        A stored short link record (target URL, shortcode and click metadata).
    ShortLinkStats:
        Read-only analytics projection of a ShortLinkModel.
    ShortenerPolicy:
        Tunable shortcode policy (generated length, alias bounds, attempt cap).

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> link = ShortLinkModel(
    ...     original_url='https://example.com/a/b',
    ...     shortcode='docs-1',
    ...     custom_alias=True,
    ...     created_at=datetime.now(UTC),
    ...     expires_at=datetime.now(UTC) - timedelta(seconds=1),
    ... )
    >>> link.is_expired()
    True
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Self

from shortlinks.constants import Policy
from shortlinks.exceptions import BadConfigurationError


def utcnow() -> datetime:
    return datetime.now(UTC)


# fmt: off
@dataclass(frozen=True)
class ShortLinkModel:
    original_url: str                           # Redirect target
    shortcode: str                              # Unique short identifier
    custom_alias: bool = False                  # True if the shortcode was chosen by the caller
    clicks: int = 0                             # Successful resolutions so far
    created_at: datetime = field(default_factory=utcnow)
    expires_at: datetime | None = None          # None -> never expires
    last_accessed_at: datetime | None = None    # None until first resolution
# fmt: on

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True if the link has an expiry and it lies in the past."""
        if self.expires_at is None:
            return False
        return (now or utcnow()) > self.expires_at


@dataclass(frozen=True)
class ShortLinkStats:
    original_url: str
    shortcode: str
    custom_alias: bool
    clicks: int
    created_at: datetime
    last_accessed_at: datetime | None
    expires_at: datetime | None
    is_expired: bool

    @classmethod
    def from_model(cls, link: ShortLinkModel, now: datetime | None = None) -> Self:
        return cls(
            original_url=link.original_url,
            shortcode=link.shortcode,
            custom_alias=link.custom_alias,
            clicks=link.clicks,
            created_at=link.created_at,
            last_accessed_at=link.last_accessed_at,
            expires_at=link.expires_at,
            is_expired=link.is_expired(now),
        )


@dataclass(frozen=True)
class ShortenerPolicy:
    """Shortcode policy.

    Attributes:
        code_length (int):
            Length of generated shortcodes.
        alias_min_length (int):
            Minimum accepted length of a custom alias or path shortcode.
        alias_max_length (int):
            Maximum accepted length of a custom alias or path shortcode.
        max_attempts (int):
            Upper bound on generate/insert attempts for a single link.
    """

    code_length: int = Policy.CODE_LENGTH
    alias_min_length: int = Policy.ALIAS_MIN_LENGTH
    alias_max_length: int = Policy.ALIAS_MAX_LENGTH
    max_attempts: int = Policy.MAX_ATTEMPTS

    def __post_init__(self) -> None:
        for name in ('code_length', 'alias_min_length', 'alias_max_length', 'max_attempts'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise BadConfigurationError(f'Policy value {name!r} must be a positive integer (given value: {value!r}).')
        if self.alias_min_length > self.alias_max_length:
            raise BadConfigurationError(
                f'Policy alias_min_length ({self.alias_min_length}) exceeds alias_max_length ({self.alias_max_length}).'
            )
        # Generated codes must pass the same path validation as custom aliases
        if not self.alias_min_length <= self.code_length <= self.alias_max_length:
            raise BadConfigurationError(
                f'Policy code_length ({self.code_length}) must lie within alias bounds '
                f'({self.alias_min_length}..{self.alias_max_length}).'
            )

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> Self:
        """Build a policy from the AppConfig 'policy' section, ignoring unknown keys."""
        config = config or {}
        known = {k: v for k, v in config.items() if k in cls.__dataclass_fields__}
        return cls(**known)
