"""Request field validation for the Lambda boundary.

The services assume their inputs are already well formed; the handlers call
these helpers first and answer 400 on ValidationError.

Functions:
    validate_original_url(value) -> str
    validate_shortcode(value, policy, field='shortCode') -> str
    parse_expires_at(value, now=None) -> datetime | None
"""

import re
from datetime import datetime, UTC
from typing import Any
from urllib.parse import urlparse

from shortlinks.exceptions import ValidationError
from shortlinks.models import ShortenerPolicy


SHORTCODE_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


def validate_original_url(value: Any, field: str = 'originalUrl') -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, 'Please provide a valid URL with http or https protocol')

    url = value.strip()
    components = urlparse(url)
    if components.scheme not in {'http', 'https'} or not components.hostname:
        raise ValidationError(field, 'Please provide a valid URL with http or https protocol')
    return url


def validate_shortcode(value: Any, policy: ShortenerPolicy, field: str = 'shortCode') -> str:
    """Check a custom alias or path shortcode against the policy length bounds and charset."""
    if not isinstance(value, str):
        raise ValidationError(field, 'Short code must be a string')
    if not policy.alias_min_length <= len(value) <= policy.alias_max_length:
        raise ValidationError(
            field, f'Short code must be between {policy.alias_min_length} and {policy.alias_max_length} characters'
        )
    if not SHORTCODE_PATTERN.match(value):
        raise ValidationError(field, 'Short code can only contain letters, numbers, hyphens, and underscores')
    return value


def parse_expires_at(value: Any, now: datetime | None = None, field: str = 'expiresAt') -> datetime | None:
    """Parse an optional ISO 8601 expiry. Naive timestamps are taken as UTC."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, 'Expiration date must be a valid ISO 8601 date')

    try:
        expires_at = datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(field, 'Expiration date must be a valid ISO 8601 date') from None

    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    if expires_at <= (now or datetime.now(UTC)):
        raise ValidationError(field, 'Expiration date must be in the future')
    return expires_at
