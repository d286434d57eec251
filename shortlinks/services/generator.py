"""Shortcode generation utility

Functions:
    generate_shortcode(length=6):
        Generate a random shortcode suitable for use as a URL slug.

Example:
    >>> from shortlinks.services import generate_shortcode
    >>> generate_shortcode()
    'k9x_Z2'
"""

import secrets

from shortlinks.constants import ALPHABET, Policy


def generate_shortcode(length: int = Policy.CODE_LENGTH) -> str:
    """Generate a random, URL-safe shortcode.

    Every character is drawn independently and uniformly from the URL-safe
    alphabet [A-Za-z0-9_-] using the `secrets` module, so codes are not
    predictable from previously issued ones.

    Args:
        length (int, optional):
            Exact length of the resulting code. Defaults to 6.

    Returns:
        str: A random shortcode of exactly `length` characters.

    NOTE:
        - Uniqueness is NOT guaranteed here; see UniquenessResolver and
          ShorteningService.
        - At length 6 the space holds 64^6 (~6.9e10) codes.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
