"""Shortcode generation utility

This module provides helpers for drawing random Base62 shortcodes and for
checking whether a string has the shape of a shortcode.

Functions:
    generate_shortcode(length=6, rng=None):
        Draw a random shortcode suitable for use as a URL slug.
    is_valid_shortcode(code):
        Cheap shape pre-filter applied before any data store lookup.

Example:
    >>> import random
    >>> from clickshortener.core.shortcode import generate_shortcode
    >>> len(generate_shortcode(rng=random.Random(42)))
    6
"""

import re
import random

from clickshortener.constants import ShortCode


ALPHABET = ShortCode.ALPHABET
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits

_SHORTCODE_PATTERN = re.compile(rf'[A-Za-z0-9]{{{ShortCode.LENGTH},{ShortCode.MAX_LENGTH}}}')


def generate_shortcode(length: int = ShortCode.LENGTH, rng: random.Random | None = None) -> str:
    """Draw a random Base62 shortcode.

    Every character is drawn independently and uniformly from the 62 symbol
    alphabet [a-zA-Z0-9]. Uniqueness is NOT guaranteed here: callers must
    check the data store and redraw on collision.

    Args:
        length (int, optional):
            Number of characters in the shortcode.
            Defaults to 6.

        rng (random.Random, optional):
            Randomness source. Defaults to the module-level `random` generator,
            which is NOT cryptographically secure. Pass `random.SystemRandom()`
            when shortcodes must be unpredictable.

    Returns:
        str: A random alphanumeric shortcode.

    Example:
        >>> generate_shortcode(8, rng=random.SystemRandom())
        'q7XbR2kZ'
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    source = rng if rng is not None else random
    return ''.join(source.choice(ALPHABET) for _ in range(length))


def is_valid_shortcode(code: object) -> bool:
    """Return True if `code` looks like a shortcode this service could have minted

    Accepts alphanumeric strings between the default and the maximum (widened)
    shortcode length. Anything else can't exist in the data store.

    Example:
        >>> is_valid_shortcode('aB3xY9')
        True
        >>> is_valid_shortcode('aB3-Y9')
        False
    """
    return isinstance(code, str) and _SHORTCODE_PATTERN.fullmatch(code) is not None
