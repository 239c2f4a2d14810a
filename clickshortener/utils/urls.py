"""Target URL normalization and validation

Runs before allocation: the allocator only ever sees normalized, valid URLs.

Functions:
    normalize_url(url: str) -> str
        Trim whitespace and default the scheme to https.
    is_valid_url(url: str) -> bool
        Check for an absolute http(s) URL with a host.
    clean_target_url(url: str) -> str
        Normalize then validate, raising InvalidURLError on failure.

Example:
    >>> normalize_url('  example.org ')
    'https://example.org'
    >>> is_valid_url('ftp://example.org')
    False
"""

from urllib.parse import urlsplit

from clickshortener.exceptions import InvalidURLError


ALLOWED_SCHEMES = frozenset({'http', 'https'})


def normalize_url(url: str) -> str:
    url = url.strip()
    if not url.startswith(('http://', 'https://')):
        return f'https://{url}'
    return url


def is_valid_url(url: str) -> bool:
    try:
        components = urlsplit(url)
        # Accessing .port raises ValueError on out-of-range or non-numeric ports
        components.port
    except ValueError:
        return False
    return components.scheme in ALLOWED_SCHEMES and bool(components.hostname)


def clean_target_url(url: str) -> str:
    """Normalize and validate a user supplied target URL

    Raises:
        InvalidURLError:
            If the URL is empty, not a string, or not a valid http(s) URL
            once normalized.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidURLError('URL is required.')

    normalized = normalize_url(url)
    if not is_valid_url(normalized):
        raise InvalidURLError(f'Invalid URL format: {url!r}.')
    return normalized
