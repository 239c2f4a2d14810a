"""Redirect resolution

Classes:
    RedirectResolver:
        Look shortcodes up, counting clicks on traversal.

Example:
    >>> resolver = RedirectResolver(dao)
    >>> resolver.resolve('aB3xY9')
    'https://example.com/path'
    >>> resolver.stats('aB3xY9').click_count
    1
"""

import logging

from clickshortener.models import UrlRecordModel
from clickshortener.dao.base import UrlRecordBaseDAO
from clickshortener.dao.exceptions import UrlRecordNotFoundError
from clickshortener.core.shortcode import is_valid_shortcode


logger = logging.getLogger(__name__)


class RedirectResolver:
    """Resolve shortcodes to their target URLs.

    Malformed shortcodes are rejected before touching the data store and are
    reported exactly like unknown ones, with UrlRecordNotFoundError.
    """

    def __init__(self, dao: UrlRecordBaseDAO):
        self.dao = dao

    def resolve(self, code: str) -> str:
        """Return the target URL of `code` and count the click

        Raises:
            UrlRecordNotFoundError:
                If `code` is malformed or unknown. Nothing is mutated.
            DataStoreError:
                If the data store is unavailable.
        """
        self._check_shape(code)
        record = self.dao.hit(code)
        logger.debug('Resolved shortcode.', extra={'shortcode': code, 'click_count': record.click_count})
        return record.target

    def stats(self, code: str) -> UrlRecordModel:
        """Return the record of `code` without counting a click

        Raises:
            UrlRecordNotFoundError:
                If `code` is malformed or unknown.
            DataStoreError:
                If the data store is unavailable.
        """
        self._check_shape(code)
        return self.dao.get(code)

    @staticmethod
    def _check_shape(code: str) -> None:
        if not is_valid_shortcode(code):
            raise UrlRecordNotFoundError(f"Short URL with code '{code}' not found.")
