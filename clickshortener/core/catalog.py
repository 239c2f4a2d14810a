"""Listing and removal of short URL records

Classes:
    LinkCatalog:
        History view and management operations over the record store.
"""

import logging

from clickshortener.models import UrlRecordModel
from clickshortener.dao.base import UrlRecordBaseDAO
from clickshortener.dao.exceptions import UrlRecordNotFoundError
from clickshortener.core.shortcode import is_valid_shortcode


logger = logging.getLogger(__name__)


class LinkCatalog:
    def __init__(self, dao: UrlRecordBaseDAO):
        self.dao = dao

    def history(self) -> list[UrlRecordModel]:
        """Return every record, newest first."""
        return self.dao.all()

    def remove(self, code: str) -> None:
        """Delete the record of `code`, freeing its target for re-allocation

        Raises:
            UrlRecordNotFoundError:
                If `code` is malformed or unknown.
            DataStoreError:
                If the data store is unavailable.
        """
        if not is_valid_shortcode(code):
            raise UrlRecordNotFoundError(f"Short URL with code '{code}' not found.")

        self.dao.delete(code)
        logger.info('Deleted short URL.', extra={'shortcode': code})
