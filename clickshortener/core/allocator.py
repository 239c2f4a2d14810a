"""Short code allocation

Classes:
    CodeAllocator:
        Return the shortcode of a normalized target URL, minting one if needed.

Example:
    >>> from clickshortener.dao.memory import UrlRecordMemoryDAO
    >>> allocator = CodeAllocator(UrlRecordMemoryDAO())
    >>> code = allocator.allocate('https://example.com/path')
    >>> allocator.allocate('https://example.com/path') == code
    True
"""

import random
import logging
from datetime import datetime, UTC

from clickshortener.constants import ShortCode
from clickshortener.models import UrlRecordModel
from clickshortener.dao.base import UrlRecordBaseDAO
from clickshortener.dao.exceptions import UrlRecordAlreadyExistsError
from clickshortener.core.shortcode import generate_shortcode


logger = logging.getLogger(__name__)


class CodeAllocator:
    """Allocate shortcodes for target URLs.

    Allocation is idempotent per target: a URL which already has a record gets
    its existing shortcode back, and its click counter is left alone.

    The target URL must already be normalized and validated (see
    clickshortener.utils.urls). The allocator compares targets as exact strings.

    Attributes:
        dao (UrlRecordBaseDAO):
            Record store shared with the resolver.
        rng (random.Random | None):
            Randomness source for shortcodes. None uses the module-level generator.
        length (int):
            Length of freshly minted shortcodes.
        widen_after (int):
            Consecutive collisions tolerated at one length before minting longer codes.
    """

    def __init__(
        self,
        dao: UrlRecordBaseDAO,
        rng: random.Random | None = None,
        length: int = ShortCode.LENGTH,
        widen_after: int = ShortCode.WIDEN_AFTER,
    ):
        if not ShortCode.LENGTH <= length <= ShortCode.MAX_LENGTH:
            raise ValueError(
                f'length must be between {ShortCode.LENGTH} and {ShortCode.MAX_LENGTH} (given value: {length}).'
            )
        if widen_after <= 0:
            raise ValueError(f'widen_after must be a positive integer (given value: {widen_after}).')

        self.dao = dao
        self.rng = rng
        self.length = length
        self.widen_after = widen_after

    def allocate(self, target_url: str) -> str:
        """Return the shortcode for `target_url`, creating its record if needed

        See `allocate_record()`.
        """
        return self.allocate_record(target_url).code

    def allocate_record(self, target_url: str) -> UrlRecordModel:
        """Return the record of `target_url`, creating it if needed

        Retries on shortcode collisions until a free code is found. The data
        store's insert is atomic over both the target and the shortcode, so two
        concurrent allocations of the same new URL end up with the same code.

        Args:
            target_url (str):
                Normalized absolute http(s) URL.

        Returns:
            UrlRecordModel: the record mapping a shortcode to `target_url`, as
            stored. Existing records keep their click statistics.

        Raises:
            DataStoreError:
                If the data store is unavailable.
        """
        existing = self.dao.find(target_url)
        if existing is not None:
            logger.debug('Target already shortened.', extra={'shortcode': existing.code})
            return existing

        length = self.length
        collisions = 0
        while True:
            record = UrlRecordModel(
                code=generate_shortcode(length, rng=self.rng),
                target=target_url,
                created_at=datetime.now(UTC),
            )
            try:
                stored = self.dao.insert(record)
            except UrlRecordAlreadyExistsError:
                collisions += 1
                if collisions % self.widen_after == 0 and length < ShortCode.MAX_LENGTH:
                    length += 1
                    logger.warning(
                        'Abnormal number of shortcode collisions. Widening shortcodes.',
                        extra={'collisions': collisions, 'length': length},
                    )
                continue

            if stored is record:
                logger.info('Allocated new shortcode.', extra={'shortcode': stored.code, 'collisions': collisions})
            else:
                logger.debug('Target shortened concurrently.', extra={'shortcode': stored.code})
            return stored
