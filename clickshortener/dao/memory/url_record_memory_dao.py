"""In-memory Data Access Object (DAO) for short URL records

Responsibilities:
    - Keep the code -> record mapping and a target -> code index in process memory;
    - Serialize every read-modify-write step behind a single lock;
    - Provide whole-mapping snapshot/load for persistence collaborators.

Classes:
    UrlRecordMemoryDAO:
        Thread-safe DAO over a plain dictionary.

Example:
    >>> dao = UrlRecordMemoryDAO()
    >>> dao.insert(record)
    UrlRecordModel(code='aB3xY9', target='https://example.com', ...)
    >>> dao.find('https://example.com').code
    'aB3xY9'
"""

import threading
from dataclasses import replace
from datetime import datetime, UTC

from beartype import beartype

from clickshortener.models import UrlRecordModel
from clickshortener.dao.base import UrlRecordBaseDAO, target_index
from clickshortener.dao.exceptions import UrlRecordAlreadyExistsError, UrlRecordNotFoundError


class UrlRecordMemoryDAO(UrlRecordBaseDAO):
    """Dictionary-backed implementation of UrlRecordBaseDAO.

    Records are immutable; updates swap in a new UrlRecordModel under the lock,
    so callers never observe a half-updated record.

    Attributes:
        _records (dict[str, UrlRecordModel]):
            Mapping keyed by short code.
        _targets (dict[str, str]):
            Secondary index keyed by target URL, making `find()` O(1).
        _lock (threading.Lock):
            Guards both dictionaries.
    """

    def __init__(self, records: dict[str, UrlRecordModel] | None = None):
        self._records: dict[str, UrlRecordModel] = {}
        self._targets: dict[str, str] = {}
        self._lock = threading.Lock()
        if records:
            self.load(records)

    @beartype
    def insert(self, record: UrlRecordModel) -> UrlRecordModel:
        with self._lock:
            existing_code = self._targets.get(record.target)
            if existing_code is not None:
                return self._records[existing_code]
            if record.code in self._records:
                raise UrlRecordAlreadyExistsError(f"Short URL with code '{record.code}' already exists.")

            self._records[record.code] = record
            self._targets[record.target] = record.code
            return record

    @beartype
    def get(self, code: str) -> UrlRecordModel:
        with self._lock:
            try:
                return self._records[code]
            except KeyError:
                raise UrlRecordNotFoundError(f"Short URL with code '{code}' not found.") from None

    @beartype
    def find(self, target: str) -> UrlRecordModel | None:
        with self._lock:
            code = self._targets.get(target)
            return None if code is None else self._records[code]

    @beartype
    def hit(self, code: str) -> UrlRecordModel:
        with self._lock:
            record = self._records.get(code)
            if record is None:
                raise UrlRecordNotFoundError(f"Short URL with code '{code}' not found.")

            record = replace(record, click_count=record.click_count + 1, last_accessed_at=datetime.now(UTC))
            self._records[code] = record
            return record

    @beartype
    def delete(self, code: str) -> None:
        with self._lock:
            record = self._records.pop(code, None)
            if record is None:
                raise UrlRecordNotFoundError(f"Short URL with code '{code}' not found.")
            del self._targets[record.target]

    def all(self) -> list[UrlRecordModel]:
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda record: record.created_at, reverse=True)

    def snapshot(self) -> dict[str, UrlRecordModel]:
        with self._lock:
            return dict(self._records)

    @beartype
    def load(self, records: dict[str, UrlRecordModel]) -> None:
        """Replace the whole mapping with `records`

        Raises:
            DataStoreError:
                If a key doesn't match its record's code, or two records share a
                target. The current mapping is left untouched in that case.
        """
        targets = target_index(records)

        with self._lock:
            self._records = dict(records)
            self._targets = targets
