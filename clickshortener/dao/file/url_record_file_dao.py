"""JSON snapshot file Data Access Object (DAO) for short URL records

The records live in memory (see UrlRecordMemoryDAO) and are persisted as a
single JSON document keyed by short code:

    {
        "aB3xY9": {
            "code": "aB3xY9",
            "target": "https://example.com",
            "created_at": "2025-10-15T12:00:00+00:00",
            "click_count": 3,
            "last_accessed_at": "2025-10-16T08:30:00+00:00"
        }
    }

Every operation loads the file first; mutating operations then write the
whole mapping back. Writes go to a temporary file which atomically replaces
the snapshot, so a crash never leaves a truncated document behind.

NOTE: The lock only serializes threads of a single process. Several processes
      sharing one snapshot file must use the Redis backend instead.

Classes:
    UrlRecordFileDAO:
        DAO persisting the whole mapping to a JSON file around each operation.

Example:
    >>> dao = UrlRecordFileDAO('/var/lib/clickshortener/records.json')
    >>> dao.insert(record).code
    'aB3xY9'
    >>> UrlRecordFileDAO('/var/lib/clickshortener/records.json').get('aB3xY9').target
    'https://example.com'
"""

import os
import json
import logging
import tempfile
import threading
from pathlib import Path

from clickshortener.models import UrlRecordModel, record_from_dict, record_to_dict
from clickshortener.dao.memory import UrlRecordMemoryDAO
from clickshortener.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class UrlRecordFileDAO(UrlRecordMemoryDAO):
    """UrlRecordMemoryDAO synchronized with a JSON snapshot file.

    Attributes:
        path (Path):
            Location of the JSON snapshot. A missing file is an empty mapping.
    """

    def __init__(self, path: str | os.PathLike):
        super().__init__()
        self.path = Path(path)
        self._file_lock = threading.RLock()

    def insert(self, record: UrlRecordModel) -> UrlRecordModel:
        with self._file_lock:
            self._pull()
            stored = super().insert(record)
            if stored is record:
                self._push()
            return stored

    def get(self, code: str) -> UrlRecordModel:
        with self._file_lock:
            self._pull()
            return super().get(code)

    def find(self, target: str) -> UrlRecordModel | None:
        with self._file_lock:
            self._pull()
            return super().find(target)

    def hit(self, code: str) -> UrlRecordModel:
        with self._file_lock:
            self._pull()
            record = super().hit(code)
            self._push()
            return record

    def delete(self, code: str) -> None:
        with self._file_lock:
            self._pull()
            super().delete(code)
            self._push()

    def all(self) -> list[UrlRecordModel]:
        with self._file_lock:
            self._pull()
            return super().all()

    def snapshot(self) -> dict[str, UrlRecordModel]:
        with self._file_lock:
            self._pull()
            return super().snapshot()

    def load(self, records: dict[str, UrlRecordModel]) -> None:
        with self._file_lock:
            super().load(records)
            self._push()

    def healthcheck(self) -> bool:
        with self._file_lock:
            try:
                self._pull()
            except DataStoreError as e:
                logger.warning('Snapshot file unusable.', extra={'path': str(self.path), 'reason': str(e)})
                return False
        return True

    def _pull(self) -> None:
        """Replace the in-memory mapping with the snapshot file's contents

        Raises:
            DataStoreError:
                If the file can't be read or doesn't hold a valid snapshot.
        """
        try:
            with self.path.open('r', encoding='utf-8') as f:
                document = json.load(f)
        except FileNotFoundError:
            document = {}
        except OSError as e:
            raise DataStoreError(f"Can't read snapshot file {self.path}.") from e
        except json.JSONDecodeError as e:
            raise DataStoreError(f'Snapshot file {self.path} is not valid JSON.') from e

        try:
            records = {code: record_from_dict(data) for code, data in document.items()}
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise DataStoreError(f'Snapshot file {self.path} holds malformed records.') from e

        UrlRecordMemoryDAO.load(self, records)

    def _push(self) -> None:
        """Atomically write the in-memory mapping to the snapshot file

        Raises:
            DataStoreError:
                If the snapshot can't be written.
        """
        document = {code: record_to_dict(record) for code, record in UrlRecordMemoryDAO.snapshot(self).items()}

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise DataStoreError(f"Can't write snapshot file {self.path}.") from e

        logger.debug('Wrote snapshot file.', extra={'path': str(self.path), 'records': len(document)})
