"""Data models for short URL records.

Classes:
    UrlRecordModel:
        A single code -> target mapping with its click statistics.

Functions:
    record_to_dict(record: UrlRecordModel) -> dict
        Serialize a record into a JSON-friendly dictionary.
    record_from_dict(data: dict) -> UrlRecordModel
        Rebuild a record from the output of `record_to_dict()`.

Example:
    >>> from datetime import datetime, UTC
    >>> record = UrlRecordModel(
    ...     code='aB3xY9',
    ...     target='https://example.com/article/123',
    ...     created_at=datetime(2025, 10, 15, tzinfo=UTC),
    ... )
    >>> record_to_dict(record)['created_at']
    '2025-10-15T00:00:00+00:00'
"""

from dataclasses import dataclass
from datetime import datetime

from clickshortener.types import RecordDict


# fmt: off
@dataclass(frozen=True)
class UrlRecordModel:
    code: str                                   # Unique short identifier
    target: str                                 # Normalized original URL
    created_at: datetime                        # Moment the code was minted (UTC)
    click_count: int = 0                        # Number of redirects served
    last_accessed_at: datetime | None = None    # Moment of the latest redirect (UTC)
# fmt: on


def record_to_dict(record: UrlRecordModel) -> RecordDict:
    last_accessed_at = record.last_accessed_at
    return {
        'code': record.code,
        'target': record.target,
        'created_at': record.created_at.isoformat(),
        'click_count': record.click_count,
        'last_accessed_at': last_accessed_at.isoformat() if last_accessed_at else None,
    }


def record_from_dict(data: RecordDict) -> UrlRecordModel:
    """Rebuild a UrlRecordModel from a serialized dictionary

    Missing `click_count` and `last_accessed_at` fields fall back to the
    model defaults. Empty strings count as missing timestamps, as Redis
    hashes cannot hold null values.

    Raises:
        KeyError: if `code`, `target` or `created_at` is missing.
        ValueError: if a timestamp is not valid ISO-8601.
    """
    last_accessed_at = data.get('last_accessed_at')
    return UrlRecordModel(
        code=data['code'],
        target=data['target'],
        created_at=datetime.fromisoformat(data['created_at']),
        click_count=int(data.get('click_count') or 0),
        last_accessed_at=datetime.fromisoformat(last_accessed_at) if last_accessed_at else None,
    )
