from datetime import datetime, UTC

import pytest

from clickshortener.models import UrlRecordModel


@pytest.fixture
def record() -> UrlRecordModel:
    return UrlRecordModel(
        code='aB3xY9',
        target='https://example.com/path',
        created_at=datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC),
    )


@pytest.fixture
def other_record() -> UrlRecordModel:
    return UrlRecordModel(
        code='zZ9yX8',
        target='https://example.com/other',
        created_at=datetime(2025, 10, 16, 12, 0, 0, tzinfo=UTC),
        click_count=4,
        last_accessed_at=datetime(2025, 10, 17, 9, 0, 0, tzinfo=UTC),
    )
