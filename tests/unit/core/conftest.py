from datetime import datetime, UTC

import pytest

from clickshortener.models import UrlRecordModel
from clickshortener.dao.memory import UrlRecordMemoryDAO


class ScriptedRandom:
    """Randomness source replaying the characters of predetermined shortcodes."""

    def __init__(self, *codes: str):
        self._chars = iter(''.join(codes))

    def choice(self, seq):
        char = next(self._chars)
        assert char in seq
        return char


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def dao() -> UrlRecordMemoryDAO:
    return UrlRecordMemoryDAO()


@pytest.fixture
def existing_record() -> UrlRecordModel:
    return UrlRecordModel(
        code='aaaaaa',
        target='https://example.com/taken',
        created_at=datetime(2025, 10, 1, tzinfo=UTC),
    )
