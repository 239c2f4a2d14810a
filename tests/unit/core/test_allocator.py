"""Unit tests for CodeAllocator.

Test coverage includes:

1. Idempotence
   - Ensures allocating the same target twice returns the same shortcode
     and keeps a single record.
   - Ensures re-allocation doesn't reset the click counter.

2. Fresh allocations
   - Ensures distinct targets get distinct, well-formed shortcodes.
   - Ensures new records start with zero clicks.
   - Ensures shortcode lengths outside the supported range are rejected.

3. Collisions
   - Verifies a taken shortcode is redrawn.
   - Verifies shortcodes widen after repeated collisions, up to the maximum
     length.

4. Collaboration with the data store
   - Ensures a concurrent allocation of the same target (store returns a
     different record) yields the stored shortcode.
   - Ensures data store errors propagate.
   - Ensures allocate_record() hands back the stored record without a
     second lookup.
"""

import logging
from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from clickshortener.core import CodeAllocator, RedirectResolver, is_valid_shortcode
from clickshortener.dao.base import UrlRecordBaseDAO
from clickshortener.dao.exceptions import DataStoreError, UrlRecordAlreadyExistsError


# -------------------------------------------------
# 1. Idempotence
# -------------------------------------------------


def test_allocate_is_idempotent(dao):
    allocator = CodeAllocator(dao)

    first = allocator.allocate('https://example.com/path')
    second = allocator.allocate('https://example.com/path')

    assert first == second
    assert len(dao.snapshot()) == 1


def test_allocate_existing_target_keeps_click_count(dao):
    allocator = CodeAllocator(dao)
    resolver = RedirectResolver(dao)
    code = allocator.allocate('https://example.com/path')
    resolver.resolve(code)
    resolver.resolve(code)

    assert allocator.allocate('https://example.com/path') == code
    assert dao.get(code).click_count == 2


# -------------------------------------------------
# 2. Fresh allocations
# -------------------------------------------------


def test_allocate_distinct_targets(dao):
    allocator = CodeAllocator(dao)
    targets = [f'https://example.com/page/{i}' for i in range(50)]

    codes = [allocator.allocate(target) for target in targets]

    assert len(set(codes)) == len(targets)
    assert all(is_valid_shortcode(code) and len(code) == 6 for code in codes)
    for code, target in zip(codes, targets):
        assert dao.get(code).target == target


def test_allocate_new_record_has_no_clicks(dao):
    code = CodeAllocator(dao).allocate('https://example.com/path')

    record = dao.get(code)
    assert record.click_count == 0
    assert record.last_accessed_at is None


def test_allocator_rejects_non_positive_widen_after(dao):
    with pytest.raises(ValueError):
        CodeAllocator(dao, widen_after=0)


@pytest.mark.parametrize('length', [5, 11])
def test_allocator_rejects_out_of_range_length(dao, length):
    with pytest.raises(ValueError, match='length must be between 6 and 10'):
        CodeAllocator(dao, length=length)


# -------------------------------------------------
# 3. Collisions
# -------------------------------------------------


def test_allocate_redraws_taken_shortcode(dao, existing_record, scripted_random):
    dao.insert(existing_record)
    allocator = CodeAllocator(dao, rng=scripted_random('aaaaaa', 'bbbbbb'))

    code = allocator.allocate('https://example.com/new')

    assert code == 'bbbbbb'
    assert dao.get('aaaaaa') == existing_record


def test_allocate_widens_after_repeated_collisions(dao, existing_record, scripted_random, caplog):
    dao.insert(existing_record)
    allocator = CodeAllocator(dao, rng=scripted_random('aaaaaa', 'aaaaaa', 'ccccccc'), widen_after=2)

    with caplog.at_level(logging.WARNING, logger='clickshortener.core.allocator'):
        code = allocator.allocate('https://example.com/new')

    assert code == 'ccccccc'
    assert 'Widening shortcodes' in caplog.text


def test_allocate_never_widens_past_max_length():
    # The first seven inserts collide
    dao = MagicMock(spec=UrlRecordBaseDAO)
    dao.find.return_value = None

    attempts = []

    def insert(record):
        attempts.append(record.code)
        if len(attempts) < 8:
            raise UrlRecordAlreadyExistsError('taken')
        return record

    dao.insert.side_effect = insert
    allocator = CodeAllocator(dao, widen_after=1, length=8)

    code = allocator.allocate('https://example.com/new')

    assert [len(c) for c in attempts] == [8, 9, 10, 10, 10, 10, 10, 10]
    assert len(code) == 10


# -------------------------------------------------
# 4. Collaboration with the data store
# -------------------------------------------------


def test_allocate_returns_concurrently_stored_code(existing_record):
    dao = MagicMock(spec=UrlRecordBaseDAO)
    dao.find.return_value = None
    dao.insert.return_value = existing_record

    code = CodeAllocator(dao).allocate(existing_record.target)

    assert code == existing_record.code
    dao.insert.assert_called_once()


def test_allocate_propagates_data_store_error():
    dao = MagicMock(spec=UrlRecordBaseDAO)
    dao.find.side_effect = DataStoreError('down')

    with pytest.raises(DataStoreError):
        CodeAllocator(dao).allocate('https://example.com/path')



def test_allocate_record_returns_stored_record(existing_record):
    # Store already holds the target with clicks, allocation must not re-read it
    stored = replace(existing_record, click_count=7)
    dao = MagicMock(spec=UrlRecordBaseDAO)
    dao.find.return_value = None
    dao.insert.return_value = stored

    record = CodeAllocator(dao).allocate_record(stored.target)

    assert record is stored
    dao.get.assert_not_called()


def test_allocate_record_returns_existing_record(dao, existing_record):
    dao.insert(existing_record)

    record = CodeAllocator(dao).allocate_record(existing_record.target)

    assert record == existing_record
