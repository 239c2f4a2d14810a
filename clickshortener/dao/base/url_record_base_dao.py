"""Abstract base class for UrlRecord data access objects (DAOs).

This class establishes a consistent contract for all UrlRecord DAO implementations,
regardless of the underlying storage mechanism (e.g., in-memory, JSON file, Redis).

Responsibilities:
    - Provide an interface for inserting, retrieving and deleting UrlRecordModel objects.
    - Guarantee atomic check-then-insert and read-increment-write steps.
    - Expose whole-mapping snapshot/load operations for persistence.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, UTC
        >>> from clickshortener.models import UrlRecordModel
        >>> from clickshortener.dao.memory import UrlRecordMemoryDAO

        >>> dao = UrlRecordMemoryDAO()
        >>> record = UrlRecordModel(
        ...     code='aB3xY9',
        ...     target='https://example.com/blog/article-123',
        ...     created_at=datetime.now(UTC),
        ... )
        >>> dao.insert(record).code
        'aB3xY9'

        >>> dao.hit('aB3xY9').click_count
        1
"""

from abc import ABC, abstractmethod

from clickshortener.models import UrlRecordModel
from clickshortener.dao.exceptions import DataStoreError


def target_index(records: dict[str, UrlRecordModel]) -> dict[str, str]:
    """Build the target -> code index of a whole mapping

    Used by `load()` implementations to reject mappings which break the
    record invariants before touching the data store.

    Raises:
        DataStoreError:
            If a key doesn't match its record's code, or two records share a target.
    """
    targets = {}
    for code, record in records.items():
        if code != record.code:
            raise DataStoreError(f"Record keyed '{code}' carries mismatching code '{record.code}'.")
        if record.target in targets:
            raise DataStoreError(f"Target '{record.target}' is mapped by both '{targets[record.target]}' and '{code}'.")
        targets[record.target] = code
    return targets


class UrlRecordBaseDAO(ABC):
    """Interface for UrlRecord data access objects (DAOs).

    Methods:
        insert(record: UrlRecordModel) -> UrlRecordModel:
            Atomically insert a new record unless its target is already mapped.
            Returns the stored record: the new one, or the existing record for the target.
            Raises UrlRecordAlreadyExistsError if the short code is already taken.

        get(code: str) -> UrlRecordModel:
            Retrieve a record by short code.
            Raises UrlRecordNotFoundError if the entry does not exist.

        find(target: str) -> UrlRecordModel | None:
            Retrieve the record mapped to a target URL, or None.

        hit(code: str) -> UrlRecordModel:
            Atomically increment the click counter and stamp the last access time.
            Raises UrlRecordNotFoundError if the entry does not exist.

        delete(code: str) -> None:
            Remove a single record.
            Raises UrlRecordNotFoundError if the entry does not exist.

        all() -> list[UrlRecordModel]:
            Return every record, newest first.

        snapshot() -> dict[str, UrlRecordModel]:
            Return a copy of the whole mapping.

        load(records: dict[str, UrlRecordModel]) -> None:
            Replace the whole mapping.

    All methods raise DataStoreError on storage failures.

    Subclassing:
        Datastore-specific implementations (e.g., UrlRecordRedisDAO or
        UrlRecordFileDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def insert(self, record: UrlRecordModel) -> UrlRecordModel:
        """Insert a new UrlRecordModel into the data store.

        The check for an existing target, the check for a taken code and the
        insertion itself happen as a single atomic step, so two concurrent
        inserts for the same target never both succeed.

        Args:
            record (UrlRecordModel):
                The record to be inserted.

        Returns:
            UrlRecordModel: the stored record. If the target is already mapped,
            the existing record is returned and nothing is inserted.

        Raises:
            UrlRecordAlreadyExistsError:
                If a record with the same short code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, code: str) -> UrlRecordModel:
        """Retrieve a UrlRecordModel from the data store by its short code.

        Raises:
            UrlRecordNotFoundError:
                If no record with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find(self, target: str) -> UrlRecordModel | None:
        """Retrieve the UrlRecordModel mapped to an exact target URL, or None."""
        pass

    @abstractmethod
    def hit(self, code: str) -> UrlRecordModel:
        """Register a click on a short code.

        Increments `click_count` by exactly one and sets `last_accessed_at` to
        the current time as one atomic step. Concurrent hits never lose
        increments.

        Returns:
            UrlRecordModel: the record after the update.

        Raises:
            UrlRecordNotFoundError:
                If no record with the given short code exists. Nothing is mutated.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, code: str) -> None:
        """Remove the record for a short code, along with its target mapping.

        Raises:
            UrlRecordNotFoundError:
                If no record with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def all(self) -> list[UrlRecordModel]:
        """Return every record ordered by `created_at`, newest first."""
        pass

    @abstractmethod
    def snapshot(self) -> dict[str, UrlRecordModel]:
        """Return the whole current mapping as a new dict keyed by short code."""
        pass

    @abstractmethod
    def load(self, records: dict[str, UrlRecordModel]) -> None:
        """Replace the whole current mapping with `records`."""
        pass

    def healthcheck(self) -> bool:
        """Return True if the data store can currently serve requests

        Stores without an external dependency are always healthy.
        """
        return True
