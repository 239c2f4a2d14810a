"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    UrlRecordNotFoundError:
        Raised when a short code has no record in the data store.

    UrlRecordAlreadyExistsError:
        Raised when attempting to insert a record whose short code is already taken.

    DataStoreError:
        Raised when the data store is unavailable (e.g., connection issues, I/O failures, corrupt snapshots).

Example:
    >>> from clickshortener.dao.exceptions import UrlRecordNotFoundError
    >>> raise UrlRecordNotFoundError("Short URL with code 'aB3xY9' not found.")
    Traceback (most recent call last):
        ...
    clickshortener.dao.exceptions.UrlRecordNotFoundError: Short URL with code 'aB3xY9' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class UrlRecordNotFoundError(DAOError):
    """Exception raised when a UrlRecordModel is not found in the data store."""

    pass


class UrlRecordAlreadyExistsError(DAOError):
    """Exception raised when a short code is already taken in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, unreadable or unwritable snapshot files, etc.
    """

    pass
