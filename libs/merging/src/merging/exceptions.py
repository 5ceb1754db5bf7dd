"""Exceptions for the merging engine."""


class MergingError(Exception):
    """Base exception for merging engine errors."""

    pass


class GoldenRecordNotFoundError(MergingError, RuntimeError):
    """Raised when a golden record id is unknown to the store.

    Ids are only ever handed out by the store itself, so this indicates a bug
    in the caller and is not recoverable.
    """

    pass


class MergeLockError(MergingError):
    """Base exception for merge lock errors."""

    pass


class DuplicateMergeLockError(MergeLockError, ValueError):
    """Raised when a source would end up in more than one merge lock."""

    pass
