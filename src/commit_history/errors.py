"""Exceptions raised by commit-history."""


class CommitHistoryError(Exception):
    """Base class for commit-history errors."""


class InvalidArgumentError(CommitHistoryError, ValueError):
    """An operation was called with an argument it cannot accept.

    Raised before anything is mutated: a missing repository name, a missing
    commit message, or a negative history count.
    """


class ConfigError(CommitHistoryError):
    """A configuration or scenario file could not be loaded."""
