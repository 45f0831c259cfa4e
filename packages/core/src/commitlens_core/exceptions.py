"""Exceptions raised by commitlens.

Both concrete errors are fatal: they abort the whole run and are never caught
inside the core. The CLI converts them into a non-zero exit with a message.
"""


class CommitLensError(Exception):
    """Base exception for all commitlens errors."""


class ConfigurationError(CommitLensError):
    """The invocation context or configuration is missing something required."""


class DataError(CommitLensError):
    """GitHub returned data the summarizer cannot work with."""
