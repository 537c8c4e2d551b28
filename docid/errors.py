# docid/errors.py
"""
Error types raised by the ID generation pipeline.

Every error carries a ``kind`` so callers can decide whether to abort
or to log and carry on without looking at the message text.
"""

import enum


class ErrorKind(enum.Enum):
    FATAL = "fatal"
    RECOVERABLE = "recoverable"


class DocIdError(Exception):
    kind = ErrorKind.FATAL

    @property
    def recoverable(self) -> bool:
        return self.kind is ErrorKind.RECOVERABLE


class ConfigurationError(DocIdError, ValueError):
    """Invalid generator constructor arguments."""


class InputValidationError(DocIdError, ValueError):
    """Invalid arguments to ``generate_ids``."""


class CacheError(DocIdError):
    kind = ErrorKind.RECOVERABLE

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{self._prefix} {path}: {reason}")

    _prefix = "Word frequency cache error at"


class CacheLoadError(CacheError):
    _prefix = "Failed to load word frequencies from"


class CacheWriteError(CacheError):
    _prefix = "Failed to cache word frequencies to"
