# docid/tracing.py
"""
Trace sinks for verbose ID generation output.

The generator reports preprocessing steps, selection decisions and
removal/restoration events through ``trace(doc_index, message, **fields)``.
A sink decides what to keep. ``doc_index`` is ``None`` for corpus-level
events that do not belong to any single document.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

trace_logger = logging.getLogger("docid.trace")


class NullTrace:
    """Drops every trace line."""

    def enabled_for(self, doc_index: Optional[int]) -> bool:
        return False

    def trace(self, doc_index: Optional[int], message: str, **fields: Any) -> None:
        pass


class _FilteredTrace:
    """
    Base for sinks restricted to an allow-list of document indices.

    An empty allow-list traces every document and every corpus-level event.
    A non-empty one traces only the listed documents.
    """

    def __init__(self, verbose_documents: Optional[Iterable[int]] = None):
        self.verbose_documents = frozenset(verbose_documents or ())

    def enabled_for(self, doc_index: Optional[int]) -> bool:
        if not self.verbose_documents:
            return True
        return doc_index is not None and doc_index in self.verbose_documents

    def trace(self, doc_index: Optional[int], message: str, **fields: Any) -> None:
        if self.enabled_for(doc_index):
            self.emit(doc_index, message, fields)

    def emit(self, doc_index: Optional[int], message: str, fields: Dict[str, Any]) -> None:
        raise NotImplementedError


class LoggingTrace(_FilteredTrace):
    """Sends trace lines to the ``docid.trace`` logger at DEBUG level."""

    def __init__(self, verbose_documents: Optional[Iterable[int]] = None, logger: Optional[logging.Logger] = None):
        super().__init__(verbose_documents)
        self.logger = logger or trace_logger

    def emit(self, doc_index, message, fields):
        if fields:
            detail = " ".join(f"{k}={v!r}" for k, v in fields.items())
            message = f"{message} [{detail}]"
        if doc_index is None:
            self.logger.debug("%s", message)
        else:
            self.logger.debug("[doc %d] %s", doc_index, message)


class BufferedTrace(_FilteredTrace):
    """Keeps trace lines in memory as ``(doc_index, message, fields)``."""

    def __init__(self, verbose_documents: Optional[Iterable[int]] = None):
        super().__init__(verbose_documents)
        self.records: List[Tuple[Optional[int], str, Dict[str, Any]]] = []

    def emit(self, doc_index, message, fields):
        self.records.append((doc_index, message, dict(fields)))

    def messages(self, doc_index: Optional[int] = None) -> List[str]:
        return [m for d, m, _ in self.records if doc_index is None or d == doc_index]

    def clear(self) -> None:
        self.records.clear()
