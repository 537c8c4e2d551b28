# docid/__init__.py
"""
docid: readable, batch-unique document identifiers built from each
document's own distinctive words.
"""

from .corpus import CorpusStatistics
from .errors import (
    CacheError,
    CacheLoadError,
    CacheWriteError,
    ConfigurationError,
    DocIdError,
    ErrorKind,
    InputValidationError,
)
from .generator import DocumentIDGenerator
from .lexicon import Vocabulary
from .selection import CandidateWord, SelectionContext, WordSelector
from .tokenizer import TextNormalizer, Tokenizer, WordPair
from .tracing import BufferedTrace, LoggingTrace, NullTrace

__version__ = "0.1.0"

__all__ = [
    "BufferedTrace",
    "CacheError",
    "CacheLoadError",
    "CacheWriteError",
    "CandidateWord",
    "ConfigurationError",
    "CorpusStatistics",
    "DocIdError",
    "DocumentIDGenerator",
    "ErrorKind",
    "InputValidationError",
    "LoggingTrace",
    "NullTrace",
    "SelectionContext",
    "TextNormalizer",
    "Tokenizer",
    "Vocabulary",
    "WordPair",
    "WordSelector",
]
