# docid/generator.py
"""
DocumentIDGenerator: short, readable, batch-unique IDs built from the
significant words of each document.

    >>> gen = DocumentIDGenerator(min_id_length=20)
    >>> gen.generate_ids(["Translate the following from French to English"])
    ['Translate_the_following']

Per batch:
 - build the frequency table from the documents, or load it from a cache
   file (falling back to a rebuild if the cache is unusable)
 - resolve the mean-frequency limit to the corpus mean if none was given
 - select words per document, or fall back to ``document_<index>``
 - make every ID unique by appending ``_2``, ``_3``, ...
"""

import logging
import math
import numbers
import os
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from .constants import MIN_ID_LENGTH, PLACEHOLDER_PREFIX
from .corpus import CorpusStatistics
from .errors import CacheLoadError, ConfigurationError, InputValidationError
from .lexicon import Vocabulary
from .selection import WordSelector, join_words
from .tokenizer import Tokenizer
from .tracing import LoggingTrace, NullTrace

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    # bool is an int subclass; NaN fails every comparison
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and not math.isnan(value)


class DocumentIDGenerator:
    def __init__(
        self,
        min_id_length: int = MIN_ID_LENGTH,
        max_mean_frequency: Optional[float] = None,
        verbose: bool = False,
        verbose_documents: Optional[Iterable[int]] = None,
        trace=None,
        tokenizer: Optional[Tokenizer] = None,
    ):
        if not _is_number(min_id_length) or min_id_length < 1 or math.isinf(min_id_length):
            raise ConfigurationError("min_id_length must be a positive number")
        if max_mean_frequency is not None and (not _is_number(max_mean_frequency) or max_mean_frequency < 0):
            raise ConfigurationError("max_mean_frequency must be None or a non-negative number")
        if not isinstance(verbose, bool):
            raise ConfigurationError("verbose must be a boolean")

        self.min_id_length = min_id_length
        self._configured_max_mean = max_mean_frequency
        self.max_mean_frequency = max_mean_frequency
        self.verbose = verbose
        self.verbose_documents = frozenset(verbose_documents or ())

        if trace is None:
            trace = LoggingTrace(self.verbose_documents) if verbose else NullTrace()
        self.trace = trace

        self.stats = CorpusStatistics(tokenizer, self.trace)
        self.corpus_mean: Optional[float] = None

    # --- Getters --- #

    @property
    def frequencies(self) -> Mapping[str, int]:
        return MappingProxyType(self.stats.frequencies)

    @property
    def vocabulary(self) -> Vocabulary:
        return self.stats.vocabulary

    # --- Batch --- #

    def generate_ids(self, documents: List[str], cache_path: Optional[str] = None) -> List[str]:
        """
        Generate one unique ID per document, index-aligned with ``documents``.

        Raises InputValidationError for a non-list, an empty list, non-string
        documents or a non-string ``cache_path``. Cache problems are logged
        and the table is rebuilt from ``documents``.
        """
        self._validate(documents, cache_path)

        self._resolve_frequencies(documents, cache_path)
        self._resolve_threshold()

        selector = WordSelector(self.min_id_length, self.max_mean_frequency, self.stats.frequencies, self.trace)

        ids: List[str] = []
        used_ids = set()
        for index, document in enumerate(documents):
            doc_id = self.generate_id(document, index, selector)

            # Ensure uniqueness among generated IDs
            unique_id = doc_id
            counter = 1
            while unique_id in used_ids:
                counter += 1
                unique_id = f"{doc_id}_{counter}"
            if unique_id != doc_id:
                self.trace.trace(index, f'ID "{doc_id}" already used, renamed to "{unique_id}"')

            used_ids.add(unique_id)
            ids.append(unique_id)

        return ids

    def generate_id(self, document: str, index: int, selector: WordSelector) -> str:
        """ID for a single document, before batch uniqueness is applied."""
        log = self.trace.trace
        log(index, f"=== GENERATING ID FOR DOCUMENT {index} ===")

        if not isinstance(document, str) or not document.strip():
            log(index, "Empty document, using placeholder")
            return f"{PLACEHOLDER_PREFIX}{index}"

        log(index, f'Document: "{document}"')
        pairs = self.stats.normalizer.word_pairs(document, index)
        if not pairs:
            return f"{PLACEHOLDER_PREFIX}{index}"

        ctx = selector.select(pairs, index)
        if not ctx.selected:
            return f"{PLACEHOLDER_PREFIX}{index}"

        final_id = join_words(ctx.selected)
        log(index, f'Final ID: "{final_id}"')
        return final_id

    def cache_frequencies(self, path) -> None:
        """
        Write the current frequency table to ``path``.

        Raises CacheWriteError; an explicit cache request is not silently dropped.
        """
        self.stats.cache(path)

    # --- Helpers --- #

    @staticmethod
    def _validate(documents, cache_path) -> None:
        if not isinstance(documents, (list, tuple)):
            raise InputValidationError("documents must be a list")
        if len(documents) == 0:
            raise InputValidationError("documents list cannot be empty")
        if not all(isinstance(doc, str) for doc in documents):
            raise InputValidationError("all documents must be strings")
        if cache_path is not None and not isinstance(cache_path, str):
            raise InputValidationError("cache_path must be None or a string")

    def _resolve_frequencies(self, documents: List[str], cache_path: Optional[str]) -> None:
        self.stats.reset()
        if cache_path and not os.path.exists(cache_path):
            logger.debug("No word frequency cache at %s yet, building from documents", cache_path)
        elif cache_path:
            try:
                self.stats.load(cache_path)
                return
            except CacheLoadError as e:
                logger.warning("%s. Falling back to building word frequencies from documents.", e)
                self.stats.reset()
        self.stats.build(documents)

    def _resolve_threshold(self) -> None:
        self.max_mean_frequency = self._configured_max_mean
        if len(self.stats) == 0:
            self.corpus_mean = None
            return

        self.corpus_mean = self.stats.mean()
        if self._configured_max_mean is None:
            self.max_mean_frequency = self.corpus_mean
            logger.info("Using corpus mean word frequency: %s", self.corpus_mean)
        else:
            logger.info(
                "Corpus mean word frequency: %.2f, using max_mean_frequency: %s",
                self.corpus_mean,
                self._configured_max_mean,
            )
