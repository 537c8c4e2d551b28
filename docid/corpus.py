# docid/corpus.py
"""
Corpus statistics: document frequency per lemma.

The table maps each lemma to the number of distinct documents that contain
it at least once. It is either built from the documents of a batch or
loaded from a two-column ``word,count`` CSV written by an earlier run.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Optional

import numpy as np
from nltk import FreqDist

from .constants import CSV_HEADER, LARGE_DATASET_THRESHOLD
from .errors import CacheLoadError, CacheWriteError
from .lexicon import Vocabulary
from .tokenizer import TextNormalizer, Tokenizer
from .tracing import NullTrace

logger = logging.getLogger(__name__)


class CorpusStatistics:
    def __init__(self, tokenizer: Optional[Tokenizer] = None, trace=None):
        self.tokenizer = tokenizer or Tokenizer()
        self.trace = trace or NullTrace()
        self.reset()

    def reset(self) -> None:
        """Forget the table and vocabulary of any previous batch."""
        self.frequencies: FreqDist = FreqDist()
        self.vocabulary = Vocabulary().freeze()
        self.normalizer = TextNormalizer(self.vocabulary, self.tokenizer, self.trace)

    def _use_vocabulary(self, vocabulary: Vocabulary) -> None:
        self.vocabulary = vocabulary.freeze()
        self.normalizer = TextNormalizer(self.vocabulary, self.tokenizer, self.trace)

    # --- Build --- #

    def build(self, documents: Iterable[str]) -> FreqDist:
        """
        Build the vocabulary from every document, then count, for each lemma,
        how many documents contain it.
        """
        documents = list(documents)
        self.trace.trace(None, "=== BUILDING WORD COUNTS ===")

        self._use_vocabulary(self.tokenizer.build_vocabulary(documents))
        self.trace.trace(None, f"Vocabulary built with {len(self.vocabulary)} unique words")

        counts = FreqDist()
        for doc in documents:
            # distinct lemmas in first-seen order; a set would make cache order vary per run
            counts.update(list(dict.fromkeys(self.normalizer.lemmas_only(doc))))
        self.frequencies = counts

        if self.trace.enabled_for(None):
            self.trace.trace(None, "Word counts built", counts=list(counts.items()))
        return counts

    # --- Disk --- #

    def load(self, path) -> FreqDist:
        """
        Load a ``word,count`` CSV and rebuild the vocabulary from its words.

        Raises CacheLoadError if the file cannot be read (see ``read_counts``)
        or holds no valid row at all.
        """
        counts = read_counts(path)
        if not counts:
            raise CacheLoadError(path, "No valid word counts found")

        vocabulary = Vocabulary()
        vocabulary.update(counts.keys())
        self._use_vocabulary(vocabulary)
        self.frequencies = counts

        self.trace.trace(None, f"Loaded {len(counts)} word counts and built vocabulary from cache")
        return counts

    def cache(self, path) -> Path:
        """
        Write the table as ``word,count`` lines under a ``word,count`` header.

        Tables below LARGE_DATASET_THRESHOLD entries are written by descending
        count; larger ones in table order.
        """
        if not isinstance(path, (str, os.PathLike)) or not str(path).strip():
            raise CacheWriteError(path, "file path must be a non-empty string")
        if len(self.frequencies) == 0:
            raise CacheWriteError(path, "No word counts to cache")

        path = Path(path)
        if len(self.frequencies) < LARGE_DATASET_THRESHOLD:
            rows = self.frequencies.most_common()
        else:
            rows = self.frequencies.items()

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf8", newline="\n") as f:
                f.write(CSV_HEADER + "\n")
                for word, count in rows:
                    f.write(f"{word},{count}\n")
        except OSError as e:
            raise CacheWriteError(path, str(e)) from e

        logger.debug("Cached %d word counts to %s", len(self.frequencies), path)
        return path

    # --- Getters --- #

    def get(self, lemma: str) -> int:
        return self.frequencies.get(lemma, 0)

    def as_dict(self) -> Dict[str, int]:
        return dict(self.frequencies)

    def total(self) -> int:
        return self.frequencies.N()

    def mean(self) -> float:
        """Mean document frequency over all lemmas, 0.0 for an empty table."""
        if len(self.frequencies) == 0:
            return 0.0
        counts = np.fromiter(self.frequencies.values(), dtype=np.int64, count=len(self.frequencies))
        return float(np.mean(counts, dtype=np.float64))

    def __len__(self) -> int:
        return len(self.frequencies)

    def __contains__(self, lemma: object) -> bool:
        return lemma in self.frequencies


def read_counts(path) -> FreqDist:
    """
    Parse a ``word,count`` CSV. Malformed rows are skipped with a warning;
    for a repeated word the last row wins.

    Raises CacheLoadError if the file is missing, unreadable, empty, or has
    no line after the header.
    """
    path = Path(path)
    if not path.is_file():
        raise CacheLoadError(path, f"File does not exist: {path}")
    try:
        content = path.read_text(encoding="utf8")
    except (OSError, UnicodeDecodeError) as e:
        raise CacheLoadError(path, str(e)) from e

    if not content.strip():
        raise CacheLoadError(path, "File is empty")

    lines = content.splitlines()
    if len(lines) < 2:
        raise CacheLoadError(path, "File must have at least a header and one data line")

    counts = FreqDist()
    # line numbers are 1-based and include the header
    for lineno, raw in enumerate(lines[1:], start=2):
        line = raw.strip()
        if not line:
            continue
        parts = line.split(",")
        if len(parts) != 2:
            logger.warning('Skipping malformed line %d in %s: "%s"', lineno, path, line)
            continue
        word, count_str = parts
        try:
            count = int(count_str.strip())
        except ValueError:
            count = -1
        if count < 0:
            logger.warning('Skipping line %d in %s with invalid count: "%s"', lineno, path, count_str)
            continue
        counts[word] = count
    return counts
