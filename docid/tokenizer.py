# docid/tokenizer.py
"""
Tokenizer module.

Raw document text is split into candidate words, noise is filtered out
(numbers, stopwords, short words that are not acronyms) and the surviving
words are lemmatized against the vocabulary of the current batch.

Lemmatization uses a fixed table of irregular forms and
a priority-ordered list of suffixes, accepted only when the resulting
root is itself a word of the corpus.
"""

from typing import Iterable, List, NamedTuple, Optional

from nltk.tokenize import WhitespaceTokenizer

from .constants import (
    IRREGULAR_MAPPINGS,
    MIN_LEMMA_LENGTH,
    MIN_WORD_LENGTH,
    NON_WORD_RE,
    NUMBER_RE,
    STOPWORDS,
    SUFFIXES,
)
from .lexicon import Vocabulary
from .tracing import NullTrace


class WordPair(NamedTuple):
    original: str
    lemmatized: str


class Tokenizer:
    """
    The Tokenizer class.

    Responsibilities:
      - Replace punctuation and symbols with spaces, keeping accented Latin letters.
      - Split on whitespace.
      - Exclude numbers, stopwords and words shorter than ``min_word_length``.
      - Exclude two-letter words unless they are written as acronyms ("AI", "ML").

    Parameters:
        custom_stopwords : Optional[Iterable[str]]
            Overrides the default stopword set.
        min_word_length : int
            Shortest lowercase word that is kept.
    """

    def __init__(self, custom_stopwords: Optional[Iterable[str]] = None, min_word_length: int = MIN_WORD_LENGTH):
        self.stopwords = frozenset(custom_stopwords) if custom_stopwords is not None else STOPWORDS
        self.min_word_length = min_word_length
        self._splitter = WhitespaceTokenizer()

    def split(self, text: str) -> List[str]:
        if not text:
            return []
        return self._splitter.tokenize(NON_WORD_RE.sub(" ", text))

    @staticmethod
    def is_acronym(word: str) -> bool:
        return len(word) == 2 and word == word.upper()

    def keep(self, word: str) -> bool:
        lower = word.lower()
        if len(lower) < self.min_word_length:
            return False
        if NUMBER_RE.search(lower):
            return False
        if lower in self.stopwords:
            return False
        # Two-letter words survive only as acronyms
        if len(word) == 2 and not self.is_acronym(word):
            return False
        return True

    def tokenize(self, text: str) -> List[str]:
        """
        Return the words of ``text`` that pass filtering, in document order
        and with their original casing.
        """
        return [word for word in self.split(text) if self.keep(word)]

    def build_vocabulary(self, documents: Iterable[str]) -> Vocabulary:
        """
        Collect the lowercase form of every kept word across ``documents``.
        The vocabulary is returned open so a caller can still add to it.
        """
        vocabulary = Vocabulary()
        for doc in documents:
            vocabulary.update(word.lower() for word in self.tokenize(doc))
        return vocabulary


class TextNormalizer:
    """
    Tokenizes and lemmatizes text against a fixed vocabulary.

    Lemmatization only happens once the vocabulary holds at least one word;
    before that, lowercase words are returned unchanged.
    """

    def __init__(self, vocabulary: Vocabulary, tokenizer: Optional[Tokenizer] = None, trace=None):
        self.vocabulary = vocabulary
        self.tokenizer = tokenizer or Tokenizer()
        self.trace = trace or NullTrace()

    def lemmatize(self, word: str, doc_index: Optional[int] = None) -> str:
        """
        Map a lowercase word to its root, or return it unchanged.

          1. Irregular table, when the mapped form is in the vocabulary.
          2. First suffix in ``SUFFIXES`` whose stem (3+ chars) is in the vocabulary.
          3. ``-ies`` to ``-y`` for words longer than 5 characters.
        """
        vocabulary = self.vocabulary

        mapped = IRREGULAR_MAPPINGS.get(word)
        if mapped and mapped in vocabulary:
            self.trace.trace(doc_index, f'Irregular lemmatized "{word}" -> "{mapped}"')
            return mapped

        for suffix in SUFFIXES:
            if word.endswith(suffix) and len(word) - len(suffix) >= MIN_LEMMA_LENGTH:
                stem = word[: -len(suffix)]
                if stem in vocabulary:
                    self.trace.trace(doc_index, f'Suffix lemmatized "{word}" -> "{stem}"', suffix=suffix)
                    return stem

        if word.endswith("ies") and len(word) > 5:
            stem = word[:-3] + "y"
            if stem in vocabulary:
                self.trace.trace(doc_index, f'Special lemmatized "{word}" -> "{stem}"')
                return stem

        return word

    def _normalize(self, word: str, doc_index: Optional[int]) -> str:
        lower = word.lower()
        if len(self.vocabulary) > 0:
            return self.lemmatize(lower, doc_index)
        return lower

    def lemmas_only(self, text: str, doc_index: Optional[int] = None) -> List[str]:
        """Lemmas of the kept words of ``text``; used to count frequencies."""
        lemmas = [self._normalize(word, doc_index) for word in self.tokenizer.tokenize(text)]
        self.trace.trace(doc_index, "Preprocessed words", words=lemmas)
        return lemmas

    def word_pairs(self, text: str, doc_index: Optional[int] = None) -> List[WordPair]:
        """Kept words of ``text`` with their original casing and their lemma."""
        self.trace.trace(doc_index, f'=== PREPROCESSING TEXT: "{text}" ===')
        pairs = [WordPair(word, self._normalize(word, doc_index)) for word in self.tokenizer.tokenize(text)]
        if self.trace.enabled_for(doc_index):
            self.trace.trace(doc_index, "Preprocessed word pairs", pairs=[tuple(p) for p in pairs])
        return pairs
