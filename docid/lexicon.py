# docid/lexicon.py
"""
Vocabulary of lemma-eligible lowercase words seen in a batch.

Words are collected in a plain set while the batch is being read, then
frozen into a marisa trie for the lookups done during lemmatization.
"""

from typing import Iterable, Iterator, Optional, Set

import marisa_trie


class Vocabulary:
    def __init__(self, words: Optional[Iterable[str]] = None):
        self._pending: Set[str] = set(words or ())
        self._trie: Optional[marisa_trie.Trie] = None
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, word: str) -> None:
        if self._frozen:
            raise RuntimeError("Vocabulary is frozen; start a new batch to add words.")
        self._pending.add(word)

    def update(self, words: Iterable[str]) -> None:
        for word in words:
            self.add(word)

    def freeze(self) -> "Vocabulary":
        """
        Build the trie. No words can be added afterwards.
        """
        if not self._frozen:
            if self._pending:
                self._trie = marisa_trie.Trie(self._pending)
            self._pending = set()
            self._frozen = True
        return self

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        if self._frozen:
            return self._trie is not None and word in self._trie
        return word in self._pending

    def __len__(self) -> int:
        if self._frozen:
            return len(self._trie) if self._trie is not None else 0
        return len(self._pending)

    def __iter__(self) -> Iterator[str]:
        if self._frozen:
            return iter(self._trie.keys() if self._trie is not None else ())
        return iter(sorted(self._pending))

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"Vocabulary({len(self)} words, {state})"
