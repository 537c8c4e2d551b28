# docid/selection.py
"""
Word selection for a single document.

Words are taken in document order until the joined ID is long enough and
the mean document frequency of the chosen words is low enough. Whenever
the mean goes over the limit, the most common word chosen so far is set
aside. If the ID ends up too short, set-aside words come back rarest-first,
each at its original place in the document, until the length is reached.
"""

import bisect
import math
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Set

from .tokenizer import WordPair
from .tracing import NullTrace


@dataclass
class CandidateWord:
    word: str
    lemmatized: str
    frequency: int
    position: int

    def describe(self) -> str:
        return f'"{self.word}" (lemmatized: "{self.lemmatized}", count: {self.frequency}, position: {self.position})'


@dataclass
class SelectionContext:
    """Mutable state of one document's selection."""

    selected: List[CandidateWord] = field(default_factory=list)
    removed: List[CandidateWord] = field(default_factory=list)
    used_lemmas: Set[str] = field(default_factory=set)
    total_frequency: int = 0
    # length of the selected words joined with underscores
    id_length: int = 0

    @property
    def length(self) -> int:
        return self.id_length

    @property
    def mean_frequency(self) -> float:
        if not self.selected:
            return 0.0
        return self.total_frequency / len(self.selected)

    def _grow(self, candidate: CandidateWord) -> None:
        # called after the candidate joined ``selected``
        self.id_length += len(candidate.word) + (1 if len(self.selected) > 1 else 0)
        self.used_lemmas.add(candidate.lemmatized)
        self.total_frequency += candidate.frequency

    def add(self, candidate: CandidateWord) -> None:
        self.selected.append(candidate)
        self._grow(candidate)

    def remove_highest(self) -> Optional[CandidateWord]:
        """Move the most frequent selected word to ``removed``; ties go to the earliest."""
        if not self.selected:
            return None
        index = max(range(len(self.selected)), key=lambda i: self.selected[i].frequency)
        candidate = self.selected.pop(index)
        self.removed.append(candidate)
        self.used_lemmas.discard(candidate.lemmatized)
        self.total_frequency -= candidate.frequency
        self.id_length -= len(candidate.word) + (1 if self.selected else 0)
        return candidate

    def restore(self, candidate: CandidateWord) -> int:
        """Put ``candidate`` back in document order and return where it went."""
        index = bisect.bisect_left(self.selected, candidate.position, key=lambda c: c.position)
        self.selected.insert(index, candidate)
        self._grow(candidate)
        return index

    def words(self) -> List[str]:
        return [c.word for c in self.selected]


class WordSelector:
    """
    Parameters
    ----------
    min_id_length : int
        Target length of the joined ID.
    max_mean_frequency : Optional[float]
        Highest allowed mean document frequency; None disables the limit.
    frequencies : Mapping[str, int]
        Document frequency per lemma. Missing lemmas count as 0.
    """

    def __init__(self, min_id_length: int, max_mean_frequency: Optional[float], frequencies: Mapping[str, int], trace=None):
        self.min_id_length = min_id_length
        self.max_mean_frequency = max_mean_frequency
        self.frequencies = frequencies
        self.trace = trace or NullTrace()

    @property
    def threshold(self) -> float:
        return math.inf if self.max_mean_frequency is None else self.max_mean_frequency

    def select(self, pairs: Sequence[WordPair], doc_index: Optional[int] = None) -> SelectionContext:
        ctx = SelectionContext()
        log = self.trace.trace
        # per-word messages are only formatted for traced documents
        verbose = self.trace.enabled_for(doc_index)
        log(doc_index, "Starting word selection...")

        for position, pair in enumerate(pairs):
            if pair.lemmatized in ctx.used_lemmas:
                if verbose:
                    log(doc_index, f'Skipped duplicate word "{pair.original}" (lemmatized: "{pair.lemmatized}") at position {position}')
                continue

            candidate = CandidateWord(pair.original, pair.lemmatized, self.frequencies.get(pair.lemmatized, 0), position)
            ctx.add(candidate)

            mean = ctx.mean_frequency
            has_min_length = ctx.length >= self.min_id_length
            below_threshold = mean <= self.threshold
            if verbose:
                log(doc_index, f"Added {candidate.describe()} to ID array")
                log(
                    doc_index,
                    f"Current length: {ctx.length}, Mean word count: {mean:.2f} (threshold: {self.max_mean_frequency})",
                    min_length_met=has_min_length,
                    mean_below_threshold=below_threshold,
                )

            if has_min_length and below_threshold:
                log(doc_index, "Both conditions met, stopping")
                break

            if not below_threshold:
                removed = ctx.remove_highest()
                if removed is not None and verbose:
                    log(doc_index, f"Removed {removed.describe()} - highest count")

        self._restore_for_length(ctx, doc_index)
        return ctx

    def _restore_for_length(self, ctx: SelectionContext, doc_index: Optional[int]) -> None:
        if ctx.length >= self.min_id_length or not ctx.removed:
            return
        log = self.trace.trace
        verbose = self.trace.enabled_for(doc_index)
        if verbose:
            log(doc_index, f"=== ID LENGTH BELOW MINIMUM ({ctx.length} < {self.min_id_length}) ===")

        ctx.removed.sort(key=lambda c: c.frequency)
        if verbose:
            log(doc_index, "Removed words sorted by count", removed=[f"{c.word}({c.frequency})" for c in ctx.removed])

        for candidate in ctx.removed:
            if candidate.lemmatized in ctx.used_lemmas:
                if verbose:
                    log(doc_index, f'Skipped adding back duplicate word "{candidate.word}" (lemmatized: "{candidate.lemmatized}")')
                continue
            index = ctx.restore(candidate)
            if verbose:
                log(doc_index, f"Added back {candidate.describe()} at index {index}, new length: {ctx.length}")
            if ctx.length >= self.min_id_length:
                log(doc_index, "Minimum length requirement met, stopping")
                break


def join_words(candidates: Sequence[CandidateWord]) -> str:
    return "_".join(c.word for c in sorted(candidates, key=lambda c: c.position))
