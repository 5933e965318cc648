"""Slop index: lexicon hits per 1000 tokens."""

from collections import Counter
from dataclasses import dataclass
from typing import Optional

from ..data.lexicon import SlopLexicon


@dataclass
class SlopIndexResult:
    """Word and trigram hit rates, with optional per-phrase hit counts."""
    word_score: float = 0.0
    trigram_score: float = 0.0
    word_hits: Optional[list[tuple[str, int]]] = None
    trigram_hits: Optional[list[tuple[str, int]]] = None


def _sorted_hits(counts: Counter) -> list[tuple[str, int]]:
    # sorted() is stable and Counter keeps first-occurrence order
    return sorted(counts.items(), key=lambda item: -item[1])


def compute_slop_index(
    tokens: list[str],
    lexicon: SlopLexicon,
    track_hits: bool = False,
) -> SlopIndexResult:
    """
    Count lexicon hits in a token stream.

    word_score is 1000 * (tokens in the word lexicon) / len(tokens);
    trigram_score is 1000 * (3-token windows in the trigram lexicon) /
    len(tokens). With track_hits, per-phrase counts are returned sorted by
    count descending, ties in first-occurrence order.
    """
    n = len(tokens)
    if n == 0:
        if track_hits:
            return SlopIndexResult(word_hits=[], trigram_hits=[])
        return SlopIndexResult()

    word_hits: Counter = Counter()
    trigram_hits: Counter = Counter()

    if lexicon.words:
        for token in tokens:
            if token in lexicon.words:
                word_hits[token] += 1

    if lexicon.trigrams:
        for i in range(n - 2):
            trigram = f"{tokens[i]} {tokens[i + 1]} {tokens[i + 2]}"
            if trigram in lexicon.trigrams:
                trigram_hits[trigram] += 1

    result = SlopIndexResult(
        word_score=1000 * sum(word_hits.values()) / n,
        trigram_score=1000 * sum(trigram_hits.values()) / n,
    )
    if track_hits:
        result.word_hits = _sorted_hits(word_hits)
        result.trigram_hits = _sorted_hits(trigram_hits)
    return result
