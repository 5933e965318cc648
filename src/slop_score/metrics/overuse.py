"""
N-gram Overuse

Ranks a document's n-grams by how much more often they occur than in the
human baseline, and scores words against the word frequency table.
"""

from collections import Counter
from dataclasses import dataclass, asdict
from typing import Mapping, Optional

from ..data.baseline import smallest_positive
from ..data.wordfreq import WordFrequencyTable

EPSILON = 1e-12

# Contractions whose 's is not a possessive
KNOWN_CONTRACTIONS_S = frozenset([
    "it's", "that's", "what's", "who's", "he's", "she's",
    "there's", "here's", "where's", "when's", "why's", "how's",
    "let's",
])


@dataclass(frozen=True)
class OveruseRow:
    """One ranked n-gram."""
    phrase: str
    ratio: float
    count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class WordOveruse:
    """One over-represented word."""
    word: str
    ratio: float
    count: int

    def to_dict(self) -> dict:
        return asdict(self)


def rank_overuse_with_counts(
    ngrams: list[str],
    baseline: Mapping[str, float],
    top_k: int = 40,
    floor: Optional[float] = None,
) -> list[OveruseRow]:
    """
    Rank n-grams by model frequency over baseline probability.

    N-grams absent from the baseline are scored against ``floor``, which
    defaults to the smallest positive probability in the baseline. Rows are
    sorted by ratio descending, then phrase ascending, and cut to top_k.
    """
    if not ngrams:
        return []

    counts = Counter(ngrams)
    total = sum(counts.values())
    if floor is None:
        floor = smallest_positive(baseline)

    rows = []
    for phrase, count in counts.items():
        model_freq = count / total
        human_freq = baseline.get(phrase, floor)
        rows.append(OveruseRow(phrase, model_freq / (human_freq + EPSILON), count))

    rows.sort(key=lambda row: (-row.ratio, row.phrase))
    return rows[:top_k]


def repetition_score(
    bigram_rows: list[OveruseRow],
    trigram_rows: list[OveruseRow],
    content_word_count: int,
) -> float:
    """Occurrences of the top-ranked n-grams per 1000 content words."""
    if content_word_count <= 0:
        return 0.0
    top_count = sum(r.count for r in bigram_rows) + sum(r.count for r in trigram_rows)
    return top_count / content_word_count * 1000


def merge_possessives(word_counts: Mapping[str, int]) -> Counter:
    """Fold possessive 's into the base word, keeping known contractions."""
    merged: Counter = Counter()
    for word, count in word_counts.items():
        if word.endswith("'s") and word not in KNOWN_CONTRACTIONS_S and len(word) > 2:
            merged[word[:-2]] += count
        else:
            merged[word] += count
    return merged


def rank_overused_words(
    tokens: list[str],
    wordfreq: WordFrequencyTable,
    min_ratio: float = 1.5,
    min_count: int = 2,
    limit: int = 100,
) -> list[WordOveruse]:
    """
    Words used far more often than their corpus frequency predicts.

    Words unknown to the frequency table are skipped.
    """
    word_counts = merge_possessives(Counter(tokens))
    total = sum(word_counts.values())
    if total == 0:
        return []

    rows = []
    for word, count in word_counts.items():
        baseline = wordfreq.frequency(word)
        if baseline <= 0:
            continue
        ratio = (count / total) / baseline
        if ratio > min_ratio and count >= min_count:
            rows.append(WordOveruse(word, ratio, count))

    rows.sort(key=lambda row: (-row.ratio, row.word))
    return rows[:limit]
