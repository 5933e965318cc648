"""Lexical diversity: type-token ratio and MATTR."""

from collections import Counter
from dataclasses import dataclass, asdict

DEFAULT_WINDOW = 500


@dataclass
class LexicalDiversity:
    """Vocabulary diversity of a token stream."""
    mattr_500: float = 0.0
    type_token_ratio: float = 0.0
    unique_words: int = 0
    total_words: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def type_token_ratio(tokens: list[str]) -> float:
    """Unique tokens / total tokens (0 for an empty stream)."""
    if not tokens:
        return 0.0
    return len(set(tokens)) / len(tokens)


def compute_mattr(tokens: list[str], window: int = DEFAULT_WINDOW) -> float:
    """
    Moving-Average Type-Token Ratio.

    Averages unique/window over every window position. Streams shorter than
    the window fall back to the plain type-token ratio. A rolling count of
    the tokens in the window keeps this O(n).
    """
    if window < 1:
        raise ValueError(f"MATTR window must be at least 1, got {window}")

    n = len(tokens)
    if n == 0:
        return 0.0
    if n < window:
        return type_token_ratio(tokens)

    counts = Counter(tokens[:window])
    unique = len(counts)
    unique_sum = unique

    for i in range(window, n):
        leaving = tokens[i - window]
        counts[leaving] -= 1
        if counts[leaving] == 0:
            del counts[leaving]
            unique -= 1

        entering = tokens[i]
        if counts[entering] == 0:
            unique += 1
        counts[entering] += 1

        unique_sum += unique

    window_count = n - window + 1
    return unique_sum / (window_count * window)


def compute_lexical_diversity(tokens: list[str], window: int = DEFAULT_WINDOW) -> LexicalDiversity:
    """MATTR, TTR and vocabulary size for a token stream."""
    if not tokens:
        return LexicalDiversity()

    unique_words = len(set(tokens))
    return LexicalDiversity(
        mattr_500=compute_mattr(tokens, window),
        type_token_ratio=unique_words / len(tokens),
        unique_words=unique_words,
        total_words=len(tokens),
    )
