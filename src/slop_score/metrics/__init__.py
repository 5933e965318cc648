"""
Slop Metrics

Lexicon hit rates, n-gram overuse, lexical diversity, readability and the
composite slop score.
"""

from .slop_index import SlopIndexResult, compute_slop_index
from .overuse import (
    OveruseRow,
    WordOveruse,
    merge_possessives,
    rank_overuse_with_counts,
    rank_overused_words,
    repetition_score,
)
from .diversity import LexicalDiversity, compute_lexical_diversity, compute_mattr, type_token_ratio
from .readability import (
    compute_average_paragraph_length,
    compute_average_sentence_length,
    compute_dialogue_frequency,
    compute_vocab_level,
    count_syllables,
)
from .composite import compute_slop_score

__all__ = [
    # Slop index
    "SlopIndexResult",
    "compute_slop_index",
    # Overuse
    "OveruseRow",
    "WordOveruse",
    "merge_possessives",
    "rank_overuse_with_counts",
    "rank_overused_words",
    "repetition_score",
    # Diversity
    "LexicalDiversity",
    "compute_lexical_diversity",
    "compute_mattr",
    "type_token_ratio",
    # Readability
    "compute_average_paragraph_length",
    "compute_average_sentence_length",
    "compute_dialogue_frequency",
    "compute_vocab_level",
    "count_syllables",
    # Composite
    "compute_slop_score",
]
