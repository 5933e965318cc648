"""Text normalization, tokenization and segmentation."""

from .normalize import (
    STOPWORDS,
    alpha_tokens,
    content_tokens,
    get_ngrams,
    normalize_quotes,
    normalize_text,
    tokenize,
    words_only_lower,
)
from .splitter import (
    SentenceSpan,
    find_words,
    sentence_spans,
    split_into_paragraphs,
    split_into_sentences,
)

__all__ = [
    "STOPWORDS",
    "alpha_tokens",
    "content_tokens",
    "get_ngrams",
    "normalize_quotes",
    "normalize_text",
    "tokenize",
    "words_only_lower",
    "SentenceSpan",
    "find_words",
    "sentence_spans",
    "split_into_paragraphs",
    "split_into_sentences",
]
