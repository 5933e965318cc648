"""Normalize and tokenize raw text.

Every function here is pure and total: any string in, a deterministic
result out, no exceptions.
"""

import re
from typing import Iterable


# Single quotes: ‘ ’ ‛ ‚ ′ ʼ ＇ `
_SINGLE_QUOTES_RE = re.compile("[‘’‚‛′ʼ＇`]")
# Double quotes: “ ” „ ‟ ″ « » ＂
_DOUBLE_QUOTES_RE = re.compile("[“”„‟″«»＂]")

# One character in, one character out, so offsets survive normalization
_TEXT_REPLACEMENTS = str.maketrans({
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
    "—": "-",
    "–": "-",
})

_WORD_RUN_RE = re.compile(r"[a-z']+")
_ALPHA_TOKEN_RE = re.compile(r"^[a-z]+(?:'[a-z]+)?$")

# NLTK English stopwords (179 words)
STOPWORDS = frozenset([
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your", "yours",
    "yourself", "yourselves", "he", "him", "his", "himself", "she", "her", "hers", "herself",
    "it", "its", "itself", "they", "them", "their", "theirs", "themselves", "what", "which",
    "who", "whom", "this", "that", "these", "those", "am", "is", "are", "was", "were", "be",
    "been", "being", "have", "has", "had", "having", "do", "does", "did", "doing", "a", "an",
    "the", "and", "but", "if", "or", "because", "as", "until", "while", "of", "at", "by", "for",
    "with", "about", "against", "between", "into", "through", "during", "before", "after",
    "above", "below", "to", "from", "up", "down", "in", "out", "on", "off", "over", "under",
    "again", "further", "then", "once", "here", "there", "when", "where", "why", "how", "all",
    "any", "both", "each", "few", "more", "most", "other", "some", "such", "no", "nor", "not",
    "only", "own", "same", "so", "than", "too", "very", "s", "t", "can", "will", "just", "don",
    "should", "now", "d", "ll", "m", "o", "re", "ve", "y", "ain", "aren", "aren't", "couldn",
    "couldn't", "didn", "didn't", "doesn", "doesn't", "hadn", "hadn't", "hasn", "hasn't",
    "haven", "haven't", "isn", "isn't", "ma", "mightn", "mightn't", "mustn", "mustn't",
    "needn", "needn't", "shan", "shan't", "shouldn", "shouldn't", "wasn", "wasn't", "weren",
    "weren't", "won", "won't", "wouldn", "wouldn't", "don't", "should've", "you'd", "you'll",
    "you're", "you've", "she's", "it's", "that'll",
])


def normalize_quotes(text: str) -> str:
    """Map curly, guillemet and fullwidth quote variants to ASCII quotes."""
    text = _SINGLE_QUOTES_RE.sub("'", text)
    return _DOUBLE_QUOTES_RE.sub('"', text)


def normalize_text(text: str) -> str:
    """Canonicalize curly quotes and em/en dashes without shifting offsets."""
    return text.translate(_TEXT_REPLACEMENTS)


def words_only_lower(text: str) -> list[str]:
    """
    Extract lowercase word tokens.

    Tokens are runs of letters and apostrophes; leading and trailing
    apostrophes are stripped and empty tokens dropped.
    """
    runs = _WORD_RUN_RE.findall(normalize_quotes(text.lower()))
    tokens = (run.strip("'") for run in runs)
    return [t for t in tokens if t]


def alpha_tokens(tokens: Iterable[str]) -> list[str]:
    """Keep alphabetic words, allowing one internal contraction apostrophe."""
    return [t for t in tokens if _ALPHA_TOKEN_RE.match(t)]


def content_tokens(tokens: Iterable[str]) -> list[str]:
    """Keep alphabetic tokens that are not stopwords."""
    return [t for t in alpha_tokens(tokens) if t not in STOPWORDS]


def tokenize(text: str) -> list[str]:
    """Full analysis tokenization: lowercase alphabetic words."""
    return alpha_tokens(words_only_lower(text))


def get_ngrams(tokens: list[str], n: int) -> list[str]:
    """Space-joined contiguous n-grams."""
    return [" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]

