"""
Readability and Structure Metrics

Computed directly from raw text, independent of the token stream.
"""

import re

from ..text.splitter import find_words, split_into_paragraphs, split_into_sentences

_VOWEL_CLUSTER_RE = re.compile(r"[aeiouy]{1,2}")
_SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_DIALOGUE_QUOTE_RE = re.compile('["“”]')


def count_syllables(word: str) -> int:
    """
    Estimate syllable count for a word.
    Uses a simple vowel-cluster heuristic.
    """
    word = word.lower()
    if len(word) <= 3:
        return 1

    # Drop silent endings and a leading consonantal y
    word = _SILENT_SUFFIX_RE.sub("", word, count=1)
    if word.startswith("y"):
        word = word[1:]

    return len(_VOWEL_CLUSTER_RE.findall(word)) or 1


def compute_vocab_level(text: str) -> float:
    """Flesch-Kincaid grade level, floored at 0."""
    sentences = split_into_sentences(text)
    words = find_words(text)
    if not sentences or not words:
        return 0.0

    total_syllables = sum(count_syllables(w) for w in words)
    avg_syllables = total_syllables / len(words)
    avg_words = len(words) / len(sentences)

    grade = 0.39 * avg_words + 11.8 * avg_syllables - 15.59
    return max(0.0, grade)


def compute_average_sentence_length(text: str) -> float:
    """Words per sentence."""
    sentences = split_into_sentences(text)
    if not sentences:
        return 0.0
    return len(find_words(text)) / len(sentences)


def compute_average_paragraph_length(text: str) -> float:
    """Words per blank-line separated paragraph."""
    paragraphs = split_into_paragraphs(text)
    if not paragraphs:
        return 0.0
    return len(find_words(text)) / len(paragraphs)


def compute_dialogue_frequency(text: str) -> float:
    """Quote pairs per 1000 characters."""
    if not text:
        return 0.0
    quotes = len(_DIALOGUE_QUOTE_RE.findall(text))
    return quotes / 2 / len(text) * 1000
