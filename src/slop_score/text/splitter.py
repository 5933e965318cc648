"""Split text into sentence spans, sentences and paragraphs."""

import re

SentenceSpan = tuple[int, int]

# Shortest run ending in terminal punctuation; [^.!?] also crosses newlines
_SENTENCE_RUN_RE = re.compile(r"[^.!?]*[.!?]")
_SENTENCE_BREAK_RE = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")
_WORD_RE = re.compile(r"\b\w+\b", re.ASCII)


def sentence_spans(text: str) -> list[SentenceSpan]:
    """
    Segment text into half-open (start, end) sentence spans.

    Each span ends at a single '.', '!' or '?'. Trailing unterminated text
    becomes a final span, so the spans always tile [0, len(text)).
    """
    spans: list[SentenceSpan] = []
    last_end = 0

    for match in _SENTENCE_RUN_RE.finditer(text):
        spans.append((match.start(), match.end()))
        last_end = match.end()

    if last_end < len(text):
        spans.append((last_end, len(text)))

    return spans


def split_into_sentences(text: str) -> list[str]:
    """Split on runs of terminal punctuation, dropping blank pieces."""
    return [s for s in _SENTENCE_BREAK_RE.split(text) if s.strip()]


def split_into_paragraphs(text: str) -> list[str]:
    """Split on blank lines, dropping blank pieces."""
    return [p for p in _PARAGRAPH_BREAK_RE.split(text) if p.strip()]


def find_words(text: str) -> list[str]:
    """Word-character runs, as used by the readability metrics."""
    return _WORD_RE.findall(text)
