"""
Contrast Pattern Detector

Finds "not X, but Y" contrast constructions in two stages:

1. Surface regexes run directly on the normalized text.
2. Syntactic regexes run on a POS-tagged stream (verbs replaced by a
   placeholder), with matches mapped back to raw offsets through the
   stream's piece table. Skipped when no tagger is available.

Each match is widened to the sentences it touches, and matches sharing a
sentence are merged into one.
"""

import re
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field, asdict
from typing import Optional

from ..text.normalize import normalize_text
from ..text.splitter import SentenceSpan, sentence_spans
from .patterns import STAGE1_PATTERNS, STAGE2_PATTERNS
from .pos import PosTagger, PosType, tag_stream_with_offsets


@dataclass(frozen=True)
class ContrastMatch:
    """One detected construction and the sentences it spans."""
    sentence: str
    pattern_name: str
    match_text: str
    sentence_count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ContrastScore:
    """Detected constructions and their rate per 1000 characters."""
    hits: int = 0
    chars: int = 0
    rate_per_1k: float = 0.0
    matches: list[ContrastMatch] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "chars": self.chars,
            "rate_per_1k": self.rate_per_1k,
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass
class _Candidate:
    lo: int
    hi: int
    raw_start: int
    raw_end: int
    pattern_name: str
    match_text: str


class SentenceIndex:
    """Binary-searchable sentence spans of one text."""

    def __init__(self, spans: list[SentenceSpan]):
        self.spans = spans
        self._starts = [s for s, _ in spans]
        self._ends = [e for _, e in spans]

    def covered_range(self, start: int, end: int) -> Optional[tuple[int, int]]:
        """
        Indices (lo, hi) of the first and last spans overlapping [start, end).

        Returns None for an empty range or one outside every span.
        """
        if not self.spans or start >= end:
            return None

        lo = bisect_right(self._ends, start)
        hi = bisect_left(self._starts, end) - 1
        if lo >= len(self.spans) or hi < 0 or lo > hi:
            return None
        return lo, hi


def merge_candidates(candidates: list[_Candidate]) -> list[_Candidate]:
    """
    Merge candidates whose sentence ranges share a sentence.

    The merged interval keeps the pattern name and match text of the
    candidate that sorted first.
    """
    if not candidates:
        return []

    ordered = sorted(candidates, key=lambda c: (c.lo, c.hi, c.raw_start))
    merged: list[_Candidate] = []
    current = _Candidate(**asdict(ordered[0]))

    for candidate in ordered[1:]:
        if candidate.lo <= current.hi:
            current.hi = max(current.hi, candidate.hi)
            current.raw_end = max(current.raw_end, candidate.raw_end)
        else:
            merged.append(current)
            current = _Candidate(**asdict(candidate))
    merged.append(current)

    return merged


class ContrastDetector:
    """
    Detects contrast constructions in a document.

    Usage:
        detector = ContrastDetector(tagger=load_spacy_tagger())
        matches = detector.extract_matches(text)
        score = detector.score_text(text)

    The detector holds no per-document state and may be shared. Stage 2
    always tags verbs, since the syntactic registry is written against the
    VERB placeholder.
    """

    def __init__(
        self,
        tagger: Optional[PosTagger] = None,
        stage1_patterns: Optional[dict[str, re.Pattern]] = None,
        stage2_patterns: Optional[dict[str, re.Pattern]] = None,
    ):
        self.tagger = tagger
        self.stage1_patterns = STAGE1_PATTERNS if stage1_patterns is None else stage1_patterns
        self.stage2_patterns = STAGE2_PATTERNS if stage2_patterns is None else stage2_patterns

    def extract_matches(self, text: str) -> list[ContrastMatch]:
        """Detected constructions, disjoint by sentence and in text order."""
        normalized = normalize_text(text)
        index = SentenceIndex(sentence_spans(normalized))

        candidates = self._surface_candidates(normalized, index)
        if self.tagger is not None and self.stage2_patterns:
            candidates.extend(self._syntactic_candidates(normalized, index))

        results = []
        for interval in merge_candidates(candidates):
            block_start = index.spans[interval.lo][0]
            block_end = index.spans[interval.hi][1]
            results.append(ContrastMatch(
                sentence=normalized[block_start:block_end].strip(),
                pattern_name=interval.pattern_name,
                match_text=interval.match_text,
                sentence_count=interval.hi - interval.lo + 1,
            ))
        return results

    def score_text(self, text: str) -> ContrastScore:
        """Matches and their rate per 1000 characters."""
        matches = self.extract_matches(text)
        chars = len(text)
        rate = len(matches) * 1000.0 / chars if chars > 0 else 0.0
        return ContrastScore(hits=len(matches), chars=chars, rate_per_1k=rate, matches=matches)

    def _surface_candidates(self, normalized: str, index: SentenceIndex) -> list[_Candidate]:
        candidates = []
        for name, pattern in self.stage1_patterns.items():
            for match in pattern.finditer(normalized):
                covered = index.covered_range(match.start(), match.end())
                if covered is None:
                    continue
                lo, hi = covered
                candidates.append(_Candidate(
                    lo, hi, match.start(), match.end(), f"S1_{name}", match.group(0).strip()
                ))
        return candidates

    def _syntactic_candidates(self, normalized: str, index: SentenceIndex) -> list[_Candidate]:
        table = tag_stream_with_offsets(normalized, self.tagger, PosType.VERB)
        stream = table.stream

        candidates = []
        for name, pattern in self.stage2_patterns.items():
            for match in pattern.finditer(stream):
                raw = table.to_raw(match.start(), match.end())
                if raw is None:
                    continue
                raw_start, raw_end = raw
                covered = index.covered_range(raw_start, raw_end)
                if covered is None:
                    continue
                lo, hi = covered
                candidates.append(_Candidate(
                    lo, hi, raw_start, raw_end, f"S2_{name}", normalized[raw_start:raw_end].strip()
                ))
        return candidates


def extract_contrast_matches(
    text: str,
    tagger: Optional[PosTagger] = None,
) -> list[ContrastMatch]:
    """Detect contrast constructions with the default pattern registries."""
    return ContrastDetector(tagger).extract_matches(text)


def score_text(
    text: str,
    tagger: Optional[PosTagger] = None,
) -> ContrastScore:
    """Contrast construction rate per 1000 characters."""
    return ContrastDetector(tagger).score_text(text)
