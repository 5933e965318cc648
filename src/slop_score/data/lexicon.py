"""
Slop Lexicon

Words and trigrams flagged as overused in machine-generated prose.
Lexicon files are JSON arrays whose entries are either strings or lists
with the phrase first (e.g. ``["delve", 1234]``).
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from .errors import DataFormatError

logger = logging.getLogger(__name__)

# First run of lowercase words, each with at most one internal apostrophe
_PHRASE_RE = re.compile(r"[a-z]+(?:'[a-z]+)?(?:\s+[a-z]+(?:'[a-z]+)?)*")


@dataclass(frozen=True)
class SlopLexicon:
    """Immutable sets of flagged single words and space-joined trigrams."""

    words: frozenset[str] = field(default_factory=frozenset)
    trigrams: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "words", frozenset(self.words))
        object.__setattr__(self, "trigrams", frozenset(self.trigrams))


def parse_phrase_list(entries: object) -> frozenset[str]:
    """Extract the stored phrase from each lexicon entry."""
    if not isinstance(entries, list):
        raise DataFormatError("Lexicon data is not a JSON array")

    phrases = set()
    for entry in entries:
        if isinstance(entry, list):
            if not entry:
                continue
            entry = entry[0]
        if not entry:
            continue
        match = _PHRASE_RE.search(str(entry).lower())
        if match:
            phrases.add(" ".join(match.group(0).split()))
    return frozenset(phrases)


def load_phrase_file(path: Path) -> frozenset[str]:
    """Load one lexicon file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except OSError as e:
        raise DataFormatError(f"Cannot read lexicon file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DataFormatError(f"Cannot decode lexicon file {path}: {e}") from e

    phrases = parse_phrase_list(entries)
    logger.debug("Loaded %d phrases from %s", len(phrases), Path(path).name)
    return phrases


def load_slop_lexicon(words_path: Path, trigrams_path: Path) -> SlopLexicon:
    """Load the word and trigram lexicon files."""
    return SlopLexicon(
        words=load_phrase_file(words_path),
        trigrams=load_phrase_file(trigrams_path),
    )
