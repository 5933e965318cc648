"""
Human Baseline Store

Bigram and trigram probabilities from human-authored writing, used as
the reference distribution for n-gram overuse.
"""

import gzip
import json
import logging
import re
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .errors import DataFormatError

logger = logging.getLogger(__name__)

# Fallback probability when a table has no positive entry
MIN_PROBABILITY = 1e-12

_ALPHA_RUN_RE = re.compile(r"[a-z]+")


def smallest_positive(table: Mapping[str, float]) -> float:
    """Smallest positive probability in the table, or MIN_PROBABILITY."""
    positives = [v for v in table.values() if v > 0]
    return min(positives) if positives else MIN_PROBABILITY


@dataclass(frozen=True)
class HumanBaselineTable:
    """Read-only bigram and trigram probability tables."""

    bigrams: Mapping[str, float] = field(default_factory=dict)
    trigrams: Mapping[str, float] = field(default_factory=dict)
    bigram_floor: float = field(init=False)
    trigram_floor: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "bigrams", MappingProxyType(dict(self.bigrams)))
        object.__setattr__(self, "trigrams", MappingProxyType(dict(self.trigrams)))
        object.__setattr__(self, "bigram_floor", smallest_positive(self.bigrams))
        object.__setattr__(self, "trigram_floor", smallest_positive(self.trigrams))


def normalize_ngram_list(entries: object) -> dict[str, float]:
    """
    Turn ``[{"ngram": ..., "frequency": ...}]`` into phrase probabilities.

    Entries whose n-gram has fewer than two alphabetic tokens are dropped;
    the remaining frequencies are divided by their sum.
    """
    if not isinstance(entries, list):
        return {}

    kept: list[tuple[str, float]] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        tokens = _ALPHA_RUN_RE.findall(str(entry.get("ngram") or "").lower())
        if len(tokens) < 2:
            continue
        try:
            frequency = float(entry.get("frequency") or 0)
        except (TypeError, ValueError):
            frequency = 0.0
        kept.append((" ".join(tokens), frequency))

    total = sum(f for _, f in kept)
    if total <= 0:
        return {}

    probabilities: dict[str, float] = {}
    for phrase, frequency in kept:
        probabilities[phrase] = probabilities.get(phrase, 0.0) + frequency / total
    return probabilities


def load_human_baseline(payload: bytes) -> HumanBaselineTable:
    """
    Decode a gzip-compressed JSON writing profile.

    The profile may be nested under "human-authored" or "human", and its
    lists may be named top_bigrams/bigrams and top_trigrams/trigrams.
    """
    try:
        profile = json.loads(gzip.decompress(payload).decode("utf-8"))
    except (OSError, EOFError, zlib.error) as e:
        raise DataFormatError(f"Cannot decompress human baseline data: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DataFormatError(f"Cannot decode human baseline data: {e}") from e

    if not isinstance(profile, dict):
        raise DataFormatError("Human baseline data is not a JSON object")

    root = profile.get("human-authored") or profile.get("human") or profile
    if not isinstance(root, dict):
        raise DataFormatError("Human baseline profile is not a JSON object")

    bigrams = normalize_ngram_list(root.get("top_bigrams") or root.get("bigrams") or [])
    trigrams = normalize_ngram_list(root.get("top_trigrams") or root.get("trigrams") or [])

    logger.debug("Loaded human baseline: %d bigrams, %d trigrams", len(bigrams), len(trigrams))
    return HumanBaselineTable(bigrams, trigrams)


def load_human_baseline_file(path: Path) -> HumanBaselineTable:
    """Load a human writing profile file."""
    try:
        payload = Path(path).read_bytes()
    except OSError as e:
        raise DataFormatError(f"Cannot read human baseline file {path}: {e}") from e
    return load_human_baseline(payload)
