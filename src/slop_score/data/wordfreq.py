"""
Word Frequency Store

English word frequencies decoded from a cBpack corpus (the bucketed
format used by the wordfreq project by Robyn Speer).

A cBpack payload is a gzip-compressed msgpack array. Element 0 is a header
``{"format": "cB", "version": 1}``; element ``i + 1`` is the list of words
whose frequency is ``-i`` centibels, or null for an empty bucket.
"""

import gzip
import logging
import math
import re
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import msgpack

from ..text.normalize import normalize_quotes
from .errors import DataFormatError

logger = logging.getLogger(__name__)

CBPACK_FORMAT = "cB"
CBPACK_VERSION = 1

# Letters/digits with internal apostrophes or hyphens kept
_PHRASE_TOKEN_RE = re.compile(r"[a-z0-9]+(?:['-][a-z0-9]+)*")


def bucket_to_zipf(index: int) -> float:
    """Bucket i holds words at -i centibels: zipf = (cB + 900) / 100."""
    centibels = -index
    return (centibels + 900) / 100.0


def normalize_word(text: str) -> str:
    """Lowercase, straighten quotes and trim a lookup key."""
    return normalize_quotes(text).lower().strip()


@dataclass(frozen=True)
class WordFrequencyTable:
    """Immutable word -> Zipf frequency lookup."""

    zipf_map: Mapping[str, float] = field(default_factory=dict)
    default: float = 0.0

    def __post_init__(self):
        if not isinstance(self.zipf_map, MappingProxyType):
            object.__setattr__(self, "zipf_map", MappingProxyType(dict(self.zipf_map)))

    def __len__(self) -> int:
        return len(self.zipf_map)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self.zipf_map

    def zipf_frequency(self, text: Optional[str]) -> float:
        """
        Zipf frequency of a word or phrase.

        Phrases score as the minimum Zipf of their tokens (a conservative
        estimate). Unknown words, empty input and non-strings return the
        table default.
        """
        if not text or not isinstance(text, str):
            return self.default

        normalized = normalize_word(text)
        tokens = _PHRASE_TOKEN_RE.findall(normalized)
        if len(tokens) > 1:
            return min(self.zipf_map.get(t, self.default) for t in tokens)

        return self.zipf_map.get(normalized, self.default)

    def frequency(self, text: Optional[str]) -> float:
        """Frequency as a proportion in [0, 1]: 10 ** (zipf - 9)."""
        zipf = self.zipf_frequency(text)
        if zipf <= 0:
            return 0.0
        return math.pow(10, zipf - 9)


def load_wordfreq(payload: bytes, default: float = 0.0) -> WordFrequencyTable:
    """
    Decode a gzip-compressed cBpack payload.

    Raises:
        DataFormatError: if the payload cannot be decompressed or decoded,
            or its header does not name the expected format and version.
    """
    try:
        raw = gzip.decompress(payload)
        data = msgpack.unpackb(raw, raw=False, strict_map_key=False)
    except (OSError, EOFError, zlib.error) as e:
        raise DataFormatError(f"Cannot decompress word frequency data: {e}") from e
    except (msgpack.exceptions.ExtraData, msgpack.exceptions.UnpackException, ValueError) as e:
        raise DataFormatError(f"Cannot decode word frequency data: {e}") from e

    if not isinstance(data, list) or not data:
        raise DataFormatError("Word frequency data is not a cBpack array")

    header = data[0]
    if (
        not isinstance(header, dict)
        or header.get("format") != CBPACK_FORMAT
        or header.get("version") != CBPACK_VERSION
    ):
        raise DataFormatError(f"Unexpected format: {header!r}")

    zipf_map: dict[str, float] = {}
    for index, words in enumerate(data[1:]):
        if not words:
            continue
        if not isinstance(words, list):
            raise DataFormatError(f"Frequency bucket {index} is not a list")
        zipf = bucket_to_zipf(index)
        for word in words:
            # Lower buckets are more frequent; the first assignment wins
            if word not in zipf_map:
                zipf_map[word] = zipf

    logger.debug("Loaded %d words from %d frequency buckets", len(zipf_map), len(data) - 1)
    return WordFrequencyTable(zipf_map, default)


def load_wordfreq_file(path: Path, default: float = 0.0) -> WordFrequencyTable:
    """Load a cBpack corpus file."""
    try:
        payload = Path(path).read_bytes()
    except OSError as e:
        raise DataFormatError(f"Cannot read word frequency file {path}: {e}") from e
    return load_wordfreq(payload, default)
