"""
Contrast Construction Detection

Surface and POS-based detection of "not X, but Y" constructions.
"""

from .pieces import Piece, PieceTable
from .pos import (
    ADJ_TAGS,
    ADV_TAGS,
    NOUN_TAGS,
    VERB_TAGS,
    PosTagger,
    PosType,
    SpacyTagger,
    TaggedToken,
    load_spacy_tagger,
    tag_stream_with_offsets,
    tag_with_pos,
)
from .patterns import STAGE1_PATTERNS, STAGE2_PATTERNS
from .detector import (
    ContrastDetector,
    ContrastMatch,
    ContrastScore,
    extract_contrast_matches,
    score_text,
)

__all__ = [
    # Piece table
    "Piece",
    "PieceTable",
    # POS
    "ADJ_TAGS",
    "ADV_TAGS",
    "NOUN_TAGS",
    "VERB_TAGS",
    "PosTagger",
    "PosType",
    "SpacyTagger",
    "TaggedToken",
    "load_spacy_tagger",
    "tag_stream_with_offsets",
    "tag_with_pos",
    # Patterns
    "STAGE1_PATTERNS",
    "STAGE2_PATTERNS",
    # Detector
    "ContrastDetector",
    "ContrastMatch",
    "ContrastScore",
    "extract_contrast_matches",
    "score_text",
]
