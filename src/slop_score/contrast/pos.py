"""
Part-of-Speech Streams

Tags text with Penn Treebank tags and builds a derived stream in which
tokens of one grammatical category are replaced by a placeholder, keeping
a piece table back to the raw offsets.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

import spacy

from .pieces import PieceTable

logger = logging.getLogger(__name__)


VERB_TAGS = frozenset(["VB", "VBD", "VBG", "VBN", "VBP", "VBZ"])
NOUN_TAGS = frozenset(["NN", "NNS", "NNP", "NNPS"])
ADJ_TAGS = frozenset(["JJ", "JJR", "JJS"])
ADV_TAGS = frozenset(["RB", "RBR", "RBS"])


class PosType(str, Enum):
    """Grammatical category replaced in a tagged stream."""
    VERB = "verb"
    NOUN = "noun"
    ADJ = "adj"
    ADV = "adv"
    ALL = "all"


# Placeholder token and the tags it replaces, checked in this order for ALL
_CATEGORIES = [
    (PosType.VERB, "VERB", VERB_TAGS),
    (PosType.NOUN, "NOUN", NOUN_TAGS),
    (PosType.ADJ, "ADJ", ADJ_TAGS),
    (PosType.ADV, "ADV", ADV_TAGS),
]


@dataclass(frozen=True)
class TaggedToken:
    """A token and its Penn Treebank tag."""
    value: str
    pos: str


class PosTagger(Protocol):
    """Anything that can tag a text into ordered tokens."""

    def tag(self, text: str) -> list[TaggedToken]:
        ...


class SpacyTagger:
    """
    POS tagger backed by a spaCy pipeline.

    Whitespace tokens are dropped; token.tag_ carries the Penn tag.
    """

    def __init__(self, spacy_model: str = "en_core_web_sm", nlp: Optional[spacy.Language] = None):
        self._spacy_model = spacy_model
        self._nlp = nlp

    @property
    def nlp(self) -> spacy.Language:
        """Lazy-load spaCy model."""
        if self._nlp is None:
            self._nlp = spacy.load(self._spacy_model, disable=["ner", "lemmatizer"])
        return self._nlp

    def tag(self, text: str) -> list[TaggedToken]:
        if not text.strip():
            return []
        doc = self.nlp(text)
        return [TaggedToken(t.text, t.tag_) for t in doc if not t.is_space]


def load_spacy_tagger(spacy_model: str = "en_core_web_sm") -> Optional[SpacyTagger]:
    """Load a spaCy tagger, or None when the model is not installed."""
    try:
        nlp = spacy.load(spacy_model, disable=["ner", "lemmatizer"])
    except OSError as e:
        logger.warning("spaCy model %r unavailable, syntactic contrast patterns disabled: %s", spacy_model, e)
        return None
    return SpacyTagger(spacy_model, nlp)


def placeholder_for(tag: str, pos_type: PosType) -> Optional[str]:
    """Placeholder replacing a token with this tag, or None to keep it."""
    if not tag:
        return None
    for category, placeholder, tags in _CATEGORIES:
        if (pos_type == PosType.ALL or pos_type == category) and tag in tags:
            return placeholder
    return None


def tag_with_pos(text: str, tagger: PosTagger, pos_type: PosType = PosType.VERB) -> str:
    """Tagged tokens joined by single spaces, target tokens replaced."""
    if not text.strip():
        return ""
    tokens = tagger.tag(text)
    return " ".join(placeholder_for(t.pos, pos_type) or t.value for t in tokens)


def tag_stream_with_offsets(
    text: str,
    tagger: PosTagger,
    pos_type: PosType = PosType.VERB,
) -> PieceTable:
    """
    Build the tagged stream for a text, with its piece table.

    Each token is located in the raw text after the previous one. Raw text
    between two tokens is copied into the stream unchanged; adjacent tokens
    are separated by a single space that maps to an empty raw range. Tokens
    that cannot be located are skipped.
    """
    table = PieceTable()
    if not text.strip():
        return table

    tokens = tagger.tag(text)
    raw_pos = 0

    for i, token in enumerate(tokens):
        token_start = text.find(token.value, raw_pos)
        if token_start == -1:
            raw_pos += len(token.value)
            continue

        token_end = token_start + len(token.value)
        table.emit(placeholder_for(token.pos, pos_type) or token.value, token_start, token_end)
        raw_pos = token_end

        if i < len(tokens) - 1:
            next_start = text.find(tokens[i + 1].value, raw_pos)
            if next_start > raw_pos:
                table.emit(text[raw_pos:next_start], raw_pos, next_start)
                raw_pos = next_start
            else:
                table.emit(" ", raw_pos, raw_pos)

    return table
