"""
Contrast Construction Patterns

Named regex registries for "not X, but Y" style constructions.

Stage 1 runs on normalized text (straight quotes, ASCII hyphens in place
of em/en dashes). Stage 2 runs on a tagged stream where verbs have been
replaced by the placeholder ``VERB``; those patterns are case-sensitive
on the placeholder and case-insensitive on the surrounding words.
"""

import re

_PRONOUN = r"(?:it|this|that|they|he|she|we|you)"
_BE = r"(?:is|are|was|were)"
_INTENSIFIER = r"(?:just|only|merely|simply)"


STAGE1_PATTERNS: dict[str, re.Pattern] = {
    # "not just good, but great" / "not only X but also Y"
    "not_just_x_but_y": re.compile(
        rf"\bnot\s+{_INTENSIFIER}\s+[^.!?;]{{1,80}}?,?\s+but\s+(?:also\s+)?\w+",
        re.IGNORECASE,
    ),
    # "not good, but bad" / "not because X, but because Y"
    "not_x_but_y": re.compile(
        rf"\bnot\s+(?!{_INTENSIFIER}\b)[^.!?;,]{{1,60}},\s*but\s+(?:rather\s+)?\w+",
        re.IGNORECASE,
    ),
    # "isn't a bug, but a feature"
    "nt_x_but_y": re.compile(
        rf"\b(?:{_BE}|do|does|did)n't\s+(?:{_INTENSIFIER}\s+)?[^.!?;,]{{1,60}},\s*but\s+\w+",
        re.IGNORECASE,
    ),
    # "not just good - it's great"
    "not_x_dash_y": re.compile(
        rf"\bnot\s+(?:{_INTENSIFIER}\s+)?[^.!?;\-]{{1,60}}?\s*-\s*{_PRONOUN}(?:'s|'re|\s+{_BE})\b",
        re.IGNORECASE,
    ),
    # "It is not a suggestion. It is a command." / "It wasn't X. It was Y."
    "pronoun_not_x_pronoun_y": re.compile(
        rf"\b({_PRONOUN})(?:(?:'s|'re|\s+{_BE})\s+not|\s+{_BE}n't)\s+[^.!?]{{1,80}}[.;]\s+"
        rf"\1(?:'s|'re|\s+{_BE})\s+\w+",
        re.IGNORECASE,
    ),
    # "isn't about speed; it's about trust"
    "not_about_x_about_y": re.compile(
        r"(?:\bnot|n't)\s+about\s+[^.!?;]{1,60}?[.;,\-]\s*(?:it(?:'s|\s+is|\s+was)|this\s+is|that's)\s+about\b",
        re.IGNORECASE,
    ),
    # "less a tool, more a partner"
    "less_x_more_y": re.compile(
        r"\bless\s+(?:about\s+)?[^.!?;,]{1,40},\s*(?:and\s+)?more\s+(?:about\s+)?\w+",
        re.IGNORECASE,
    ),
}


STAGE2_PATTERNS: dict[str, re.Pattern] = {
    # "They don't just react - they communicate."
    "dont_just_verb_pronoun_verb": re.compile(
        r"\bVERB\s*(?i:n't|not)\s+(?i:just|only|simply|merely)\s+VERB\b[^.!?]{0,80}?[-;:,.]\s*"
        r"(?i:they|it|we|you|he|she|this|that)\s+VERB\b"
    ),
    # "not to replace, but to enhance"
    "not_verb_but_verb": re.compile(
        r"\b(?i:not)\s+(?i:to\s+)?VERB\b[^.!?;]{0,60}?,?\s+(?i:but)\s+(?i:to\s+)?VERB\b"
    ),
    # "It doesn't whisper. It roars."
    "pronoun_doesnt_verb_pronoun_verb": re.compile(
        r"\b(?i:it|this|that|he|she)\s+VERB\s*(?i:n't|not)\s+VERB\b[^.!?]{0,60}[.;,\-]\s*"
        r"(?i:it|this|that|he|she)\s+VERB\b"
    ),
}
