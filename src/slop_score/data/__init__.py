"""Corpus data stores: word frequencies, human baseline and slop lexicon."""

from .errors import DataFormatError
from .wordfreq import WordFrequencyTable, load_wordfreq, load_wordfreq_file
from .baseline import HumanBaselineTable, load_human_baseline, load_human_baseline_file
from .lexicon import SlopLexicon, load_slop_lexicon
from .context import AnalysisContext, ContextHolder, load_context

__all__ = [
    "DataFormatError",
    "WordFrequencyTable",
    "load_wordfreq",
    "load_wordfreq_file",
    "HumanBaselineTable",
    "load_human_baseline",
    "load_human_baseline_file",
    "SlopLexicon",
    "load_slop_lexicon",
    "AnalysisContext",
    "ContextHolder",
    "load_context",
]
