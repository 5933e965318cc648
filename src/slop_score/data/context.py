"""
Analysis Context

Bundles the three read-only stores an analysis needs. A context is built
once and never mutated; reloading builds a fresh context and swaps the
reference, so calls already holding the old one are unaffected.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import Settings, get_settings
from .baseline import HumanBaselineTable, load_human_baseline_file
from .lexicon import SlopLexicon, load_slop_lexicon
from .wordfreq import WordFrequencyTable, load_wordfreq_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisContext:
    """Loaded corpus data shared by every analysis call."""

    wordfreq: WordFrequencyTable
    baseline: HumanBaselineTable
    lexicon: SlopLexicon

    def lookup_zipf(self, word: str) -> Optional[float]:
        """Zipf frequency, or None when the word is unknown."""
        zipf = self.wordfreq.zipf_frequency(word)
        return zipf if zipf > 0 else None

    def lookup_frequency(self, word: str) -> Optional[float]:
        """Proportional frequency, or None when the word is unknown."""
        frequency = self.wordfreq.frequency(word)
        return frequency if frequency > 0 else None


def load_context(
    data_dir: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> AnalysisContext:
    """
    Load all corpus files, in parallel.

    Args:
        data_dir: Directory holding the corpus files (defaults to settings)
        settings: Settings naming the files (defaults to get_settings())

    Raises:
        DataFormatError: if any file is missing or malformed
    """
    settings = settings or get_settings()
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": Path(data_dir)})

    logger.info("Loading corpus data from %s", settings.data_dir)

    with ThreadPoolExecutor(max_workers=3) as pool:
        wordfreq = pool.submit(load_wordfreq_file, settings.wordfreq_path)
        baseline = pool.submit(load_human_baseline_file, settings.human_profile_path)
        lexicon = pool.submit(
            load_slop_lexicon, settings.slop_words_path, settings.slop_trigrams_path
        )
        context = AnalysisContext(
            wordfreq=wordfreq.result(),
            baseline=baseline.result(),
            lexicon=lexicon.result(),
        )

    logger.info(
        "Loaded %d words, %d bigrams, %d trigrams, %d slop words, %d slop trigrams",
        len(context.wordfreq),
        len(context.baseline.bigrams),
        len(context.baseline.trigrams),
        len(context.lexicon.words),
        len(context.lexicon.trigrams),
    )
    return context


class ContextHolder:
    """
    Holds the current AnalysisContext.

    Usage:
        holder = ContextHolder(load_context(data_dir))
        result = analyzer.analyze_text(text, context=holder.current)
        holder.reload(data_dir)
    """

    def __init__(self, context: AnalysisContext):
        self._context = context
        self._lock = threading.Lock()

    @property
    def current(self) -> AnalysisContext:
        return self._context

    def reload(
        self,
        data_dir: Optional[Path] = None,
        settings: Optional[Settings] = None,
    ) -> AnalysisContext:
        """Load a complete new context, then swap it in."""
        with self._lock:
            fresh = load_context(data_dir, settings)
            self._context = fresh
        logger.info("Analysis context reloaded")
        return fresh
