"""
Slop Analyzer

Main entry point for slop analysis. Runs every metric over one document
and assembles an AnalysisResult.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Callable, Optional, Union

from .config import Settings, get_settings
from .contrast import ContrastDetector, ContrastMatch, PosTagger, load_spacy_tagger
from .data import AnalysisContext, ContextHolder, load_context
from .metrics import (
    LexicalDiversity,
    OveruseRow,
    WordOveruse,
    compute_average_paragraph_length,
    compute_average_sentence_length,
    compute_dialogue_frequency,
    compute_lexical_diversity,
    compute_slop_index,
    compute_slop_score,
    compute_vocab_level,
    rank_overuse_with_counts,
    rank_overused_words,
    repetition_score,
)
from .text import content_tokens, get_ngrams, tokenize

logger = logging.getLogger(__name__)


@dataclass
class AnalysisProgress:
    """Progress tracking for slop analysis."""
    phase: str
    current: int
    total: int
    message: str = ""


@dataclass
class Metrics:
    """Per-document rates and readability metrics."""
    slop_words_per_1k: float = 0.0
    slop_trigrams_per_1k: float = 0.0
    ngram_repetition_score: float = 0.0
    not_x_but_y_per_1k_chars: float = 0.0
    lexical_diversity: LexicalDiversity = field(default_factory=LexicalDiversity)
    vocab_level: float = 0.0
    avg_sentence_length: float = 0.0
    avg_paragraph_length: float = 0.0
    dialogue_frequency: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class OverRepresented:
    """Words and n-grams used far more often than the baselines predict."""
    words: list[WordOveruse] = field(default_factory=list)
    bigrams: list[OveruseRow] = field(default_factory=list)
    trigrams: list[OveruseRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "words": [w.to_dict() for w in self.words],
            "bigrams": [r.to_dict() for r in self.bigrams],
            "trigrams": [r.to_dict() for r in self.trigrams],
        }


@dataclass
class AnalysisResult:
    """
    Result of analyzing one document.

    The optional sections are None unless requested, and are left out of
    to_dict() when None.
    """
    file: str
    total_chars: int
    total_words: int
    slop_score: float
    metrics: Metrics = field(default_factory=Metrics)
    slop_word_hits: Optional[list[tuple[str, int]]] = None
    slop_trigram_hits: Optional[list[tuple[str, int]]] = None
    contrast_matches: Optional[list[ContrastMatch]] = None
    top_over_represented: Optional[OverRepresented] = None

    def to_dict(self) -> dict:
        data = {
            "file": self.file,
            "total_chars": self.total_chars,
            "total_words": self.total_words,
            "slop_score": self.slop_score,
            "metrics": self.metrics.to_dict(),
        }
        if self.slop_word_hits is not None:
            data["slop_word_hits"] = [[word, count] for word, count in self.slop_word_hits]
        if self.slop_trigram_hits is not None:
            data["slop_trigram_hits"] = [[phrase, count] for phrase, count in self.slop_trigram_hits]
        if self.contrast_matches is not None:
            data["contrast_matches"] = [m.to_dict() for m in self.contrast_matches]
        if self.top_over_represented is not None:
            data["top_over_represented"] = self.top_over_represented.to_dict()
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class SlopAnalyzer:
    """
    Scores text for AI writing patterns.

    Usage:
        analyzer = SlopAnalyzer.from_settings()
        result = analyzer.analyze_text(text)
        # or
        result = analyzer.analyze_file("path/to/essay.md", include_contrast_matches=True)

    The analyzer reads its context once per call, so a ContextHolder may be
    reloaded while analyses are running.
    """

    def __init__(
        self,
        context: Union[AnalysisContext, ContextHolder],
        tagger: Optional[PosTagger] = None,
        settings: Optional[Settings] = None,
        progress_callback: Optional[Callable[[AnalysisProgress], None]] = None,
    ):
        """
        Initialize the slop analyzer.

        Args:
            context: Loaded corpus data, or a holder whose current context is used
            tagger: POS tagger for syntactic contrast patterns (None skips them)
            settings: Analysis settings (defaults to get_settings())
            progress_callback: Optional callback for progress updates
        """
        self._context = context
        self.settings = settings or get_settings()
        self.tagger = tagger
        self.progress_callback = progress_callback
        self.detector = ContrastDetector(tagger)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        data_dir: Optional[Path] = None,
        use_pos_tagger: Optional[bool] = None,
        progress_callback: Optional[Callable[[AnalysisProgress], None]] = None,
    ) -> "SlopAnalyzer":
        """
        Load corpus data and, if enabled, the spaCy tagger.

        Raises:
            DataFormatError: if a corpus file is missing or malformed
        """
        settings = settings or get_settings()
        if data_dir is not None:
            settings = settings.model_copy(update={"data_dir": Path(data_dir)})
        if use_pos_tagger is None:
            use_pos_tagger = settings.use_pos_tagger

        holder = ContextHolder(load_context(settings=settings))
        tagger = load_spacy_tagger(settings.spacy_model) if use_pos_tagger else None
        return cls(holder, tagger=tagger, settings=settings, progress_callback=progress_callback)

    @property
    def context(self) -> AnalysisContext:
        if isinstance(self._context, ContextHolder):
            return self._context.current
        return self._context

    def _report_progress(self, phase: str, current: int, total: int, message: str = ""):
        """Report progress via callback if set."""
        if self.progress_callback:
            self.progress_callback(AnalysisProgress(phase, current, total, message))

    def analyze_text(
        self,
        text: str,
        file: str = "text",
        include_word_hits: bool = False,
        include_trigram_hits: bool = False,
        include_over_represented: bool = False,
        include_contrast_matches: bool = False,
    ) -> AnalysisResult:
        """
        Analyze a text and return its slop metrics.

        Args:
            text: The full text to analyze
            file: Name recorded in the result
            include_word_hits: Include per-word slop lexicon hits
            include_trigram_hits: Include per-trigram slop lexicon hits
            include_over_represented: Include words and n-grams overused against the baselines
            include_contrast_matches: Include detected contrast constructions

        Returns:
            AnalysisResult; a text without word tokens gets all-zero metrics
        """
        context = self.context
        settings = self.settings
        chars = len(text)

        self._report_progress("tokenizing", 0, 1, "Tokenizing text...")
        tokens = tokenize(text)

        if not tokens:
            result = AnalysisResult(file=file, total_chars=chars, total_words=0, slop_score=0.0)
            if include_word_hits:
                result.slop_word_hits = []
            if include_trigram_hits:
                result.slop_trigram_hits = []
            if include_contrast_matches:
                result.contrast_matches = []
            if include_over_represented:
                result.top_over_represented = OverRepresented()
            self._report_progress("complete", 1, 1, "Analysis complete!")
            return result

        # Lexicon hits
        self._report_progress("slop_index", 0, 1, "Counting slop lexicon hits...")
        slop = compute_slop_index(
            tokens, context.lexicon, track_hits=include_word_hits or include_trigram_hits
        )

        # N-gram repetition against the human baseline
        self._report_progress("repetition", 0, 1, "Ranking overused n-grams...")
        content = content_tokens(tokens)
        top_bigrams = rank_overuse_with_counts(
            get_ngrams(content, 2),
            context.baseline.bigrams,
            top_k=settings.overuse_top_k,
            floor=context.baseline.bigram_floor,
        )
        top_trigrams = rank_overuse_with_counts(
            get_ngrams(content, 3),
            context.baseline.trigrams,
            top_k=settings.overuse_top_k,
            floor=context.baseline.trigram_floor,
        )
        repetition = repetition_score(top_bigrams, top_trigrams, len(content))

        # Contrast constructions
        self._report_progress("contrast", 0, 1, "Detecting contrast patterns...")
        contrast = self.detector.score_text(text)

        # Diversity and readability
        self._report_progress("readability", 0, 1, "Calculating diversity and readability...")
        metrics = Metrics(
            slop_words_per_1k=slop.word_score,
            slop_trigrams_per_1k=slop.trigram_score,
            ngram_repetition_score=repetition,
            not_x_but_y_per_1k_chars=contrast.rate_per_1k,
            lexical_diversity=compute_lexical_diversity(tokens, settings.mattr_window),
            vocab_level=compute_vocab_level(text),
            avg_sentence_length=compute_average_sentence_length(text),
            avg_paragraph_length=compute_average_paragraph_length(text),
            dialogue_frequency=compute_dialogue_frequency(text),
        )

        result = AnalysisResult(
            file=file,
            total_chars=chars,
            total_words=len(tokens),
            slop_score=compute_slop_score(slop.word_score, slop.trigram_score, contrast.rate_per_1k),
            metrics=metrics,
        )

        if include_word_hits:
            result.slop_word_hits = slop.word_hits or []
        if include_trigram_hits:
            result.slop_trigram_hits = slop.trigram_hits or []
        if include_contrast_matches:
            result.contrast_matches = contrast.matches[:settings.max_contrast_matches]
        if include_over_represented:
            limit = settings.max_over_represented
            result.top_over_represented = OverRepresented(
                words=rank_overused_words(content, context.wordfreq, limit=limit),
                bigrams=top_bigrams[:limit],
                trigrams=top_trigrams[:limit],
            )

        self._report_progress("complete", 1, 1, "Analysis complete!")
        return result

    def analyze_file(
        self,
        file_path: Union[str, Path],
        encoding: str = "utf-8",
        **options,
    ) -> AnalysisResult:
        """
        Analyze a text file.

        Keyword options are passed through to analyze_text().
        """
        path = Path(file_path)

        self._report_progress("loading", 0, 1, f"Loading {path.name}...")

        with open(path, "r", encoding=encoding) as f:
            text = f.read()

        return self.analyze_text(text, file=str(file_path), **options)

    def analyze_files(
        self,
        file_paths: list[Union[str, Path]],
        encoding: str = "utf-8",
        skip_errors: bool = False,
        **options,
    ) -> list[AnalysisResult]:
        """
        Analyze several files independently, one result per file.

        With skip_errors, files that cannot be read or decoded are logged
        and left out of the results instead of aborting the batch.
        """
        results = []
        for i, fp in enumerate(file_paths):
            self._report_progress(
                "files", i + 1, len(file_paths),
                f"Processing {Path(fp).name}..."
            )
            try:
                results.append(self.analyze_file(fp, encoding=encoding, **options))
            except (OSError, UnicodeDecodeError) as e:
                if not skip_errors:
                    raise
                logger.warning("Skipping %s: %s", fp, e)

        logger.info("Analyzed %d files", len(results))
        return results

    def save_result(
        self,
        result: Union[AnalysisResult, list[AnalysisResult]],
        output_path: Union[str, Path],
    ):
        """Save one result, or a list of results, to a JSON file."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if isinstance(result, list):
            payload = json.dumps([r.to_dict() for r in result], indent=2)
        else:
            payload = result.to_json()

        with open(path, "w", encoding="utf-8") as f:
            f.write(payload)
