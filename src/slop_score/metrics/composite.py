"""
Composite Slop Score

Min-max normalizes the three component rates against fixed calibration
ranges and combines them into a single 0-100 score.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CalibrationRange:
    """Observed range of a component; values outside it are clamped."""
    min: float
    max: float

    def normalize(self, value: float) -> float:
        normalized = (value - self.min) / (self.max - self.min)
        return max(0.0, min(1.0, normalized))


# Leaderboard ranges with a 10% buffer on each side
SLOP_WORDS_RANGE = CalibrationRange(2.1214882577844882, 43.924784489934034)
SLOP_TRIGRAMS_RANGE = CalibrationRange(-0.027052241145113065, 1.2293612202273094)
CONTRAST_RANGE = CalibrationRange(-0.0323480255696472, 0.8881555162544392)

WORDS_WEIGHT = 0.60
CONTRAST_WEIGHT = 0.25
TRIGRAMS_WEIGHT = 0.15


def compute_slop_score(word_score: float, trigram_score: float, contrast_rate: float) -> float:
    """
    Weighted composite in [0, 100].

    Args:
        word_score: slop words per 1000 tokens
        trigram_score: slop trigrams per 1000 tokens
        contrast_rate: contrast constructions per 1000 characters
    """
    norm_words = SLOP_WORDS_RANGE.normalize(word_score)
    norm_trigrams = SLOP_TRIGRAMS_RANGE.normalize(trigram_score)
    norm_contrast = CONTRAST_RANGE.normalize(contrast_rate)

    return (
        norm_words * WORDS_WEIGHT
        + norm_contrast * CONTRAST_WEIGHT
        + norm_trigrams * TRIGRAMS_WEIGHT
    ) * 100
