"""Tests for contrast construction detection."""

import pytest

from slop_score.contrast import (
    ContrastDetector,
    PieceTable,
    PosType,
    extract_contrast_matches,
    load_spacy_tagger,
    score_text,
    tag_stream_with_offsets,
    tag_with_pos,
)
from slop_score.contrast.detector import SentenceIndex, _Candidate, merge_candidates
from slop_score.contrast.pos import placeholder_for
from slop_score.text import sentence_spans


class TestSurfacePatterns:
    """Test Stage 1 regex detection."""

    def test_not_just_x_but_y(self):
        matches = extract_contrast_matches("This is not just good, but great.")
        assert len(matches) == 1
        assert matches[0].pattern_name.startswith("S1_")
        assert "not just good" in matches[0].match_text
        assert matches[0].sentence == "This is not just good, but great."
        assert matches[0].sentence_count == 1

    def test_not_x_but_y(self):
        matches = extract_contrast_matches("It is not a bug, but a feature.")
        assert [m.pattern_name for m in matches] == ["S1_not_x_but_y"]

    def test_curly_quotes_and_dashes(self):
        matches = extract_contrast_matches("It’s not just fast—it’s instant.")
        assert len(matches) == 1
        assert matches[0].pattern_name == "S1_not_x_dash_y"

    def test_spans_two_sentences(self):
        matches = extract_contrast_matches("It is not a suggestion. It is a command. Obey.")
        assert len(matches) == 1
        assert matches[0].pattern_name == "S1_pronoun_not_x_pronoun_y"
        assert matches[0].sentence_count == 2
        assert matches[0].sentence == "It is not a suggestion. It is a command."

    def test_clean_text(self):
        assert extract_contrast_matches("The cat sat on the mat. It was a nice day.") == []

    def test_empty_text(self):
        assert extract_contrast_matches("") == []

    def test_matches_disjoint_and_ordered(self):
        text = (
            "It is not a bug, but a feature. This is not just good, but great. "
            "Nothing to see here. It's not about speed; it's about trust."
        )
        matches = extract_contrast_matches(text)
        assert len(matches) == 3
        positions = [text.index(m.sentence) for m in matches]
        assert positions == sorted(positions)
        for earlier, later in zip(matches, matches[1:]):
            assert text.index(earlier.sentence) + len(earlier.sentence) <= text.index(later.sentence)


class TestScore:
    """Test the per-1000-character rate."""

    def test_rate(self):
        text = "This is not just good, but great."
        score = score_text(text)
        assert score.hits == 1
        assert score.chars == len(text)
        assert score.rate_per_1k == pytest.approx(1000 / len(text))

    def test_empty(self):
        score = score_text("")
        assert score.hits == 0
        assert score.rate_per_1k == 0.0

    def test_to_dict(self):
        data = score_text("This is not just good, but great.").to_dict()
        assert set(data["matches"][0]) == {"sentence", "pattern_name", "match_text", "sentence_count"}


class TestSentenceIndex:
    """Test span range lookup."""

    def test_covered_range(self):
        text = "One. Two. Three."
        index = SentenceIndex(sentence_spans(text))
        assert index.covered_range(0, 3) == (0, 0)
        assert index.covered_range(2, 7) == (0, 1)
        assert index.covered_range(5, len(text)) == (1, 2)

    def test_outside_or_empty(self):
        index = SentenceIndex(sentence_spans("One."))
        assert index.covered_range(10, 12) is None
        assert index.covered_range(1, 1) is None
        assert SentenceIndex([]).covered_range(0, 1) is None


class TestMerge:
    """Test candidate merging."""

    def test_overlapping_and_touching_merge(self):
        merged = merge_candidates([
            _Candidate(2, 3, 20, 30, "S1_b", "b"),
            _Candidate(0, 1, 0, 10, "S1_a", "a"),
            _Candidate(1, 2, 8, 22, "S2_c", "c"),
            _Candidate(5, 5, 50, 55, "S1_d", "d"),
        ])
        assert [(c.lo, c.hi, c.raw_start, c.raw_end) for c in merged] == [(0, 3, 0, 30), (5, 5, 50, 55)]
        assert merged[0].pattern_name == "S1_a"

    def test_adjacent_sentences_stay_separate(self):
        merged = merge_candidates([
            _Candidate(0, 0, 0, 5, "S1_a", "a"),
            _Candidate(1, 1, 6, 9, "S1_b", "b"),
        ])
        assert len(merged) == 2

    def test_empty(self):
        assert merge_candidates([]) == []


class TestPieceTable:
    """Test stream to raw offset mapping."""

    def test_to_raw(self):
        table = PieceTable()
        table.emit("They", 0, 4)
        table.emit(" ", 4, 5)
        table.emit("VERB", 5, 10)
        table.emit(" ", 10, 10)
        table.emit("it", 10, 12)
        assert table.stream == "They VERB it"
        assert len(table) == 5
        assert table.to_raw(5, 9) == (5, 10)
        assert table.to_raw(0, 12) == (0, 12)
        assert table.to_raw(6, 7) == (5, 10)

    def test_out_of_range(self):
        table = PieceTable()
        table.emit("abc", 0, 3)
        assert table.to_raw(3, 5) is None
        assert PieceTable().to_raw(0, 1) is None


class TestTaggedStream:
    """Test POS placeholder streams."""

    def test_placeholder_for(self):
        assert placeholder_for("VBZ", PosType.VERB) == "VERB"
        assert placeholder_for("NN", PosType.VERB) is None
        assert placeholder_for("NN", PosType.ALL) == "NOUN"
        assert placeholder_for("JJ", PosType.ADJ) == "ADJ"
        assert placeholder_for("", PosType.ALL) is None

    def test_tag_with_pos(self, fake_tagger):
        assert tag_with_pos("They run fast.", fake_tagger) == "They VERB fast ."
        assert tag_with_pos("They run fast.", fake_tagger, PosType.NOUN) == "They run NOUN ."
        assert tag_with_pos("   ", fake_tagger) == ""

    def test_stream_offsets(self, fake_tagger):
        text = "They don't react."
        table = tag_stream_with_offsets(text, fake_tagger)
        assert table.stream == "They VERB n't VERB ."
        verb = table.stream.index("VERB")
        assert table.to_raw(verb, verb + 4) == (5, 7)
        last = table.stream.rindex("VERB")
        start, end = table.to_raw(last, last + 4)
        assert text[start:end] == "react"


class TestSyntacticPatterns:
    """Test Stage 2 detection with a deterministic tagger."""

    def test_dont_just_verb(self, fake_tagger):
        detector = ContrastDetector(tagger=fake_tagger)
        matches = detector.extract_matches("They don't just react - they communicate.")
        assert len(matches) == 1
        assert matches[0].pattern_name == "S2_dont_just_verb_pronoun_verb"
        assert matches[0].match_text == "don't just react - they communicate"

    def test_pronoun_doesnt_verb(self, fake_tagger):
        detector = ContrastDetector(tagger=fake_tagger)
        matches = detector.extract_matches("It doesn't whisper. It roars.")
        assert len(matches) == 1
        assert matches[0].pattern_name == "S2_pronoun_doesnt_verb_pronoun_verb"
        assert matches[0].sentence_count == 2

    def test_stage_one_wins_merge(self, fake_tagger):
        detector = ContrastDetector(tagger=fake_tagger)
        matches = detector.extract_matches("The goal is not to replace, but to enhance.")
        assert len(matches) == 1
        assert matches[0].pattern_name == "S1_not_x_but_y"

    def test_skipped_without_tagger(self):
        assert ContrastDetector().extract_matches("They don't just react - they communicate.") == []

    def test_no_tagging_for_empty_text(self, fake_tagger):
        ContrastDetector(tagger=fake_tagger).extract_matches("   ")
        assert fake_tagger.calls == 0


class TestSpacyTagger:
    """Test against the real spaCy model when installed."""

    @pytest.fixture(scope="class")
    def spacy_tagger(self):
        tagger = load_spacy_tagger("en_core_web_sm")
        if tagger is None:
            pytest.skip("spaCy model en_core_web_sm not installed")
        return tagger

    def test_verbs_replaced(self, spacy_tagger):
        assert "VERB" in tag_with_pos("They run every morning.", spacy_tagger)

    def test_surface_matches_survive(self, spacy_tagger):
        matches = ContrastDetector(tagger=spacy_tagger).extract_matches("This is not just good, but great.")
        assert matches[0].pattern_name.startswith("S1_")

    def test_missing_model(self):
        assert load_spacy_tagger("no_such_model_xx") is None


class TestSyntacticRegistry:
    """Test the Stage 2 registry against the verb-tagged stream."""

    def test_patterns_use_verb_placeholder(self):
        from slop_score.contrast import STAGE2_PATTERNS

        for pattern in STAGE2_PATTERNS.values():
            assert "VERB" in pattern.pattern

    def test_module_function_runs_stage_two(self, fake_tagger):
        matches = extract_contrast_matches("It doesn't whisper. It roars.", fake_tagger)
        assert [m.pattern_name for m in matches] == ["S2_pronoun_doesnt_verb_pronoun_verb"]
