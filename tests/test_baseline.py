"""Tests for the human baseline store and the slop lexicon."""

import gzip
import json

import pytest

from slop_score.data import (
    DataFormatError,
    HumanBaselineTable,
    load_human_baseline,
    load_slop_lexicon,
)
from slop_score.data.baseline import MIN_PROBABILITY, normalize_ngram_list
from slop_score.data.lexicon import parse_phrase_list


def compress(obj) -> bytes:
    return gzip.compress(json.dumps(obj).encode("utf-8"))


class TestNgramNormalization:
    """Test baseline list normalization."""

    def test_probabilities_sum_to_one(self):
        table = normalize_ngram_list([
            {"ngram": "nice day", "frequency": 3},
            {"ngram": "cat sat", "frequency": 1},
        ])
        assert table == pytest.approx({"nice day": 0.75, "cat sat": 0.25})

    def test_single_token_entries_dropped(self):
        table = normalize_ngram_list([
            {"ngram": "mat", "frequency": 100},
            {"ngram": "cat sat", "frequency": 1},
        ])
        assert table == {"cat sat": 1.0}

    def test_tokens_are_lowercased_alpha_runs(self):
        table = normalize_ngram_list([{"ngram": "Rich, Tapestry!", "frequency": 2}])
        assert table == {"rich tapestry": 1.0}

    def test_duplicates_accumulate(self):
        table = normalize_ngram_list([
            {"ngram": "cat sat", "frequency": 1},
            {"ngram": "Cat  Sat", "frequency": 1},
            {"ngram": "nice day", "frequency": 2},
        ])
        assert table == pytest.approx({"cat sat": 0.5, "nice day": 0.5})

    def test_zero_total(self):
        assert normalize_ngram_list([{"ngram": "cat sat", "frequency": 0}]) == {}


class TestBaselineLoading:
    """Test writing profile decoding."""

    def test_human_authored_root(self):
        table = load_human_baseline(compress({
            "human-authored": {"top_bigrams": [{"ngram": "a b", "frequency": 1}]},
        }))
        assert dict(table.bigrams) == {"a b": 1.0}
        assert dict(table.trigrams) == {}

    def test_human_root_and_plain_keys(self):
        table = load_human_baseline(compress({
            "human": {"trigrams": [{"ngram": "a b c", "frequency": 1}]},
        }))
        assert dict(table.trigrams) == {"a b c": 1.0}

    def test_bare_root(self):
        table = load_human_baseline(compress({"bigrams": [{"ngram": "a b", "frequency": 1}]}))
        assert "a b" in table.bigrams

    def test_floor_is_smallest_probability(self):
        table = HumanBaselineTable({"a b": 0.9, "c d": 0.1})
        assert table.bigram_floor == pytest.approx(0.1)
        assert table.trigram_floor == MIN_PROBABILITY

    def test_corrupt_payload(self):
        with pytest.raises(DataFormatError):
            load_human_baseline(b"not gzip at all")

    def test_not_json(self):
        with pytest.raises(DataFormatError):
            load_human_baseline(gzip.compress(b"{nope"))

    def test_not_an_object(self):
        with pytest.raises(DataFormatError):
            load_human_baseline(compress([1, 2, 3]))


class TestLexicon:
    """Test slop lexicon parsing."""

    def test_strings_and_lists(self):
        phrases = parse_phrase_list([["delve", 10], "Tapestry!", ["a  testament to", 3], [], "", 42])
        assert phrases == frozenset({"delve", "tapestry", "a testament to"})

    def test_first_alpha_run_only(self):
        assert parse_phrase_list(["123 rich tapestry, of"]) == frozenset({"rich tapestry"})

    def test_not_an_array(self):
        with pytest.raises(DataFormatError):
            parse_phrase_list({"delve": 1})

    def test_load_files(self, data_dir):
        lexicon = load_slop_lexicon(data_dir / "slop_list.json", data_dir / "slop_list_trigrams.json")
        assert "delve" in lexicon.words
        assert "intricate" in lexicon.words
        assert "rich tapestry of" in lexicon.trigrams

    def test_invalid_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("[unterminated", encoding="utf-8")
        with pytest.raises(DataFormatError):
            load_slop_lexicon(bad, bad)
