"""Shared fixtures: small synthetic corpus files and a deterministic tagger."""

import gzip
import json
import re

import msgpack
import pytest

from slop_score.config import Settings
from slop_score.contrast import TaggedToken
from slop_score.data import load_context


WORD_ZIPF = {
    "the": 7.73,
    "it": 7.4,
    "was": 7.2,
    "a": 7.36,
    "on": 7.0,
    "day": 5.6,
    "nice": 5.2,
    "cat": 4.8,
    "sat": 4.3,
    "mat": 3.8,
    "tapestry": 3.2,
    "testament": 3.4,
    "delve": 2.5,
    "gandalf": 3.1,
}

SLOP_WORDS = [["delve", 1520], ["tapestry", 1200], "testament", "Intricate!", ["nuanced", 3]]
SLOP_TRIGRAMS = ["a testament to", ["rich tapestry of", 40], "in the realm"]

HUMAN_PROFILE = {
    "human-authored": {
        "top_bigrams": [
            {"ngram": "nice day", "frequency": 30},
            {"ngram": "cat sat", "frequency": 10},
            {"ngram": "Rich Tapestry", "frequency": 10},
            {"ngram": "mat", "frequency": 500},
        ],
        "top_trigrams": [
            {"ngram": "cat sat mat", "frequency": 4},
            {"ngram": "nice day today", "frequency": 1},
        ],
    }
}


def build_cbpack(word_zipf: dict[str, float], header=None) -> bytes:
    """Gzip-compressed cBpack payload holding the given Zipf values."""
    if header is None:
        header = {"format": "cB", "version": 1}
    buckets: list = []
    for word, zipf in word_zipf.items():
        index = round((9 - zipf) * 100)
        while len(buckets) <= index:
            buckets.append(None)
        if buckets[index] is None:
            buckets[index] = []
        buckets[index].append(word)
    return gzip.compress(msgpack.packb([header] + buckets, use_bin_type=True))


def write_corpus(directory, word_zipf=None, profile=None, words=None, trigrams=None):
    """Write the four corpus files under the default names."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "large_en.msgpack.gz").write_bytes(build_cbpack(word_zipf or WORD_ZIPF))
    (directory / "human_writing_profile.json.gz").write_bytes(
        gzip.compress(json.dumps(profile or HUMAN_PROFILE).encode("utf-8"))
    )
    (directory / "slop_list.json").write_text(json.dumps(words or SLOP_WORDS), encoding="utf-8")
    (directory / "slop_list_trigrams.json").write_text(json.dumps(trigrams or SLOP_TRIGRAMS), encoding="utf-8")
    return directory


class FakeTagger:
    """Tags a fixed verb list as VB, splitting contractions the way spaCy does."""

    TOKEN_RE = re.compile(r"\w+(?=n't)|n't|\w+|[^\w\s]")
    VERBS = {
        "do", "does", "did", "react", "communicate", "whisper", "roars",
        "replace", "enhance", "run",
    }
    PRONOUNS = {"it", "they", "this", "that", "he", "she", "we", "you"}

    def __init__(self):
        self.calls = 0

    def tag(self, text):
        self.calls += 1
        tokens = []
        for value in self.TOKEN_RE.findall(text):
            lowered = value.lower()
            if lowered in self.VERBS:
                pos = "VBZ" if lowered.endswith("s") else "VB"
            elif lowered in self.PRONOUNS:
                pos = "PRP"
            elif lowered in ("n't", "not", "just", "only"):
                pos = "RB"
            elif not value[0].isalnum():
                pos = "."
            else:
                pos = "NN"
            tokens.append(TaggedToken(value, pos))
        return tokens


@pytest.fixture
def make_cbpack():
    return build_cbpack


@pytest.fixture
def data_dir(tmp_path):
    return write_corpus(tmp_path / "data")


@pytest.fixture
def settings(data_dir):
    return Settings(data_dir=data_dir, _env_file=None)


@pytest.fixture
def context(data_dir, settings):
    return load_context(data_dir, settings)


@pytest.fixture
def fake_tagger():
    return FakeTagger()


@pytest.fixture(name="write_corpus")
def write_corpus_fixture():
    return write_corpus
