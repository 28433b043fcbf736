"""Tests for the append-only vocabulary and binary vectorization."""

from __future__ import annotations

import pytest

from incremental_bayes.vocabulary import Vocabulary


class TestObserve:

    def test_empty_vocabulary(self):
        vocab = Vocabulary()
        assert len(vocab) == 0
        assert vocab.features == ()
        assert vocab.vectorize(["anything"]) == []

    def test_assigns_indices_in_insertion_order(self):
        vocab = Vocabulary()
        vocab.observe(["b", "a", "c"])
        assert vocab.features == ("b", "a", "c")
        assert vocab.index_of("b") == 0
        assert vocab.index_of("c") == 2

    def test_duplicates_do_not_get_new_indices(self):
        vocab = Vocabulary()
        vocab.observe(["a", "a", "b", "a"])
        assert len(vocab) == 2
        assert vocab.frequencies() == {"a": 3, "b": 1}

    def test_indices_are_stable_across_growth(self):
        vocab = Vocabulary()
        vocab.observe(["x", "y"])
        before = {f: vocab.index_of(f) for f in vocab}
        vocab.observe(["z", "x", "w"])
        assert {f: vocab.index_of(f) for f in before} == before
        assert vocab.index_of("z") == 2
        assert vocab.index_of("w") == 3

    def test_size_never_decreases(self):
        vocab = Vocabulary()
        sizes = []
        for batch in (["a"], ["a"], ["b", "c"], [], ["c", "d"]):
            vocab.observe(batch)
            sizes.append(len(vocab))
        assert sizes == sorted(sizes)

    def test_numbers_and_strings_are_distinct(self):
        vocab = Vocabulary()
        vocab.observe([1, "1"])
        assert len(vocab) == 2

    def test_contains_and_iter(self):
        vocab = Vocabulary()
        vocab.observe(["a", "b"])
        assert "a" in vocab
        assert "z" not in vocab
        assert list(vocab) == ["a", "b"]

    def test_unknown_feature_index_raises(self):
        with pytest.raises(KeyError):
            Vocabulary().index_of("missing")


class TestVectorize:

    def test_binary_presence(self):
        vocab = Vocabulary()
        vocab.observe(["a", "b", "c", "d"])
        assert vocab.vectorize(["c", "a", "a", "unknown"]) == [1, 0, 1, 0]

    def test_length_tracks_vocabulary_size(self):
        vocab = Vocabulary()
        vocab.observe(["a"])
        assert len(vocab.vectorize(["a"])) == 1
        vocab.observe(["b", "c"])
        assert vocab.vectorize(["a"]) == [1, 0, 0]

    def test_vectorize_does_not_grow_vocabulary(self):
        vocab = Vocabulary()
        vocab.observe(["a"])
        vocab.vectorize(["b", "c"])
        assert len(vocab) == 1


class TestFrequencies:

    def test_from_frequencies_keeps_key_order(self):
        vocab = Vocabulary.from_frequencies({"zeta": 2, "alpha": 1, "mid": 5})
        assert vocab.features == ("zeta", "alpha", "mid")
        assert vocab.index_of("alpha") == 1
        assert vocab.frequencies() == {"zeta": 2, "alpha": 1, "mid": 5}

    def test_frequencies_returns_a_copy(self):
        vocab = Vocabulary()
        vocab.observe(["a"])
        vocab.frequencies()["a"] = 100
        assert vocab.frequencies() == {"a": 1}

    def test_restored_vocabulary_keeps_growing(self):
        vocab = Vocabulary.from_frequencies({"a": 1})
        vocab.observe(["b", "a"])
        assert vocab.features == ("a", "b")
        assert vocab.frequencies() == {"a": 2, "b": 1}
