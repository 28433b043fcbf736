"""Append-only feature vocabulary and binary vectorization."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .models import Observation


class Vocabulary:
    """Insertion-ordered registry of observed features.

    A feature's index is its position of first insertion and never changes.
    The vocabulary only grows. Each feature also carries an occurrence
    count, kept for persistence and inspection; it plays no part in scoring.

    Example::

        vocab = Vocabulary()
        vocab.observe(["red", "green", "red"])
        vocab.vectorize(["green", "blue"])   # [0, 1]
        vocab.frequencies()                  # {"red": 2, "green": 1}
    """

    def __init__(self) -> None:
        self._features: list[Observation] = []
        self._index: dict[Observation, int] = {}
        self._frequency: dict[Observation, int] = {}

    def __len__(self) -> int:
        return len(self._features)

    def __contains__(self, feature: object) -> bool:
        return feature in self._index

    def __iter__(self) -> Iterator[Observation]:
        return iter(self._features)

    def __repr__(self) -> str:
        return f"Vocabulary(size={len(self)})"

    @property
    def features(self) -> tuple[Observation, ...]:
        """Features in index order."""
        return tuple(self._features)

    def index_of(self, feature: Observation) -> int:
        """Return the permanent index of ``feature``.

        Raises:
            KeyError: If the feature has never been observed.
        """
        return self._index[feature]

    def observe(self, tokens: Iterable[Observation]) -> None:
        """Register tokens, appending unseen ones at the next index."""
        for token in tokens:
            if token not in self._index:
                self._index[token] = len(self._features)
                self._features.append(token)
                self._frequency[token] = 0
            self._frequency[token] += 1

    def vectorize(self, tokens: Iterable[Observation]) -> list[int]:
        """Project tokens onto a 0/1 presence vector over the current vocabulary."""
        present = set(tokens)
        return [1 if feature in present else 0 for feature in self._features]

    def frequencies(self) -> dict[Observation, int]:
        """Occurrence counts in index order."""
        return {feature: self._frequency[feature] for feature in self._features}

    @classmethod
    def from_frequencies(cls, frequencies: Mapping[Observation, int]) -> "Vocabulary":
        """Rebuild a vocabulary, assigning indices in the mapping's key order."""
        vocab = cls()
        for feature, count in frequencies.items():
            vocab._index[feature] = len(vocab._features)
            vocab._features.append(feature)
            vocab._frequency[feature] = int(count)
        return vocab
