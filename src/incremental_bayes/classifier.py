"""Incremental Naive Bayes classification over binary feature vectors.

The classifier keeps every document it is given and trains lazily: each
call to ``train()`` consumes only the documents added since the previous
call. Learned state is a feature vocabulary, a per-label row of smoothed
feature counts, and trained-document statistics. All of it can be exported
to a plain record (JSON by default) and restored losslessly.

Scoring follows the presence-only variant of Bayes' rule: only features
present in the query contribute, and the product of per-feature ratios is
accumulated as a sum of logs before being exponentiated. Scores are
ranking heuristics, not calibrated probabilities.

Instances are not thread-safe. ``classify`` calls may run concurrently with
each other, but ``add_document``, ``train`` and ``restore`` need external
locking.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

from .models import Classification, Document, Label, Observation, Properties, Stats
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)

Serializer = Callable[[dict], Any]
Deserializer = Callable[[Any], Any]


# ---------------------------------------------------------------------------
# Capability set
# ---------------------------------------------------------------------------

@runtime_checkable
class Classifier(Protocol):
    """Operations every classifier variant provides."""

    def classify(self, observation: Sequence[Observation]) -> list[Classification]: ...

    def add_document(self, document: Optional[Document | Mapping] = None, **kwargs: Any) -> "Classifier": ...

    def train(self) -> "Classifier": ...

    def to_json(self, compact: bool = False, serializer: Optional[Serializer] = None) -> Any: ...

    def restore(self, data: Any, deserializer: Optional[Deserializer] = None, strict: bool = False) -> "Classifier": ...


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class DecodeError(ValueError):
    """Raised when a persisted model cannot be decoded."""


@dataclass
class DecodeResult:
    """Outcome of decoding a persisted model: a record or an error."""

    record: Optional[Mapping] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def decode_model(data: Any, deserializer: Optional[Deserializer] = None) -> DecodeResult:
    """Turn an encoded or already-structured model into a record.

    Mappings pass through untouched; anything else goes through
    ``deserializer`` (``json.loads`` by default).
    """
    if isinstance(data, Mapping):
        return DecodeResult(record=data)

    try:
        record = (deserializer or json.loads)(data)
    except Exception as e:
        error = DecodeError(f"Could not decode model: {e}")
        error.__cause__ = e
        return DecodeResult(error=error)

    if not isinstance(record, Mapping):
        return DecodeResult(
            error=DecodeError(f"Decoded model must be a mapping, got {type(record).__name__}")
        )
    return DecodeResult(record=record)


# ---------------------------------------------------------------------------
# Bayes classifier
# ---------------------------------------------------------------------------

class BayesClassifier:
    """Incremental Naive Bayes classifier.

    Example::

        classifier = (
            BayesClassifier()
            .set("smoothing", 0.1)
            .add_document(observation=["cheap", "pills"], label="spam")
            .add_document(observation=["meeting", "notes"], label="ham")
            .train()
        )

        classifier.classify(["cheap", "meeting", "pills"])[0].label  # "spam"

        model = classifier.to_json(compact=True)
        restored = BayesClassifier.of(model)
    """

    def __init__(self, smoothing: float = 1.0) -> None:
        self._vocabulary = Vocabulary()
        self._matrix: dict[Label, list[float]] = {}
        self._corpus: list[Document] = []
        self._trained = 0
        self._properties = Properties(smoothing=smoothing)
        self.stats = Stats()

    def __repr__(self) -> str:
        return (
            f"BayesClassifier(features={len(self._vocabulary)}, "
            f"labels={len(self._matrix)}, trained={self.stats.corpus})"
        )

    # -- configuration ------------------------------------------------------

    def get(self, prop: str) -> Any:
        """Return a configuration property (e.g. ``"smoothing"``)."""
        if prop not in _PROPERTY_NAMES:
            raise KeyError(f"Unknown property: {prop}. Known: {sorted(_PROPERTY_NAMES)}")
        return getattr(self._properties, prop)

    def set(self, prop: str, value: Any) -> "BayesClassifier":
        """Set a configuration property.

        Smoothing only affects label rows created after the change.

        Raises:
            KeyError: If ``prop`` is not a known property.
            ValueError: If the value is invalid for the property.
        """
        if prop not in _PROPERTY_NAMES:
            raise KeyError(f"Unknown property: {prop}. Known: {sorted(_PROPERTY_NAMES)}")
        updated = Properties(**{**self._properties.to_dict(), prop: value})
        self._properties = updated
        return self

    # -- read-only views ----------------------------------------------------

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    @property
    def labels(self) -> list[Label]:
        """Labels with a trained row."""
        return list(self._matrix)

    @property
    def corpus(self) -> tuple[Document, ...]:
        return tuple(self._corpus)

    def row(self, label: Label) -> list[float]:
        """Copy of the smoothed count row for ``label``."""
        return list(self._matrix[label])

    # -- training -----------------------------------------------------------

    def add_document(self, document: Optional[Document | Mapping] = None, **kwargs: Any) -> "BayesClassifier":
        """Add a document to the corpus and grow the vocabulary.

        Accepts a :class:`Document`, a mapping with ``observation`` and
        ``label`` keys, or those two keywords.
        Documents with no observations are ignored. Nothing is learned until
        :meth:`train` is called.
        """
        if document is None:
            document = Document(observation=list(kwargs["observation"]), label=kwargs["label"])
        elif isinstance(document, Mapping):
            document = Document.from_dict(document)
        elif not isinstance(document, Document):
            raise TypeError(f"Expected a Document or mapping, got {type(document).__name__}")

        if document.is_empty:
            logger.debug("Ignoring empty document for label %r", document.label)
            return self

        self._corpus.append(Document(observation=list(document.observation), label=document.label))
        self._vocabulary.observe(document.observation)
        return self

    def train(self) -> "BayesClassifier":
        """Fold every not-yet-trained document into the label matrix."""
        pending = self._corpus[self._trained:]
        baseline = 1 + self._properties.smoothing

        for document in pending:
            vector = self._vocabulary.vectorize(document.observation)
            row = self._matrix.get(document.label)

            if row is None:
                self._matrix[document.label] = [value + baseline for value in vector]
            else:
                # Features seen after this row was created start at the baseline.
                if len(row) < len(vector):
                    row.extend([baseline] * (len(vector) - len(row)))
                for index, value in enumerate(vector):
                    row[index] += value

            self.stats.record(document.label)
            self._trained += 1

        if pending:
            logger.debug(
                "Trained %d document(s); %d total across %d label(s)",
                len(pending), self.stats.corpus, len(self._matrix),
            )
        return self

    # -- scoring ------------------------------------------------------------

    def classify(self, observation: Sequence[Observation]) -> list[Classification]:
        """Rank every trained label for ``observation``, best first.

        Labels with equal scores come back in no particular order.
        """
        vector = self._vocabulary.vectorize(observation)
        results = [
            Classification(label=label, score=self.probability(vector, label))
            for label in self._matrix
        ]
        results.sort(key=lambda c: c.score, reverse=True)
        return results

    def probability(self, vector: Sequence[int], label: Label) -> float:
        """Unnormalized posterior score of ``label`` for a feature vector.

        Only features present in ``vector`` contribute. The per-feature
        ratios are combined as a sum of logs to avoid underflow. Ratios can
        exceed 1, so very long queries may saturate at ``math.inf``.
        """
        total = self.stats.labels.get(label, 0)
        if not total:
            return 0.0

        row = self._matrix.get(label, [])
        smoothing = self._properties.smoothing

        log_sum = 0.0
        for index, value in enumerate(vector):
            if not value:
                continue
            mass = row[index] if index < len(row) else smoothing
            if mass <= 0:
                return 0.0
            log_sum += math.log(mass / total)

        if not self.stats.corpus:
            return 0.0
        prior = total / self.stats.corpus
        try:
            return prior * math.exp(log_sum)
        except OverflowError:
            return math.inf

    # -- serialization ------------------------------------------------------

    def to_dict(self, compact: bool = False) -> dict:
        """Export learned state as a plain record.

        The corpus is omitted when ``compact`` is true. Such a model can
        still learn from new documents, but not retrain on the old ones.
        """
        record = {
            "features": self._vocabulary.frequencies(),
            "matrix": {label: list(row) for label, row in self._matrix.items()},
            "properties": self._properties.to_dict(),
            "stats": self.stats.to_dict(),
        }
        if not compact:
            record["corpus"] = [document.to_dict() for document in self._corpus]
        return record

    def to_json(self, compact: bool = False, serializer: Optional[Serializer] = None) -> Any:
        """Encode :meth:`to_dict` output with ``serializer`` (``json.dumps`` by default)."""
        return (serializer or json.dumps)(self.to_dict(compact=compact))

    def restore(
        self,
        data: Any,
        deserializer: Optional[Deserializer] = None,
        strict: bool = False,
    ) -> "BayesClassifier":
        """Load state from an encoded or structured model.

        Sections that are missing or not composite keep their current value.
        If decoding fails the classifier is left untouched: the error is
        logged and ignored, or raised when ``strict`` is true.

        Raises:
            DecodeError: In strict mode, if the model cannot be decoded.
        """
        result = decode_model(data, deserializer)
        if result.ok:
            try:
                self._apply(result.record)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                error = DecodeError(f"Malformed model: {e}")
                error.__cause__ = e
                result = DecodeResult(error=error)

        if not result.ok:
            if strict:
                raise result.error from result.error.__cause__
            logger.warning("Ignoring model that could not be restored: %s", result.error)
        return self

    def _apply(self, record: Mapping) -> None:
        vocabulary = self._vocabulary
        matrix = self._matrix
        corpus = self._corpus
        properties = self._properties
        stats = self.stats

        if isinstance(record.get("features"), Mapping):
            vocabulary = Vocabulary.from_frequencies(record["features"])
        if isinstance(record.get("matrix"), Mapping):
            matrix = {label: _parse_row(row) for label, row in record["matrix"].items()}
        if isinstance(record.get("corpus"), list):
            corpus = [Document.from_dict(item) for item in record["corpus"]]
        if isinstance(record.get("properties"), Mapping):
            known = {k: v for k, v in record["properties"].items() if k in _PROPERTY_NAMES}
            properties = Properties(**{**properties.to_dict(), **known})
        if isinstance(record.get("stats"), Mapping):
            stats = Stats.from_dict(record["stats"])
            if sum(stats.labels.values()) != stats.corpus:
                raise ValueError(
                    f"stats.corpus ({stats.corpus}) does not match label counts "
                    f"({sum(stats.labels.values())})"
                )

        self._vocabulary = vocabulary
        self._matrix = matrix
        self._corpus = corpus
        self._properties = properties
        self.stats = stats
        # A full corpus lines up with stats.corpus; a compact model's corpus starts empty.
        self._trained = min(stats.corpus, len(corpus))

        logger.debug(
            "Restored model with %d feature(s), %d label(s), %d corpus document(s)",
            len(vocabulary), len(matrix), len(corpus),
        )

    @classmethod
    def of(cls, data: Any, **kwargs: Any) -> "BayesClassifier":
        """Build a classifier from an encoded or structured model."""
        return cls().restore(data, **kwargs)

    # -- persistence --------------------------------------------------------

    def save(self, path: str | Path, compact: bool = False) -> None:
        """Write the JSON model to ``path``, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json(compact=compact))
        logger.info("Saved model to %s", path)

    @classmethod
    def load(cls, path: str | Path) -> "BayesClassifier":
        """Read a JSON model written by :meth:`save`.

        Raises:
            DecodeError: If the file does not hold a valid model.
        """
        with open(path, "rb") as f:
            return cls.of(f.read(), strict=True)


_PROPERTY_NAMES = frozenset(f.name for f in fields(Properties))


def _parse_row(row: Any) -> list[float]:
    if not isinstance(row, list):
        raise TypeError(f"matrix row must be a list, got {type(row).__name__}")
    return [float(value) for value in row]
