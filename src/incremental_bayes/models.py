"""Data models for the incremental Bayes classifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

Observation = Union[str, int, float]
Label = Union[str, int, float]


@dataclass
class Document:
    """An observation sequence paired with its label."""

    observation: list[Observation]
    label: Label

    @property
    def is_empty(self) -> bool:
        return len(self.observation) == 0

    def to_dict(self) -> dict:
        return {
            "observation": list(self.observation),
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        return cls(observation=list(data["observation"]), label=data["label"])


@dataclass
class Classification:
    """A label and its ranking score.

    The score is proportional to an unnormalized posterior. Scores for one
    query do not sum to 1 and are only meaningful relative to each other.
    """

    label: Label
    score: float

    def to_dict(self) -> dict:
        return {"label": self.label, "score": self.score}


@dataclass
class Stats:
    """Trained-document counts.

    Attributes:
        labels: Number of trained documents per label.
        corpus: Total number of trained documents.
    """

    labels: dict[Label, int] = field(default_factory=dict)
    corpus: int = 0

    def record(self, label: Label) -> None:
        """Count one more trained document for ``label``."""
        self.labels[label] = self.labels.get(label, 0) + 1
        self.corpus += 1

    def to_dict(self) -> dict:
        return {"labels": dict(self.labels), "corpus": self.corpus}

    @classmethod
    def from_dict(cls, data: dict) -> "Stats":
        labels = data.get("labels", {})
        return cls(
            labels={label: int(count) for label, count in labels.items()},
            corpus=int(data.get("corpus", 0)),
        )


@dataclass
class Properties:
    """Classifier configuration.

    Attributes:
        smoothing: Laplace additive constant, applied once when a label's
            row is first created. Must be >= 0.
    """

    smoothing: float = 1.0

    def __post_init__(self) -> None:
        self.smoothing = self._check_smoothing(self.smoothing)

    @staticmethod
    def _check_smoothing(value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"smoothing must be a number, got {value!r}")
        if value < 0:
            raise ValueError(f"smoothing must be >= 0, got {value}")
        return float(value)

    def to_dict(self) -> dict:
        return {"smoothing": self.smoothing}

    @classmethod
    def from_dict(cls, data: dict) -> "Properties":
        return cls(smoothing=data.get("smoothing", 1.0))
