"""Shared test fixtures for incremental-bayes tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from incremental_bayes.classifier import BayesClassifier


@pytest.fixture
def parity_classifier() -> BayesClassifier:
    """Classifier trained on even and odd numbers."""
    return (
        BayesClassifier()
        .add_document(observation=[2, 4, 6, 8, 10, 12, 14, 16, 18, 20], label="even")
        .add_document(observation=[1, 3, 5, 7, 9, 11, 13, 15, 17, 19], label="odd")
        .train()
    )


@pytest.fixture
def sentiment_classifier() -> BayesClassifier:
    """Classifier trained on two short token sequences."""
    return (
        BayesClassifier()
        .add_document(observation=["you", "are", "a", "beautiful", "person"], label="good")
        .add_document(observation=["he", "is", "an", "evil", "person"], label="bad")
        .train()
    )


@pytest.fixture
def elements_classifier() -> BayesClassifier:
    """Classifier with smoothing 0.1 trained on numbers vs. elements."""
    return (
        BayesClassifier()
        .set("smoothing", 0.1)
        .add_document(observation=["one", "two", "three", "four"], label="numbers")
        .add_document(observation=["water", "earth", "fire", "wind"], label="elements")
        .train()
    )


@pytest.fixture
def weather_records() -> list[dict]:
    """Labelled raw-text records for the CLI."""
    return [
        {"text": "What a lovely, wonderful day!", "label": "positive"},
        {"text": "I love this sunny weather.", "label": "positive"},
        {"text": "Terrible, awful, rainy day.", "label": "negative"},
        {"text": "I hate this gloomy weather.", "label": "negative"},
    ]


@pytest.fixture
def dataset_file(tmp_path: Path, weather_records: list[dict]) -> Path:
    """JSON Lines dataset on disk."""
    path = tmp_path / "weather.jsonl"
    path.write_text(
        "\n".join(json.dumps(record) for record in weather_records) + "\n",
        encoding="utf-8",
    )
    return path
