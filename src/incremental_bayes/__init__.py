"""Incremental Bayes -- incremental Naive Bayes text classification."""

__version__ = "0.1.0"

from .classifier import (
    BayesClassifier,
    Classifier,
    DecodeError,
    DecodeResult,
    decode_model,
)
from .models import Classification, Document, Properties, Stats
from .normalizer import (
    ENGLISH_STOP_WORDS,
    PORTUGUESE_STOP_WORDS,
    IdentityStemmer,
    Normalizer,
    Stemmer,
    english_normalizer,
    portuguese_normalizer,
)
from .tokenizers import RegexpTokenizer, Tokenizer, WordsEnTokenizer, WordsPtTokenizer
from .vocabulary import Vocabulary

__all__ = [
    # Classification
    "Classifier",
    "BayesClassifier",
    "Vocabulary",
    "DecodeError",
    "DecodeResult",
    "decode_model",
    # Models
    "Document",
    "Classification",
    "Stats",
    "Properties",
    # Tokenization
    "Tokenizer",
    "RegexpTokenizer",
    "WordsEnTokenizer",
    "WordsPtTokenizer",
    # Normalization
    "Normalizer",
    "Stemmer",
    "IdentityStemmer",
    "english_normalizer",
    "portuguese_normalizer",
    "ENGLISH_STOP_WORDS",
    "PORTUGUESE_STOP_WORDS",
]
