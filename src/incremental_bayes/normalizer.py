"""Text normalization: tokenize, drop stop words, stem.

Turns raw text into the token sequences the classifier consumes. Stemming
is delegated to any object with a ``stem(token)`` method; the factory
helpers use NLTK's Porter (English) and Snowball (Portuguese) stemmers,
neither of which needs downloaded corpora.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from nltk.stem import PorterStemmer, SnowballStemmer

from .tokenizers import Tokenizer, WordsEnTokenizer, WordsPtTokenizer


class Stemmer(Protocol):
    """Reduces a token to its root form."""

    def stem(self, token: str) -> str: ...


class IdentityStemmer:
    """Stemmer that returns tokens unchanged."""

    def stem(self, token: str) -> str:
        return token


ENGLISH_STOP_WORDS: frozenset[str] = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "be",
    "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "would", "could", "should", "may", "might", "shall", "can", "must",
    "not", "no", "nor", "so", "if", "then", "than", "that", "this",
    "these", "those", "it", "its", "he", "she", "they", "them", "their",
    "his", "her", "our", "your", "we", "you", "who", "whom", "which",
    "what", "where", "when", "how", "all", "each", "every", "both",
    "few", "more", "most", "other", "some", "such", "any", "only",
    "own", "same", "too", "very", "just", "about", "above", "after",
    "again", "also", "because", "before", "between", "during", "into",
    "through", "under", "until", "up", "out", "over", "here", "there",
    "i", "me", "my", "am",
})

PORTUGUESE_STOP_WORDS: frozenset[str] = frozenset({
    "a", "o", "as", "os", "um", "uma", "uns", "umas", "de", "do", "da",
    "dos", "das", "em", "no", "na", "nos", "nas", "por", "pelo", "pela",
    "para", "com", "sem", "e", "ou", "mas", "que", "se", "não", "é",
    "ao", "aos", "à", "às", "eu", "tu", "ele", "ela", "nós", "vós",
    "eles", "elas", "meu", "minha", "seu", "sua", "este", "esta",
    "esse", "essa", "isso", "isto", "aquele", "aquela", "foi", "ser",
    "são", "está", "estão", "muito", "mais", "já", "também", "como",
})


class Normalizer:
    """Tokenize, remove stop words, then stem each surviving token.

    Example::

        normalizer = english_normalizer()
        normalizer.normalize("The runners were running")  # ["runner", "run"]

    Args:
        tokenizer: Splits text into lowercase tokens.
        stemmer: Reduces each token to a root form.
        stopwords: Tokens to remove before stemming.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        stemmer: Stemmer,
        stopwords: Iterable[str] = (),
    ) -> None:
        self.tokenizer = tokenizer
        self.stemmer = stemmer
        self.stopwords = frozenset(stopwords)

    def normalize(self, text: str) -> list[str]:
        return [
            self.stemmer.stem(token)
            for token in self.tokenizer.tokenize(text)
            if token not in self.stopwords
        ]


def english_normalizer(
    stopwords: Iterable[str] = ENGLISH_STOP_WORDS,
    stem: bool = True,
) -> Normalizer:
    """Normalizer with the English tokenizer and the Porter stemmer."""
    stemmer: Stemmer = PorterStemmer() if stem else IdentityStemmer()
    return Normalizer(WordsEnTokenizer(), stemmer, stopwords)


def portuguese_normalizer(
    stopwords: Iterable[str] = PORTUGUESE_STOP_WORDS,
    stem: bool = True,
) -> Normalizer:
    """Normalizer with the Portuguese tokenizer and the Snowball stemmer."""
    stemmer: Stemmer = SnowballStemmer("portuguese") if stem else IdentityStemmer()
    return Normalizer(WordsPtTokenizer(), stemmer, stopwords)
