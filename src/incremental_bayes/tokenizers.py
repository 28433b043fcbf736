"""Regex-based word tokenizers.

Each tokenizer splits text on a delimiter pattern and lowercases the
pieces, dropping empty fragments left by leading or trailing delimiters.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional, Union


class Tokenizer(ABC):
    """Splits raw text into an ordered list of tokens."""

    @abstractmethod
    def tokenize(self, text: str) -> list[str]:
        """Return the tokens of ``text`` in order."""

    @staticmethod
    def trim(tokens: Iterable[Optional[str]]) -> list[str]:
        """Drop ``None``, empty and whitespace-only tokens."""
        return [token for token in tokens if token and token.strip()]


class RegexpTokenizer(Tokenizer):
    """Tokenizer that splits on a delimiter regular expression.

    Args:
        pattern: Delimiter pattern, as a string or compiled regex.
    """

    def __init__(self, pattern: Union[str, re.Pattern]) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pattern={self.pattern.pattern!r})"

    def tokenize(self, text: str) -> list[str]:
        return self.trim(piece.lower() for piece in self.pattern.split(text))


# Anything other than ASCII letters, digits and underscore separates words
_WORDS_EN_RE = re.compile(r"[^a-z0-9_]+", re.IGNORECASE)

# Same, but Portuguese accented letters and cedilla belong to words
_WORDS_PT_RE = re.compile(r"[^a-zà-òá-úã-õç0-9_]+", re.IGNORECASE)


class WordsEnTokenizer(RegexpTokenizer):
    """English word tokenizer."""

    def __init__(self) -> None:
        super().__init__(_WORDS_EN_RE)


class WordsPtTokenizer(RegexpTokenizer):
    """Portuguese word tokenizer (keeps accented letters inside words)."""

    def __init__(self) -> None:
        super().__init__(_WORDS_PT_RE)
