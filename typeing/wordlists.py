"""Word sources for the typing test.

A WordSelector hands out a fresh batch of words for every test. Words come
from one of the lists shipped with the package, from a user supplied file,
or from the operating system's dictionary.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Iterable, Optional

from .errors import WordListError

logger = logging.getLogger(__name__)

OS_WORDLIST_PATH = Path("/usr/share/dict/words")


class BuiltInWordlist(Enum):
    """Word lists selectable with --wordlist."""
    TOP250 = "top250"
    COMMONLY_MISSPELLED = "commonly_misspelled"
    OS = "os"  # The operating system's dictionary, see OS_WORDLIST_PATH

    @classmethod
    def from_name(cls, name: str) -> "BuiltInWordlist":
        normalized = name.strip().lower().replace("-", "_")
        for member in cls:
            if member.value == normalized:
                return member
        choices = ", ".join(member.value.replace("_", "-") for member in cls)
        raise ValueError(f"Unknown word list '{name}' (choose from: {choices})")


def parse_words(text: str) -> list[str]:
    """Split word list contents into words, one per line.

    Blank lines and entries containing whitespace are skipped since a word
    must occupy exactly its own columns in the word block.
    """
    words = []
    for line in text.splitlines():
        word = line.strip()
        if word and not any(ch.isspace() for ch in word):
            words.append(word)
    return words


class WordSelector(ABC):
    """Chooses the words for the next test."""

    @abstractmethod
    def new_words(self, num_words: int) -> list[str]:
        """Return num_words words in display order."""


class RawWordSelector(WordSelector):
    """Chooses words at random from an in-memory list."""

    def __init__(self, words: Iterable[str], rng: Optional[random.Random] = None):
        self.words = list(words)
        if not self.words:
            raise WordListError("Word list is empty")
        self._rng = rng or random.Random()

    def new_words(self, num_words: int) -> list[str]:
        return [self._rng.choice(self.words) for _ in range(num_words)]

    @classmethod
    def from_builtin(cls, wordlist: BuiltInWordlist, rng: Optional[random.Random] = None) -> "RawWordSelector":
        if wordlist is BuiltInWordlist.OS:
            return cls.from_file(OS_WORDLIST_PATH, rng)
        text = (resources.files("typeing") / "word_lists" / wordlist.value).read_text(encoding="utf-8")
        return cls._from_text(text, wordlist.value, rng)

    @classmethod
    def from_file(cls, path, rng: Optional[random.Random] = None) -> "RawWordSelector":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise WordListError(f"Could not read word list {path}: {e}") from e
        return cls._from_text(text, str(path), rng)

    @classmethod
    def _from_text(cls, text: str, source: str, rng: Optional[random.Random]) -> "RawWordSelector":
        words = parse_words(text)
        if not words:
            raise WordListError(f"Word list {source} contains no words")
        logger.debug("Loaded %d words from %s", len(words), source)
        return cls(words, rng)
