"""
Word Service

Deterministic word-of-the-day selection and dictionary checks.
"""

import datetime
import logging
import math
import unicodedata
from typing import List, Optional, Sequence

from ..config.game_settings import ALPHABET, WORD_LENGTH, load_word_list
from ..errors import WordListError

logger = logging.getLogger(__name__)


def normalize(word: str) -> str:
    """Normalize input word: trim, lowercase, composed accents."""
    return unicodedata.normalize('NFC', word.strip().lower())


def seed_for_date(day: datetime.date) -> int:
    """Integer seed for a calendar day, e.g. 2025-03-07 -> 20250307."""
    return day.year * 10000 + day.month * 100 + day.day


def seeded_index(seed: int, size: int) -> int:
    """
    Map a seed to an index in [0, size).

    Uses the fractional part of sin(seed) * 10000. math.sin is IEEE-754
    double precision, so every process maps the same seed to the same index.
    """
    x = math.sin(seed) * 10000
    return math.floor((x - math.floor(x)) * size)


def daily_word(day: datetime.date, word_list: Sequence[str]) -> str:
    """
    Returns the word of the day for `day`.

    Raises:
        WordListError: If word_list is empty
    """
    if not word_list:
        raise WordListError("Cannot select a daily word from an empty word list")
    return word_list[seeded_index(seed_for_date(day), len(word_list))]


def is_valid_word(guess: str, word_list: Sequence[str]) -> bool:
    """Case-insensitive dictionary membership."""
    return normalize(guess) in {normalize(word) for word in word_list}


def is_well_formed_guess(guess) -> bool:
    """True if guess is a WORD_LENGTH string of letters from ALPHABET (any case)."""
    if not isinstance(guess, str):
        return False
    normalized = unicodedata.normalize('NFC', guess).lower()
    return len(normalized) == WORD_LENGTH and all(char in ALPHABET for char in normalized)


class WordService:
    """
    Holds the loaded word list and answers daily-word and dictionary queries.

    The word list is immutable after construction; the service keeps no
    per-player state.
    """

    def __init__(self, word_list: List[str]):
        if not word_list:
            raise WordListError("Word list cannot be empty")
        self.word_list = [normalize(word) for word in word_list]
        self._dictionary = frozenset(self.word_list)

    @classmethod
    def from_path(cls, path: Optional[str] = None) -> "WordService":
        return cls(load_word_list(path))

    def get_daily_word(self, day: Optional[datetime.date] = None) -> str:
        """Word of the day for `day` (server-local today by default)."""
        return daily_word(day or datetime.date.today(), self.word_list)

    def is_valid_word(self, guess: str) -> bool:
        return normalize(guess) in self._dictionary


# Global service instance
_word_service = None


def get_word_service() -> Optional[WordService]:
    """Get the global word service instance."""
    return _word_service


def initialize_word_service(path: Optional[str] = None) -> WordService:
    """
    Initialize the global word service instance.

    Raises:
        WordListError: If the word list cannot be loaded; the server must not start
    """
    global _word_service
    _word_service = WordService.from_path(path)
    logger.info("Loaded %d words for daily selection", len(_word_service.word_list))
    return _word_service
