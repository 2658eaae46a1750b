"""
Game Configuration Constants Module

Defines the board dimensions, the accepted alphabet and the word list
loader. The word list is loaded once by the word service at startup; an
empty or malformed list is a fatal configuration error.
"""

import json
import os
import unicodedata
from typing import Dict, Final, List, Optional

from ..errors import WordListError

WORD_LENGTH: Final[int] = 5
"""Number of letters in every guess and in the word of the day."""

MAX_GUESSES: Final[int] = 6
"""Maximum number of guess attempts allowed per day."""

ALPHABET: Final[str] = 'abcdefghijklmnopqrstuvwxyzñáéíóúü'
"""Lowercase letters a guess may contain (base Latin plus Spanish accents)."""

DEFAULT_WORD_LIST_PATH: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'palabras.json'
)


def _read_raw_words(path: str) -> List[str]:
    """Read a JSON array or a newline separated text file."""
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    if path.endswith('.json'):
        try:
            words = json.loads(content)
        except json.JSONDecodeError as e:
            raise WordListError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(words, list):
            raise WordListError("JSON file must contain an array of words")
        return [str(word) for word in words]

    return content.splitlines()


def load_word_list(path: Optional[str] = None) -> List[str]:
    """
    Load the word list used for both the daily word and dictionary checks.

    Args:
        path: JSON array or text file; defaults to the bundled palabras.json

    Returns:
        List[str]: Lowercase words of exactly WORD_LENGTH letters, in file order

    Raises:
        WordListError: If the file is missing, malformed, empty, or holds
            a word of the wrong length or with letters outside ALPHABET
    """
    path = path or DEFAULT_WORD_LIST_PATH

    try:
        raw_words = _read_raw_words(path)
    except FileNotFoundError as e:
        raise WordListError(f"Word list file not found: {path}") from e

    words = []
    for raw in raw_words:
        word = unicodedata.normalize('NFC', raw.replace('\ufeff', '').strip().lower())
        if not word:
            continue
        if len(word) != WORD_LENGTH:
            raise WordListError(f"Word '{word}' is not {WORD_LENGTH} characters long")
        if any(char not in ALPHABET for char in word):
            raise WordListError(f"Word '{word}' contains characters outside the alphabet")
        words.append(word)

    if not words:
        raise WordListError("Word list cannot be empty")

    return words


def validate_word_list_integrity(word_list: List[str]) -> bool:
    """
    Validates the integrity and consistency of a loaded word list.

    Checks length, alphabet, lowercase formatting and uniqueness.

    Returns:
        bool: True if the word list passes all validation checks

    Raises:
        WordListError: If any validation check fails with detailed error message
    """
    if not word_list:
        raise WordListError("Word list cannot be empty")

    for index, word in enumerate(word_list):
        if len(word) != WORD_LENGTH:
            raise WordListError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if any(char not in ALPHABET for char in word):
            raise WordListError(f"Word at index {index} '{word}' contains characters outside the alphabet")

        if word != word.lower():
            raise WordListError(f"Word at index {index} '{word}' is not in lowercase format")

    if len(word_list) != len(set(word_list)):
        duplicates = sorted({word for word in word_list if word_list.count(word) > 1})
        raise WordListError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_word_statistics(word_list: List[str]) -> Dict:
    """
    Summarizes a word list for the health endpoint.

    Returns:
        dict: total_words, accented_words, avg_vowel_count and the five
            most common letters
    """
    if not word_list:
        return {"error": "Word list is empty"}

    vowels = set('aeiouáéíóúü')
    accented = set('ñáéíóúü')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in word_list)

    letter_frequency: Dict[str, int] = {}
    for word in word_list:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(word_list),
        "accented_words": sum(1 for word in word_list if accented & set(word)),
        "avg_vowel_count": round(total_vowels / len(word_list), 2),
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
