"""
Game Configuration Constants Module

This module defines all game configuration constants and loads the word
databases. All game parameters are centralized here to enable easy modification.

Word databases (JSON arrays in ``data/``):
- words-main.json: daily solutions, indexed by day
- words.json: canonical exact-match list accepted without further checks
- dict.json: larger reference dictionary (any length, filtered on load)
"""

import json
import os
import re
from datetime import date
from typing import List, Final

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""Number of letters in every solution and guess."""

MAX_GUESSES: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

EPOCH: Final[date] = date(2024, 1, 1)
"""Day zero of the daily word rotation."""

ARABIC_DIACRITICS = re.compile(r'[\u064B-\u065F]')
NON_ARABIC_LETTERS = re.compile(r'[^\u0621-\u064A]')

_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


def _load_json_list(file_name: str) -> List[str]:
    """
    Load a JSON array of words from the data directory.

    Raises:
        FileNotFoundError: If the file is not found
        ValueError: If the file is malformed or does not hold an array
    """
    json_file_path = os.path.join(_DATA_DIR, file_name)

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_name}: {e}")

    if not isinstance(word_list, list):
        raise ValueError(f"{file_name} must contain an array of words")

    return [str(word).strip() for word in word_list]


def _load_word_list(file_name: str) -> List[str]:
    """
    Load a list of playable words, every entry exactly WORD_LENGTH Arabic letters.

    Raises:
        ValueError: If word list is empty or contains invalid words
    """
    word_list = _load_json_list(file_name)

    if not word_list:
        raise ValueError(f"Word list {file_name} cannot be empty")

    for word in word_list:
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word '{word}' in {file_name} is not {WORD_LENGTH} characters long")
        if NON_ARABIC_LETTERS.search(word):
            raise ValueError(f"Word '{word}' in {file_name} contains non-Arabic characters")

    return word_list


def _load_dictionary(file_name: str) -> List[str]:
    """Load the reference dictionary, keeping only entries of playable length."""
    return [word for word in _load_json_list(file_name) if len(word) == WORD_LENGTH]


# Daily solutions, one per day in rotation
DAILY_WORDS: Final[List[str]] = _load_word_list('words-main.json')

# Canonical exact-match list used for validation
WORD_LIST: Final[List[str]] = _load_word_list('words.json')

# Larger reference dictionary
DICTIONARY: Final[List[str]] = _load_dictionary('dict.json')


def validate_word_list_integrity(word_list: List[str] = WORD_LIST) -> bool:
    """
    Validates the integrity and consistency of a word database.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly WORD_LENGTH characters
    2. Character validation: Only Arabic letters allowed
    3. Uniqueness validation: No duplicate entries

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not word_list:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(word_list):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if NON_ARABIC_LETTERS.search(word):
            raise ValueError(f"Word at index {index} '{word}' contains non-Arabic characters")

    if len(word_list) != len(set(word_list)):
        duplicates = sorted({word for word in word_list if word_list.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_word_statistics() -> dict:
    """
    Summarizes the word databases for the health endpoint.

    Returns:
        dict: Counts of daily, exact-list and dictionary words plus the most
            common letters of the exact list
    """
    letter_frequency = {}
    for word in WORD_LIST:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "daily_words": len(DAILY_WORDS),
        "total_words": len(WORD_LIST),
        "dictionary_words": len(DICTIONARY),
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_word_list_integrity(DAILY_WORDS)
        validate_word_list_integrity(WORD_LIST)
        print(" Word list validation passed")

        stats = get_word_statistics()
        print(f" Game statistics: {stats}")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
