"""
Word Selector

Maps a calendar day to its solution word, and draws random-mode words.
"""

import random
from datetime import date, datetime
from typing import List, Optional, Union

from ..config.game_settings import DAILY_WORDS, EPOCH


def day_index(day: Optional[Union[date, datetime]] = None) -> int:
    """Whole local calendar days elapsed since EPOCH (negative before it)."""
    if day is None:
        day = date.today()
    elif isinstance(day, datetime):
        day = day.date()
    return (day - EPOCH).days


def word_of_day(day: Optional[Union[date, datetime]] = None, words: List[str] = DAILY_WORDS) -> str:
    """
    Returns the solution for a calendar day.

    Args:
        day: Date (or datetime, time of day is ignored); defaults to today
        words: Daily rotation list

    Raises:
        ValueError: If the rotation list is empty
    """
    if not words:
        raise ValueError("Daily word list cannot be empty")
    return words[day_index(day) % len(words)]


def random_word(rng: Optional[random.Random] = None, words: List[str] = DAILY_WORDS) -> str:
    """Uniform draw from the daily list for random mode."""
    if not words:
        raise ValueError("Daily word list cannot be empty")
    return (rng or random).choice(words)
