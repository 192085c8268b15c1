import random
import unittest
from datetime import date, datetime, timedelta

from kalima.config.game_settings import DAILY_WORDS, EPOCH
from kalima.services.word_selector import day_index, random_word, word_of_day

WORDS = ["مدرسة", "مكتبة", "طاولة"]


class TestWordOfDay(unittest.TestCase):
    def test_epoch_is_first_word(self) -> None:
        self.assertEqual(day_index(EPOCH), 0)
        self.assertEqual(word_of_day(EPOCH, WORDS), "مدرسة")

    def test_consecutive_days_advance(self) -> None:
        self.assertEqual(word_of_day(date(2024, 1, 2), WORDS), "مكتبة")
        self.assertEqual(word_of_day(date(2024, 1, 3), WORDS), "طاولة")

    def test_time_of_day_is_ignored(self) -> None:
        morning = datetime(2025, 3, 30, 0, 1)
        night = datetime(2025, 3, 30, 23, 59)
        self.assertEqual(word_of_day(morning, WORDS), word_of_day(night, WORDS))
        self.assertEqual(word_of_day(morning, WORDS), word_of_day(morning.date(), WORDS))

    def test_stable_for_same_date(self) -> None:
        day = date(2026, 10, 18)
        self.assertEqual({word_of_day(day) for _ in range(5)}, {word_of_day(day)})

    def test_cycles_with_list_length(self) -> None:
        period = len(DAILY_WORDS)
        for offset in range(period):
            day = EPOCH + timedelta(days=400 + offset)
            self.assertEqual(word_of_day(day), word_of_day(day + timedelta(days=period)))

    def test_dates_before_epoch_wrap(self) -> None:
        self.assertEqual(word_of_day(date(2023, 12, 31), WORDS), "طاولة")

    def test_defaults_to_today(self) -> None:
        self.assertEqual(word_of_day(), word_of_day(date.today()))

    def test_empty_list_is_fatal(self) -> None:
        with self.assertRaises(ValueError):
            word_of_day(EPOCH, [])


class TestRandomWord(unittest.TestCase):
    def test_draws_from_daily_list(self) -> None:
        rng = random.Random(7)
        for _ in range(20):
            self.assertIn(random_word(rng), DAILY_WORDS)

    def test_seeded_draws_repeat(self) -> None:
        self.assertEqual(random_word(random.Random(3), WORDS), random_word(random.Random(3), WORDS))
