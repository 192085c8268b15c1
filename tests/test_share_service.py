import unittest

from kalima.models.game import CellState
from kalima.services.evaluator import evaluate_guess
from kalima.services.share_service import generate_share_text


class TestShareText(unittest.TestCase):
    def test_won_game(self) -> None:
        guesses = ["مكتبة", "مدرسة"]
        evaluations = [evaluate_guess(guess, "مدرسة") for guess in guesses]

        self.assertEqual(
            generate_share_text(guesses, evaluations, True),
            "كلمه 2/6\n\n🟩⬛⬛⬛🟩\n🟩🟩🟩🟩🟩"
        )

    def test_lost_game_is_marked_x(self) -> None:
        guesses = ["سيارة"] * 6
        evaluations = [evaluate_guess(guess, "مدرسة") for guess in guesses]

        text = generate_share_text(guesses, evaluations, False)
        lines = text.split("\n")
        self.assertEqual(lines[0], "كلمه X/6")
        self.assertEqual(lines[1], "")
        self.assertEqual(lines[2:], ["🟨⬛⬛🟨🟩"] * 6)

    def test_rows_use_three_symbols(self) -> None:
        row = [CellState.CORRECT, CellState.PRESENT, CellState.ABSENT, CellState.ABSENT, CellState.CORRECT]
        text = generate_share_text(["abcde"], [row], True)
        self.assertEqual(text.split("\n")[-1], "🟩🟨⬛⬛🟩")
