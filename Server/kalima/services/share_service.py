"""
Share Text

Builds the plain-text result summary handed to the client's share sheet.
"""

from typing import List

from ..config.game_settings import MAX_GUESSES
from ..config.translations import translations
from ..models.game import CellState, Evaluation

SHARE_SYMBOLS = {
    CellState.CORRECT: '🟩',
    CellState.PRESENT: '🟨',
    CellState.ABSENT: '⬛',
}


def generate_share_text(guesses: List[str], evaluations: List[Evaluation], won: bool,
                        max_guesses: int = MAX_GUESSES) -> str:
    """
    Title line with the guess count (X on a loss) over the guess limit, a
    blank line, then one symbol row per evaluated guess.
    """
    grid = '\n'.join(
        ''.join(SHARE_SYMBOLS.get(state, SHARE_SYMBOLS[CellState.ABSENT]) for state in row)
        for row in evaluations
    )
    guess_count = len(guesses) if won else 'X'
    return f"{translations['ar']['title']} {guess_count}/{max_guesses}\n\n{grid}"
