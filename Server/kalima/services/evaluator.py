"""
Guess Evaluator

Scores guesses letter by letter and derives the keyboard letter states.
"""

from typing import Dict, List, Optional

from ..models.game import CellState, Evaluation


def evaluate_guess(guess: str, solution: str) -> Evaluation:
    """
    Implements the two-pass letter evaluation with duplicate handling.

    A letter is credited as CORRECT or PRESENT at most as many times as it
    occurs in the solution.

    Raises:
        ValueError: If guess and solution differ in length
    """
    if len(guess) != len(solution):
        raise ValueError(f"Guess length {len(guess)} does not match solution length {len(solution)}")

    result: List[Optional[CellState]] = [None] * len(solution)
    solution_chars: List[Optional[str]] = list(solution)

    # First pass: exact positions, consuming the matched solution letter
    for i, letter in enumerate(guess):
        if letter == solution_chars[i]:
            result[i] = CellState.CORRECT
            solution_chars[i] = None

    # Second pass: remaining letters against unconsumed solution letters
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if letter in solution_chars:
            result[i] = CellState.PRESENT
            solution_chars[solution_chars.index(letter)] = None
        else:
            result[i] = CellState.ABSENT

    return [state for state in result if state is not None]


def merge_key_state(current: Optional[CellState], new: CellState) -> Optional[CellState]:
    """Status can only progress in priority order: CORRECT > PRESENT > ABSENT."""
    if new == CellState.CORRECT:
        return CellState.CORRECT
    if new == CellState.PRESENT and current != CellState.CORRECT:
        return CellState.PRESENT
    if new == CellState.ABSENT and current is None:
        return CellState.ABSENT
    return current


def derive_key_states(guesses: List[str], evaluations: List[Evaluation]) -> Dict[str, CellState]:
    """
    Folds the (guess, evaluation) history into a letter -> best state mapping.

    Pairs are replayed in order; guesses without an evaluation are skipped.
    """
    key_states: Dict[str, CellState] = {}
    for guess, evaluation in zip(guesses, evaluations):
        for letter, state in zip(guess, evaluation):
            merged = merge_key_state(key_states.get(letter), state)
            if merged is not None:
                key_states[letter] = merged
    return key_states


