"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config.game_settings import MAX_GUESSES, WORD_LENGTH


class CellState(Enum):
    """Per-letter evaluation outcome. EMPTY is only used for unfilled cells."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    EMPTY = "empty"


class SessionPhase(Enum):
    """Lifecycle of one day's (or one random round's) puzzle."""
    NO_SESSION = "no_session"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


Evaluation = List[CellState]


@dataclass
class SessionState:
    """Persisted puzzle state for one user and one solution."""
    solution: str
    guesses: List[str] = field(default_factory=list)
    current_guess: str = ""
    game_won: bool = False
    game_over: bool = False
    user_id: Optional[str] = None
    last_played: Optional[str] = None
    stats_recorded: bool = False

    @property
    def phase(self) -> SessionPhase:
        if self.game_over:
            return SessionPhase.WON if self.game_won else SessionPhase.LOST
        if self.guesses:
            return SessionPhase.IN_PROGRESS
        return SessionPhase.NO_SESSION

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the stored record's field names."""
        data = {
            "guesses": list(self.guesses),
            "currentGuess": self.current_guess,
            "gameWon": self.game_won,
            "gameOver": self.game_over,
            "solution": self.solution,
            "statsRecorded": self.stats_recorded,
        }
        if self.user_id:
            data["userId"] = self.user_id
        if self.last_played:
            data["lastPlayed"] = self.last_played
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionState":
        """
        Rebuild a state from a stored record.

        Raises:
            ValueError: If the record is missing fields or violates length rules
        """
        if not isinstance(data, dict):
            raise ValueError("Session record must be an object")

        solution = data.get("solution")
        guesses = data.get("guesses")
        if not isinstance(solution, str) or len(solution) != WORD_LENGTH:
            raise ValueError("Session record has an invalid solution")
        if not isinstance(guesses, list) or len(guesses) > MAX_GUESSES:
            raise ValueError("Session record has invalid guesses")
        for guess in guesses:
            if not isinstance(guess, str) or len(guess) != WORD_LENGTH:
                raise ValueError(f"Session record has an invalid guess: {guess!r}")

        game_over = bool(data.get("gameOver", False))
        return cls(
            solution=solution,
            guesses=list(guesses),
            current_guess=str(data.get("currentGuess", ""))[:WORD_LENGTH],
            game_won=bool(data.get("gameWon", False)),
            game_over=game_over,
            user_id=data.get("userId"),
            last_played=data.get("lastPlayed"),
            # Records written before this flag existed were recorded by the client
            stats_recorded=bool(data.get("statsRecorded", game_over)),
        )


def evaluations_to_list(evaluations: List[Evaluation]) -> List[List[str]]:
    """Convert evaluations to plain strings for JSON serialization."""
    return [[state.value for state in row] for row in evaluations]


def evaluations_from_list(rows: Any) -> List[Evaluation]:
    """
    Parse stored evaluations.

    Raises:
        ValueError: If a row has the wrong length or holds an unknown state
    """
    if not isinstance(rows, list):
        raise ValueError("Evaluations record must be an array")

    evaluations = []
    for row in rows:
        if not isinstance(row, list) or len(row) != WORD_LENGTH:
            raise ValueError(f"Evaluation row has the wrong shape: {row!r}")
        evaluations.append([CellState(value) for value in row])
    return evaluations


@dataclass
class Feedback:
    """Transient message for the rendering client, dismissed after duration_ms."""
    message: str
    duration_ms: int
