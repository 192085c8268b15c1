"""
Session State Store

Persists the in-progress puzzle per user. Only sessions for today's
solution are ever written or restored; anything else is stale.
"""

from datetime import datetime
from typing import Callable, List, Optional, Tuple

from ..models.game import (
    Evaluation, SessionState, evaluations_from_list, evaluations_to_list
)
from ..storage import KeyValueStorage, RecordKind, StorageKey
from ..utils.game_logger import game_logger
from .word_selector import word_of_day

LoadedSession = Tuple[Optional[SessionState], Optional[List[Evaluation]]]


class SessionStore:
    """
    Save/load of session records.

    Records live under ``gameState[_<userId>]`` and ``evaluations[_<userId>]``.
    The unscoped slots are always written too, and are read as a fallback
    when no user-scoped record exists.
    """

    def __init__(self, storage: KeyValueStorage, today_solution: Callable[[], str] = word_of_day):
        self.storage = storage
        self.today_solution = today_solution

    def save(self, state: SessionState, evaluations: List[Evaluation]) -> bool:
        """
        Persist a session.

        Returns:
            bool: False when the session is not for today's solution and
                nothing was written
        """
        if state.solution != self.today_solution():
            return False

        state.last_played = datetime.now().isoformat()
        state_data = state.to_dict()
        evaluation_data = evaluations_to_list(evaluations)

        self.storage.set_json(StorageKey(RecordKind.GAME_STATE), state_data)
        self.storage.set_json(StorageKey(RecordKind.EVALUATIONS), evaluation_data)

        if state.user_id:
            self.storage.set_json(StorageKey(RecordKind.GAME_STATE, state.user_id), state_data)
            self.storage.set_json(StorageKey(RecordKind.EVALUATIONS, state.user_id), evaluation_data)

        return True

    def load(self, user_id: Optional[str] = None) -> LoadedSession:
        """
        Restore today's session for a user.

        The user-scoped record is tried first, then the legacy unscoped one.
        Stale or malformed records are treated as absent, as is a legacy
        record that belongs to another user.
        """
        today = self.today_solution()

        if user_id:
            loaded = self._load_slot(user_id, today)
            if loaded[0] is not None:
                return loaded

        state, evaluations = self._load_slot(None, today)
        if state is not None and user_id and state.user_id not in (None, user_id):
            return None, None
        return state, evaluations

    def clear(self, user_id: str) -> None:
        """Removes the user's records, and the legacy slot if it is theirs."""
        keys = [StorageKey(RecordKind.GAME_STATE, user_id), StorageKey(RecordKind.EVALUATIONS, user_id)]
        try:
            legacy = self.storage.get_json(StorageKey(RecordKind.GAME_STATE))
        except ValueError:
            legacy = None
        if isinstance(legacy, dict) and legacy.get("userId") == user_id:
            keys += [StorageKey(RecordKind.GAME_STATE), StorageKey(RecordKind.EVALUATIONS)]

        for key in keys:
            self.storage.delete(key)

    def _load_slot(self, user_id: Optional[str], today: str) -> LoadedSession:
        state_key = StorageKey(RecordKind.GAME_STATE, user_id)
        evaluations_key = StorageKey(RecordKind.EVALUATIONS, user_id)

        try:
            state_data = self.storage.get_json(state_key)
            evaluation_data = self.storage.get_json(evaluations_key)
            if state_data is None or evaluation_data is None:
                return None, None

            state = SessionState.from_dict(state_data)
            if state.solution != today:
                return None, None

            evaluations = evaluations_from_list(evaluation_data)
            if len(evaluations) != len(state.guesses):
                raise ValueError(
                    f"{len(state.guesses)} guesses stored with {len(evaluations)} evaluations"
                )
        except ValueError as e:
            game_logger.logger.warning(f"Error parsing saved game state '{state_key}': {e}")
            return None, None

        return state, evaluations
