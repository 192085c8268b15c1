"""
Game Service

Contains the live puzzle state machine for each player and the registry
that opens, restores and replaces those sessions.
"""

import inspect
import random
import threading
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..config.game_settings import DICTIONARY, MAX_GUESSES, WORD_LENGTH, WORD_LIST
from ..config.translations import (
    CHECKING_FEEDBACK_DURATION_MS, DEFAULT_FEEDBACK_DURATION_MS, translations
)
from ..models.game import (
    CellState, Evaluation, Feedback, SessionPhase, SessionState, evaluations_to_list
)
from ..models.user import StatsRecord
from ..storage import KeyValueStorage
from ..utils.game_logger import game_logger
from .evaluator import derive_key_states, evaluate_guess
from .session_store import SessionStore
from .share_service import generate_share_text
from .stats_service import StatsStore
from .validity import ValidityCache, ValidityPipeline, normalize_arabic_word
from .word_selector import random_word, word_of_day

ENTER_KEY = 'Enter'
BACKSPACE_KEY = 'Backspace'

MESSAGES = translations['ar']


def exclusive_input(method):
    """
    Runs a session input method only if no other thread is inside one.

    A call that finds the session held by another thread is ignored and
    returns False. The same thread may re-enter.
    """
    if inspect.iscoroutinefunction(method):
        @wraps(method)
        async def async_wrapper(self, *args, **kwargs):
            with self.exclusive() as acquired:
                if not acquired:
                    return False
                return await method(self, *args, **kwargs)
        return async_wrapper

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.exclusive() as acquired:
            if not acquired:
                return False
            return method(self, *args, **kwargs)
    return wrapper


class GameSession:
    """
    One player's puzzle for one solution.

    Phases: NO_SESSION -> IN_PROGRESS -> WON | LOST. Once over, no key is
    accepted. While a guess is being validated ``validating`` is set and
    further key presses are ignored. Input methods hold the session for
    their whole run, so input arriving from another thread meanwhile is
    ignored too (see ``exclusive``).
    """

    def __init__(self,
                 state: SessionState,
                 pipeline: ValidityPipeline,
                 session_store: SessionStore,
                 stats_store: StatsStore,
                 evaluations: Optional[List[Evaluation]] = None,
                 random_mode: bool = False):
        self.state = state
        self.evaluations: List[Evaluation] = list(evaluations or [])
        self.pipeline = pipeline
        self.session_store = session_store
        self.stats_store = stats_store
        self.random_mode = random_mode
        self.validating = False
        self.feedback: Optional[Feedback] = None
        self._input_lock = threading.RLock()
        self.key_states: Dict[str, CellState] = derive_key_states(self.state.guesses, self.evaluations)

        # A restored session may have ended before its result was recorded
        if self.state.game_over and not self.state.stats_recorded:
            self._record_stats()

    @property
    def user_id(self) -> Optional[str]:
        return self.state.user_id

    @property
    def solution(self) -> str:
        return self.state.solution

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @contextmanager
    def exclusive(self):
        """Yields True if this thread now holds the session, False if another thread does."""
        acquired = self._input_lock.acquire(blocking=False)
        try:
            yield acquired
        finally:
            if acquired:
                self._input_lock.release()

    def show_feedback(self, message_key: str, duration_ms: int = DEFAULT_FEEDBACK_DURATION_MS, suffix: str = '') -> None:
        self.feedback = Feedback(message=MESSAGES[message_key] + suffix, duration_ms=duration_ms)

    @exclusive_input
    async def press_key(self, key: str) -> bool:
        """
        Handles one keyboard key.

        Returns:
            bool: True if the key changed the session
        """
        if self.state.game_over or self.validating:
            return False

        self.feedback = None
        if key == ENTER_KEY:
            return await self.submit()
        if key == BACKSPACE_KEY:
            return self.backspace()
        return self.type_letter(key)

    @exclusive_input
    def type_letter(self, letter: str) -> bool:
        if self.state.game_over or self.validating:
            return False
        if len(letter) != 1 or normalize_arabic_word(letter) != letter:
            return False
        if len(self.state.current_guess) >= WORD_LENGTH:
            return False

        self.state.current_guess += letter
        self._persist()
        return True

    @exclusive_input
    def backspace(self) -> bool:
        if self.state.game_over or self.validating or not self.state.current_guess:
            return False

        self.state.current_guess = self.state.current_guess[:-1]
        self._persist()
        return True

    @exclusive_input
    async def submit_word(self, word: str) -> bool:
        """Replaces the current guess with a whole word and submits it."""
        if self.state.game_over or self.validating:
            return False
        guess = normalize_arabic_word(word)
        if len(guess) != WORD_LENGTH:
            self.show_feedback('invalidGuessLength')
            return False

        self.feedback = None
        self.state.current_guess = guess
        return await self.submit()

    @exclusive_input
    async def submit(self) -> bool:
        """
        Validates and applies the current guess.

        Returns:
            bool: True if the guess was accepted and evaluated
        """
        if self.state.game_over or self.validating:
            return False

        guess = self.state.current_guess
        if len(guess) != WORD_LENGTH:
            self.show_feedback('invalidGuessLength')
            return False

        self.validating = True
        try:
            if not self.pipeline.is_known(guess):
                self.show_feedback('checkingWord', CHECKING_FEEDBACK_DURATION_MS)
            result = await self.pipeline.check(guess)
        finally:
            self.validating = False

        if result.failed:
            self.show_feedback('validationFailed')
            return False
        if not result.accepted:
            self.show_feedback('invalidGuessNotInList')
            return False

        if result.should_cache:
            self.pipeline.cache.add(result.word)
            self.show_feedback('newWordAccepted')
            game_logger.log_game_event(self.user_id, 'word_cached', word=result.word, tier=result.tier)
        else:
            self.feedback = None

        self._apply_guess(guess)
        return True

    def _apply_guess(self, guess: str) -> None:
        evaluation = evaluate_guess(guess, self.solution)

        self.evaluations.append(evaluation)
        self.state.guesses.append(guess)
        self.state.current_guess = ''
        self.key_states = derive_key_states(self.state.guesses, self.evaluations)

        won = guess == self.solution
        self.state.game_won = won
        self.state.game_over = won or len(self.state.guesses) >= MAX_GUESSES
        self._persist()

        if self.state.game_over:
            if won:
                self.show_feedback('winMessage')
            else:
                self.show_feedback('loseMessage', suffix=' ' + MESSAGES['solutionMessage'] + self.solution)
            game_logger.log_game_event(
                self.user_id, 'game_won' if won else 'game_lost',
                rounds_used=len(self.state.guesses), target_word=self.solution,
                random_mode=self.random_mode
            )
            self._record_stats()

    def _record_stats(self) -> None:
        # Over state is persisted first, then stats, then the recorded flag
        self.stats_store.record_result(self.state.game_won, len(self.state.guesses), self.user_id)
        self.state.stats_recorded = True
        self._persist()

    def _persist(self) -> None:
        if self.random_mode or not self.state.guesses:
            return
        self.session_store.save(self.state, self.evaluations)

    def share_text(self) -> Optional[str]:
        if not self.state.game_over:
            return None
        return generate_share_text(self.state.guesses, self.evaluations, self.state.game_won)

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the session for the rendering client."""
        return {
            'user_id': self.user_id,
            'phase': self.phase.value,
            'guesses': list(self.state.guesses),
            'current_guess': self.state.current_guess,
            'evaluations': evaluations_to_list(self.evaluations),
            'key_states': {letter: state.value for letter, state in self.key_states.items()},
            'won': self.state.game_won,
            'game_over': self.state.game_over,
            'validating': self.validating,
            'feedback': {
                'message': self.feedback.message,
                'duration_ms': self.feedback.duration_ms
            } if self.feedback else None,
            'random_mode': self.random_mode,
            'max_guesses': MAX_GUESSES,
            'word_length': WORD_LENGTH,
            # The answer is only revealed once the game is over
            'solution': self.solution if self.state.game_over else None
        }


class GameService:
    """
    Registry of live sessions, one per player.

    This class handles:
    - Restoring today's stored session or starting a fresh one
    - Replacing sessions on day rollover and on daily/random mode switches
    - Access to statistics and clearing a player's data
    """

    def __init__(self,
                 storage: KeyValueStorage,
                 word_list: List[str] = WORD_LIST,
                 dictionary: Optional[Iterable[str]] = DICTIONARY,
                 today_solution: Callable[[], str] = word_of_day,
                 rng: Optional[random.Random] = None):
        self.sessions: Dict[str, GameSession] = {}
        self.session_store = SessionStore(storage, today_solution)
        self.stats_store = StatsStore(storage)
        self.pipeline = ValidityPipeline(word_list, ValidityCache(storage), dictionary)
        self.rng = rng or random.Random()
        # One live session per player
        self._sessions_lock = threading.Lock()

    def open_session(self, user_id: str) -> GameSession:
        """
        Returns the player's live session, restoring or starting today's
        puzzle when there is none or the live daily one has gone stale.
        """
        with self._sessions_lock:
            session = self.sessions.get(user_id)
            if session is not None:
                if session.random_mode or session.solution == self.session_store.today_solution():
                    return session

            session = self._daily_session(user_id)
            self.sessions[user_id] = session
            return session

    def set_random_mode(self, user_id: str, enabled: bool) -> GameSession:
        """
        Switches the player between the daily word and a random word.

        Random mode always starts a new round; daily mode resumes today's
        stored session if there is one.
        """
        with self._sessions_lock:
            if enabled:
                session = self._new_session(user_id, random_word(self.rng), random_mode=True)
            else:
                session = self._daily_session(user_id)
            self.sessions[user_id] = session
        game_logger.log_game_event(user_id, 'mode_changed', random_mode=enabled)
        return session

    def get_stats(self, user_id: str) -> StatsRecord:
        return self.stats_store.load_stats(user_id)

    def clear_user_data(self, user_id: str) -> None:
        with self._sessions_lock:
            self.session_store.clear(user_id)
            self.stats_store.clear(user_id)
            self.sessions.pop(user_id, None)

    def _daily_session(self, user_id: str) -> GameSession:
        state, evaluations = self.session_store.load(user_id)
        if state is None:
            return self._new_session(user_id, self.session_store.today_solution())

        # A legacy unscoped record is adopted by the requesting player
        state.user_id = user_id
        return GameSession(state, self.pipeline, self.session_store, self.stats_store, evaluations)

    def _new_session(self, user_id: str, solution: str, random_mode: bool = False) -> GameSession:
        state = SessionState(solution=solution, user_id=user_id)
        return GameSession(state, self.pipeline, self.session_store, self.stats_store,
                           random_mode=random_mode)


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(storage: KeyValueStorage) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(storage)
    return _game_service
