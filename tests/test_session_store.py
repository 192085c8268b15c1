import unittest

from kalima.models.game import CellState, SessionPhase, SessionState
from kalima.services.evaluator import evaluate_guess
from kalima.services.session_store import SessionStore
from kalima.storage import MemoryStorage, RecordKind, StorageKey


class TestSessionStore(unittest.TestCase):
    def setUp(self) -> None:
        self.today = ["مدرسة"]
        self.storage = MemoryStorage()
        self.store = SessionStore(self.storage, lambda: self.today[0])

    def _played_state(self, user_id="user_a", guesses=("مكتبة", "سيارة")):
        state = SessionState(solution="مدرسة", guesses=list(guesses), current_guess="مد", user_id=user_id)
        evaluations = [evaluate_guess(guess, "مدرسة") for guess in guesses]
        return state, evaluations

    def test_same_day_round_trip(self) -> None:
        state, evaluations = self._played_state()
        self.assertTrue(self.store.save(state, evaluations))

        loaded, loaded_evaluations = self.store.load("user_a")
        self.assertEqual(loaded.guesses, ["مكتبة", "سيارة"])
        self.assertEqual(loaded.current_guess, "مد")
        self.assertEqual(loaded.solution, "مدرسة")
        self.assertFalse(loaded.game_over)
        self.assertEqual(loaded.phase, SessionPhase.IN_PROGRESS)
        self.assertEqual(loaded_evaluations, evaluations)
        self.assertIsNotNone(loaded.last_played)

    def test_round_trip_keeps_terminal_flags(self) -> None:
        state, evaluations = self._played_state(guesses=("مكتبة", "مدرسة"))
        state.game_won = True
        state.game_over = True
        state.stats_recorded = True
        self.store.save(state, evaluations)

        loaded, loaded_evaluations = self.store.load("user_a")
        self.assertEqual(loaded.phase, SessionPhase.WON)
        self.assertTrue(loaded.stats_recorded)
        self.assertEqual(loaded_evaluations[-1], [CellState.CORRECT] * 5)

    def test_day_rollover_discards_session(self) -> None:
        state, evaluations = self._played_state()
        self.store.save(state, evaluations)

        self.today[0] = "مكتبة"
        self.assertEqual(self.store.load("user_a"), (None, None))

    def test_save_ignores_other_solutions(self) -> None:
        state = SessionState(solution="طاولة", guesses=["مكتبة"], user_id="user_a")
        self.assertFalse(self.store.save(state, [evaluate_guess("مكتبة", "طاولة")]))
        self.assertEqual(self.storage.data, {})

    def test_save_writes_scoped_and_legacy_slots(self) -> None:
        state, evaluations = self._played_state()
        self.store.save(state, evaluations)
        self.assertEqual(
            set(self.storage.data),
            {"gameState", "evaluations", "gameState_user_a", "evaluations_user_a"}
        )

    def test_falls_back_to_legacy_slot(self) -> None:
        state, evaluations = self._played_state(user_id=None)
        self.store.save(state, evaluations)
        self.assertNotIn("gameState_user_b", self.storage.data)

        loaded, _ = self.store.load("user_b")
        self.assertEqual(loaded.guesses, ["مكتبة", "سيارة"])

    def test_legacy_slot_of_another_user_is_ignored(self) -> None:
        state, evaluations = self._played_state(user_id="user_a")
        self.store.save(state, evaluations)

        self.assertEqual(self.store.load("user_b"), (None, None))
        self.assertIsNotNone(self.store.load()[0])

    def test_scoped_record_wins_over_legacy(self) -> None:
        mine, my_evaluations = self._played_state(user_id="user_a", guesses=("مكتبة",))
        theirs, their_evaluations = self._played_state(user_id="user_b", guesses=("طاولة", "سيارة"))
        self.store.save(mine, my_evaluations)
        self.store.save(theirs, their_evaluations)

        loaded, _ = self.store.load("user_a")
        self.assertEqual(loaded.guesses, ["مكتبة"])

    def test_no_record_means_no_session(self) -> None:
        self.assertEqual(self.store.load("user_a"), (None, None))
        self.assertEqual(self.store.load(), (None, None))

    def test_malformed_records_are_treated_as_absent(self) -> None:
        self.storage.set(StorageKey(RecordKind.GAME_STATE, "user_a"), "{broken")
        self.storage.set_json(StorageKey(RecordKind.EVALUATIONS, "user_a"), [])
        self.assertEqual(self.store.load("user_a"), (None, None))

    def test_mismatched_evaluations_are_treated_as_absent(self) -> None:
        state, evaluations = self._played_state()
        self.store.save(state, evaluations)
        self.storage.set_json(StorageKey(RecordKind.EVALUATIONS, "user_a"), [["correct"] * 5])
        self.storage.delete(StorageKey(RecordKind.GAME_STATE))

        self.assertEqual(self.store.load("user_a"), (None, None))

    def test_unknown_cell_state_is_treated_as_absent(self) -> None:
        state, evaluations = self._played_state(user_id=None, guesses=("مكتبة",))
        self.store.save(state, evaluations)
        self.storage.set_json(StorageKey(RecordKind.EVALUATIONS), [["green"] * 5])

        self.assertEqual(self.store.load(), (None, None))

    def test_clear_removes_scoped_records(self) -> None:
        state, evaluations = self._played_state()
        self.store.save(state, evaluations)
        self.store.clear("user_a")

        self.assertNotIn("gameState_user_a", self.storage.data)
        self.assertNotIn("evaluations_user_a", self.storage.data)

    def test_clear_removes_own_legacy_slot_only(self) -> None:
        state, evaluations = self._played_state()
        self.store.save(state, evaluations)
        self.store.clear("user_a")
        self.assertEqual(self.storage.data, {})

        self.store.save(state, evaluations)
        self.store.clear("user_b")
        self.assertIn("gameState", self.storage.data)
