"""
Statistics Store

Win/loss counters and guess-count distribution per user.
"""

from datetime import datetime
from typing import Optional

from ..config.game_settings import MAX_GUESSES
from ..models.user import StatsRecord
from ..storage import KeyValueStorage, RecordKind, StorageKey
from ..utils.game_logger import game_logger


class StatsStore:
    """Loads and updates StatsRecord under ``statistics[_<userId>]``."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def load_stats(self, user_id: Optional[str] = None) -> StatsRecord:
        """
        Returns the user's statistics, or a zeroed record if none exist
        or the stored record is unreadable.
        """
        key = StorageKey(RecordKind.STATISTICS, user_id)
        try:
            data = self.storage.get_json(key)
            if data is not None:
                stats = StatsRecord.from_dict(data)
                stats.user_id = user_id or stats.user_id
                return stats
        except ValueError as e:
            game_logger.logger.warning(f"Error parsing statistics '{key}': {e}")

        return StatsRecord(user_id=user_id, last_updated=datetime.now().isoformat())

    def record_result(self, won: bool, guess_count: int, user_id: Optional[str] = None) -> StatsRecord:
        """
        Adds one completed game. Callers must call this once per game.

        Raises:
            ValueError: If a win reports a guess count outside 1..MAX_GUESSES
        """
        if won and not 1 <= guess_count <= MAX_GUESSES:
            raise ValueError(f"Winning guess count must be between 1 and {MAX_GUESSES}, got {guess_count}")

        stats = self.load_stats(user_id)

        stats.total_played += 1
        stats.last_updated = datetime.now().isoformat()
        if user_id:
            stats.user_id = user_id

        if won:
            stats.wins += 1
            stats.current_streak += 1
            stats.max_streak = max(stats.max_streak, stats.current_streak)
            stats.distribution[guess_count - 1] += 1
        else:
            stats.current_streak = 0

        self.storage.set_json(StorageKey(RecordKind.STATISTICS, user_id), stats.to_dict())
        return stats

    def clear(self, user_id: str) -> None:
        self.storage.delete(StorageKey(RecordKind.STATISTICS, user_id))
