"""
Storage Keys

Structured keys for the key/value persistence layer. Each record is
identified by its kind and, for per-user records, the owning user id.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RecordKind(Enum):
    """Kinds of records kept by the stores."""
    GAME_STATE = "gameState"
    EVALUATIONS = "evaluations"
    STATISTICS = "statistics"
    USER_PROFILE = "userProfile"
    VALID_WORDS_CACHE = "validWordsCache"
    HAS_PLAYED_BEFORE = "hasPlayedBefore"


@dataclass(frozen=True)
class StorageKey:
    """
    Composite key of record kind and optional owner.

    Renders as ``<kind>`` for unscoped (legacy or device-wide) records and
    ``<kind>_<user_id>`` for user-scoped ones.
    """
    kind: RecordKind
    user_id: Optional[str] = None

    def __post_init__(self):
        if self.user_id is not None and not self.user_id:
            raise ValueError("user_id must be a non-empty string or None")

    @property
    def is_scoped(self) -> bool:
        return self.user_id is not None

    def unscoped(self) -> "StorageKey":
        """Legacy slot for the same kind of record."""
        return StorageKey(self.kind)

    def __str__(self) -> str:
        if self.user_id is None:
            return self.kind.value
        return f"{self.kind.value}_{self.user_id}"
