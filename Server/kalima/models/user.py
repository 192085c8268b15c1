"""
User Data Models

Contains user-related data structures.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config.game_settings import MAX_GUESSES


@dataclass
class UserProfile:
    """Locally generated player identity."""
    user_id: str
    created_at: str
    last_played: str
    nickname: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "userId": self.user_id,
            "createdAt": self.created_at,
            "lastPlayed": self.last_played,
        }
        if self.nickname:
            data["nickname"] = self.nickname
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        if not isinstance(data, dict) or not isinstance(data.get("userId"), str):
            raise ValueError("Profile record must hold a userId")
        return cls(
            user_id=data["userId"],
            created_at=str(data.get("createdAt", "")),
            last_played=str(data.get("lastPlayed", "")),
            nickname=data.get("nickname"),
        )


@dataclass
class StatsRecord:
    """User statistics data model."""
    total_played: int = 0
    wins: int = 0
    current_streak: int = 0
    max_streak: int = 0
    distribution: List[int] = field(default_factory=lambda: [0] * MAX_GUESSES)
    user_id: Optional[str] = None
    last_updated: Optional[str] = None

    @property
    def win_percentage(self) -> int:
        if self.total_played == 0:
            return 0
        return round(self.wins / self.total_played * 100)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "totalPlayed": self.total_played,
            "wins": self.wins,
            "currentStreak": self.current_streak,
            "maxStreak": self.max_streak,
            "distribution": list(self.distribution),
            "lastUpdated": self.last_updated,
        }
        if self.user_id:
            data["userId"] = self.user_id
        return data

    @staticmethod
    def _is_count(value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatsRecord":
        """
        Raises:
            ValueError: If a counter is missing or not a non-negative integer,
                or the counters are inconsistent (distribution sum <= wins <= played)
        """
        if not isinstance(data, dict):
            raise ValueError("Statistics record must be an object")

        counters = {}
        for key in ("totalPlayed", "wins", "currentStreak", "maxStreak"):
            value = data.get(key)
            if not cls._is_count(value):
                raise ValueError(f"Statistics field {key} is invalid: {value!r}")
            counters[key] = value

        distribution = data.get("distribution")
        if not isinstance(distribution, list) or not all(cls._is_count(n) for n in distribution):
            raise ValueError("Statistics distribution must be an array of non-negative integers")
        # Pad or trim records written with a different guess limit
        distribution = (list(distribution) + [0] * MAX_GUESSES)[:MAX_GUESSES]

        if counters["wins"] > counters["totalPlayed"]:
            raise ValueError(f"Statistics record has {counters['wins']} wins in {counters['totalPlayed']} games")
        if sum(distribution) > counters["wins"]:
            raise ValueError(f"Statistics distribution counts {sum(distribution)} wins, record has {counters['wins']}")

        return cls(
            total_played=counters["totalPlayed"],
            wins=counters["wins"],
            current_streak=counters["currentStreak"],
            max_streak=counters["maxStreak"],
            distribution=distribution,
            user_id=data.get("userId"),
            last_updated=data.get("lastUpdated"),
        )
