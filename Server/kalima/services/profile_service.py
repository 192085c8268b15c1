"""
Profile Service

Creates and maintains the locally generated player identity.
"""

import uuid
from datetime import datetime
from typing import Optional

from ..models.user import UserProfile
from ..storage import KeyValueStorage, RecordKind, StorageKey
from ..utils.game_logger import game_logger


class ProfileService:
    """
    Player profile management.

    A profile is created once and reused for as long as its record exists;
    the id is only regenerated after the user's data has been cleared.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    @staticmethod
    def create_user_id() -> str:
        return f"user_{uuid.uuid4().hex}"

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Returns the stored profile, or None if missing or unreadable."""
        key = StorageKey(RecordKind.USER_PROFILE, user_id)
        try:
            data = self.storage.get_json(key)
            if data is None:
                return None
            return UserProfile.from_dict(data)
        except ValueError as e:
            game_logger.logger.warning(f"Error parsing user profile '{key}': {e}")
            return None

    def get_or_create_profile(self, user_id: Optional[str] = None) -> UserProfile:
        """
        Loads the profile and updates its last played time, or creates a new
        profile when there is none for the id.
        """
        now = datetime.now().isoformat()
        profile = self.get_profile(user_id) if user_id else None

        if profile is None:
            profile = UserProfile(user_id=self.create_user_id(), created_at=now, last_played=now)
            game_logger.log_game_event(profile.user_id, 'profile_created')
        else:
            profile.last_played = now

        self._save(profile)
        return profile

    def set_nickname(self, user_id: str, nickname: Optional[str]) -> Optional[UserProfile]:
        profile = self.get_profile(user_id)
        if profile is None:
            return None
        profile.nickname = (nickname or '').strip() or None
        self._save(profile)
        return profile

    def has_played_before(self, user_id: str) -> bool:
        return self.storage.get(StorageKey(RecordKind.HAS_PLAYED_BEFORE, user_id)) is not None

    def mark_played(self, user_id: str) -> None:
        self.storage.set_json(StorageKey(RecordKind.HAS_PLAYED_BEFORE, user_id), True)

    def delete_profile(self, user_id: str) -> None:
        self.storage.delete(StorageKey(RecordKind.USER_PROFILE, user_id))
        self.storage.delete(StorageKey(RecordKind.HAS_PLAYED_BEFORE, user_id))

    def _save(self, profile: UserProfile) -> None:
        self.storage.set_json(StorageKey(RecordKind.USER_PROFILE, profile.user_id), profile.to_dict())


# Global service instance
_profile_service = None


def get_profile_service() -> Optional[ProfileService]:
    """Get the global profile service instance."""
    return _profile_service


def initialize_profile_service(storage: KeyValueStorage) -> ProfileService:
    """Initialize the global profile service instance."""
    global _profile_service
    _profile_service = ProfileService(storage)
    return _profile_service
