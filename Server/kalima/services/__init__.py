"""
Services Package

Contains all business logic and service classes.
"""

from .game_service import GameService, GameSession, get_game_service, initialize_game_service
from .profile_service import ProfileService, get_profile_service, initialize_profile_service
from .session_store import SessionStore
from .stats_service import StatsStore
from .validity import ValidityCache, ValidityPipeline


def initialize_services(storage):
    """Initialize every global service against one storage backend."""
    return initialize_game_service(storage), initialize_profile_service(storage)


__all__ = [
    'GameService', 'GameSession', 'get_game_service', 'initialize_game_service',
    'ProfileService', 'get_profile_service', 'initialize_profile_service',
    'SessionStore', 'StatsStore', 'ValidityCache', 'ValidityPipeline',
    'initialize_services'
]
