"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import CellState, Evaluation, Feedback, SessionPhase, SessionState
from .user import StatsRecord, UserProfile

__all__ = ['CellState', 'Evaluation', 'Feedback', 'SessionPhase', 'SessionState', 'StatsRecord', 'UserProfile']
