"""
Configuration Package

Contains all configuration-related files and settings.

This package separates three types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and word databases
- translations.py: User-facing Arabic messages
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    WORD_LENGTH, MAX_GUESSES, EPOCH, DAILY_WORDS, WORD_LIST, DICTIONARY,
    validate_word_list_integrity, get_word_statistics
)
from .translations import translations

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_LENGTH', 'MAX_GUESSES', 'EPOCH', 'DAILY_WORDS', 'WORD_LIST', 'DICTIONARY',
    'validate_word_list_integrity', 'get_word_statistics',
    # Messages
    'translations'
]
