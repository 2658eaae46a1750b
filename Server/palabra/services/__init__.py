"""
Services Package

Contains all business logic: word selection, guess evaluation, the game
state machine, persistence and the client game session.
"""

from .evaluator import evaluate, is_win, keyboard_hints
from .persistence import (
    PersistenceGateway, MemoryStateGateway, JsonFileStateGateway, MongoStateGateway,
    restore_state, validate_stored_state
)
from .session import GameSession
from .state_machine import initial_state, reduce
from .word_service import WordService, daily_word, get_word_service, initialize_word_service, is_valid_word

__all__ = [
    'evaluate', 'is_win', 'keyboard_hints',
    'PersistenceGateway', 'MemoryStateGateway', 'JsonFileStateGateway', 'MongoStateGateway',
    'restore_state', 'validate_stored_state',
    'GameSession',
    'initial_state', 'reduce',
    'WordService', 'daily_word', 'get_word_service', 'initialize_word_service', 'is_valid_word'
]
