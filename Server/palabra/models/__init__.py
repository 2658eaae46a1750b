"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import Action, ActionType, GameState, LetterVerdict, ScoringPolicy, Status

__all__ = ['Action', 'ActionType', 'GameState', 'LetterVerdict', 'ScoringPolicy', 'Status']
