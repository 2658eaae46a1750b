"""
Game State Machine

Pure transition function for the daily game. `reduce` never mutates its
input; when an action does not apply it returns the very same state object,
so callers can detect a change with `is not`.
"""

import dataclasses
import logging

from ..config.game_settings import MAX_GUESSES, WORD_LENGTH
from ..models.game import Action, ActionType, GameState, Status
from .evaluator import is_win

logger = logging.getLogger(__name__)


def initial_state() -> GameState:
    return GameState()


def _set_word(state: GameState, word: str) -> GameState:
    if not word:
        return state
    word = word.lower()
    if state.word == word:
        return state
    if state.word is not None and state.guesses:
        # Guesses on the board stay scored against the first word
        logger.warning("Ignoring SET_WORD %r: %d guesses already scored against the current word",
                       word, len(state.guesses))
        return state
    return dataclasses.replace(state, word=word)


def _submit_guess(state: GameState) -> GameState:
    if len(state.input) != WORD_LENGTH or len(state.guesses) >= MAX_GUESSES:
        return state

    guesses = state.guesses + (state.input,)
    if is_win(state.input, state.word):
        status = Status.WON
    elif len(guesses) >= MAX_GUESSES:
        status = Status.LOST
    else:
        status = Status.PLAYING

    return dataclasses.replace(state, guesses=guesses, input="", status=status)


def reduce(state: GameState, action: Action) -> GameState:
    """
    Apply one action to the state.

    SET_WORD is accepted in any status. Every other action is a no-op while
    the word is unknown or the game is over.
    """
    if action.type is ActionType.SET_WORD:
        return _set_word(state, action.word)

    if state.word is None or state.is_over:
        return state

    if action.type is ActionType.ADD_LETTER:
        if not action.letter or len(action.letter) != 1 or len(state.input) >= WORD_LENGTH:
            return state
        return dataclasses.replace(state, input=state.input + action.letter.lower())

    if action.type is ActionType.REMOVE_LETTER:
        if not state.input:
            return state
        return dataclasses.replace(state, input=state.input[:-1])

    if action.type is ActionType.CLEAR_INPUT:
        if not state.input:
            return state
        return dataclasses.replace(state, input="")

    if action.type is ActionType.SUBMIT_GUESS:
        return _submit_guess(state)

    return state
