"""
Game Data Models

Contains the game state, the reducer actions and the verdict enums.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Status(Enum):
    """Progress of the day's game. WON and LOST are terminal."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class LetterVerdict(Enum):
    """Per-letter classification of a guess against the solution."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


class ScoringPolicy(Enum):
    """How PRESENT is assigned when a letter repeats."""
    NAIVE = "naive"        # any occurrence in the solution counts
    STANDARD = "standard"  # capped by unmatched occurrences (two-pass)


class ActionType(Enum):
    """Player and network actions accepted by the state machine."""
    ADD_LETTER = "ADD_LETTER"
    REMOVE_LETTER = "REMOVE_LETTER"
    CLEAR_INPUT = "CLEAR_INPUT"
    SUBMIT_GUESS = "SUBMIT_GUESS"
    SET_WORD = "SET_WORD"


@dataclass(frozen=True)
class Action:
    """A single reducer action. `letter` is set for ADD_LETTER, `word` for SET_WORD."""
    type: ActionType
    letter: Optional[str] = None
    word: Optional[str] = None

    @classmethod
    def add_letter(cls, letter: str) -> "Action":
        return cls(ActionType.ADD_LETTER, letter=letter)

    @classmethod
    def remove_letter(cls) -> "Action":
        return cls(ActionType.REMOVE_LETTER)

    @classmethod
    def clear_input(cls) -> "Action":
        return cls(ActionType.CLEAR_INPUT)

    @classmethod
    def submit_guess(cls) -> "Action":
        return cls(ActionType.SUBMIT_GUESS)

    @classmethod
    def set_word(cls, word: str) -> "Action":
        return cls(ActionType.SET_WORD, word=word)


@dataclass(frozen=True)
class GameState:
    """Client-side game state for one calendar day."""
    guesses: Tuple[str, ...] = field(default_factory=tuple)
    input: str = ""
    status: Status = Status.PLAYING
    word: Optional[str] = None

    @property
    def is_over(self) -> bool:
        return self.status is not Status.PLAYING

    @property
    def is_loading(self) -> bool:
        return self.word is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialized form, same keys the browser client stored."""
        data = asdict(self)
        data["guesses"] = list(self.guesses)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """Build a state from a payload that already passed validation."""
        return cls(
            guesses=tuple(data["guesses"]),
            input=data["input"],
            status=Status(data["status"]),
            word=data.get("word"),
        )
